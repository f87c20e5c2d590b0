# leafwalk/reflect/enumerator.py
from __future__ import annotations

import logging
from typing import Any, Callable, Optional, Tuple

from leafwalk.config import WalkConfig, resolve_config

from .kinds import Kind, kind_of, static_kind
from .ref import deref
from .resolver import resolve
from .structs import FieldDescriptor, schema_of

logger = logging.getLogger(__name__)

# visit(child, name, kind); child is None for nil references.
FieldVisitor = Callable[[Any, str, Kind], None]


def effective_kind(descriptor: FieldDescriptor, raw: Any) -> Tuple[Optional[Kind], Any]:
    """
    Kind of a field after following its reference chain. A chain that ends
    in nil falls back to the field's annotation, so an unset Optional[int]
    is still a scalar.
    """
    target, ok = deref(raw)
    if ok:
        return kind_of(target), target
    return static_kind(descriptor.annotation), None


def each_field(value: Any, visit: FieldVisitor, config: Optional[WalkConfig] = None) -> bool:
    """
    Invoke `visit` for every exported, non-embedded field of the struct that
    `value` resolves to, in declaration order.

    Sequence fields are flattened: their representative element's fields are
    reported as "<field><sep><child>". Maps and scalars are reported as
    leaves and never entered.

    Returns False, without visiting anything, when `value` does not resolve
    to a struct.
    """
    cfg = resolve_config(config)
    struct, ok = resolve(value)
    if not ok:
        return False

    schema = schema_of(struct)
    for descriptor in schema.visible_fields():
        name = descriptor.name
        if cfg.separator in name:
            # "a.b" collides with the nested path a -> b and get_path cannot reach it
            logger.warning(
                "each_field: %s field %r contains the path separator %r",
                schema.type_name, name, cfg.separator,
            )
        kind, child = effective_kind(descriptor, schema.read(struct, descriptor))

        if kind is Kind.STRUCT or kind is Kind.SCALAR or kind is Kind.MAP:
            visit(child, name, kind)

        elif kind is Kind.SEQUENCE:
            representative, found = resolve(child)
            if not found:
                continue
            prefix = name + cfg.separator
            each_field(
                representative,
                lambda c, child_name, child_kind, _p=prefix: visit(c, _p + child_name, child_kind),
                cfg,
            )

        else:
            logger.debug("each_field: skipping %s.%s (unclassified)", schema.type_name, name)

    return True
