# leafwalk/paths/dot_walker.py
from __future__ import annotations

from typing import Any, List, Optional, Sequence, Union

from leafwalk.config import WalkConfig, resolve_config
from leafwalk.reflect.kinds import Kind, kind_of
from leafwalk.reflect.ref import deref
from leafwalk.reflect.structs import schema_of


def get_path(data: Any, path: Union[str, Sequence[str]], config: Optional[WalkConfig] = None) -> Any:
    """
    Fetch the value a path addresses.

    Walking a sequence applies the rest of the path to each element and
    returns one result per element, so every sequence along the path adds
    one level of list nesting:
      - "Bar.Stock"     -> "max"
      - "Contents.Key"  -> ["k1", "k2"]
    Missing fields, nil references and maps along the way give None.
    An empty path returns `data` untouched.
    """
    cfg = resolve_config(config)
    keys = cfg.split(path) if isinstance(path, str) else list(path)
    if not keys:
        return data
    return _walk(data, keys)


def _walk(node: Any, keys: List[str]) -> Any:
    node, ok = deref(node)
    if not ok:
        return None

    if kind_of(node) is Kind.SEQUENCE:
        # nil elements come back as None through the deref above
        return [_walk(item, keys) for item in node]

    schema = schema_of(node)
    if schema is None:
        # map, scalar or unknown: nothing to look up
        return None

    head, *tail = keys
    descriptor = schema.field(head)
    if descriptor is None:
        return None

    child = schema.read(node, descriptor)
    if not tail:
        target, _ = deref(child)
        return target
    return _walk(child, tail)
