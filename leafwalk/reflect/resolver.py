# leafwalk/reflect/resolver.py
from __future__ import annotations

import logging
from typing import Any, Tuple

from .kinds import Kind, kind_of
from .ref import Ref, deref
from .structs import is_struct

logger = logging.getLogger(__name__)


def _is_candidate(element: Any) -> bool:
    # A sequence element worth resolving: a struct, or a reference that
    # points somewhere.
    if isinstance(element, Ref):
        return not element.is_nil
    return is_struct(element)


def resolve(value: Any) -> Tuple[Any, bool]:
    """
    Normalize a value to a representative struct.

    1) follow references (nil anywhere -> fail)
    2) for sequences, continue from the first struct or non-nil reference
       element (empty or all-nil -> fail)
    3) follow references again
    4) succeed only when a struct remains

    Returns (struct, True) or (None, False). Never raises.
    """
    current, ok = deref(value)
    if not ok:
        logger.debug("resolve: nil reference")
        return None, False

    if kind_of(current) is Kind.SEQUENCE:
        if len(current) == 0:
            logger.debug("resolve: empty sequence")
            return None, False
        for element in current:
            if _is_candidate(element):
                current = element
                break
        else:
            logger.debug("resolve: no struct or non-nil reference among %d elements", len(current))
            return None, False

        current, ok = deref(current)
        if not ok:
            return None, False

    if kind_of(current) is not Kind.STRUCT:
        return None, False
    return current, True
