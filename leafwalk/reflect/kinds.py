# leafwalk/reflect/kinds.py
from __future__ import annotations

import types
import uuid
from collections.abc import Mapping, Sequence
from datetime import date, time, timedelta
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from typing import Any, Literal, Optional, Union, get_args, get_origin

from .ref import Ref
from .structs import is_struct, is_struct_type


class Kind(Enum):
    STRUCT = "struct"
    SEQUENCE = "sequence"
    REFERENCE = "reference"
    MAP = "map"
    SCALAR = "scalar"


LEAF_KINDS = frozenset({Kind.MAP, Kind.SCALAR})

# datetime is a date subclass, bool an int subclass.
SCALAR_TYPES = (
    str, bytes, bytearray, bool, int, float, complex,
    Decimal, Fraction, Enum, date, time, timedelta, uuid.UUID,
)

_NONE_TYPE = type(None)
_UNION_TYPES = (Union, types.UnionType)


def is_leaf(kind: Optional[Kind]) -> bool:
    """Scalars and maps have no traversable sub-fields."""
    return kind in LEAF_KINDS


def kind_of(value: Any) -> Optional[Kind]:
    """
    Runtime classification of a value. Returns None for values outside the
    five kinds (callables, sets, arbitrary objects).
    """
    if value is None or isinstance(value, Ref):
        return Kind.REFERENCE
    # Structs first: named tuples are tuples too.
    if is_struct(value):
        return Kind.STRUCT
    if isinstance(value, SCALAR_TYPES):
        return Kind.SCALAR
    if isinstance(value, Mapping):
        return Kind.MAP
    if isinstance(value, Sequence):
        return Kind.SEQUENCE
    return None


def unwrap_reference_type(tp: Any) -> Any:
    """
    Strip reference layers off an annotation: Ref[X] -> X, Optional[X] -> X.
    Unions of several concrete types are left alone.
    """
    while True:
        if tp is Ref:
            return Any
        origin = get_origin(tp)
        args = get_args(tp)
        if origin is Ref:
            tp = args[0] if args else Any
            continue
        if origin in _UNION_TYPES:
            concrete = [a for a in args if a is not _NONE_TYPE]
            if len(concrete) == 1 and len(concrete) < len(args):
                tp = concrete[0]
                continue
        return tp


def static_kind(tp: Any) -> Optional[Kind]:
    """
    Effective kind of an annotation once references are stripped, or None
    when the annotation says nothing useful (Any, unions, unknown classes).
    """
    tp = unwrap_reference_type(tp)
    if tp is Any or tp is None or tp is _NONE_TYPE:
        return None

    origin = get_origin(tp)
    if origin is Literal:
        return Kind.SCALAR
    target = origin if origin is not None else tp
    if not isinstance(target, type):
        return None

    if is_struct_type(target):
        return Kind.STRUCT
    if issubclass(target, SCALAR_TYPES):
        return Kind.SCALAR
    if issubclass(target, Mapping):
        return Kind.MAP
    if issubclass(target, Sequence):
        return Kind.SEQUENCE
    return None
