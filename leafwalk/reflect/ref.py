# leafwalk/reflect/ref.py
from __future__ import annotations

from typing import Any, Generic, Optional, Tuple, TypeVar

T = TypeVar("T")


class Ref(Generic[T]):
    """
    Explicit, optional reference to another value.

    `Ref()` (or `Ref(None)`) is a nil reference. References nest, so
    `Ref(Ref(x))` is a reference to a reference to `x`. A bare `None` is
    treated as a nil reference everywhere a value is expected.
    """

    __slots__ = ("_target",)

    def __init__(self, target: Optional[T] = None) -> None:
        self._target = target

    @property
    def target(self) -> Optional[T]:
        return self._target

    @property
    def is_nil(self) -> bool:
        return self._target is None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Ref):
            return NotImplemented
        return self._target == other._target

    def __hash__(self) -> int:
        return hash((Ref, self._target))

    def __repr__(self) -> str:
        return f"Ref({self._target!r})"


def is_reference(value: Any) -> bool:
    return value is None or isinstance(value, Ref)


def deref(value: Any) -> Tuple[Any, bool]:
    """
    Follow a reference chain to the value it finally points at.
    Returns (target, True), or (None, False) when any hop is nil.
    """
    while isinstance(value, Ref):
        value = value.target
    if value is None:
        return None, False
    return value, True
