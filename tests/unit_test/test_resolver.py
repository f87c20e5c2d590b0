from dataclasses import dataclass
from typing import NamedTuple

import pytest

from leafwalk.reflect.ref import Ref, deref
from leafwalk.reflect.resolver import resolve
from leafwalk.reflect.structs import Record


@dataclass
class Content:
    key: str = ""


class Point(NamedTuple):
    x: int
    y: int


def test_resolve_struct_is_identity():
    c = Content(key="a")
    value, ok = resolve(c)
    assert ok
    assert value is c


def test_resolve_is_idempotent():
    wrapped = [Ref(), Ref(Ref(Content(key="z")))]
    first, ok = resolve(wrapped)
    assert ok
    second, ok2 = resolve(first)
    assert ok2
    assert second is first


def test_resolve_double_reference_after_nils():
    target = Content(key="z")
    value, ok = resolve([None, None, Ref(Ref(target))])
    assert ok
    assert value is target
    assert value.key == "z"


def test_resolve_picks_first_struct_element():
    a, b = Content(key="a"), Content(key="b")
    value, ok = resolve([a, b])
    assert ok and value is a


def test_resolve_reference_to_sequence():
    c = Content(key="c")
    value, ok = resolve(Ref([Ref(), c]))
    assert ok and value is c


def test_resolve_skips_nil_references_in_sequence():
    # Ref() is nil, so scanning continues to the struct
    c = Content()
    value, ok = resolve((Ref(), Ref(None), c))
    assert ok and value is c


def test_resolve_reference_chain_ending_in_nil_after_scan():
    value, ok = resolve([Ref(Ref())])
    assert not ok
    assert value is None


@pytest.mark.parametrize(
    "value",
    [None, Ref(), Ref(Ref()), [], (), [None], [Ref(), None], [1, 2], "str", 3, 3.3, True, {"a": 1}, Ref(3), "c"],
)
def test_resolve_fails_cleanly(value):
    assert resolve(value) == (None, False)


def test_resolve_named_tuple_and_record():
    p = Point(1, 2)
    assert resolve(p) == (p, True)
    rec = Record({"a": 1})
    value, ok = resolve([rec])
    assert ok and value is rec


def test_resolve_nested_sequence_element_is_not_a_candidate():
    # Only structs or references qualify; a nested list is skipped
    assert resolve([[Content()]]) == (None, False)


def test_deref_chain():
    assert deref(Ref(Ref(5))) == (5, True)
    assert deref(Ref(Ref(None))) == (None, False)
    assert deref(7) == (7, True)
    assert deref(None) == (None, False)
