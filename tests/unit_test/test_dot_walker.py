from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from leafwalk.config import WalkConfig, set_separator
from leafwalk.paths.dot_walker import get_path
from leafwalk.reflect.ref import Ref
from leafwalk.reflect.structs import Record


@dataclass
class Content:
    key: str = ""
    tags: List[str] = field(default_factory=list)


@dataclass
class Section:
    title: str = ""
    contents: List[Content] = field(default_factory=list)


@dataclass
class Doc:
    name: str = ""
    sections: List[Section] = field(default_factory=list)
    contents: List[Content] = field(default_factory=list)
    labels: Dict[str, str] = field(default_factory=dict)
    owner: Optional[Content] = None
    _secret: str = "hidden"


def test_get_path_empty_path_returns_input():
    doc = Doc(name="x")
    assert get_path(doc, "") is doc
    assert get_path(doc, []) is doc
    r = Ref(doc)
    assert get_path(r, "") is r


def test_get_path_simple_field():
    assert get_path(Doc(name="x"), "name") == "x"


def test_get_path_fans_out_over_sequences():
    doc = Doc(contents=[Content(key="k1"), Content(key="k2")])
    assert get_path(doc, "contents.key") == ["k1", "k2"]


def test_get_path_nested_fan_out_adds_a_level_per_sequence():
    doc = Doc(
        sections=[
            Section(contents=[Content(key="a"), Content(key="b")]),
            Section(contents=[Content(key="c")]),
            Section(),
        ]
    )
    assert get_path(doc, "sections.contents.key") == [["a", "b"], ["c"], []]
    assert get_path(doc, "sections.title") == ["", "", ""]


def test_get_path_nil_elements_keep_their_slot():
    doc = Doc(contents=[Content(key="a"), None, Ref(), Ref(Ref(Content(key="d")))])
    assert get_path(doc, "contents.key") == ["a", None, None, "d"]


def test_get_path_missing_field_is_none():
    assert get_path(Doc(), "nope") is None
    assert get_path(Doc(), "name.deeper") is None
    assert get_path(Doc(contents=[Content()]), "contents.nope") == [None]


def test_get_path_hidden_field_is_not_addressable():
    assert get_path(Doc(), "_secret") is None


def test_get_path_through_nil_reference_is_none():
    assert get_path(Doc(), "owner.key") is None
    assert get_path(Doc(), "owner") is None
    assert get_path(Ref(), "name") is None
    assert get_path(None, "name") is None


def test_get_path_dereferences_references():
    doc = Ref(Ref(Doc(owner=Ref(Content(key="o")))))
    assert get_path(doc, "owner.key") == "o"
    assert get_path(doc, "owner") == Content(key="o")


def test_get_path_maps_are_not_traversed():
    doc = Doc(labels={"a": "b"})
    assert get_path(doc, "labels") == {"a": "b"}
    assert get_path(doc, "labels.a") is None


def test_get_path_top_level_sequence():
    assert get_path([Content(key="a"), Content(key="b")], "key") == ["a", "b"]


def test_get_path_sequence_leaf_is_returned_whole():
    assert get_path(Content(tags=["x", "y"]), "tags") == ["x", "y"]


def test_get_path_records():
    rec = Record({"user": Record({"name": "ann"}), "steps": [Record({"role": "u"}), Record({"role": "b"})]})
    assert get_path(rec, "user.name") == "ann"
    assert get_path(rec, "steps.role") == ["u", "b"]


def test_get_path_custom_separator():
    doc = Doc(contents=[Content(key="k")])
    assert get_path(doc, "contents/key", WalkConfig(separator="/")) == ["k"]
    assert get_path(doc, ["contents", "key"]) == ["k"]


def test_get_path_uses_process_default_separator():
    set_separator("->")
    assert get_path(Doc(contents=[Content(key="k")]), "contents->key") == ["k"]


def test_get_path_does_not_mutate():
    doc = Doc(contents=[Content(key="k")])
    before = repr(doc)
    get_path(doc, "contents.key")
    assert repr(doc) == before
