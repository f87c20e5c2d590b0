import json
import sys
from dataclasses import dataclass, field
from typing import List

from leafwalk.config import WalkConfig
from leafwalk.extract.extract_service import SOURCE_KEY, ExtractService
from leafwalk.extract.file_discovery import discover_files


@dataclass
class Step:
    role: str = ""


@dataclass
class Chat:
    id: str = ""
    steps: List[Step] = field(default_factory=list)


def test_discover_files_filters_and_sorts(docs_dir):
    hidden = docs_dir / ".cache"
    hidden.mkdir()
    (hidden / "c.json").write_text("{}")
    names = [p.name for p in discover_files(str(docs_dir), include_exts=["json", ".LOG"])]
    assert names == ["a.json", "b.log", "broken.json"]


def test_discover_files_missing_folder(tmp_path):
    assert discover_files(str(tmp_path / "nope")) == []


def test_extract_to_json(docs_dir, tmp_path):
    out = tmp_path / "out.json"
    summary = ExtractService().extract_to_json(str(docs_dir), ["id", "user.name", "steps.role", "user.age"], str(out))
    assert (summary.scanned, summary.parsed_ok, summary.parsed_failed) == (3, 2, 1)
    assert summary.written_path == str(out)

    rows = json.loads(out.read_text(encoding="utf-8"))
    assert [r["id"] for r in rows] == ["a", "b"]
    assert rows[0]["steps.role"] == ["user", "bot"]
    assert rows[0]["user.age"] is None
    assert rows[1]["user.age"] == 7
    assert rows[1]["steps.role"] is None
    assert rows[0][SOURCE_KEY].endswith("a.json")


def test_extract_to_txt(docs_dir, tmp_path):
    out = tmp_path / "out.txt"
    summary = ExtractService(include_exts=[".json"]).extract_to_txt(str(docs_dir), ["id", "steps.role"], str(out))
    assert (summary.scanned, summary.parsed_ok, summary.parsed_failed) == (2, 1, 1)

    lines = out.read_text(encoding="utf-8").splitlines()
    assert lines[0] == "-" * 30
    assert lines[1].startswith("File: ") and lines[1].endswith("a.json")
    assert lines[2] == "id: a"
    assert lines[3] == 'steps.role: ["user", "bot"]'


def test_extract_counts_documents_the_parser_rejects(tmp_path):
    docs = tmp_path / "docs"
    docs.mkdir()
    (docs / "ok.json").write_text('{"id": "ok"}', encoding="utf-8")
    (docs / "deep.json").write_text("[" * 100000 + "]" * 100000, encoding="utf-8")
    expected_failed = 1
    # int digit limit exists from 3.11 on; 0 disables it
    if getattr(sys, "get_int_max_str_digits", lambda: 0)():
        digits = sys.get_int_max_str_digits() + 1
        (docs / "huge.json").write_text('{"id": ' + "1" * digits + "}", encoding="utf-8")
        expected_failed = 2

    out = tmp_path / "rows.json"
    summary = ExtractService(include_exts=[".json"]).extract_to_json(str(docs), ["id"], str(out))
    assert (summary.scanned, summary.parsed_ok, summary.parsed_failed) == (1 + expected_failed, 1, expected_failed)
    assert [r["id"] for r in json.loads(out.read_text(encoding="utf-8"))] == ["ok"]


def test_extract_values_in_memory():
    chats = [Chat(id="c1", steps=[Step("u"), Step("b")]), Chat(id="c2")]
    rows = ExtractService().extract_values(chats, ["id", "steps.role", "missing"])
    assert rows == [
        {"id": "c1", "steps.role": ["u", "b"], "missing": None},
        {"id": "c2", "steps.role": [], "missing": None},
    ]


def test_extract_values_with_custom_separator():
    rows = ExtractService(config=WalkConfig(separator="/")).extract_values([Chat(steps=[Step("u")])], ["steps/role"])
    assert rows == [{"steps/role": ["u"]}]


def test_render_txt_empty():
    assert ExtractService.render_txt([], ["a"]) == ""
