import sys
from pathlib import Path
import pytest


# Ensure the repo root is on PYTHONPATH so `import leafwalk` works in tests
_ROOT = Path(__file__).resolve().parents[1]
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from leafwalk.config import reset_config  # noqa: E402


@pytest.fixture(autouse=True)
def _default_config(monkeypatch):
    # Tests must not inherit LEAFWALK_* settings from the environment
    monkeypatch.delenv("LEAFWALK_SEPARATOR", raising=False)
    monkeypatch.delenv("LEAFWALK_MAX_NODES", raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def docs_dir(tmp_path):
    d = tmp_path / "docs"
    d.mkdir()
    (d / "a.json").write_text('{"id": "a", "user": {"name": "ann"}, "steps": [{"role": "user"}, {"role": "bot"}]}')
    (d / "b.log").write_text('{"id": "b", "user": {"name": "bob", "age": 7}}\n')
    (d / "broken.json").write_text("{not json")
    (d / "notes.md").write_text("# ignored")
    return d
