# leafwalk/utils/json_utils.py
from __future__ import annotations

import base64
import json
from datetime import date, time, timedelta
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from pathlib import Path
from typing import Any, Dict, List, Union
from uuid import UUID

from leafwalk.reflect.ref import Ref
from leafwalk.reflect.structs import Record, schema_of


class RecordLoadError(RuntimeError):
    def __init__(self, message: str, source: str = ""):
        super().__init__(message)
        self.source = source


# ----------------------------
# JSON -> struct-like values
# ----------------------------
# JSON objects become Records so their keys are traversable fields.
# Arrays stay lists, primitives stay primitives, null stays None.

def _record_hook(pairs: List[tuple]) -> Record:
    return Record(dict(pairs))


def loads_records(text: str, source: str = "") -> Any:
    """
    Parse JSON text. A document that is not a single JSON value is retried
    as JSON lines (one value per non-empty line) and returned as a list.
    """
    stripped = (text or "").strip()
    if not stripped:
        raise RecordLoadError("Empty document", source)

    try:
        return json.loads(stripped, object_pairs_hook=_record_hook)
    except (ValueError, RecursionError) as e:
        # JSONDecodeError, oversized integers and nesting past the recursion limit
        first_error = e

    lines = [ln for ln in stripped.splitlines() if ln.strip()]
    if len(lines) < 2:
        raise RecordLoadError(f"Invalid JSON: {first_error}", source) from first_error
    try:
        return [json.loads(ln, object_pairs_hook=_record_hook) for ln in lines]
    except (ValueError, RecursionError) as e:
        raise RecordLoadError(f"Invalid JSON: {first_error}", source) from e


def load_records(path: Union[str, Path]) -> Any:
    p = Path(path)
    try:
        text = p.read_text(encoding="utf-8", errors="ignore")
    except OSError as e:
        raise RecordLoadError(f"Cannot read {p}: {e}", str(p)) from e
    return loads_records(text, source=str(p))


# ----------------------------
# Values -> plain JSON data
# ----------------------------
def to_jsonable(value: Any) -> Any:
    """
    Render extraction results as plain JSON data: structs and Records become
    objects (visible fields only), references are followed, sequences become
    arrays and scalars without a JSON form become strings.
    """
    if isinstance(value, Ref):
        return to_jsonable(value.target)
    if value is None or isinstance(value, (bool, int, float, str)) and not isinstance(value, Enum):
        return value

    schema = schema_of(value)
    if schema is not None:
        return {f.name: to_jsonable(schema.read(value, f)) for f in schema.visible_fields()}

    if isinstance(value, Enum):
        return to_jsonable(value.value)
    if isinstance(value, (date, time)):
        return value.isoformat()
    if isinstance(value, timedelta):
        return value.total_seconds()
    if isinstance(value, (bytes, bytearray)):
        return base64.b64encode(bytes(value)).decode("ascii")
    if isinstance(value, (Decimal, Fraction, UUID, complex)):
        return str(value)
    if isinstance(value, dict) or hasattr(value, "items"):
        out: Dict[str, Any] = {}
        for k, v in value.items():
            out[str(k)] = to_jsonable(v)
        return out
    if isinstance(value, (list, tuple, set, frozenset)):
        return [to_jsonable(v) for v in value]
    return str(value)


def dumps(value: Any, indent: int = 2) -> str:
    return json.dumps(to_jsonable(value), indent=indent, ensure_ascii=False)
