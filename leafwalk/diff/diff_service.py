# leafwalk/diff/diff_service.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional

from leafwalk.config import WalkConfig, resolve_config
from leafwalk.paths.dot_walker import get_path
from leafwalk.paths.terminal_fields import terminal_fields
from leafwalk.utils.json_utils import to_jsonable


class ChangeKind(str, Enum):
    ADDED = "added"
    REMOVED = "removed"
    CHANGED = "changed"


@dataclass(frozen=True)
class FieldChange:
    path: str
    kind: ChangeKind
    left: Any = None
    right: Any = None


def diff_values(left: Any, right: Any, config: Optional[WalkConfig] = None) -> List[FieldChange]:
    """
    Leaf-level differences between two values, ordered by path.

    A path only one side exposes is added/removed; a path both expose is
    changed when the fetched values differ. Values are compared in their
    plain JSON form so a Ref and its target compare equal.
    """
    cfg = resolve_config(config)
    left_paths = set(terminal_fields(left, cfg))
    right_paths = set(terminal_fields(right, cfg))

    changes: List[FieldChange] = []
    for path in sorted(left_paths | right_paths):
        if path not in right_paths:
            changes.append(FieldChange(path, ChangeKind.REMOVED, left=get_path(left, path, cfg)))
        elif path not in left_paths:
            changes.append(FieldChange(path, ChangeKind.ADDED, right=get_path(right, path, cfg)))
        else:
            lval = get_path(left, path, cfg)
            rval = get_path(right, path, cfg)
            if to_jsonable(lval) != to_jsonable(rval):
                changes.append(FieldChange(path, ChangeKind.CHANGED, left=lval, right=rval))
    return changes
