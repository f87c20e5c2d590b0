# leafwalk/schema/field_catalog.py
from __future__ import annotations

import json
import logging
from collections import defaultdict
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, DefaultDict, Dict, Iterable, List, Optional

from leafwalk.config import WalkConfig, resolve_config
from leafwalk.paths.terminal_fields import terminal_fields
from leafwalk.utils.json_utils import load_records

logger = logging.getLogger(__name__)

CATALOG_DIR = Path("registry") / "catalogs"


@dataclass
class FieldCatalog:
    """
    Known leaf paths of a family of documents.

    Built from one or more samples: documents of the same family often omit
    optional branches, so the catalog is the union of every sample's paths.
    """

    name: str
    separator: str = "."
    paths: List[str] = field(default_factory=list)

    @classmethod
    def from_samples(cls, name: str, samples: Iterable[Any], config: Optional[WalkConfig] = None) -> "FieldCatalog":
        cfg = resolve_config(config)
        merged = set()
        count = 0
        for sample in samples:
            merged.update(terminal_fields(sample, cfg))
            count += 1
        logger.debug("Catalog %r: %d paths from %d samples", name, len(merged), count)
        return cls(name=name, separator=cfg.separator, paths=sorted(merged))

    @classmethod
    def from_files(cls, name: str, files: Iterable[Path], config: Optional[WalkConfig] = None) -> "FieldCatalog":
        return cls.from_samples(name, (load_records(f) for f in files), config)

    def groups(self) -> Dict[str, List[str]]:
        return group_paths(self.paths, self.separator)

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "separator": self.separator, "paths": list(self.paths)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FieldCatalog":
        return cls(
            name=str(data.get("name", "")),
            separator=str(data.get("separator") or "."),
            paths=sorted(set(data.get("paths") or [])),
        )

    # -------------- persistence --------------

    def save(self, project_root: Optional[Path] = None) -> Path:
        if not self.name or not self.name.strip():
            raise ValueError("Catalog name cannot be empty.")
        safe_name = "".join(ch if ch.isalnum() or ch in ("_", "-", ".") else "_" for ch in self.name.strip())

        catalogs_dir = (project_root or Path.cwd()) / CATALOG_DIR
        catalogs_dir.mkdir(parents=True, exist_ok=True)

        out_path = catalogs_dir / f"{safe_name}.json"
        out_path.write_text(json.dumps(self.to_dict(), indent=2, ensure_ascii=False), encoding="utf-8")
        return out_path

    @classmethod
    def load(cls, path: Path) -> "FieldCatalog":
        return cls.from_dict(json.loads(Path(path).read_text(encoding="utf-8")))


def list_catalogs(project_root: Optional[Path] = None) -> List[Path]:
    catalogs_dir = (project_root or Path.cwd()) / CATALOG_DIR
    if not catalogs_dir.exists():
        return []
    return sorted(catalogs_dir.glob("*.json"))


def group_paths(paths: Iterable[str], separator: str = ".") -> Dict[str, List[str]]:
    """
    Group paths by their first segment, e.g. "Bar.Baz.Name" -> "Bar".
    Top-level leaves form a group of their own name.
    """
    grouped: DefaultDict[str, List[str]] = defaultdict(list)
    for p in paths:
        grouped[p.split(separator, 1)[0]].append(p)
    return {k: sorted(set(v)) for k, v in sorted(grouped.items())}
