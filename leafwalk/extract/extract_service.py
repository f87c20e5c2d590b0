# leafwalk/extract/extract_service.py
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple

from leafwalk.config import WalkConfig, resolve_config
from leafwalk.extract.file_discovery import discover_files
from leafwalk.paths.dot_walker import get_path
from leafwalk.utils.json_utils import RecordLoadError, load_records, to_jsonable

logger = logging.getLogger(__name__)

INCLUDE_EXTS = {".json", ".jsonl", ".log", ".txt"}  # .log/.txt are often JSON or JSON lines
SOURCE_KEY = "__file__"


@dataclass
class ExtractionSummary:
    scanned: int
    parsed_ok: int
    parsed_failed: int
    written_path: str


class ExtractService:
    """
    Path-based extractor for JSON documents and in-memory values.
    - For each document, parses JSON into struct-like Records.
    - Fetches the selected fields given as separator-joined paths.
    - Missing fields -> None (null in JSON; empty in TXT).
    - Sequences fan out: Contents.Key -> ["k1", "k2"]
    """

    def __init__(self, include_exts: List[str] | None = None, config: Optional[WalkConfig] = None):
        self.include_exts = set(include_exts or list(INCLUDE_EXTS))
        self.config = config

    # ---------- Public API ----------

    def extract_values(self, values: Iterable[Any], selected_fields: List[str]) -> List[Dict[str, Any]]:
        """One row per value, keyed by path."""
        cfg = resolve_config(self.config)
        return [self._row(value, selected_fields, cfg) for value in values]

    def extract_to_json(
        self,
        folder: str,
        selected_fields: List[str],
        out_path: str,
    ) -> ExtractionSummary:
        records, scanned, ok, failed = self._collect_records(folder, selected_fields)
        payload = json.dumps(to_jsonable(records), indent=2, ensure_ascii=False)
        Path(out_path).write_text(payload, encoding="utf-8")
        return ExtractionSummary(scanned, ok, failed, out_path)

    def extract_to_txt(
        self,
        folder: str,
        selected_fields: List[str],
        out_path: str,
    ) -> ExtractionSummary:
        records, scanned, ok, failed = self._collect_records(folder, selected_fields)
        Path(out_path).write_text(self.render_txt(records, selected_fields), encoding="utf-8")
        return ExtractionSummary(scanned, ok, failed, out_path)

    @staticmethod
    def render_txt(records: List[Dict[str, Any]], selected_fields: List[str]) -> str:
        lines: List[str] = []
        for rec in records:
            lines.append("-" * 30)
            lines.append(f"File: {rec.get(SOURCE_KEY, '')}")
            for f in selected_fields:
                val = rec.get(f, None)
                if isinstance(val, (dict, list)):
                    val_str = json.dumps(val, ensure_ascii=False)
                elif val is None:
                    val_str = ""
                else:
                    val_str = str(val)
                lines.append(f"{f}: {val_str}")
        return "\n".join(lines) + ("\n" if lines else "")

    # ---------- Internals ----------

    def _row(self, value: Any, selected_fields: List[str], cfg: WalkConfig) -> Dict[str, Any]:
        return {path: to_jsonable(get_path(value, path, cfg)) for path in selected_fields}

    def _collect_records(self, folder: str, selected_fields: List[str]) -> Tuple[List[Dict[str, Any]], int, int, int]:
        cfg = resolve_config(self.config)
        files = discover_files(folder, include_exts=self.include_exts)
        records: List[Dict[str, Any]] = []
        scanned = 0
        ok = 0
        failed = 0

        for fpath in files:
            scanned += 1
            try:
                data = load_records(fpath)
            except RecordLoadError as e:
                logger.warning("Skipping %s: %s", fpath, e)
                failed += 1
                continue

            row: Dict[str, Any] = {SOURCE_KEY: str(fpath)}
            row.update(self._row(data, selected_fields, cfg))
            records.append(row)
            ok += 1

        return records, scanned, ok, failed
