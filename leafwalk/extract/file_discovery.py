# leafwalk/extract/file_discovery.py
from pathlib import Path
from typing import Iterable, List, Set

DEFAULT_EXTS: Set[str] = {".json", ".jsonl", ".log", ".txt"}

def discover_files(root_dir: str, include_exts: Iterable[str] = DEFAULT_EXTS) -> List[Path]:
    """
    Recursively discover documents under root_dir limited to include_exts.
    Hidden files and folders are skipped. Returns paths sorted so reports
    list documents in a stable order.
    """
    root = Path(root_dir).expanduser().resolve()
    if not root.exists() or not root.is_dir():
        return []

    include_exts = {ext.lower() if ext.startswith(".") else f".{ext.lower()}" for ext in include_exts}
    files: List[Path] = []
    for p in root.rglob("*"):
        if any(part.startswith(".") for part in p.relative_to(root).parts):
            continue
        if p.is_file() and p.suffix.lower() in include_exts:
            files.append(p)
    return sorted(files)
