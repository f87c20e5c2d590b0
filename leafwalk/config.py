# leafwalk/config.py
from __future__ import annotations

import logging
import os
import threading
from dataclasses import dataclass, replace
from typing import Optional

DEFAULT_SEPARATOR = "."

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WalkConfig:
    """
    Settings shared by path discovery and path access.

    - separator: joins field names into paths (collector) and splits paths
      back into segments (accessor). Both sides must agree for collected
      paths to round-trip through `get_path`.
    - max_nodes: optional cap on the number of values the collector expands.
      None means unbounded (cyclic input never terminates).
    """

    separator: str = DEFAULT_SEPARATOR
    max_nodes: Optional[int] = None

    def __post_init__(self) -> None:
        if not isinstance(self.separator, str) or not self.separator:
            raise ValueError("separator must be a non-empty string")
        if self.max_nodes is not None and self.max_nodes < 1:
            raise ValueError("max_nodes must be a positive integer or None")

    @classmethod
    def from_env(cls) -> "WalkConfig":
        """
        Read LEAFWALK_SEPARATOR and LEAFWALK_MAX_NODES. Invalid values are
        logged and replaced by the defaults so a bad environment never breaks
        import.
        """
        separator = os.getenv("LEAFWALK_SEPARATOR", DEFAULT_SEPARATOR)
        if not separator:
            logger.warning("LEAFWALK_SEPARATOR is empty, using %r", DEFAULT_SEPARATOR)
            separator = DEFAULT_SEPARATOR

        raw_max = os.getenv("LEAFWALK_MAX_NODES", "").strip()
        max_nodes = None
        if raw_max:
            try:
                max_nodes = int(raw_max)
            except ValueError:
                logger.warning("LEAFWALK_MAX_NODES=%r is not an integer, traversal is unbounded", raw_max)
            else:
                if max_nodes < 1:
                    logger.warning("LEAFWALK_MAX_NODES=%r must be positive, traversal is unbounded", raw_max)
                    max_nodes = None
        return cls(separator=separator, max_nodes=max_nodes)

    def join(self, prefix: str, name: str) -> str:
        return f"{prefix}{self.separator}{name}" if prefix else name

    def split(self, path: str) -> list[str]:
        return path.split(self.separator) if path else []


# Process-wide default. Replaced wholesale, never mutated, so a call that
# captured it at entry keeps one separator for its whole traversal.
_default = WalkConfig.from_env()
_lock = threading.Lock()


def default_config() -> WalkConfig:
    return _default


def configure(**changes) -> WalkConfig:
    global _default
    with _lock:
        _default = replace(_default, **changes)
        return _default


def set_separator(separator: str) -> WalkConfig:
    return configure(separator=separator)


def reset_config() -> WalkConfig:
    global _default
    with _lock:
        _default = WalkConfig.from_env()
        return _default


def resolve_config(config: Optional[WalkConfig]) -> WalkConfig:
    return config if config is not None else _default
