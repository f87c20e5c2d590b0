# leafwalk/paths/terminal_fields.py
from __future__ import annotations

import logging
from collections import deque
from typing import Any, Deque, List, Optional, Set, Tuple

from leafwalk.config import WalkConfig, resolve_config
from leafwalk.reflect.enumerator import each_field
from leafwalk.reflect.kinds import Kind, is_leaf

logger = logging.getLogger(__name__)


class TraversalLimitError(RuntimeError):
    def __init__(self, max_nodes: int, path: str):
        super().__init__(
            f"Expanded more than {max_nodes} values (last at {path or '<root>'!r}); "
            "the input is probably cyclic"
        )
        self.max_nodes = max_nodes
        self.path = path


def terminal_fields(value: Any, config: Optional[WalkConfig] = None) -> List[str]:
    """
    Full path of every terminal field reachable from `value`, sorted.

    A terminal field is a scalar or a map. Structs are expanded breadth-first
    through a queue so nesting depth never grows the call stack; sequences
    contribute the fields of one representative element.

    Cyclic inputs are not detected. Unless `config.max_nodes` is set they
    never terminate; with it, TraversalLimitError is raised.
    """
    if value is None:
        return []

    cfg = resolve_config(config)
    found: Set[str] = set()
    queue: Deque[Tuple[Any, str]] = deque([(value, "")])
    expanded = 0

    while queue:
        node, prefix = queue.popleft()
        expanded += 1
        if cfg.max_nodes is not None and expanded > cfg.max_nodes:
            raise TraversalLimitError(cfg.max_nodes, prefix)

        def visit(child: Any, name: str, kind: Kind) -> None:
            path = cfg.join(prefix, name)
            if is_leaf(kind):
                found.add(path)
            else:
                queue.append((child, path))

        each_field(node, visit, cfg)

    paths = sorted(found)
    logger.debug("terminal_fields: %d paths from %d expanded values", len(paths), expanded)
    return paths
