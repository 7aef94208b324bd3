# pathviz/core/types.py
#!/usr/bin/env python3
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Tuple, Optional, Dict, Any

Cell = Tuple[int, int]  # (row, col)


class CellType(str, Enum):
    EMPTY = "empty"
    START = "start"
    END = "end"
    WALL = "wall"
    PATH = "path"
    VISITED = "visited"


class Mode(str, Enum):
    PLACING_START = "placing-start"
    PLACING_END = "placing-end"
    EDITING_WALLS = "editing-walls"


class Algorithm(str, Enum):
    BREADTH_FIRST = "breadth-first"
    DEPTH_FIRST = "depth-first"

    @classmethod
    def parse(cls, name: str) -> "Algorithm":
        key = name.strip().lower()
        key = _ALGORITHM_ALIASES.get(key, key)
        return cls(key)


_ALGORITHM_ALIASES = {
    "bfs": "breadth-first",
    "dfs": "depth-first",
    "breadth_first": "breadth-first",
    "depth_first": "depth-first",
}


@dataclass(frozen=True)
class TraversalResult:
    visited: Tuple[Cell, ...] = ()   # discovery order, start excluded
    path: Tuple[Cell, ...] = ()      # start..end inclusive when found
    found: bool = False

    @property
    def edge_count(self) -> int:
        return len(self.path) - 1 if self.found else 0


@dataclass
class StepResult:
    status: str                   # "idle" | "running" | "done" | "no_path"
    opened: List[Cell] = field(default_factory=list)
    current: Optional[Cell] = None
    path: Optional[List[Cell]] = None
    metrics: Dict[str, Any] = field(default_factory=dict)
