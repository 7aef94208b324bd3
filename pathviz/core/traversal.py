# pathviz/core/traversal.py
#!/usr/bin/env python3
"""
Breadth-first and depth-first search over a Grid, one expansion per step().

Both searchers implement the same API:
- init(grid, start, end) - reset() - step() -> StepResult

and differ only in which end of the frontier they pop from:
- BFS pops the front (FIFO), so the returned path has the fewest edges.
- DFS pops the back (LIFO). Its path is valid but usually not the shortest;
  that is expected behaviour, not a bug.

Neighbours are expanded east, south, west, north. A cell is marked visited
when it is pushed (not when it is popped), so every cell enters the frontier
at most once and a run is O(rows * cols).

The pure functions ``breadth_first_search`` / ``depth_first_search`` run a
searcher to completion and return an immutable TraversalResult.
"""

from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Dict, List, Optional, Set, Union
import logging

from pathviz.core.errors import MissingEndpoints
from pathviz.core.grid import Grid
from pathviz.core.types import Algorithm, Cell, StepResult, TraversalResult

logger = logging.getLogger(__name__)


@dataclass
class FrontierSearch:
    name: str = "frontier"

    # Internal state
    grid: Optional[Grid] = None
    start: Optional[Cell] = None
    end: Optional[Cell] = None
    frontier: Deque[Cell] = field(default_factory=deque)
    seen: Set[Cell] = field(default_factory=set)
    discovered: List[Cell] = field(default_factory=list)   # discovery order
    parent: Dict[Cell, Cell] = field(default_factory=dict)
    popped_count: int = 0
    done: bool = False
    no_path: bool = False

    # -------------------- lifecycle --------------------

    def init(self, grid: Grid, start: Cell, end: Cell) -> None:
        """Bind to a grid snapshot and its endpoints."""
        grid.require(start)
        grid.require(end)
        self.grid = grid
        self.start = start
        self.end = end
        self.reset()

    def reset(self) -> None:
        """Clear all state and seed the frontier with the start cell."""
        if self.grid is None:
            return
        self.frontier.clear()
        self.seen.clear()
        self.discovered.clear()
        self.parent.clear()
        self.popped_count = 0
        self.done = False
        self.no_path = False

        self.frontier.append(self.start)
        self.seen.add(self.start)

    # -------------------- ordering discipline --------------------

    def _pop(self) -> Cell:
        raise NotImplementedError

    # -------------------- helpers --------------------

    def _neighbors4(self, c: Cell) -> List[Cell]:
        out: List[Cell] = []
        for n in self.grid.neighbors(c):
            if n not in self.seen and not self.grid.is_wall(n):
                out.append(n)
        return out

    def _reconstruct_path(self, end: Cell) -> List[Cell]:
        path: List[Cell] = []
        cur = end
        while True:
            path.append(cur)
            if cur == self.start:
                break
            cur = self.parent[cur]
        path.reverse()
        return path

    # -------------------- stepping --------------------

    @property
    def finished(self) -> bool:
        return self.done or self.no_path

    def step(self) -> StepResult:
        if self.grid is None:
            return StepResult(status="idle", metrics={"algo": self.name})

        if self.done:
            path = self._reconstruct_path(self.end)
            return StepResult(status="done", path=path,
                              metrics=self._metrics(path_len=len(path) - 1))

        if self.no_path:
            return StepResult(status="no_path", metrics=self._metrics())

        if not self.frontier:
            self.no_path = True
            return StepResult(status="no_path", metrics=self._metrics())

        u = self._pop()
        self.popped_count += 1

        if u == self.end:
            self.done = True
            path = self._reconstruct_path(u)
            return StepResult(status="done", current=u, path=path,
                              metrics=self._metrics(path_len=len(path) - 1))

        opened_now: List[Cell] = []
        for v in self._neighbors4(u):
            self.seen.add(v)
            self.discovered.append(v)
            self.parent[v] = u
            self.frontier.append(v)
            opened_now.append(v)

        return StepResult(status="running", opened=opened_now, current=u,
                          metrics=self._metrics())

    def run(self) -> TraversalResult:
        """Step until the search finishes and package the outcome."""
        res = self.step()
        while res.status == "running":
            res = self.step()
        found = res.status == "done"
        result = TraversalResult(
            visited=tuple(self.discovered),
            path=tuple(res.path) if found else (),
            found=found,
        )
        logger.debug("%s %s -> %s: visited=%d found=%s edges=%d",
                     self.name, self.start, self.end,
                     len(result.visited), result.found, result.edge_count)
        return result

    def _metrics(self, path_len: int = 0) -> dict:
        return {
            "algo": self.name,
            "popped": self.popped_count,
            "frontier_size": len(self.frontier),
            "visited_count": len(self.discovered),
            "path_len": path_len,
        }


@dataclass
class BreadthFirstSearch(FrontierSearch):
    name: str = "BFS"

    def _pop(self) -> Cell:
        return self.frontier.popleft()


@dataclass
class DepthFirstSearch(FrontierSearch):
    name: str = "DFS"

    def _pop(self) -> Cell:
        return self.frontier.pop()


SEARCHERS = {
    Algorithm.BREADTH_FIRST: BreadthFirstSearch,
    Algorithm.DEPTH_FIRST: DepthFirstSearch,
}


def make_searcher(algorithm: Union[Algorithm, str]) -> FrontierSearch:
    if not isinstance(algorithm, Algorithm):
        algorithm = Algorithm.parse(algorithm)
    return SEARCHERS[algorithm]()


def breadth_first_search(grid: Grid, start: Cell, end: Cell) -> TraversalResult:
    algo = BreadthFirstSearch()
    algo.init(grid, start, end)
    return algo.run()


def depth_first_search(grid: Grid, start: Cell, end: Cell) -> TraversalResult:
    algo = DepthFirstSearch()
    algo.init(grid, start, end)
    return algo.run()


def run_traversal(grid: Grid, start: Optional[Cell], end: Optional[Cell],
                  algorithm: Union[Algorithm, str] = Algorithm.BREADTH_FIRST) -> TraversalResult:
    """Run the chosen search on a grid snapshot.

    Raises MissingEndpoints when either endpoint has not been placed.
    """
    if start is None or end is None:
        raise MissingEndpoints()
    algo = make_searcher(algorithm)
    algo.init(grid, start, end)
    return algo.run()
