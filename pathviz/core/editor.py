# pathviz/core/editor.py
#!/usr/bin/env python3
"""
Edit/mode state machine and the interactive session that owns the grid.

apply_click() is a pure transition:
  (grid, mode, start, end, cell) -> EditOutcome(grid, mode, start, end)

Modes advance placing-start -> placing-end -> editing-walls. Editing walls
is terminal; only set_mode() leaves it.

Session holds the live state for one UI session and enforces the single
``running`` flag: while a playback is active every grid-mutating action is
ignored and reports False.
"""

from dataclasses import dataclass
from typing import Callable, Optional, Union
import logging
import time

from pathviz.core.errors import MissingEndpoints
from pathviz.core.grid import (Grid, initialize_grid, clear_path, clear_walls,
                               clamp_dimensions)
from pathviz.core.playback import (Playback, PlaybackCallbacks, StepDelays,
                                   summary_message)
from pathviz.core.traversal import run_traversal
from pathviz.core.types import Algorithm, Cell, CellType, Mode, TraversalResult

logger = logging.getLogger(__name__)

DEFAULT_ROWS = 15
DEFAULT_COLS = 25


@dataclass(frozen=True)
class EditOutcome:
    grid: Grid
    mode: Mode
    start: Optional[Cell]
    end: Optional[Cell]


def _move_marker(grid: Grid, old: Optional[Cell], new: Cell, kind: CellType) -> Grid:
    if old is not None and grid.cell_type(old) is kind:
        grid = grid.with_cell(old, CellType.EMPTY)
    return grid.with_cell(new, kind)


def apply_click(grid: Grid, mode: Mode, start: Optional[Cell], end: Optional[Cell],
                cell: Cell) -> EditOutcome:
    kind = grid.cell_type(cell)   # raises InvalidCoordinate
    unchanged = EditOutcome(grid, mode, start, end)

    if mode is Mode.PLACING_START:
        if kind is CellType.END:
            return unchanged
        return EditOutcome(_move_marker(grid, start, cell, CellType.START),
                           Mode.PLACING_END, cell, end)

    if mode is Mode.PLACING_END:
        if kind is CellType.START:
            return unchanged
        return EditOutcome(_move_marker(grid, end, cell, CellType.END),
                           Mode.EDITING_WALLS, start, cell)

    if kind in (CellType.START, CellType.END):
        return unchanged
    toggled = CellType.EMPTY if kind is CellType.WALL else CellType.WALL
    return EditOutcome(grid.with_cell(cell, toggled), mode, start, end)


class Session:
    def __init__(self, rows: int = DEFAULT_ROWS, cols: int = DEFAULT_COLS,
                 algorithm: Union[Algorithm, str] = Algorithm.BREADTH_FIRST,
                 delays: StepDelays = StepDelays()):
        self.algorithm = algorithm if isinstance(algorithm, Algorithm) else Algorithm.parse(algorithm)
        self.delays = delays
        self.running = False
        self.playback: Optional[Playback] = None
        self.last_result: Optional[TraversalResult] = None
        self.callbacks = PlaybackCallbacks(
            on_visited=self._paint_visited,
            on_path=self._paint_path,
            on_complete=self._finish,
        )
        self.rows, self.cols = clamp_dimensions(rows, cols)
        self._fresh()

    # ---------- state ----------
    def _fresh(self) -> None:
        self.grid = initialize_grid(self.rows, self.cols)
        self.mode = Mode.PLACING_START
        self.start: Optional[Cell] = None
        self.end: Optional[Cell] = None
        self.message = ""

    @property
    def can_visualize(self) -> bool:
        return not self.running and self.start is not None and self.end is not None

    @property
    def message_is_success(self) -> bool:
        r = self.last_result
        return bool(self.message) and r is not None and r.found and self.message == summary_message(r)

    def live_type(self, cell: Cell) -> CellType:
        return self.grid.cell_type(cell)

    # ---------- edits ----------
    def reset(self) -> bool:
        if self.running:
            return False
        self._fresh()
        logger.info("grid reset to %dx%d", self.rows, self.cols)
        return True

    def resize(self, rows, cols) -> bool:
        """Re-initialize with new (clamped) dimensions; the layout is not kept.

        A request that clamps to the current size changes nothing.
        """
        if self.running:
            return False
        rows, cols = clamp_dimensions(rows, cols)
        if (rows, cols) == (self.rows, self.cols):
            return False
        self.rows, self.cols = rows, cols
        return self.reset()

    def click(self, cell: Cell) -> bool:
        if self.running:
            return False
        out = apply_click(self.grid, self.mode, self.start, self.end, cell)
        self.grid, self.mode, self.start, self.end = out.grid, out.mode, out.start, out.end
        self.message = ""
        return True

    def set_mode(self, mode: Union[Mode, str]) -> bool:
        if self.running:
            return False
        self.mode = Mode(mode)
        return True

    def set_algorithm(self, algorithm: Union[Algorithm, str]) -> bool:
        if self.running:
            return False
        self.algorithm = algorithm if isinstance(algorithm, Algorithm) else Algorithm.parse(algorithm)
        return True

    def clear_path(self) -> bool:
        if self.running:
            return False
        self.grid = clear_path(self.grid)
        self.message = ""
        return True

    def clear_walls(self) -> bool:
        if self.running:
            return False
        self.grid = clear_walls(self.grid)
        self.message = ""
        return True

    # ---------- runs ----------
    def visualize(self, now: Optional[float] = None) -> Optional[Playback]:
        """Start a run; returns the Playback to pump, or None if nothing started."""
        if self.running:
            return None
        self.message = ""
        snapshot = clear_path(self.grid)
        try:
            result = run_traversal(snapshot, self.start, self.end, self.algorithm)
        except MissingEndpoints as exc:
            self.message = str(exc)
            logger.info("run refused: %s", exc)
            return None

        self.grid = snapshot
        self.last_result = result
        self.running = True
        self.playback = Playback(result, self.delays, live_type=self.live_type)
        if now is not None:
            self.playback.start(now)
        logger.info("%s run %s -> %s: %d visited, found=%s",
                    self.algorithm.value, self.start, self.end,
                    len(result.visited), result.found)
        return self.playback

    def tick(self, now: float) -> int:
        """Fire whatever the active playback has due at ``now`` (ms)."""
        if self.playback is None:
            return 0
        return self.playback.pump(now, self.callbacks)

    def run_blocking(self, sleep: Callable[[float], None] = time.sleep) -> str:
        """Start a run and replay it to completion; returns the final message."""
        playback = self.visualize()
        if playback is not None:
            playback.run(self.callbacks, sleep)
        return self.message

    # ---------- playback sinks ----------
    def _paint_visited(self, cell: Cell) -> None:
        if self.grid.cell_type(cell) is CellType.EMPTY:
            self.grid = self.grid.with_cell(cell, CellType.VISITED)

    def _paint_path(self, cell: Cell) -> None:
        self.grid = self.grid.with_cell(cell, CellType.PATH)

    def _finish(self, message: str) -> None:
        self.message = message
        self.running = False
        self.playback = None
