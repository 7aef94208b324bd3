# pathviz/core/grid.py
#!/usr/bin/env python3
"""
Grid model: an immutable rows x cols matrix of CellType values.

Every edit returns a new Grid; nothing mutates a Grid in place, so a snapshot
handed to the traversal engine can never change underneath it.

Neighbour order is east, south, west, north. Traversal results (discovery
order and the depth-first path) depend on it.
"""

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Tuple
import logging

from pathviz.core.errors import InvalidCoordinate
from pathviz.core.types import Cell, CellType

logger = logging.getLogger(__name__)

# Interactive dimension limits (inclusive).
MIN_ROWS, MAX_ROWS = 5, 30
MIN_COLS, MAX_COLS = 5, 40

# (d_row, d_col): east, south, west, north
DIRECTIONS: Tuple[Cell, ...] = ((0, 1), (1, 0), (0, -1), (-1, 0))

OVERLAY_TYPES = frozenset({CellType.PATH, CellType.VISITED})

_GLYPHS = {
    CellType.EMPTY: ".",
    CellType.START: "S",
    CellType.END: "E",
    CellType.WALL: "#",
    CellType.PATH: "*",
    CellType.VISITED: "o",
}
_FROM_GLYPH = {g: t for t, g in _GLYPHS.items()}


@dataclass(frozen=True)
class Grid:
    rows: int
    cols: int
    cells: Tuple[Tuple[CellType, ...], ...]   # [row][col]

    def __post_init__(self):
        if self.rows < 1 or self.cols < 1:
            raise ValueError(f"grid needs at least one cell, got {self.rows}x{self.cols}")
        if len(self.cells) != self.rows or any(len(r) != self.cols for r in self.cells):
            raise ValueError("cells size mismatch")

    # -------------------- queries --------------------

    def is_valid_coordinate(self, r: int, c: int) -> bool:
        return 0 <= r < self.rows and 0 <= c < self.cols

    def in_bounds(self, cell: Cell) -> bool:
        r, c = cell
        return self.is_valid_coordinate(r, c)

    def require(self, cell: Cell) -> None:
        if not self.in_bounds(cell):
            raise InvalidCoordinate(cell, self.rows, self.cols)

    def cell_type(self, cell: Cell) -> CellType:
        self.require(cell)
        r, c = cell
        return self.cells[r][c]

    def is_wall(self, cell: Cell) -> bool:
        return self.cell_type(cell) is CellType.WALL

    def neighbors(self, cell: Cell) -> List[Cell]:
        """In-bounds orthogonal neighbours of ``cell`` in east, south, west, north order."""
        r, c = cell
        out: List[Cell] = []
        for dr, dc in DIRECTIONS:
            n = (r + dr, c + dc)
            if self.in_bounds(n):
                out.append(n)
        return out

    def coordinates(self) -> Iterator[Cell]:
        for r in range(self.rows):
            for c in range(self.cols):
                yield (r, c)

    def cells_of(self, kind: CellType) -> List[Cell]:
        return [cell for cell in self.coordinates() if self.cells[cell[0]][cell[1]] is kind]

    # -------------------- edits (return new grids) --------------------

    def with_cell(self, cell: Cell, kind: CellType) -> "Grid":
        self.require(cell)
        r, c = cell
        if self.cells[r][c] is kind:
            return self
        row = list(self.cells[r])
        row[c] = kind
        cells = self.cells[:r] + (tuple(row),) + self.cells[r + 1:]
        return Grid(self.rows, self.cols, cells)

    def with_cells(self, cells: Iterable[Cell], kind: CellType) -> "Grid":
        grid = [list(r) for r in self.cells]
        for cell in cells:
            self.require(cell)
            grid[cell[0]][cell[1]] = kind
        return Grid(self.rows, self.cols, tuple(tuple(r) for r in grid))

    def replace_types(self, mapping) -> "Grid":
        """Swap every cell whose type is a key of ``mapping`` for the mapped type."""
        cells = tuple(tuple(mapping.get(t, t) for t in row) for row in self.cells)
        if cells == self.cells:
            return self
        return Grid(self.rows, self.cols, cells)

    # -------------------- text form --------------------

    def render(self) -> str:
        return "\n".join("".join(_GLYPHS[t] for t in row) for row in self.cells)

    @classmethod
    def parse(cls, text: str) -> "Grid":
        """Build a grid from the ``render()`` text form (one line per row)."""
        lines = [ln.strip() for ln in text.strip().splitlines() if ln.strip()]
        cells = tuple(tuple(_FROM_GLYPH[ch] for ch in ln) for ln in lines)
        return cls(len(cells), len(cells[0]) if cells else 0, cells)


def initialize_grid(rows: int, cols: int) -> Grid:
    """Fresh grid with every cell empty."""
    row = (CellType.EMPTY,) * cols
    grid = Grid(rows, cols, (row,) * rows)
    logger.debug("initialized %dx%d grid", rows, cols)
    return grid


def clear_path(grid: Grid) -> Grid:
    """Reset visited/path overlay cells to empty; start, end and walls are kept."""
    return grid.replace_types({t: CellType.EMPTY for t in OVERLAY_TYPES})


def clear_walls(grid: Grid) -> Grid:
    """Reset wall cells to empty; every other type is kept."""
    return grid.replace_types({CellType.WALL: CellType.EMPTY})


def clamp_dimension(value, low: int, high: int) -> int:
    """Clamp a requested dimension into ``[low, high]``.

    Values that do not parse as an integer fall back to ``low``.
    """
    try:
        n = int(value)
    except (TypeError, ValueError):
        n = low
    return max(low, min(high, n))


def clamp_dimensions(rows, cols) -> Tuple[int, int]:
    clamped = (clamp_dimension(rows, MIN_ROWS, MAX_ROWS),
               clamp_dimension(cols, MIN_COLS, MAX_COLS))
    if clamped != (rows, cols):
        logger.debug("clamped grid size %rx%r to %dx%d", rows, cols, *clamped)
    return clamped
