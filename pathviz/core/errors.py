# pathviz/core/errors.py
#!/usr/bin/env python3
"""Exceptions raised by the pathfinding core.

Only ``MissingEndpoints`` is expected at runtime; the session turns it into a
user-facing message. ``InvalidCoordinate`` means a caller broke the grid's
bounds contract and is left to propagate.
"""


class PathvizError(Exception):
    """Base class for every error raised by pathviz."""


class MissingEndpoints(PathvizError):
    """A run was requested before both start and end were placed."""

    message = "Please select both start and end points!"

    def __init__(self, message: str = ""):
        super().__init__(message or self.message)


class InvalidCoordinate(PathvizError, ValueError):
    """A coordinate outside ``[0, rows) x [0, cols)`` reached the core."""

    def __init__(self, cell, rows: int, cols: int):
        self.cell = cell
        self.rows = rows
        self.cols = cols
        super().__init__(f"cell {cell!r} is outside a {rows}x{cols} grid")
