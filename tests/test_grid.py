"""Tests for pathviz.core.grid."""

from __future__ import annotations

import pytest

from pathviz.core.errors import InvalidCoordinate
from pathviz.core.grid import (
    Grid,
    clamp_dimension,
    clamp_dimensions,
    clear_path,
    clear_walls,
    initialize_grid,
)
from pathviz.core.types import CellType

OVERLAID = """
S.o*.
#oo*#
..#*E
"""


class TestInitialize:
    def test_every_cell_empty(self) -> None:
        grid = initialize_grid(5, 7)
        assert (grid.rows, grid.cols) == (5, 7)
        assert len(grid.cells_of(CellType.EMPTY)) == 35

    def test_rejects_empty_grid(self) -> None:
        with pytest.raises(ValueError):
            initialize_grid(0, 5)


class TestCoordinates:
    def test_valid_coordinate_bounds(self) -> None:
        grid = initialize_grid(5, 6)
        assert grid.is_valid_coordinate(0, 0)
        assert grid.is_valid_coordinate(4, 5)
        assert not grid.is_valid_coordinate(5, 0)
        assert not grid.is_valid_coordinate(0, 6)
        assert not grid.is_valid_coordinate(-1, 2)

    def test_cell_type_out_of_bounds_raises(self) -> None:
        grid = initialize_grid(5, 5)
        with pytest.raises(InvalidCoordinate):
            grid.cell_type((5, 0))

    def test_invalid_coordinate_is_value_error(self) -> None:
        grid = initialize_grid(5, 5)
        with pytest.raises(ValueError):
            grid.with_cell((0, -1), CellType.WALL)


class TestNeighbors:
    def test_interior_order_is_east_south_west_north(self) -> None:
        grid = initialize_grid(5, 5)
        assert grid.neighbors((2, 2)) == [(2, 3), (3, 2), (2, 1), (1, 2)]

    def test_corner_keeps_only_in_bounds(self) -> None:
        grid = initialize_grid(5, 5)
        assert grid.neighbors((0, 0)) == [(0, 1), (1, 0)]
        assert grid.neighbors((4, 4)) == [(4, 3), (3, 4)]

    def test_walls_are_still_neighbours(self) -> None:
        grid = initialize_grid(5, 5).with_cell((0, 1), CellType.WALL)
        assert (0, 1) in grid.neighbors((0, 0))


class TestEdits:
    def test_with_cell_returns_new_grid(self) -> None:
        grid = initialize_grid(5, 5)
        walled = grid.with_cell((1, 1), CellType.WALL)
        assert walled is not grid
        assert grid.cell_type((1, 1)) is CellType.EMPTY
        assert walled.cell_type((1, 1)) is CellType.WALL

    def test_with_cell_same_type_is_identity(self) -> None:
        grid = initialize_grid(5, 5)
        assert grid.with_cell((1, 1), CellType.EMPTY) is grid

    def test_with_cells_sets_many(self) -> None:
        grid = initialize_grid(5, 5).with_cells([(0, 0), (4, 4)], CellType.WALL)
        assert grid.cells_of(CellType.WALL) == [(0, 0), (4, 4)]


class TestClears:
    def test_clear_path_removes_overlay_only(self) -> None:
        grid = clear_path(Grid.parse(OVERLAID))
        assert grid.render() == "S....\n#...#\n..#.E"

    def test_clear_walls_removes_walls_only(self) -> None:
        grid = clear_walls(Grid.parse(OVERLAID))
        assert grid.render() == "S.o*.\n.oo*.\n...*E"

    def test_clears_are_idempotent(self) -> None:
        grid = Grid.parse(OVERLAID)
        assert clear_path(clear_path(grid)) == clear_path(grid)
        assert clear_walls(clear_walls(grid)) == clear_walls(grid)

    def test_clears_never_touch_endpoints(self) -> None:
        grid = Grid.parse(OVERLAID)
        for cleared in (clear_path(grid), clear_walls(grid), clear_walls(clear_path(grid))):
            assert cleared.cell_type((0, 0)) is CellType.START
            assert cleared.cell_type((2, 4)) is CellType.END

    def test_clear_without_overlay_returns_same_grid(self) -> None:
        grid = initialize_grid(5, 5)
        assert clear_path(grid) is grid


class TestClamp:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [(2, 5), (5, 5), (17, 17), (30, 30), (100, 30), ("12", 12), ("abc", 5), (None, 5)],
    )
    def test_clamp_dimension(self, value, expected) -> None:
        assert clamp_dimension(value, 5, 30) == expected

    def test_clamp_dimensions_uses_row_and_col_limits(self) -> None:
        assert clamp_dimensions(3, 50) == (5, 40)
        assert clamp_dimensions(31, 4) == (30, 5)
        assert clamp_dimensions(15, 25) == (15, 25)


class TestTextForm:
    def test_render_parse_agree(self) -> None:
        grid = Grid.parse(OVERLAID)
        assert (grid.rows, grid.cols) == (3, 5)
        assert Grid.parse(grid.render()) == grid
