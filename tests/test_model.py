"""Tests for skirun_finder model classes.

Tests: Cell, Grid, Route, BestRoutes
Focus: Positional identity, read-only grid, route metrics, best-set fold rules
"""

import numpy as np
import pytest

from skirun_finder.errors import MalformedInputError
from skirun_finder.model.best_routes import BestRoutes
from skirun_finder.model.cell import Cell
from skirun_finder.model.grid import Grid
from skirun_finder.model.route import Route


def make_route(*elevations: int, row: int = 0) -> Route:
    """Route along one row, stored leaf first: make_route(1, 5, 9) ends at 1 and starts at 9."""
    return Route.from_cells([Cell(row=row, col=i, elevation=e) for i, e in enumerate(elevations)])


# =============================================================================
# CELL
# =============================================================================


class TestCell:
    """Cell - positional identity."""

    def test_equality_ignores_elevation(self) -> None:
        """Two cells at the same position are the same cell."""
        assert Cell(row=1, col=2, elevation=5) == Cell(row=1, col=2, elevation=7)
        assert hash(Cell(row=1, col=2, elevation=5)) == hash(Cell(row=1, col=2, elevation=7))

    def test_different_positions_differ(self) -> None:
        """Same elevation at another position is another cell."""
        assert Cell(row=0, col=0, elevation=5) != Cell(row=0, col=1, elevation=5)

    def test_usable_as_dict_key(self) -> None:
        """Lookups by position work across instances."""
        parents = {Cell(row=0, col=1, elevation=3): "x"}
        assert parents[Cell(row=0, col=1, elevation=3)] == "x"

    def test_row_major_ordering(self) -> None:
        """Cells sort by row, then column."""
        cells = [Cell(1, 0, 0), Cell(0, 2, 0), Cell(0, 1, 0)]
        assert [c.position for c in sorted(cells)] == [(0, 1), (0, 2), (1, 0)]

    def test_is_adjacent_to(self) -> None:
        """Only orthogonal neighbors are adjacent."""
        center = Cell(1, 1, 0)
        assert center.is_adjacent_to(Cell(0, 1, 0))
        assert center.is_adjacent_to(Cell(1, 2, 0))
        assert not center.is_adjacent_to(Cell(0, 0, 0))
        assert not center.is_adjacent_to(center)

    def test_frozen(self) -> None:
        """Cells are immutable."""
        cell = Cell(0, 0, 1)
        with pytest.raises(AttributeError):
            cell.elevation = 2  # type: ignore[misc]


# =============================================================================
# GRID
# =============================================================================


class TestGrid:
    """Grid - read-only elevation grid."""

    def test_dimensions(self, classic_grid: Grid) -> None:
        """Shape, rows, cols and size match the input."""
        assert classic_grid.shape == (4, 4)
        assert classic_grid.rows == 4
        assert classic_grid.cols == 4
        assert classic_grid.size == 16
        assert len(classic_grid) == 16

    def test_cell_lookup(self, classic_grid: Grid) -> None:
        """cell() returns the elevation at (row, col)."""
        assert classic_grid.cell(1, 2).elevation == 9
        assert classic_grid.cell(3, 2).elevation == 1

    def test_cell_lookup_returns_same_instance(self, classic_grid: Grid) -> None:
        """Every lookup of a position returns the same Cell object."""
        assert classic_grid.cell(2, 1) is classic_grid.cell(2, 1)

    def test_cell_out_of_bounds(self, classic_grid: Grid) -> None:
        """Positions outside the grid raise IndexError."""
        with pytest.raises(IndexError):
            classic_grid.cell(4, 0)
        with pytest.raises(IndexError):
            classic_grid.cell(0, -1)

    def test_iteration_is_row_major(self, single_row_grid: Grid) -> None:
        """Iteration walks rows top to bottom, columns left to right."""
        assert [c.elevation for c in single_row_grid] == [9, 7, 5, 3, 1]
        grid = Grid.from_rows([[1, 2], [3, 4]])
        assert [c.position for c in grid] == [(0, 0), (0, 1), (1, 0), (1, 1)]

    def test_flat_index_roundtrip(self, classic_grid: Grid) -> None:
        """cell_at() inverts flat_index() for every cell."""
        for cell in classic_grid:
            assert classic_grid.cell_at(classic_grid.flat_index(cell)) is cell

    def test_elevations_read_only(self, classic_grid: Grid) -> None:
        """The elevation array cannot be modified."""
        with pytest.raises(ValueError):
            classic_grid.elevations[0, 0] = 100

    def test_source_array_is_copied(self) -> None:
        """Changing the input array later does not change the grid."""
        array = np.array([[3, 2], [1, 0]])
        grid = Grid.from_array(array)
        array[0, 0] = 99
        assert grid.cell(0, 0).elevation == 3

    def test_ragged_rows_rejected(self) -> None:
        """Rows of different lengths are malformed."""
        with pytest.raises(MalformedInputError):
            Grid.from_rows([[1, 2], [3]])

    def test_empty_rejected(self) -> None:
        """Empty grids are malformed."""
        with pytest.raises(MalformedInputError):
            Grid.from_rows([])
        with pytest.raises(MalformedInputError):
            Grid.from_rows([[]])

    def test_non_integer_rejected(self) -> None:
        """Float elevations are malformed."""
        with pytest.raises(MalformedInputError):
            Grid.from_array(np.array([[1.5, 2.0]]))

    def test_equality(self) -> None:
        """Grids with the same elevations are equal."""
        assert Grid.from_rows([[1, 2]]) == Grid.from_rows([[1, 2]])
        assert Grid.from_rows([[1, 2]]) != Grid.from_rows([[2, 1]])


# =============================================================================
# ROUTE
# =============================================================================


class TestRoute:
    """Route - ordered cells with length and steepness."""

    def test_length_is_cell_count(self) -> None:
        """Length counts cells, not steps."""
        assert make_route(1, 3, 5, 7, 9).length == 5

    def test_steepness_is_last_minus_first(self) -> None:
        """Steepness = elevation(last) - elevation(first) in stored order."""
        route = make_route(1, 3, 5, 7, 9)
        assert route.steepness == 8

    def test_single_cell_route(self) -> None:
        """A one-cell route has length 1 and steepness 0."""
        route = Route.single(Cell(0, 0, 5))
        assert route.length == 1
        assert route.steepness == 0
        assert route.start == route.end

    def test_start_and_end(self) -> None:
        """start is the stored last cell (the top), end the first (the bottom)."""
        route = make_route(1, 5, 9)
        assert route.start.elevation == 9
        assert route.end.elevation == 1

    def test_descending_elevations(self) -> None:
        """Elevations are reported from top to bottom."""
        assert make_route(1, 5, 9).descending_elevations == [9, 5, 1]

    def test_empty_route_rejected(self) -> None:
        """Routes need at least one cell."""
        with pytest.raises(ValueError):
            Route.from_cells([])

    def test_to_dict(self) -> None:
        """Serialized route lists cells from the top."""
        data = make_route(1, 9).to_dict()
        assert data["length"] == 2
        assert data["steepness"] == 8
        assert data["elevations"] == [9, 1]
        assert data["cells"][0] == {"row": 0, "col": 1, "elevation": 9}


# =============================================================================
# BEST ROUTES
# =============================================================================


class TestBestRoutes:
    """BestRoutes - fold rules of the best-set."""

    def test_starts_empty(self) -> None:
        """A new best-set holds nothing."""
        best = BestRoutes()
        assert best.is_empty
        assert best.length == 0
        assert best.steepness is None
        assert best.rank() is None

    def test_first_route_kept(self) -> None:
        """The first offered route is always kept."""
        best = BestRoutes()
        assert best.offer(make_route(1, 2))
        assert best.rank() == (2, 1)

    def test_longer_route_replaces(self) -> None:
        """A longer route replaces the whole set, even if shallower."""
        best = BestRoutes()
        best.offer(make_route(1, 100))
        assert best.offer(make_route(1, 2, 3))
        assert len(best) == 1
        assert best.rank() == (3, 2)

    def test_shorter_route_discarded(self) -> None:
        """A shorter route is discarded, even if steeper."""
        best = BestRoutes()
        best.offer(make_route(1, 2, 3))
        assert not best.offer(make_route(1, 100))
        assert best.rank() == (3, 2)

    def test_steeper_route_of_equal_length_replaces(self) -> None:
        """Among equal lengths, a larger steepness wins."""
        best = BestRoutes()
        best.offer(make_route(1, 2, 3))
        assert best.offer(make_route(0, 5, 9, row=1))
        assert len(best) == 1
        assert best.steepness == 9

    def test_shallower_route_of_equal_length_discarded(self) -> None:
        """Among equal lengths, a smaller steepness loses."""
        best = BestRoutes()
        best.offer(make_route(0, 5, 9))
        assert not best.offer(make_route(1, 2, 3, row=1))
        assert best.steepness == 9

    def test_ties_all_kept(self) -> None:
        """Routes tied on length and steepness are all retained."""
        best = BestRoutes()
        best.offer(make_route(1, 5, 9))
        assert best.offer(make_route(2, 4, 10, row=1))
        assert best.offer(make_route(0, 1, 8, row=2))
        assert len(best) == 3
        best.check_invariant()

    def test_collect_all_longest_ignores_steepness(self) -> None:
        """With collect_all_longest, every longest route is kept."""
        best = BestRoutes(collect_all_longest=True)
        best.offer(make_route(1, 2, 3))
        assert best.offer(make_route(0, 5, 9, row=1))
        assert best.offer(make_route(4, 5, 6, row=2))
        assert len(best) == 3
        assert best.steepness == 9
        best.check_invariant()

    def test_collect_all_longest_still_prefers_length(self) -> None:
        """collect_all_longest does not keep shorter routes."""
        best = BestRoutes(collect_all_longest=True)
        best.offer(make_route(1, 2, 3))
        assert not best.offer(make_route(0, 9))
        assert best.offer(make_route(1, 2, 3, 4, row=1))
        assert len(best) == 1

    def test_fold_order_does_not_change_result(self) -> None:
        """Offering the same routes in any order gives the same set."""
        routes = [
            make_route(1, 2, 3),
            make_route(0, 5, 9, row=1),
            make_route(1, 100),
            make_route(2, 6, 10, row=2),
            make_route(3, 4, row=3),
        ]
        forward, backward = BestRoutes(), BestRoutes()
        forward.offer_all(routes)
        backward.offer_all(reversed(routes))
        assert forward.signature() == backward.signature()
        assert forward.rank() == backward.rank() == (3, 9)

    def test_offer_counter(self) -> None:
        """Every offer is counted, kept or not."""
        best = BestRoutes()
        best.offer_all([make_route(1, 2), make_route(5), make_route(1, 3, row=1)])
        assert best.offered == 3

    def test_to_dict(self) -> None:
        """Serialized best-set carries count, length, steepness and routes."""
        best = BestRoutes()
        best.offer(make_route(1, 5, 9))
        data = best.to_dict()
        assert data["count"] == 1
        assert data["length"] == 3
        assert data["steepness"] == 8
        assert data["routes"][0]["elevations"] == [9, 5, 1]
