"""Shared pytest fixtures for skirun_finder tests.

Provides reusable elevation grids and map file texts.
All fixtures use explicit values with documented expected results.

GRID CONVENTION:
    Row 0 is the top line of the map file, column 0 the leftmost value.
    Neighbors are west, south, east, north (no diagonals).
"""

from pathlib import Path

import pytest

from skirun_finder.model.grid import Grid

# =============================================================================
# MAP TEXTS
# =============================================================================

# Classic 4x4 example.
# Best run: 9 -> 5 -> 3 -> 2 -> 1 (length 5, drop 8).
# 8 -> 5 -> 3 -> 2 -> 1 is equally long but only drops 7.
CLASSIC_4X4_TEXT = """4 4
4 8 7 3
2 5 9 3
6 3 2 5
4 4 1 6
"""

# 5x5 spiral descending from 25 in the center to 1 in the top-left corner.
# Only 25 is a source; the single best run visits every cell.
SPIRAL_5X5_TEXT = """5 5
1 2 3 4 5
16 17 18 19 6
15 24 25 20 7
14 23 22 21 8
13 12 11 10 9
"""

SINGLE_ROW_TEXT = "1 5\n9 7 5 3 1\n"


@pytest.fixture
def classic_text() -> str:
    return CLASSIC_4X4_TEXT


@pytest.fixture
def spiral_text() -> str:
    return SPIRAL_5X5_TEXT


@pytest.fixture
def single_row_text() -> str:
    return SINGLE_ROW_TEXT


# =============================================================================
# GRIDS
# =============================================================================


@pytest.fixture
def classic_grid() -> Grid:
    """Classic 4x4 grid (see CLASSIC_4X4_TEXT)."""
    return Grid.from_rows(
        [
            [4, 8, 7, 3],
            [2, 5, 9, 3],
            [6, 3, 2, 5],
            [4, 4, 1, 6],
        ]
    )


@pytest.fixture
def spiral_grid() -> Grid:
    """5x5 spiral (see SPIRAL_5X5_TEXT)."""
    return Grid.from_rows(
        [
            [1, 2, 3, 4, 5],
            [16, 17, 18, 19, 6],
            [15, 24, 25, 20, 7],
            [14, 23, 22, 21, 8],
            [13, 12, 11, 10, 9],
        ]
    )


@pytest.fixture
def single_cell_grid() -> Grid:
    """1x1 grid: the only cell has no neighbors and is trivially a source."""
    return Grid.from_rows([[5]])


@pytest.fixture
def single_row_grid() -> Grid:
    """1x5 strictly decreasing row: one run of length 5, drop 8."""
    return Grid.from_rows([[9, 7, 5, 3, 1]])


@pytest.fixture
def flat_grid() -> Grid:
    """2x3 grid of equal elevations: no descent anywhere."""
    return Grid.from_rows([[4, 4, 4], [4, 4, 4]])


@pytest.fixture
def diamond_grid() -> Grid:
    """3x3 grid where 9 reaches 0 both directly and via a detour.

    Layout:
        9 8 7
        5 2 6
        1 0 3

    9 -> 5 -> 1 -> 0 is 4 cells. 9 -> 8 -> 7 -> 6 -> 3 -> 0 is 6 cells
    (9 -> 8 -> 7 -> 6 -> 2 -> 0 ties; 3 is relaxed first, so it wins).
    A plain first-discovery depth-first search reaches 0 through 5 and 1
    first and would only find 5-cell runs.
    """
    return Grid.from_rows([[9, 8, 7], [5, 2, 6], [1, 0, 3]])


@pytest.fixture
def write_map(tmp_path: Path):
    """Factory writing map text to a file and returning its path."""

    def _write(text: str, name: str = "map.txt") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write
