"""Grid - Read-only rectangular elevation grid.

Wraps a 2D NumPy array of integer elevations and hands out Cells.
The array is made read-only on construction; dimensions never change.
"""

from __future__ import annotations

from typing import Iterator, Sequence

import numpy as np

from skirun_finder.errors import MalformedInputError
from skirun_finder.model.cell import Cell


class Grid:
    """Fixed-size 2D collection of Cells backed by a NumPy array.

    Cells are created once up front so that every lookup of a position
    returns the same Cell instance.

    Example:
        grid = Grid.from_rows([[9, 7], [8, 1]])
        grid.cell(1, 0).elevation  # 8
    """

    def __init__(self, elevations: np.ndarray) -> None:
        """Initialize grid.

        Args:
            elevations: 2D integer array of shape (rows, cols), both > 0

        Raises:
            MalformedInputError: If the array is not 2D, is empty, or is not integral.
        """
        array = np.asarray(elevations)
        if array.ndim != 2:
            raise MalformedInputError(f"grid must be 2-dimensional, got {array.ndim} dimension(s)")
        if array.shape[0] == 0 or array.shape[1] == 0:
            raise MalformedInputError(f"grid must not be empty, got shape {array.shape}")
        if not np.issubdtype(array.dtype, np.integer):
            raise MalformedInputError(f"grid elevations must be integers, got dtype {array.dtype}")

        self._elevations = array.astype(np.int64, copy=True)
        self._elevations.setflags(write=False)
        self._cells: list[list[Cell]] = [
            [Cell(row=r, col=c, elevation=int(self._elevations[r, c])) for c in range(self.cols)]
            for r in range(self.rows)
        ]

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]]) -> "Grid":
        """Create Grid from nested sequences of elevations.

        Raises:
            MalformedInputError: If rows have different lengths.
        """
        widths = {len(row) for row in rows}
        if len(widths) > 1:
            raise MalformedInputError(f"grid rows have different lengths: {sorted(widths)}")
        return cls(np.array(rows, dtype=np.int64))

    @classmethod
    def from_array(cls, array: np.ndarray) -> "Grid":
        return cls(array)

    @property
    def elevations(self) -> np.ndarray:
        """Read-only elevation array of shape (rows, cols)."""
        return self._elevations

    @property
    def shape(self) -> tuple[int, int]:
        return (int(self._elevations.shape[0]), int(self._elevations.shape[1]))

    @property
    def rows(self) -> int:
        return self.shape[0]

    @property
    def cols(self) -> int:
        return self.shape[1]

    @property
    def size(self) -> int:
        """Number of cells (rows * cols)."""
        return self.rows * self.cols

    def contains(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def cell(self, row: int, col: int) -> Cell:
        """Return the Cell at (row, col).

        Raises:
            IndexError: If the position is outside the grid.
        """
        if not self.contains(row, col):
            raise IndexError(f"({row}, {col}) outside grid of shape {self.shape}")
        return self._cells[row][col]

    def flat_index(self, cell: Cell) -> int:
        """Row-major index of a cell, used as its node id in sparse graphs."""
        return cell.row * self.cols + cell.col

    def cell_at(self, index: int) -> Cell:
        """Inverse of flat_index()."""
        row, col = divmod(int(index), self.cols)
        return self.cell(row, col)

    def __iter__(self) -> Iterator[Cell]:
        """Iterate cells in row-major order."""
        for row in self._cells:
            yield from row

    def __len__(self) -> int:
        return self.size

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return bool(np.array_equal(self._elevations, other._elevations))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Grid({self.rows}x{self.cols})"
