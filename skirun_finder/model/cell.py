"""Cell - The geometry atom of an elevation grid.

A Cell is a single grid position with its elevation.
Identity is positional: two cells at the same (row, col) are the same cell,
whatever elevation they were built with.

Used by:
- Grid (owns one Cell per position)
- DescentGraph (edges between cells)
- Route (ordered cells of a ski run)
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Cell:
    """A grid position with its elevation.

    Attributes:
        row: 0-based row index
        col: 0-based column index
        elevation: Integer elevation at this position

    Example:
        cell = Cell(row=2, col=3, elevation=25)
        print(cell.position)  # (2, 3)
    """

    row: int
    col: int
    elevation: int = field(compare=False)

    @property
    def position(self) -> tuple[int, int]:
        """Return (row, col) tuple - the identity key."""
        return (self.row, self.col)

    def is_adjacent_to(self, other: "Cell") -> bool:
        """Check whether other is one of the four orthogonal neighbors."""
        return abs(self.row - other.row) + abs(self.col - other.col) == 1

    def __lt__(self, other: "Cell") -> bool:
        """Row-major ordering for sorting and debugging."""
        return self.position < other.position

    def to_dict(self) -> dict[str, Any]:
        return {"row": self.row, "col": self.col, "elevation": self.elevation}

    def __repr__(self) -> str:
        return f"Cell(({self.row}, {self.col}), elev={self.elevation})"
