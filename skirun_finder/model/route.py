"""Route - A descending ski run through the grid.

Cells are stored in reconstruction order: the lowest cell (where the run
ends) first, the source it started from last. Length and steepness are
computed once at construction.
"""

from dataclasses import dataclass, field
from typing import Any, Iterator, Sequence

from skirun_finder.model.cell import Cell


@dataclass(frozen=True)
class Route:
    """An ordered run of cells with its length and steepness.

    Attributes:
        cells: Cells in reconstruction order (leaf first, source last)
        length: Number of cells in the run
        steepness: elevation(last) - elevation(first), i.e. the total drop

    Example:
        route = Route.from_cells([Cell(0, 1, 3), Cell(0, 0, 9)])
        route.length     # 2
        route.steepness  # 6
    """

    cells: tuple[Cell, ...]
    length: int = field(init=False)
    steepness: int = field(init=False)

    def __post_init__(self) -> None:
        """Validate cells and derive metrics."""
        if not self.cells:
            raise ValueError("Route must contain at least one cell")
        object.__setattr__(self, "length", len(self.cells))
        object.__setattr__(self, "steepness", self.cells[-1].elevation - self.cells[0].elevation)

    @classmethod
    def from_cells(cls, cells: Sequence[Cell]) -> "Route":
        return cls(cells=tuple(cells))

    @classmethod
    def single(cls, cell: Cell) -> "Route":
        """One-cell route: length 1, steepness 0."""
        return cls(cells=(cell,))

    @property
    def start(self) -> Cell:
        """Top of the run (the source)."""
        return self.cells[-1]

    @property
    def end(self) -> Cell:
        """Bottom of the run."""
        return self.cells[0]

    @property
    def elevations(self) -> list[int]:
        """Elevations in stored order."""
        return [cell.elevation for cell in self.cells]

    @property
    def descending_elevations(self) -> list[int]:
        """Elevations sorted from top to bottom."""
        return sorted(self.elevations, reverse=True)

    def __iter__(self) -> Iterator[Cell]:
        return iter(self.cells)

    def __len__(self) -> int:
        return self.length

    def to_dict(self) -> dict[str, Any]:
        """Serialize route to dictionary."""
        return {
            "length": self.length,
            "steepness": self.steepness,
            "elevations": self.descending_elevations,
            "cells": [cell.to_dict() for cell in reversed(self.cells)],
        }

    def __repr__(self) -> str:
        return f"Route(length={self.length}, steepness={self.steepness}, {self.start!r} -> {self.end!r})"
