"""Descent graph construction.

Every cell gets an edge to each orthogonal neighbor that is strictly lower.
A cell is a source (a local summit) when none of its neighbors is as high
or higher. A cell is a peak when none of its neighbors is strictly higher;
runs are explored from peaks, which include every source.

Elevations strictly decrease along every edge, so the graph is acyclic.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

import numpy as np
from scipy.sparse import csr_matrix

from skirun_finder.constants import GridConfig
from skirun_finder.model.cell import Cell
from skirun_finder.model.grid import Grid

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DescentEdge:
    """Directed step from a cell to a strictly lower orthogonal neighbor.

    Attributes:
        source: Upper cell
        target: Lower neighbor
    """

    source: Cell
    target: Cell

    @property
    def drop(self) -> int:
        """Elevation lost along the edge (always > 0)."""
        return self.source.elevation - self.target.elevation


def _any_neighbor(elevations: np.ndarray, compare: Callable[[np.ndarray, np.ndarray], np.ndarray]) -> np.ndarray:
    """True where compare(neighbor, cell) holds for at least one orthogonal neighbor."""
    hit = np.zeros(elevations.shape, dtype=bool)
    hit[:, 1:] |= compare(elevations[:, :-1], elevations[:, 1:])  # west neighbor
    hit[:-1, :] |= compare(elevations[1:, :], elevations[:-1, :])  # south neighbor
    hit[:, :-1] |= compare(elevations[:, 1:], elevations[:, :-1])  # east neighbor
    hit[1:, :] |= compare(elevations[:-1, :], elevations[1:, :])  # north neighbor
    return hit


def compute_source_mask(elevations: np.ndarray) -> np.ndarray:
    """Boolean mask of cells with no orthogonal neighbor at equal or greater elevation.

    Args:
        elevations: 2D elevation array

    Returns:
        Boolean array of the same shape, True for sources.
    """
    return ~_any_neighbor(elevations, np.greater_equal)


def compute_peak_mask(elevations: np.ndarray) -> np.ndarray:
    """Boolean mask of cells with no strictly higher orthogonal neighbor.

    Peaks have no incoming descent edge, so every maximal run starts on one.
    Cells on a level summit plateau are peaks but not sources.
    """
    return ~_any_neighbor(elevations, np.greater)


class DescentGraph:
    """Descent edges, source flags and peak flags for every cell of a grid.

    Built once from a Grid and never mutated.

    Example:
        graph = DescentGraph.build(grid)
        for peak in graph.peaks():
            graph.edges(peak)
    """

    def __init__(
        self,
        grid: Grid,
        edges: dict[Cell, list[DescentEdge]],
        source_mask: np.ndarray,
        peak_mask: np.ndarray,
    ) -> None:
        self._grid = grid
        self._edges = edges
        self._source_mask = source_mask
        self._peak_mask = peak_mask
        self._source_mask.setflags(write=False)
        self._peak_mask.setflags(write=False)

    @classmethod
    def build(cls, grid: Grid) -> "DescentGraph":
        """Build the descent graph of a grid.

        Neighbors are enumerated in GridConfig.NEIGHBOR_OFFSETS order
        (west, south, east, north); edge lists keep that order.
        """
        elevations = grid.elevations
        edges: dict[Cell, list[DescentEdge]] = {}

        for cell in grid:
            outgoing = []
            for d_row, d_col in GridConfig.NEIGHBOR_OFFSETS:
                row, col = cell.row + d_row, cell.col + d_col
                if not grid.contains(row, col):
                    continue
                if elevations[row, col] < cell.elevation:
                    outgoing.append(DescentEdge(source=cell, target=grid.cell(row, col)))
            edges[cell] = outgoing

        graph = cls(
            grid=grid,
            edges=edges,
            source_mask=compute_source_mask(elevations),
            peak_mask=compute_peak_mask(elevations),
        )
        logger.info(
            f"Descent graph built: {graph.edge_count} edges, "
            f"{graph.source_count} sources, {graph.peak_count} peaks"
        )
        return graph

    @property
    def grid(self) -> Grid:
        return self._grid

    @property
    def source_mask(self) -> np.ndarray:
        """Read-only boolean array, True where the cell is a source."""
        return self._source_mask

    @property
    def peak_mask(self) -> np.ndarray:
        """Read-only boolean array, True where the cell is a peak."""
        return self._peak_mask

    @property
    def edge_count(self) -> int:
        return sum(len(out) for out in self._edges.values())

    @property
    def source_count(self) -> int:
        return int(self._source_mask.sum())

    @property
    def peak_count(self) -> int:
        return int(self._peak_mask.sum())

    def edges(self, cell: Cell) -> list[DescentEdge]:
        """Outgoing descent edges of a cell, in neighbor enumeration order."""
        return list(self._edges[cell])

    def neighbors_below(self, cell: Cell) -> list[Cell]:
        return [edge.target for edge in self._edges[cell]]

    def is_source(self, cell: Cell) -> bool:
        return bool(self._source_mask[cell.row, cell.col])

    def is_peak(self, cell: Cell) -> bool:
        return bool(self._peak_mask[cell.row, cell.col])

    def sources(self) -> list[Cell]:
        """All sources in row-major order."""
        return [cell for cell in self._grid if self.is_source(cell)]

    def peaks(self) -> list[Cell]:
        """All peaks in row-major order."""
        return [cell for cell in self._grid if self.is_peak(cell)]

    def to_csgraph(self) -> csr_matrix:
        """Sparse adjacency matrix over row-major cell indices.

        Entry (i, j) holds the drop from cell i to cell j. Column order within
        each row follows the edge enumeration order, so traversals over the
        matrix visit neighbors in the same order as edges().
        """
        grid = self._grid
        indptr = [0]
        indices: list[int] = []
        data: list[int] = []
        for cell in grid:
            for edge in self._edges[cell]:
                indices.append(grid.flat_index(edge.target))
                data.append(edge.drop)
            indptr.append(len(indices))

        return csr_matrix(
            (
                np.array(data, dtype=np.float64),
                np.array(indices, dtype=np.int32),
                np.array(indptr, dtype=np.int32),
            ),
            shape=(grid.size, grid.size),
        )
