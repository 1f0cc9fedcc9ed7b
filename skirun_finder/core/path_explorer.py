"""Exploration of the descent graph from each peak.

Each peak is the root of one traversal. The traversal records, for every
cell reachable from the root, one parent: the neighbor above it through
which the chain back to the root is longest. Ties keep the parent found
first. The result is a tree rooted at the peak in which every chain from a
cell back to the root is a longest descent between the two.

Reachability is an explicit-stack depth-first search over the CSR adjacency
of the descent graph. It only touches the cells a root reaches, and deep
runs do not hit Python's recursion limit. Parents are then assigned
in order of decreasing elevation, which is a topological order of the
descent graph.
"""

from __future__ import annotations

import logging
from typing import Iterator

import numpy as np

from skirun_finder.core.descent_graph import DescentGraph
from skirun_finder.model.cell import Cell

logger = logging.getLogger(__name__)

# Reached cell -> cell above it on the longest chain from the root.
# Keys are ordered so that a cell's parent always comes before the cell.
ParentMap = dict[Cell, Cell]


class PathExplorer:
    """Builds one ParentMap per peak of a descent graph.

    Example:
        explorer = PathExplorer(graph)
        for peak, parents in explorer.explore_all():
            ...
    """

    def __init__(self, graph: DescentGraph) -> None:
        """Initialize explorer.

        Args:
            graph: Descent graph to traverse
        """
        self._graph = graph
        csgraph = graph.to_csgraph()
        self._indptr: list[int] = csgraph.indptr.tolist()
        self._indices: list[int] = csgraph.indices.tolist()
        self._flat_elevations = graph.grid.elevations.ravel()

    @property
    def graph(self) -> DescentGraph:
        return self._graph

    def reachable(self, root: Cell) -> list[Cell]:
        """Cells reachable from root (root included), highest first.

        Cells of equal elevation keep depth-first discovery order.
        """
        grid = self._graph.grid
        order = np.array(self._preorder(grid.flat_index(root)), dtype=np.int64)
        ranked = order[np.argsort(-self._flat_elevations[order], kind="stable")]
        return [grid.cell_at(index) for index in ranked]

    def _preorder(self, start: int) -> list[int]:
        """Depth-first preorder of the node ids reachable from start.

        Children are taken in CSR column order, matching edges(). The visited
        set is local to this call.
        """
        indptr, indices = self._indptr, self._indices
        order = [start]
        visited = {start}
        stack = [(start, indptr[start])]
        while stack:
            node, ptr = stack[-1]
            end = indptr[node + 1]
            while ptr < end and indices[ptr] in visited:
                ptr += 1
            if ptr == end:
                stack.pop()
                continue
            child = indices[ptr]
            stack[-1] = (node, ptr + 1)
            visited.add(child)
            order.append(child)
            stack.append((child, indptr[child]))
        return order

    def explore(self, root: Cell) -> ParentMap:
        """Build the longest-chain tree of a single root.

        Args:
            root: Start cell (normally a peak)

        Returns:
            ParentMap of every cell reached, excluding the root itself.
        """
        cells = self.reachable(root)
        assert cells[0] == root, "root must be the highest reachable cell"

        chain_length = {root: 1}
        parent_of: dict[Cell, Cell] = {}
        for cell in cells:
            length = chain_length[cell] + 1
            for below in self._graph.neighbors_below(cell):
                if length > chain_length.get(below, 0):
                    chain_length[below] = length
                    parent_of[below] = cell

        # Re-key in elevation order so parents precede children.
        parents: ParentMap = {cell: parent_of[cell] for cell in cells[1:]}
        assert root not in parents, "traversal root must not have a parent"
        return parents

    def explore_all(self) -> Iterator[tuple[Cell, ParentMap]]:
        """Traverse from every peak in row-major order.

        Yields:
            (peak, ParentMap) pairs, one per peak. Each map is fresh.
        """
        for peak in self._graph.peaks():
            parents = self.explore(peak)
            logger.debug(f"Explored from {peak!r}: {len(parents)} cell(s) reached")
            yield peak, parents
