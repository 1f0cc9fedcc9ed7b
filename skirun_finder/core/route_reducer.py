"""Route reduction.

Turns each traversal tree into candidate routes and folds them into the
best-set. Every cell reached in a traversal ends one candidate: the chain
of parent links from that cell back to the root. The root on its own is
one more candidate, a run of a single cell.
"""

from __future__ import annotations

import logging
from typing import Iterator, Optional

from skirun_finder.core.path_explorer import ParentMap
from skirun_finder.model.best_routes import BestRoutes
from skirun_finder.model.cell import Cell
from skirun_finder.model.route import Route

logger = logging.getLogger(__name__)


def reconstruct_route(leaf: Cell, parents: ParentMap) -> Route:
    """Follow parent links from leaf to the root.

    Args:
        leaf: Cell the run ends at
        parents: Traversal tree

    Returns:
        Route in reconstruction order (leaf first, root last).
    """
    chain = [leaf]
    node = leaf
    while node in parents:
        node = parents[node]
        chain.append(node)
        assert len(chain) <= len(parents) + 1, "parent links form a cycle"
    return Route.from_cells(chain)


def candidate_routes(parents: ParentMap) -> Iterator[Route]:
    """One candidate per reached non-root cell, in map order."""
    for leaf in parents:
        yield reconstruct_route(leaf, parents)


def chain_lengths(parents: ParentMap) -> dict[Cell, int]:
    """Number of cells on each leaf-to-root chain without building the chains.

    Relies on every parent appearing as a key before its children, which
    PathExplorer guarantees.
    """
    lengths: dict[Cell, int] = {}
    for child, parent in parents.items():
        lengths[child] = lengths.get(parent, 1) + 1
    return lengths


class RouteReducer:
    """Folds candidate routes from traversal trees into a BestRoutes set.

    Chains shorter than the current best length can never be kept, so they
    are skipped before reconstruction.

    Example:
        reducer = RouteReducer()
        for peak, parents in explorer.explore_all():
            reducer.reduce(peak, parents)
        reducer.best.routes
    """

    def __init__(self, best: Optional[BestRoutes] = None) -> None:
        self.best = best if best is not None else BestRoutes()
        self.candidates = 0

    def reduce(self, root: Cell, parents: ParentMap) -> int:
        """Fold the root's one-cell run and every chain of one traversal tree.

        Args:
            root: Root of the traversal
            parents: Traversal tree from PathExplorer.explore(root)

        Returns:
            Number of candidates kept at the time they were offered.
        """
        self.candidates += 1
        kept = int(self.best.offer(Route.single(root)))

        lengths = chain_lengths(parents)
        for leaf in parents:
            self.candidates += 1
            if lengths[leaf] < self.best.length:
                continue
            route = reconstruct_route(leaf, parents)
            assert route.length == lengths[leaf]
            assert route.start == root, "chain must end at the traversal root"
            if self.best.offer(route):
                kept += 1
        logger.debug(f"Reduced tree of {root!r}: {len(parents) + 1} candidate(s), {kept} kept")
        return kept
