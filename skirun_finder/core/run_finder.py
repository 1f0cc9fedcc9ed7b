"""Ski run finding pipeline.

Grid -> DescentGraph -> PathExplorer -> RouteReducer -> BestRoutes

Finds the longest strictly descending runs over orthogonal steps and,
among those, the ones with the largest total drop.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Union

from skirun_finder.constants import RouteConfig
from skirun_finder.core.descent_graph import DescentGraph
from skirun_finder.core.grid_loader import read_grid
from skirun_finder.core.path_explorer import PathExplorer
from skirun_finder.core.route_reducer import RouteReducer
from skirun_finder.model.best_routes import BestRoutes
from skirun_finder.model.grid import Grid

logger = logging.getLogger(__name__)


class RunFinder:
    """Finds the best ski runs on an elevation grid.

    The algorithm works by:
    1. Building the descent graph (edges to strictly lower neighbors, peak flags)
    2. Building a longest-chain tree from every peak
    3. Turning every chain, and every peak on its own, into a candidate route
    4. Keeping the longest candidates, then the steepest among them
    """

    def __init__(self, collect_all_longest: bool = RouteConfig.COLLECT_ALL_LONGEST_ROUTES) -> None:
        """Initialize finder.

        Args:
            collect_all_longest: Keep every longest route regardless of steepness
        """
        self.collect_all_longest = collect_all_longest

    def find(self, grid: Grid) -> BestRoutes:
        """Run the full search on a grid.

        Args:
            grid: Elevation grid

        Returns:
            BestRoutes holding every winning route.
        """
        start_time = time.time()

        graph = DescentGraph.build(grid)
        explorer = PathExplorer(graph)
        reducer = RouteReducer(best=BestRoutes(collect_all_longest=self.collect_all_longest))

        traversals = 0
        for peak, parents in explorer.explore_all():
            reducer.reduce(peak, parents)
            traversals += 1

        best = reducer.best
        best.check_invariant()

        elapsed = time.time() - start_time
        logger.info(
            f"Search finished in {elapsed:.2f}s: {traversals} traversal(s), "
            f"{reducer.candidates} candidate(s), {len(best)} best route(s) "
            f"with length {best.length} and steepness {best.steepness}"
        )
        return best


def find_best_runs(
    path: Union[str, Path],
    collect_all_longest: bool = RouteConfig.COLLECT_ALL_LONGEST_ROUTES,
) -> BestRoutes:
    """Load a map file and find its best runs.

    Raises:
        MapFileError: If the file cannot be read.
        MalformedInputError: If the file is not a valid map.
    """
    grid = read_grid(path)
    return RunFinder(collect_all_longest=collect_all_longest).find(grid)
