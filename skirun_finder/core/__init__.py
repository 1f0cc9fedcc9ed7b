"""Core search algorithm for ski run finding.

- grid_loader: Map file parsing (parse_grid, read_grid)
- DescentGraph: Edges to strictly lower neighbors, source and peak flags
- PathExplorer: Longest-chain trees from every peak
- RouteReducer: Candidate routes folded into the best-set
- RunFinder: The full pipeline
"""

from skirun_finder.core.descent_graph import (
    DescentEdge,
    DescentGraph,
    compute_peak_mask,
    compute_source_mask,
)
from skirun_finder.core.grid_loader import parse_grid, read_grid
from skirun_finder.core.path_explorer import ParentMap, PathExplorer
from skirun_finder.core.route_reducer import (
    RouteReducer,
    candidate_routes,
    chain_lengths,
    reconstruct_route,
)
from skirun_finder.core.run_finder import RunFinder, find_best_runs

__all__ = [
    # Loading
    "parse_grid",
    "read_grid",
    # Descent graph
    "DescentEdge",
    "DescentGraph",
    "compute_peak_mask",
    "compute_source_mask",
    # Exploration
    "ParentMap",
    "PathExplorer",
    # Reduction
    "RouteReducer",
    "candidate_routes",
    "chain_lengths",
    "reconstruct_route",
    # Pipeline
    "RunFinder",
    "find_best_runs",
]
