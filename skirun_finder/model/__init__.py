"""Data model classes for ski run finding.

- Cell: Geometry atom (row, col, elevation), identity by position
- Grid: Read-only elevation grid owning all Cells
- Route: Ordered descending run with length and steepness
- BestRoutes: Accumulator of the longest-then-steepest routes
"""

from skirun_finder.model.best_routes import BestRoutes
from skirun_finder.model.cell import Cell
from skirun_finder.model.grid import Grid
from skirun_finder.model.route import Route

__all__ = [
    "Cell",
    "Grid",
    "Route",
    "BestRoutes",
]
