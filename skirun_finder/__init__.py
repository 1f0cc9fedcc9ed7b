"""Ski Run Finder - Find the best ski run on an elevation grid.

A run moves between orthogonally adjacent cells and must go strictly
downhill at every step. The best runs are the longest ones and, among
those, the ones with the largest total drop.

Modules:
    model: Data structures (Cell, Grid, Route, BestRoutes)
    core: Search algorithm (grid loading, descent graph, exploration, reduction)
    report: Text and JSON output
    cli: Command-line entry point

Example:
    from skirun_finder.core import RunFinder, parse_grid

    best = RunFinder().find(parse_grid("1 5\\n9 7 5 3 1\\n"))
"""
