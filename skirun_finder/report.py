"""Formatting of the winning routes.

Text layout:

    found 2 route(s) with length 5:

    steep 8:	9 -> 5 -> 3 -> 2 -> 1
    steep 8:	9 -> 7 -> 5 -> 3 -> 1

Elevations are listed from top to bottom regardless of how the route was
discovered.
"""

import json

from skirun_finder.constants import ReportConfig
from skirun_finder.model.best_routes import BestRoutes
from skirun_finder.model.route import Route


def format_route(route: Route, separator: str = ReportConfig.SEPARATOR) -> str:
    """One report line: steepness and elevations in descending order."""
    elevations = separator.join(str(elevation) for elevation in route.descending_elevations)
    return ReportConfig.ROUTE_TEMPLATE.format(steepness=route.steepness, elevations=elevations)


def format_text(best: BestRoutes) -> str:
    """Full text report: header line followed by one line per route."""
    if best.is_empty:
        return ReportConfig.EMPTY_MESSAGE

    lines = [ReportConfig.HEADER_TEMPLATE.format(count=len(best), length=best.length)]
    lines.extend(format_route(route) for route in best)
    return "\n".join(lines) + "\n"


def format_json(best: BestRoutes) -> str:
    return json.dumps(best.to_dict(), indent=ReportConfig.JSON_INDENT)
