"""Configuration constants for Ski Run Finder.

All configurable parameters are centralized here for easy tuning.

Classes:
    GridConfig: Map file parsing and neighbor enumeration
    RouteConfig: Best-route selection behavior
    ReportConfig: Output formatting
    CLIConfig: Command-line program name, usage and exit codes
    LogConfig: Logging format and default level
"""

import logging


class GridConfig:
    """Map file parsing and neighbor enumeration."""

    # First line of a map file: "<rows> <cols>"
    HEADER_TOKENS = 2
    ENCODING = "utf-8"

    # Orthogonal neighbor offsets as (d_row, d_col), enumerated in this order.
    # Order only decides which of several tied routes is discovered first.
    NEIGHBOR_OFFSETS = (
        (0, -1),  # west
        (1, 0),  # south
        (0, 1),  # east
        (-1, 0),  # north
    )


class RouteConfig:
    """Best-route selection behavior."""

    # False: keep the longest routes with the largest drop only.
    # True: keep every longest route regardless of drop.
    COLLECT_ALL_LONGEST_ROUTES = False


class ReportConfig:
    """Output formatting."""

    SEPARATOR = " -> "
    HEADER_TEMPLATE = "\nfound {count} route(s) with length {length}:\n"
    ROUTE_TEMPLATE = "steep {steepness}:\t{elevations}"
    EMPTY_MESSAGE = "\nno routes found\n"
    JSON_INDENT = 2


class CLIConfig:
    """Command-line program name, usage and exit codes."""

    PROG = "skirun-finder"
    USAGE = f"usage: {PROG} <mapfile>"

    EXIT_OK = 0
    EXIT_FAILURE = 1
    assert EXIT_OK != EXIT_FAILURE


class LogConfig:
    """Logging format and default level."""

    FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
    DEFAULT_LEVEL = logging.WARNING
    VERBOSE_LEVEL = logging.INFO
    DEBUG_LEVEL = logging.DEBUG
