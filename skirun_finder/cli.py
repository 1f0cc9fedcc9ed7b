"""Ski Run Finder - Command-line entry point.

Finds the longest, then steepest, ski run on an elevation map file.

Run: skirun-finder <mapfile> [--all-longest] [--json] [-v]
  or python -m skirun_finder <mapfile>

Exit codes:
    0: Report printed, or usage shown for wrong arguments
    1: Map file unreadable or malformed
"""

import argparse
import logging
import sys
from typing import Optional, Sequence

from skirun_finder.constants import CLIConfig, LogConfig
from skirun_finder.core.run_finder import find_best_runs
from skirun_finder.errors import MalformedInputError, MapFileError, UsageError
from skirun_finder.report import format_json, format_text

logger = logging.getLogger(__name__)


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises UsageError instead of exiting."""

    def error(self, message: str) -> None:  # type: ignore[override]
        raise UsageError(message)


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog=CLIConfig.PROG,
        description="Find the longest, then steepest, descending ski run on an elevation map.",
    )
    parser.add_argument("mapfiles", nargs="*", metavar="mapfile", help="map file: 'rows cols' header, then rows")
    parser.add_argument(
        "--all-longest",
        action="store_true",
        help="report every longest run, not only the steepest ones",
    )
    parser.add_argument("--json", action="store_true", help="print the result as JSON")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="log progress (-vv for debug)")
    return parser


def configure_logging(verbosity: int) -> None:
    if verbosity >= 2:
        level = LogConfig.DEBUG_LEVEL
    elif verbosity == 1:
        level = LogConfig.VERBOSE_LEVEL
    else:
        level = LogConfig.DEFAULT_LEVEL
    logging.basicConfig(level=level, format=LogConfig.FORMAT, stream=sys.stderr)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the command line.

    Args:
        argv: Arguments without the program name (defaults to sys.argv[1:])

    Returns:
        Process exit code.
    """
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
        if len(args.mapfiles) != 1:
            raise UsageError(f"expected 1 map file, got {len(args.mapfiles)}")
    except UsageError as e:
        logger.debug(f"Usage error: {e}")
        print(CLIConfig.USAGE)
        return CLIConfig.EXIT_OK

    configure_logging(args.verbose)
    map_file = args.mapfiles[0]

    try:
        best = find_best_runs(map_file, collect_all_longest=args.all_longest)
    except (MapFileError, MalformedInputError) as e:
        logger.debug(f"Failed to process {map_file}: {e!r}")
        print(f"error processing file '{map_file}': {e}", file=sys.stderr)
        return CLIConfig.EXIT_FAILURE

    print(format_json(best) if args.json else format_text(best))
    return CLIConfig.EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
