"""Map file loading.

Parses the plain-text map format:

    4 4
    4 8 7 3
    2 5 9 3
    6 3 2 5
    4 4 1 6

The first line holds the number of rows and columns, each following line
one row of integer elevations separated by whitespace.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Optional, Union

import numpy as np

from skirun_finder.constants import GridConfig
from skirun_finder.errors import MalformedInputError, MapFileError
from skirun_finder.model.grid import Grid

logger = logging.getLogger(__name__)


_INT64 = np.iinfo(np.int64)


def _parse_int(token: str, line_no: int, source: Optional[str]) -> int:
    try:
        value = int(token)
    except ValueError:
        raise MalformedInputError(f"'{token}' is not a valid integer", line=line_no, source=source) from None
    if not _INT64.min <= value <= _INT64.max:
        raise MalformedInputError(f"'{token}' is out of range", line=line_no, source=source)
    return value


def _parse_header(line: str, source: Optional[str]) -> tuple[int, int]:
    tokens = line.split()
    if len(tokens) < GridConfig.HEADER_TOKENS:
        raise MalformedInputError(
            f"header needs {GridConfig.HEADER_TOKENS} values (rows cols), got {len(tokens)}",
            line=1,
            source=source,
        )
    rows = _parse_int(tokens[0], 1, source)
    cols = _parse_int(tokens[1], 1, source)
    if rows <= 0 or cols <= 0:
        raise MalformedInputError(f"grid dimensions must be positive, got {rows}x{cols}", line=1, source=source)
    return rows, cols


def parse_grid(text: str, source: Optional[Union[str, Path]] = None) -> Grid:
    """Parse map text into a Grid.

    Args:
        text: Full map file content
        source: Path or label used in error messages

    Returns:
        Grid of the declared size.

    Raises:
        MalformedInputError: If the header or any row is missing, short, or not integral.
    """
    label = str(source) if source is not None else None
    lines = text.splitlines()
    if not lines:
        raise MalformedInputError("input is empty", line=1, source=label)

    rows, cols = _parse_header(lines[0], label)

    data_lines = lines[1:]
    if len(data_lines) < rows:
        raise MalformedInputError(
            f"expected {rows} data lines, got {len(data_lines)}",
            line=len(lines) + 1,
            source=label,
        )

    # Allocation waits until every row has proven its width.
    elevations: list[list[int]] = []
    for r, line in enumerate(data_lines[:rows]):
        line_no = r + 2
        tokens = line.split()
        if len(tokens) < cols:
            raise MalformedInputError(f"expected {cols} values, got {len(tokens)}", line=line_no, source=label)
        if len(tokens) > cols:
            logger.warning(f"Line {line_no}: ignoring {len(tokens) - cols} value(s) beyond column {cols}")
        elevations.append([_parse_int(token, line_no, label) for token in tokens[:cols]])

    extra = [line for line in data_lines[rows:] if line.strip()]
    if extra:
        logger.warning(f"Ignoring {len(extra)} non-empty line(s) after row {rows}")

    return Grid(np.array(elevations, dtype=np.int64))


def read_grid(path: Union[str, Path]) -> Grid:
    """Load a Grid from a map file.

    Args:
        path: Map file path

    Returns:
        Parsed Grid.

    Raises:
        MapFileError: If the file cannot be read.
        MalformedInputError: If the content is not a valid map.
    """
    path = Path(path)
    logger.info(f"Loading map from {path}...")
    start_time = time.time()

    try:
        text = path.read_text(encoding=GridConfig.ENCODING)
    except (OSError, UnicodeDecodeError) as e:
        raise MapFileError(path, str(e)) from e

    grid = parse_grid(text, source=path)

    elapsed = time.time() - start_time
    logger.info(f"Map loaded in {elapsed:.2f}s (shape: {grid.shape})")
    return grid
