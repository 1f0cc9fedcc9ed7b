"""Error hierarchy for Ski Run Finder.

Library code raises these; only the command-line entry point turns them
into messages and exit codes.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union


class SkiRunError(Exception):
    """Base error for ski run finding."""


class UsageError(SkiRunError):
    """Wrong command-line arguments. Shown as the usage message only."""


class MapFileError(SkiRunError):
    """Map file missing or unreadable.

    Attributes:
        path: Path of the offending file
    """

    def __init__(self, path: Union[str, Path], reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"cannot read '{self.path}': {reason}")


class MalformedInputError(SkiRunError):
    """Map text has a bad header, a short row, or a non-integer token.

    Attributes:
        reason: Description of what is wrong
        line: 1-based line number, if known
        source: Path or label of the input, if known
    """

    def __init__(
        self,
        reason: str,
        line: Optional[int] = None,
        source: Optional[Union[str, Path]] = None,
    ) -> None:
        self.reason = reason
        self.line = line
        self.source = str(source) if source is not None else None
        super().__init__(self._format())

    def _format(self) -> str:
        location = ""
        if self.source is not None:
            location = self.source
        if self.line is not None:
            location = f"{location}:{self.line}" if location else f"line {self.line}"
        return f"{location}: {self.reason}" if location else self.reason
