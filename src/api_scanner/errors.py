"""Errors raised by a scan.

Only these ever reach the caller of ``scan``; per-file and per-field
problems are logged and skipped.
"""

from pathlib import Path


class ScanError(Exception):
    """The scan could not be completed."""


class ScanPathNotFoundError(ScanError):
    """The scan root does not exist."""

    def __init__(self, path: Path | str):
        self.path = Path(path)
        super().__init__(f"Path '{path}' does not exist")
