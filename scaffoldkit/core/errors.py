"""
Structural errors raised by the source-mutation engine.

These are hard failures: the specific call aborts and the document it
was operating on is left exactly as it was.  File conflicts are NOT
errors; they are recorded as ``FileConflict`` data by the writer.
"""

from __future__ import annotations

from pathlib import Path


class ScaffoldError(Exception):
    """Base class for scaffolding failures."""


class MarkerNotFound(ScaffoldError):
    """A marker comment line could not be located in the document."""

    def __init__(self, marker: str, kind: str = ""):
        self.marker = marker
        self.kind = kind
        label = f"{kind} marker" if kind else "marker"
        super().__init__(f"{label} not found: {marker}")


class MarkerOrderInvalid(ScaffoldError):
    """The END marker does not come after the START marker."""

    def __init__(self, start: str, end: str):
        self.start = start
        self.end = end
        super().__init__(f"start marker {start} must come before end marker {end}")


class NoImportBlockFound(ScaffoldError):
    """Neither IMPORTS markers nor an ``import ( ... )`` block exist."""

    def __init__(self, import_path: str = ""):
        self.import_path = import_path
        super().__init__("no import block found")


class FileSystemError(ScaffoldError):
    """An OS-level read/write failure, with the failing path attached."""

    def __init__(self, path: Path | str, message: str):
        self.path = str(path)
        super().__init__(f"{message}: {self.path}")
