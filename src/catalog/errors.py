"""Exception taxonomy for indexing and installation."""
from __future__ import annotations

from pathlib import Path
from typing import Optional


class ArchiveLoaderError(Exception):
    """Base class for every error raised by the loader."""


class StructuralError(ArchiveLoaderError):
    """A scanned folder holds more than one catalog file."""

    def __init__(self, folder: Path) -> None:
        self.folder = folder
        super().__init__(f"{folder} has more than one catalog file.")


class ExtractionError(ArchiveLoaderError):
    """A catalog file could not be read, parsed or yields no files."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Unable to extract {path}: {reason}")


class MissingSourceFileError(ArchiveLoaderError):
    """A file referenced by an indexed item is absent at copy time."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Missing source file: {path}")


class FatalPreconditionError(ArchiveLoaderError):
    """The run cannot continue: target not preparable or nothing to install."""

    def __init__(self, message: str, *, cause: Optional[BaseException] = None) -> None:
        self.cause = cause
        super().__init__(message)
