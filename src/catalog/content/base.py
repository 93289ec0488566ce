"""Base class for the content classes files are sorted into."""
from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable, Optional

from ..document import FileRecord
from ..schema import MediaFileRef


def file_extension(name: str) -> str:
    """Return the lower-cased text after the first ``.`` of ``name``."""

    return name.partition(".")[2].lower()


class ContentType(ABC):
    """A named group of files recognised by extension."""

    group: str = ""
    extensions: Iterable[str] = ()

    def sniff(self, name: str) -> bool:
        """Return ``True`` if ``name`` belongs to this content class."""

        return file_extension(name) in {ext.lower() for ext in self.extensions}

    def source_path(self, record: FileRecord, folder: Path) -> str:
        return (folder / record.name).as_posix()

    @abstractmethod
    def reference(self, record: FileRecord, folder: Path) -> Optional[MediaFileRef]:
        """Return the reference to index for ``record`` or ``None`` to leave it out."""
