"""Concrete content classes for catalog-listed files."""
from __future__ import annotations

from pathlib import Path, PurePosixPath
from typing import Optional

from ..document import FileRecord
from ..schema import MediaFileRef
from .base import ContentType

THUMBNAIL_MARKER = "thumb"
THUMBNAIL_SUFFIX = "-thumb-PDSC_ADMIN"


def thumbnail_name(name: str) -> str:
    """``IMG001.jpg`` -> ``IMG001-thumb-PDSC_ADMIN.jpg``."""

    stem, dot, extension = PurePosixPath(name).name.partition(".")
    return f"{stem}{THUMBNAIL_SUFFIX}{dot}{extension}"


class FileContent(ContentType):
    """Content indexed as a plain reference to the listed file."""

    def __init__(self, group: str, *extensions: str) -> None:
        self.group = group
        self.extensions = extensions

    def reference(self, record: FileRecord, folder: Path) -> Optional[MediaFileRef]:
        return MediaFileRef(
            name=record.name,
            path=self.source_path(record, folder),
            type=record.mime_type,
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.group!r})"


class ImageContent(FileContent):
    """Images carry a derived thumbnail; declared thumbnails are not indexed."""

    def __init__(self) -> None:
        super().__init__("images", "jpg", "jpeg", "png")

    def reference(self, record: FileRecord, folder: Path) -> Optional[MediaFileRef]:
        if THUMBNAIL_MARKER in record.name:
            return None
        path = self.source_path(record, folder)
        return MediaFileRef(
            name=record.name,
            path=path,
            type=record.mime_type,
            thumbnail=str(PurePosixPath(path).parent / thumbnail_name(path)),
        )
