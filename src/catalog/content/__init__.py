"""Content classes used to sort catalog-listed files."""
from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterable, List, Sequence

from ..document import FileRecord
from ..schema import CONTENT_GROUPS, MediaFileRef
from .base import ContentType, file_extension
from .media import FileContent, ImageContent, thumbnail_name

CONTENT_TYPES: Sequence[ContentType] = (
    ImageContent(),
    FileContent("audio", "mp3", "ogg", "oga"),
    FileContent("video", "mp4", "ogg", "ogv", "mov", "webm"),
    FileContent("transcriptions", "eaf", "trs", "ixt", "flextext"),
    FileContent("documents", "pdf"),
)


def classify(
    files: Iterable[FileRecord], folder: Path, content_types: Sequence[ContentType] = CONTENT_TYPES
) -> Dict[str, List[MediaFileRef]]:
    """Sort ``files`` into content groups, keeping catalog order within each group.

    A file may match more than one class (``ogg`` is audio and video); files
    matching none are left out.
    """

    groups: Dict[str, List[MediaFileRef]] = {group: [] for group in CONTENT_GROUPS}
    records = list(files)
    for content_type in content_types:
        for record in records:
            if not content_type.sniff(record.name):
                continue
            reference = content_type.reference(record, folder)
            if reference is not None:
                groups.setdefault(content_type.group, []).append(reference)
    return groups


__all__ = [
    "CONTENT_TYPES",
    "ContentType",
    "FileContent",
    "ImageContent",
    "classify",
    "file_extension",
    "thumbnail_name",
]
