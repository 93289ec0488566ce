"""Pydantic models describing archive items, collections and the JSON index."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Iterable, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

MessageLevel = Literal["info", "error", "complete"]

# Content groups in the order they are copied and rendered.
CONTENT_GROUPS = ("images", "audio", "video", "transcriptions", "documents")
# Groups counted in ``Item.elements``; transcriptions are not.
ELEMENT_GROUPS = ("documents", "images", "audio", "video")


class ArchiveModel(BaseModel):
    """Base model serialising to the camelCase keys of ``index.json``."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def as_record(self) -> Dict[str, Any]:
        """Return a JSON-serialisable mapping; unset optional fields are omitted."""

        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class ScanEntry(BaseModel):
    """A folder holding exactly one catalog XML file."""

    model_config = ConfigDict(frozen=True)

    folder: Path
    file: str

    @property
    def catalog_path(self) -> Path:
        return self.folder / self.file


class LoadMessage(BaseModel):
    """A non-fatal message surfaced on the progress/log channel."""

    message: str
    level: MessageLevel = "info"


class Person(ArchiveModel):
    role: str = ""
    name: str


class Classification(ArchiveModel):
    name: str
    value: str = ""


class MediaFileRef(ArchiveModel):
    """A file listed in a catalog; ``path`` is a source path until installed."""

    name: str
    path: str
    type: Optional[str] = None
    thumbnail: Optional[str] = None


class Item(ArchiveModel):
    """One archival record with its classified content files."""

    collection_id: str
    item_id: str
    citation: str = ""
    identifier: List[str] = Field(default_factory=list)
    date: str = ""
    description: str = ""
    title: str = ""
    region: str = ""
    open_access: bool = False
    rights: str = ""
    collection_link: str = ""
    images: List[MediaFileRef] = Field(default_factory=list)
    audio: List[MediaFileRef] = Field(default_factory=list)
    video: List[MediaFileRef] = Field(default_factory=list)
    documents: List[MediaFileRef] = Field(default_factory=list)
    transcriptions: List[MediaFileRef] = Field(default_factory=list)
    people: List[Person] = Field(default_factory=list)
    classifications: List[Classification] = Field(default_factory=list)
    languages: List[str] = Field(default_factory=list)
    categories: List[str] = Field(default_factory=list)
    elements: int = Field(default=0, ge=0)

    @property
    def key(self) -> str:
        return f"{self.collection_id}-{self.item_id}"

    @property
    def label(self) -> str:
        return f"{self.collection_id}/{self.item_id}"

    def count_elements(self) -> int:
        return sum(len(getattr(self, group)) for group in ELEMENT_GROUPS)


class Collection(ArchiveModel):
    """Items sharing a collection identifier, with unioned filter fields."""

    collection_id: str
    title: str = ""
    description: str = ""
    collection_link: str = ""
    items: List[str] = Field(default_factory=list)
    people: List[Person] = Field(default_factory=list)
    classifications: List[Classification] = Field(default_factory=list)
    categories: List[str] = Field(default_factory=list)
    languages: List[str] = Field(default_factory=list)


class CatalogIndex(ArchiveModel):
    """The ``{collections, items}`` document consumed by the viewers."""

    collections: List[Collection] = Field(default_factory=list)
    items: List[Item] = Field(default_factory=list)

    def to_json(self) -> str:
        """Serialise without pretty-printing, keeping non-ASCII text as is."""

        return json.dumps(self.as_record(), ensure_ascii=False, separators=(",", ":"))

    @classmethod
    def from_json(cls, text: str) -> "CatalogIndex":
        return cls.model_validate_json(text)


class IndexSummary(BaseModel):
    """Aggregate counts describing an index."""

    total_items: int
    total_collections: int
    total_elements: int
    files: Dict[str, int]

    @classmethod
    def from_index(cls, index: CatalogIndex) -> "IndexSummary":
        counts: Dict[str, int] = {group: 0 for group in CONTENT_GROUPS}
        for item in index.items:
            for group in CONTENT_GROUPS:
                counts[group] += len(getattr(item, group))
        return cls(
            total_items=len(index.items),
            total_collections=len(index.collections),
            total_elements=sum(item.elements for item in index.items),
            files=counts,
        )


def unique_by(records: Iterable[Any], attribute: str) -> List[Any]:
    """Keep the first record for each distinct ``attribute`` value, preserving order."""

    seen = set()
    unique: List[Any] = []
    for record in records:
        marker = getattr(record, attribute)
        if marker in seen:
            continue
        seen.add(marker)
        unique.append(record)
    return unique


def unique(values: Iterable[str]) -> List[str]:
    return list(dict.fromkeys(values))
