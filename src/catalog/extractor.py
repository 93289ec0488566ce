"""Turn one catalog XML file into an item record and its collection fragment."""
from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from utils.logging import get_logger

from .content import CONTENT_TYPES, ContentType, classify
from .document import CatalogDocument, parse_catalog_xml
from .errors import ExtractionError
from .schema import Classification, Collection, Item, Person, ScanEntry, unique, unique_by

LOGGER = get_logger(__name__)

DEFAULT_CATALOG_URL = "http://catalog.paradisec.org.au"
CLASSIFICATION_PATTERN = re.compile(r"\[.*\]")
CLASSIFICATION_SEPARATOR = ":::"
MUSIC_CATEGORIES = frozenset({"instrumental music", "song"})


@dataclass(slots=True)
class ExtractionResult:
    """An item and its collection fragment, both ``None`` for a rejected catalog."""

    item: Optional[Item] = None
    collection: Optional[Collection] = None

    @property
    def ok(self) -> bool:
        return self.item is not None and self.collection is not None


def split_identifier(identifier: str) -> tuple[str, str]:
    """``NT1-98007`` -> ``("NT1", "98007")``; only the first ``-`` separates."""

    collection_id, _, item_id = identifier.partition("-")
    return collection_id, item_id


def parse_classifications(comment: str) -> List[Classification]:
    """Parse ``[name:value:::name:value]`` admin comments; anything else yields ``[]``."""

    if not comment or not CLASSIFICATION_PATTERN.search(comment):
        return []
    body = comment.replace("[", "", 1).replace("]", "", 1)
    classifications = []
    for fragment in body.split(CLASSIFICATION_SEPARATOR):
        fragment = fragment.strip()
        if not fragment:
            continue
        name, _, value = fragment.partition(":")
        classifications.append(Classification(name=name, value=value.strip()))
    return classifications


def derive_categories(raw_categories: Iterable[str]) -> List[str]:
    """Collapse raw data categories to ``["music"]`` or nothing."""

    present = {category for category in raw_categories if category}
    return ["music"] if present & MUSIC_CATEGORIES else []


def merge_languages(*groups: Iterable[str]) -> List[str]:
    return sorted(unique(language for group in groups for language in group if language))


def collection_link(base_url: str, collection_id: str) -> str:
    return f"{base_url.rstrip('/')}/collections/{collection_id}"


class CatalogRecordExtractor:
    """Read catalog files and build normalised :class:`Item` / :class:`Collection` records."""

    def __init__(
        self,
        catalog_base_url: str = DEFAULT_CATALOG_URL,
        content_types: Sequence[ContentType] = CONTENT_TYPES,
    ) -> None:
        self.catalog_base_url = catalog_base_url
        self.content_types = content_types

    def read(self, entry: ScanEntry) -> CatalogDocument:
        path = entry.catalog_path
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ExtractionError(path, f"unreadable catalog file ({exc})") from exc
        try:
            return parse_catalog_xml(text)
        except (ET.ParseError, ValueError) as exc:
            raise ExtractionError(path, f"invalid catalog XML ({exc})") from exc

    def extract(self, entry: ScanEntry) -> ExtractionResult:
        """Read and convert ``entry``; raises :class:`ExtractionError` on unreadable input."""

        return self.load(self.read(entry), entry.folder)

    def load(self, document: CatalogDocument, folder: Path) -> ExtractionResult:
        if not document.files:
            return ExtractionResult()
        item = self.build_item(document, folder)
        return ExtractionResult(item=item, collection=self.build_collection(document, item))

    def build_item(self, document: CatalogDocument, folder: Path) -> Item:
        collection_id, item_id = split_identifier(document.identifier)
        groups = classify(document.files, folder, self.content_types)
        item = Item(
            collection_id=collection_id,
            item_id=item_id,
            citation=document.citation,
            identifier=[document.identifier, document.archive_link],
            date=document.origination_date,
            description=document.description,
            title=document.title,
            region=document.region,
            open_access=document.private == "false",
            rights=document.data_access_conditions,
            collection_link=collection_link(self.catalog_base_url, collection_id),
            people=self.people(document),
            classifications=parse_classifications(document.admin_comment),
            languages=merge_languages(
                [document.language], document.subject_languages, document.content_languages
            ),
            categories=derive_categories(document.data_categories),
            **groups,
        )
        item.elements = item.count_elements()
        return item

    def build_collection(self, document: CatalogDocument, item: Item) -> Collection:
        declared = document.collection.identifier
        if declared and declared != item.collection_id:
            LOGGER.debug(
                "Collection identifier %s differs from item prefix %s; grouping by the item prefix",
                declared,
                item.collection_id,
            )
        return Collection(
            collection_id=item.collection_id,
            title=document.collection.title,
            description=document.collection.description,
            collection_link=item.collection_link,
            items=[item.item_id],
            people=unique_by([*self.collector(document), *item.people], "name"),
            classifications=list(item.classifications),
            categories=list(item.categories),
            languages=list(item.languages),
        )

    @staticmethod
    def people(document: CatalogDocument) -> List[Person]:
        people = [Person(role=agent.role, name=agent.name) for agent in document.agents]
        return sorted(people, key=lambda person: person.name)

    @staticmethod
    def collector(document: CatalogDocument) -> List[Person]:
        if not document.collection.collector:
            return []
        return [Person(role="collector", name=document.collection.collector)]
