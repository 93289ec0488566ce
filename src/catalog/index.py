"""Build the item/collection index for a whole data tree."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from utils.logging import get_logger

from .errors import ExtractionError, FatalPreconditionError
from .events import LoadObserver, LoggingObserver
from .extractor import CatalogRecordExtractor
from .scanner import CatalogScanner, ScanConfig
from .schema import CatalogIndex, Collection, Item, LoadMessage, ScanEntry, unique, unique_by

LOGGER = get_logger(__name__)

# Collection-level classifications are unique by this attribute.
CLASSIFICATION_KEY = "value"


@dataclass(slots=True)
class IndexResult:
    """Indexed items and merged collections.

    ``item_locations`` maps ``"{collectionId}-{itemId}"`` to the source folder;
    the installer copies content from there.
    """

    items: List[Item] = field(default_factory=list)
    collections: List[Collection] = field(default_factory=list)
    item_locations: Dict[str, Path] = field(default_factory=dict)
    errors: List[LoadMessage] = field(default_factory=list)

    @property
    def index(self) -> CatalogIndex:
        return CatalogIndex(collections=self.collections, items=self.items)


def merge_collections(fragments: Iterable[Collection]) -> List[Collection]:
    """Fold fragments into one collection per identifier, in first-seen order."""

    grouped: Dict[str, List[Collection]] = {}
    for fragment in fragments:
        grouped.setdefault(fragment.collection_id, []).append(fragment)

    merged = []
    for group in grouped.values():
        merged.append(
            group[0].model_copy(
                update={
                    "items": unique(item_id for c in group for item_id in c.items),
                    "people": unique_by((p for c in group for p in c.people), "name"),
                    "classifications": unique_by(
                        (k for c in group for k in c.classifications), CLASSIFICATION_KEY
                    ),
                    "categories": unique(category for c in group for category in c.categories),
                    "languages": sorted(unique(language for c in group for language in c.languages)),
                }
            )
        )
    return merged


class IndexBuilder:
    """Extract every scanned folder and aggregate the results.

    A folder that fails extraction is reported and skipped; it never stops the build.
    """

    def __init__(
        self,
        extractor: Optional[CatalogRecordExtractor] = None,
        observer: Optional[LoadObserver] = None,
    ) -> None:
        self.extractor = extractor or CatalogRecordExtractor()
        self.observer = observer or LoggingObserver()

    def build(self, entries: Iterable[ScanEntry]) -> IndexResult:
        result = IndexResult()
        fragments: List[Collection] = []
        for entry in entries:
            try:
                extracted = self.extractor.extract(entry)
            except ExtractionError as exc:
                self._error(result, str(exc))
                continue
            if not extracted.ok:
                self._error(result, f"No files listed in {entry.catalog_path}")
                continue

            item = extracted.item
            if item.key in result.item_locations:
                self._error(
                    result,
                    f"Skipping {entry.folder}: item {item.label} already indexed from "
                    f"{result.item_locations[item.key]}",
                )
                continue
            result.items.append(item)
            result.item_locations[item.key] = entry.folder
            fragments.append(extracted.collection)
            self.observer.on_info(f"Generated the index for item: {item.label}")

        result.collections = merge_collections(fragments)
        LOGGER.info("Indexed %d items in %d collections", len(result.items), len(result.collections))
        return result

    def _error(self, result: IndexResult, message: str) -> None:
        result.errors.append(LoadMessage(message=message, level="error"))
        self.observer.on_error(message)


def build_index(
    config: ScanConfig,
    *,
    scanner: Optional[CatalogScanner] = None,
    builder: Optional[IndexBuilder] = None,
) -> IndexResult:
    """Walk ``config.root`` and index every catalog folder found.

    Raises :class:`FatalPreconditionError` when nothing could be indexed.
    """

    builder = builder or IndexBuilder()
    walked = (scanner or CatalogScanner()).walk(config)
    for error in walked.errors:
        builder.observer.emit(error)
    result = builder.build(walked.entries)
    result.errors[:0] = walked.errors
    if not result.items:
        raise FatalPreconditionError(f"No catalog items found under {config.root}")
    return result
