"""Catalog package: discovering, extracting and indexing archive items."""

from .events import LoadObserver, LoggingObserver, RecordingObserver
from .extractor import CatalogRecordExtractor, ExtractionResult
from .index import IndexBuilder, IndexResult, build_index
from .scanner import CatalogScanner, ScanConfig, WalkResult
from .schema import CatalogIndex, Collection, IndexSummary, Item, LoadMessage, MediaFileRef, ScanEntry

__all__ = [
    "CatalogIndex",
    "CatalogRecordExtractor",
    "CatalogScanner",
    "Collection",
    "ExtractionResult",
    "IndexBuilder",
    "IndexResult",
    "IndexSummary",
    "Item",
    "LoadMessage",
    "LoadObserver",
    "LoggingObserver",
    "MediaFileRef",
    "RecordingObserver",
    "ScanConfig",
    "ScanEntry",
    "WalkResult",
    "build_index",
]
