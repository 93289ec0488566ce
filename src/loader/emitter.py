"""Reading and writing the ``index.json`` document consumed by the viewers."""
from __future__ import annotations

from pathlib import Path
from typing import Iterable

from catalog.schema import CatalogIndex, Collection, Item
from utils.logging import get_logger

LOGGER = get_logger(__name__)

INDEX_FILENAME = "index.json"


def write_index_file(target: Path, collections: Iterable[Collection], items: Iterable[Item]) -> Path:
    """Write ``{collections, items}`` to ``target/index.json`` and return the path."""

    index = CatalogIndex(collections=list(collections), items=list(items))
    path = target / INDEX_FILENAME
    path.write_text(index.to_json(), encoding="utf-8")
    LOGGER.debug("Wrote %d items and %d collections to %s", len(index.items), len(index.collections), path)
    return path


def read_index_file(path: Path) -> CatalogIndex:
    if path.is_dir():
        path = path / INDEX_FILENAME
    return CatalogIndex.from_json(path.read_text(encoding="utf-8"))
