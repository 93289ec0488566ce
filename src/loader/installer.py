"""Copy indexed content into a device repository and rewrite file references."""
from __future__ import annotations

import shutil
import threading
from pathlib import Path, PurePosixPath
from typing import Dict, List, Mapping, Optional, Sequence

from catalog.errors import FatalPreconditionError, MissingSourceFileError
from catalog.events import LoadObserver, LoggingObserver
from catalog.schema import CONTENT_GROUPS, CatalogIndex, Collection, Item, MediaFileRef
from utils.logging import get_logger
from utils.parallel import run_blocking
from utils.paths import repository_url

from .emitter import write_index_file

LOGGER = get_logger(__name__)


class DataInstaller:
    """Install items one at a time into ``repository/{collectionId}/{itemId}/``.

    Missing source files are reported and their references dropped; the item
    itself is still installed. Setting ``stop_event`` stops the run between
    items without undoing what was already copied.
    """

    def __init__(
        self,
        repository: Path,
        observer: Optional[LoadObserver] = None,
        stop_event: Optional[threading.Event] = None,
    ) -> None:
        self.repository = repository
        self.observer = observer or LoggingObserver()
        self.stop_event = stop_event or threading.Event()

    async def install(
        self,
        collections: Sequence[Collection],
        items: Sequence[Item],
        item_locations: Mapping[str, Path],
    ) -> CatalogIndex:
        self.observer.on_info("Loading the data (this can take some time).")
        total = len(items)
        self.observer.on_progress(0, total)

        installed: List[Item] = []
        for idx, item in enumerate(items):
            if self.stop_event.is_set():
                LOGGER.info("Stop requested; %d of %d items installed", len(installed), total)
                break
            self.observer.on_info(f"Loading item {item.label}")
            self.observer.on_progress(idx, total)
            source = item_locations.get(item.key)
            if source is None:
                self.observer.on_error(f"No source folder recorded for {item.label}")
                continue
            result = await self.install_item(item, source)
            if result is not None:
                installed.append(result)
        self.observer.on_complete("Data loaded")

        try:
            await run_blocking(self.repository.mkdir, parents=True, exist_ok=True)
            await run_blocking(write_index_file, self.repository, collections, installed)
        except OSError as exc:
            raise FatalPreconditionError(f"Unable to write the index file: {exc}", cause=exc) from exc
        self.observer.on_complete("Index file written.")
        self.observer.on_progress(len(installed), total)
        return CatalogIndex(collections=list(collections), items=installed)

    async def install_item(self, item: Item, source: Path) -> Optional[Item]:
        target = self.repository / item.collection_id / item.item_id
        try:
            await run_blocking(target.mkdir, parents=True, exist_ok=True)
        except OSError as exc:
            self.observer.on_error(f"Unable to create {target}: {exc}")
            return None

        updates: Dict[str, List[MediaFileRef]] = {}
        for group in CONTENT_GROUPS:
            updates[group] = await self._install_group(item, getattr(item, group), source, target)
        installed = item.model_copy(update=updates)
        installed.elements = installed.count_elements()
        return installed

    async def _install_group(
        self, item: Item, references: Sequence[MediaFileRef], source: Path, target: Path
    ) -> List[MediaFileRef]:
        installed = []
        for reference in references:
            url = await self.copy(item, source / PurePosixPath(reference.path).name, target)
            if url is None:
                continue
            update: Dict[str, Optional[str]] = {"path": url}
            if reference.thumbnail:
                thumbnail = source / PurePosixPath(reference.thumbnail).name
                update["thumbnail"] = await self.copy(item, thumbnail, target)
            installed.append(reference.model_copy(update=update))
        return installed

    async def copy(self, item: Item, source: Path, target: Path) -> Optional[str]:
        """Copy ``source`` into ``target``; return its repository URL or ``None`` if missing."""

        try:
            if not source.is_file():
                raise MissingSourceFileError(source)
            await run_blocking(shutil.copy2, source, target / source.name)
        except MissingSourceFileError as exc:
            self.observer.on_error(str(exc))
            return None
        except OSError as exc:
            self.observer.on_error(f"Unable to copy {source}: {exc}")
            return None
        LOGGER.debug("Loaded %s", source)
        return repository_url(item.collection_id, item.item_id, source.name)
