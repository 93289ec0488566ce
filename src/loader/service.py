"""End-to-end loading of an archive data tree onto a target device."""
from __future__ import annotations

import shutil
import threading
from pathlib import Path
from typing import Optional

from catalog.errors import FatalPreconditionError
from catalog.events import LoadObserver, LoggingObserver
from catalog.extractor import CatalogRecordExtractor
from catalog.index import IndexBuilder, IndexResult
from catalog.scanner import CatalogScanner, ScanConfig, WalkResult
from catalog.schema import CatalogIndex, ScanEntry
from utils.config import AppConfig
from utils.logging import get_logger
from utils.parallel import run_blocking
from website.generator import SiteGenerator

from .installer import DataInstaller

LOGGER = get_logger(__name__)


class DataLoader:
    """Prepare a target, index the data tree and install or render it.

    ``raspberry-pi`` targets receive the viewer application plus a copied
    repository and ``index.json``; ``usb-disk`` targets receive a static site.
    """

    def __init__(
        self,
        config: AppConfig,
        observer: Optional[LoadObserver] = None,
        stop_event: Optional[threading.Event] = None,
    ) -> None:
        if config.data_path is None or config.target_path is None:
            raise ValueError("data_path and target_path must both be configured")
        self.config = config
        self.data_path: Path = config.data_path
        self.target_path: Path = config.target_path
        self.observer = observer or LoggingObserver()
        self.stop_event = stop_event or threading.Event()

    @property
    def html_root(self) -> Path:
        return self.target_path / "html"

    @property
    def repository_root(self) -> Path:
        return self.html_root / "repository"

    def stop(self) -> None:
        """Ask a running load to stop after the current item."""

        self.stop_event.set()

    async def load(self) -> CatalogIndex:
        """Run the whole pipeline.

        Fatal conditions are reported through the observer and re-raised.
        """

        try:
            await self.prepare_target()

            self.observer.on_info("Processing the data to be loaded.")
            walked = self.walk()
            self.observer.on_complete("Data processed")
            for error in walked.errors:
                self.observer.emit(error)

            self.observer.on_info("Building the index.")
            result = self.build_index(walked.entries)
            if not result.items:
                raise FatalPreconditionError(f"No catalog items found under {self.data_path}")
            self.observer.on_complete("Index built")

            if self.config.target_device == "raspberry-pi":
                await self.install_collection_viewer()
                index = await self.install_the_data(result)
            else:
                self.observer.on_info("Generating the site.")
                index = await self.generate_site(result)
                self.observer.on_info("Site generation complete")
        except FatalPreconditionError as exc:
            self.observer.on_error(str(exc))
            raise
        self.observer.on_complete("Done.")
        return index

    async def prepare_target(self) -> None:
        self.observer.on_info("Preparing the target device")
        try:
            if self.html_root.exists():
                await run_blocking(shutil.rmtree, self.html_root)
            await run_blocking(self.html_root.mkdir, parents=True, exist_ok=True)
        except OSError as exc:
            raise FatalPreconditionError(
                f"There was a problem preparing the device for loading: {exc}", cause=exc
            ) from exc
        self.observer.on_complete("Device ready for loading")

    async def install_collection_viewer(self) -> None:
        self.observer.on_info("Installing the collection viewer")
        source = self.config.viewer_path
        if not source.is_dir():
            raise FatalPreconditionError(f"Collection viewer not found at {source}")
        try:
            await run_blocking(shutil.copytree, source, self.html_root, dirs_exist_ok=True)
            await run_blocking(self.repository_root.mkdir, parents=True, exist_ok=True)
        except OSError as exc:
            raise FatalPreconditionError(f"Unable to install the collection viewer: {exc}", cause=exc) from exc
        self.observer.on_complete("Collection viewer has been installed")

    def walk(self) -> WalkResult:
        config = ScanConfig(root=self.data_path, follow_symlinks=self.config.follow_symlinks)
        return CatalogScanner().walk(config)

    def build_index(self, entries: list[ScanEntry]) -> IndexResult:
        extractor = CatalogRecordExtractor(catalog_base_url=self.config.catalog_base_url)
        return IndexBuilder(extractor=extractor, observer=self.observer).build(entries)

    async def install_the_data(self, result: IndexResult) -> CatalogIndex:
        installer = DataInstaller(self.repository_root, observer=self.observer, stop_event=self.stop_event)
        await run_blocking(self.repository_root.mkdir, parents=True, exist_ok=True)
        return await installer.install(result.collections, result.items, result.item_locations)

    async def generate_site(self, result: IndexResult) -> CatalogIndex:
        generator = SiteGenerator(
            result.items,
            self.html_root,
            assets_path=self.config.assets_path,
            speaker_roles=self.config.speaker_roles,
            observer=self.observer,
            stop_event=self.stop_event,
        )
        items = await generator.generate()
        return CatalogIndex(collections=result.collections, items=items)
