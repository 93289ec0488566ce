"""Render a self-contained browsing site for indexed items."""
from __future__ import annotations

import shutil
import threading
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from catalog.events import LoadObserver, LoggingObserver
from catalog.schema import CONTENT_GROUPS, Item, MediaFileRef
from utils.config import DEFAULT_SPEAKER_ROLES
from utils.logging import get_logger
from utils.parallel import run_blocking

from .groups import index_views
from .templates import render

LOGGER = get_logger(__name__)

SITE_TITLE = "Archive items"
ITEM_SECTIONS = ("assets", "files", "information", "images", "media", "documents")
# File browser link target per content group, relative to the item folder.
FILE_LINKS = {
    "images": "images",
    "audio": "media",
    "video": "media",
    "transcriptions": "media/content",
    "documents": "documents/content",
}
ITEM_ROOT = "../../.."


def _stem(name: str) -> str:
    return name.partition(".")[0]


def image_context(images: Sequence[MediaFileRef], index: int) -> Dict[str, Optional[str]]:
    """Pager links for image ``index`` of ``images``; ``None`` where a link does not apply."""

    pages = [f"{image.name}.html" for image in images]
    last = len(pages) - 1
    return {
        "first": None if index == 0 else pages[0],
        "previous": None if index == 0 else pages[index - 1],
        "next": None if index == last else pages[index + 1],
        "last": None if index == last else pages[last],
        "meta": f"Image {index + 1} of {len(pages)}",
    }


class SiteGenerator:
    """Write one folder per item plus an index page under ``html_root``."""

    def __init__(
        self,
        items: Sequence[Item],
        html_root: Path,
        *,
        assets_path: Optional[Path] = None,
        speaker_roles: Sequence[str] = DEFAULT_SPEAKER_ROLES,
        observer: Optional[LoadObserver] = None,
        stop_event: Optional[threading.Event] = None,
    ) -> None:
        self.items = list(items)
        self.html_root = html_root
        self.assets_path = assets_path
        self.speaker_roles = list(speaker_roles)
        self.observer = observer or LoggingObserver()
        self.stop_event = stop_event or threading.Event()

    async def generate(self) -> List[Item]:
        total = len(self.items)
        self.observer.on_progress(0, total)
        generated: List[Item] = []
        for idx, item in enumerate(self.items):
            if self.stop_event.is_set():
                LOGGER.info("Stop requested; %d of %d items generated", len(generated), total)
                break
            self.observer.on_progress(idx, total)
            item = self.strip_missing_files(item)
            item = item.model_copy(
                update={"people": [p for p in item.people if p.role in self.speaker_roles]}
            )
            item_root = self.html_root / item.collection_id / item.item_id
            self.observer.on_info(f"Setting up data path for {item.label}")
            await self.setup_site(item_root)
            self.observer.on_info(f"Creating file browser for {item.label}")
            await self.create_file_browser_page(item, item_root)
            await self.create_information_page(item, item_root)
            self.observer.on_info(f"Creating image browser for {item.label}")
            await self.create_image_browser_pages(item, item_root)
            self.observer.on_info(f"Creating media browser for {item.label}")
            await self.create_media_browser_pages(item, item_root)
            self.observer.on_info(f"Creating documents browser for {item.label}")
            await self.create_documents_browser_page(item, item_root)
            self.observer.on_info(f"Done generating {item.label}")
            generated.append(item)
        self.observer.on_progress(len(generated), total)
        await self.create_index_page(generated)
        return generated

    def strip_missing_files(self, item: Item) -> Item:
        updates: Dict[str, List[MediaFileRef]] = {}
        for group in CONTENT_GROUPS:
            present = []
            for reference in getattr(item, group):
                if not Path(reference.path).is_file():
                    self.observer.on_error(f"{item.collection_id} / {item.item_id} missing file: {reference.path}")
                    continue
                if reference.thumbnail and not Path(reference.thumbnail).is_file():
                    LOGGER.debug("No thumbnail at %s", reference.thumbnail)
                    reference = reference.model_copy(update={"thumbnail": None})
                present.append(reference)
            updates[group] = present
        stripped = item.model_copy(update=updates)
        stripped.elements = stripped.count_elements()
        return stripped

    async def setup_site(self, item_root: Path) -> None:
        for section in ITEM_SECTIONS:
            await run_blocking((item_root / section).mkdir, parents=True, exist_ok=True)
        await self.copy_assets(item_root / "assets")

    async def copy_assets(self, target: Path) -> None:
        if self.assets_path is None or not self.assets_path.is_dir():
            return
        await run_blocking(shutil.copytree, self.assets_path, target, dirs_exist_ok=True)

    async def copy_file(self, source: Path, target: Path) -> None:
        try:
            await run_blocking(shutil.copy2, source, target / source.name)
        except OSError as exc:
            self.observer.on_error(f"Unable to copy {source}: {exc}")

    async def write_page(self, path: Path, template: str, **context: object) -> None:
        html = render(template, **context)
        await run_blocking(path.write_text, html, encoding="utf-8")

    def _page_context(self, item: Item) -> Dict[str, object]:
        return {"item": item, "title": item.title or item.label, "root": ITEM_ROOT, "assets": "../assets"}

    async def create_file_browser_page(self, item: Item, item_root: Path) -> None:
        listing = [(group, FILE_LINKS[group], getattr(item, group)) for group in CONTENT_GROUPS]
        await self.write_page(
            item_root / "files" / "index.html", "file-browser.html", listing=listing, **self._page_context(item)
        )

    async def create_information_page(self, item: Item, item_root: Path) -> None:
        await self.write_page(
            item_root / "information" / "index.html", "information.html", **self._page_context(item)
        )

    async def create_image_browser_pages(self, item: Item, item_root: Path) -> None:
        content = item_root / "images" / "content"
        await run_blocking(content.mkdir, parents=True, exist_ok=True)
        for index, image in enumerate(item.images):
            await self.copy_file(Path(image.path), content)
            if image.thumbnail:
                await self.copy_file(Path(image.thumbnail), content)
            await self.write_page(
                item_root / "images" / f"{image.name}.html",
                "image-browser.html",
                image=image,
                context=image_context(item.images, index),
                **self._page_context(item),
            )

    async def create_media_browser_pages(self, item: Item, item_root: Path) -> None:
        content = item_root / "media" / "content"
        await run_blocking(content.mkdir, parents=True, exist_ok=True)
        for transcription in item.transcriptions:
            await self.copy_file(Path(transcription.path), content)
        for kind, references in (("audio", item.audio), ("video", item.video)):
            for media in references:
                await self.copy_file(Path(media.path), content)
                related = [t for t in item.transcriptions if _stem(t.name) == _stem(media.name)]
                await self.write_page(
                    item_root / "media" / f"{media.name}.html",
                    "media-browser.html",
                    kind=kind,
                    media=media,
                    transcriptions=related,
                    **self._page_context(item),
                )

    async def create_documents_browser_page(self, item: Item, item_root: Path) -> None:
        content = item_root / "documents" / "content"
        await run_blocking(content.mkdir, parents=True, exist_ok=True)
        for document in item.documents:
            await self.copy_file(Path(document.path), content)
        await self.write_page(
            item_root / "documents" / "index.html", "documents-browser.html", **self._page_context(item)
        )

    async def create_index_page(self, items: Sequence[Item]) -> None:
        await run_blocking(self.html_root.mkdir, parents=True, exist_ok=True)
        await self.copy_assets(self.html_root / "assets")
        await self.write_page(
            self.html_root / "index.html",
            "index.html",
            views=index_views(items, self.speaker_roles),
            title=SITE_TITLE,
            assets="./assets",
        )
