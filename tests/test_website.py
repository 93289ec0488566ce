from __future__ import annotations

import asyncio
import threading
from pathlib import Path

from catalog import Item, RecordingObserver, ScanConfig, build_index
from catalog.schema import Classification, MediaFileRef, Person
from website import SiteGenerator, group_by_genre, group_by_identifier, group_by_speaker, index_views
from website.generator import image_context
from website.templates import render


def _item(cid: str, iid: str, **fields: object) -> Item:
    return Item(collection_id=cid, item_id=iid, **fields)


def test_group_by_identifier_sorts_keys() -> None:
    groups = group_by_identifier([_item("NT1", "1"), _item("AA1", "2"), _item("NT1", "3"), _item("NT1", "1")])
    assert list(groups) == ["AA1", "NT1"]
    assert [item.item_id for item in groups["NT1"]] == ["1", "3"]


def test_group_by_genre_uses_classification_values() -> None:
    items = [
        _item("AA1", "1", classifications=[Classification(name="genre", value="Song")]),
        _item("AA1", "2", classifications=[Classification(name="genre", value="Narrative"), Classification(name="x")]),
    ]
    groups = group_by_genre(items)
    assert list(groups) == ["Narrative", "Song"]


def test_group_by_speaker_filters_roles() -> None:
    items = [
        _item("AA1", "1", people=[Person(role="speaker", name="A"), Person(role="recorder", name="B")]),
        _item("AA1", "2", people=[Person(role="speaker", name="A")]),
    ]
    groups = group_by_speaker(items)
    assert list(groups) == ["A (speaker)"]
    assert [item.item_id for item in groups["A (speaker)"]] == ["1", "2"]
    assert list(group_by_speaker(items, roles=["recorder"])) == ["B (recorder)"]


def test_index_views_empty_groups_are_none() -> None:
    views = index_views([_item("AA1", "1")])
    assert list(views["byIdentifier"]) == ["AA1"]
    assert views["byGenre"] is None
    assert views["bySpeaker"] is None


def test_image_context() -> None:
    images = [MediaFileRef(name=f"{n}.jpg", path=f"/x/{n}.jpg") for n in "abc"]
    first = image_context(images, 0)
    assert first["first"] is None and first["previous"] is None
    assert first["next"] == "b.jpg.html" and first["last"] == "c.jpg.html"
    assert image_context(images, 2)["next"] is None
    assert image_context(images, 1)["meta"] == "Image 2 of 3"


def test_render_escapes_text() -> None:
    item = _item("AA1", "1", title="<b>Songs</b>", identifier=["AA1-1", "http://catalog.example.org/AA1-1"])
    html = render("information.html", item=item, title=item.title, root="../../..", assets="../assets")
    assert "&lt;b&gt;Songs&lt;/b&gt;" in html
    assert "<b>Songs</b>" not in html


def test_generate_site(archive_root: Path, content_base: Path, tmp_path: Path) -> None:
    result = build_index(ScanConfig(root=archive_root))
    html = tmp_path / "html"
    observer = RecordingObserver()
    generator = SiteGenerator(result.items, html, assets_path=content_base / "assets", observer=observer)
    items = asyncio.run(generator.generate())

    assert len(items) == 5
    item_root = html / "DT1" / "214"
    assert (item_root / "images" / "DT1-214-A.jpg.html").is_file()
    assert (item_root / "images" / "content" / "DT1-214-A-thumb-PDSC_ADMIN.jpg").is_file()
    assert (item_root / "media" / "DT1-214-A.mp3.html").is_file()
    assert (item_root / "media" / "content" / "DT1-214-A.eaf").is_file()
    assert (item_root / "documents" / "content" / "DT1-214-A.pdf").is_file()
    assert (item_root / "assets" / "styles.css").is_file()
    media_page = (item_root / "media" / "DT1-214-A.mp3.html").read_text(encoding="utf-8")
    assert "DT1-214-A.eaf" in media_page
    index_page = (html / "index.html").read_text(encoding="utf-8")
    assert "by-genre" in index_page and "by-speaker" in index_page
    assert "Alice Kalo (speaker)" in index_page
    assert "Bob Smith (recorder)" not in index_page
    assert observer.errors == []


def test_generate_site_strips_missing_files(archive_root: Path, tmp_path: Path) -> None:
    missing = archive_root / "NT1" / "98007" / "NT1-98007-B.png"
    missing.unlink()
    result = build_index(ScanConfig(root=archive_root))
    observer = RecordingObserver()
    items = asyncio.run(SiteGenerator(result.items, tmp_path / "html", observer=observer).generate())

    nt1 = next(item for item in items if item.key == "NT1-98007")
    assert [image.name for image in nt1.images] == ["NT1-98007-A.jpg"]
    assert nt1.elements == 2
    assert [e.message for e in observer.errors] == [f"NT1 / 98007 missing file: {missing.as_posix()}"]


def test_generate_site_stops_between_items(archive_root: Path, tmp_path: Path) -> None:
    result = build_index(ScanConfig(root=archive_root))
    html = tmp_path / "html"
    stop = threading.Event()
    stop.set()
    observer = RecordingObserver()
    items = asyncio.run(SiteGenerator(result.items, html, observer=observer, stop_event=stop).generate())

    assert items == []
    assert (html / "index.html").is_file()
    assert not (html / "DT1").exists()
    assert observer.progress[-1] == (0, 5)


def test_generate_site_drops_missing_media(archive_root: Path, tmp_path: Path) -> None:
    missing = archive_root / "DT1" / "214" / "DT1-214-A.mp3"
    missing.unlink()
    result = build_index(ScanConfig(root=archive_root))
    html = tmp_path / "html"
    observer = RecordingObserver()
    items = asyncio.run(SiteGenerator(result.items, html, observer=observer).generate())

    dt1 = items[0]
    assert dt1.key == "DT1-214"
    assert dt1.audio == []
    assert dt1.elements == 2
    assert [e.message for e in observer.errors] == [f"DT1 / 214 missing file: {missing.as_posix()}"]
    assert not (html / "DT1" / "214" / "media" / "DT1-214-A.mp3.html").exists()
    assert observer.progress[-1] == (5, 5)
