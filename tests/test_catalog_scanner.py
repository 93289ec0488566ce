from __future__ import annotations

import os
from pathlib import Path

import pytest

from catalog import CatalogScanner, ScanConfig, ScanEntry
from catalog.errors import FatalPreconditionError
from catalog.scanner import catalog_files, dedupe_entries


def test_scanner_finds_every_catalog_folder(archive_root: Path) -> None:
    result = CatalogScanner().walk(ScanConfig(root=archive_root))
    assert [entry.file for entry in result.entries] == [
        "DT1-214-CAT-PDSC_ADMIN.xml",
        "DT1-521-CAT-PDSC_ADMIN.xml",
        "DT1-940-CAT-PDSC_ADMIN.xml",
        "NT1-98007-CAT-PDSC_ADMIN.xml",
        "NT5-TokelauOf-CAT-PDSC_ADMIN.xml",
    ]
    assert result.entries[0].folder == archive_root / "DT1" / "214"
    assert result.errors == []


def test_scanner_reports_folder_with_two_catalogs(archive_root: Path) -> None:
    folder = archive_root / "DT1" / "214"
    (folder / "DT1-214-old-CAT-PDSC_ADMIN.xml").write_text("<item/>", encoding="utf-8")
    result = CatalogScanner().walk(ScanConfig(root=archive_root))
    assert len(result.entries) == 4
    assert [error.message for error in result.errors] == [f"{folder} has more than one catalog file."]
    assert result.errors[0].level == "error"


def test_scanner_reports_unreadable_folder(archive_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    unreadable = archive_root / "DT1" / "521"
    real_scandir = os.scandir

    def scandir(path):
        if Path(path) == unreadable:
            raise PermissionError(13, "denied", str(path))
        return real_scandir(path)

    monkeypatch.setattr(os, "scandir", scandir)
    result = CatalogScanner().walk(ScanConfig(root=archive_root))
    assert len(result.entries) == 4
    assert "DT1-521-CAT-PDSC_ADMIN.xml" not in [entry.file for entry in result.entries]
    assert len(result.errors) == 1
    assert result.errors[0].message.startswith(f"Unable to read {unreadable}")


def test_scanner_accepts_catalog_in_root(tmp_path: Path) -> None:
    (tmp_path / "AA1-001-CAT-PDSC_ADMIN.xml").write_text("<item/>", encoding="utf-8")
    result = CatalogScanner().walk(ScanConfig(root=tmp_path))
    assert result.entries == [ScanEntry(folder=tmp_path.absolute(), file="AA1-001-CAT-PDSC_ADMIN.xml")]


def test_scanner_rejects_missing_root(tmp_path: Path) -> None:
    with pytest.raises(FatalPreconditionError):
        CatalogScanner().walk(ScanConfig(root=tmp_path / "missing"))


def test_scanner_skips_excluded_directories(archive_root: Path) -> None:
    hidden = archive_root / ".git" / "objects"
    hidden.mkdir(parents=True)
    (hidden / "XX1-1-CAT-PDSC_ADMIN.xml").write_text("<item/>", encoding="utf-8")
    result = CatalogScanner().walk(ScanConfig(root=archive_root))
    assert len(result.entries) == 5


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unsupported")
def test_scanner_follows_symlink_loops_once(tmp_path: Path) -> None:
    folder = tmp_path / "AA1" / "001"
    folder.mkdir(parents=True)
    (folder / "AA1-001-CAT-PDSC_ADMIN.xml").write_text("<item/>", encoding="utf-8")
    try:
        (folder / "loop").symlink_to(tmp_path, target_is_directory=True)
    except OSError:
        pytest.skip("cannot create symlinks here")
    followed = CatalogScanner().walk(ScanConfig(root=tmp_path, follow_symlinks=True))
    assert len(followed.entries) == 1
    not_followed = CatalogScanner().walk(ScanConfig(root=tmp_path))
    assert len(not_followed.entries) == 1


@pytest.mark.parametrize(
    ("names", "expected"),
    [
        (["a-CAT-PDSC_ADMIN.xml", "a.jpg"], ["a-CAT-PDSC_ADMIN.xml"]),
        ([".a-CAT-PDSC_ADMIN.xml"], []),
        (["a-CAT-PDSC_ADMIN.xml.bak", "CAT-PDSC_ADMIN.txt"], []),
    ],
)
def test_catalog_files(names: list[str], expected: list[str]) -> None:
    assert catalog_files(names) == expected


def test_dedupe_entries_keeps_first_folder() -> None:
    first = ScanEntry(folder=Path("/a"), file="X-1-CAT-PDSC_ADMIN.xml")
    second = ScanEntry(folder=Path("/b"), file="X-1-CAT-PDSC_ADMIN.xml")
    other = ScanEntry(folder=Path("/c"), file="X-2-CAT-PDSC_ADMIN.xml")
    assert dedupe_entries([first, second, other]) == [first, other]
