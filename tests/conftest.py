from __future__ import annotations

import shutil
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_ROOT = PROJECT_ROOT / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

DATA_DIR = Path(__file__).parent / "data"

# Content files present next to each fixture catalog.
MEDIA_FILES = {
    "DT1/214": [
        "DT1-214-A.jpg",
        "DT1-214-A-thumb-PDSC_ADMIN.jpg",
        "DT1-214-A.mp3",
        "DT1-214-A.eaf",
        "DT1-214-A.pdf",
    ],
    "DT1/521": ["DT1-521-A.ogg", "DT1-521-B.mp4"],
    "DT1/940": ["DT1-940-A.mp3"],
    "NT1/98007": [
        "NT1-98007-A.jpg",
        "NT1-98007-A-thumb-PDSC_ADMIN.jpg",
        "NT1-98007-B.png",
        "NT1-98007-B-thumb-PDSC_ADMIN.png",
        "NT1-98007-A.pdf",
    ],
    "NT5/TokelauOf": ["NT5-TokelauOf-01.mp3"],
}


@pytest.fixture(autouse=True)
def _configure_test_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RICH_PROGRESS_BAR", "0")


@pytest.fixture
def archive_root(tmp_path: Path) -> Path:
    """A copy of the fixture archive with placeholder content files."""

    root = tmp_path / "data"
    shutil.copytree(DATA_DIR, root)
    for folder, names in MEDIA_FILES.items():
        for name in names:
            (root / folder / name).write_bytes(name.encode("utf-8"))
    return root


@pytest.fixture
def content_base(tmp_path: Path) -> Path:
    """Viewer application and site assets as shipped next to the loader."""

    base = tmp_path / "content"
    viewer = base / "viewer"
    viewer.mkdir(parents=True)
    (viewer / "index.html").write_text("<html>viewer</html>", encoding="utf-8")
    assets = base / "assets"
    assets.mkdir()
    (assets / "styles.css").write_text("body {}", encoding="utf-8")
    return base
