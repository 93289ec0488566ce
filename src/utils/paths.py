"""Path utility helpers."""
from __future__ import annotations

from pathlib import PurePosixPath

REPOSITORY_PREFIX = "/repository"


def repository_url(collection_id: str, item_id: str, filename: str) -> str:
    """Return the installed, repository-relative URL of ``filename``."""

    return str(PurePosixPath(REPOSITORY_PREFIX, collection_id, item_id, filename))
