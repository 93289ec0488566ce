"""Filesystem walking utilities for discovering catalog item folders."""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Set, Tuple

from utils.logging import get_logger

from .errors import FatalPreconditionError, StructuralError
from .schema import LoadMessage, ScanEntry

LOGGER = get_logger(__name__)

CATALOG_SUFFIX = "CAT-PDSC_ADMIN.xml"


def catalog_files(names: Iterable[str], suffix: str = CATALOG_SUFFIX) -> List[str]:
    """Return the names that look like catalog files; dotfiles never do."""

    return [name for name in names if name.endswith(suffix) and not name.startswith(".")]


def dedupe_entries(entries: Iterable[ScanEntry]) -> List[ScanEntry]:
    """Keep the first entry for each catalog filename seen anywhere in the walk."""

    seen: dict[str, ScanEntry] = {}
    for entry in entries:
        if entry.file in seen:
            LOGGER.warning(
                "Ignoring %s: %s was already found in %s", entry.folder, entry.file, seen[entry.file].folder
            )
            continue
        seen[entry.file] = entry
    return list(seen.values())


@dataclass(slots=True)
class ScanConfig:
    """Configuration parameters controlling the walk."""

    root: Path
    catalog_suffix: str = CATALOG_SUFFIX
    follow_symlinks: bool = False
    exclude_dirs: Sequence[str] = (".git", "__pycache__")

    def __post_init__(self) -> None:
        self.root = Path(self.root).absolute()
        if not self.catalog_suffix:
            raise ValueError("catalog_suffix must not be empty")


@dataclass(slots=True)
class WalkResult:
    """Folders found by a walk plus the errors collected on the way."""

    entries: List[ScanEntry] = field(default_factory=list)
    errors: List[LoadMessage] = field(default_factory=list)

    def error(self, message: str) -> None:
        LOGGER.warning(message)
        self.errors.append(LoadMessage(message=message, level="error"))


class CatalogScanner:
    """Walk a data tree and identify the folders holding one catalog file."""

    def walk(self, config: ScanConfig) -> WalkResult:
        root = config.root
        if not root.is_dir():
            raise FatalPreconditionError(f"Data path {root} does not exist or is not a directory")

        exclude_dirs = {name.lower() for name in config.exclude_dirs}
        visited: Set[Tuple[int, int]] = set()
        result = WalkResult()
        stack: List[Path] = [root]
        while stack:
            directory = stack.pop()
            if config.follow_symlinks and not self._first_visit(directory, visited):
                LOGGER.debug("Skipping already visited directory %s", directory)
                continue
            listing = self._list(directory, config, result)
            if listing is None:
                continue
            files, subdirs = listing
            entry = self._inspect(directory, files, config, result)
            if entry is not None:
                result.entries.append(entry)
            stack.extend(reversed([d for d in subdirs if d.name.lower() not in exclude_dirs]))

        result.entries = dedupe_entries(result.entries)
        LOGGER.info("Found %d catalog folders under %s", len(result.entries), root)
        return result

    def _first_visit(self, directory: Path, visited: Set[Tuple[int, int]]) -> bool:
        try:
            stat = directory.stat()
        except OSError:
            return True
        key = (stat.st_dev, stat.st_ino)
        if key in visited:
            return False
        visited.add(key)
        return True

    def _list(
        self, directory: Path, config: ScanConfig, result: WalkResult
    ) -> Optional[Tuple[List[str], List[Path]]]:
        try:
            with os.scandir(directory) as iterator:
                children = sorted(iterator, key=lambda child: child.name)
        except OSError as exc:
            result.error(f"Unable to read {directory}: {exc}")
            return None

        files: List[str] = []
        subdirs: List[Path] = []
        for child in children:
            try:
                if child.is_dir(follow_symlinks=config.follow_symlinks):
                    subdirs.append(Path(child.path))
                elif child.is_file():
                    files.append(child.name)
            except OSError as exc:
                LOGGER.warning("Unable to stat %s: %s", child.path, exc)
        return files, subdirs

    def _inspect(
        self, directory: Path, files: List[str], config: ScanConfig, result: WalkResult
    ) -> Optional[ScanEntry]:
        matches = catalog_files(files, config.catalog_suffix)
        if not matches:
            return None
        if len(matches) > 1:
            result.error(str(StructuralError(directory)))
            return None
        return ScanEntry(folder=directory, file=matches[0])
