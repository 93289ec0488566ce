"""Installing indexed archive data onto a target device."""

from .emitter import INDEX_FILENAME, read_index_file, write_index_file
from .installer import DataInstaller
from .service import DataLoader

__all__ = ["INDEX_FILENAME", "DataInstaller", "DataLoader", "read_index_file", "write_index_file"]
