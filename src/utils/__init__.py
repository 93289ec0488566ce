"""Utility helpers shared across the archive loader codebase."""

from .config import AppConfig, load_config
from .logging import configure_logging, get_logger
from .parallel import run_blocking
from .paths import repository_url

__all__ = [
    "AppConfig",
    "load_config",
    "configure_logging",
    "get_logger",
    "repository_url",
    "run_blocking",
]
