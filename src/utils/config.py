"""Configuration helpers for the archive loader."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Literal, Optional

import yaml
from pydantic import BaseModel, Field

TargetDevice = Literal["raspberry-pi", "usb-disk"]

DEFAULT_SPEAKER_ROLES = ["participant", "performer", "signer", "singer", "speaker"]


class AppConfig(BaseModel):
    """Application level configuration passed into the loading pipeline."""

    content_base_path: Path = Field(default=Path("."))
    data_path: Optional[Path] = None
    target_path: Optional[Path] = None
    target_device: TargetDevice = "raspberry-pi"
    catalog_base_url: str = "http://catalog.paradisec.org.au"
    speaker_roles: List[str] = Field(default_factory=lambda: list(DEFAULT_SPEAKER_ROLES))
    follow_symlinks: bool = False

    @property
    def viewer_path(self) -> Path:
        return self.content_base_path / "viewer"

    @property
    def assets_path(self) -> Path:
        return self.content_base_path / "assets"


def load_config(path: Path, **overrides: Any) -> AppConfig:
    """Load configuration from a YAML file, applying non-empty ``overrides``."""

    data: Dict[str, Any] = {}
    if path.exists():
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    data.update({key: value for key, value in overrides.items() if value is not None})
    return AppConfig(**data)
