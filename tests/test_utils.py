from __future__ import annotations

import asyncio
from pathlib import Path

import pytest
from pydantic import ValidationError

from utils.config import DEFAULT_SPEAKER_ROLES, AppConfig, load_config
from utils.parallel import run_blocking
from utils.paths import repository_url


def test_load_config_defaults(tmp_path: Path) -> None:
    config = load_config(tmp_path / "missing.yml")
    assert isinstance(config, AppConfig)
    assert config.target_device == "raspberry-pi"
    assert config.speaker_roles == DEFAULT_SPEAKER_ROLES
    assert config.viewer_path == Path(".") / "viewer"


def test_load_config_yaml_and_overrides(tmp_path: Path) -> None:
    path = tmp_path / "archive.yml"
    path.write_text(
        "target_device: usb-disk\ncontent_base_path: /opt/content\nspeaker_roles: [speaker]\n",
        encoding="utf-8",
    )
    config = load_config(path, target_path=tmp_path, target_device=None)
    assert config.target_device == "usb-disk"
    assert config.target_path == tmp_path
    assert config.assets_path == Path("/opt/content/assets")
    assert config.speaker_roles == ["speaker"]


def test_load_config_rejects_unknown_device(tmp_path: Path) -> None:
    with pytest.raises(ValidationError):
        load_config(tmp_path / "missing.yml", target_device="floppy")


def test_repository_url() -> None:
    assert repository_url("NT1", "98007", "a b.mp3") == "/repository/NT1/98007/a b.mp3"


def test_run_blocking_passes_arguments() -> None:
    async def main() -> int:
        return await run_blocking(int, "ff", base=16)

    assert asyncio.run(main()) == 255
