from __future__ import annotations

import os
from pathlib import Path

import pytest

from trackriser import _config
from trackriser._config import RenderSettings
from trackriser.tracks import WoodenTrack

PROJECT_ROOT = Path(__file__).resolve().parents[1]


def pytest_configure():
    os.environ.setdefault("PYVISTA_OFF_SCREEN", "true")
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the user config at a temporary directory for every test."""
    config_dir = tmp_path / "config"
    monkeypatch.setattr(_config, "CONFIG_DIR", config_dir)
    monkeypatch.setattr(_config, "CONFIG_FILE", config_dir / "trackriser.cfg")
    return config_dir / "trackriser.cfg"


@pytest.fixture
def project_root() -> Path:
    return PROJECT_ROOT


@pytest.fixture
def settings() -> RenderSettings:
    return RenderSettings(facets=32)


@pytest.fixture
def standard() -> WoodenTrack:
    return WoodenTrack()
