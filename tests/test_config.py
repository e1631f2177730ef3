from __future__ import annotations

import json

import pytest

from trackriser._config import (
    DEFAULT_CONFIG,
    RenderSettings,
    ensure_user_config,
    get_render_settings,
    get_unit_settings,
)


def test_default_config_is_written(isolated_config):
    ensure_user_config()
    assert isolated_config.exists()
    assert json.loads(isolated_config.read_text()) == DEFAULT_CONFIG


def test_defaults_resolve_to_render_settings(isolated_config):
    settings = get_render_settings()
    assert settings == RenderSettings()
    assert settings.units.label == "mm"


def test_values_are_read_from_file(isolated_config):
    isolated_config.parent.mkdir(parents=True)
    isolated_config.write_text(
        json.dumps({"units": "IN", "facets": 128, "epsilon": 0.05, "standard": " Wooden ", "supports": True})
    )
    settings = get_render_settings()
    assert settings.facets == 128
    assert settings.epsilon == 0.05
    assert settings.standard == "wooden"
    assert settings.supports is True
    assert settings.units.name == "inches"
    assert settings.units.scale_to_mm == 25.4


def test_invalid_values_fall_back(isolated_config):
    isolated_config.parent.mkdir(parents=True)
    isolated_config.write_text(
        json.dumps({"units": "furlongs", "facets": "many", "epsilon": -1, "standard": 3, "supports": "yes"})
    )
    settings = get_render_settings()
    assert settings == RenderSettings()


def test_non_finite_facets_fall_back(isolated_config):
    isolated_config.parent.mkdir(parents=True)
    isolated_config.write_text(json.dumps({"facets": float("inf"), "epsilon": float("nan")}))
    settings = get_render_settings()
    assert settings.facets == 64
    assert settings.epsilon == 0.01


def test_low_facet_counts_are_raised(isolated_config):
    isolated_config.parent.mkdir(parents=True)
    isolated_config.write_text(json.dumps({"facets": 3}))
    assert get_render_settings().facets == 8


def test_broken_json_uses_defaults(isolated_config):
    isolated_config.parent.mkdir(parents=True)
    isolated_config.write_text("{not json")
    assert get_unit_settings().name == "millimeters"
    assert get_render_settings() == RenderSettings()


def test_render_settings_validation():
    with pytest.raises(ValueError):
        RenderSettings(facets=2)
    with pytest.raises(ValueError):
        RenderSettings(epsilon=-0.1)
