"""Test settings validation and round-trip serialization."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from lensbench.core.config import (
    BenchSettings,
    Viewport,
    load_settings,
    round_trip_settings,
    save_settings,
)
from lensbench.core.errors import ConfigError


def test_default_settings():
    s = BenchSettings()
    assert s.max_lenses == 3
    assert s.min_index == 1.5
    assert s.min_distance_m == 0.2
    assert s.min_power == -7.8
    assert s.pixels_per_meter == 200
    assert s.rays_per_half == 4
    assert s.damping == 0.1
    assert s.viewport.center_y == 200.0


@pytest.mark.parametrize(
    "kwargs",
    [
        {"max_lenses": 0},
        {"pixels_per_meter": 0},
        {"min_distance_m": -0.1},
        {"damping": 0},
        {"default_power": 0},
        {"default_power": -8.0},
        {"default_index": 1.2},
        {"default_distance_m": 0.1},
        {"min_index": 1.0, "default_index": 1.5},
        {"viewport": {"width": 0, "height": 400}},
    ],
)
def test_invalid_settings(kwargs):
    with pytest.raises(ValidationError):
        BenchSettings(**kwargs)


def test_yaml_round_trip():
    settings = BenchSettings(
        max_lenses=2,
        damping=0.25,
        viewport=Viewport(width=1024, height=300),
    )
    loaded = round_trip_settings(settings)
    assert loaded == settings


@pytest.mark.parametrize("suffix", [".yaml", ".json"])
def test_save_and_load(tmp_path: Path, suffix: str):
    settings = BenchSettings(pixels_per_meter=150.0, rays_per_half=3)
    path = tmp_path / f"settings{suffix}"
    save_settings(settings, path)

    assert load_settings(path) == settings


def test_load_partial_yaml(tmp_path: Path):
    path = tmp_path / "settings.yml"
    path.write_text("damping: 0.25\nviewport:\n  width: 640\n")
    settings = load_settings(path)
    assert settings.damping == 0.25
    assert settings.viewport.width == 640
    assert settings.viewport.height == 400


def test_load_empty_file(tmp_path: Path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert load_settings(path) == BenchSettings()


def test_load_missing_file(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        load_settings(tmp_path / "nope.yaml")


def test_load_invalid_values(tmp_path: Path):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({"max_lenses": -1}))
    with pytest.raises(ConfigError, match="Invalid settings"):
        load_settings(path)


def test_load_not_a_mapping(tmp_path: Path):
    path = tmp_path / "list.yaml"
    path.write_text("- 1\n- 2\n")
    with pytest.raises(ConfigError, match="must be a mapping"):
        load_settings(path)


def test_load_unparsable(tmp_path: Path):
    path = tmp_path / "broken.json"
    path.write_text("{not json")
    with pytest.raises(ConfigError, match="Failed to parse"):
        load_settings(path)


@pytest.mark.parametrize(
    ("model", "field", "value"),
    [
        (BenchSettings(), "min_index", 1.0),
        (BenchSettings(), "max_lenses", 1),
        (Viewport(), "height", 100.0),
    ],
)
def test_settings_are_frozen(model, field, value):
    with pytest.raises(ValidationError):
        setattr(model, field, value)


def test_nested_viewport_is_frozen():
    settings = BenchSettings()
    with pytest.raises(ValidationError):
        settings.viewport.width = 10.0
    assert settings.viewport.width == 800.0


def test_model_copy_gives_new_settings():
    settings = BenchSettings()
    wider = settings.model_copy(update={"max_lenses": 5})
    assert wider.max_lenses == 5
    assert settings.max_lenses == 3
