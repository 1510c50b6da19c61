"""Configuration model and I/O for the lens bench.

Pydantic model holding the bench constants (lens cap, validation bounds,
defaults for new lenses, layout scale and trace damping) with YAML/JSON I/O.
Distances are in meters; layout values are in rendering units.
"""

from __future__ import annotations

import json
from pathlib import Path

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

from .errors import ConfigError


class Viewport(BaseModel):
    """Visible canvas the rays are traced across."""

    model_config = ConfigDict(frozen=True)

    width: float = Field(default=800.0, description="Canvas width in rendering units")
    height: float = Field(default=400.0, description="Canvas height in rendering units")

    @field_validator("width", "height")
    @classmethod
    def validate_extent(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"Viewport extent must be positive, got {v}")
        return v

    @property
    def center_y(self) -> float:
        """Height of the optical axis."""
        return self.height / 2

    @property
    def lens_height(self) -> float:
        """Drawn lens height, one third of the canvas."""
        return self.height / 3


class BenchSettings(BaseModel):
    """Constants shared by the lens state, layout and trace engine."""

    # Snapshots share one instance; bounds must not change under them
    model_config = ConfigDict(frozen=True)

    max_lenses: int = Field(default=3, description="Maximum number of lenses on the bench")
    min_index: float = Field(default=1.5, description="Lowest accepted refractive index")
    min_distance_m: float = Field(default=0.2, description="Shortest accepted lens gap in m")
    min_power: float = Field(default=-7.8, description="Power must be strictly above this")
    default_power: float = Field(default=6.0, description="Power of a newly added lens")
    default_index: float = Field(default=1.5, description="Index of a newly added lens")
    default_distance_m: float = Field(default=1.0, description="Gap added with a new lens in m")
    start_offset_px: float = Field(default=200.0, description="Axial position of the first lens")
    pixels_per_meter: float = Field(default=200.0, description="Layout scale")
    rays_per_half: int = Field(default=4, description="Rays traced on each side of the axis")
    damping: float = Field(default=0.1, description="Visualization factor on slope changes")
    viewport: Viewport = Field(default_factory=Viewport, description="Canvas size")

    @field_validator("max_lenses", "rays_per_half")
    @classmethod
    def validate_count(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"Count must be at least 1, got {v}")
        return v

    @field_validator("pixels_per_meter", "min_distance_m")
    @classmethod
    def validate_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"Value must be positive, got {v}")
        return v

    @field_validator("damping")
    @classmethod
    def validate_damping(cls, v: float) -> float:
        if not 0 < v <= 1:
            raise ValueError(f"Damping must be in (0, 1], got {v}")
        return v

    @model_validator(mode="after")
    def validate_defaults(self) -> BenchSettings:
        """New lenses must themselves pass the update rules."""
        if self.min_index <= 1:
            raise ValueError(f"min_index must exceed 1, got {self.min_index}")
        if self.default_power == 0 or self.default_power <= self.min_power:
            raise ValueError(
                f"default_power must be non-zero and above {self.min_power}, "
                f"got {self.default_power}"
            )
        if self.default_index < self.min_index:
            raise ValueError(
                f"default_index must be at least {self.min_index}, got {self.default_index}"
            )
        if self.default_distance_m < self.min_distance_m:
            raise ValueError(
                f"default_distance_m must be at least {self.min_distance_m}, "
                f"got {self.default_distance_m}"
            )
        return self


def load_settings(path: str | Path) -> BenchSettings:
    """Load settings from YAML or JSON file.

    Args:
        path: Path to settings file

    Returns:
        Validated BenchSettings

    Raises:
        FileNotFoundError: If the file doesn't exist
        ConfigError: If the file can't be parsed or holds invalid values
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Settings file not found: {path}")

    with open(path, encoding="utf-8") as f:
        try:
            if path.suffix.lower() == ".json":
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
        except (yaml.YAMLError, json.JSONDecodeError) as e:
            raise ConfigError(f"Failed to parse settings {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Settings {path} must be a mapping, got {type(data).__name__}")

    try:
        return BenchSettings(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid settings in {path}: {e}") from e


def save_settings(settings: BenchSettings, path: str | Path) -> None:
    """Save settings to YAML or JSON file.

    Args:
        settings: Settings to save
        path: Output file path
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    data = settings.model_dump(mode="json", exclude_unset=True)

    with open(path, "w", encoding="utf-8") as f:
        if path.suffix.lower() in [".yaml", ".yml"]:
            yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)
        else:
            json.dump(data, f, indent=2)


def round_trip_settings(settings: BenchSettings) -> BenchSettings:
    """Serialize settings to YAML and back."""
    data = settings.model_dump(mode="json", exclude_unset=True)
    yaml_str = yaml.safe_dump(data, default_flow_style=False, sort_keys=False)
    loaded_data = yaml.safe_load(yaml_str) or {}
    return BenchSettings(**loaded_data)


__all__ = [
    "Viewport",
    "BenchSettings",
    "load_settings",
    "save_settings",
    "round_trip_settings",
]
