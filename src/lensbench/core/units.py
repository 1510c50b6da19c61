"""Unit conversion utilities for the lens bench.

Lens powers are in diopters, distances in meters. Layout and ray geometry
are in rendering units (pixels) along the optical axis.
"""


def m_to_px(value: float | int, pixels_per_meter: float) -> float:
    """Convert meters to rendering units."""
    return float(value) * pixels_per_meter


def diopters_to_focal_m(power: float | int) -> float:
    """Convert optical power in diopters to focal length in meters."""
    return 1.0 / float(power)


__all__ = [
    "m_to_px",
    "diopters_to_focal_m",
]
