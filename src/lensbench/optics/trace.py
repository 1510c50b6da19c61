"""Piecewise ray trace through the lens chain.

Each ray enters parallel to the axis and is bent at every lens by a slope
change proportional to its height and the lens power:

    dm = -(h / pixels_per_meter) * P
    m += dm * damping

This is a small-angle visualization, not exact refraction.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from ..core.config import BenchSettings, Viewport
from ..core.errors import TraceError
from ..core.logging import get_logger
from ..core.types import Polyline
from .layout import TAIL_PX, AxialLayout
from .lenses import Lens
from .state import LensCollection

logger = get_logger(__name__)


def _check_finite(**values: float) -> None:
    for name, value in values.items():
        if not math.isfinite(value):
            raise TraceError(f"{name} must be finite, got {value}")


def trace_ray(
    start_height: float,
    lenses: Sequence[Lens],
    distances: Sequence[float],
    layout: AxialLayout,
    center_y: float,
    canvas_width: float,
    damping: float = 0.1,
) -> Polyline:
    """Trace one ray from the left edge across the canvas.

    Args:
        start_height: Entry height (canvas y coordinate)
        lenses: Lenses in axis order
        distances: Gaps between lenses in meters
        layout: Axial layout giving each lens x
        center_y: Canvas y of the optical axis
        canvas_width: Visible width the ray must reach
        damping: Factor applied to every slope change

    Returns:
        Array of shape (len(lenses) + 2, 2): the start point, one crossing
        per lens and the end point

    Raises:
        TraceError: If a geometry input is not finite
    """
    _check_finite(start_height=start_height, center_y=center_y, canvas_width=canvas_width)

    points = [(0.0, float(start_height))]
    x = 0.0
    y = float(start_height)
    slope = 0.0

    for k, lens in enumerate(lenses):
        lens_x = layout.position_of(k, distances)
        y += slope * (lens_x - x)

        h = y - center_y
        if lens.power is not None:
            delta = -(h / layout.pixels_per_meter) * lens.power
            slope += delta * damping

        points.append((lens_x, y))
        x = lens_x

    end_x = max(canvas_width, x + TAIL_PX)
    points.append((end_x, y + slope * (end_x - x)))

    return np.asarray(points, dtype=np.float64)


def ray_heights(viewport: Viewport, rays_per_half: int = 4) -> list[float]:
    """Entry heights of the ray fan, evenly spaced over half the lens height.

    Returned top to bottom, axis excluded.
    """
    step = viewport.lens_height / (2 * rays_per_half)
    above = [viewport.center_y - step * i for i in range(rays_per_half, 0, -1)]
    below = [viewport.center_y + step * i for i in range(1, rays_per_half + 1)]
    return above + below


@dataclass(slots=True)
class RayFan:
    """Traced rays plus the extent they were traced over."""

    heights: list[float]
    polylines: list[Polyline]
    lens_x: list[float]
    width: float
    center_y: float

    def to_dict(self) -> dict:
        return {
            "width": self.width,
            "center_y": self.center_y,
            "lens_x": self.lens_x,
            "rays": [
                {"start_height": h, "points": p.tolist()}
                for h, p in zip(self.heights, self.polylines)
            ],
        }


def trace_fan(
    collection: LensCollection,
    settings: BenchSettings | None = None,
    viewport: Viewport | None = None,
) -> RayFan:
    """Trace the full ray fan for a bench snapshot."""
    settings = settings or collection.settings
    viewport = viewport or settings.viewport
    layout = AxialLayout.from_settings(settings)

    lenses = collection.lenses
    distances = collection.distances
    width = layout.extent(len(lenses), distances, viewport.width)
    heights = ray_heights(viewport, settings.rays_per_half)

    polylines = [
        trace_ray(
            h,
            lenses,
            distances,
            layout,
            center_y=viewport.center_y,
            canvas_width=viewport.width,
            damping=settings.damping,
        )
        for h in heights
    ]
    logger.debug("ray fan traced", {"rays": len(polylines), "lenses": len(lenses)})

    return RayFan(
        heights=heights,
        polylines=polylines,
        lens_x=layout.positions(len(lenses), distances),
        width=width,
        center_y=viewport.center_y,
    )


__all__ = [
    "trace_ray",
    "ray_heights",
    "RayFan",
    "trace_fan",
]
