"""Lens outline geometry for a presentation layer.

Only the numbers needed to draw a lens are computed here: where it sits,
how tall it is, the arc radius of its faces and the edge offset of a
diverging lens.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..core.config import Viewport
from .lenses import Lens

# Radius in meters to arc radius in rendering units
ARC_SCALE = 1000.0
# Edge offset numerator for diverging lenses
EDGE_OFFSET = 15.0


@dataclass(frozen=True, slots=True)
class LensOutline:
    lens_id: int
    x: float
    top: float
    bottom: float
    arc_radius: float
    edge_offset: float


def lens_outline(lens: Lens, x: float, viewport: Viewport) -> LensOutline | None:
    """Outline of ``lens`` centred at ``x``, or None if it has no radius yet."""
    if not lens.is_renderable:
        return None

    half = viewport.lens_height / 2
    # A diverging lens is drawn with a flat edge of width 15 / r
    edge = EDGE_OFFSET / lens.r if lens.r < 0 else 0.0

    return LensOutline(
        lens_id=lens.id,
        x=x,
        top=viewport.center_y - half,
        bottom=viewport.center_y + half,
        arc_radius=lens.r * ARC_SCALE,
        edge_offset=edge,
    )


__all__ = [
    "ARC_SCALE",
    "LensOutline",
    "lens_outline",
]
