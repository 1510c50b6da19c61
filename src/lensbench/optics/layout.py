"""Axial layout: where each lens sits along the optical axis.

Positions are a prefix sum over the inter-lens distances, recomputed on
every call from whatever distances are passed in.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from ..core.config import BenchSettings
from ..core.units import m_to_px

# Extra room drawn past the last lens
TAIL_PX = 100.0


@dataclass(frozen=True, slots=True)
class AxialLayout:
    """Maps lens sequence indices to horizontal coordinates."""

    start_offset: float = 200.0
    pixels_per_meter: float = 200.0
    default_distance: float = 1.0

    @classmethod
    def from_settings(cls, settings: BenchSettings) -> AxialLayout:
        return cls(
            start_offset=settings.start_offset_px,
            pixels_per_meter=settings.pixels_per_meter,
            default_distance=settings.default_distance_m,
        )

    def position_of(self, k: int, distances: Sequence[float | None]) -> float:
        """Horizontal coordinate of lens ``k``.

        Missing or unset gaps count as the default distance.
        """
        if k <= 0:
            return self.start_offset

        total = 0.0
        for i in range(k):
            gap = distances[i] if i < len(distances) else None
            total += gap if gap else self.default_distance
        return self.start_offset + m_to_px(total, self.pixels_per_meter)

    def positions(self, count: int, distances: Sequence[float | None]) -> list[float]:
        return [self.position_of(k, distances) for k in range(count)]

    def midpoint(self, k: int, distances: Sequence[float | None]) -> float:
        """Where the label for the gap after lens ``k`` goes."""
        return (self.position_of(k, distances) + self.position_of(k + 1, distances)) / 2

    def extent(self, count: int, distances: Sequence[float | None], canvas_width: float) -> float:
        """Visible width: the canvas, or past the last lens if that is wider."""
        if count <= 0:
            return canvas_width
        return max(canvas_width, self.position_of(count - 1, distances) + TAIL_PX)


__all__ = [
    "TAIL_PX",
    "AxialLayout",
]
