"""Lens entities and the simplified lensmaker's equation."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from ..core.units import diopters_to_focal_m


class LensType(str, Enum):
    """Shape of a thin lens."""

    BICONVEX = "biconvex"
    BICONCAVE = "biconcave"


def calc_radius(power: float | None, index: float, lens_type: LensType) -> float | None:
    """Radius of curvature of a symmetric thin lens.

    Uses ``R = 2 (n - 1) / P``. Both lens types share the same expression; the
    sign of the power carries the converging/diverging distinction.

    Args:
        power: Optical power in diopters, or None when unset
        index: Refractive index of the lens material
        lens_type: Lens shape

    Returns:
        Radius in meters, or None when power is unset or zero
    """
    if power is None or power == 0:
        return None

    if lens_type is LensType.BICONVEX:
        return 2 * (index - 1) / power
    return 2 * (index - 1) / power


@dataclass(frozen=True, slots=True)
class Lens:
    """One thin lens on the optical axis.

    ``r`` is derived; build lenses with :meth:`create` and change them with
    the ``with_*`` methods so it always matches power, index and type.
    """

    id: int
    power: float | None = None
    index: float = 1.5
    type: LensType = LensType.BICONVEX
    r: float | None = None

    @classmethod
    def create(
        cls,
        lens_id: int,
        power: float | None,
        index: float = 1.5,
        lens_type: LensType = LensType.BICONVEX,
    ) -> Lens:
        return cls(
            id=lens_id,
            power=power,
            index=index,
            type=LensType(lens_type),
            r=calc_radius(power, index, LensType(lens_type)),
        )

    def with_power(self, power: float) -> Lens:
        return replace(self, power=power, r=calc_radius(power, self.index, self.type))

    def with_index(self, index: float) -> Lens:
        return replace(self, index=index, r=calc_radius(self.power, index, self.type))

    @property
    def is_renderable(self) -> bool:
        """A lens is drawn only once it has a non-zero radius."""
        return bool(self.r)

    @property
    def is_converging(self) -> bool:
        return self.power is not None and self.power > 0

    @property
    def focal_length(self) -> float | None:
        """Focal length in meters."""
        if not self.power:
            return None
        return diopters_to_focal_m(self.power)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "type": self.type.value,
            "power": self.power,
            "index": self.index,
            "r": self.r,
        }


__all__ = [
    "LensType",
    "Lens",
    "calc_radius",
]
