"""Optical model: lenses, bench state, axial layout and ray trace."""

from .layout import AxialLayout
from .lenses import Lens, LensType, calc_radius
from .outline import LensOutline, lens_outline
from .state import LensBench, LensCollection
from .trace import RayFan, ray_heights, trace_fan, trace_ray

__all__ = [
    "AxialLayout",
    "Lens",
    "LensType",
    "calc_radius",
    "LensOutline",
    "lens_outline",
    "LensBench",
    "LensCollection",
    "RayFan",
    "ray_heights",
    "trace_fan",
    "trace_ray",
]
