"""Type definitions and aliases for the lens bench."""

from collections.abc import Callable
from typing import Any

import numpy as np

# Polyline of (x, y) points, shape (n, 2)
Polyline = np.ndarray

Point2D = tuple[float, float]
Distances = tuple[float, ...]
LensId = int

# Observer callback receiving the newly committed snapshot
Listener = Callable[[Any], None]
Unsubscribe = Callable[[], None]

__all__ = [
    "Polyline",
    "Point2D",
    "Distances",
    "LensId",
    "Listener",
    "Unsubscribe",
]
