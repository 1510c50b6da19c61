"""Thin-lens bench package.

Assemble a chain of up to three idealized thin lenses along an optical axis
and compute the lens radii, axial layout and traced ray polylines that a
presentation layer draws.
"""

__version__ = "0.1.0"

__all__ = [
    "cli",
    "core",
    "optics",
]
