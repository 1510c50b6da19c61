"""Command line interface for the lens bench."""

__all__ = [
    "main",
]
