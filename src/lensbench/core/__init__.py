"""Core module with types, units, errors, logging, and config."""

__all__ = [
    "types",
    "units",
    "errors",
    "logging",
    "config",
]
