"""Custom exception types for the lens bench."""


class LensbenchError(Exception):
    """Base exception for all lens bench errors."""

    pass


class ConfigError(LensbenchError):
    """Configuration-related errors."""

    pass


class TraceError(LensbenchError):
    """Ray trace input errors (non-finite geometry)."""

    pass


__all__ = [
    "LensbenchError",
    "ConfigError",
    "TraceError",
]
