"""Core module - exceptions shared by the engine.

Configuration lives in :mod:`dorradar.core.config` and is imported from there.
"""

from .exceptions import (
    ConfigError,
    InvalidWindowError,
    ParseError,
    QueryFailedError,
    RadarError,
    TransportError,
    ValueFormatError,
)

__all__ = [
    "RadarError",
    "InvalidWindowError",
    "TransportError",
    "ParseError",
    "QueryFailedError",
    "ValueFormatError",
    "ConfigError",
]
