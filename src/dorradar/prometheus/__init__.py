"""Prometheus module - query building, transport and response parsing."""

from ..core.limits import MAX_TIMEOUT
from .client import PrometheusClient
from .query import DEFAULT_WINDOW, build_query, build_request, validate_window
from .response import Sample, parse_response

__all__ = [
    "MAX_TIMEOUT",
    "PrometheusClient",
    "DEFAULT_WINDOW",
    "build_query",
    "build_request",
    "validate_window",
    "Sample",
    "parse_response",
]
