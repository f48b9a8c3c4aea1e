"""dor-radar - Prometheus probe reliability exposed as a radar topology graph."""

__version__ = "0.1.0"
__author__ = "dor-radar Team"

from .service import RadarService

__all__ = [
    "__version__",
    "__author__",
    "RadarService",
]
