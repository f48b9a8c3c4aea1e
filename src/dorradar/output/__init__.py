"""Output module - graph export."""

from .export import export_csv, export_graph, export_json

__all__ = [
    "export_graph",
    "export_json",
    "export_csv",
]
