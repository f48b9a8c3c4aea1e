"""Topology module - reshape rules, graph extraction, propagation, metrics."""

from .builder import Connection, Node, RadarGraph, RadarGraphBuilder, extract_graph
from .metrics import RadarMetrics, calculate_metrics
from .propagation import propagate, weakest_link
from .reshape import DEFAULT_SIZE, ReshapeRule, attrs_for, shape_for, size_for

__all__ = [
    "Node",
    "Connection",
    "RadarGraph",
    "RadarGraphBuilder",
    "extract_graph",
    "propagate",
    "weakest_link",
    "RadarMetrics",
    "calculate_metrics",
    "ReshapeRule",
    "DEFAULT_SIZE",
    "shape_for",
    "attrs_for",
    "size_for",
]
