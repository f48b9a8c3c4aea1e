"""Weakest-link propagation of connection strengths.

The default pass walks the connection list in order and rewrites each
record in place, so a connection processed later sees the already lowered
strengths of its upstream connections. The result therefore depends on the
order in which samples arrived, and existing consumers rely on that. The
snapshot variant reads only pre-pass strengths and is order-independent.
"""

from collections.abc import Sequence

from .builder import Connection


def weakest_link(connections: Sequence[Connection], node_id: int, strength: float) -> float:
    """Lowest of ``strength`` and every connection's strength into ``node_id``."""
    weakest = strength
    for conn in connections:
        if conn.target == node_id and conn.strength < weakest:
            weakest = conn.strength
    return weakest


def propagate(connections: Sequence[Connection], snapshot: bool = False) -> list[Connection]:
    """
    Cap each connection by the connections feeding its source node.

    Only the list is copied; the Connection records are shared with the
    input and their ``strength`` is overwritten.

    Args:
        connections: Connections in sample order
        snapshot: Compute from pre-pass strengths instead of progressively

    Returns:
        New list holding the same, updated, Connection records
    """
    result = list(connections)

    if snapshot:
        frozen = [Connection(c.source, c.target, c.strength) for c in result]
        strengths = [weakest_link(frozen, c.source, c.strength) for c in frozen]
        for conn, strength in zip(result, strengths):
            conn.strength = strength
        return result

    for conn in result:
        conn.strength = weakest_link(result, conn.source, conn.strength)
    return result
