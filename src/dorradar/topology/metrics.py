"""Radar topology metrics using NetworkX."""

from dataclasses import dataclass

import networkx as nx

from .builder import RadarGraph

DEGRADED_BELOW = 1.0


@dataclass
class RadarMetrics:
    """Summary of a radar graph."""

    node_count: int
    edge_count: int
    density: float
    weak_components: int
    average_strength: float | None
    min_strength: float | None
    degraded: list[tuple[str, str, float]]
    hub_nodes: list[str]

    def to_dict(self) -> dict:
        return {
            "node_count": self.node_count,
            "edge_count": self.edge_count,
            "density": round(self.density, 4),
            "weak_components": self.weak_components,
            "average_strength": (
                round(self.average_strength, 4) if self.average_strength is not None else None
            ),
            "min_strength": self.min_strength,
            "degraded": [
                {"source": src, "target": dst, "strength": round(s, 4)}
                for src, dst, s in self.degraded
            ],
            "hub_nodes": self.hub_nodes,
        }

    def __str__(self) -> str:
        lines = [
            f"Nodes: {self.node_count}",
            f"Connections: {self.edge_count}",
            f"Density: {self.density:.4f}",
            f"Weak Components: {self.weak_components}",
        ]

        if self.average_strength is not None:
            lines.append(f"Average Strength: {self.average_strength:.4f}")
            lines.append(f"Minimum Strength: {self.min_strength:.4f}")

        if self.hub_nodes:
            lines.append(f"\nHub Nodes: {', '.join(self.hub_nodes[:5])}")

        if self.degraded:
            lines.append(f"\nDegraded Connections: {len(self.degraded)}")
            for src, dst, strength in self.degraded[:5]:
                lines.append(f"  {src} -> {dst}: {strength:.4f}")

        return "\n".join(lines)


def find_hub_nodes(graph: nx.DiGraph, top_n: int = 5) -> list[str]:
    """Find hub nodes (highest degree centrality), by name."""
    if not graph.nodes():
        return []

    degree_cent = nx.degree_centrality(graph)
    sorted_nodes = sorted(degree_cent.items(), key=lambda x: (-x[1], x[0]))
    return [graph.nodes[node]["name"] for node, _ in sorted_nodes[:top_n]]


def find_degraded(radar: RadarGraph, threshold: float = DEGRADED_BELOW) -> list[tuple[str, str, float]]:
    """Connections below ``threshold``, weakest first."""
    names = {node.id: node.name for node in radar.nodes}
    degraded = [
        (names[c.source], names[c.target], c.strength)
        for c in radar.connections
        if c.strength < threshold
    ]
    return sorted(degraded, key=lambda x: x[2])


def calculate_metrics(radar: RadarGraph) -> RadarMetrics:
    """
    Calculate topology metrics for a radar graph.

    Args:
        radar: Propagated radar graph

    Returns:
        RadarMetrics for the graph
    """
    graph = radar.to_networkx()

    if not graph.nodes():
        return RadarMetrics(
            node_count=0,
            edge_count=0,
            density=0.0,
            weak_components=0,
            average_strength=None,
            min_strength=None,
            degraded=[],
            hub_nodes=[],
        )

    strengths = [c.strength for c in radar.connections]

    return RadarMetrics(
        node_count=graph.number_of_nodes(),
        edge_count=len(radar.connections),
        density=nx.density(graph),
        weak_components=nx.number_weakly_connected_components(graph),
        average_strength=sum(strengths) / len(strengths) if strengths else None,
        min_strength=min(strengths) if strengths else None,
        degraded=find_degraded(radar),
        hub_nodes=find_hub_nodes(graph),
    )
