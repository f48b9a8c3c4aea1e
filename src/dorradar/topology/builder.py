"""Radar graph builder: probe samples to deduplicated nodes and connections."""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

import networkx as nx

from ..prometheus.response import Sample
from .reshape import ReshapeRule, attrs_for, shape_for, size_for


@dataclass
class Node:
    """A radar node, one per distinct shaped name."""

    id: int
    name: str
    attrs: list[str]
    size: int

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "attrs": list(self.attrs),
            "size": self.size,
        }


@dataclass
class Connection:
    """A directed probe edge. ``strength`` is rewritten once by propagation."""

    source: int
    target: int
    strength: float

    def to_dict(self) -> dict:
        return {
            "source": self.source,
            "target": self.target,
            "strength": self.strength,
        }


@dataclass
class RadarGraph:
    """Nodes and connections ready for rendering."""

    nodes: list[Node] = field(default_factory=list)
    connections: list[Connection] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "nodes": [n.to_dict() for n in self.nodes],
            "connections": [c.to_dict() for c in self.connections],
        }

    def to_networkx(self) -> nx.DiGraph:
        """Return the graph as a NetworkX DiGraph keyed by node id."""
        graph = nx.DiGraph()
        for node in self.nodes:
            graph.add_node(node.id, name=node.name, attrs=list(node.attrs), size=node.size)
        for conn in self.connections:
            # Parallel probes collapse onto one edge; keep the weakest.
            if graph.has_edge(conn.source, conn.target):
                current = graph[conn.source][conn.target]["strength"]
                if conn.strength >= current:
                    continue
            graph.add_edge(conn.source, conn.target, strength=conn.strength)
        return graph


class RadarGraphBuilder:
    """Build a radar graph for a single request.

    The dedup table maps shaped names to node ids and lives only as long as
    the builder, so builders must not be shared between requests.
    """

    def __init__(self, rules: Sequence[ReshapeRule] = ()):
        self.rules = rules
        self.nodes: list[Node] = []
        self.connections: list[Connection] = []
        self._ids: dict[str, int] = {}

    def _resolve(self, label: str) -> int:
        name = shape_for(self.rules, label)
        node_id = self._ids.get(name)
        if node_id is None:
            node_id = len(self.nodes)
            self._ids[name] = node_id
            # attrs and size follow the raw label that created the node
            self.nodes.append(
                Node(
                    id=node_id,
                    name=name,
                    attrs=attrs_for(self.rules, label),
                    size=size_for(self.rules, label),
                )
            )
        return node_id

    def add_sample(self, sample: Sample) -> Connection:
        """Add one sample; the source is resolved strictly before the target."""
        source = self._resolve(sample.source)
        target = self._resolve(sample.target)
        conn = Connection(source=source, target=target, strength=sample.value)
        self.connections.append(conn)
        return conn

    def add_samples(self, samples: Iterable[Sample]) -> None:
        for sample in samples:
            self.add_sample(sample)

    def get_graph(self) -> RadarGraph:
        return RadarGraph(nodes=self.nodes, connections=self.connections)


def extract_graph(
    samples: Iterable[Sample],
    rules: Sequence[ReshapeRule] = (),
) -> tuple[list[Node], list[Connection]]:
    """
    Turn samples into deduplicated nodes and raw (unpropagated) connections.

    Args:
        samples: Parsed probe samples, in response order
        rules: Reshape rules from configuration

    Returns:
        Tuple of (nodes, connections)
    """
    builder = RadarGraphBuilder(rules)
    builder.add_samples(samples)
    return builder.nodes, builder.connections
