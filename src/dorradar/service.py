"""Request-level facade: one call per inbound status request."""

import logging
from collections.abc import Mapping

import requests

from .core.config import CollectorConfig
from .core.exceptions import InvalidWindowError
from .prometheus.client import PrometheusClient
from .prometheus.query import DEFAULT_WINDOW, build_request
from .prometheus.response import parse_response
from .topology.builder import RadarGraph, RadarGraphBuilder
from .topology.propagation import propagate

logger = logging.getLogger(__name__)

MINIMUM_METHOD = "min"


def parse_params(params: Mapping[str, str]) -> tuple[int, bool]:
    """Map ``window``/``method`` query parameters to handle() arguments."""
    raw_window = params.get("window") or str(DEFAULT_WINDOW)
    try:
        window = int(raw_window)
    except ValueError as e:
        raise InvalidWindowError(raw_window, "window must be an integer") from e
    return window, params.get("method") == MINIMUM_METHOD


class RadarService:
    """Builds radar graphs from the configured Prometheus collector.

    The collector config is shared read-only; every call to ``handle``
    works on its own samples, dedup table, connection list and HTTP session,
    so one service can serve concurrent requests. Passing ``session`` pins
    all calls to that session, which is then not safe to share across threads.
    """

    def __init__(
        self,
        config: CollectorConfig,
        session: requests.Session | None = None,
        snapshot: bool | None = None,
    ):
        self.config = config
        self.client = PrometheusClient(timeout=config.timeout, session=session)
        self.snapshot = config.snapshot_propagation if snapshot is None else snapshot

    def build_graph(self, window: int | None = None, use_minimum: bool | None = None) -> RadarGraph:
        """Query Prometheus and return the propagated radar graph."""
        if window is None:
            window = DEFAULT_WINDOW
        request = build_request(window, bool(use_minimum), self.config.target, self.config.filter)

        body = self.client.fetch(request)
        samples = parse_response(body)

        builder = RadarGraphBuilder(self.config.shapes)
        builder.add_samples(samples)
        graph = builder.get_graph()
        graph.connections = propagate(graph.connections, snapshot=self.snapshot)

        logger.info(
            "Built radar graph: %d nodes, %d connections (window=%dm, %s)",
            len(graph.nodes),
            len(graph.connections),
            window,
            "min" if use_minimum else "avg",
        )
        return graph

    def handle(self, window: int | None = None, use_minimum: bool | None = None) -> dict:
        """Return the graph JSON for one request; errors propagate unchanged."""
        return self.build_graph(window, use_minimum).to_dict()

    def handle_params(self, params: Mapping[str, str]) -> dict:
        window, use_minimum = parse_params(params)
        return self.handle(window, use_minimum)
