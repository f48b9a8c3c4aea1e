"""Aggregation query construction for the Prometheus HTTP API."""

import logging
from urllib.parse import unquote, urlsplit, urlunsplit

import requests
from requests.auth import HTTPBasicAuth

from ..core.exceptions import ConfigError, InvalidWindowError

logger = logging.getLogger(__name__)

MIN_WINDOW = 1
MAX_WINDOW = 60
DEFAULT_WINDOW = 10

METRIC = "probe_success"
QUERY_PATH = ("api", "v1", "query")


def validate_window(window: int) -> int:
    """Check an aggregation window in minutes (1-60 inclusive)."""
    if isinstance(window, bool) or not isinstance(window, int):
        raise InvalidWindowError(window, "window must be an integer number of minutes")
    if window < MIN_WINDOW:
        raise InvalidWindowError(window, f"minimum range is {MIN_WINDOW} minute")
    if window > MAX_WINDOW:
        raise InvalidWindowError(window, f"maximum range is {MAX_WINDOW} minutes")
    return window


def build_query(window: int, use_minimum: bool, filter_expr: str = "") -> str:
    """
    Build the PromQL aggregation over ``probe_success``.

    Args:
        window: Aggregation window in minutes
        use_minimum: Use ``min_over_time`` instead of ``avg_over_time``
        filter_expr: Label selector fragment inserted verbatim, e.g. ``{job="x"}``

    Returns:
        Query string such as ``avg_over_time(probe_success[10m])``
    """
    validate_window(window)
    function = "min_over_time" if use_minimum else "avg_over_time"
    return f"{function}({METRIC}{filter_expr}[{window}m])"


def split_credentials(target: str) -> tuple[str, HTTPBasicAuth | None]:
    """Strip ``user:pass@`` from a target URL and return it as basic auth."""
    parts = urlsplit(target)
    if "@" not in parts.netloc:
        return target, None

    userinfo, _, hostport = parts.netloc.rpartition("@")
    username, _, password = userinfo.partition(":")
    clean = urlunsplit((parts.scheme, hostport, parts.path, parts.query, parts.fragment))
    return clean, HTTPBasicAuth(unquote(username), unquote(password))


def query_url(target: str) -> str:
    """Join the instant-query API path onto the target's own path."""
    parts = urlsplit(target)
    path = "/".join([parts.path.rstrip("/"), *QUERY_PATH])
    return urlunsplit((parts.scheme, parts.netloc, path, parts.query, ""))


def build_request(
    window: int,
    use_minimum: bool,
    target: str,
    filter_expr: str = "",
) -> requests.PreparedRequest:
    """
    Build the authenticated instant-query request. No network I/O happens here.

    Args:
        window: Aggregation window in minutes (1-60)
        use_minimum: Select the minimum aggregation instead of the average
        target: Base URL of the metrics store, optionally with embedded credentials
        filter_expr: Label selector fragment appended to the metric name

    Returns:
        Prepared GET request carrying the query as the ``query`` parameter
    """
    query = build_query(window, use_minimum, filter_expr)
    try:
        url, auth = split_credentials(target)
        request = requests.Request(
            "GET",
            query_url(url),
            params={"query": query},
            auth=auth,
        )
        prepared = request.prepare()
    except (requests.RequestException, ValueError) as e:
        raise ConfigError("Invalid collector target", str(e)) from e

    logger.debug("Prepared query %s against %s", query, url)
    return prepared
