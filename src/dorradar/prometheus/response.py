"""Decoding of Prometheus instant-query responses into probe samples."""

import json
import logging
from dataclasses import dataclass
from typing import Any

from ..core.exceptions import ParseError, QueryFailedError, ValueFormatError

logger = logging.getLogger(__name__)

SUCCESS = "success"
SOURCE_LABEL = "hostname"
TARGET_LABEL = "target"


@dataclass(frozen=True)
class Sample:
    """One probe observation from a probing node to a probed target."""

    source: str
    target: str
    value: float


def _decode(body: bytes | str) -> dict[str, Any]:
    try:
        payload = json.loads(body)
    except (TypeError, ValueError) as e:
        raise ParseError("Error parsing JSON", str(e)) from e

    if not isinstance(payload, dict) or "status" not in payload:
        raise ParseError("Response is not a query result envelope")
    return payload


def _parse_value(raw: Any, index: int) -> float:
    if isinstance(raw, bool):
        raise ValueFormatError(raw, index)
    try:
        return float(raw)
    except (TypeError, ValueError) as e:
        raise ValueFormatError(raw, index) from e


def parse_response(body: bytes | str) -> list[Sample]:
    """
    Parse a Prometheus instant-query body into samples, in result order.

    Args:
        body: Raw response body

    Returns:
        One Sample per result entry

    Raises:
        ParseError: Body is not a well-formed query result
        QueryFailedError: Prometheus reported a non-success status
        ValueFormatError: A sample value is not numeric
    """
    payload = _decode(body)

    status = payload["status"]
    if status != SUCCESS:
        details = payload.get("error")
        if payload.get("errorType"):
            details = f"{payload['errorType']}: {details}"
        logger.warning("Prometheus query failed with status %r", status)
        raise QueryFailedError(status, details)

    data = payload.get("data")
    result = data.get("result") if isinstance(data, dict) else None
    if not isinstance(result, list):
        raise ParseError("Response has no result list")

    samples: list[Sample] = []
    for index, entry in enumerate(result):
        if not isinstance(entry, dict):
            raise ParseError(f"Result {index} is not an object")
        metric = entry.get("metric", {})
        value = entry.get("value")
        if not isinstance(metric, dict):
            raise ParseError(f"Result {index} has no label map")
        if not isinstance(value, list) or len(value) != 2:
            raise ParseError(f"Result {index} value is not a [timestamp, value] pair")

        samples.append(
            Sample(
                source=str(metric.get(SOURCE_LABEL, "")),
                target=str(metric.get(TARGET_LABEL, "")),
                value=_parse_value(value[1], index),
            )
        )

    logger.debug("Parsed %d samples", len(samples))
    return samples
