"""Custom exceptions for dor-radar."""


class RadarError(Exception):
    """Base exception for all dor-radar errors."""

    status_code = 500

    def __init__(self, message: str, details: str | None = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class InvalidWindowError(RadarError):
    """Aggregation window outside the accepted range."""

    status_code = 400

    def __init__(self, window: object, details: str | None = None):
        super().__init__("window out of range", details or f"got {window!r}, expected 1-60 minutes")
        self.window = window


class TransportError(RadarError):
    """The request to the metrics store could not be completed."""

    pass


class ParseError(RadarError):
    """Response body could not be decoded into a query result."""

    pass


class QueryFailedError(RadarError):
    """The metrics store reported a non-success status."""

    def __init__(self, status: object, details: str | None = None):
        super().__init__(f"query failed: {status}", details)
        self.status = status


class ValueFormatError(RadarError):
    """A sample value was not numeric."""

    def __init__(self, value: object, index: int):
        super().__init__(f"Invalid sample value at result {index}", repr(value))
        self.value = value
        self.index = index


class ConfigError(RadarError):
    """Configuration could not be loaded."""

    pass
