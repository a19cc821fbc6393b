class StockApiError(Exception):
    """Base class for errors that map onto an HTTP status."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(StockApiError):
    """Unknown symbol, empty provider payload or missing cached record."""

    status_code = 404


class RateLimitedError(StockApiError):
    """Provider quota exhausted or rate-limit marker found in the payload."""

    status_code = 429


class UpstreamError(StockApiError):
    """Transport failure or non-OK response from an external API."""

    status_code = 502


class UpstreamFormatError(UpstreamError):
    """External API answered, but the payload could not be interpreted."""


class ConfigError(StockApiError):
    """A required credential or setting is missing."""

    status_code = 500


class CacheError(StockApiError):
    """The prediction store could not be read or written."""

    status_code = 500
