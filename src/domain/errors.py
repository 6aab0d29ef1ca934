"""
Chart service exception hierarchy.

All chart-specific exceptions derive from :class:`ChartError` so the
orchestration layer can turn any of them into a per-currency failure
without catching unrelated errors.
"""


class ChartError(Exception):
    """Base class for chart generation errors."""


class ConfigError(ChartError):
    """Raised when an environment setting is missing or invalid."""


class ParseError(ChartError):
    """Raised when a feed record cannot be parsed.

    The whole feed is rejected; ``bucket_index`` and ``record_index`` locate
    the first offending record.
    """

    def __init__(
        self,
        message: str,
        bucket_index: int | None = None,
        record_index: int | None = None,
    ) -> None:
        location = []
        if bucket_index is not None:
            location.append(f"bucket {bucket_index}")
        if record_index is not None:
            location.append(f"record {record_index}")
        prefix = f"{', '.join(location)}: " if location else ""
        super().__init__(f"{prefix}{message}")
        self.bucket_index = bucket_index
        self.record_index = record_index


class EmptyDatasetError(ChartError):
    """Raised when a currency code has no quotes after filtering."""

    def __init__(self, currency_code: str) -> None:
        super().__init__(f"No quotes available for currency code {currency_code!r}")
        self.currency_code = currency_code


class DegenerateRangeError(ChartError):
    """Raised when a scale would be built over a zero-width domain."""


class RasterizationError(ChartError):
    """Raised when converting a vector scene to a bitmap fails."""


class PublishError(ChartError):
    """Raised when uploading an image or signing its URL fails."""


__all__ = [
    "ChartError",
    "ConfigError",
    "ParseError",
    "EmptyDatasetError",
    "DegenerateRangeError",
    "RasterizationError",
    "PublishError",
]
