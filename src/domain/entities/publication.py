"""
Domain entities exchanged with the rasterizer and publisher collaborators.
Zero external dependencies; pure Python dataclasses only.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class EncodeParameters:
    density: int = 72
    quality: int = 40
    compression_level: int = 9
    compression_filter: int = 6
    compression_strategy: int = 0
    depth: int = 8


@dataclass(frozen=True)
class PublishedChart:
    currency_code: str
    key: str
    url: str
    expires_at: Optional[datetime]


@dataclass(frozen=True)
class ChartOutcome:
    """Result for one requested currency code: a published chart or a failure."""

    currency_code: str
    chart: Optional[PublishedChart] = None
    error_type: Optional[str] = None
    message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.chart is not None

    @classmethod
    def failure(cls, currency_code: str, exc: BaseException) -> "ChartOutcome":
        return cls(
            currency_code=currency_code,
            error_type=type(exc).__name__,
            message=str(exc) or type(exc).__name__,
        )
