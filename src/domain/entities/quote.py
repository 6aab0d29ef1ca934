"""
Domain entities for currency quote data.
Zero external dependencies; pure Python dataclasses only.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class QuoteRecord:
    currency_code: str
    timestamp: datetime
    ask_rate: float
    bid_rate: float


@dataclass(frozen=True)
class DateBucket:
    date: Optional[str]
    spot_list_rates: tuple[QuoteRecord, ...]


@dataclass(frozen=True)
class Feed:
    buckets: tuple[DateBucket, ...]

    def __iter__(self):
        return iter(self.buckets)

    def __len__(self) -> int:
        return len(self.buckets)


@dataclass(frozen=True)
class FilteredSeries:
    """Quotes for a single currency code, in feed traversal order."""

    currency_code: str
    records: tuple[QuoteRecord, ...]

    def __post_init__(self) -> None:
        for record in self.records:
            if record.currency_code != self.currency_code:
                raise ValueError(
                    f"record for {record.currency_code!r} in series for {self.currency_code!r}"
                )

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self):
        return iter(self.records)

    @property
    def is_empty(self) -> bool:
        return not self.records

    @property
    def is_time_ordered(self) -> bool:
        return all(
            a.timestamp <= b.timestamp for a, b in zip(self.records, self.records[1:])
        )
