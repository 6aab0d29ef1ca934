"""
Domain entities for chart layout: configuration, scales and ticks.
Zero external dependencies; pure Python dataclasses only.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Union

from src.domain.errors import DegenerateRangeError

_EPOCH = datetime(1970, 1, 1)


def to_epoch_ms(value: datetime) -> int:
    """Wall-clock milliseconds since 1970-01-01 (aware values are taken as UTC)."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return (value - _EPOCH) // timedelta(milliseconds=1)


def from_epoch_ms(value: int) -> datetime:
    return _EPOCH + timedelta(milliseconds=value)


@dataclass(frozen=True)
class Margin:
    top: int = 10
    right: int = 12
    bottom: int = 15
    left: int = 30


@dataclass(frozen=True)
class ChartConfig:
    margin: Margin = field(default_factory=Margin)
    base_width: int = 425
    base_height: int = 200
    band_height: int = 15
    pad_ratio: float = 0.14
    x_tick_count: int = 5
    y_tick_count: int = 6
    hour_cutoff: int = 17
    show_legend: bool = False
    legend_height: int = 24
    ask_color: str = "#7cb5ec"
    bid_color: str = "#f7a35c"
    band_color: str = "rgba(68, 170, 213, 0.1)"
    band_alt_color: str = "rgba(0,0,0,0)"
    grid_color: str = "#D8D8D8"
    label_color: str = "#707070"
    stroke_width: int = 2

    @property
    def draw_width(self) -> int:
        return self.base_width - self.margin.left - self.margin.right

    @property
    def draw_height(self) -> int:
        return self.base_height - self.margin.top - self.margin.bottom


@dataclass(frozen=True)
class LinearScale:
    """Linear mapping from ``domain`` onto ``range``.

    A zero-width domain has no meaningful mapping and is rejected.
    """

    domain: tuple[float, float]
    range: tuple[float, float]

    def __post_init__(self) -> None:
        d0, d1 = self.domain
        if d0 == d1:
            raise DegenerateRangeError(f"scale domain has zero width: [{d0}, {d1}]")

    def __call__(self, value: float) -> float:
        d0, d1 = self.domain
        r0, r1 = self.range
        return r0 + (value - d0) / (d1 - d0) * (r1 - r0)


@dataclass(frozen=True)
class TimeScale(LinearScale):
    """LinearScale over epoch milliseconds that also accepts datetimes."""

    def __call__(self, value: Union[datetime, int, float]) -> float:
        if isinstance(value, datetime):
            value = to_epoch_ms(value)
        return super().__call__(value)


@dataclass(frozen=True)
class ChartScales:
    """Scales plus the unpadded extents they were derived from.

    ``min_bid`` and ``max_ask`` bound every plotted rate; for well-formed quotes
    they are the lowest bid and the highest ask.
    """

    time_scale: TimeScale
    price_scale: LinearScale
    min_time: datetime
    max_time: datetime
    min_bid: float
    max_ask: float
    pad: float


@dataclass(frozen=True)
class TickSet:
    x_ticks: tuple[datetime, ...]
    y_ticks: tuple[float, ...]
    y_step: float
