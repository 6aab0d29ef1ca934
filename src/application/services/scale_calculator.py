"""
Application service: derive the time and price scales for one chart.

Business decisions owned here:
  - PAD_RATIO: headroom above the highest ask and below the lowest bid.
  - Minimum extents used when every quote shares a price or a timestamp,
    so neither scale is ever built over a zero-width domain.
"""

import logging
from datetime import timedelta

from src.domain.entities.chart import (
    ChartConfig,
    ChartScales,
    LinearScale,
    TimeScale,
    to_epoch_ms,
)
from src.domain.entities.quote import FilteredSeries
from src.domain.errors import EmptyDatasetError

logger = logging.getLogger(__name__)

MIN_PRICE_HALF_RANGE = 0.005
MIN_PRICE_HALF_RANGE_RATIO = 0.005
MIN_TIME_HALF_SPAN = timedelta(minutes=30)


class ScaleCalculator:
    def __init__(self, config: ChartConfig | None = None) -> None:
        self._config = config or ChartConfig()

    def calculate(self, series: FilteredSeries) -> ChartScales:
        """Compute scales for *series*.

        Raises:
            EmptyDatasetError: if *series* has no quotes.
        """
        if series.is_empty:
            raise EmptyDatasetError(series.currency_code)

        max_ask = max(r.ask_rate for r in series)
        min_bid = min(r.bid_rate for r in series)
        if max_ask < min_bid:
            logger.warning(
                "%s: every ask is below every bid (ask %s, bid %s); scaling to all rates",
                series.currency_code, max_ask, min_bid,
            )
        # extent covers both curves; equals (min bid, max ask) for well-formed quotes
        rates = [rate for r in series for rate in (r.ask_rate, r.bid_rate)]
        max_ask, min_bid = max(rates), min(rates)
        if max_ask == min_bid:
            mid = (max_ask + min_bid) / 2
            half = max(abs(mid) * MIN_PRICE_HALF_RANGE_RATIO, MIN_PRICE_HALF_RANGE)
            logger.warning(
                "%s: price range is degenerate (ask %s, bid %s); using [%s, %s]",
                series.currency_code, max_ask, min_bid, mid - half, mid + half,
            )
            min_bid, max_ask = mid - half, mid + half

        min_time = min(r.timestamp for r in series)
        max_time = max(r.timestamp for r in series)
        if to_epoch_ms(min_time) == to_epoch_ms(max_time):
            logger.warning(
                "%s: all quotes share timestamp %s; widening time axis by %s each side",
                series.currency_code, min_time, MIN_TIME_HALF_SPAN,
            )
            min_time, max_time = min_time - MIN_TIME_HALF_SPAN, max_time + MIN_TIME_HALF_SPAN

        pad = (max_ask - min_bid) * self._config.pad_ratio
        time_scale = TimeScale(
            domain=(to_epoch_ms(min_time), to_epoch_ms(max_time)),
            range=(0, self._config.draw_width),
        )
        price_scale = LinearScale(
            domain=(min_bid - pad, max_ask + pad),
            range=(self._config.draw_height, 0),
        )
        return ChartScales(
            time_scale=time_scale,
            price_scale=price_scale,
            min_time=min_time,
            max_time=max_time,
            min_bid=min_bid,
            max_ask=max_ask,
            pad=pad,
        )
