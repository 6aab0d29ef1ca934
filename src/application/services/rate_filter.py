"""
Application service: narrow a Feed to one currency inside the trading window.

Quotes stamped at or after the cutoff hour are stale or holiday entries the
upstream feed injects and never belong on the chart.
"""

import logging

from src.domain.entities.quote import Feed, FilteredSeries

logger = logging.getLogger(__name__)

TRADING_HOUR_CUTOFF = 17


class RateFilter:
    def __init__(self, hour_cutoff: int = TRADING_HOUR_CUTOFF) -> None:
        self._hour_cutoff = hour_cutoff

    def filter(self, feed: Feed, currency_code: str) -> FilteredSeries:
        """Return *currency_code*'s quotes whose hour is before the cutoff.

        Feed traversal order is kept; the result is not re-sorted.
        """
        code = currency_code.strip().upper()
        scanned = 0
        kept = []
        for bucket in feed:
            for record in bucket.spot_list_rates:
                scanned += 1
                if record.currency_code == code and record.timestamp.hour < self._hour_cutoff:
                    kept.append(record)

        series = FilteredSeries(currency_code=code, records=tuple(kept))
        logger.debug("%s: kept %d of %d quotes", code, len(series), scanned)
        if not series.is_time_ordered:
            logger.warning("%s: feed is not time-ordered; curves follow feed order", code)
        return series
