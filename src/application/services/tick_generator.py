"""
Application service: evenly spaced axis tick positions.

X ticks are interior only: the span is cut into ``count + 1`` periods and the
series' own first and last instants are not labelled. Y ticks include both
ends of the unpadded price range.
"""

from src.domain.entities.chart import ChartScales, TickSet, from_epoch_ms, to_epoch_ms


class TickGenerator:
    def __init__(self, x_count: int = 5, y_count: int = 6) -> None:
        if x_count < 1 or y_count < 2:
            raise ValueError("need at least one x tick and two y ticks")
        self._x_count = x_count
        self._y_count = y_count

    def generate(self, scales: ChartScales) -> TickSet:
        min_ms = to_epoch_ms(scales.min_time)
        span = to_epoch_ms(scales.max_time) - min_ms
        periods = self._x_count + 1
        # integer milliseconds, truncated toward the start
        x_ticks = tuple(
            from_epoch_ms(min_ms + (i * span) // periods) for i in range(1, periods)
        )

        step = (scales.max_ask - scales.min_bid) / (self._y_count - 1)
        y_ticks = tuple(scales.min_bid + i * step for i in range(self._y_count))
        return TickSet(x_ticks=x_ticks, y_ticks=y_ticks, y_step=step)
