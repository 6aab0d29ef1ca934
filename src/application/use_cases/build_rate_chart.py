"""
Use-case: build the vector chart for one currency code from a parsed feed.
Depends only on application services and domain entities, no infrastructure imports.

Each stage receives the previous stage's immutable output explicitly:
filter → scales → ticks → scene.
"""

from src.application.services.chart_renderer import ChartRenderer
from src.application.services.rate_filter import RateFilter
from src.application.services.scale_calculator import ScaleCalculator
from src.application.services.tick_generator import TickGenerator
from src.domain.entities.chart import ChartConfig
from src.domain.entities.quote import Feed
from src.domain.entities.scene import VectorScene


class BuildRateChartUseCase:
    def __init__(self, config: ChartConfig | None = None) -> None:
        self._config = config or ChartConfig()
        self._filter = RateFilter(hour_cutoff=self._config.hour_cutoff)
        self._scales = ScaleCalculator(self._config)
        self._ticks = TickGenerator(self._config.x_tick_count, self._config.y_tick_count)
        self._renderer = ChartRenderer(self._config)

    @property
    def config(self) -> ChartConfig:
        return self._config

    def execute(self, feed: Feed, currency_code: str) -> VectorScene:
        """Build the chart scene for *currency_code*.

        Raises:
            ValueError:        if *currency_code* is blank.
            EmptyDatasetError: if the feed holds no in-window quotes for the code.
        """
        if not currency_code or not currency_code.strip():
            raise ValueError("currency_code must be a non-empty string")
        series = self._filter.filter(feed, currency_code)
        scales = self._scales.calculate(series)
        ticks = self._ticks.generate(scales)
        return self._renderer.render(series, scales, ticks)
