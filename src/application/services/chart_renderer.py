"""
Application service: compose the high/low chart as an immutable VectorScene.

Layout, from back to front: alternating background bands behind the quoted
price range, the time axis with full-height gridlines, the price axis
(labels only), the ask and bid curves, and optionally a Sell/Buy legend
beneath the plot. The renderer performs no I/O and reads no clock; equal
inputs always produce equal scenes.
"""

import math

from src.application.services.curve_basis import basis_path, fmt
from src.domain.entities.chart import ChartConfig, ChartScales, TickSet
from src.domain.entities.quote import FilteredSeries
from src.domain.entities.scene import Group, Line, Node, Path, Rect, Text, VectorScene

TIME_LABEL_FORMAT = "%b%d"
LABEL_STYLE = "color:{color};font-size:9px;text-transform:uppercase;fill:{color};"
LEGEND_STYLE = "color:#333333;font-size:13px;font-weight:bold;fill:#333333;"
LEGEND_WIDTH = 119
TICK_PADDING = 3


def format_time_label(value) -> str:
    return value.strftime(TIME_LABEL_FORMAT)


def price_decimals(step: float) -> int:
    """Decimals needed for labels *step* apart to read differently."""
    if step <= 0 or not math.isfinite(step):
        return 2
    return min(6, max(0, 1 - math.floor(math.log10(step))))


def format_price_label(value: float, decimals: int) -> str:
    return f"{value:.{decimals}f}"


def _translate(x: float, y: float) -> str:
    return f"translate({fmt(x)},{fmt(y)})"


class ChartRenderer:
    def __init__(self, config: ChartConfig | None = None) -> None:
        self._config = config or ChartConfig()

    def render(self, series: FilteredSeries, scales: ChartScales, ticks: TickSet) -> VectorScene:
        cfg = self._config
        children: list[Node] = [
            self._bands(scales),
            self._x_axis(scales, ticks),
            self._y_axis(scales, ticks),
            self._curve(series, scales, "ask_rate", cfg.ask_color, "ask-line"),
            self._curve(series, scales, "bid_rate", cfg.bid_color, "bid-line"),
        ]
        height = cfg.base_height
        if cfg.show_legend:
            children.append(self._legend())
            height += cfg.legend_height

        root = Group(
            children=tuple(children),
            transform=_translate(cfg.margin.left, cfg.margin.top),
            css_class="chart",
        )
        return VectorScene(
            width=cfg.base_width,
            height=height,
            title=f"{series.currency_code} Exchange Rate",
            root=root,
        )

    def _bands(self, scales: ChartScales) -> Group:
        cfg = self._config
        top = scales.price_scale(scales.max_ask)
        bottom = scales.price_scale(scales.min_bid)
        rects = []
        y = top
        accent = True
        while bottom - y > 1e-9:
            height = min(cfg.band_height, bottom - y)
            rects.append(
                Rect(
                    x=0,
                    y=round(y, 3),
                    width=cfg.draw_width,
                    height=round(height, 3),
                    fill=cfg.band_color if accent else cfg.band_alt_color,
                )
            )
            accent = not accent
            y += cfg.band_height
        return Group(children=tuple(rects), css_class="bands")

    def _x_axis(self, scales: ChartScales, ticks: TickSet) -> Group:
        cfg = self._config
        style = LABEL_STYLE.format(color=cfg.label_color)
        # domain line without outer ticks
        nodes: list[Node] = [Path(d=f"M0,0H{fmt(cfg.draw_width)}", stroke=cfg.grid_color)]
        for tick in ticks.x_ticks:
            nodes.append(
                Group(
                    children=(
                        Line(x1=0, y1=0, x2=0, y2=-cfg.draw_height, stroke=cfg.grid_color),
                        Text(
                            text=format_time_label(tick),
                            y=TICK_PADDING,
                            dy="0.71em",
                            text_anchor="middle",
                            style=style,
                        ),
                    ),
                    transform=_translate(scales.time_scale(tick), 0),
                    css_class="tick",
                )
            )
        return Group(
            children=tuple(nodes),
            transform=_translate(0, cfg.draw_height),
            css_class="x-axis",
        )

    def _y_axis(self, scales: ChartScales, ticks: TickSet) -> Group:
        cfg = self._config
        style = LABEL_STYLE.format(color=cfg.label_color)
        decimals = price_decimals(ticks.y_step)
        nodes = tuple(
            Group(
                children=(
                    Line(x1=0, y1=0, x2=0, y2=0, stroke=cfg.grid_color),
                    Text(
                        text=format_price_label(tick, decimals),
                        x=-TICK_PADDING,
                        dy="0.32em",
                        text_anchor="end",
                        style=style,
                    ),
                ),
                transform=_translate(0, scales.price_scale(tick)),
                css_class="tick",
            )
            for tick in ticks.y_ticks
        )
        return Group(children=nodes, css_class="y-axis")

    def _curve(
        self,
        series: FilteredSeries,
        scales: ChartScales,
        field: str,
        color: str,
        css_class: str,
    ) -> Group:
        points = [
            (scales.time_scale(r.timestamp), scales.price_scale(getattr(r, field)))
            for r in series
        ]
        path = Path(d=basis_path(points), stroke=color, stroke_width=self._config.stroke_width)
        return Group(children=(path,), css_class=css_class)

    def _legend(self) -> Group:
        cfg = self._config
        return Group(
            children=(
                Path(d="M 0 12 L 16 12", stroke=cfg.ask_color, stroke_width=cfg.stroke_width),
                Text(text="Sell", x=21, y=16, text_anchor="start", style=LEGEND_STYLE),
                Path(d="M 70 12 L 86 12", stroke=cfg.bid_color, stroke_width=cfg.stroke_width),
                Text(text="Buy", x=91, y=16, text_anchor="start", style=LEGEND_STYLE),
            ),
            transform=_translate((cfg.draw_width - LEGEND_WIDTH) / 2, cfg.draw_height + 13),
            css_class="legend",
        )
