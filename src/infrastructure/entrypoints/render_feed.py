"""
CLI entry point: render charts for a feed file into a local directory.

This script is the Composition Root for offline runs. With ``--svg-only`` it
writes the SVG markup and needs nothing but Python; otherwise each chart is
rasterized with ImageMagick and written through LocalDirectoryPublisher using
the same key layout as the bucket.

    python -m src.infrastructure.entrypoints.render_feed rates.json --out-dir charts
"""

import argparse
import asyncio
import json
import sys
from datetime import date
from pathlib import Path
from typing import Optional, Sequence

from dotenv import load_dotenv

from src.application.services.feed_parser import parse_feed
from src.application.services.svg_serializer import to_svg
from src.application.use_cases.build_rate_chart import BuildRateChartUseCase
from src.application.use_cases.publish_rate_charts import (
    DEFAULT_CURRENCY_CODES,
    PublishRateChartsUseCase,
    normalize_codes,
)
from src.domain.entities.chart import ChartConfig
from src.domain.errors import ChartError
from src.infrastructure.entrypoints.composition import configure_logging
from src.infrastructure.rasterizer.imagemagick_adapter import ImageMagickRasterizer
from src.infrastructure.storage.local_publisher import LocalDirectoryPublisher


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Render exchange-rate high/low charts")
    parser.add_argument("feed", type=Path, help="JSON feed file (list of date-buckets)")
    parser.add_argument("--out-dir", type=Path, default=Path("charts"))
    parser.add_argument(
        "--codes",
        default=",".join(DEFAULT_CURRENCY_CODES),
        help="Comma-separated currency codes",
    )
    parser.add_argument("--svg-only", action="store_true", help="Skip rasterization")
    parser.add_argument("--legend", action="store_true", help="Draw the Sell/Buy legend")
    parser.add_argument("--convert", default="convert", help="ImageMagick binary")
    parser.add_argument("--log-level", default=None)
    return parser


def render_svgs(builder: BuildRateChartUseCase, feed, codes: Sequence[str], out_dir: Path) -> int:
    failures = 0
    out_dir.mkdir(parents=True, exist_ok=True)
    for code in codes:
        try:
            scene = builder.execute(feed, code)
        except ChartError as exc:
            failures += 1
            print(f"{code}: error: {exc}")
            continue
        target = out_dir / f"{code}.svg"
        target.write_text(to_svg(scene), encoding="utf-8")
        print(f"{code}: {target}")
    return failures


async def render_pngs(use_case: PublishRateChartsUseCase, feed, codes: Sequence[str]) -> int:
    outcomes = await use_case.execute(feed, codes=codes, generated_on=date.today())
    failures = 0
    for code, outcome in outcomes.items():
        if outcome.ok:
            print(f"{code}: {outcome.chart.url}")
        else:
            failures += 1
            print(f"{code}: error: {outcome.error_type}: {outcome.message}")
    return failures


def main(argv: Optional[Sequence[str]] = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    try:
        raw = json.loads(args.feed.read_text(encoding="utf-8"))
        feed = parse_feed(raw)
    except (OSError, ValueError, ChartError) as exc:
        print(f"cannot read feed {args.feed}: {exc}", file=sys.stderr)
        return 2

    codes = normalize_codes(args.codes.split(","))
    builder = BuildRateChartUseCase(ChartConfig(show_legend=args.legend))
    if args.svg_only:
        failures = render_svgs(builder, feed, codes, args.out_dir)
    else:
        use_case = PublishRateChartsUseCase(
            builder=builder,
            rasterizer=ImageMagickRasterizer(args.convert),
            publisher=LocalDirectoryPublisher(args.out_dir),
        )
        failures = asyncio.run(render_pngs(use_case, feed, codes))
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
