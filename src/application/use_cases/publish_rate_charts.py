"""
Use-case: build, rasterize and publish one chart per currency code.
Depends only on Domain ports and entities, no infrastructure imports.

Every code runs as an independent asyncio task. Building the scene is
synchronous CPU work; only the rasterizer and publisher calls suspend, and
each of those is bounded by ``step_timeout``. A failure is reported for its
own code and never cancels the others.
"""

import asyncio
import logging
from datetime import date
from typing import Awaitable, Iterable, Optional, TypeVar

from src.application.services.svg_serializer import to_svg
from src.application.use_cases.build_rate_chart import BuildRateChartUseCase
from src.domain.entities.publication import ChartOutcome, EncodeParameters, PublishedChart
from src.domain.entities.quote import Feed
from src.domain.errors import ChartError, PublishError, RasterizationError
from src.domain.ports.chart_publisher_port import IChartPublisher
from src.domain.ports.rasterizer_port import IRasterizer

logger = logging.getLogger(__name__)

DEFAULT_CURRENCY_CODES: tuple[str, ...] = ("USD", "EUR", "CNY", "JPY", "HKD")
DEFAULT_STEP_TIMEOUT_SECONDS = 30.0

T = TypeVar("T")


def chart_key(currency_code: str, generated_on: date, prefix: str = "") -> str:
    """Destination key ``{YYYYMMDD}/{CODE}_HIGHLOW_{YYYYMMDD}.png``."""
    stamp = generated_on.strftime("%Y%m%d")
    key = f"{stamp}/{currency_code}_HIGHLOW_{stamp}.png"
    return f"{prefix.strip('/')}/{key}" if prefix.strip("/") else key


def normalize_codes(codes: Iterable[str]) -> list[str]:
    """Uppercase, strip and de-duplicate *codes*, keeping first-seen order."""
    seen: dict[str, None] = {}
    for code in codes:
        cleaned = code.strip().upper()
        if cleaned:
            seen.setdefault(cleaned, None)
    return list(seen)


class PublishRateChartsUseCase:
    def __init__(
        self,
        builder: BuildRateChartUseCase,
        rasterizer: IRasterizer,
        publisher: IChartPublisher,
        encode_params: Optional[EncodeParameters] = None,
        step_timeout: float = DEFAULT_STEP_TIMEOUT_SECONDS,
        default_codes: Iterable[str] = DEFAULT_CURRENCY_CODES,
        key_prefix: str = "",
    ) -> None:
        """
        Args:
            builder:       Pure chart builder shared by every task.
            rasterizer:    IRasterizer implementation (e.g. ImageMagick adapter).
            publisher:     IChartPublisher implementation (e.g. S3 adapter).
            encode_params: PNG encoding parameters passed to the rasterizer.
            step_timeout:  Seconds allowed for each rasterize / publish call.
            default_codes: Codes used when the caller does not name any.
            key_prefix:    Optional prefix prepended to every destination key.
        """
        self._builder = builder
        self._rasterizer = rasterizer
        self._publisher = publisher
        self._params = encode_params or EncodeParameters()
        self._step_timeout = step_timeout
        self._default_codes = normalize_codes(default_codes)
        self._key_prefix = key_prefix

    async def execute(
        self,
        feed: Feed,
        codes: Optional[Iterable[str]] = None,
        generated_on: Optional[date] = None,
    ) -> dict[str, ChartOutcome]:
        """Generate and publish charts for *codes*.

        Returns:
            Mapping of currency code → ChartOutcome, in the requested order.
            Every requested code is present, whether it succeeded or not.
        """
        requested = normalize_codes(codes) if codes is not None else list(self._default_codes)
        generated_on = generated_on or date.today()
        outcomes = await asyncio.gather(
            *(self._run_one(feed, code, generated_on) for code in requested)
        )
        failed = [o.currency_code for o in outcomes if not o.ok]
        logger.info(
            "Published %d of %d charts%s",
            len(requested) - len(failed),
            len(requested),
            f" (failed: {', '.join(failed)})" if failed else "",
        )
        return {outcome.currency_code: outcome for outcome in outcomes}

    async def _run_one(self, feed: Feed, code: str, generated_on: date) -> ChartOutcome:
        try:
            chart = await self._generate(feed, code, generated_on)
        except ChartError as exc:
            logger.warning("%s: chart generation failed: %s", code, exc)
            return ChartOutcome.failure(code, exc)
        except Exception as exc:
            logger.exception("%s: unexpected error during chart generation", code)
            return ChartOutcome.failure(code, exc)
        return ChartOutcome(currency_code=code, chart=chart)

    async def _generate(self, feed: Feed, code: str, generated_on: date) -> PublishedChart:
        scene = self._builder.execute(feed, code)
        svg = to_svg(scene)

        image = await self._bounded(
            self._rasterizer.rasterize(svg, self._params), RasterizationError, "rasterization"
        )
        if not image:
            raise RasterizationError(f"rasterizer returned no image data for {code}")

        key = chart_key(code, generated_on, self._key_prefix)
        chart = await self._bounded(
            self._publisher.publish(code, image, key), PublishError, "publishing"
        )
        logger.info("%s: chart published at %s", code, key)
        return chart

    async def _bounded(self, call: Awaitable[T], error: type[ChartError], step: str) -> T:
        try:
            return await asyncio.wait_for(call, timeout=self._step_timeout)
        except asyncio.TimeoutError as exc:
            raise error(f"{step} timed out after {self._step_timeout}s") from exc
