"""
FastAPI entry point: HTTP trigger for chart generation.

This module is the Composition Root for the web service: adapters are wired
lazily on first request (see ``get_publish_use_case``) so importing the app
never touches AWS. Tests replace the providers through
``app.dependency_overrides``.

Run locally:
    CHART_PUBLISHER=local uvicorn src.infrastructure.entrypoints.fastapi_app:app --reload --port 8000
"""

from datetime import datetime
from functools import lru_cache
from typing import Literal, Optional

from dotenv import load_dotenv
from fastapi import Body, Depends, FastAPI, HTTPException, Query
from fastapi.responses import Response
from pydantic import BaseModel

load_dotenv()

from src.application.services.feed_parser import DateBucketPayload, to_feed
from src.application.services.svg_serializer import to_svg
from src.application.use_cases.build_rate_chart import BuildRateChartUseCase
from src.application.use_cases.publish_rate_charts import PublishRateChartsUseCase
from src.domain.entities.publication import ChartOutcome
from src.domain.errors import EmptyDatasetError
from src.infrastructure.config.settings import Settings
from src.infrastructure.entrypoints.composition import (
    build_chart_builder,
    build_publish_use_case,
    configure_logging,
    load_settings,
)

configure_logging()


# ---------------------------------------------------------------------------
# Composition Root, wired once on first use
# ---------------------------------------------------------------------------
@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()


@lru_cache(maxsize=1)
def get_publish_use_case() -> PublishRateChartsUseCase:
    return build_publish_use_case(get_settings())


@lru_cache(maxsize=1)
def get_chart_builder() -> BuildRateChartUseCase:
    return build_chart_builder(get_settings())


# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(title="Exchange Rate Chart API")


class ChartResult(BaseModel):
    status: Literal["ok", "error"]
    url: Optional[str] = None
    key: Optional[str] = None
    expires_at: Optional[datetime] = None
    error_type: Optional[str] = None
    message: Optional[str] = None

    @classmethod
    def from_outcome(cls, outcome: ChartOutcome) -> "ChartResult":
        if outcome.ok:
            return cls(
                status="ok",
                url=outcome.chart.url,
                key=outcome.chart.key,
                expires_at=outcome.chart.expires_at,
            )
        return cls(status="error", error_type=outcome.error_type, message=outcome.message)


class ChartsResponse(BaseModel):
    results: dict[str, ChartResult]


def _split_codes(codes: Optional[str]) -> Optional[list[str]]:
    if codes is None:
        return None
    parsed = [c for c in (part.strip() for part in codes.split(",")) if c]
    if not parsed:
        raise HTTPException(status_code=422, detail="codes must name at least one currency")
    return parsed


@app.post("/charts", response_model=ChartsResponse)
async def generate_charts(
    feed: list[DateBucketPayload] = Body(...),
    codes: Optional[str] = Query(None, description="Comma-separated currency codes"),
    use_case: PublishRateChartsUseCase = Depends(get_publish_use_case),
) -> ChartsResponse:
    """Generate, rasterize and publish one chart per currency code.

    Every requested code appears in the response, either with its URL or with
    the reason it failed.
    """
    outcomes = await use_case.execute(to_feed(feed), codes=_split_codes(codes))
    return ChartsResponse(
        results={code: ChartResult.from_outcome(o) for code, o in outcomes.items()}
    )


@app.post("/charts/{code}/svg")
async def render_chart_svg(
    code: str,
    feed: list[DateBucketPayload] = Body(...),
    builder: BuildRateChartUseCase = Depends(get_chart_builder),
) -> Response:
    """Return the SVG markup for one code without rasterizing or publishing."""
    if not code.strip():
        raise HTTPException(status_code=422, detail="code must name a currency")
    try:
        scene = builder.execute(to_feed(feed), code)
    except EmptyDatasetError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return Response(content=to_svg(scene), media_type="image/svg+xml")


@app.get("/health")
async def health():
    return {"status": "ok"}
