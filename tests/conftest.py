"""Root pytest configuration and shared fixtures."""

from __future__ import annotations

import pytest

from helpers.fakes import FakePublisher, FakeRasterizer
from helpers.feeds import SCENARIO_TWO_QUOTES, quote, raw_quote
from src.application.services.feed_parser import parse_feed
from src.domain.entities.quote import FilteredSeries


@pytest.fixture
def scenario_two_raw() -> list[dict]:
    return [{"SpotListRate": [raw_quote("USD", *q) for q in SCENARIO_TWO_QUOTES]}]


@pytest.fixture
def scenario_two_series() -> FilteredSeries:
    return FilteredSeries(
        currency_code="USD",
        records=tuple(quote("USD", *q) for q in SCENARIO_TWO_QUOTES),
    )


@pytest.fixture
def multi_currency_raw() -> list[dict]:
    """Two date-buckets holding every default code except HKD."""
    return [
        {
            "date": "2020-01-02",
            "SpotListRate": [
                raw_quote("USD", "2020-01-02 09:00:00", 30.0, 29.5),
                raw_quote("EUR", "2020-01-02 09:00:00", 33.9, 33.1),
                raw_quote("CNY", "2020-01-02 09:00:00", 4.35, 4.28),
                raw_quote("JPY", "2020-01-02 09:00:00", 0.2788, 0.2748),
            ],
        },
        {
            "date": "2020-01-03",
            "SpotListRate": [
                raw_quote("USD", "2020-01-03 10:00:00", 30.2, 29.7),
                raw_quote("EUR", "2020-01-03 10:00:00", 34.0, 33.2),
                raw_quote("CNY", "2020-01-03 10:00:00", 4.36, 4.29),
                raw_quote("JPY", "2020-01-03 10:00:00", 0.2791, 0.2751),
                raw_quote("USD", "2020-01-03 18:30:00", 31.0, 30.5),
            ],
        },
    ]


@pytest.fixture
def multi_currency_feed(multi_currency_raw):
    return parse_feed(multi_currency_raw)


@pytest.fixture
def fake_rasterizer() -> FakeRasterizer:
    return FakeRasterizer()


@pytest.fixture
def fake_publisher() -> FakePublisher:
    return FakePublisher()
