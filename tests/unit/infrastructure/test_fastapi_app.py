"""Tests for the HTTP entry point."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from helpers.fakes import FakePublisher, FakeRasterizer
from src.application.use_cases.build_rate_chart import BuildRateChartUseCase
from src.application.use_cases.publish_rate_charts import PublishRateChartsUseCase
from src.infrastructure.entrypoints.fastapi_app import (
    app,
    get_chart_builder,
    get_publish_use_case,
)


@pytest.fixture
def client():
    use_case = PublishRateChartsUseCase(
        builder=BuildRateChartUseCase(),
        rasterizer=FakeRasterizer(),
        publisher=FakePublisher(),
    )
    app.dependency_overrides[get_publish_use_case] = lambda: use_case
    app.dependency_overrides[get_chart_builder] = lambda: BuildRateChartUseCase()
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health(client) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_generate_charts_reports_every_code(client, multi_currency_raw) -> None:
    response = client.post("/charts", json=multi_currency_raw)

    assert response.status_code == 200
    results = response.json()["results"]
    assert list(results) == ["USD", "EUR", "CNY", "JPY", "HKD"]
    assert results["USD"]["status"] == "ok"
    stamp = results["USD"]["key"][:8]
    assert results["USD"]["key"] == f"{stamp}/USD_HIGHLOW_{stamp}.png"
    assert results["USD"]["url"].endswith(results["USD"]["key"])
    assert results["HKD"] == {
        "status": "error",
        "url": None,
        "key": None,
        "expires_at": None,
        "error_type": "EmptyDatasetError",
        "message": "No quotes available for currency code 'HKD'",
    }


def test_codes_query_limits_and_orders_results(client, multi_currency_raw) -> None:
    response = client.post("/charts", params={"codes": "jpy,USD"}, json=multi_currency_raw)

    assert list(response.json()["results"]) == ["JPY", "USD"]


def test_blank_codes_query_is_rejected(client, multi_currency_raw) -> None:
    response = client.post("/charts", params={"codes": " , "}, json=multi_currency_raw)

    assert response.status_code == 422


def test_malformed_feed_is_rejected(client) -> None:
    feed = [{"SpotListRate": [{"CCY": "USD", "UPDATETIME": "yesterday", "ASKLISTRATE": 1, "BIDLISTRATE": 1}]}]

    response = client.post("/charts", json=feed)

    assert response.status_code == 422
    assert "yesterday" in response.text


def test_svg_endpoint(client, scenario_two_raw) -> None:
    response = client.post("/charts/usd/svg", json=scenario_two_raw)

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("image/svg+xml")
    assert "<title>USD Exchange Rate</title>" in response.text


def test_svg_endpoint_unknown_code(client, scenario_two_raw) -> None:
    response = client.post("/charts/GBP/svg", json=scenario_two_raw)

    assert response.status_code == 404


def test_svg_endpoint_rejects_blank_code(client, scenario_two_raw) -> None:
    response = client.post("/charts/%20%20/svg", json=scenario_two_raw)

    assert response.status_code == 422


def test_svg_endpoint_rejects_boolean_rate(client) -> None:
    feed = [{"SpotListRate": [{"CCY": "USD", "UPDATETIME": "2020-01-02 09:00:00", "ASKLISTRATE": True, "BIDLISTRATE": 29.5}]}]

    response = client.post("/charts/USD/svg", json=feed)

    assert response.status_code == 422
