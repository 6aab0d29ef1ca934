"""Tests for infrastructure.config.settings."""

from __future__ import annotations

import pytest

from src.domain.errors import ConfigError
from src.infrastructure.config.settings import NEXT_DAY_EXPIRY, Settings


def test_defaults_with_local_publisher() -> None:
    settings = Settings.from_env({"CHART_PUBLISHER": "local"})

    assert settings.codes == ("USD", "EUR", "CNY", "JPY", "HKD")
    assert settings.publisher == "local"
    assert settings.url_expiry == NEXT_DAY_EXPIRY
    assert settings.step_timeout == 30.0
    assert settings.show_legend is False


def test_values_are_parsed() -> None:
    settings = Settings.from_env(
        {
            "CHART_BUCKET": "charts-bucket",
            "CHART_CODES": "usd, eur,,usd",
            "CHART_URL_EXPIRY": "3600",
            "CHART_STEP_TIMEOUT_SECONDS": "2.5",
            "CHART_SHOW_LEGEND": "yes",
            "LOG_LEVEL": "debug",
        }
    )

    assert settings.publisher == "s3"
    assert settings.bucket == "charts-bucket"
    assert settings.codes == ("USD", "EUR")
    assert settings.url_expiry == 3600
    assert settings.step_timeout == 2.5
    assert settings.show_legend is True
    assert settings.log_level == "DEBUG"


@pytest.mark.parametrize(
    "env",
    [
        {},
        {"CHART_PUBLISHER": "ftp"},
        {"CHART_PUBLISHER": "local", "CHART_URL_EXPIRY": "forever"},
        {"CHART_PUBLISHER": "local", "CHART_URL_EXPIRY": "999999999"},
        {"CHART_PUBLISHER": "local", "CHART_STEP_TIMEOUT_SECONDS": "-1"},
        {"CHART_PUBLISHER": "local", "CHART_SHOW_LEGEND": "maybe"},
    ],
)
def test_invalid_settings_raise(env) -> None:
    with pytest.raises(ConfigError):
        Settings.from_env(env)
