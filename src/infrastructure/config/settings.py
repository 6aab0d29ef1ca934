"""
Environment-driven settings for the chart service.

Values are read from the process environment; entrypoints call
``load_dotenv()`` first so a local ``.env`` file works the same way.
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from src.application.use_cases.publish_rate_charts import (
    DEFAULT_CURRENCY_CODES,
    DEFAULT_STEP_TIMEOUT_SECONDS,
    normalize_codes,
)
from src.domain.errors import ConfigError

NEXT_DAY_EXPIRY = "next-day"
MAX_PRESIGN_SECONDS = 7 * 24 * 3600
PUBLISHERS = ("s3", "local")


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in ("1", "true", "yes", "on"):
        return True
    if value in ("0", "false", "no", "off", ""):
        return False
    raise ConfigError(f"{name} must be a boolean, got {raw!r}")


def _parse_positive_float(name: str, raw: str) -> float:
    try:
        value = float(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from exc
    if value <= 0:
        raise ConfigError(f"{name} must be positive, got {raw!r}")
    return value


def _parse_expiry(raw: str) -> str | int:
    value = raw.strip().lower()
    if value == NEXT_DAY_EXPIRY:
        return NEXT_DAY_EXPIRY
    try:
        seconds = int(value)
    except ValueError as exc:
        raise ConfigError(
            f"CHART_URL_EXPIRY must be {NEXT_DAY_EXPIRY!r} or seconds, got {raw!r}"
        ) from exc
    if not 0 < seconds <= MAX_PRESIGN_SECONDS:
        raise ConfigError(
            f"CHART_URL_EXPIRY must be between 1 and {MAX_PRESIGN_SECONDS} seconds"
        )
    return seconds


@dataclass(frozen=True)
class Settings:
    codes: tuple[str, ...] = DEFAULT_CURRENCY_CODES
    publisher: str = "s3"
    bucket: Optional[str] = None
    key_prefix: str = ""
    url_expiry: str | int = NEXT_DAY_EXPIRY
    step_timeout: float = DEFAULT_STEP_TIMEOUT_SECONDS
    output_dir: str = "charts"
    imagemagick_binary: str = "convert"
    region: str = "us-east-1"
    secret_id: Optional[str] = None
    show_legend: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from *environ* (defaults to ``os.environ``).

        Raises:
            ConfigError: on any invalid value, or when the S3 publisher is
                         selected without CHART_BUCKET.
        """
        env = os.environ if environ is None else environ

        codes = tuple(normalize_codes(env.get("CHART_CODES", "").split(",")))
        publisher = env.get("CHART_PUBLISHER", "s3").strip().lower()
        if publisher not in PUBLISHERS:
            raise ConfigError(f"CHART_PUBLISHER must be one of {PUBLISHERS}, got {publisher!r}")
        bucket = env.get("CHART_BUCKET") or None
        if publisher == "s3" and not bucket:
            raise ConfigError("CHART_BUCKET must be set when CHART_PUBLISHER is 's3'")

        return cls(
            codes=codes or DEFAULT_CURRENCY_CODES,
            publisher=publisher,
            bucket=bucket,
            key_prefix=env.get("CHART_KEY_PREFIX", ""),
            url_expiry=_parse_expiry(env.get("CHART_URL_EXPIRY", NEXT_DAY_EXPIRY)),
            step_timeout=_parse_positive_float(
                "CHART_STEP_TIMEOUT_SECONDS",
                env.get("CHART_STEP_TIMEOUT_SECONDS", str(DEFAULT_STEP_TIMEOUT_SECONDS)),
            ),
            output_dir=env.get("CHART_OUTPUT_DIR", "charts"),
            imagemagick_binary=env.get("IMAGEMAGICK_BINARY", "convert"),
            region=env.get("AWS_DEFAULT_REGION", "us-east-1"),
            secret_id=env.get("CHART_SECRET_ARN") or None,
            show_legend=_parse_bool("CHART_SHOW_LEGEND", env.get("CHART_SHOW_LEGEND", "false")),
            log_level=env.get("LOG_LEVEL", "INFO").upper(),
        )
