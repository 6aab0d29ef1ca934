"""
Composition Root helpers shared by the HTTP app and the CLI.

Wires the configured infrastructure adapters (rasterizer, publisher) into the
application use-cases. Nothing outside ``infrastructure`` imports from here.
"""

import logging
import os

from src.application.use_cases.build_rate_chart import BuildRateChartUseCase
from src.application.use_cases.publish_rate_charts import PublishRateChartsUseCase
from src.domain.entities.chart import ChartConfig
from src.domain.ports.chart_publisher_port import IChartPublisher
from src.infrastructure.config.settings import Settings
from src.infrastructure.rasterizer.imagemagick_adapter import ImageMagickRasterizer
from src.infrastructure.secrets.secrets_manager_adapter import SecretsManagerAdapter
from src.infrastructure.storage.local_publisher import LocalDirectoryPublisher
from src.infrastructure.storage.s3_publisher import S3ChartPublisher

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(
        level=(level or os.environ.get("LOG_LEVEL", "INFO")).upper(),
        format=LOG_FORMAT,
    )


def load_settings() -> Settings:
    """Read settings, first pulling CHART_SECRET_ARN's pairs into the env if set."""
    secret_id = os.environ.get("CHART_SECRET_ARN")
    if secret_id:
        SecretsManagerAdapter().load_into_env(secret_id)
    return Settings.from_env()


def build_chart_builder(settings: Settings) -> BuildRateChartUseCase:
    return BuildRateChartUseCase(ChartConfig(show_legend=settings.show_legend))


def build_publisher(settings: Settings) -> IChartPublisher:
    if settings.publisher == "local":
        return LocalDirectoryPublisher(settings.output_dir)
    return S3ChartPublisher(
        bucket=settings.bucket,
        expiry=settings.url_expiry,
        region=settings.region,
    )


def build_publish_use_case(
    settings: Settings,
    publisher: IChartPublisher | None = None,
) -> PublishRateChartsUseCase:
    return PublishRateChartsUseCase(
        builder=build_chart_builder(settings),
        rasterizer=ImageMagickRasterizer(settings.imagemagick_binary),
        publisher=publisher or build_publisher(settings),
        step_timeout=settings.step_timeout,
        default_codes=settings.codes,
        key_prefix=settings.key_prefix,
    )
