"""Tests for infrastructure.storage.s3_publisher."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import boto3
import pytest
from botocore.stub import Stubber

from src.domain.errors import PublishError
from src.infrastructure.storage.s3_publisher import S3ChartPublisher, seconds_until_next_day

NOW = datetime(2020, 1, 2, 23, 0, 0, tzinfo=timezone.utc)
KEY = "20200102/USD_HIGHLOW_20200102.png"


@pytest.fixture
def s3_client():
    return boto3.client(
        "s3",
        region_name="us-east-1",
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
    )


def test_seconds_until_next_day() -> None:
    assert seconds_until_next_day(NOW) == 3600
    assert seconds_until_next_day(datetime(2020, 1, 2, tzinfo=timezone.utc)) == 86400


@pytest.mark.asyncio
async def test_upload_and_presign_next_day(s3_client) -> None:
    publisher = S3ChartPublisher("fx-charts", client=s3_client, clock=lambda: NOW)

    with Stubber(s3_client) as stubber:
        stubber.add_response(
            "put_object",
            {},
            {"Bucket": "fx-charts", "Key": KEY, "Body": b"png", "ContentType": "image/png"},
        )
        chart = await publisher.publish("USD", b"png", KEY)
        stubber.assert_no_pending_responses()

    assert chart.currency_code == "USD"
    assert chart.key == KEY
    assert "USD_HIGHLOW_20200102.png" in chart.url
    assert "fx-charts" in chart.url
    assert chart.expires_at == NOW + timedelta(hours=1)


@pytest.mark.asyncio
async def test_fixed_expiry(s3_client) -> None:
    publisher = S3ChartPublisher("fx-charts", expiry=600, client=s3_client, clock=lambda: NOW)

    with Stubber(s3_client) as stubber:
        stubber.add_response("put_object", {})
        chart = await publisher.publish("EUR", b"png", KEY)

    assert chart.expires_at == NOW + timedelta(seconds=600)


@pytest.mark.asyncio
async def test_client_error_becomes_publish_error(s3_client) -> None:
    publisher = S3ChartPublisher("fx-charts", client=s3_client, clock=lambda: NOW)

    with Stubber(s3_client) as stubber:
        stubber.add_client_error("put_object", service_error_code="AccessDenied", http_status_code=403)
        with pytest.raises(PublishError, match="AccessDenied"):
            await publisher.publish("USD", b"png", KEY)
