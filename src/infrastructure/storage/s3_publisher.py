"""
Infrastructure adapter: Amazon S3 → IChartPublisher.

The PNG is uploaded with ``put_object`` and a presigned GET URL is returned.
SigV4 presigned URLs live at most seven days, so the expiry horizon is either
the next UTC midnight ("next-day") or a fixed number of seconds.
boto3 is blocking; each call runs in a worker thread.
"""

import asyncio
import logging
import os
from datetime import datetime, time, timedelta, timezone
from typing import Callable, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from src.domain.entities.publication import PublishedChart
from src.domain.errors import PublishError
from src.domain.ports.chart_publisher_port import IChartPublisher

logger = logging.getLogger(__name__)

NEXT_DAY = "next-day"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def seconds_until_next_day(now: datetime) -> int:
    """Whole seconds from *now* until the following UTC midnight (at least 1)."""
    now = now.astimezone(timezone.utc)
    midnight = datetime.combine(now.date() + timedelta(days=1), time.min, tzinfo=timezone.utc)
    return max(1, int((midnight - now).total_seconds()))


class S3ChartPublisher(IChartPublisher):
    """Uploads chart images to an S3 bucket and signs retrieval URLs."""

    def __init__(
        self,
        bucket: str,
        expiry: str | int = NEXT_DAY,
        region: Optional[str] = None,
        client=None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._bucket = bucket
        self._expiry = expiry
        self._clock = clock
        self._client = client or boto3.client(
            "s3",
            region_name=region or os.environ.get("AWS_DEFAULT_REGION", "us-east-1"),
        )

    def _expires_in(self, now: datetime) -> int:
        if self._expiry == NEXT_DAY:
            return seconds_until_next_day(now)
        return int(self._expiry)

    def _publish_sync(self, currency_code: str, image: bytes, key: str) -> PublishedChart:
        try:
            self._client.put_object(
                Bucket=self._bucket,
                Key=key,
                Body=image,
                ContentType="image/png",
            )
            now = self._clock()
            expires_in = self._expires_in(now)
            url = self._client.generate_presigned_url(
                "get_object",
                Params={"Bucket": self._bucket, "Key": key},
                ExpiresIn=expires_in,
            )
        except (ClientError, BotoCoreError) as exc:
            raise PublishError(f"s3://{self._bucket}/{key}: {exc}") from exc

        logger.info("Uploaded %d bytes to s3://%s/%s", len(image), self._bucket, key)
        return PublishedChart(
            currency_code=currency_code,
            key=key,
            url=url,
            expires_at=now + timedelta(seconds=expires_in),
        )

    async def publish(self, currency_code: str, image: bytes, key: str) -> PublishedChart:
        return await asyncio.to_thread(self._publish_sync, currency_code, image, key)
