"""
Infrastructure adapter: local directory → IChartPublisher.

Used for local runs and the ``render_feed`` CLI. Files are written under the
configured root using the same key layout as the bucket; the returned URL is a
``file://`` URI and never expires.
"""

import asyncio
import logging
from pathlib import Path

from src.domain.entities.publication import PublishedChart
from src.domain.errors import PublishError
from src.domain.ports.chart_publisher_port import IChartPublisher

logger = logging.getLogger(__name__)


class LocalDirectoryPublisher(IChartPublisher):
    def __init__(self, root: str | Path) -> None:
        self._root = Path(root).resolve()

    def _write(self, currency_code: str, image: bytes, key: str) -> PublishedChart:
        target = (self._root / key).resolve()
        if self._root not in target.parents:
            raise PublishError(f"key {key!r} escapes the output directory")
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(image)
        except OSError as exc:
            raise PublishError(f"cannot write {target}: {exc}") from exc
        logger.info("Wrote %s", target)
        return PublishedChart(
            currency_code=currency_code,
            key=key,
            url=target.as_uri(),
            expires_at=None,
        )

    async def publish(self, currency_code: str, image: bytes, key: str) -> PublishedChart:
        return await asyncio.to_thread(self._write, currency_code, image, key)
