"""
Port (interface) for chart image publishers.
Infrastructure adapters (e.g. S3ChartPublisher) must implement this interface.
"""

from abc import ABC, abstractmethod

from src.domain.entities.publication import PublishedChart


class IChartPublisher(ABC):
    @abstractmethod
    async def publish(self, currency_code: str, image: bytes, key: str) -> PublishedChart:
        """Store *image* under *key* and return a retrieval URL for it.

        Raises:
            PublishError: if the upload or URL signing fails.
        """
        ...
