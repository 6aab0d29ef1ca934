"""
Port (interface) for vector-to-bitmap rasterizers.
Infrastructure adapters (e.g. ImageMagickRasterizer) must implement this interface.
"""

from abc import ABC, abstractmethod

from src.domain.entities.publication import EncodeParameters


class IRasterizer(ABC):
    @abstractmethod
    async def rasterize(self, svg: str, params: EncodeParameters) -> bytes:
        """Convert SVG markup into PNG bytes.

        Raises:
            RasterizationError: if the conversion fails or produces no output.
        """
        ...
