"""
Infrastructure adapter: ImageMagick ``convert`` → IRasterizer.

SVG markup is piped to the process on stdin and the PNG is read back from
stdout, so no temporary files are involved. The binary name is injectable
(``magick`` on ImageMagick 7 installs).
"""

import asyncio
import logging

from src.domain.entities.publication import EncodeParameters
from src.domain.errors import RasterizationError
from src.domain.ports.rasterizer_port import IRasterizer

logger = logging.getLogger(__name__)

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


def build_convert_args(params: EncodeParameters) -> list[str]:
    return [
        "-density", str(params.density),
        "-quality", str(params.quality),
        "-define", f"png:compression-level={params.compression_level}",
        "-define", f"png:compression-filter={params.compression_filter}",
        "-define", f"png:compression-strategy={params.compression_strategy}",
        "-depth", str(params.depth),
        "svg:-", "png:-",
    ]


class ImageMagickRasterizer(IRasterizer):
    """Rasterizes SVG with an ImageMagick subprocess."""

    def __init__(self, binary: str = "convert") -> None:
        self._binary = binary

    async def rasterize(self, svg: str, params: EncodeParameters) -> bytes:
        args = build_convert_args(params)
        try:
            process = await asyncio.create_subprocess_exec(
                self._binary,
                *args,
                stdin=asyncio.subprocess.PIPE,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as exc:
            raise RasterizationError(f"cannot start {self._binary!r}: {exc}") from exc

        try:
            stdout, stderr = await process.communicate(svg.encode("utf-8"))
        except asyncio.CancelledError:
            if process.returncode is None:
                process.kill()
                # reap the child even if the caller cancels again
                await asyncio.shield(process.wait())
            raise

        if process.returncode != 0:
            detail = stderr.decode("utf-8", errors="replace").strip()
            raise RasterizationError(
                f"{self._binary} exited with status {process.returncode}: {detail}"
            )
        if not stdout.startswith(PNG_SIGNATURE):
            raise RasterizationError(f"{self._binary} did not produce PNG output")
        logger.debug("Rasterized %d bytes of SVG into %d bytes of PNG", len(svg), len(stdout))
        return stdout
