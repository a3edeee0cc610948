"""
Raster encoder writing 8-bit RGB PNG files with Pillow.
"""

from __future__ import annotations

import io

from PIL import Image

from qrgen.domain.errors import RasterError
from qrgen.domain.models import RGB_COLOR_DEPTH


class PngEncoder:
    """RasterEncoder for square RGB canvases."""

    def __init__(self, optimize: bool = False) -> None:
        self.optimize = optimize

    def encode(
        self, canvas: bytes | bytearray, pixel_size: int, color_depth: int = RGB_COLOR_DEPTH
    ) -> bytes:
        if color_depth != RGB_COLOR_DEPTH:
            raise RasterError(f"PNG output supports RGB only, got color depth {color_depth}")
        expected = pixel_size * pixel_size * color_depth
        if len(canvas) != expected:
            raise RasterError(
                f"canvas holds {len(canvas)} bytes, expected {expected} for "
                f"{pixel_size}x{pixel_size}"
            )
        try:
            image = Image.frombytes("RGB", (pixel_size, pixel_size), canvas)
            buffer = io.BytesIO()
            image.save(buffer, format="PNG", optimize=self.optimize)
        except (OSError, ValueError) as exc:
            raise RasterError(f"PNG encoding failed: {exc}") from exc
        return buffer.getvalue()


__all__ = ["PngEncoder"]
