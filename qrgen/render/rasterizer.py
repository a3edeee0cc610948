"""
Rasterizer: module matrix -> SVG markup or an RGB canvas.

Raster mode maps every pixel (x, y) of a pixel_size x pixel_size canvas back
to module space with `pixel // scale - border`. Pixels whose module is set
are painted foreground (0) on all colour channels; everything else, including
the whole border, stays background (255).
"""

from __future__ import annotations

from typing import Optional, Tuple

from qrgen.domain.matrix import Matrix
from qrgen.domain.models import OutputFormat, RenderConfig, RGB_COLOR_DEPTH
from qrgen.encoding.base import MarkupSerializer, RasterEncoder
from qrgen.encoding.png import PngEncoder
from qrgen.encoding.svg import matrix_to_svg
from qrgen.render.geometry import ImageGeometry, compute_geometry, pixel_offset

BACKGROUND = 255
FOREGROUND = 0


def render_svg(matrix: Matrix, border: int, serializer: MarkupSerializer = matrix_to_svg) -> str:
    if border < 0:
        raise ValueError("Border must be non-negative")
    return serializer(matrix, border)


def _pixel_row(matrix: Matrix, module_y: int, geometry: ImageGeometry) -> bytes:
    """One painted row of pixels for module row `module_y` (may lie in the border)."""
    depth = geometry.color_depth
    row = bytearray([BACKGROUND]) * (geometry.pixel_size * depth)
    if not 0 <= module_y < matrix.size:
        return bytes(row)
    foreground = bytes([FOREGROUND]) * depth
    for x in range(geometry.pixel_size):
        if matrix.get_module(geometry.to_module(x), module_y):
            start = pixel_offset(x, 0, geometry.pixel_size, depth)
            row[start : start + depth] = foreground
    return bytes(row)


def paint_canvas(
    matrix: Matrix, border: int, scale: int, color_depth: int = RGB_COLOR_DEPTH
) -> Tuple[bytearray, ImageGeometry]:
    """
    Allocate and paint the canvas for `matrix`.

    Raises GeometryOverflow before allocating anything when the image would
    not fit the dimension range. Every `scale` consecutive pixel rows map to
    the same module row, so each distinct row is built once and copied.
    """
    geometry = compute_geometry(matrix.size, border, scale, color_depth)
    canvas = bytearray([BACKGROUND]) * geometry.byte_length
    stride = geometry.pixel_size * color_depth

    cached_module_y: Optional[int] = None
    row = b""
    for y in range(geometry.pixel_size):
        module_y = geometry.to_module(y)
        if module_y != cached_module_y:
            row = _pixel_row(matrix, module_y, geometry)
            cached_module_y = module_y
        start = pixel_offset(0, y, geometry.pixel_size, color_depth)
        canvas[start : start + stride] = row
    return canvas, geometry


def render_png(
    matrix: Matrix,
    border: int,
    scale: int,
    raster_encoder: Optional[RasterEncoder] = None,
    color_depth: int = RGB_COLOR_DEPTH,
) -> bytes:
    canvas, geometry = paint_canvas(matrix, border, scale, color_depth)
    encoder = raster_encoder or PngEncoder()
    return encoder.encode(canvas, geometry.pixel_size, geometry.color_depth)


class Rasterizer:
    """Renders matrices to file bytes in the configured output format."""

    def __init__(
        self,
        config: RenderConfig,
        serializer: MarkupSerializer = matrix_to_svg,
        raster_encoder: Optional[RasterEncoder] = None,
    ) -> None:
        self.config = config
        self.serializer = serializer
        self.raster_encoder = raster_encoder or PngEncoder()

    @property
    def extension(self) -> str:
        return self.config.format.extension

    def render(self, matrix: Matrix) -> bytes:
        if self.config.format is OutputFormat.SVG:
            return render_svg(matrix, self.config.border, self.serializer).encode("utf-8")
        return render_png(
            matrix,
            self.config.border,
            self.config.scale,
            self.raster_encoder,
            self.config.color_depth,
        )


__all__ = [
    "BACKGROUND",
    "FOREGROUND",
    "Rasterizer",
    "paint_canvas",
    "render_png",
    "render_svg",
]
