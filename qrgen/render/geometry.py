"""
Overflow-checked image geometry.

Pixel dimensions and buffer lengths are computed one operation at a time and
every intermediate result is checked against the image-dimension range
(signed 32-bit).

Example: a 21-module symbol with a 4-module border at scale 10 gives a
290x290 image and a 252300-byte RGB canvas.
"""

from __future__ import annotations

from dataclasses import dataclass

from qrgen.domain.errors import GeometryOverflow

MAX_DIMENSION = 2**31 - 1


def checked_add(a: int, b: int, limit: int = MAX_DIMENSION) -> int:
    if a < 0 or b < 0:
        raise GeometryOverflow(f"negative operand in {a} + {b}", (a, b))
    result = a + b
    if result > limit:
        raise GeometryOverflow(f"{a} + {b} exceeds {limit}", (a, b))
    return result


def checked_mul(a: int, b: int, limit: int = MAX_DIMENSION) -> int:
    if a < 0 or b < 0:
        raise GeometryOverflow(f"negative operand in {a} * {b}", (a, b))
    result = a * b
    if result > limit:
        raise GeometryOverflow(f"{a} * {b} exceeds {limit}", (a, b))
    return result


def checked_pixel_size(n: int, border: int, scale: int, limit: int = MAX_DIMENSION) -> int:
    """
    Side length in pixels of a square image: (n + 2 * border) * scale.

    Raises GeometryOverflow when an operand is out of domain or any step
    leaves the representable range. The exception carries (n, border, scale).
    """
    operands = (n, border, scale)
    if n < 1 or border < 0 or scale < 1:
        raise GeometryOverflow(
            f"invalid geometry n={n} border={border} scale={scale}", operands
        )
    try:
        padding = checked_mul(border, 2, limit)
        modules = checked_add(n, padding, limit)
        return checked_mul(modules, scale, limit)
    except GeometryOverflow as exc:
        raise GeometryOverflow(
            f"pixel size overflow for n={n} border={border} scale={scale}: {exc}", operands
        ) from exc


def checked_byte_length(pixel_size: int, color_depth: int, limit: int = MAX_DIMENSION) -> int:
    """Canvas length in bytes: pixel_size ** 2 * color_depth, squaring checked too."""
    operands = (pixel_size, color_depth)
    if pixel_size < 1 or color_depth < 1:
        raise GeometryOverflow(
            f"invalid canvas pixel_size={pixel_size} color_depth={color_depth}", operands
        )
    try:
        area = checked_mul(pixel_size, pixel_size, limit)
        return checked_mul(area, color_depth, limit)
    except GeometryOverflow as exc:
        raise GeometryOverflow(
            f"byte length overflow for pixel_size={pixel_size} color_depth={color_depth}: {exc}",
            operands,
        ) from exc


def pixel_offset(x: int, y: int, pixel_size: int, color_depth: int) -> int:
    """Offset of the first byte of pixel (x, y) in a row-major canvas."""
    return x * color_depth + y * pixel_size * color_depth


@dataclass(frozen=True)
class ImageGeometry:
    modules: int
    border: int
    scale: int
    color_depth: int
    pixel_size: int
    byte_length: int

    def to_module(self, pixel: int) -> int:
        """Module coordinate for a pixel coordinate; negative or >= modules inside the border."""
        return pixel // self.scale - self.border


def compute_geometry(
    n: int, border: int, scale: int, color_depth: int = 3, limit: int = MAX_DIMENSION
) -> ImageGeometry:
    pixel_size = checked_pixel_size(n, border, scale, limit)
    byte_length = checked_byte_length(pixel_size, color_depth, limit)
    return ImageGeometry(
        modules=n,
        border=border,
        scale=scale,
        color_depth=color_depth,
        pixel_size=pixel_size,
        byte_length=byte_length,
    )


__all__ = [
    "MAX_DIMENSION",
    "ImageGeometry",
    "checked_add",
    "checked_mul",
    "checked_pixel_size",
    "checked_byte_length",
    "compute_geometry",
    "pixel_offset",
]
