"""Matrix to SVG markup."""

from __future__ import annotations

from typing import List

from qrgen.domain.matrix import Matrix
from qrgen.render.geometry import checked_pixel_size

_SVG_TEMPLATE = (
    '<?xml version="1.0" encoding="UTF-8"?>\n'
    '<!DOCTYPE svg PUBLIC "-//W3C//DTD SVG 1.1//EN" '
    '"http://www.w3.org/Graphics/SVG/1.1/DTD/svg11.dtd">\n'
    '<svg xmlns="http://www.w3.org/2000/svg" version="1.1" '
    'viewBox="0 0 {dimension} {dimension}" stroke="none">\n'
    '\t<rect width="100%" height="100%" fill="#FFFFFF"/>\n'
    '\t<path d="{path}" fill="#000000"/>\n'
    "</svg>\n"
)


def matrix_to_svg(matrix: Matrix, border: int) -> str:
    """
    Serialize a matrix as a standalone SVG document.

    One unit in the viewBox is one module; set modules become unit squares
    offset by the border.
    """
    if border < 0:
        raise ValueError("Border must be non-negative")
    dimension = checked_pixel_size(matrix.size, border, 1)

    parts: List[str] = []
    for y in range(matrix.size):
        for x in range(matrix.size):
            if matrix.get_module(x, y):
                parts.append(f"M{x + border},{y + border}h1v1h-1z")
    return _SVG_TEMPLATE.format(dimension=dimension, path=" ".join(parts))


__all__ = ["matrix_to_svg"]
