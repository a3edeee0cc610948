"""
Capability interfaces for the black boxes around the render core.

The pipeline only depends on these protocols: a symbol encoder turning text
into a Matrix, a markup serializer turning a Matrix plus border into vector
text, and a raster encoder turning a painted canvas into image file bytes.
Concrete implementations live next to this module (qr, svg, png).
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from qrgen.domain.matrix import Matrix


@runtime_checkable
class SymbolEncoder(Protocol):
    def encode(self, text: str) -> Matrix:
        """
        Encode a payload as a module matrix.

        Raises
        ------
        EncodeError
            If the payload cannot be encoded within the configured bounds.
        """
        ...


@runtime_checkable
class MarkupSerializer(Protocol):
    def __call__(self, matrix: Matrix, border: int) -> str:
        ...


@runtime_checkable
class RasterEncoder(Protocol):
    def encode(self, canvas: bytes | bytearray, pixel_size: int, color_depth: int) -> bytes:
        """
        Encode a square row-major canvas as image file bytes.

        Raises
        ------
        RasterError
            If the canvas does not match its geometry or encoding fails.
        """
        ...


__all__ = ["SymbolEncoder", "MarkupSerializer", "RasterEncoder"]
