"""
Encoders around the render core: QR symbols, SVG markup and PNG rasters.
"""

from qrgen.encoding.base import MarkupSerializer, RasterEncoder, SymbolEncoder
from qrgen.encoding.png import PngEncoder
from qrgen.encoding.qr import QrCodeEncoder
from qrgen.encoding.svg import matrix_to_svg

__all__ = [
    "MarkupSerializer",
    "RasterEncoder",
    "SymbolEncoder",
    "PngEncoder",
    "QrCodeEncoder",
    "matrix_to_svg",
]
