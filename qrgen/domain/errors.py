"""
Error taxonomy for the qrgen pipeline.

Every error is scoped to the boundary where it is handled:

- DecodeError: one input row could not be decoded (row skipped, batch continues)
- EncodeError: a payload could not be encoded as a QR symbol (record skipped)
- GeometryOverflow: image dimensions exceed the safe integer range (record skipped)
- RasterError: the canvas could not be encoded as a raster image (record skipped)
- ExportError: the output file could not be named or written (record skipped)
- SourceOpenError: an input source could not be opened (source failed, job continues)
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Tuple


class QrgenError(Exception):
    """Base class for all pipeline errors."""


class DecodeError(QrgenError):
    def __init__(self, message: str, line: Optional[int] = None) -> None:
        self.line = line
        self.message = f"line {line}: {message}" if line is not None else message
        super().__init__(self.message)


class EncodeError(QrgenError):
    """Raised when a payload cannot be encoded within the configured bounds."""


class GeometryOverflow(QrgenError):
    def __init__(self, message: str, operands: Tuple[int, ...] = ()) -> None:
        self.operands = operands
        super().__init__(message)


class RasterError(QrgenError):
    """Raised when a painted canvas cannot be turned into image bytes."""


class ExportError(QrgenError):
    """Raised when an output file cannot be named or written."""


class SourceOpenError(QrgenError):
    def __init__(self, path: Path | str, cause: Optional[BaseException] = None) -> None:
        self.path = str(path)
        self.cause = cause
        detail = f": {cause}" if cause else ""
        super().__init__(f"Unable to open source {self.path}{detail}")


__all__ = [
    "QrgenError",
    "DecodeError",
    "EncodeError",
    "GeometryOverflow",
    "RasterError",
    "ExportError",
    "SourceOpenError",
]
