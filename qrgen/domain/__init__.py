"""Domain types shared by every pipeline stage."""

from qrgen.domain.errors import (
    DecodeError,
    EncodeError,
    ExportError,
    GeometryOverflow,
    QrgenError,
    RasterError,
    SourceOpenError,
)
from qrgen.domain.matrix import Matrix
from qrgen.domain.models import (
    EncoderConfig,
    ErrorCorrection,
    JobConfig,
    OutputFormat,
    ProcessingConfig,
    RenderConfig,
)

__all__ = [
    "DecodeError",
    "EncodeError",
    "ExportError",
    "GeometryOverflow",
    "QrgenError",
    "RasterError",
    "SourceOpenError",
    "Matrix",
    "EncoderConfig",
    "ErrorCorrection",
    "JobConfig",
    "OutputFormat",
    "ProcessingConfig",
    "RenderConfig",
]
