"""
qrgen - batch QR code rendering from delimited text files.

Streams one or more input files in bounded batches, fans each batch out over
a process pool and writes one SVG or PNG image per row, named after the row's
first field and encoding its second field. The package includes:

- a fault-tolerant row reader and batcher
- overflow-checked image geometry and a pixel-exact rasterizer
- a process-pool orchestrator with per-record error isolation
- structured logging, profiling and rich/JSON reporting
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from qrgen.config import Settings, get_settings
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
from qrgen.pipeline.generator import FileReport, Generator, generate
from qrgen.render.geometry import checked_byte_length, checked_pixel_size
from qrgen.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    "EncoderConfig",
    "ErrorCorrection",
    "JobConfig",
    "OutputFormat",
    "ProcessingConfig",
    "RenderConfig",
    # Errors
    "QrgenError",
    "DecodeError",
    "EncodeError",
    "GeometryOverflow",
    "RasterError",
    "ExportError",
    "SourceOpenError",
    # Core
    "Matrix",
    "FileReport",
    "Generator",
    "generate",
    "checked_pixel_size",
    "checked_byte_length",
    # Logging
    "configure_logging",
    "get_logger",
]
