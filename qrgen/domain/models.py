"""
Configuration models for the qrgen pipeline.

All models are frozen: a JobConfig is built once from settings and CLI options
and then shared read-only with every pool worker (it is pickled into each
process, never mutated).
"""
from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field, model_validator

from qrgen.utils.logging import get_logger

log = get_logger(__name__)

QR_VERSION_MIN = 1
QR_VERSION_MAX = 40
QR_MASK_MAX = 7
RGB_COLOR_DEPTH = 3


class ErrorCorrection(str, Enum):
    """QR error correction level, by the share of codewords it can restore."""

    LOW = "LOW"  # ~7%
    MEDIUM = "MEDIUM"  # ~15%
    QUARTILE = "QUARTILE"  # ~25%
    HIGH = "HIGH"  # ~30%

    @classmethod
    def parse(cls, value: str) -> "ErrorCorrection":
        try:
            return cls(value.strip().upper())
        except ValueError as exc:
            raise ValueError(
                "QR Code error correction level must be either High, Quartile, Medium or Low."
            ) from exc


class OutputFormat(str, Enum):
    SVG = "SVG"
    PNG = "PNG"

    @property
    def extension(self) -> str:
        return self.value.lower()

    @classmethod
    def parse(cls, value: str) -> "OutputFormat":
        try:
            return cls(value.strip().upper())
        except ValueError as exc:
            raise ValueError("Format must be either SVG or PNG.") from exc


class EncoderConfig(BaseModel):
    """
    Bounds handed to the symbol encoder.

    A minimum version above the maximum resets the maximum to the minimum.
    """

    version_min: int = Field(QR_VERSION_MIN, ge=QR_VERSION_MIN, le=QR_VERSION_MAX)
    version_max: int = Field(QR_VERSION_MAX, ge=QR_VERSION_MIN, le=QR_VERSION_MAX)
    error_correction: ErrorCorrection = Field(ErrorCorrection.HIGH)
    mask: Optional[int] = Field(None, ge=0, le=QR_MASK_MAX)

    model_config = {"frozen": True}

    @model_validator(mode="before")
    @classmethod
    def _reset_version_max(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        low = data.get("version_min", QR_VERSION_MIN)
        high = data.get("version_max", QR_VERSION_MAX)
        try:
            if int(low) > int(high):
                log.warning("QR Version Min is higher than QR Version Max so Max has been reset.")
                return {**data, "version_max": low}
        except (TypeError, ValueError):
            # Left for field validation to report.
            pass
        return data


class RenderConfig(BaseModel):
    border: int = Field(4, ge=0, le=255, description="Quiet zone width in modules.")
    scale: int = Field(8, ge=1, le=255, description="Pixels per module (PNG only).")
    format: OutputFormat = Field(OutputFormat.SVG)
    color_depth: Literal[3] = Field(RGB_COLOR_DEPTH, description="Bytes per pixel (RGB).")

    model_config = {"frozen": True}


class ProcessingConfig(BaseModel):
    chunk_size: int = Field(1, ge=1, description="Rows read and rendered per batch.")
    has_headers: bool = Field(False, description="Skip the first row of every source.")
    delimiter: str = Field(",", min_length=1, max_length=1)
    trim: bool = Field(True, description="Strip whitespace around every field.")
    workers: Optional[int] = Field(None, ge=1, description="Pool size; None uses cpu_count.")
    start_method: Literal["spawn", "fork", "forkserver"] = Field("spawn")

    model_config = {"frozen": True}


class JobConfig(BaseModel):
    """Fully resolved configuration for one generate run."""

    output_dir: Path = Field(default_factory=Path.cwd)
    encoder: EncoderConfig = Field(default_factory=EncoderConfig)
    render: RenderConfig = Field(default_factory=RenderConfig)
    processing: ProcessingConfig = Field(default_factory=ProcessingConfig)
    log_level: str = Field("WARNING")
    json_logs: bool = Field(False)

    model_config = {"frozen": True}


__all__ = [
    "ErrorCorrection",
    "OutputFormat",
    "EncoderConfig",
    "RenderConfig",
    "ProcessingConfig",
    "JobConfig",
    "QR_VERSION_MIN",
    "QR_VERSION_MAX",
    "QR_MASK_MAX",
    "RGB_COLOR_DEPTH",
]
