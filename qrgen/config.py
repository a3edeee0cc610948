"""
Configuration settings for qrgen.

Uses Pydantic Settings to load defaults for the encoder, renderer, batch
processing and logging from environment variables (or a `.env` file). CLI
options override these values; `Settings.to_job` resolves the final
JobConfig.
"""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from qrgen.domain.models import (
    EncoderConfig,
    ErrorCorrection,
    JobConfig,
    OutputFormat,
    ProcessingConfig,
    RenderConfig,
)


class Settings(BaseSettings):
    # Output
    output_dir: Optional[Path] = Field(None, alias="QRGEN_OUTPUT_DIR")
    format: OutputFormat = Field(OutputFormat.SVG, alias="QRGEN_FORMAT")
    border: int = Field(4, alias="QRGEN_BORDER")
    scale: int = Field(8, alias="QRGEN_SCALE")

    # Encoder
    version_min: int = Field(1, alias="QRGEN_VERSION_MIN")
    version_max: int = Field(40, alias="QRGEN_VERSION_MAX")
    error_correction: ErrorCorrection = Field(ErrorCorrection.HIGH, alias="QRGEN_ERROR_CORRECTION")
    mask: Optional[int] = Field(None, alias="QRGEN_MASK")

    # Processing
    chunk_size: int = Field(1, alias="QRGEN_CHUNK_SIZE")
    has_headers: bool = Field(False, alias="QRGEN_HAS_HEADERS")
    delimiter: str = Field(",", alias="QRGEN_DELIMITER")
    workers: Optional[int] = Field(None, alias="QRGEN_WORKERS")
    start_method: str = Field("spawn", alias="QRGEN_START_METHOD")

    # Application
    log_level: str = Field("WARNING", alias="LOG_LEVEL")
    log_json: bool = Field(False, alias="LOG_JSON")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    def to_job(self, **overrides: Any) -> JobConfig:
        """
        Build a JobConfig from these settings.

        Keyword overrides use the Settings field names; None means "not given"
        and keeps the settings value. Raises pydantic.ValidationError for
        out-of-range values.
        """
        values = self.model_dump()
        values.update({key: value for key, value in overrides.items() if value is not None})
        output_dir = values["output_dir"] or Path.cwd()
        return JobConfig(
            output_dir=Path(output_dir),
            encoder=EncoderConfig(
                version_min=values["version_min"],
                version_max=values["version_max"],
                error_correction=values["error_correction"],
                mask=values["mask"],
            ),
            render=RenderConfig(
                border=values["border"],
                scale=values["scale"],
                format=values["format"],
            ),
            processing=ProcessingConfig(
                chunk_size=values["chunk_size"],
                has_headers=values["has_headers"],
                delimiter=values["delimiter"],
                workers=values["workers"],
                start_method=values["start_method"],
            ),
            log_level=values["log_level"],
            json_logs=values["log_json"],
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Retrieve a cached instance of Settings to avoid repeated env parsing.
    """
    return Settings()


__all__ = ["Settings", "get_settings"]
