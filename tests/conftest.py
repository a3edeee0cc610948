"""
Pytest configuration for qrgen.

Provides fixtures for:
- Settings isolated from the host environment
- Job configuration bound to a temporary output directory
- Writing input files
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Iterator

import pytest

from qrgen.config import Settings, get_settings
from qrgen.domain.models import (
    EncoderConfig,
    JobConfig,
    OutputFormat,
    ProcessingConfig,
    RenderConfig,
)

_ENV_VARS = [
    "QRGEN_OUTPUT_DIR",
    "QRGEN_FORMAT",
    "QRGEN_BORDER",
    "QRGEN_SCALE",
    "QRGEN_VERSION_MIN",
    "QRGEN_VERSION_MAX",
    "QRGEN_ERROR_CORRECTION",
    "QRGEN_MASK",
    "QRGEN_CHUNK_SIZE",
    "QRGEN_HAS_HEADERS",
    "QRGEN_DELIMITER",
    "QRGEN_WORKERS",
    "QRGEN_START_METHOD",
    "LOG_LEVEL",
    "LOG_JSON",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[None]:
    """Keep host environment variables and .env files out of the tests."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def test_settings() -> Settings:
    return Settings()


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    path = tmp_path / "out"
    path.mkdir()
    return path


@pytest.fixture
def make_job(output_dir: Path) -> Callable[..., JobConfig]:
    """
    Build a JobConfig writing into the temporary output directory.

    Defaults to in-process rendering (workers=1) so tests stay fast.
    """

    def _make(
        chunk_size: int = 2,
        has_headers: bool = False,
        workers: int = 1,
        fmt: OutputFormat = OutputFormat.SVG,
        border: int = 4,
        scale: int = 2,
        version_min: int = 1,
        version_max: int = 40,
    ) -> JobConfig:
        return JobConfig(
            output_dir=output_dir,
            encoder=EncoderConfig(version_min=version_min, version_max=version_max),
            render=RenderConfig(border=border, scale=scale, format=fmt),
            processing=ProcessingConfig(
                chunk_size=chunk_size, has_headers=has_headers, workers=workers
            ),
        )

    return _make


@pytest.fixture
def write_input(tmp_path: Path) -> Callable[[str, str | bytes], Path]:
    def _write(name: str, content: str | bytes) -> Path:
        path = tmp_path / name
        data = content.encode("utf-8") if isinstance(content, str) else content
        path.write_bytes(data)
        return path

    return _write
