"""
Per-record task executed inside pool workers.

A task owns its row, matrix and canvas exclusively; the only shared inputs
are the frozen RecordContext and the logging system. Every failure is caught
here, logged with the record identifier, and returned as a RecordOutcome so
one bad record never affects the rest of its batch.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Callable, Optional

from qrgen.domain.errors import EncodeError, ExportError, GeometryOverflow, RasterError
from qrgen.domain.models import EncoderConfig, JobConfig
from qrgen.encoding.base import SymbolEncoder
from qrgen.encoding.qr import QrCodeEncoder
from qrgen.pipeline.exporter import export
from qrgen.pipeline.reader import Row
from qrgen.render.rasterizer import Rasterizer
from qrgen.utils.logging import configure_logging, get_logger

log = get_logger(__name__)

WRITTEN = "written"
ENCODE_ERROR = "encode_error"
GEOMETRY_OVERFLOW = "geometry_overflow"
RASTER_ERROR = "raster_error"
IO_ERROR = "io_error"
UNEXPECTED = "unexpected"


@dataclass(frozen=True)
class RecordContext:
    job: JobConfig
    encoder_factory: Callable[[EncoderConfig], SymbolEncoder] = QrCodeEncoder


@dataclass(frozen=True)
class RecordOutcome:
    identifier: str
    status: str
    path: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == WRITTEN


def is_eligible(row: Row) -> bool:
    """A row needs an identifier and a payload; extra fields are ignored."""
    return len(row) >= 2


def init_worker(level: str, json_logs: bool) -> None:
    """Pool initializer: spawned workers start without logging configuration."""
    configure_logging(level=level, json_logs=json_logs)


@lru_cache(maxsize=8)
def _encoder_for(
    factory: Callable[[EncoderConfig], SymbolEncoder], config: EncoderConfig
) -> SymbolEncoder:
    """One encoder per (factory, config) in each worker process."""
    return factory(config)


def render_record(context: RecordContext, row: Row) -> RecordOutcome:
    identifier = row[0]
    try:
        return _render(context, identifier, row[1])
    except Exception as exc:  # noqa: BLE001
        log.exception(f"unexpected error for {identifier}", extra={"identifier": identifier})
        return RecordOutcome(identifier, UNEXPECTED, error=f"{type(exc).__name__}: {exc}")


def _render(context: RecordContext, identifier: str, payload: str) -> RecordOutcome:
    job = context.job

    try:
        matrix = _encoder_for(context.encoder_factory, job.encoder).encode(payload)
    except EncodeError as exc:
        log.warning(f"error generating for {identifier}: {exc}", extra={"identifier": identifier})
        return RecordOutcome(identifier, ENCODE_ERROR, error=str(exc))

    log.debug(f"encoded {identifier}: {matrix.describe()}", extra={"identifier": identifier})
    rasterizer = Rasterizer(job.render)

    try:
        data = rasterizer.render(matrix)
        path: Path = export(job.output_dir, identifier, job.render.format, data)
    except GeometryOverflow as exc:
        log.warning(
            f"image too large for {identifier}: {exc}",
            extra={"identifier": identifier, "attempted": list(exc.operands)},
        )
        return RecordOutcome(identifier, GEOMETRY_OVERFLOW, error=str(exc))
    except RasterError as exc:
        log.warning(f"error rasterizing {identifier}: {exc}", extra={"identifier": identifier})
        return RecordOutcome(identifier, RASTER_ERROR, error=str(exc))
    except (ExportError, OSError) as exc:
        log.warning(f"error writing {identifier}: {exc}", extra={"identifier": identifier})
        return RecordOutcome(identifier, IO_ERROR, error=str(exc))

    log.debug(f"wrote {path}", extra={"identifier": identifier})
    return RecordOutcome(identifier, WRITTEN, path=str(path))


__all__ = [
    "RecordContext",
    "RecordOutcome",
    "init_worker",
    "is_eligible",
    "render_record",
    "WRITTEN",
    "ENCODE_ERROR",
    "GEOMETRY_OVERFLOW",
    "RASTER_ERROR",
    "IO_ERROR",
    "UNEXPECTED",
]
