"""
Pipeline orchestrator: sources -> batches -> parallel per-record rendering.

Usage:
    from qrgen.pipeline.generator import Generator

    reports = Generator(job).generate(["codes.csv"])

Each source moves through opened -> streaming -> completed | failed. A source
that cannot be opened or read is failed and the job moves on to the next
one; per-record failures are counted in the source's report and never fail
the source. Every batch is fanned out over the worker pool with a blocking
map, so batch N+1 is not read before batch N has fully drained.
"""

from __future__ import annotations

import multiprocessing as mp
import os
from collections import Counter
from contextlib import contextmanager
from functools import partial
from pathlib import Path
from typing import (
    Any,
    Callable,
    Dict,
    Generator as GeneratorType,
    Iterable,
    List,
    Optional,
    TypedDict,
)

from qrgen.domain.errors import SourceOpenError
from qrgen.domain.models import EncoderConfig, JobConfig
from qrgen.encoding.base import SymbolEncoder
from qrgen.encoding.qr import QrCodeEncoder
from qrgen.pipeline.chunker import Chunker
from qrgen.pipeline.reader import Row, open_source
from qrgen.pipeline.worker import (
    WRITTEN,
    RecordContext,
    RecordOutcome,
    init_worker,
    is_eligible,
    render_record,
)
from qrgen.utils.logging import get_logger
from qrgen.utils.profiler import ProfileStats, profile_block

log = get_logger(__name__)

COMPLETED = "completed"
FAILED = "failed"

BatchMapper = Callable[[List[Row]], List[RecordOutcome]]


class FileReport(TypedDict, total=False):
    """
    Per-source completion status.

    `failures` counts failed records by outcome status (encode_error,
    geometry_overflow, raster_error, io_error, unexpected).
    """

    source: str
    status: str
    rows_read: int
    decode_errors: int
    batches: int
    eligible: int
    filtered: int
    written: int
    failed: int
    failures: Dict[str, int]
    duration_seconds: float
    throughput_records_per_sec: float
    peak_rss_bytes: Optional[int]
    cpu_percent: Optional[float]
    error: Optional[str]


def _round_float(value: float, decimals: int = 2) -> float:
    """Round a float to specified decimal places for human-readable output."""
    return round(value, decimals)


def _merge_profile(report: FileReport, stats: ProfileStats) -> FileReport:
    merged: FileReport = dict(report)  # type: ignore[assignment]
    merged["duration_seconds"] = _round_float(stats.duration_seconds)
    merged["throughput_records_per_sec"] = (
        _round_float(merged.get("written", 0) / stats.duration_seconds)
        if stats.duration_seconds
        else 0.0
    )
    merged["peak_rss_bytes"] = stats.peak_rss_bytes
    merged["cpu_percent"] = _round_float(stats.cpu_percent, 1) if stats.cpu_percent else None
    return merged


class Generator:
    """
    Renders one image per eligible row of each input source.

    Parameters
    ----------
    job : JobConfig
        Resolved configuration, shared read-only with every worker.
    encoder_factory : callable
        Builds the symbol encoder from the job's EncoderConfig inside the
        worker. Must be picklable (a module-level class or function).
    mp_context : multiprocessing context, optional
        Context used to build the pool. Defaults to a local context for the
        configured start method; the global start method is never changed.
    """

    def __init__(
        self,
        job: JobConfig,
        encoder_factory: Callable[[EncoderConfig], SymbolEncoder] = QrCodeEncoder,
        mp_context: Any = None,
    ) -> None:
        self.job = job
        self._record_context = RecordContext(job=job, encoder_factory=encoder_factory)
        self._mp_context = mp_context

    @property
    def processes(self) -> int:
        return self.job.processing.workers or os.cpu_count() or 1

    def _serial_map(self, rows: List[Row]) -> List[RecordOutcome]:
        return [render_record(self._record_context, row) for row in rows]

    @contextmanager
    def _batch_mapper(self) -> GeneratorType[BatchMapper, None, None]:
        """Yield a blocking batch -> outcomes mapper, backed by a pool when processes > 1."""
        if self.processes == 1:
            yield self._serial_map
            return

        context = self._mp_context or mp.get_context(self.job.processing.start_method)
        with context.Pool(
            processes=self.processes,
            initializer=init_worker,
            initargs=(self.job.log_level, self.job.json_logs),
        ) as pool:
            yield partial(pool.map, partial(render_record, self._record_context))

    def generate(self, files: Iterable[Path | str]) -> List[FileReport]:
        """Process every source in order and return one report per source."""
        paths = [Path(f) for f in files]
        self.job.output_dir.mkdir(parents=True, exist_ok=True)
        log.info(f"[JOB START] {len(paths)} source(s)", extra={"sources": [str(p) for p in paths]})
        log.debug(str(self))

        reports: List[FileReport] = []
        with self._batch_mapper() as map_batch:
            for path in paths:
                report = self.process_file(path, map_batch)
                reports.append(report)
                if report["status"] == COMPLETED:
                    log.info(
                        f"complete file {path}",
                        extra={"written": report["written"], "failed": report["failed"]},
                    )

        log.info(
            f"[JOB COMPLETE] {sum(r.get('written', 0) for r in reports)} file(s) written",
            extra={"sources": len(reports)},
        )
        return reports

    def process_file(self, path: Path | str, map_batch: Optional[BatchMapper] = None) -> FileReport:
        """
        Stream one source through the pipeline.

        Without `map_batch` records are rendered in the calling process.
        """
        mapper = map_batch or self._serial_map
        label = str(path)
        counts: Counter[str] = Counter()
        chunker: Optional[Chunker] = None
        status, error = COMPLETED, None

        log.info(f"process file {label}", extra={"source": label})
        with profile_block(label) as stats:
            try:
                with open_source(path, self.job.processing) as source:
                    chunker = Chunker(source, self.job.processing.chunk_size, label=label)
                    for batch in chunker:
                        eligible = [row for row in batch if is_eligible(row)]
                        counts["filtered"] += len(batch) - len(eligible)
                        counts["eligible"] += len(eligible)
                        if not eligible:
                            continue
                        for outcome in mapper(eligible):
                            counts[outcome.status] += 1
                        log.debug(
                            f"batch {chunker.batches} drained",
                            extra={"source": label, "rows": len(batch)},
                        )
            except SourceOpenError as exc:
                log.warning(str(exc), extra={"source": label})
                status, error = FAILED, str(exc)
            except OSError as exc:
                log.warning(f"Read error in {label}: {exc}", extra={"source": label})
                status, error = FAILED, f"Read error in {label}: {exc}"

        written = counts.pop(WRITTEN, 0)
        eligible = counts.pop("eligible", 0)
        filtered = counts.pop("filtered", 0)
        report = FileReport(
            source=label,
            status=status,
            rows_read=chunker.rows_read if chunker else 0,
            decode_errors=chunker.decode_errors if chunker else 0,
            batches=chunker.batches if chunker else 0,
            eligible=eligible,
            filtered=filtered,
            written=written,
            failed=sum(counts.values()),
            failures=dict(counts),
            error=error,
        )
        return _merge_profile(report, stats)

    def __str__(self) -> str:
        encoder = self.job.encoder
        render = self.job.render
        processing = self.job.processing
        return (
            f"qr_conf = [QR Version Min:{encoder.version_min}, QR Version Max:{encoder.version_max}, "
            f"Error Correction: {encoder.error_correction.value}, "
            f"Mask:{encoder.mask if encoder.mask is not None else '<Not Set>'}], "
            f"proc_conf = [Chunk Size:{processing.chunk_size}, "
            f"Has CSV Header:{processing.has_headers}, Workers:{self.processes}], "
            f"out_conf = [Border:{render.border}, Scale:{render.scale}, "
            f"Format: {render.format.value}, Output: {self.job.output_dir}]"
        )


def generate(job: JobConfig, files: Iterable[Path | str]) -> List[FileReport]:
    return Generator(job).generate(files)


__all__ = ["COMPLETED", "FAILED", "FileReport", "Generator", "generate"]
