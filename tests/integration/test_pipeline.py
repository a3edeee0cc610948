"""
End-to-end runs of the pipeline with a real worker pool.

These start spawned worker processes, so they are slower than the unit tests
but need no external services.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable

from PIL import Image

from qrgen.domain.models import JobConfig, OutputFormat
from qrgen.pipeline.generator import COMPLETED, Generator
from qrgen.reporter import write_report
from scripts import generate_data

DEFAULT_ROWS = 12
DEFAULT_SEED = 123
DEFAULT_PROCESS_COUNT = 2


def test_spawned_pool_renders_every_eligible_row(
    make_job: Callable[..., JobConfig], tmp_path: Path, output_dir: Path
) -> None:
    source = tmp_path / "codes.csv"
    eligible = generate_data._generate_rows_csv(source, rows=DEFAULT_ROWS, seed=DEFAULT_SEED)
    job = make_job(chunk_size=5, has_headers=True, workers=DEFAULT_PROCESS_COUNT)

    reports = Generator(job).generate([source])

    report = reports[0]
    assert report["status"] == COMPLETED
    assert report["written"] == eligible == DEFAULT_ROWS
    assert report["batches"] == 3
    assert len(list(output_dir.glob("*.svg"))) == DEFAULT_ROWS


def test_noisy_input_with_png_output(
    make_job: Callable[..., JobConfig], tmp_path: Path, output_dir: Path
) -> None:
    source = tmp_path / "noisy.csv"
    eligible = generate_data._generate_rows_csv(
        source, rows=DEFAULT_ROWS * 2, seed=DEFAULT_SEED, noise=0.5
    )
    job = make_job(
        chunk_size=4,
        has_headers=True,
        workers=DEFAULT_PROCESS_COUNT,
        fmt=OutputFormat.PNG,
        scale=1,
    )

    reports = Generator(job).generate([source])

    report = reports[0]
    assert report["written"] == eligible
    assert report["rows_read"] + report["decode_errors"] == DEFAULT_ROWS * 2
    assert report["filtered"] == DEFAULT_ROWS * 2 - eligible - report["decode_errors"]
    images = sorted(output_dir.glob("*.png"))
    assert len(images) == eligible
    with Image.open(images[0]) as image:
        assert image.mode == "RGB"
        assert image.size[0] == image.size[1]

    target = write_report(reports, tmp_path / "report.json")
    assert target.exists()
