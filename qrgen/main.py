from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import List, Optional

import typer
from pydantic import ValidationError

from qrgen.config import get_settings
from qrgen.domain.models import (
    QR_MASK_MAX,
    QR_VERSION_MAX,
    QR_VERSION_MIN,
    ErrorCorrection,
    OutputFormat,
)
from qrgen.pipeline.generator import Generator
from qrgen.reporter import print_reports, write_report
from qrgen.utils.logging import configure_logging, get_logger, level_from_verbosity

app = typer.Typer(help="Generate one QR code image per row of delimited text files.")
log = get_logger(__name__)


def parse_output_directory(src: str) -> Path:
    """`-` means the current working directory."""
    if src == "-":
        return Path(os.getcwd())
    return Path(src)


def parse_qr_format(src: str) -> OutputFormat:
    return OutputFormat.parse(str(src))


def parse_qr_ecc(src: str) -> ErrorCorrection:
    return ErrorCorrection.parse(str(src))


def _parse_int(src: object) -> Optional[int]:
    try:
        return int(str(src).strip())
    except ValueError:
        return None


def parse_qr_version(src: str) -> int:
    value = _parse_int(src)
    if value is None or not QR_VERSION_MIN <= value <= QR_VERSION_MAX:
        raise ValueError("QR Code Model 2 version number must be between 1 and 40 inclusive.")
    return value


def parse_qr_mask(src: str) -> int:
    value = _parse_int(src)
    if value is None or not 0 <= value <= QR_MASK_MAX:
        raise ValueError("QR mask must be between 0 and 7 inclusive.")
    return value


def parse_chunk_size(src: str) -> int:
    value = _parse_int(src)
    if value is None or value < 1:
        raise ValueError("Chunk size must be a number greater than 0.")
    return value


def parse_qr_scale(src: str) -> int:
    value = _parse_int(src)
    if value is None or not 1 <= value <= 255:
        raise ValueError("The module scale must be a number between 1 and 255 inclusive.")
    return value


def parse_border(src: str) -> int:
    value = _parse_int(src)
    if value is None or not 0 <= value <= 255:
        raise ValueError("The border must be a number between 0 and 255 inclusive.")
    return value


def parse_workers(src: str) -> int:
    value = _parse_int(src)
    if value is None or value < 1:
        raise ValueError("Workers must be a number greater than 0.")
    return value


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    job = settings.to_job()
    typer.echo(str(Generator(job)))


@app.command()
def generate(
    infile: List[Path] = typer.Argument(..., help="Input file(s), must be specified."),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        parser=parse_output_directory,
        help="Output path, or current working directory if not specified or - provided.",
    ),
    version_min: Optional[int] = typer.Option(
        None,
        "--min",
        "-m",
        parser=parse_qr_version,
        help="Minimum QR Code Model 2 version, or 1 if not specified.",
    ),
    version_max: Optional[int] = typer.Option(
        None,
        "--max",
        "-x",
        parser=parse_qr_version,
        help="Maximum QR Code Model 2 version, or 40 if not specified.",
    ),
    error_correction: Optional[str] = typer.Option(
        None,
        "--error",
        "-e",
        parser=parse_qr_ecc,
        help="Error correction level: Low (~7%), Medium (~15%), Quartile (~25%) or High (~30%, default).",
    ),
    chunk_size: Optional[int] = typer.Option(
        None,
        "--chunk",
        "-c",
        parser=parse_chunk_size,
        help="Number of lines to process in parallel per batch, defaults to 1 (line by line).",
    ),
    has_headers: bool = typer.Option(
        False, "--skip", "-s", help="Skip the first line of every file as a header."
    ),
    log_enabled: bool = typer.Option(False, "--log", "-l", help="Enable progress logging."),
    verbose: int = typer.Option(0, "--verbose", "-v", count=True, help="Verbose logging (-v, -vv)."),
    border: Optional[int] = typer.Option(
        None, "--border", "-b", parser=parse_border, help="Border size in modules, defaults to 4."
    ),
    mask: Optional[int] = typer.Option(
        None, "--mask", "-k", parser=parse_qr_mask, help="Mask to apply, between 0 and 7 inclusive."
    ),
    output_format: Optional[str] = typer.Option(
        None, "--format", "-f", parser=parse_qr_format, help="Output format, SVG (default) or PNG."
    ),
    scale: Optional[int] = typer.Option(
        None,
        "--scale",
        "-a",
        parser=parse_qr_scale,
        help="Pixels per module (PNG only), between 1 and 255, defaults to 8.",
    ),
    delimiter: Optional[str] = typer.Option(None, "--delimiter", "-d", help="Field delimiter."),
    workers: Optional[int] = typer.Option(
        None, "--workers", "-w", parser=parse_workers, help="Worker processes, defaults to CPU count."
    ),
    report: Optional[Path] = typer.Option(None, "--report", help="Write a JSON report to this path."),
    summary: bool = typer.Option(False, "--summary", help="Print a summary table when done."),
) -> None:
    """
    Render one image per row (identifier, payload) of every input file.
    """
    settings = get_settings()
    log_level = level_from_verbosity(log_enabled, verbose) if log_enabled else settings.log_level
    configure_logging(level=log_level, json_logs=settings.log_json)

    try:
        job = settings.to_job(
            output_dir=output,
            version_min=version_min,
            version_max=version_max,
            error_correction=error_correction,
            mask=mask,
            chunk_size=chunk_size,
            has_headers=True if has_headers else None,
            border=border,
            scale=scale,
            format=output_format,
            delimiter=delimiter,
            workers=workers,
            log_level=log_level,
        )
    except ValidationError as exc:
        typer.echo(f"Invalid configuration: {exc}", err=True)
        raise typer.Exit(code=2) from exc

    log.info("qrgen start")
    reports = Generator(job).generate(infile)
    log.info("qrgen end")

    if report is not None:
        write_report(reports, report)
    if summary:
        print_reports(reports)


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
