"""
Per-record export: output path construction and atomic file writes.

Output identity is the identifier field alone, so concurrent workers never
write the same file unless the input repeats an identifier (last write wins).
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from qrgen.domain.errors import ExportError
from qrgen.domain.models import OutputFormat

_FORBIDDEN_NAMES = {"", ".", ".."}


def output_path(output_dir: Path, identifier: str, fmt: OutputFormat) -> Path:
    """`<output_dir>/<identifier>.<ext>`; identifiers must be plain file names."""
    if identifier in _FORBIDDEN_NAMES:
        raise ExportError(f"invalid file name {identifier!r}")
    separators = {"/", "\0", os.sep} | ({os.altsep} if os.altsep else set())
    if any(sep in identifier for sep in separators):
        raise ExportError(f"file name {identifier!r} contains a path separator")
    return output_dir / f"{identifier}.{fmt.extension}"


@retry(
    retry=retry_if_exception_type((InterruptedError, BlockingIOError, TimeoutError)),
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=0.05, min=0.05, max=1),
    reraise=True,
)
def write_atomic(path: Path, data: bytes) -> None:
    """
    Write `data` to `path` through a temporary sibling file and os.replace.

    Readers see either the previous file or the complete new one.
    """
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "wb") as handle:
            handle.write(data)
            handle.flush()
        os.replace(tmp_name, path)
    except BaseException:
        _discard(tmp_name)
        raise


def _discard(name: str) -> None:
    try:
        os.unlink(name)
    except FileNotFoundError:
        pass


def export(output_dir: Path, identifier: str, fmt: OutputFormat, data: bytes) -> Path:
    path = output_path(output_dir, identifier, fmt)
    write_atomic(path, data)
    return path


__all__ = ["output_path", "write_atomic", "export"]
