"""
Batch reader: groups a fallible row stream into bounded batches.

Each batch is assembled from at most `chunk_size` read attempts. Rows that
fail to decode are logged and dropped; they use up an attempt but not a slot
in the batch, so batches can be shorter than `chunk_size` mid-stream. A
window in which every attempt failed yields nothing and reading moves on to
the next window. Batches are never empty, and concatenating them gives the
successfully decoded rows in input order.
"""

from __future__ import annotations

from typing import Iterator, List

from qrgen.domain.errors import DecodeError
from qrgen.pipeline.reader import Row
from qrgen.utils.logging import get_logger

log = get_logger(__name__)

Batch = List[Row]


class Chunker:
    """Lazy, non-restartable iterator of batches over `source`."""

    def __init__(self, source: Iterator[Row], chunk_size: int, label: str = "") -> None:
        if chunk_size < 1:
            raise ValueError("Chunk size must be a number greater than 0.")
        self._source = source
        self.chunk_size = chunk_size
        self.label = label
        self._exhausted = False
        self.rows_read = 0
        self.decode_errors = 0
        self.batches = 0

    def __iter__(self) -> "Chunker":
        return self

    def __next__(self) -> Batch:
        while not self._exhausted:
            batch = self._read_window()
            if batch:
                self.batches += 1
                return batch
            if not self._exhausted:
                log.debug("No decodable rows in window, continuing", extra={"source": self.label})
        raise StopIteration

    def _read_window(self) -> Batch:
        batch: Batch = []
        for _ in range(self.chunk_size):
            try:
                row = next(self._source)
            except StopIteration:
                self._exhausted = True
                break
            except DecodeError as exc:
                self.decode_errors += 1
                log.warning(
                    f"Skipping undecodable row: {exc}",
                    extra={"source": self.label, "line": exc.line},
                )
                continue
            self.rows_read += 1
            batch.append(row)
        return batch


def iter_batches(source: Iterator[Row], chunk_size: int) -> Iterator[Batch]:
    return Chunker(source, chunk_size)


__all__ = ["Batch", "Chunker", "iter_batches"]
