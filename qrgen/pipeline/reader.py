"""
Delimited row source over a binary stream.

Wraps the standard library csv reader so that a malformed record raises
DecodeError for that record only and the source stays usable:

- records end at CRLF, CR or LF; every physical line is decoded as UTF-8
  on its own, so invalid bytes only affect the record they belong to
- csv.Error (e.g. a field over the field size limit) becomes DecodeError
- records may have any number of fields; blank lines are skipped
"""

from __future__ import annotations

import csv
import re
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, Iterator, List

from qrgen.domain.errors import DecodeError, SourceOpenError
from qrgen.domain.models import ProcessingConfig

Row = List[str]

_READ_SIZE = 64 * 1024
_TERMINATOR = re.compile(rb"\r\n|\r|\n")


class _LineFeeder:
    """
    Iterator of decoded lines that survives decode failures.

    It must stay a class (not a generator): a generator that raises is
    finished, and the csv reader would see end of input after the first
    bad line.
    """

    def __init__(self, stream: BinaryIO) -> None:
        self._stream = stream
        self._buffer = b""
        self._pos = 0
        self._eof = False
        self.line_num = 0

    def __iter__(self) -> "_LineFeeder":
        return self

    def __next__(self) -> str:
        raw = self._read_line()
        if not raw:
            raise StopIteration
        self.line_num += 1
        encoding = "utf-8-sig" if self.line_num == 1 else "utf-8"
        try:
            return raw.decode(encoding)
        except UnicodeDecodeError as exc:
            raise DecodeError(f"invalid UTF-8 ({exc.reason})", self.line_num) from exc

    def _read_line(self) -> bytes:
        """Next physical line including its terminator, or b"" at end of stream."""
        while True:
            match = _TERMINATOR.search(self._buffer, self._pos)
            # a trailing \r may be the first half of \r\n
            if match and (self._eof or match.end() < len(self._buffer) or match.group() != b"\r"):
                return self._take(match.end())
            if self._eof:
                return self._take(len(self._buffer))
            chunk = self._stream.read(_READ_SIZE)
            if chunk:
                self._buffer = self._buffer[self._pos :] + chunk
                self._pos = 0
            else:
                self._eof = True

    def _take(self, end: int) -> bytes:
        raw = self._buffer[self._pos : end]
        self._pos = end
        return raw


class CsvRowSource:
    """
    Iterator of rows decoded from a delimited binary stream.

    `__next__` returns a row, raises DecodeError for a malformed record (the
    next call continues with the following record) and StopIteration at the
    end of the stream.
    """

    def __init__(
        self,
        stream: BinaryIO,
        delimiter: str = ",",
        has_headers: bool = False,
        trim: bool = True,
    ) -> None:
        self._lines = _LineFeeder(stream)
        self._reader = csv.reader(self._lines, delimiter=delimiter)
        self._skip_header = has_headers
        self.trim = trim

    @property
    def line_num(self) -> int:
        return self._lines.line_num

    def __iter__(self) -> "CsvRowSource":
        return self

    def __next__(self) -> Row:
        while True:
            try:
                row = next(self._reader)
            except DecodeError:
                self._skip_header = False
                raise
            except csv.Error as exc:
                self._skip_header = False
                raise DecodeError(str(exc), self.line_num) from exc
            if not row:
                continue
            if self._skip_header:
                self._skip_header = False
                continue
            if self.trim:
                row = [field.strip() for field in row]
            return row


@contextmanager
def open_source(path: Path | str, processing: ProcessingConfig) -> Iterator[CsvRowSource]:
    """Open `path` as a row source; failure to open raises SourceOpenError."""
    try:
        stream = open(path, "rb")
    except OSError as exc:
        raise SourceOpenError(path, exc) from exc
    with stream:
        yield CsvRowSource(
            stream,
            delimiter=processing.delimiter,
            has_headers=processing.has_headers,
            trim=processing.trim,
        )


__all__ = ["Row", "CsvRowSource", "open_source"]
