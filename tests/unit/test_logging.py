from __future__ import annotations

import json
import logging

import pytest

from qrgen.utils.logging import _json_formatter, level_from_verbosity

EXPECTED_ROWS = 10
EXPECTED_CHUNK_SIZE = 1000


def _record(msg: str = "hello") -> logging.LogRecord:
    return logging.LogRecord(
        name="test.logger",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=msg,
        args=(),
        exc_info=None,
    )


def test_json_formatter_promotes_standard_extra_fields() -> None:
    record = _record()
    record.rows = EXPECTED_ROWS
    record.identifier = "code-1"

    payload = json.loads(_json_formatter(record))

    assert payload["level"] == "INFO"
    assert payload["logger"] == "test.logger"
    assert payload["message"] == "hello"
    assert payload["rows"] == EXPECTED_ROWS
    assert payload["identifier"] == "code-1"
    assert "lineno" not in payload


def test_json_formatter_supports_legacy_nested_extra_field() -> None:
    record = _record()
    record.extra = {"chunk_size": EXPECTED_CHUNK_SIZE}

    payload = json.loads(_json_formatter(record))

    assert payload["chunk_size"] == EXPECTED_CHUNK_SIZE


def test_json_formatter_serializes_non_json_values() -> None:
    record = _record()
    record.attempted = (21, 4, 10)
    record.path = object()

    payload = json.loads(_json_formatter(record))

    assert payload["attempted"] == [21, 4, 10]
    assert isinstance(payload["path"], str)


@pytest.mark.parametrize("enabled, verbose, expected", [
    (False, 0, "WARNING"),
    (False, 3, "WARNING"),
    (True, 0, "WARNING"),
    (True, 1, "INFO"),
    (True, 2, "DEBUG"),
    (True, 5, "DEBUG"),
])
def test_level_from_verbosity(enabled: bool, verbose: int, expected: str) -> None:
    assert level_from_verbosity(enabled, verbose) == expected
