from __future__ import annotations

from pathlib import Path

import pytest

from qrgen.domain.errors import ExportError
from qrgen.domain.models import OutputFormat
from qrgen.pipeline import exporter
from qrgen.pipeline.exporter import export, output_path, write_atomic


def test_output_path_uses_identifier_and_extension(tmp_path: Path) -> None:
    assert output_path(tmp_path, "code-1", OutputFormat.SVG) == tmp_path / "code-1.svg"
    assert output_path(tmp_path, "code 2", OutputFormat.PNG) == tmp_path / "code 2.png"


@pytest.mark.parametrize("identifier", ["", ".", "..", "a/b", "../escape", "nul\0byte"])
def test_output_path_rejects_unsafe_identifiers(tmp_path: Path, identifier: str) -> None:
    with pytest.raises(ExportError):
        output_path(tmp_path, identifier, OutputFormat.SVG)


def test_write_atomic_overwrites_and_leaves_no_temp_files(tmp_path: Path) -> None:
    target = tmp_path / "code.svg"
    write_atomic(target, b"first")
    write_atomic(target, b"second")

    assert target.read_bytes() == b"second"
    assert [p.name for p in tmp_path.iterdir()] == ["code.svg"]


def test_write_atomic_discards_temp_file_on_failure(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    target = tmp_path / "code.svg"
    target.write_bytes(b"previous")

    def _fail(src: str, dst: str) -> None:
        raise PermissionError("read-only")

    monkeypatch.setattr(exporter.os, "replace", _fail)

    with pytest.raises(PermissionError):
        write_atomic(target, b"new")

    assert target.read_bytes() == b"previous"
    assert [p.name for p in tmp_path.iterdir()] == ["code.svg"]


def test_write_atomic_retries_transient_errors(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    target = tmp_path / "code.svg"
    real_replace = exporter.os.replace
    calls = []

    def _flaky(src: str, dst: str) -> None:
        calls.append(src)
        if len(calls) == 1:
            raise InterruptedError("interrupted")
        real_replace(src, dst)

    monkeypatch.setattr(exporter.os, "replace", _flaky)

    write_atomic(target, b"data")

    assert len(calls) == 2
    assert target.read_bytes() == b"data"


def test_export_returns_written_path(tmp_path: Path) -> None:
    path = export(tmp_path, "abc", OutputFormat.PNG, b"\x89PNG")

    assert path == tmp_path / "abc.png"
    assert path.read_bytes() == b"\x89PNG"
