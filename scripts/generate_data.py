"""
Sample input generator for qrgen.

Writes a deterministic CSV of `identifier,payload` rows. Optional noise mixes
in the row shapes the pipeline must tolerate: single-field rows (filtered),
ragged rows with extra fields (accepted), and lines with invalid UTF-8
(skipped as decode errors).
"""

from __future__ import annotations

import csv
import io
import random
from pathlib import Path

import typer

app = typer.Typer(help="Generate sample identifier,payload CSV files for qrgen.")

HEADER = ["identifier", "payload"]


def _payload(rng: random.Random, index: int) -> str:
    kind = rng.choice(["url", "numeric", "alnum", "text"])
    if kind == "url":
        return f"https://example.com/items/{index}?ref={rng.randint(1, 1_000_000)}"
    if kind == "numeric":
        return str(rng.randint(10**8, 10**12))
    if kind == "alnum":
        return f"ITEM {index:06d} LOT {rng.randint(1, 999)}"
    return rng.choice(["café au lait", "naïve résumé", "Grüße aus Köln", "plain text payload"])


def _generate_rows_csv(
    csv_path: Path,
    rows: int,
    seed: int,
    header: bool = True,
    noise: float = 0.0,
) -> int:
    """
    Write `rows` data lines to `csv_path` and return how many are eligible.

    With noise > 0 roughly that share of lines is replaced by a noisy shape.
    """
    rng = random.Random(seed)
    eligible = 0

    with csv_path.open("wb") as f:
        if header:
            f.write(_encode_row(HEADER))
        for i in range(rows):
            identifier = f"code-{i:06d}"
            if noise and rng.random() < noise:
                shape = rng.choice(["single", "ragged", "invalid"])
                if shape == "single":
                    f.write(_encode_row([identifier]))
                    continue
                if shape == "invalid":
                    f.write(identifier.encode("utf-8") + b",\xff\xfe broken\n")
                    continue
                f.write(_encode_row([identifier, _payload(rng, i), "extra", "fields"]))
                eligible += 1
                continue
            f.write(_encode_row([identifier, _payload(rng, i)]))
            eligible += 1
    return eligible


def _encode_row(fields: list[str]) -> bytes:
    buffer = io.StringIO()
    csv.writer(buffer, lineterminator="\n").writerow(fields)
    return buffer.getvalue().encode("utf-8")


@app.command()
def main(
    output: Path = typer.Option(Path("data/sample.csv"), "--output", "-o", help="CSV path."),
    rows: int = typer.Option(1_000, "--rows", "-r", min=1, help="Number of data rows."),
    seed: int = typer.Option(42, "--seed", help="Random seed for reproducible files."),
    header: bool = typer.Option(True, "--header/--no-header", help="Write a header line."),
    noise: float = typer.Option(
        0.0, "--noise", min=0.0, max=1.0, help="Share of noisy (ragged/invalid) lines."
    ),
) -> None:
    output.parent.mkdir(parents=True, exist_ok=True)
    eligible = _generate_rows_csv(output, rows=rows, seed=seed, header=header, noise=noise)
    typer.echo(f"Wrote {rows} rows ({eligible} eligible) to {output}")


if __name__ == "__main__":
    app()
