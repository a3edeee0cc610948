"""
Job reporting: rich summary table and JSON persistence of per-source reports.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Sequence

from rich import box
from rich.console import Console
from rich.table import Table

from qrgen.utils.logging import get_logger

log = get_logger(__name__)


def _mb(value: Optional[int]) -> str:
    if not value:
        return "N/A"
    return f"{value / (1024 * 1024):.2f}"


def print_reports(reports: Sequence[Mapping[str, Any]], console: Optional[Console] = None) -> None:
    """
    Render per-source reports as a rich table, in processing order.
    """
    console = console or Console()

    if not reports:
        console.print("[yellow]No sources processed.[/yellow]")
        return

    table = Table(title="qrgen Results", box=box.ROUNDED)
    table.add_column("Source", style="cyan", no_wrap=True)
    table.add_column("Status")
    table.add_column("Rows", justify="right", style="magenta")
    table.add_column("Written", justify="right", style="bold green")
    table.add_column("Failed", justify="right", style="red")
    table.add_column("Skipped\n[dim](decode / filtered)[/dim]", justify="right")
    table.add_column("Duration (s)", justify="right", style="green")
    table.add_column("Records/s", justify="right", style="green")
    table.add_column("Peak Memory (MB)", justify="right", style="yellow")

    for report in reports:
        status = report.get("status", "unknown")
        status_str = f"[green]{status}[/green]" if status == "completed" else f"[red]{status}[/red]"
        table.add_row(
            str(report.get("source", "?")),
            status_str,
            f"{report.get('rows_read', 0):,}",
            f"{report.get('written', 0):,}",
            f"{report.get('failed', 0):,}",
            f"{report.get('decode_errors', 0):,} / {report.get('filtered', 0):,}",
            f"{report.get('duration_seconds', 0.0):.2f}",
            f"{report.get('throughput_records_per_sec', 0.0):,.2f}",
            _mb(report.get("peak_rss_bytes")),
        )

    console.print(table)


def write_report(reports: Sequence[Mapping[str, Any]], path: Path | str) -> Path:
    """Persist reports as JSON with a UTC timestamp and totals."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    payload: Dict[str, Any] = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "totals": {
            "sources": len(reports),
            "failed_sources": sum(1 for r in reports if r.get("status") != "completed"),
            "written": sum(r.get("written", 0) for r in reports),
            "failed": sum(r.get("failed", 0) for r in reports),
        },
        "reports": [dict(r) for r in reports],
    }
    with target.open("w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2, sort_keys=True)

    log.info("Report persisted", extra={"report": str(target)})
    return target


__all__ = ["print_reports", "write_report"]
