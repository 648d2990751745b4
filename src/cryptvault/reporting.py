"""Reporting for batch runs and file statistics.

Formats tables for CLI output and exports batch results to JSON.
"""

from __future__ import annotations

import json
from pathlib import Path

from tabulate import tabulate

from .files import BatchResult
from .stats import FileStats


def format_batch_table(results: list[BatchResult]) -> str:
    """Format batch results as a table string for CLI output.

    Args:
        results: Results from batch_process()

    Returns:
        Formatted table string
    """
    if not results:
        return "No files processed."

    headers = ["File", "Output", "Status", "Time (s)"]
    rows = [
        [
            str(r.source),
            str(r.destination) if r.destination else "-",
            "OK" if r.ok else f"FAILED: {r.error}",
            f"{r.elapsed_seconds:.4f}",
        ]
        for r in results
    ]
    return tabulate(rows, headers=headers, tablefmt="simple")


def format_stats_table(stats: FileStats) -> str:
    """Format file statistics as a two-column table."""
    rows = [
        ["File size", f"{stats.size_bytes} bytes"],
        ["Total chars", stats.chars],
        ["Letters", stats.letters],
        ["Numbers", stats.digits],
        ["Lines", stats.lines],
    ]
    return tabulate(rows, tablefmt="plain")


def export_batch_json(
    results: list[BatchResult],
    output_path: str | Path,
    indent: int = 2,
) -> Path:
    """Export batch results to JSON file.

    Args:
        results: Results from batch_process()
        output_path: Path to output JSON file
        indent: JSON indentation level

    Returns:
        Path to written file
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    data = {
        "version": "1.0",
        "count": len(results),
        "succeeded": sum(1 for r in results if r.ok),
        "results": [r.to_dict() for r in results],
    }

    with open(output_path, "w") as f:
        json.dump(data, f, indent=indent, default=str)

    return output_path
