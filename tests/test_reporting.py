"""Tests for reporting helpers."""

import json
from pathlib import Path

from cryptvault.files import BatchResult
from cryptvault.reporting import export_batch_json, format_batch_table, format_stats_table
from cryptvault.stats import FileStats


def _results() -> list[BatchResult]:
    return [
        BatchResult(source=Path("a.txt"), destination=Path("a.txt.enc"), ok=True, elapsed_seconds=0.01),
        BatchResult(source=Path("b.txt"), destination=None, ok=False, error="not found"),
    ]


class TestFormatting:
    """Table output for the CLI."""

    def test_batch_table(self) -> None:
        table = format_batch_table(_results())
        assert "a.txt.enc" in table
        assert "OK" in table
        assert "FAILED: not found" in table
        assert "Time (s)" in table

    def test_empty_batch_table(self) -> None:
        assert format_batch_table([]) == "No files processed."

    def test_stats_table(self) -> None:
        stats = FileStats(path=Path("x"), size_bytes=42, chars=42, letters=30, digits=5, lines=3)
        table = format_stats_table(stats)
        assert "42 bytes" in table
        assert "Letters" in table
        assert "30" in table


class TestJsonExport:
    """export_batch_json()."""

    def test_export(self, tmp_path: Path) -> None:
        path = export_batch_json(_results(), tmp_path / "reports" / "batch.json")

        data = json.loads(path.read_text())
        assert data["version"] == "1.0"
        assert data["count"] == 2
        assert data["succeeded"] == 1
        assert data["results"][0]["destination"] == "a.txt.enc"
        assert data["results"][1]["ok"] is False
