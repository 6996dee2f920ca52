"""
Unit tests for the console report and the CSV / XLSX exports.
"""

import csv
from pathlib import Path

import openpyxl

from file_sorter.organizer import RunState
from file_sorter.report import (
    build_report_rows,
    render,
    write_csv_report,
    write_xlsx_report,
)
from file_sorter.types import ErrorKind, FileError, RelocationResult

MB = 1024 * 1024


def make_state() -> RunState:
    """Run state with two categories and two moves."""
    state = RunState(source_root=Path("/data"))
    state.statistics.record("Images", 3 * MB)
    state.statistics.record("Documents", MB // 2)
    state.processed_count = 2
    state.moves = [
        RelocationResult("/data/b.jpg", "/data/Images/b.jpg", "Images"),
        RelocationResult(
            "/data/a.txt", "/data/Documents/a_2024-01-02_15-04-05.txt",
            "Documents", renamed=True
        ),
    ]
    return state


class TestRender:
    """Tests for the console report."""

    def test_totals(self):
        """Shows processed count and total size in MB."""
        text = render(make_state())
        assert "Total files processed: 2" in text
        assert "Total size: 3.50 MB" in text

    def test_per_category(self):
        """Shows count and size for each category."""
        lines = render(make_state()).splitlines()

        docs = lines.index("Documents:")
        assert lines[docs + 1] == "  - Files: 1"
        assert lines[docs + 2] == "  - Total size: 0.50 MB"

        images = lines.index("Images:")
        assert lines[images + 1] == "  - Files: 1"
        assert lines[images + 2] == "  - Total size: 3.00 MB"

    def test_small_files_round_to_zero(self):
        """Sizes under 5 KiB display as 0.00 MB."""
        state = RunState(source_root=Path("/data"))
        state.statistics.record("Documents", 10)
        state.processed_count = 1

        assert "Total size: 0.00 MB" in render(state)

    def test_empty_run(self):
        """An empty run still renders the header and totals."""
        text = render(RunState(source_root=Path("/data")))
        assert "Total files processed: 0" in text
        assert "Total size: 0.00 MB" in text
        assert "Errors" not in text

    def test_errors_listed(self):
        """Recorded errors are listed at the end."""
        state = make_state()
        state.errors.append(FileError("/data/x.txt", ErrorKind.MOVE, "Permission denied"))

        text = render(state)
        assert "Errors: 1" in text
        assert "[move] Permission denied" in text

    def test_render_does_not_mutate(self):
        """Rendering leaves the state unchanged."""
        state = make_state()
        before = state.statistics.as_dict()
        render(state)
        assert state.statistics.as_dict() == before


class TestBuildReportRows:
    """Tests for build_report_rows."""

    def test_rows_sorted_with_total(self):
        """Categories sorted by name, TOTAL last."""
        rows = build_report_rows(make_state())
        assert [r.category for r in rows] == ["Documents", "Images", "TOTAL"]
        assert rows[-1].count == 2
        assert rows[-1].total_size == 3 * MB + MB // 2
        assert rows[-1].size_mb == "3.50"


class TestCsvReport:
    """Tests for write_csv_report."""

    def test_write_csv(self, tmp_path):
        """Writes header, one row per category and a total."""
        path = write_csv_report(make_state(), tmp_path / "report.csv")

        with open(path, newline="", encoding="utf-8") as f:
            rows = list(csv.DictReader(f))

        assert [r["category"] for r in rows] == ["Documents", "Images", "TOTAL"]
        assert rows[1]["count"] == "1"
        assert rows[1]["total_size_bytes"] == str(3 * MB)
        assert rows[1]["total_size_mb"] == "3.00"


class TestXlsxReport:
    """Tests for write_xlsx_report."""

    def test_summary_sheet(self, tmp_path):
        """Summary sheet mirrors the CSV rows."""
        path = write_xlsx_report(make_state(), tmp_path / "report.xlsx")

        workbook = openpyxl.load_workbook(path, read_only=True)
        try:
            assert workbook.sheetnames == ["Summary", "Moves"]
            rows = list(workbook["Summary"].iter_rows(values_only=True))
        finally:
            workbook.close()

        assert rows[0] == ("category", "count", "total_size_bytes", "total_size_mb")
        assert rows[1] == ("Documents", 1, MB // 2, 0.5)
        assert rows[-1] == ("TOTAL", 2, 3 * MB + MB // 2, 3.5)

    def test_moves_sheet(self, tmp_path):
        """Moves sheet lists every relocation."""
        path = write_xlsx_report(make_state(), tmp_path / "report.xlsx")

        workbook = openpyxl.load_workbook(path, read_only=True)
        try:
            rows = list(workbook["Moves"].iter_rows(values_only=True))
        finally:
            workbook.close()

        assert rows[0] == ("source_path", "dest_path", "category", "renamed")
        assert len(rows) == 3
        assert rows[2] == (
            "/data/a.txt", "/data/Documents/a_2024-01-02_15-04-05.txt",
            "Documents", True
        )
