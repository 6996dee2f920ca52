"""
Reporting for a finished run.

This module is responsible for:
- Rendering the plain text console summary
- Exporting the summary as CSV
- Exporting the summary and the list of moves as an XLSX workbook (openpyxl)

Sizes are shown in binary megabytes with two decimal places.
"""

import csv
import logging
from pathlib import Path
from typing import TYPE_CHECKING, List, Union

import openpyxl
from openpyxl.styles import Font

from .types import ReportRow
from .utils import format_mb

if TYPE_CHECKING:
    from .organizer import RunState

logger = logging.getLogger(__name__)

CSV_COLUMNS = ["category", "count", "total_size_bytes", "total_size_mb"]
MOVES_COLUMNS = ["source_path", "dest_path", "category", "renamed"]
TOTAL_LABEL = "TOTAL"


def render(state: "RunState") -> str:
    """
    Render the console report for a run.

    Example output::

        === File Sorting Report ===
        Total files processed: 2
        Total size: 0.00 MB
        Statistics by category:
        Documents:
          - Files: 1
          - Total size: 0.00 MB
    """
    stats = state.statistics

    lines = [
        "=== File Sorting Report ===",
        f"Total files processed: {state.processed_count}",
        f"Total size: {format_mb(stats.total_size)} MB",
        "Statistics by category:",
    ]

    for category in stats.categories():
        entry = stats.get(category)
        lines.append(f"{category}:")
        lines.append(f"  - Files: {entry.count}")
        lines.append(f"  - Total size: {format_mb(entry.total_size)} MB")

    if state.errors:
        lines.append(f"Errors: {len(state.errors)}")
        for error in state.errors:
            lines.append(f"  - [{error.kind.value}] {error.message}")

    return "\n".join(lines)


def build_report_rows(state: "RunState") -> List[ReportRow]:
    """One row per category (sorted by name) followed by a TOTAL row."""
    stats = state.statistics
    rows = []
    for category in stats.categories():
        entry = stats.get(category)
        rows.append(ReportRow(
            category=category,
            count=entry.count,
            total_size=entry.total_size,
            size_mb=format_mb(entry.total_size),
        ))

    rows.append(ReportRow(
        category=TOTAL_LABEL,
        count=state.processed_count,
        total_size=stats.total_size,
        size_mb=format_mb(stats.total_size),
    ))
    return rows


def write_csv_report(state: "RunState", path: Union[str, Path]) -> Path:
    """
    Write the category summary as CSV.

    Args:
        state: The finished run
        path: Output file (overwritten)

    Returns:
        The path written
    """
    path = Path(path)
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(CSV_COLUMNS)
        for row in build_report_rows(state):
            writer.writerow([row.category, row.count, row.total_size, row.size_mb])

    logger.info(f"CSV report written to: {path}")
    return path


def write_xlsx_report(state: "RunState", path: Union[str, Path]) -> Path:
    """
    Write an XLSX workbook with a "Summary" and a "Moves" sheet.

    The Summary sheet has the same rows as the CSV report. The Moves sheet
    lists every relocated file with its final destination.

    Args:
        state: The finished run
        path: Output file (overwritten)

    Returns:
        The path written
    """
    path = Path(path)
    workbook = openpyxl.Workbook()
    bold = Font(bold=True)

    try:
        summary = workbook.active
        summary.title = "Summary"
        summary.append(CSV_COLUMNS)
        for row in build_report_rows(state):
            # Size in MB stored as a number so it can be summed in Excel
            summary.append([
                row.category, row.count, row.total_size, float(row.size_mb)
            ])
        for cell in summary[1]:
            cell.font = bold
        for cell in summary[summary.max_row]:
            cell.font = bold

        moves = workbook.create_sheet("Moves")
        moves.append(MOVES_COLUMNS)
        for move in state.moves:
            moves.append([
                move.source_path, move.dest_path, move.category, move.renamed
            ])
        for cell in moves[1]:
            cell.font = bold

        workbook.save(path)
    finally:
        workbook.close()

    logger.info(f"XLSX report written to: {path}")
    return path
