"""
Type definitions and data classes for the file sorter.

This module defines:
- FileStats: Per-category file count and byte total
- RelocationResult: Outcome of moving one file into its category folder
- ErrorPolicy: Whether a run aborts or continues after a per-file error
- ErrorKind: Kind of error recorded when a run continues past it
- FileError: One recorded error (continue-on-error mode)
- ReportRow: Row of the exported CSV/XLSX summary
"""

from dataclasses import dataclass
from enum import Enum


@dataclass
class FileStats:
    """
    Aggregated statistics for one category.

    Attributes:
        count: Number of files relocated into the category
        total_size: Sum of their sizes in bytes, measured at the destination
    """
    count: int = 0
    total_size: int = 0


@dataclass
class RelocationResult:
    """Result of a single relocation."""
    source_path: str
    dest_path: str
    category: str
    renamed: bool = False


class ErrorPolicy(Enum):
    """What the walker does when a file or directory fails."""
    ABORT = "abort"        # Stop the run on the first error
    CONTINUE = "continue"  # Record the error and keep going


class ErrorKind(Enum):
    """Kind of a recorded error."""
    TRAVERSAL = "traversal"
    DIRECTORY_CREATION = "directory_creation"
    MOVE = "move"
    STAT = "stat"


@dataclass
class FileError:
    """An error recorded during a run instead of being raised."""
    path: str
    kind: ErrorKind
    message: str


@dataclass
class ReportRow:
    """Row for the exported summary report."""
    category: str
    count: int
    total_size: int
    size_mb: str
