"""
Exceptions raised by the file sorter.

Every filesystem failure is wrapped in one of these so callers can tell a
bad input path from a failed move without inspecting errno values. The
underlying OSError is always chained as ``__cause__``.
"""

from pathlib import Path
from typing import Optional, Union


class FileSorterError(Exception):
    """Base class for all file sorter errors."""

    def __init__(self, message: str, path: Optional[Union[str, Path]] = None):
        super().__init__(message)
        self.path = str(path) if path is not None else None


class InputError(FileSorterError):
    """Source path is missing, empty or not a directory."""


class TraversalError(FileSorterError):
    """A directory entry could not be read during the walk."""


class DirectoryCreationError(FileSorterError):
    """A category folder could not be created."""


class MoveError(FileSorterError):
    """A file could not be renamed into its category folder."""


class StatError(FileSorterError):
    """The size of a relocated file could not be read."""
