"""
Path and formatting helpers.

This module provides:
- normalize_path(): Absolute, normalized form of a source path
- split_name(): Split a file name into stem and extension
- file_extension(): Lower-cased extension of a path
- bytes_to_mb(): Binary megabytes for display
"""

import os
from pathlib import Path
from typing import Tuple, Union

BYTES_PER_MB = 1024 * 1024


def normalize_path(path: Union[str, Path]) -> Path:
    """
    Normalize a path to absolute form.

    An empty string means the current working directory.

    Args:
        path: A file path as string or Path object

    Returns:
        Normalized absolute Path

    Examples:
        >>> normalize_path("")  # doctest: +SKIP
        PosixPath('/current/dir')
    """
    path_str = str(path).strip()
    if not path_str:
        path_str = os.getcwd()

    try:
        return Path(path_str).expanduser().resolve()
    except (OSError, RuntimeError):
        # resolve() can fail on broken symlink loops
        return Path(os.path.abspath(os.path.normpath(path_str)))


def split_name(file_name: str) -> Tuple[str, str]:
    """
    Split a file name into stem and extension.

    The extension keeps its leading dot and original case. Dotfiles such as
    ".bashrc" have no extension.

    Examples:
        >>> split_name("report.txt")
        ('report', '.txt')
        >>> split_name("archive.tar.gz")
        ('archive.tar', '.gz')
        >>> split_name("README")
        ('README', '')
    """
    return os.path.splitext(file_name)


def file_extension(path: Union[str, Path]) -> str:
    """Lower-cased extension of the path's base name ("" if none)."""
    return split_name(os.path.basename(str(path)))[1].lower()


def bytes_to_mb(size_bytes: int) -> float:
    """Convert bytes to binary megabytes (size / 1024 / 1024)."""
    return size_bytes / BYTES_PER_MB


def format_mb(size_bytes: int) -> str:
    """Megabytes with two decimal places, e.g. "1.50"."""
    return f"{bytes_to_mb(size_bytes):.2f}"


def file_size(path: Union[str, Path]) -> int:
    """Size in bytes of the file at ``path``."""
    return os.stat(path).st_size
