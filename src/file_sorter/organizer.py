"""
Tree walker that sorts a directory into category folders.

This module is responsible for:
- Walking the source tree depth-first, top-down
- Skipping folders whose name matches a category (already sorted)
- Classifying each file and relocating it to source_root/<category>
- Recording per-category statistics measured at the destination
- Aborting on the first error, or collecting errors and continuing
- Owning the run log for the lifetime of the organizer
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

from .errors import (
    DirectoryCreationError,
    FileSorterError,
    InputError,
    MoveError,
    StatError,
    TraversalError,
)
from .logs import DEFAULT_LOG_FILE, close_run_log, log_success, open_run_log
from .mover import Clock, relocate
from .rules import DEFAULT_RULE_TABLE, RuleTable
from .stats import StatisticsAggregator
from .types import ErrorKind, ErrorPolicy, FileError, RelocationResult
from .utils import file_extension, file_size, normalize_path

logger = logging.getLogger(__name__)

_ERROR_KINDS = {
    TraversalError: ErrorKind.TRAVERSAL,
    DirectoryCreationError: ErrorKind.DIRECTORY_CREATION,
    MoveError: ErrorKind.MOVE,
    StatError: ErrorKind.STAT,
}


@dataclass
class RunState:
    """
    State of one organize() run.

    Attributes:
        source_root: The directory being sorted
        processed_count: Files relocated successfully (with or without stats)
        statistics: Per-category count and size
        moves: One entry per successful relocation
        errors: Non-fatal errors. Stat failures are always recorded here,
                other errors only under ErrorPolicy.CONTINUE
    """
    source_root: Path
    processed_count: int = 0
    statistics: StatisticsAggregator = field(default_factory=StatisticsAggregator)
    moves: List[RelocationResult] = field(default_factory=list)
    errors: List[FileError] = field(default_factory=list)

    @property
    def has_failures(self) -> bool:
        """True if a file or directory was skipped because of an error."""
        return any(e.kind is not ErrorKind.STAT for e in self.errors)


def validate_source_dir(path: Union[str, Path]) -> Path:
    """
    Validate and normalize the source directory.

    An empty path means the current working directory.

    Raises:
        InputError: If the path does not exist or is not a directory
    """
    source = normalize_path(path)
    if not source.exists():
        raise InputError(
            f"Directory '{source}' is unavailable or does not exist", source
        )
    if not source.is_dir():
        raise InputError(f"Path '{source}' is not a directory", source)
    return source


class FileOrganizer:
    """
    Sorts the files under a source directory into category folders.

    The organizer opens its run log on construction and releases it in
    close(); use it as a context manager to guarantee that::

        with FileOrganizer("/data/downloads") as organizer:
            state = organizer.organize()
        print(render(state))
    """

    def __init__(
        self,
        source_dir: Union[str, Path],
        log_path: Union[str, Path] = DEFAULT_LOG_FILE,
        rules: RuleTable = DEFAULT_RULE_TABLE,
        on_error: ErrorPolicy = ErrorPolicy.ABORT,
        clock: Optional[Clock] = None,
        run_log: Optional[logging.Logger] = None
    ):
        """
        Initialize the organizer.

        Args:
            source_dir: Directory to sort (validated by the caller)
            log_path: Run log file, opened in append mode
            rules: Extension to category rules
            on_error: Abort on the first error or continue past it
            clock: Optional callable returning the current time
            run_log: Use an existing logger instead of opening log_path.
                     It is not closed by close().

        The run log file itself is never sorted, even when it lives inside
        the source tree.
        """
        self.source_root = normalize_path(source_dir)
        self.rules = rules
        self.on_error = on_error
        self.clock = clock

        self._owns_log = run_log is None
        self.log_path = normalize_path(log_path) if self._owns_log else None
        self.run_log = run_log if run_log is not None else open_run_log(log_path)

        self.state = RunState(source_root=self.source_root)

    def __enter__(self) -> "FileOrganizer":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        """Release the run log if this organizer opened it."""
        if self._owns_log:
            close_run_log(self.run_log)
            self._owns_log = False

    def organize(self) -> RunState:
        """
        Sort every file under the source root.

        Returns:
            The RunState (also available as self.state)

        Raises:
            TraversalError: A directory could not be read (ABORT policy)
            DirectoryCreationError: A category folder could not be created
                                    (ABORT policy)
            MoveError: A file could not be moved (ABORT policy)
        """
        root = self.source_root
        category_names = self.rules.category_names

        logger.info(f"Organizing: {root}")

        if root.name in category_names:
            self.run_log.info("Skipping category folder %s", root)
        else:
            for dirpath, dirnames, filenames in os.walk(
                root, topdown=True, onerror=self._on_walk_error
            ):
                # Prune in place so os.walk does not descend
                skipped = [d for d in dirnames if d in category_names]
                for name in skipped:
                    logger.debug(f"Skipping category folder: {os.path.join(dirpath, name)}")
                dirnames[:] = sorted(d for d in dirnames if d not in category_names)

                for name in sorted(filenames):
                    path = os.path.join(dirpath, name)
                    if self.log_path is not None and Path(path) == self.log_path:
                        continue
                    if not os.path.isfile(path):
                        logger.debug(f"Not a regular file, leaving in place: {path}")
                        continue
                    self._process_file(Path(path))

        log_success(
            self.run_log,
            "Sorting finished. Processed %d files", self.state.processed_count
        )
        logger.info(f"Processed {self.state.processed_count} files")
        return self.state

    def _on_walk_error(self, error: OSError) -> None:
        path = error.filename or self.source_root
        self.run_log.error("Cannot access %s: %s", path, error)
        wrapped = TraversalError(f"Cannot access {path}: {error}", path)
        wrapped.__cause__ = error
        self._handle_error(wrapped)

    def _process_file(self, path: Path) -> None:
        category = self.rules.classify(file_extension(path))
        target_dir = self.source_root / category

        try:
            result = relocate(
                path, target_dir, self.run_log,
                category=category, clock=self.clock
            )
        except FileSorterError as e:
            self.run_log.error("Failed to relocate file %s: %s", path, e)
            self._handle_error(e)
            return

        self.state.moves.append(result)

        try:
            size = file_size(result.dest_path)
        except OSError as e:
            self.run_log.error(
                "Could not read file info for %s: %s", result.dest_path, e
            )
            stat_error = StatError(
                f"Could not read file info for {result.dest_path}: {e}",
                result.dest_path
            )
            self._record(stat_error)
        else:
            self.state.statistics.record(category, size)

        self.state.processed_count += 1

    def _handle_error(self, error: FileSorterError) -> None:
        if self.on_error is ErrorPolicy.ABORT:
            raise error
        self._record(error)

    def _record(self, error: FileSorterError) -> None:
        kind = _ERROR_KINDS.get(type(error), ErrorKind.MOVE)
        self.state.errors.append(
            FileError(path=error.path or "", kind=kind, message=str(error))
        )


def organize_directory(
    source_dir: Union[str, Path],
    log_path: Union[str, Path] = DEFAULT_LOG_FILE,
    on_error: ErrorPolicy = ErrorPolicy.ABORT
) -> RunState:
    """
    Validate ``source_dir`` and sort it, closing the run log afterwards.

    Raises:
        InputError: If source_dir is not an existing directory
    """
    source = validate_source_dir(source_dir)
    with FileOrganizer(source, log_path=log_path, on_error=on_error) as organizer:
        return organizer.organize()
