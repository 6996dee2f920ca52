"""
Relocator for moving a single file into its category folder.

This module is responsible for:
- Creating the category folder (and any missing parents) on demand
- Resolving name collisions by inserting a timestamp before the extension
- Renaming the file into place (same filesystem only, no copy fallback)
- Writing the outcome of every step to the run log
- Raising DirectoryCreationError / MoveError on failure

The existence check and the rename are two separate steps. Another process
creating the same name in between is not guarded against.
"""

import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional, Tuple, Union

from .errors import DirectoryCreationError, MoveError
from .logs import log_success
from .types import RelocationResult
from .utils import split_name

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%d_%H-%M-%S"

Clock = Callable[[], datetime]


def resolve_destination(
    target_dir: Union[str, Path],
    file_name: str,
    now: Optional[datetime] = None
) -> Tuple[Path, bool]:
    """
    Resolve a destination path for a file that does not overwrite anything.

    If ``target_dir/file_name`` is free it is used as is. Otherwise a
    timestamp is inserted between stem and extension, e.g.
    ``report_2024-01-02_15-04-05.txt``. Should that name be taken as well
    (several collisions within the same second), _1, _2, etc. are appended
    after the timestamp.

    Args:
        target_dir: The category folder
        file_name: Base name of the file being moved
        now: Time used for the timestamp (defaults to datetime.now())

    Returns:
        Tuple of (destination path, whether the name was changed)

    Raises:
        MoveError: If no free name is found within the safety limit
    """
    target_dir = Path(target_dir)

    candidate = target_dir / file_name
    if not candidate.exists():
        return candidate, False

    stem, ext = split_name(file_name)
    stamp = (now or datetime.now()).strftime(TIMESTAMP_FORMAT)

    candidate = target_dir / f"{stem}_{stamp}{ext}"
    if not candidate.exists():
        return candidate, True

    counter = 1
    while True:
        candidate = target_dir / f"{stem}_{stamp}_{counter}{ext}"
        if not candidate.exists():
            return candidate, True
        counter += 1

        # Safety limit to prevent infinite loops
        if counter > 10000:
            raise MoveError(
                f"Could not find unique name for '{file_name}' "
                f"in {target_dir} after 10000 attempts",
                target_dir / file_name
            )


def ensure_directory(target_dir: Union[str, Path], run_log: logging.Logger) -> Path:
    """
    Create ``target_dir`` and any missing parents. Succeeds if it exists.

    Raises:
        DirectoryCreationError: If the folder cannot be created
    """
    target_dir = Path(target_dir)
    try:
        target_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        run_log.error("Failed to create folder %s: %s", target_dir, e)
        raise DirectoryCreationError(
            f"Failed to create folder {target_dir}: {e}", target_dir
        ) from e
    return target_dir


def relocate(
    source_path: Union[str, Path],
    target_dir: Union[str, Path],
    run_log: logging.Logger,
    category: str = "",
    clock: Optional[Clock] = None
) -> RelocationResult:
    """
    Move one file into ``target_dir``, renaming it on collision.

    Args:
        source_path: The file to move
        target_dir: Destination folder (created if missing)
        run_log: Logger receiving the run log entries
        category: Category name recorded on the result
        clock: Optional callable returning the current time (for collisions)

    Returns:
        RelocationResult with the final destination path

    Raises:
        DirectoryCreationError: If the target folder cannot be created
        MoveError: If the rename fails (permission denied, other volume, ...)
    """
    source_path = Path(source_path)
    target_dir = ensure_directory(target_dir, run_log)

    file_name = source_path.name
    now = clock() if clock else None
    try:
        dest_path, renamed = resolve_destination(target_dir, file_name, now)
    except MoveError as e:
        run_log.error("Failed to move file %s: %s", source_path, e)
        raise

    if renamed:
        run_log.info("Name conflict, new name: %s", dest_path.name)

    try:
        os.rename(source_path, dest_path)
    except OSError as e:
        run_log.error(
            "Failed to move file %s to %s: %s", source_path, dest_path, e
        )
        raise MoveError(
            f"Failed to move {source_path} to {dest_path}: {e}", source_path
        ) from e

    log_success(run_log, "File %s moved to %s", file_name, target_dir)
    logger.debug(f"Moved: {source_path} -> {dest_path}")

    return RelocationResult(
        source_path=str(source_path),
        dest_path=str(dest_path),
        category=category,
        renamed=renamed,
    )
