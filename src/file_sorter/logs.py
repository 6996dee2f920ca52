"""
Run log: the append-only ``organizer.log`` written during a run.

Each run gets its own ``logging.Logger`` instance that is not registered with
the logging manager and does not propagate, so opening and closing a run log
never touches the root logger or other runs. Lines look like::

    2024-01-02 15:04:05 [SUCCESS] Moved a.txt to /data/Documents
"""

import logging
from pathlib import Path
from typing import Union

DEFAULT_LOG_FILE = "organizer.log"

# Between INFO (20) and WARNING (30)
SUCCESS = 25

_LEVEL_TAGS = {
    logging.DEBUG: "DEBUG",
    logging.INFO: "INFO",
    SUCCESS: "SUCCESS",
    logging.WARNING: "WARNING",
    logging.ERROR: "ERROR",
    logging.CRITICAL: "CRITICAL",
}

LOG_FORMAT = "%(asctime)s [%(tag)s] %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class TagFormatter(logging.Formatter):
    """Formatter that renders the severity as a bracketed tag."""

    def __init__(self):
        super().__init__(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    def format(self, record: logging.LogRecord) -> str:
        record.tag = _LEVEL_TAGS.get(record.levelno, record.levelname)
        return super().format(record)


def open_run_log(
    log_path: Union[str, Path] = DEFAULT_LOG_FILE,
    name: str = "file_sorter.run"
) -> logging.Logger:
    """
    Open a run log appending to ``log_path``.

    Args:
        log_path: File to append to (created if missing)
        name: Logger name, shown only in debugging output

    Returns:
        A logger owning one FileHandler; release it with close_run_log()

    Raises:
        OSError: If the log file cannot be opened
    """
    handler = logging.FileHandler(str(log_path), mode="a", encoding="utf-8")
    handler.setFormatter(TagFormatter())

    run_log = logging.Logger(name, level=logging.DEBUG)
    run_log.propagate = False
    run_log.addHandler(handler)
    return run_log


def close_run_log(run_log: logging.Logger) -> None:
    """Flush and close every handler attached to a run log."""
    for handler in list(run_log.handlers):
        run_log.removeHandler(handler)
        handler.close()


def log_success(run_log: logging.Logger, message: str, *args) -> None:
    run_log.log(SUCCESS, message, *args)
