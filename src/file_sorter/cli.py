"""
Command line interface for the file sorter.

Usage:
    file-sorter [PATH] [--log-file FILE] [--continue-on-error]
                [--report-csv FILE] [--report-xlsx FILE] [-v]

When PATH is omitted the instructions are printed and the directory is read
from standard input. An empty answer sorts the current working directory.
"""

import argparse
import logging
import sys
from typing import List, Optional, TextIO

from . import __version__
from .errors import FileSorterError, InputError
from .logs import DEFAULT_LOG_FILE
from .organizer import FileOrganizer, validate_source_dir
from .report import render, write_csv_report, write_xlsx_report
from .types import ErrorPolicy

logger = logging.getLogger(__name__)

INSTRUCTIONS = (
    "Instructions:\n"
    "1. Enter the path to a directory\n"
    "2. The files will be sorted into category folders\n"
    "3. A report is printed once sorting is done"
)


def setup_logging(verbose: bool = False) -> None:
    """Configure console logging for the command line tool."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="file-sorter",
        description="Sort the files of a directory into category folders by extension.",
    )
    parser.add_argument(
        "path",
        nargs="?",
        default=None,
        help="Directory to sort (prompted for when omitted; empty means current directory)",
    )
    parser.add_argument(
        "--log-file",
        default=DEFAULT_LOG_FILE,
        help=f"Run log to append to (default: {DEFAULT_LOG_FILE})",
    )
    parser.add_argument(
        "--continue-on-error",
        action="store_true",
        help="Skip files and folders that fail instead of stopping the run",
    )
    parser.add_argument(
        "--report-csv",
        metavar="FILE",
        help="Also write the category summary as CSV",
    )
    parser.add_argument(
        "--report-xlsx",
        metavar="FILE",
        help="Also write the summary and the list of moves as an Excel workbook",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug output on the console",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser


def prompt_for_path(
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None
) -> str:
    """
    Print the instructions and read a directory path.

    Returns:
        The entered path stripped of whitespace ("" if nothing was entered)

    Raises:
        InputError: If standard input is closed
    """
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout

    print(INSTRUCTIONS, file=stdout)
    print("Enter the directory path:", file=stdout)
    line = stdin.readline()
    if not line:
        raise InputError("No input received")
    return line.strip()


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the command line tool.

    Returns:
        Process exit code: 0 on success, 1 on invalid input or a failed run
    """
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    try:
        raw_path = args.path if args.path is not None else prompt_for_path()
        source = validate_source_dir(raw_path)
    except InputError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    on_error = ErrorPolicy.CONTINUE if args.continue_on_error else ErrorPolicy.ABORT

    try:
        organizer = FileOrganizer(source, log_path=args.log_file, on_error=on_error)
    except OSError as e:
        print(f"Error: could not open log file: {e}", file=sys.stderr)
        return 1

    exit_code = 0
    with organizer:
        try:
            organizer.organize()
        except FileSorterError as e:
            logger.debug("Run aborted", exc_info=True)
            print(f"Error while sorting: {e}", file=sys.stderr)
            exit_code = 1

    state = organizer.state
    print(render(state))

    if state.has_failures:
        exit_code = 1

    try:
        if args.report_csv:
            write_csv_report(state, args.report_csv)
        if args.report_xlsx:
            write_xlsx_report(state, args.report_xlsx)
    except OSError as e:
        print(f"Error: could not write report: {e}", file=sys.stderr)
        exit_code = 1

    return exit_code
