"""Command-line interface for tasktex.

Converts task files to their standalone LaTeX document and their brochure
chapter.

Examples
--------
Convert a single task (writes ``2023-CH-07-eng.tex`` and
``2023-CH-07-eng_brochure.tex`` next to it)::

    $ tasktex tasks/2023-CH-07/2023-CH-07-eng.task.md

Print the standalone document::

    $ tasktex -o - tasks/2023-CH-07/2023-CH-07-eng.task.md

Convert every task below a folder into ``./tex``, even if up to date::

    $ tasktex -r -f -o ./tex tasks/

Only German tasks (a pattern starting with ``-`` must be attached with
``=``)::

    $ tasktex -r --filter="-deu\\.task\\.md$" tasks/

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.
# src/tasktex/cli.py
from __future__ import annotations

import argparse
import logging
import re
import sys
from pathlib import Path
from typing import Optional

from tasktex.api import convert_task, default_output_path, render_task, to_document
from tasktex.constants import TASK_FILE_SUFFIX
from tasktex.exceptions import DependencyError, TaskTexError
from tasktex.logging_utils import configure_logging, logging_task
from tasktex.tokens.linearize import linearize

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_DEPENDENCY_ERROR = 2

STDOUT_MARKER = "-"


class UsageError(Exception):
    """Raised for invalid command-line usage; reported without a traceback."""


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser of the ``tasktex`` command."""
    from tasktex import __version__

    parser = argparse.ArgumentParser(
        prog="tasktex",
        description="Convert task files to a standalone LaTeX document and a brochure chapter.",
    )
    parser.add_argument("source", help="the source task file (or folder if -r is used)")
    parser.add_argument(
        "-o",
        "--output",
        help="where to store the output file (a folder with -r, or - for stdout if there is a single file)",
    )
    parser.add_argument("-f", "--force", action="store_true", help="force regeneration of output files")
    parser.add_argument(
        "-r", "--recursive", action="store_true", help="batch convert all task files in the source folder"
    )
    parser.add_argument(
        "-F", "--filter", dest="pattern", help="in recursive mode, only consider files matching this regex"
    )
    parser.add_argument("-d", "--dump", action="store_true", help="log the node stream after parsing")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="logging level (default: WARNING)",
    )
    parser.add_argument("--log-file", help="also write log messages to this file")
    parser.add_argument("--trace", action="store_true", help="verbose logging with timestamps and logger names")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _setup_logging_level(parsed_args: argparse.Namespace) -> None:
    """Set up logging based on command-line arguments."""
    if parsed_args.trace:
        log_level = logging.DEBUG
    else:
        log_level = getattr(logging, parsed_args.log_level.upper())
        if parsed_args.dump:
            log_level = min(log_level, logging.INFO)
    configure_logging(log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)


def find_task_files(source: Path, recursive: bool, pattern: Optional[str] = None) -> list[Path]:
    """Collect the task files to convert.

    Parameters
    ----------
    source : Path
        Task file, or folder in recursive mode
    recursive : bool
        Walk ``source`` for ``*.task.md`` files
    pattern : str, optional
        Regular expression the file path must match (recursive mode only)

    Raises
    ------
    UsageError
        If the source does not exist or has the wrong kind

    """
    if recursive:
        if not source.exists():
            raise UsageError(f"source folder does not exist: {source}")
        if not source.is_dir():
            raise UsageError(f"source folder is not a directory: {source}")
        try:
            regex = re.compile(pattern) if pattern else None
        except re.error as e:
            raise UsageError(f"invalid filter pattern {pattern!r}: {e}") from e
        return sorted(
            path
            for path in source.rglob("*" + TASK_FILE_SUFFIX)
            if path.is_file() and (regex is None or regex.search(path.as_posix()))
        )

    if not source.exists():
        raise UsageError(f"task file does not exist: {source}")
    if not source.is_file() or not source.name.endswith(TASK_FILE_SUFFIX):
        raise UsageError(f"not a task file (expected a '{TASK_FILE_SUFFIX}' file): {source}")
    return [source]


def output_destination(output: Optional[str], task_file: Path, recursive: bool) -> Optional[Path]:
    """Resolve where the standalone output of ``task_file`` goes; None means stdout."""
    if output:
        if output == STDOUT_MARKER:
            return None
        if recursive:
            return Path(output) / default_output_path(task_file).name
        return Path(output)
    return default_output_path(task_file)


def _dump_nodes(task_file: Path) -> None:
    doc = to_document(task_file)
    for node in linearize(doc.nodes):
        logger.info(node.describe())


def run(parsed_args: argparse.Namespace) -> int:
    """Convert the task files selected by the parsed arguments."""
    task_files = find_task_files(Path(parsed_args.source), parsed_args.recursive, parsed_args.pattern)
    if not task_files:
        raise UsageError(f"No task file found in {parsed_args.source}")

    to_stdout = parsed_args.output == STDOUT_MARKER
    if to_stdout and len(task_files) > 1:
        raise UsageError("Cannot output multiple files to stdout")

    if parsed_args.recursive and parsed_args.output and not to_stdout:
        Path(parsed_args.output).mkdir(parents=True, exist_ok=True)

    for task_file in task_files:
        destination = output_destination(parsed_args.output, task_file, parsed_args.recursive)
        with logging_task(task_file):
            if parsed_args.dump:
                _dump_nodes(task_file)

            if destination is None:
                sys.stdout.write(render_task(task_file).standalone)
                sys.stdout.flush()
                continue

            written = convert_task(task_file, destination, force=parsed_args.force)
        if written is None:
            print(f"Output file '{destination}' seems up to date.", file=sys.stderr)
        else:
            print(f"Output written on {written}", file=sys.stderr)

    return EXIT_SUCCESS


def main(args: list[str] | None = None) -> int:
    """Execute the CLI entry point."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    _setup_logging_level(parsed_args)

    try:
        return run(parsed_args)
    except UsageError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR
    except DependencyError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_DEPENDENCY_ERROR
    except TaskTexError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
