#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/tasktex/logging_utils.py
"""Logging setup for the tasktex command line.

Renderer warnings name the offending node but not the task file, which is
ambiguous in batch mode. The console format therefore carries the task file
being converted, set with :func:`logging_task` around each conversion.
"""

from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from pathlib import Path
from typing import Generator, Optional, Union

_current_task: ContextVar[str] = ContextVar("tasktex_current_task", default="")

COMPACT_FORMAT = "%(levelname)s: %(task_prefix)s%(message)s"
TRACE_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(task_prefix)s%(message)s"


class TaskFileFilter(logging.Filter):
    """Add ``task_prefix`` ("<task file>: " or "") to every record."""

    def filter(self, record: logging.LogRecord) -> bool:
        task = _current_task.get()
        record.task_prefix = f"{task}: " if task else ""
        return True


@contextmanager
def logging_task(task_file: Union[str, Path]) -> Generator[None, None, None]:
    """Prefix log messages emitted inside the block with ``task_file``."""
    token = _current_task.set(str(task_file))
    try:
        yield
    finally:
        _current_task.reset(token)


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
) -> logging.Logger:
    """Configure root logging handlers for the CLI.

    Parameters
    ----------
    log_level : int | str
        Numeric logging level or string name (e.g., "INFO").
    log_file : str, optional
        Also append log messages to this file.
    trace_mode : bool, default False
        Emit timestamps and logger names.

    Returns
    -------
    logging.Logger
        The configured root logger.

    """
    resolved_level = log_level if isinstance(log_level, int) else getattr(logging, str(log_level).upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(resolved_level)
    root_logger.handlers.clear()

    formatter = logging.Formatter(
        TRACE_FORMAT if trace_mode else COMPACT_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S" if trace_mode else None,
    )

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    file_error: Optional[OSError] = None
    if log_file:
        try:
            handlers.append(logging.FileHandler(log_file, mode="a", encoding="utf-8"))
        except OSError as exc:
            file_error = exc

    for handler in handlers:
        handler.setLevel(resolved_level)
        handler.setFormatter(formatter)
        handler.addFilter(TaskFileFilter())
        root_logger.addHandler(handler)

    if file_error is not None:
        root_logger.warning(f"Could not create log file {log_file}: {file_error}")

    return root_logger
