#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/tasktex/utils/decorators.py
"""Decorators and context managers shared by the parser and the renderer."""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from functools import wraps
from typing import Any, Callable, Generator, Sequence

from tasktex.exceptions import DependencyError
from tasktex.utils.packages import Requirement, check_dependencies


def requires_dependencies(component: str, packages: Sequence[Requirement]) -> Callable:
    """Raise :class:`DependencyError` before the call if a required library is unusable.

    Parameters
    ----------
    component : str
        Name used in the error message, e.g. "markdown" or "templates"
    packages : sequence of (install_name, import_name, version_spec)
        Required libraries

    Examples
    --------
        >>> @requires_dependencies("markdown", [("mistune", "mistune", ">=3.0.0")])
        ... def parse(text):
        ...     import mistune
        ...     return mistune.create_markdown(renderer=None)(text)

    """
    requirements = tuple(tuple(package) for package in packages)

    def decorator(method: Callable) -> Callable:
        @wraps(method)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            report = check_dependencies(requirements)
            if not report.satisfied:
                raise DependencyError(
                    converter_name=component,
                    missing_packages=list(report.missing),
                    version_mismatches=list(report.version_mismatches),
                    original_import_error=report.first_import_error,
                ) from report.first_import_error
            return method(*args, **kwargs)

        return wrapper

    return decorator


@contextmanager
def debug_timer(logger: logging.Logger, operation: str) -> Generator[None, None, None]:
    """Log how long the block took, only when ``logger`` is enabled for DEBUG."""
    if not logger.isEnabledFor(logging.DEBUG):
        yield
        return
    start = time.perf_counter()
    yield
    logger.debug(f"{operation} completed in {(time.perf_counter() - start) * 1000:.1f} ms")
