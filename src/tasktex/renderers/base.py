#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/tasktex/renderers/base.py
"""Base classes for task renderers.

This module defines the abstract base class that task renderers inherit
from. The BaseRenderer provides a consistent interface for turning a
:class:`~tasktex.tokens.nodes.TaskDocument` into text output.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import IO, Union

from tasktex.exceptions import InvalidOptionsError
from tasktex.options.base import BaseRendererOptions
from tasktex.tokens.nodes import TaskDocument
from tasktex.utils.io_utils import write_content


class BaseRenderer(ABC):
    """Abstract base class for task renderers.

    Parameters
    ----------
    options : BaseRendererOptions or None, default = None
        Format-specific rendering options

    """

    def __init__(self, options: BaseRendererOptions | None = None):
        self.options = options

    @abstractmethod
    def render_to_string(self, doc: TaskDocument) -> str:
        """Render the task document to a string.

        Parameters
        ----------
        doc : TaskDocument
            Task to render

        Returns
        -------
        str
            Rendered document

        Raises
        ------
        RenderingError
            If rendering fails

        """
        pass

    def render(self, doc: TaskDocument, output: Union[str, Path, IO[bytes], IO[str]]) -> None:
        """Render the task document and write it to ``output``.

        Parameters
        ----------
        doc : TaskDocument
            Task to render
        output : str, Path, IO[bytes], or IO[str]
            Output destination

        Raises
        ------
        RenderingError
            If rendering fails
        OutputWriteError
            If a file path cannot be written

        """
        write_content(self.render_to_string(doc), output)

    @staticmethod
    def _validate_options_type(options: BaseRendererOptions | None, expected_type: type, renderer_name: str) -> None:
        """Validate that options are of the correct type for this renderer.

        Raises
        ------
        InvalidOptionsError
            If options are not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                converter_name=renderer_name,
                expected_type=expected_type,
                received_type=type(options),
            )
