#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/tasktex/parsers/base.py
"""Base class for task parsers.

A parser turns task source text into a
:class:`~tasktex.tokens.nodes.TaskDocument`: the node stream consumed by the
renderers plus the task metadata.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Union

from tasktex.exceptions import InvalidOptionsError
from tasktex.options.base import BaseParserOptions
from tasktex.tokens.nodes import TaskDocument
from tasktex.utils.io_utils import read_text_stripping_bom


class BaseParser(ABC):
    """Abstract base class for task parsers.

    Parameters
    ----------
    options : BaseParserOptions or None, default = None
        Format-specific parsing options

    """

    def __init__(self, options: BaseParserOptions | None = None):
        self.options = options or BaseParserOptions()

    @staticmethod
    def _validate_options_type(options: BaseParserOptions | None, expected_type: type, parser_name: str) -> None:
        """Validate that options are of the correct type for this parser.

        Raises
        ------
        InvalidOptionsError
            If options are not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                converter_name=parser_name,
                expected_type=expected_type,
                received_type=type(options),
            )

    @abstractmethod
    def parse(self, input_data: Union[str, Path, bytes]) -> TaskDocument:
        """Parse task input into a TaskDocument.

        Parameters
        ----------
        input_data : str, Path, or bytes
            Source text, or a path to a task file

        Returns
        -------
        TaskDocument
            Node stream and metadata

        Raises
        ------
        ParsingError
            If parsing fails

        """
        pass

    @staticmethod
    def _load_text_content(input_data: Union[str, Path, bytes]) -> str:
        """Load task text; strings are content, paths are read from disk."""
        if isinstance(input_data, Path):
            return read_text_stripping_bom(input_data)
        if isinstance(input_data, bytes):
            text = input_data.decode("utf-8")
            return text[1:] if text.startswith("\ufeff") else text
        return input_data
