#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Parsers turning task sources into node streams."""

from tasktex.parsers.base import BaseParser
from tasktex.parsers.markdown import MarkdownTaskParser, language_code_from_path, parse_task

__all__ = ["BaseParser", "MarkdownTaskParser", "language_code_from_path", "parse_task"]
