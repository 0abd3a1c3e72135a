#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for the tasktex parser and renderer.

Options are frozen dataclasses; use ``create_updated`` to derive a
modified copy.
"""

from __future__ import annotations

from tasktex.options.base import BaseParserOptions, BaseRendererOptions, CloneFrozenMixin
from tasktex.options.markdown import MarkdownParserOptions
from tasktex.options.tex import TexRendererOptions

__all__ = [
    "BaseParserOptions",
    "BaseRendererOptions",
    "CloneFrozenMixin",
    "MarkdownParserOptions",
    "TexRendererOptions",
]
