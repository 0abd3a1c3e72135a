"""tasktex - render contest task files to LaTeX.

A task file is a Markdown document with YAML front matter. tasktex parses
it into a flat stream of typed content nodes and renders that stream twice:
once as a standalone printable LaTeX document and once as a chapter of the
compiled task brochure.

Key Features
------------
- Tables with proportional columns, multi-row cells and line breaks in cells
- Image sizing and floating from a directive in the image title
- Per-section policies (hidden in the brochure, wrapped, no math conversion)
- Language-specific babel setup and quote style
- Metadata header (ages, categories, keywords) and license block

Examples
--------
Render both documents from Markdown text:

    >>> from tasktex import render_task
    >>> rendered = render_task("# Beavers\\n\\n## Body\\n\\nSome text.\\n")
    >>> rendered.brochure.startswith("%")
    True

Convert a task file on disk (also writes ``..._brochure.tex``):

    >>> from tasktex import convert_task
    >>> convert_task("tasks/2023-CH-07-eng.task.md", force=True)  # doctest: +SKIP

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.
# src/tasktex/__init__.py

__version__ = "1.0.0"

from tasktex.api import RenderedTask, convert_task, render_task, to_document
from tasktex.exceptions import (
    DependencyError,
    ParsingError,
    ProgrammingInvariantError,
    RenderingError,
    TaskTexError,
)
from tasktex.options import MarkdownParserOptions, TexRendererOptions
from tasktex.parsers.markdown import MarkdownTaskParser
from tasktex.renderers.tex import TexRenderer
from tasktex.tokens import ContentNode, NodeType, TableMeta, TaskDocument

__all__ = [
    "__version__",
    "ContentNode",
    "DependencyError",
    "MarkdownParserOptions",
    "MarkdownTaskParser",
    "NodeType",
    "ParsingError",
    "ProgrammingInvariantError",
    "RenderedTask",
    "RenderingError",
    "TableMeta",
    "TaskDocument",
    "TaskTexError",
    "TexRenderer",
    "TexRendererOptions",
    "convert_task",
    "render_task",
    "to_document",
]
