"""The major exported API functions for task conversion."""

#  Copyright (c) 2025 Tom Villani, Ph.D.
# src/tasktex/api.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from tasktex.constants import BROCHURE_SUFFIX, TASK_FILE_SUFFIX
from tasktex.options.markdown import MarkdownParserOptions
from tasktex.options.tex import TexRendererOptions
from tasktex.parsers.markdown import MarkdownTaskParser
from tasktex.renderers.tex import TexRenderer
from tasktex.tokens.nodes import TaskDocument
from tasktex.utils.io_utils import sibling_with_suffix

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderedTask:
    """Both LaTeX renditions of one task.

    Parameters
    ----------
    standalone : str
        Self-contained printable document
    brochure : str
        Chapter fragment for the compiled brochure

    """

    standalone: str
    brochure: str


def to_document(
    source: Union[str, Path, bytes],
    language_code: Optional[str] = None,
    parser_options: MarkdownParserOptions | None = None,
) -> TaskDocument:
    """Parse a task into a :class:`TaskDocument`.

    Parameters
    ----------
    source : str, Path, or bytes
        Markdown text of the task, or the path of a task file
    language_code : str, optional
        Language of the task. Defaults to the code embedded in the file name
        of a path source, then to the renderer's default language.
    parser_options : MarkdownParserOptions, optional
        Options for the Markdown front end

    Returns
    -------
    TaskDocument
        Node stream and metadata

    """
    return MarkdownTaskParser(parser_options).parse(source, language_code=language_code)


def render_task(
    source: Union[str, Path, bytes, TaskDocument],
    language_code: Optional[str] = None,
    options: TexRendererOptions | None = None,
    parser_options: MarkdownParserOptions | None = None,
) -> RenderedTask:
    """Render a task to both the standalone document and the brochure chapter.

    Parameters
    ----------
    source : str, Path, bytes, or TaskDocument
        Markdown text of the task, the path of a task file, or an already
        parsed document
    language_code : str, optional
        Language of the task, see :func:`to_document`
    options : TexRendererOptions, optional
        Rendering options; ``mode`` is overridden for each rendition
    parser_options : MarkdownParserOptions, optional
        Options for the Markdown front end

    Returns
    -------
    RenderedTask
        The two renditions

    Examples
    --------
        >>> rendered = render_task("# Beavers\\n\\n## Body\\n\\nSome text.\\n")
        >>> "\\\\begin{document}" in rendered.standalone
        True

    """
    if isinstance(source, TaskDocument):
        doc = source
        if language_code is not None:
            doc = TaskDocument(doc.nodes, doc.metadata, language_code, doc.source_path)
    else:
        doc = to_document(source, language_code=language_code, parser_options=parser_options)

    options = options or TexRendererOptions()
    standalone = TexRenderer(options.create_updated(mode="standalone")).render_to_string(doc)
    brochure = TexRenderer(options.create_updated(mode="brochure")).render_to_string(doc)
    return RenderedTask(standalone=standalone, brochure=brochure)


def default_output_path(task_file: Union[str, Path]) -> Path:
    """Return the standalone output path next to a task file.

    Examples
    --------
        >>> default_output_path("tasks/2023-CH-07-eng.task.md")
        PosixPath('tasks/2023-CH-07-eng.tex')

    """
    task_path = Path(task_file)
    name = task_path.name
    stem = name[: -len(TASK_FILE_SUFFIX)] if name.endswith(TASK_FILE_SUFFIX) else task_path.stem
    return task_path.with_name(stem + ".tex")


def is_up_to_date(task_file: Union[str, Path], output: Union[str, Path]) -> bool:
    """Whether ``output`` exists and is not older than ``task_file``."""
    output_path = Path(output)
    if not output_path.exists():
        return False
    return output_path.stat().st_mtime >= Path(task_file).stat().st_mtime


def convert_task(
    task_file: Union[str, Path],
    output: Union[str, Path, None] = None,
    force: bool = False,
    options: TexRendererOptions | None = None,
    parser_options: MarkdownParserOptions | None = None,
) -> Path | None:
    """Convert a task file into its standalone and brochure LaTeX files.

    The brochure chapter is written next to the standalone output with the
    ``_brochure.tex`` suffix.

    Parameters
    ----------
    task_file : str or Path
        Task file to convert
    output : str or Path, optional
        Standalone output file, by default next to the task file
    force : bool, default False
        Regenerate even when the output is newer than the task file
    options : TexRendererOptions, optional
        Rendering options
    parser_options : MarkdownParserOptions, optional
        Options for the Markdown front end

    Returns
    -------
    Path or None
        The standalone output path, or None when it was up to date

    Raises
    ------
    tasktex.exceptions.FileNotFoundError
        If the task file does not exist
    OutputWriteError
        If an output file cannot be written

    """
    task_path = Path(task_file)
    output_path = Path(output) if output is not None else default_output_path(task_path)

    if not force and task_path.exists() and is_up_to_date(task_path, output_path):
        logger.info(f"Output file '{output_path}' seems up to date.")
        return None

    doc = to_document(task_path, parser_options=parser_options)
    options = options or TexRendererOptions()
    brochure_path = sibling_with_suffix(output_path, BROCHURE_SUFFIX)

    for mode, path in (("standalone", output_path), ("brochure", brochure_path)):
        TexRenderer(options.create_updated(mode=mode)).render(doc, path)
        logger.info(f"Output written on {path}")

    return output_path


__all__ = [
    "RenderedTask",
    "convert_task",
    "default_output_path",
    "is_up_to_date",
    "render_task",
    "to_document",
]
