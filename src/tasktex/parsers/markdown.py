#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/tasktex/parsers/markdown.py
"""Markdown task file to node stream conversion.

This module reads a task file (YAML front matter followed by Markdown) with
mistune and produces the flat node stream understood by the renderers:

* nested constructs become ``*_open``/``*_close`` node pairs, and the inline
  content of headings, paragraphs and table cells is wrapped in ``inline``
  nodes;
* ``::: center``, ``::: clear``, ``::: indent`` and ``::: nobreak`` fenced
  blocks become container nodes;
* level-2 headings naming a task section ("Body", "Answer Explanation", ...)
  open a ``seccontainer``/``secbody`` pair that lasts until the next such
  heading or the end of the file;
* the first level-1 heading is followed by the metadata header expansion,
  and the body of the "License" section is generated from the metadata;
* fenced blocks whose info string is ``{=tex}`` are passed through as raw TeX.

A column of a pipe table expands to the remaining line width when its
delimiter cell ends with ``+`` (``|:---+|``).
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional, Union

from tasktex.constants import DEPS_MARKDOWN, SECTION_LICENSE
from tasktex.exceptions import ParsingError
from tasktex.options.markdown import MarkdownParserOptions
from tasktex.parsers.base import BaseParser
from tasktex.tokens.nodes import ContentNode, NodeType, TableMeta, TaskDocument
from tasktex.utils.decorators import requires_dependencies
from tasktex.utils.metadata import TaskMetadata
from tasktex.utils.patterns import CONTAINER_FENCE, HTML_LINE_BREAK, LANGUAGE_IN_PATH

logger = logging.getLogger(__name__)

CONTAINER_NAMES = ("center", "clear", "indent", "nobreak")

_CODE_FENCE_RE = re.compile(r"^\s{0,3}(`{3,}|~{3,})")
_DELIMITER_CELL_RE = re.compile(r"^\s*:?-+:?\+?\s*$")
_RAW_INFO_RE = re.compile(r"^\{=(?P<format>[A-Za-z]+)\}$")
_QUOTED_RE = re.compile(r"\"([^\"\n]*)\"|“([^”\n]*)”")

QUOTE_OPEN = "⍀enquote⦃"
QUOTE_CLOSE = "⦄"


def language_code_from_path(path: Union[str, Path]) -> Optional[str]:
    """Language code embedded in a task file name.

    Examples
    --------
        >>> language_code_from_path("tasks/2023-CH-07/2023-CH-07-deu.task.md")
        'deu'
        >>> language_code_from_path("task.md") is None
        True

    """
    match = LANGUAGE_IN_PATH.search(Path(path).name)
    return match.group("lang") if match else None


def split_front_matter(text: str) -> tuple[dict[str, Any], str]:
    """Separate YAML front matter (``---`` delimited) from the Markdown body.

    Returns an empty mapping when the text has no front matter. Front matter
    that is not valid YAML is reported and ignored.
    """
    if not (text.startswith("---\n") or text.startswith("---\r\n")):
        return {}, text

    lines = text.splitlines(keepends=True)
    end_index = -1
    for i in range(1, len(lines)):
        if lines[i].strip() in ("---", "..."):
            end_index = i
            break

    if end_index <= 0:
        return {}, text

    yaml_content = "".join(lines[1:end_index])
    remaining_content = "".join(lines[end_index + 1 :])

    import yaml

    try:
        data = yaml.safe_load(yaml_content)
    except yaml.YAMLError as e:
        logger.warning(f"Ignoring front matter that is not valid YAML: {e}")
        return {}, remaining_content

    if not isinstance(data, dict):
        logger.warning(f"Ignoring front matter that is not a mapping: {type(data).__name__}")
        return {}, remaining_content
    return data, remaining_content


def _outside_code_fences(lines: list[str]) -> list[bool]:
    """For each line, whether it lies outside fenced code blocks."""
    flags = []
    fence: Optional[str] = None
    for line in lines:
        match = _CODE_FENCE_RE.match(line)
        if fence is None:
            if match:
                fence = match.group(1)[0] * len(match.group(1))
                flags.append(False)
            else:
                flags.append(True)
        else:
            flags.append(False)
            if match and match.group(1).startswith(fence):
                fence = None
    return flags


def _split_delimiter_row(line: str) -> Optional[list[str]]:
    if "|" not in line:
        return None
    stripped = line.strip()
    if stripped.startswith("|"):
        stripped = stripped[1:]
    if stripped.endswith("|"):
        stripped = stripped[:-1]
    cells = stripped.split("|")
    if not cells or not all(_DELIMITER_CELL_RE.match(cell) for cell in cells):
        return None
    return cells


def strip_wrap_markers(text: str) -> tuple[str, list[tuple[bool, ...]]]:
    """Remove ``+`` column markers from table delimiter rows.

    Returns
    -------
    tuple
        The text without markers, and for each table in document order the
        per-column expand flags

    """
    lines = text.splitlines(keepends=True)
    wraps: list[tuple[bool, ...]] = []
    for i, (line, outside) in enumerate(zip(lines, _outside_code_fences(lines))):
        if not outside:
            continue
        cells = _split_delimiter_row(line)
        if cells is None:
            continue
        wraps.append(tuple(cell.strip().endswith("+") for cell in cells))
        lines[i] = line.replace("+", "")
    return "".join(lines), wraps


@dataclass
class _Segment:
    kind: str  # "markdown", "open" or "close"
    value: str


def split_containers(text: str) -> list[_Segment]:
    """Split text at ``:::`` container fences outside code blocks.

    Unknown container names are kept as text. Unbalanced fences are reported;
    containers left open at the end of the text are closed there.
    """
    lines = text.splitlines(keepends=True)
    segments: list[_Segment] = []
    buffer: list[str] = []

    def flush() -> None:
        if buffer:
            segments.append(_Segment("markdown", "".join(buffer)))
            buffer.clear()

    open_names: list[str] = []
    for line, outside in zip(lines, _outside_code_fences(lines)):
        match = CONTAINER_FENCE.match(line.rstrip("\r\n")) if outside else None
        if match is None:
            buffer.append(line)
            continue
        name = match.group("name")
        if name is None:
            if not open_names:
                logger.warning("Closing container fence ':::' without an open container")
                continue
            flush()
            segments.append(_Segment("close", open_names.pop()))
        elif name in CONTAINER_NAMES:
            flush()
            open_names.append(name)
            segments.append(_Segment("open", name))
        else:
            logger.warning(f"Unknown container {name!r}, keeping the fence as text")
            buffer.append(line)
    flush()
    while open_names:
        name = open_names.pop()
        logger.warning(f"Container {name!r} is not closed, closing it at the end of the file")
        segments.append(_Segment("close", name))
    return segments


@dataclass
class _Unit:
    """Nodes of one top-level block; headings also carry their level and text."""

    nodes: list[ContentNode]
    heading_level: Optional[int] = None
    heading_text: str = ""


def _plain_text(tokens: list[dict[str, Any]]) -> str:
    parts = []
    for token in tokens:
        if "children" in token and isinstance(token["children"], list):
            parts.append(_plain_text(token["children"]))
        else:
            parts.append(token.get("raw", ""))
    return "".join(parts)


class _TokenConverter:
    """Turns mistune tokens into content nodes."""

    def __init__(self, options: MarkdownParserOptions, table_wraps: list[tuple[bool, ...]]):
        self.options = options
        self._table_wraps = list(table_wraps)
        self._table_count = 0

    # Block-level tokens

    def block(self, token: dict[str, Any]) -> list[ContentNode]:
        token_type = token.get("type", "")
        handler = {
            "heading": self._heading,
            "paragraph": self._paragraph,
            "block_text": self._paragraph,
            "block_code": self._block_code,
            "block_quote": self._block_quote,
            "list": self._list,
            "table": self._table,
            "block_math": self._block_math,
        }.get(token_type)
        if handler is not None:
            return handler(token)
        if token_type not in ("blank_line", "thematic_break"):
            logger.debug(f"Dropping unsupported Markdown block {token_type!r}")
        return []

    def blocks(self, tokens: list[dict[str, Any]]) -> list[ContentNode]:
        nodes: list[ContentNode] = []
        for token in tokens:
            nodes.extend(self.block(token))
        return nodes

    def _inline_wrapper(self, tokens: list[dict[str, Any]]) -> ContentNode:
        return ContentNode(NodeType.INLINE, children=tuple(self.inlines(tokens)))

    def _heading(self, token: dict[str, Any]) -> list[ContentNode]:
        level = token.get("attrs", {}).get("level", 1)
        tag = f"h{level}"
        return [
            ContentNode(NodeType.HEADING_OPEN, tag=tag),
            self._inline_wrapper(token.get("children", [])),
            ContentNode(NodeType.HEADING_CLOSE, tag=tag),
        ]

    def _paragraph(self, token: dict[str, Any]) -> list[ContentNode]:
        return [
            ContentNode(NodeType.PARAGRAPH_OPEN, tag="p"),
            self._inline_wrapper(token.get("children", [])),
            ContentNode(NodeType.PARAGRAPH_CLOSE, tag="p"),
        ]

    def _block_code(self, token: dict[str, Any]) -> list[ContentNode]:
        info = (token.get("attrs") or {}).get("info", "") or ""
        raw = token.get("raw", "")
        match = _RAW_INFO_RE.match(info.strip())
        if match:
            return [ContentNode(NodeType.RAW, content=raw, info=match.group("format").lower())]
        return [ContentNode(NodeType.FENCE, tag="code", content=raw, info=info)]

    def _block_quote(self, token: dict[str, Any]) -> list[ContentNode]:
        return [
            ContentNode(NodeType.CONTAINER_INDENT_OPEN),
            *self.blocks(token.get("children", [])),
            ContentNode(NodeType.CONTAINER_INDENT_CLOSE),
        ]

    def _list(self, token: dict[str, Any]) -> list[ContentNode]:
        ordered = bool(token.get("attrs", {}).get("ordered"))
        open_type, close_type = (
            (NodeType.ORDERED_LIST_OPEN, NodeType.ORDERED_LIST_CLOSE)
            if ordered
            else (NodeType.BULLET_LIST_OPEN, NodeType.BULLET_LIST_CLOSE)
        )
        tag = "ol" if ordered else "ul"
        nodes = [ContentNode(open_type, tag=tag)]
        for item in token.get("children", []):
            nodes.append(ContentNode(NodeType.LIST_ITEM_OPEN, tag="li"))
            nodes.extend(self.blocks(item.get("children", [])))
            nodes.append(ContentNode(NodeType.LIST_ITEM_CLOSE, tag="li"))
        nodes.append(ContentNode(close_type, tag=tag))
        return nodes

    def _next_table_wraps(self, column_count: int) -> tuple[bool, ...]:
        wraps = self._table_wraps[self._table_count] if self._table_count < len(self._table_wraps) else ()
        self._table_count += 1
        return tuple(wraps[i] if i < len(wraps) else False for i in range(column_count))

    def _cell(self, cell: dict[str, Any], header: bool) -> list[ContentNode]:
        align = (cell.get("attrs") or {}).get("align")
        attrs = {"style": f"text-align:{align}"} if align else {}
        open_type, close_type, tag = (
            (NodeType.TH_OPEN, NodeType.TH_CLOSE, "th") if header else (NodeType.TD_OPEN, NodeType.TD_CLOSE, "td")
        )
        return [
            ContentNode(open_type, tag=tag, attrs=attrs),
            self._inline_wrapper(cell.get("children", [])),
            ContentNode(close_type, tag=tag),
        ]

    def _table(self, token: dict[str, Any]) -> list[ContentNode]:
        head_cells: list[dict[str, Any]] = []
        body_rows: list[list[dict[str, Any]]] = []
        for part in token.get("children", []):
            if part.get("type") == "table_head":
                head_cells = part.get("children", [])
            elif part.get("type") == "table_body":
                body_rows = [row.get("children", []) for row in part.get("children", [])]

        aligns = tuple((cell.get("attrs") or {}).get("align") or "" for cell in head_cells)
        meta = TableMeta(aligns=aligns, wraps=self._next_table_wraps(len(aligns)))

        nodes = [ContentNode(NodeType.TABLE_OPEN, tag="table", meta=meta)]
        if head_cells:
            nodes.append(ContentNode(NodeType.THEAD_OPEN, tag="thead"))
            nodes.append(ContentNode(NodeType.TR_OPEN, tag="tr"))
            for cell in head_cells:
                nodes.extend(self._cell(cell, header=True))
            nodes.append(ContentNode(NodeType.TR_CLOSE, tag="tr"))
            nodes.append(ContentNode(NodeType.THEAD_CLOSE, tag="thead"))
        if body_rows:
            nodes.append(ContentNode(NodeType.TBODY_OPEN, tag="tbody"))
            for row in body_rows:
                nodes.append(ContentNode(NodeType.TR_OPEN, tag="tr"))
                for cell in row:
                    nodes.extend(self._cell(cell, header=False))
                nodes.append(ContentNode(NodeType.TR_CLOSE, tag="tr"))
            nodes.append(ContentNode(NodeType.TBODY_CLOSE, tag="tbody"))
        nodes.append(ContentNode(NodeType.TABLE_CLOSE, tag="table"))
        return nodes

    def _block_math(self, token: dict[str, Any]) -> list[ContentNode]:
        return [ContentNode(NodeType.MATH_BLOCK, content=token.get("raw", "").strip())]

    # Inline tokens

    def inlines(self, tokens: list[dict[str, Any]]) -> list[ContentNode]:
        nodes: list[ContentNode] = []
        for token in tokens:
            nodes.extend(self.inline(token))
        return nodes

    def _wrapped(
        self, open_type: NodeType, close_type: NodeType, token: dict[str, Any], **kw: Any
    ) -> list[ContentNode]:
        return [ContentNode(open_type, **kw), *self.inlines(token.get("children", [])), ContentNode(close_type)]

    def _text(self, raw: str) -> str:
        if not self.options.smart_quotes:
            return raw
        return _QUOTED_RE.sub(
            lambda m: QUOTE_OPEN + (m.group(1) if m.group(1) is not None else m.group(2)) + QUOTE_CLOSE, raw
        )

    def inline(self, token: dict[str, Any]) -> list[ContentNode]:
        token_type = token.get("type", "")
        attrs: Mapping[str, Any] = token.get("attrs") or {}

        if token_type == "text":
            return [ContentNode(NodeType.TEXT, content=self._text(token.get("raw", "")))]
        if token_type == "emphasis":
            return self._wrapped(NodeType.EM_OPEN, NodeType.EM_CLOSE, token, tag="em")
        if token_type == "strong":
            return self._wrapped(NodeType.STRONG_OPEN, NodeType.STRONG_CLOSE, token, tag="strong")
        if token_type == "superscript":
            return self._wrapped(NodeType.SUP_OPEN, NodeType.SUP_CLOSE, token, tag="sup")
        if token_type == "subscript":
            return self._wrapped(NodeType.SUB_OPEN, NodeType.SUB_CLOSE, token, tag="sub")
        if token_type == "link":
            link_attrs = {"href": attrs.get("url", "")}
            if attrs.get("title"):
                link_attrs["title"] = attrs["title"]
            return self._wrapped(NodeType.LINK_OPEN, NodeType.LINK_CLOSE, token, tag="a", attrs=link_attrs)
        if token_type == "image":
            image_attrs = {"src": attrs.get("url", ""), "alt": _plain_text(token.get("children", []))}
            if attrs.get("title"):
                image_attrs["title"] = attrs["title"]
            return [ContentNode(NodeType.IMAGE, tag="img", attrs=image_attrs)]
        if token_type == "codespan":
            return [ContentNode(NodeType.CODE_INLINE, tag="code", content=token.get("raw", ""))]
        if token_type == "inline_math":
            return [ContentNode(NodeType.MATH_INLINE, content=token.get("raw", ""))]
        if token_type == "linebreak":
            return [ContentNode(NodeType.HARDBREAK, tag="br")]
        if token_type == "softbreak":
            return [ContentNode(NodeType.SOFTBREAK)]
        if token_type == "inline_html":
            raw = token.get("raw", "")
            if HTML_LINE_BREAK.match(raw.strip()):
                return [ContentNode(NodeType.HARDBREAK, tag="br")]
            logger.warning(f"Dropping inline HTML {raw!r}")
            return []
        if isinstance(token.get("children"), list):
            return self.inlines(token["children"])
        if token.get("raw"):
            return [ContentNode(NodeType.TEXT, content=self._text(token["raw"]))]
        return []

    def unit(self, token: dict[str, Any]) -> _Unit:
        nodes = self.block(token)
        if token.get("type") == "heading":
            level = token.get("attrs", {}).get("level", 1)
            return _Unit(nodes, heading_level=level, heading_text=_plain_text(token.get("children", [])).strip())
        return _Unit(nodes)


def _section_nodes(units: list[_Unit], section_names: tuple[str, ...]) -> list[ContentNode]:
    """Wrap top-level units into sections and insert the expansion nodes."""
    nodes: list[ContentNode] = []
    open_section: Optional[str] = None
    title_seen = False

    def close_section() -> None:
        if open_section is not None:
            nodes.append(ContentNode(NodeType.SECBODY_CLOSE, info=open_section))
            nodes.append(ContentNode(NodeType.SECCONTAINER_CLOSE, info=open_section))

    for unit in units:
        if unit.heading_level == 2 and unit.heading_text in section_names:
            close_section()
            open_section = unit.heading_text
            nodes.append(ContentNode(NodeType.SECCONTAINER_OPEN, tag="div", info=open_section, meta=open_section))
            nodes.extend(unit.nodes)
            nodes.append(ContentNode(NodeType.SECBODY_OPEN, tag="div", info=open_section))
            if open_section == SECTION_LICENSE:
                nodes.append(ContentNode(NodeType.EXPAND, meta="license_body"))
            continue

        if open_section == SECTION_LICENSE:
            # generated from the metadata
            continue

        nodes.extend(unit.nodes)
        if unit.heading_level == 1 and not title_seen:
            title_seen = True
            nodes.append(ContentNode(NodeType.EXPAND, meta="header"))

    close_section()
    return nodes


class MarkdownTaskParser(BaseParser):
    """Convert a Markdown task file into a :class:`TaskDocument`.

    Parameters
    ----------
    options : MarkdownParserOptions or None, default = None
        Parser configuration options

    Examples
    --------
        >>> parser = MarkdownTaskParser()
        >>> doc = parser.parse("---\\nid: 2023-CH-07\\n---\\n# Beavers\\n\\nSome *text*.\\n")
        >>> doc.metadata.id
        '2023-CH-07'

    """

    def __init__(self, options: MarkdownParserOptions | None = None):
        """Initialize the Markdown parser with options."""
        BaseParser._validate_options_type(options, MarkdownParserOptions, "markdown")
        options = options or MarkdownParserOptions()
        super().__init__(options)
        self.options: MarkdownParserOptions = options

    def parse(self, input_data: Union[str, Path, bytes], language_code: Optional[str] = None) -> TaskDocument:
        """Parse a task into its node stream and metadata.

        Parameters
        ----------
        input_data : str, Path, or bytes
            Task text, or the path of a task file
        language_code : str, optional
            Language of the task; for paths it defaults to the code in the
            file name

        Returns
        -------
        TaskDocument
            Node stream (still containing ``inline`` wrappers) and metadata

        Raises
        ------
        ParsingError
            If mistune fails on the Markdown body

        """
        source_path = input_data if isinstance(input_data, Path) else None
        if language_code is None and source_path is not None:
            language_code = language_code_from_path(source_path)

        text = self._load_text_content(input_data)
        nodes, metadata = self.parse_text(text)
        return TaskDocument(
            nodes=nodes,
            metadata=metadata,
            language_code=language_code or "",
            source_path=source_path,
        )

    @requires_dependencies("markdown", DEPS_MARKDOWN)
    def parse_text(self, text: str) -> tuple[list[ContentNode], TaskMetadata]:
        """Parse task text into its node stream and metadata."""
        import mistune

        front_matter: dict[str, Any] = {}
        if self.options.extract_metadata:
            front_matter, text = split_front_matter(text)
        metadata = TaskMetadata.from_dict(front_matter)

        text, table_wraps = strip_wrap_markers(text) if self.options.parse_tables else (text, [])

        plugins = []
        if self.options.parse_tables:
            plugins.append("table")
        if self.options.parse_math:
            plugins.append("math")
        if self.options.parse_superscript:
            plugins.append("superscript")
        if self.options.parse_subscript:
            plugins.append("subscript")
        markdown = mistune.create_markdown(plugins=plugins, renderer=None)

        segments = split_containers(text) if self.options.parse_containers else [_Segment("markdown", text)]
        converter = _TokenConverter(self.options, table_wraps)

        units: list[_Unit] = []
        stack: list[list[ContentNode]] = []
        for segment in segments:
            if segment.kind == "open":
                stack.append([ContentNode(f"container_{segment.value}_open", info=segment.value)])
            elif segment.kind == "close":
                container = stack.pop()
                container.append(ContentNode(f"container_{segment.value}_close", info=segment.value))
                if stack:
                    stack[-1].extend(container)
                else:
                    units.append(_Unit(container))
            else:
                try:
                    tokens, _state = markdown.parse(segment.value)
                except Exception as e:
                    raise ParsingError(
                        f"Failed to parse Markdown: {e}", parsing_stage="markdown", original_error=e
                    ) from e
                for token in tokens:
                    unit = converter.unit(token)
                    if stack:
                        stack[-1].extend(unit.nodes)
                    else:
                        units.append(unit)

        return _section_nodes(units, self.options.section_names), metadata


def parse_task(
    markdown_text: str, options: MarkdownParserOptions | None = None
) -> tuple[list[ContentNode], TaskMetadata]:
    """Parse task text into its node stream and metadata.

    Convenience wrapper around :meth:`MarkdownTaskParser.parse_text`.
    """
    return MarkdownTaskParser(options).parse_text(markdown_text)
