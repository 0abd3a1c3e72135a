#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/tasktex/tokens/nodes.py
"""Node classes for the flat task document stream.

A task document reaches the renderer as an ordered sequence of typed
content nodes rather than as a tree. Nested constructs (headings,
paragraphs, tables, sections, ...) appear as matching ``*_open`` and
``*_close`` nodes, and leaf content (text, math, images) appears between
them. Inline runs may be wrapped in a single level of ``inline`` nodes,
which :func:`tasktex.tokens.linearize.linearize` flattens away.

Node Vocabulary
---------------
The known node kinds are enumerated by :class:`NodeType`. ``ContentNode.type``
is a plain string so that a stream can carry kinds this library does not
know about yet; the renderer logs and skips those.

"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Any, Mapping, Optional, Sequence

if TYPE_CHECKING:
    from tasktex.utils.metadata import TaskMetadata


class NodeType(str, Enum):
    """Closed vocabulary of node kinds understood by the renderers."""

    INLINE = "inline"
    TEXT = "text"
    RAW = "raw"
    CODE_INLINE = "code_inline"
    FENCE = "fence"
    MATH_INLINE = "math_inline"
    MATH_SINGLE = "math_single"
    MATH_BLOCK = "math_block"
    MATH_BLOCK_EQNO = "math_block_eqno"
    IMAGE = "image"
    HARDBREAK = "hardbreak"
    SOFTBREAK = "softbreak"
    HEADING_OPEN = "heading_open"
    HEADING_CLOSE = "heading_close"
    PARAGRAPH_OPEN = "paragraph_open"
    PARAGRAPH_CLOSE = "paragraph_close"
    BULLET_LIST_OPEN = "bullet_list_open"
    BULLET_LIST_CLOSE = "bullet_list_close"
    ORDERED_LIST_OPEN = "ordered_list_open"
    ORDERED_LIST_CLOSE = "ordered_list_close"
    LIST_ITEM_OPEN = "list_item_open"
    LIST_ITEM_CLOSE = "list_item_close"
    EM_OPEN = "em_open"
    EM_CLOSE = "em_close"
    STRONG_OPEN = "strong_open"
    STRONG_CLOSE = "strong_close"
    SUP_OPEN = "sup_open"
    SUP_CLOSE = "sup_close"
    SUB_OPEN = "sub_open"
    SUB_CLOSE = "sub_close"
    LINK_OPEN = "link_open"
    LINK_CLOSE = "link_close"
    TABLE_OPEN = "table_open"
    TABLE_CLOSE = "table_close"
    THEAD_OPEN = "thead_open"
    THEAD_CLOSE = "thead_close"
    TBODY_OPEN = "tbody_open"
    TBODY_CLOSE = "tbody_close"
    TR_OPEN = "tr_open"
    TR_CLOSE = "tr_close"
    TH_OPEN = "th_open"
    TH_CLOSE = "th_close"
    TD_OPEN = "td_open"
    TD_CLOSE = "td_close"
    CONTAINER_CENTER_OPEN = "container_center_open"
    CONTAINER_CENTER_CLOSE = "container_center_close"
    CONTAINER_CLEAR_OPEN = "container_clear_open"
    CONTAINER_CLEAR_CLOSE = "container_clear_close"
    CONTAINER_INDENT_OPEN = "container_indent_open"
    CONTAINER_INDENT_CLOSE = "container_indent_close"
    CONTAINER_NOBREAK_OPEN = "container_nobreak_open"
    CONTAINER_NOBREAK_CLOSE = "container_nobreak_close"
    SECCONTAINER_OPEN = "seccontainer_open"
    SECCONTAINER_CLOSE = "seccontainer_close"
    SECBODY_OPEN = "secbody_open"
    SECBODY_CLOSE = "secbody_close"
    MAIN_OPEN = "main_open"
    MAIN_CLOSE = "main_close"
    TOC_OPEN = "tocOpen"
    TOC_BODY = "tocBody"
    TOC_CLOSE = "tocClose"
    EXPAND = "bebras_html_expand"

    @classmethod
    def lookup(cls, value: str) -> Optional["NodeType"]:
        """Return the member for ``value`` or None for unknown kinds."""
        try:
            return cls(value)
        except ValueError:
            return None


@dataclass(frozen=True)
class TableMeta:
    """Column layout of a table, carried by its ``table_open`` node.

    Parameters
    ----------
    aligns : tuple of str
        Per-column alignment: "left", "center", "right", or "" for the default
    wraps : tuple of bool
        Per-column flag requesting a proportionally expanding column

    """

    aligns: tuple[str, ...] = ()
    wraps: tuple[bool, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "aligns", tuple(self.aligns))
        object.__setattr__(self, "wraps", tuple(self.wraps))

    @property
    def column_count(self) -> int:
        return len(self.aligns)

    def wraps_column(self, index: int) -> bool:
        return index < len(self.wraps) and bool(self.wraps[index])


@dataclass(frozen=True)
class ContentNode:
    """One typed unit of the node stream.

    Parameters
    ----------
    type : str
        Node kind, normally a :class:`NodeType` value
    tag : str, default ""
        HTML-like tag, e.g. "h2" for headings or "td" for cells
    attrs : Mapping[str, str], default empty
        Free-form attributes (src, title, href, rowspan, colspan, ...)
    content : str, default ""
        Text payload for text, raw, code and math nodes
    info : str, default ""
        Secondary payload: section name for section nodes, format for raw nodes
    meta : Any, default None
        Structured payload: :class:`TableMeta` for tables, rule name for expansions
    children : tuple of ContentNode or None, default None
        Child nodes, only for ``inline`` wrapper nodes

    """

    type: str
    tag: str = ""
    attrs: Mapping[str, str] = field(default_factory=dict)
    content: str = ""
    info: str = ""
    meta: Any = None
    children: Optional[tuple["ContentNode", ...]] = None

    def __post_init__(self) -> None:
        if isinstance(self.type, NodeType):
            object.__setattr__(self, "type", self.type.value)
        if self.children is not None:
            object.__setattr__(self, "children", tuple(self.children))

    @property
    def kind(self) -> Optional[NodeType]:
        """The known kind of this node, or None if it is not in the vocabulary."""
        return NodeType.lookup(self.type)

    def attr_get(self, name: str) -> Optional[str]:
        """Return the attribute ``name`` or None when absent."""
        return self.attrs.get(name)

    @property
    def heading_level(self) -> int:
        """Heading level parsed from a tag such as "h3" (1 when unparseable)."""
        digits = self.tag[1:] if self.tag.startswith("h") else ""
        return int(digits) if digits.isdigit() else 1

    def describe(self) -> str:
        """Compact description used in diagnostics."""
        parts = [f"type={self.type!r}"]
        if self.tag:
            parts.append(f"tag={self.tag!r}")
        if self.attrs:
            parts.append(f"attrs={dict(self.attrs)!r}")
        if self.info:
            parts.append(f"info={self.info!r}")
        if self.content:
            snippet = self.content if len(self.content) <= 40 else self.content[:37] + "..."
            parts.append(f"content={snippet!r}")
        return "ContentNode(" + ", ".join(parts) + ")"


@dataclass
class TaskDocument:
    """A parsed task: the node stream plus its metadata.

    Parameters
    ----------
    nodes : sequence of ContentNode
        The node stream, possibly still containing ``inline`` wrappers
    metadata : TaskMetadata
        Front matter of the task
    language_code : str
        Three-letter language code of the task text
    source_path : Path or None, default None
        Task file the document was read from

    """

    nodes: Sequence[ContentNode]
    metadata: "TaskMetadata"
    language_code: str
    source_path: Optional[Path] = None
