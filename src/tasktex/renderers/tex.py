#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/tasktex/renderers/tex.py
"""LaTeX rendering of task node streams.

This module provides the TexRenderer class which turns the flat node
stream of a task into LaTeX. Rendering is a single pass over the
linearized stream: each node is dispatched to the rule registered for its
:class:`~tasktex.tokens.nodes.NodeType`, and nesting information is kept on
the :class:`~tasktex.renderers._tex_context.RenderContext` frame stack.

Every emitted fragment is also recorded under the name of the section being
traversed, which is what the brochure template is assembled from.

"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, Sequence

from tasktex.constants import SECTION_COMMANDS, RenderMode
from tasktex.exceptions import RenderingError
from tasktex.options.tex import TexRendererOptions
from tasktex.renderers import _tex_tables as tables
from tasktex.renderers._tex_context import Emit, RenderContext, RuleResult, SkipUntil
from tasktex.renderers._tex_header import render_header, render_license_body
from tasktex.renderers._tex_images import render_image
from tasktex.renderers._tex_sections import SectionCapture, policy_for
from tasktex.renderers._tex_templates import assemble_brochure, assemble_standalone
from tasktex.renderers.base import BaseRenderer
from tasktex.tokens.linearize import linearize
from tasktex.tokens.nodes import ContentNode, NodeType, TaskDocument
from tasktex.utils.decorators import debug_timer
from tasktex.utils.escape import escape_url, tex_escape_chars, tex_math, tex_mathify
from tasktex.utils.metadata import TaskMetadata

logger = logging.getLogger(__name__)


@dataclass
class Traversal:
    """State of one pass over a node stream.

    The frame stack and the section capture live here rather than on the
    renderer, so a renderer instance can be reused for several documents.
    """

    nodes: Sequence[ContentNode]
    mode: RenderMode
    metadata: TaskMetadata
    context: RenderContext = field(default_factory=RenderContext)
    sections: SectionCapture = field(default_factory=SectionCapture)

    @property
    def is_brochure(self) -> bool:
        return self.mode == "brochure"


@dataclass
class RenderedBody:
    """Result of :meth:`TexRenderer.render_body`.

    Parameters
    ----------
    text : str
        Concatenation of all emitted fragments
    sections : SectionCapture
        The same fragments grouped by section name
    context : RenderContext
        Frame stack after the traversal, normally back at depth 0

    """

    text: str
    sections: SectionCapture
    context: RenderContext


Rule = Callable[[Traversal, int], RuleResult]


def _heading_commands(node: ContentNode) -> tuple[str, str]:
    index = min(max(node.heading_level - 1, 0), len(SECTION_COMMANDS) - 1)
    return SECTION_COMMANDS[index]


class TexRenderer(BaseRenderer):
    r"""Render task node streams to LaTeX.

    Parameters
    ----------
    options : TexRendererOptions or None, default = None
        Rendering options; ``options.mode`` selects the standalone document
        or the brochure chapter.

    Examples
    --------
        >>> from tasktex.tokens import ContentNode, NodeType
        >>> renderer = TexRenderer()
        >>> body = renderer.render_body([
        ...     ContentNode(NodeType.PARAGRAPH_OPEN, tag="p"),
        ...     ContentNode(NodeType.TEXT, content="3 × 4 = 12"),
        ...     ContentNode(NodeType.PARAGRAPH_CLOSE, tag="p"),
        ... ])
        >>> body.text
        '3 $\\times$ 4 = 12\n\n'

    """

    def __init__(self, options: TexRendererOptions | None = None):
        """Initialize the TeX renderer with options."""
        BaseRenderer._validate_options_type(options, TexRendererOptions, "tex")
        options = options or TexRendererOptions()
        BaseRenderer.__init__(self, options)
        self.options: TexRendererOptions = options

        self._expansions: Dict[str, Rule] = {
            "header": self._expand_header,
            "license_body": self._expand_license_body,
        }
        self._rules: Dict[NodeType, Rule] = {
            NodeType.INLINE: self._inline,
            NodeType.EXPAND: self._expand,
            NodeType.TEXT: self._text,
            NodeType.IMAGE: self._image,
            NodeType.RAW: self._raw,
            NodeType.CODE_INLINE: self._code_inline,
            NodeType.FENCE: self._fence,
            NodeType.MATH_INLINE: lambda t, idx: "${" + tex_math(t.nodes[idx].content) + "}$",
            NodeType.MATH_SINGLE: lambda t, idx: "$" + t.nodes[idx].content + "$",
            NodeType.MATH_BLOCK: lambda t, idx: "$$" + tex_math(t.nodes[idx].content) + "$$",
            NodeType.MATH_BLOCK_EQNO: lambda t, idx: "$$" + tex_math(t.nodes[idx].content) + "$$",
            NodeType.HARDBREAK: lambda t, idx: tables.cell_break(t.context) or " \\\\\n",
            NodeType.SOFTBREAK: lambda t, idx: tables.cell_break(t.context) or "\n",
            NodeType.HEADING_OPEN: self._heading_open,
            NodeType.HEADING_CLOSE: self._heading_close,
            NodeType.PARAGRAPH_OPEN: _emit_nothing,
            NodeType.PARAGRAPH_CLOSE: self._paragraph_close,
            NodeType.BULLET_LIST_OPEN: _emit("\\begin{itemize}\n"),
            # list_item_close already ended the line
            NodeType.BULLET_LIST_CLOSE: _emit("\\end{itemize}\n\n"),
            NodeType.ORDERED_LIST_OPEN: _emit("\\begin{enumerate}\n"),
            NodeType.ORDERED_LIST_CLOSE: _emit("\\end{enumerate}\n\n"),
            NodeType.LIST_ITEM_OPEN: _emit("  \\item "),
            NodeType.LIST_ITEM_CLOSE: _emit("\n"),
            NodeType.EM_OPEN: _emit("\\emph{"),
            NodeType.EM_CLOSE: _emit("}"),
            NodeType.STRONG_OPEN: self._strong_open,
            NodeType.STRONG_CLOSE: self._pop_then("}"),
            NodeType.SUP_OPEN: _emit("\\textsuperscript{"),
            NodeType.SUP_CLOSE: _emit("}"),
            NodeType.SUB_OPEN: _emit("\\textsubscript{"),
            NodeType.SUB_CLOSE: _emit("}"),
            NodeType.LINK_OPEN: self._link_open,
            NodeType.LINK_CLOSE: _emit("}}"),
            NodeType.TABLE_OPEN: lambda t, idx: tables.open_table(t.nodes[idx], t.context),
            NodeType.TABLE_CLOSE: lambda t, idx: tables.close_table(t.context),
            NodeType.THEAD_OPEN: _emit_nothing,
            NodeType.THEAD_CLOSE: _emit_nothing,
            NodeType.TBODY_OPEN: _emit_nothing,
            NodeType.TBODY_CLOSE: _emit_nothing,
            NodeType.TR_OPEN: lambda t, idx: tables.open_row(t.context),
            NodeType.TR_CLOSE: lambda t, idx: tables.close_row(t.nodes, idx, t.context),
            NodeType.TH_OPEN: lambda t, idx: tables.open_cell("thead", t.nodes[idx], t.context),
            NodeType.TH_CLOSE: lambda t, idx: tables.close_cell(t.context),
            NodeType.TD_OPEN: lambda t, idx: tables.open_cell(
                tables.choose_cell_kind(t.nodes, idx), t.nodes[idx], t.context
            ),
            NodeType.TD_CLOSE: lambda t, idx: tables.close_cell(t.context),
            NodeType.CONTAINER_CENTER_OPEN: _emit("{\\centering%\n"),
            NodeType.CONTAINER_CENTER_CLOSE: _emit("\\par}\n\n"),
            NodeType.CONTAINER_CLEAR_OPEN: _emit_nothing,
            NodeType.CONTAINER_CLEAR_CLOSE: _emit_nothing,
            NodeType.CONTAINER_INDENT_OPEN: _emit("\\begin{adjustwidth}{1.5em}{0em}\n"),
            NodeType.CONTAINER_INDENT_CLOSE: _emit("\n\\end{adjustwidth}\n\n"),
            NodeType.CONTAINER_NOBREAK_OPEN: self._nobreak_open,
            NodeType.CONTAINER_NOBREAK_CLOSE: self._pop_then("\n\\end{samepage}\n\n"),
            NodeType.SECCONTAINER_OPEN: self._seccontainer_open,
            NodeType.SECCONTAINER_CLOSE: self._seccontainer_close,
            NodeType.SECBODY_OPEN: self._secbody_open,
            NodeType.SECBODY_CLOSE: self._secbody_close,
            NodeType.MAIN_OPEN: _emit_nothing,
            NodeType.MAIN_CLOSE: _emit_nothing,
            NodeType.TOC_OPEN: _emit_nothing,
            NodeType.TOC_BODY: _emit_nothing,
            NodeType.TOC_CLOSE: _emit_nothing,
        }

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def render_to_string(self, doc: TaskDocument) -> str:
        """Render a task document to a complete LaTeX string.

        Parameters
        ----------
        doc : TaskDocument
            Parsed task

        Returns
        -------
        str
            The standalone document or the brochure chapter, per ``options.mode``

        """
        with debug_timer(logger, f"Rendering ({self.options.mode})"):
            body = self.render_body(linearize(doc.nodes), self.options.mode, doc.metadata)
            if self.options.is_brochure:
                return assemble_brochure(body.sections, doc.metadata, self.options)
            return assemble_standalone(body.text, doc.metadata, doc.language_code, self.options)

    def render_body(
        self,
        nodes: Sequence[ContentNode],
        mode: Optional[RenderMode] = None,
        metadata: Optional[TaskMetadata] = None,
    ) -> RenderedBody:
        """Render a linearized node stream without the document template.

        Parameters
        ----------
        nodes : sequence of ContentNode
            Linearized node stream
        mode : {"standalone", "brochure"} or None
            Rendering mode; defaults to ``options.mode``
        metadata : TaskMetadata or None
            Metadata for the expansion rules; defaults to empty metadata

        Returns
        -------
        RenderedBody
            Emitted text, per-section capture and the final frame stack

        Raises
        ------
        ProgrammingInvariantError
            If a close node has no matching open node
        RenderingError
            If ``options.fail_on_unknown_nodes`` is set and a node kind has no rule

        """
        traversal = Traversal(
            nodes=nodes,
            mode=mode or self.options.mode,
            metadata=metadata or TaskMetadata(),
        )
        parts: list[str] = []

        idx = 0
        while idx < len(nodes):
            node = nodes[idx]
            kind = node.kind
            rule = self._rules.get(kind) if kind is not None else None
            if rule is None:
                self._no_rule(node)
                idx += 1
                continue

            result = rule(traversal, idx)
            if isinstance(result, SkipUntil):
                idx += 1
                while idx < len(nodes) and nodes[idx].type != result.kind:
                    idx += 1
            else:
                text = result.text if isinstance(result, Emit) else result
                if text:
                    parts.append(text)
                    traversal.sections.append(text)
            idx += 1

        if traversal.context.depth != 0:
            logger.warning(f"{traversal.context.depth} render frame(s) still open at the end of the node stream")

        return RenderedBody(text="".join(parts), sections=traversal.sections, context=traversal.context)

    # ------------------------------------------------------------------
    # Rules
    # ------------------------------------------------------------------

    def _no_rule(self, node: ContentNode) -> None:
        message = f"No renderer rule for {node.type!r}: {node.describe()}"
        if self.options.fail_on_unknown_nodes:
            raise RenderingError(message, rendering_stage="dispatch")
        logger.warning(message)

    def _pop_then(self, text: str) -> Rule:
        def rule(t: Traversal, idx: int) -> str:
            t.context.pop()
            return text

        return rule

    def _inline(self, t: Traversal, idx: int) -> str:
        logger.warning(f"Unexpected inline node, the stream should have been linearized: {t.nodes[idx].describe()}")
        return ""

    def _expand(self, t: Traversal, idx: int) -> RuleResult:
        node = t.nodes[idx]
        name = node.meta if isinstance(node.meta, str) else node.info
        expansion = self._expansions.get(name)
        if expansion is None:
            logger.warning(f"No rule to expand {name!r}: {node.describe()}")
            return ""
        return expansion(t, idx)

    def _expand_header(self, t: Traversal, idx: int) -> str:
        if t.is_brochure and self.options.skip_header_in_brochure:
            return ""
        return render_header(t.metadata)

    def _expand_license_body(self, t: Traversal, idx: int) -> str:
        return render_license_body(t.metadata, self.options.license_logo)

    def _text(self, t: Traversal, idx: int) -> str:
        text = tex_escape_chars(t.nodes[idx].content)
        frame = t.context.current()
        if not frame.is_in_heading and not frame.disable_mathify:
            text = tex_mathify(text)
        return text

    def _image(self, t: Traversal, idx: int) -> str:
        return render_image(
            t.nodes,
            idx,
            t.context.current(),
            graphics_folder=self.options.graphics_folder,
            pixel_ratio=self.options.pixel_ratio,
            tall_image_threshold_px=self.options.tall_image_threshold_px,
        )

    def _raw(self, t: Traversal, idx: int) -> str:
        node = t.nodes[idx]
        return node.content if node.info == "tex" else ""

    def _code_inline(self, t: Traversal, idx: int) -> str:
        return "\\texttt{" + tex_escape_chars(t.nodes[idx].content) + "}"

    def _fence(self, t: Traversal, idx: int) -> str:
        content = t.nodes[idx].content
        if not content.endswith("\n"):
            content += "\n"
        return "\\begin{verbatim}\n" + content + "\\end{verbatim}\n\n"

    def _heading_open(self, t: Traversal, idx: int) -> str:
        t.context.push(is_in_heading=True)
        return "\n" + _heading_commands(t.nodes[idx])[0]

    def _heading_close(self, t: Traversal, idx: int) -> str:
        t.context.pop()
        return _heading_commands(t.nodes[idx])[1] + "\n\n"

    def _paragraph_close(self, t: Traversal, idx: int) -> str:
        frame = t.context.current()
        if frame.current_cell is not None:
            return ""
        if idx + 1 < len(t.nodes):
            next_type = t.nodes[idx + 1].type
            if next_type.endswith("_close") and next_type != NodeType.SECBODY_CLOSE.value:
                return ""
        if frame.no_page_break:
            return "\n\n\\nopagebreak\n\n"
        return "\n\n"

    def _strong_open(self, t: Traversal, idx: int) -> str:
        t.context.push(disable_mathify=True)
        return "\\textbf{"

    def _link_open(self, t: Traversal, idx: int) -> str:
        href = t.nodes[idx].attr_get("href") or ""
        return f"\\href{{{escape_url(href)}}}{{\\BrochureUrlText{{"

    def _nobreak_open(self, t: Traversal, idx: int) -> str:
        t.context.push(no_page_break=True)
        return "\\begin{samepage}\n"

    def _seccontainer_open(self, t: Traversal, idx: int) -> RuleResult:
        policy = policy_for(t.nodes[idx].info, self.options.section_policies)
        if t.is_brochure and policy.skip_in_brochure:
            return SkipUntil(NodeType.SECCONTAINER_CLOSE.value)
        t.context.push(section_close_markup=policy.post, disable_mathify=policy.disable_mathify)
        return Emit(policy.pre)

    def _seccontainer_close(self, t: Traversal, idx: int) -> str:
        return t.context.pop().section_close_markup

    def _secbody_open(self, t: Traversal, idx: int) -> str:
        t.sections.enter(t.nodes[idx].info)
        return ""

    def _secbody_close(self, t: Traversal, idx: int) -> str:
        t.sections.leave()
        return ""

    @property
    def handled_kinds(self) -> frozenset[NodeType]:
        """Node kinds that have a rendering rule."""
        return frozenset(self._rules)


def _emit_nothing(t: Traversal, idx: int) -> str:
    return ""


def _emit(text: str) -> Rule:
    def rule(t: Traversal, idx: int) -> str:
        return text

    return rule
