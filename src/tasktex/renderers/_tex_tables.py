#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/tasktex/renderers/_tex_tables.py
"""Table layout rules of the TeX renderer.

Tables are rendered as ``tabular`` or, when any column asks to expand,
``tabularx``. Rows and cells are delimited by the usual ``&`` and ``\\\\``
separators, with ``\\midrule`` after a header row. Cells spanning several
rows are wrapped in ``\\multirow`` and recorded on the table frame so that
the covered slots of the following rows receive an empty placeholder cell.
Cells spanning several columns are wrapped in ``\\multicolumn`` only; they
do not move the column index past the spanned columns.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from tasktex.constants import COLUMN_SPECS, JUSTIFIED_COLUMN_CODE, STACKING_BLOCKERS, CellKind
from tasktex.renderers._tex_context import CellInfo, MultiRowSpan, RenderContext, TableInfo
from tasktex.tokens.nodes import ContentNode, NodeType, TableMeta
from tasktex.utils.numbers import leading_int

logger = logging.getLogger(__name__)


def column_spec(alignment: Optional[str], expanding: bool, node: Optional[ContentNode] = None) -> str:
    """Column code for one column of the table preamble.

    Parameters
    ----------
    alignment : str or None
        "left", "center", "right", or "", "default" or None for the default
    expanding : bool
        Whether the column takes a share of the remaining line width
    node : ContentNode, optional
        Table node, used in the warning for an unknown alignment

    Returns
    -------
    str
        ``l``/``c``/``r`` for fixed columns, ``L``/``C``/``R``/``J`` for
        expanding ones. Unknown alignments give ``l``.

    """
    codes = COLUMN_SPECS.get(alignment or "")
    if codes is None:
        logger.warning(
            f"Unknown table column alignment: {alignment!r}" + (f" in {node.describe()}" if node else "")
        )
        return "l"
    non_expanding, expanding_code = codes
    return expanding_code if expanding else non_expanding


def non_expanding_alignment(code: Optional[str]) -> str:
    """Alignment letter usable in ``\\makecell``/``\\thead`` for a column code."""
    if code is None or code == JUSTIFIED_COLUMN_CODE:
        return "l"
    return code.lower()


def open_table(node: ContentNode, ctx: RenderContext) -> str:
    """Open a table and push the table frame."""
    meta = node.meta
    if not isinstance(meta, TableMeta):
        logger.warning(f"Table without column layout, rendering it with no columns: {node.describe()}")
        meta = TableMeta()

    specs = []
    has_expanding_column = False
    for index, alignment in enumerate(meta.aligns):
        expanding = meta.wraps_column(index)
        has_expanding_column = has_expanding_column or expanding
        specs.append(column_spec(alignment, expanding, node))

    spec = "@{} " + " ".join(specs) + " @{}"
    if has_expanding_column:
        open_markup = f"\\begin{{tabularx}}{{\\columnwidth}}{{ {spec} }}\n"
        close_markup = "\n\\end{tabularx}\n\n"
    else:
        open_markup = f"\\begin{{tabular}}{{ {spec} }}\n"
        close_markup = "\n\\end{tabular}\n\n"

    ctx.push(
        row_index=-1,
        multirows=(),
        current_table=TableInfo(column_specs=tuple(specs), close_markup=close_markup),
    )
    return open_markup


def close_table(ctx: RenderContext) -> str:
    frame = ctx.pop()
    return frame.current_table.close_markup if frame.current_table else ""


def open_row(ctx: RenderContext) -> str:
    """Start a row, terminating the previous one if it is still open."""
    ctx.set(column_index=-1)
    terminator = ""
    last_row_kind = ctx.current().last_row_kind
    if last_row_kind:
        ctx.set(last_row_kind=None)
        rule = "\\midrule\n" if last_row_kind == "header" else ""
        terminator = f" \\\\ \n{rule}"
    ctx.set(row_index=ctx.current().row_index + 1)
    return terminator + "  "


def close_row(nodes: Sequence[ContentNode], idx: int, ctx: RenderContext) -> str:
    """Record whether the row was a header row; emits nothing."""
    is_header = idx > 0 and nodes[idx - 1].type == NodeType.TH_CLOSE.value
    ctx.set(has_cell_on_this_line=False, last_row_kind="header" if is_header else "body")
    return ""


def choose_cell_kind(nodes: Sequence[ContentNode], idx: int) -> CellKind:
    """Stack the content of a body cell when it has line breaks and nothing that cannot be stacked."""
    has_breaks = False
    has_blocker = False
    for node in nodes[idx + 1 :]:
        if node.type == NodeType.TD_CLOSE.value:
            break
        if node.type in (NodeType.SOFTBREAK.value, NodeType.HARDBREAK.value):
            has_breaks = True
        elif node.type in STACKING_BLOCKERS:
            has_blocker = True
    return "makecell" if has_breaks and not has_blocker else "plain"


def open_cell(kind: CellKind, node: ContentNode, ctx: RenderContext) -> str:
    """Open a header or body cell and push the cell frame.

    Slots covered by a multi-row cell of an earlier row are filled with
    empty cells first.
    """
    frame = ctx.set(column_index=ctx.current().column_index + 1)
    column = frame.column_index
    row = frame.row_index

    separator = ""
    if frame.has_cell_on_this_line:
        frame = ctx.set(has_cell_on_this_line=False)
        separator = " & "

    while frame.is_covered_by_multirow(row, column):
        separator += "& "
        column += 1
        frame = ctx.set(column_index=column)

    specs = frame.current_table.column_specs if frame.current_table else ()
    align = non_expanding_alignment(specs[column] if 0 <= column < len(specs) else None)

    disable_mathify = frame.disable_mathify
    open_markup = ""
    close_markup = ""
    if kind == "thead":
        # "b" aligns header content to the bottom of the row
        open_markup = f"{{\\setstretch{{1.0}}\\thead[{align}b]{{"
        close_markup = "}}"
        disable_mathify = True
    elif kind == "makecell":
        open_markup = f"\\makecell[{align}]{{"
        close_markup = "}"

    row_span = leading_int(node.attr_get("rowspan"))
    if row_span is not None and row_span >= 2:
        open_markup = f"\\multirow{{{row_span}}}{{*}}{{" + open_markup
        close_markup = close_markup + "}"
        span = MultiRowSpan(column=column, origin_row=row, row_span=row_span)
        frame = ctx.set(multirows=frame.multirows + (span,))

    col_span = leading_int(node.attr_get("colspan"))
    if col_span is not None and col_span >= 2:
        open_markup = f"\\multicolumn{{{col_span}}}{{c}}{{" + open_markup
        close_markup = close_markup + "}"

    ctx.push(current_cell=CellInfo(kind=kind, close_markup=close_markup), disable_mathify=disable_mathify)
    return separator + open_markup


def close_cell(ctx: RenderContext) -> str:
    frame = ctx.pop()
    ctx.set(has_cell_on_this_line=True)
    return frame.current_cell.close_markup if frame.current_cell else ""


def cell_break(ctx: RenderContext) -> Optional[str]:
    """Line break markup inside the current cell, or None outside cells."""
    cell = ctx.current().current_cell
    if cell is None:
        return None
    return " \\newline " if cell.kind == "plain" else " \\\\ "
