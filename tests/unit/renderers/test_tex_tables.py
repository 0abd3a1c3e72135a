#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/renderers/test_tex_tables.py
"""Unit tests for table layout in the TeX renderer.

Tests cover:
- Column specifications for fixed and expanding columns
- Header rows with \\thead and \\midrule
- Multi-row cells and the displacement of following rows
- Column spans (textual only)
- Stacked (makecell) body cells and line breaks in cells
- Math conversion in header and body cells
"""

import logging

import pytest
from utils import section, table, text

from tasktex.renderers import _tex_tables as tables
from tasktex.renderers.tex import TexRenderer
from tasktex.tokens import ContentNode, NodeType, TableMeta


def render(nodes):
    return TexRenderer().render_body(nodes).text


@pytest.mark.unit
class TestColumnSpecs:
    """Tests for column_spec() and non_expanding_alignment()."""

    @pytest.mark.parametrize(
        "alignment,expanding,expected",
        [
            ("", False, "l"),
            (None, False, "l"),
            ("default", True, "J"),
            ("left", True, "L"),
            ("center", False, "c"),
            ("center", True, "C"),
            ("right", False, "r"),
            ("right", True, "R"),
        ],
    )
    def test_known_alignments(self, alignment, expanding, expected):
        assert tables.column_spec(alignment, expanding) == expected

    def test_unknown_alignment_warns_and_defaults(self, caplog):
        with caplog.at_level(logging.WARNING):
            assert tables.column_spec("justify", True) == "l"
        assert "justify" in caplog.text

    @pytest.mark.parametrize("code,expected", [("J", "l"), (None, "l"), ("C", "c"), ("r", "r"), ("L", "l")])
    def test_non_expanding_alignment(self, code, expected):
        assert tables.non_expanding_alignment(code) == expected


@pytest.mark.unit
class TestTableRendering:
    """Tests for whole tables."""

    def test_header_and_body(self):
        out = render(table(("left", "right"), [["1", "2"]], header=["A", "B"]))
        assert out == (
            "\\begin{tabular}{ @{} l r @{} }\n"
            "  {\\setstretch{1.0}\\thead[lb]{A}} & {\\setstretch{1.0}\\thead[rb]{B}} \\\\ \n"
            "\\midrule\n"
            "  1 & 2\n"
            "\\end{tabular}\n\n"
        )

    def test_expanding_column_uses_tabularx(self):
        out = render(table(("", "center"), [["a", "b"]], wraps=(False, True), header=["H", "I"]))
        assert out.startswith("\\begin{tabularx}{\\columnwidth}{ @{} l C @{} }\n")
        assert "\\thead[cb]{I}" in out
        assert out.endswith("\n\\end{tabularx}\n\n")

    def test_body_rows_are_separated_without_midrule(self):
        out = render(table(("left",), [["a"], ["b"]]))
        assert out == "\\begin{tabular}{ @{} l @{} }\n  a \\\\ \n  b\n\\end{tabular}\n\n"

    def test_table_without_layout_warns(self, caplog):
        nodes = [ContentNode(NodeType.TABLE_OPEN), ContentNode(NodeType.TABLE_CLOSE)]
        with caplog.at_level(logging.WARNING):
            out = render(nodes)
        assert out == "\\begin{tabular}{ @{}  @{} }\n\n\\end{tabular}\n\n"
        assert "without column layout" in caplog.text

    def test_context_is_balanced_after_table(self):
        body = TexRenderer().render_body(table(("left", "left"), [["a", "b"], ["c", "d"]], header=["x", "y"]))
        assert body.context.depth == 0


@pytest.mark.unit
class TestMultiRow:
    """Tests for cells spanning several rows."""

    def test_following_row_is_displaced(self):
        out = render(table(("left", "left"), [[("a", {"rowspan": "2"}), "b"], ["c"]]))
        assert out == (
            "\\begin{tabular}{ @{} l l @{} }\n"
            "  \\multirow{2}{*}{a} & b \\\\ \n"
            "  & c\n"
            "\\end{tabular}\n\n"
        )

    def test_three_row_span_in_middle_column_displaces_two_rows(self):
        out = render(table(("left",) * 3, [["a", ("b", {"rowspan": "3"}), "c"], ["d", "e"], ["f", "g"]]))
        assert out == (
            "\\begin{tabular}{ @{} l l l @{} }\n"
            "  a & \\multirow{3}{*}{b} & c \\\\ \n"
            "  d & & e \\\\ \n"
            "  f & & g\n"
            "\\end{tabular}\n\n"
        )

    def test_span_ends_after_its_rows(self):
        out = render(table(("left", "left"), [[("a", {"rowspan": "2"}), "b"], ["c"], ["d", "e"]]))
        assert out.endswith("  & c \\\\ \n  d & e\n\\end{tabular}\n\n")

    def test_rowspan_with_trailing_garbage(self):
        out = render(table(("left",), [[("a", {"rowspan": "3rows"})]]))
        assert "\\multirow{3}{*}{a}" in out

    @pytest.mark.parametrize("value", ["1", "0", "x", ""])
    def test_rowspan_below_two_is_ignored(self, value):
        out = render(table(("left",), [[("a", {"rowspan": value})]]))
        assert "multirow" not in out

    def test_column_and_row_span_together(self):
        # column spans do not advance the column index, so only the first
        # spanned column is displaced in the next row
        out = render(table(("left", "left", "left"), [[("x", {"rowspan": "2", "colspan": "2"}), "y"], ["z", "w"]]))
        assert out == (
            "\\begin{tabular}{ @{} l l l @{} }\n"
            "  \\multicolumn{2}{c}{\\multirow{2}{*}{x}} & y \\\\ \n"
            "  & z & w\n"
            "\\end{tabular}\n\n"
        )


@pytest.mark.unit
class TestCellContent:
    """Tests for cell kinds, breaks and math conversion."""

    def cell_stream(self, *content):
        return [
            ContentNode(NodeType.TABLE_OPEN, meta=TableMeta(aligns=("center",))),
            ContentNode(NodeType.TBODY_OPEN),
            ContentNode(NodeType.TR_OPEN),
            ContentNode(NodeType.TD_OPEN),
            *content,
            ContentNode(NodeType.TD_CLOSE),
            ContentNode(NodeType.TR_CLOSE),
            ContentNode(NodeType.TBODY_CLOSE),
            ContentNode(NodeType.TABLE_CLOSE),
        ]

    def test_cell_with_breaks_is_stacked(self):
        out = render(self.cell_stream(text("a"), ContentNode(NodeType.SOFTBREAK), text("b")))
        assert "  \\makecell[c]{a \\\\ b}\n" in out

    def test_cell_with_list_is_not_stacked(self):
        nodes = [
            ContentNode(NodeType.BULLET_LIST_OPEN),
            ContentNode(NodeType.LIST_ITEM_OPEN),
            text("a"),
            ContentNode(NodeType.HARDBREAK),
            text("b"),
            ContentNode(NodeType.LIST_ITEM_CLOSE),
            ContentNode(NodeType.BULLET_LIST_CLOSE),
        ]
        out = render(self.cell_stream(*nodes))
        assert "makecell" not in out
        assert "a \\newline b" in out

    def test_choose_cell_kind_stops_at_cell_close(self):
        stream = [
            ContentNode(NodeType.TD_OPEN),
            text("a"),
            ContentNode(NodeType.TD_CLOSE),
            ContentNode(NodeType.TD_OPEN),
            ContentNode(NodeType.SOFTBREAK),
            ContentNode(NodeType.TD_CLOSE),
        ]
        assert tables.choose_cell_kind(stream, 0) == "plain"
        assert tables.choose_cell_kind(stream, 3) == "makecell"

    def test_header_cells_never_mathify_body_cells_do(self):
        out = render(table(("left",), [["3 × 4"]], header=["a × b"]))
        assert "\\thead[lb]{a × b}" in out
        assert "3 $\\times$ 4" in out

    def test_body_cells_inherit_section_math_setting(self):
        nodes = section("Question/Challenge", *table(("left",), [["3 × 4"]]))
        out = render(nodes)
        assert "3 × 4" in out
        assert "$\\times$" not in out

    def test_cell_break_outside_cell(self):
        from tasktex.renderers._tex_context import RenderContext

        assert tables.cell_break(RenderContext()) is None
