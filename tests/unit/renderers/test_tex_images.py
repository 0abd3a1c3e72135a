#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/renderers/test_tex_images.py
"""Unit tests for image sizing and placement."""

import logging

import pytest
from utils import paragraph, text

from tasktex.options import TexRendererOptions
from tasktex.renderers._tex_context import CellInfo, RenderFrame, TableInfo
from tasktex.renderers._tex_images import ignores_height, is_surrounded, parse_image_directive, render_image
from tasktex.renderers.tex import TexRenderer
from tasktex.tokens import ContentNode, NodeType

FOLDER = "\\taskGraphicsFolder"


def image(src="x.png", title=None):
    attrs = {"src": src}
    if title is not None:
        attrs["title"] = title
    return ContentNode(NodeType.IMAGE, tag="img", attrs=attrs)


def place(nodes, idx, frame=None, threshold=30):
    return render_image(
        nodes,
        idx,
        frame or RenderFrame(),
        graphics_folder=FOLDER,
        pixel_ratio=0.75,
        tall_image_threshold_px=threshold,
    )


@pytest.mark.unit
class TestImageDirective:
    """Tests for parse_image_directive()."""

    def test_relative_width(self):
        directive = parse_image_directive("A bridge (50%)", 0.75)
        assert directive.width == "0.5\\linewidth"
        assert directive.placement == "unspecified"
        assert directive.title == "A bridge "

    def test_absolute_width_is_converted(self):
        assert parse_image_directive("(120px left)", 0.75).width == "90px"
        assert parse_image_directive("(120px)", 0.75).width == "90px"

    @pytest.mark.parametrize("title", ["Figure (2)", "Step (120 left)"])
    def test_number_without_unit_is_not_a_width(self, title):
        directive = parse_image_directive(title, 0.75)
        assert directive.width is None
        assert directive.placement == "unspecified"
        assert directive.title == title

    def test_width_is_rounded_to_one_decimal(self):
        assert parse_image_directive("(2.25px)", 0.75).width == "1.7px"

    def test_placement_only(self):
        directive = parse_image_directive("(right)", 0.75)
        assert directive.width is None
        assert directive.placement == "right"

    @pytest.mark.parametrize("title", [None, "", "A plain title", "(50% middle)"])
    def test_no_directive(self, title):
        directive = parse_image_directive(title, 0.75)
        assert directive.width is None
        assert directive.placement == "unspecified"


@pytest.mark.unit
class TestAdjacency:
    """Tests for is_surrounded() and ignores_height()."""

    def test_surrounded_by_paragraph(self):
        nodes = paragraph(image())
        assert is_surrounded(nodes, 1, 1, "paragraph")
        assert not is_surrounded(nodes, 1, 1, "td")

    def test_surrounded_at_stream_edges(self):
        assert not is_surrounded([image()], 0, 1, "paragraph")

    def test_explicit_open_and_close_kinds(self):
        nodes = [text("a"), image(), text("b")]
        assert is_surrounded(nodes, 1, 1, "text", "text")

    @pytest.mark.parametrize(
        "width,expected",
        [(None, True), ("15px", True), ("29.9px", True), ("30px", False), ("0.5\\linewidth", True), ("big", False)],
    )
    def test_ignores_height(self, width, expected):
        assert ignores_height(width, 30) is expected


@pytest.mark.unit
class TestPlacement:
    """Tests for render_image() wrappers."""

    def test_alone_in_paragraph_is_centered(self):
        nodes = paragraph(image(title="(50%)"))
        assert place(nodes, 1) == (
            "{\\centering%\n\\includegraphics[width=0.5\\linewidth]{\\taskGraphicsFolder/x.png}\\par}"
        )

    def test_inline_between_text_is_raised(self):
        nodes = [text("a"), image(), text("b")]
        assert place(nodes, 1) == "\\raisebox{-0.5ex}[0pt][0pt]{\\includegraphics{\\taskGraphicsFolder/x.png}}"

    def test_tall_inline_image_keeps_height(self):
        nodes = [text("a"), image(title="(40px)"), text("b")]
        assert place(nodes, 1) == "\\raisebox{-0.5ex}{\\includegraphics[width=30px]{\\taskGraphicsFolder/x.png}}"

    def test_threshold_is_configurable(self):
        nodes = [text("a"), image(title="(40px)"), text("b")]
        assert place(nodes, 1, threshold=31).startswith("\\raisebox{-0.5ex}[0pt][0pt]{")

    def test_in_table_cell_uses_makecell(self):
        frame = RenderFrame(
            current_table=TableInfo(column_specs=("C",), close_markup=""),
            current_cell=CellInfo(kind="plain", close_markup=""),
            column_index=0,
        )
        nodes = [ContentNode(NodeType.TD_OPEN), image(), ContentNode(NodeType.TD_CLOSE)]
        assert place(nodes, 1, frame) == "\\makecell[c]{\\includegraphics{\\taskGraphicsFolder/x.png}}"

    def test_paragraph_in_cell_uses_makecell(self):
        frame = RenderFrame(
            current_table=TableInfo(column_specs=("r",), close_markup=""),
            current_cell=CellInfo(kind="plain", close_markup=""),
            column_index=0,
        )
        nodes = [ContentNode(NodeType.TD_OPEN), *paragraph(image()), ContentNode(NodeType.TD_CLOSE)]
        assert place(nodes, 2, frame) == "\\makecell[r]{\\includegraphics{\\taskGraphicsFolder/x.png}}"

    def test_floating_image_is_wrapped(self):
        nodes = paragraph(image(title="Map (120px left)"))
        assert place(nodes, 1) == (
            "\\begin{wrapfigure}{L}{90px}\n"
            "\\raisebox{-.46cm}[\\height-.92cm][-.46cm]{"
            "\\includegraphics[width=90px]{\\taskGraphicsFolder/x.png}"
            "}\n\\end{wrapfigure}"
        )

    def test_floating_in_table_is_not_wrapped(self):
        frame = RenderFrame(
            current_table=TableInfo(column_specs=("l",), close_markup=""),
            current_cell=CellInfo(kind="plain", close_markup=""),
            column_index=0,
        )
        nodes = [ContentNode(NodeType.TD_OPEN), image(title="(120px right)"), ContentNode(NodeType.TD_CLOSE)]
        assert "wrapfigure" not in place(nodes, 1, frame)

    def test_floating_without_width_warns(self, caplog):
        nodes = paragraph(image(title="(right)"))
        with caplog.at_level(logging.WARNING):
            out = place(nodes, 1)
        assert out == "\\includegraphics{\\taskGraphicsFolder/x.png}"
        assert "Undefined width" in caplog.text

    def test_svg_and_absolute_paths(self):
        nodes = [image(src="/abs/pic.svg")]
        assert place(nodes, 0) == "\\includesvg{/abs/pic.svg}"

    def test_graphics_folder_option(self):
        renderer = TexRenderer(TexRendererOptions(graphics_folder="img"))
        out = renderer.render_body([image()]).text
        assert out == "\\includegraphics{img/x.png}"
