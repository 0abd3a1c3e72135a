#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/tasktex/renderers/_tex_images.py
"""Image inclusion and placement for the TeX renderer.

The node stream does not say whether an image stands alone in a paragraph,
sits in a table cell or flows with the text, so placement is inferred from
the kinds of the nodes immediately around the image.

Image titles may end with a directive setting the width and the float
side, e.g. ``"A map (120px left)"`` or ``"Detail (50%)"``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from tasktex.constants import CELL_IN_PARAGRAPH_ADJACENCY, PARAGRAPH_ADJACENCY, ImagePlacement
from tasktex.renderers._tex_context import RenderFrame
from tasktex.renderers._tex_tables import non_expanding_alignment
from tasktex.tokens.nodes import ContentNode
from tasktex.utils.numbers import format_number, leading_int, round_tenth
from tasktex.utils.patterns import IMAGE_OPTIONS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImageDirective:
    """Width and placement requested in an image title.

    Parameters
    ----------
    width : str or None
        TeX width, e.g. ``"90px"`` or ``"0.5\\linewidth"``
    placement : {"unspecified", "left", "right"}
        Float side
    title : str
        Title with the directive removed

    """

    width: Optional[str] = None
    placement: ImagePlacement = "unspecified"
    title: str = ""


def parse_image_directive(title: Optional[str], pixel_ratio: float) -> ImageDirective:
    """Read the width/placement directive at the end of an image title.

    Examples
    --------
        >>> parse_image_directive("Map (50%)", 0.75)
        ImageDirective(width='0.5\\\\linewidth', placement='unspecified', title='Map ')
        >>> parse_image_directive("(120px left)", 0.75).width
        '90px'

    """
    if not title:
        return ImageDirective(title=title or "")
    match = IMAGE_OPTIONS.search(title)
    if not match:
        return ImageDirective(title=title)

    width = None
    if match.group("width_abs"):
        width = format_number(round_tenth(float(match.group("width_abs")) * pixel_ratio)) + "px"
    elif match.group("width_rel"):
        width = format_number(round_tenth(float(match.group("width_rel")[:-1]) / 100)) + "\\linewidth"

    placement: ImagePlacement = "unspecified"
    if match.group("placement"):
        placement = match.group("placement")  # type: ignore[assignment]

    return ImageDirective(width=width, placement=placement, title=title[: match.start()])


def is_surrounded(
    nodes: Sequence[ContentNode], idx: int, distance: int, item: str, item_close: Optional[str] = None
) -> bool:
    """Check whether the nodes ``distance`` positions around ``idx`` enclose it.

    With only ``item`` given, the enclosing kinds are ``<item>_open`` and
    ``<item>_close``; with ``item_close`` given, ``item`` and ``item_close``
    are used as they are.
    """
    if item_close is None:
        item_open = f"{item}_open"
        item_close = f"{item}_close"
    else:
        item_open = item
    return (
        idx - distance >= 0
        and idx + distance < len(nodes)
        and nodes[idx - distance].type == item_open
        and nodes[idx + distance].type == item_close
    )


def ignores_height(width: Optional[str], threshold: float) -> bool:
    """Whether an inline image is small enough to not affect the line height.

    Only the integer part of the width is considered. Images without a width
    count as small; widths that do not start with a number count as tall.
    """
    if width is None:
        return True
    value = leading_int(width.replace("px", "", 1))
    if value is None:
        return False
    return value < threshold


def render_image(
    nodes: Sequence[ContentNode],
    idx: int,
    frame: RenderFrame,
    graphics_folder: str,
    pixel_ratio: float,
    tall_image_threshold_px: float,
) -> str:
    """Render the image node at ``idx`` with its placement wrapper."""
    node = nodes[idx]
    src = node.attr_get("src") or ""
    command = "\\includesvg" if src.endswith(".svg") else "\\includegraphics"
    path = src if src.startswith("/") else f"{graphics_folder}/{src}"

    directive = parse_image_directive(node.attr_get("title"), pixel_ratio)
    options = f"[width={directive.width}]" if directive.width else ""
    include = f"{command}{options}{{{path}}}"

    before = ""
    after = ""
    in_table = frame.current_cell is not None

    def makecell() -> tuple[str, str]:
        specs = frame.current_table.column_specs if frame.current_table else ()
        column = frame.column_index
        align = non_expanding_alignment(specs[column] if 0 <= column < len(specs) else None)
        return f"\\makecell[{align}]{{", "}"

    def raisebox(ignore_height: bool) -> tuple[str, str]:
        size = "[0pt][0pt]" if ignore_height else ""
        return f"\\raisebox{{-0.5ex}}{size}{{", "}"

    if directive.placement == "unspecified" or in_table:
        if is_surrounded(nodes, idx, PARAGRAPH_ADJACENCY, "paragraph"):
            if is_surrounded(nodes, idx, CELL_IN_PARAGRAPH_ADJACENCY, "td"):
                before, after = makecell()
            elif not in_table:
                before, after = "{\\centering%\n", "\\par}"
            else:
                before, after = raisebox(False)
        elif is_surrounded(nodes, idx, PARAGRAPH_ADJACENCY, "td"):
            before, after = makecell()
        elif is_surrounded(nodes, idx, PARAGRAPH_ADJACENCY, "text", "text"):
            before, after = raisebox(ignores_height(directive.width, tall_image_threshold_px))
    else:
        side = directive.placement[0].upper()
        if directive.width:
            before = (
                f"\\begin{{wrapfigure}}{{{side}}}{{{directive.width}}}\n"
                "\\raisebox{-.46cm}[\\height-.92cm][-.46cm]{"
            )
            after = "}\n\\end{wrapfigure}"
        else:
            logger.warning(f"Undefined width for floating image {src!r}: {node.describe()}")

    return f"{before}{include}{after}"
