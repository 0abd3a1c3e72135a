#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/tasktex/renderers/_tex_context.py
"""Render context for the TeX renderer.

The renderer walks a flat node stream, so nesting information (are we in a
heading, in which table cell, is math typesetting suppressed, ...) is kept
on an explicit stack of immutable :class:`RenderFrame` records. Every new
frame is a copy of the top frame with some fields overridden, so unset
fields are inherited from the enclosing construct.

Rules communicate with the traversal loop through :class:`Emit` and
:class:`SkipUntil` results.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Optional, Union

from tasktex.constants import CellKind, RowKind
from tasktex.exceptions import ProgrammingInvariantError


@dataclass(frozen=True)
class TableInfo:
    """Resolved layout of the table being rendered.

    Parameters
    ----------
    column_specs : tuple of str
        Column codes as written in the table preamble (``l``, ``C``, ``J``, ...)
    close_markup : str
        Markup closing the chosen table environment

    """

    column_specs: tuple[str, ...]
    close_markup: str


@dataclass(frozen=True)
class CellInfo:
    """Kind and closing markup of the table cell being rendered."""

    kind: CellKind
    close_markup: str


@dataclass(frozen=True)
class MultiRowSpan:
    """A cell occupying ``row_span`` rows of one column, from ``origin_row`` on."""

    column: int
    origin_row: int
    row_span: int

    def covers(self, row: int, column: int) -> bool:
        return column == self.column and self.origin_row <= row < self.origin_row + self.row_span


@dataclass(frozen=True)
class RenderFrame:
    """One layer of inheritable rendering state."""

    is_in_heading: bool = False
    disable_mathify: bool = False
    no_page_break: bool = False
    current_table: Optional[TableInfo] = None
    current_cell: Optional[CellInfo] = None
    row_index: int = -1
    column_index: int = -1
    multirows: tuple[MultiRowSpan, ...] = ()
    has_cell_on_this_line: bool = False
    last_row_kind: Optional[RowKind] = None
    section_close_markup: str = ""

    def is_covered_by_multirow(self, row: int, column: int) -> bool:
        return any(span.covers(row, column) for span in self.multirows)


class RenderContext:
    """Stack of :class:`RenderFrame` records with merge-on-write updates.

    The base frame is never removed; :meth:`pop` on it raises
    :class:`~tasktex.exceptions.ProgrammingInvariantError`.

    Examples
    --------
        >>> ctx = RenderContext()
        >>> ctx.push(is_in_heading=True)
        >>> ctx.current().is_in_heading, ctx.depth
        (True, 1)
        >>> ctx.pop().is_in_heading
        True
        >>> ctx.depth
        0

    """

    def __init__(self, base: Optional[RenderFrame] = None) -> None:
        self._frames: list[RenderFrame] = [base or RenderFrame()]

    def current(self) -> RenderFrame:
        return self._frames[-1]

    def set(self, **changes: Any) -> RenderFrame:
        """Replace the top frame with a copy carrying ``changes``."""
        frame = replace(self._frames[-1], **changes)
        self._frames[-1] = frame
        return frame

    def push(self, **changes: Any) -> None:
        """Push a copy of the top frame carrying ``changes``."""
        self._frames.append(replace(self._frames[-1], **changes))

    def pop(self) -> RenderFrame:
        """Remove and return the top frame.

        Raises
        ------
        ProgrammingInvariantError
            If only the base frame is left, which means a close node had no
            matching open node.

        """
        if len(self._frames) == 1:
            raise ProgrammingInvariantError(
                "Attempted to pop the base render frame; open and close nodes are not balanced",
                invariant="render frames are pushed and popped in pairs",
            )
        return self._frames.pop()

    @property
    def depth(self) -> int:
        """Number of frames above the base frame."""
        return len(self._frames) - 1


@dataclass(frozen=True)
class Emit:
    """Rule result: append ``text`` to the output."""

    text: str


@dataclass(frozen=True)
class SkipUntil:
    """Rule result: skip forward to the next node of kind ``kind``.

    The skipped nodes, and the node of kind ``kind`` itself, are not rendered.
    """

    kind: str


RuleResult = Union[Emit, SkipUntil, str]
