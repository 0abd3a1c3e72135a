#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/tasktex/tokens/linearize.py
"""Flattening of inline wrapper nodes."""

from __future__ import annotations

from typing import Iterable

from tasktex.tokens.nodes import ContentNode, NodeType


def linearize(nodes: Iterable[ContentNode]) -> list[ContentNode]:
    """Replace every ``inline`` wrapper node by its children.

    Wrappers are never nested in the source stream, so a single level of
    expansion yields a stream of leaf-level kinds only. Other nodes pass
    through unchanged and in order.

    Parameters
    ----------
    nodes : iterable of ContentNode
        Node stream as produced by the parser

    Returns
    -------
    list of ContentNode
        The flattened stream

    Examples
    --------
        >>> from tasktex.tokens import ContentNode, linearize
        >>> stream = [
        ...     ContentNode("paragraph_open"),
        ...     ContentNode("inline", children=[ContentNode("text", content="Hi")]),
        ...     ContentNode("paragraph_close"),
        ... ]
        >>> [n.type for n in linearize(stream)]
        ['paragraph_open', 'text', 'paragraph_close']

    """
    flat: list[ContentNode] = []
    for node in nodes:
        if node.type == NodeType.INLINE.value:
            flat.extend(node.children or ())
        else:
            flat.append(node)
    return flat
