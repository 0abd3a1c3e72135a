"""Test utilities for the tasktex test suite.

Builders for linearized node streams, so tests can state the structure
they render without going through the Markdown front end.
"""

from tasktex.tokens import ContentNode, NodeType, TableMeta


def paragraph(*children: ContentNode) -> list[ContentNode]:
    """Linearized paragraph around ``children``."""
    return [ContentNode(NodeType.PARAGRAPH_OPEN, tag="p"), *children, ContentNode(NodeType.PARAGRAPH_CLOSE, tag="p")]


def text(content: str) -> ContentNode:
    return ContentNode(NodeType.TEXT, content=content)


def section(name: str, *body: ContentNode) -> list[ContentNode]:
    """Linearized section with its level-2 heading and ``body``."""
    return [
        ContentNode(NodeType.SECCONTAINER_OPEN, info=name),
        ContentNode(NodeType.HEADING_OPEN, tag="h2"),
        text(name),
        ContentNode(NodeType.HEADING_CLOSE, tag="h2"),
        ContentNode(NodeType.SECBODY_OPEN, info=name),
        *body,
        ContentNode(NodeType.SECBODY_CLOSE, info=name),
        ContentNode(NodeType.SECCONTAINER_CLOSE, info=name),
    ]


def table(aligns, rows, wraps=(), header=None) -> list[ContentNode]:
    """Linearized table; ``rows`` are lists of cell texts or (text, attrs) pairs."""
    nodes = [ContentNode(NodeType.TABLE_OPEN, tag="table", meta=TableMeta(aligns=aligns, wraps=wraps))]

    def cell(value, open_type, close_type):
        content, attrs = value if isinstance(value, tuple) else (value, {})
        return [ContentNode(open_type, attrs=attrs), text(content), ContentNode(close_type)]

    if header is not None:
        nodes += [ContentNode(NodeType.THEAD_OPEN), ContentNode(NodeType.TR_OPEN)]
        for value in header:
            nodes += cell(value, NodeType.TH_OPEN, NodeType.TH_CLOSE)
        nodes += [ContentNode(NodeType.TR_CLOSE), ContentNode(NodeType.THEAD_CLOSE)]
    nodes.append(ContentNode(NodeType.TBODY_OPEN))
    for row in rows:
        nodes.append(ContentNode(NodeType.TR_OPEN))
        for value in row:
            nodes += cell(value, NodeType.TD_OPEN, NodeType.TD_CLOSE)
        nodes.append(ContentNode(NodeType.TR_CLOSE))
    nodes += [ContentNode(NodeType.TBODY_CLOSE), ContentNode(NodeType.TABLE_CLOSE)]
    return nodes
