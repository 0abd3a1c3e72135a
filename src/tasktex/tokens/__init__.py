#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/tasktex/tokens/__init__.py
"""Node stream representation of task documents.

The node stream is the interface between the Markdown front end and the
renderers: a flat list of :class:`ContentNode` values with open/close pairs
for nested constructs.
"""

from tasktex.tokens.linearize import linearize
from tasktex.tokens.nodes import ContentNode, NodeType, TableMeta, TaskDocument

__all__ = ["ContentNode", "NodeType", "TableMeta", "TaskDocument", "linearize"]
