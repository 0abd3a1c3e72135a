#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/renderers/test_tex_renderer_properties.py
"""Property-based tests for the TeX renderer traversal.

Random well-nested node streams (paragraphs, inline markup, headings,
lists, containers, tables with multi-row cells, sections) must:
- leave the render context at depth zero in both modes
- render identically when rendered twice
"""

from itertools import chain

import pytest
from hypothesis import given
from hypothesis import strategies as st
from utils import paragraph, section, table, text

from tasktex.constants import KNOWN_SECTION_NAMES
from tasktex.renderers.tex import TexRenderer
from tasktex.tokens import ContentNode, NodeType


def flatten(parts):
    return list(chain.from_iterable(parts))


def wrap(open_type, close_type, **kw):
    return lambda inner: [ContentNode(open_type, **kw), *inner, ContentNode(close_type, **kw)]


texts = st.text(alphabet="ab ×≤%&_", max_size=6).map(lambda s: [text(s)])
breaks = st.sampled_from([NodeType.SOFTBREAK, NodeType.HARDBREAK]).map(lambda kind: [ContentNode(kind)])

inline_runs = st.recursive(
    st.one_of(texts, breaks),
    lambda children: st.one_of(
        children.map(wrap(NodeType.STRONG_OPEN, NodeType.STRONG_CLOSE)),
        children.map(wrap(NodeType.EM_OPEN, NodeType.EM_CLOSE)),
        children.map(wrap(NodeType.SUP_OPEN, NodeType.SUP_CLOSE)),
        st.tuples(children, children).map(lambda pair: pair[0] + pair[1]),
    ),
    max_leaves=8,
)

paragraphs = inline_runs.map(lambda run: paragraph(*run))
headings = st.tuples(st.integers(min_value=1, max_value=6), inline_runs).map(
    lambda pair: wrap(NodeType.HEADING_OPEN, NodeType.HEADING_CLOSE, tag=f"h{pair[0]}")(pair[1])
)
cell_values = st.sampled_from(["a", "b × c", ("r", {"rowspan": "2"}), ("w", {"colspan": "2"})])
tables = st.tuples(
    st.lists(st.lists(cell_values, min_size=1, max_size=3), min_size=1, max_size=4),
    st.lists(st.booleans(), min_size=3, max_size=3),
    st.booleans(),
).map(lambda t: table(("left", "center", "right"), t[0], wraps=tuple(t[1]), header=["h", "i"] if t[2] else None))

CONTAINERS = [
    (NodeType.CONTAINER_CENTER_OPEN, NodeType.CONTAINER_CENTER_CLOSE),
    (NodeType.CONTAINER_CLEAR_OPEN, NodeType.CONTAINER_CLEAR_CLOSE),
    (NodeType.CONTAINER_INDENT_OPEN, NodeType.CONTAINER_INDENT_CLOSE),
    (NodeType.CONTAINER_NOBREAK_OPEN, NodeType.CONTAINER_NOBREAK_CLOSE),
]


def _containers(children):
    return st.tuples(st.sampled_from(CONTAINERS), st.lists(children, max_size=3)).map(
        lambda pair: wrap(*pair[0])(flatten(pair[1]))
    )


def _lists(children):
    items = st.lists(children, min_size=1, max_size=3).map(
        lambda blocks: flatten(wrap(NodeType.LIST_ITEM_OPEN, NodeType.LIST_ITEM_CLOSE)(block) for block in blocks)
    )
    return st.tuples(st.booleans(), items).map(
        lambda pair: (
            wrap(NodeType.ORDERED_LIST_OPEN, NodeType.ORDERED_LIST_CLOSE)
            if pair[0]
            else wrap(NodeType.BULLET_LIST_OPEN, NodeType.BULLET_LIST_CLOSE)
        )(pair[1])
    )


blocks = st.recursive(
    st.one_of(paragraphs, headings, tables),
    lambda children: st.one_of(_containers(children), _lists(children)),
    max_leaves=6,
)

sections = st.tuples(st.sampled_from(KNOWN_SECTION_NAMES + ("Appendix",)), st.lists(blocks, max_size=3)).map(
    lambda pair: section(pair[0], *flatten(pair[1]))
)

documents = st.tuples(st.lists(blocks, max_size=2), st.lists(sections, max_size=4)).map(
    lambda pair: flatten(pair[0]) + flatten(pair[1])
)


@pytest.mark.unit
@pytest.mark.fuzzing
class TestTraversalProperties:
    """Property-based tests for render_body()."""

    @given(documents)
    def test_context_is_balanced_in_both_modes(self, nodes):
        renderer = TexRenderer()
        for mode in ("standalone", "brochure"):
            assert renderer.render_body(nodes, mode=mode).context.depth == 0

    @given(documents)
    def test_rendering_is_deterministic(self, nodes):
        first = TexRenderer().render_body(nodes)
        second = TexRenderer().render_body(nodes)
        assert first.text == second.text
        assert first.sections.names() == second.sections.names()

    @given(documents)
    def test_brochure_is_never_longer(self, nodes):
        renderer = TexRenderer()
        standalone = renderer.render_body(nodes, mode="standalone").text
        brochure = renderer.render_body(nodes, mode="brochure").text
        assert len(brochure) <= len(standalone)
