#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/renderers/test_tex_sections.py
"""Unit tests for section policies and section capture."""

import pytest
from utils import paragraph, section, text

from tasktex.options import TexRendererOptions
from tasktex.renderers._tex_sections import (
    DEFAULT_SECTION_POLICIES,
    FALLBACK_POLICY,
    SectionCapture,
    SectionPolicy,
    policy_for,
)
from tasktex.renderers.tex import TexRenderer
from tasktex.tokens import ContentNode, NodeType

COMMENTS_OUTPUT = "\n\\subsection*{Comments}\n\n" + "c\n\n"


def task_stream():
    return [
        *section("Body", *paragraph(text("b"))),
        *section("Comments", *paragraph(text("c"))),
        *section("Question/Challenge", *paragraph(text("q × 2"))),
    ]


@pytest.mark.unit
class TestSectionCapture:
    """Tests for SectionCapture."""

    def test_initial_section_is_prologue(self):
        capture = SectionCapture()
        capture.append("x")
        assert capture.current == "prologue"
        assert capture.text_for("prologue") == "x"

    def test_text_between_sections_goes_to_intersection(self):
        capture = SectionCapture()
        capture.enter("Body")
        capture.append("b")
        capture.leave()
        capture.append("between")
        assert capture.text_for("Body") == "b"
        assert capture.text_for("intersection_text") == "between"

    def test_missing_section_placeholder(self):
        capture = SectionCapture()
        assert capture.text_for("Body") == "TODO"
        assert capture.text_for("Body", placeholder="") == ""
        assert "Body" not in capture

    def test_names_in_first_seen_order(self):
        capture = SectionCapture()
        capture.enter("B")
        capture.append("1")
        capture.enter("A")
        capture.append("2")
        capture.enter("B")
        capture.append("3")
        assert capture.names() == ["B", "A"]
        assert capture.text_for("B") == "13"


@pytest.mark.unit
class TestPolicies:
    """Tests for the default section policies."""

    @pytest.mark.parametrize(
        "name", ["Wording and Phrases", "Comments", "Contributors", "Support Files", "License"]
    )
    def test_sections_hidden_in_brochure(self, name):
        assert DEFAULT_SECTION_POLICIES[name].skip_in_brochure

    def test_question_is_emphasized(self):
        policy = DEFAULT_SECTION_POLICIES["Question/Challenge"]
        assert (policy.pre, policy.post, policy.disable_mathify) == ("{\\em\n", "}", True)

    def test_unknown_section_uses_fallback(self):
        assert policy_for("Appendix", DEFAULT_SECTION_POLICIES) is FALLBACK_POLICY
        assert FALLBACK_POLICY == SectionPolicy()


@pytest.mark.unit
class TestSectionRendering:
    """Tests for section handling in the renderer."""

    def test_brochure_omits_exactly_the_hidden_sections(self):
        renderer = TexRenderer()
        standalone = renderer.render_body(task_stream(), mode="standalone")
        brochure = renderer.render_body(task_stream(), mode="brochure")
        assert COMMENTS_OUTPUT in standalone.text
        assert brochure.text == standalone.text.replace(COMMENTS_OUTPUT, "")
        assert "Comments" not in brochure.sections
        assert brochure.context.depth == 0

    def test_policy_markup_surrounds_section(self):
        body = TexRenderer().render_body(task_stream())
        assert "{\\em\n\n\\subsection*{Question/Challenge}\n\nq × 2\n\n}" in body.text

    def test_capture_excludes_headings_and_policy_markup(self):
        body = TexRenderer().render_body(task_stream())
        assert body.sections.text_for("Body") == "b\n\n"
        assert body.sections.text_for("Question/Challenge") == "q × 2\n\n"

    def test_empty_section_is_placeholder(self):
        body = TexRenderer().render_body(section("Body"))
        assert body.sections.text_for("Body") == "TODO"

    def test_unknown_section_is_rendered_in_brochure(self):
        body = TexRenderer().render_body(section("Appendix", *paragraph(text("1 ≤ 2"))), mode="brochure")
        assert body.sections.text_for("Appendix") == "1 $\\leq$ 2\n\n"

    def test_custom_policies(self):
        options = TexRendererOptions(section_policies={"Body": SectionPolicy(skip_in_brochure=True)})
        body = TexRenderer(options).render_body(task_stream(), mode="brochure")
        assert "Body" not in body.sections
        assert "Comments" in body.sections

    def test_header_expansion_skipped_in_brochure(self, metadata):
        nodes = [ContentNode(NodeType.EXPAND, meta="header")]
        renderer = TexRenderer()
        assert renderer.render_body(nodes, mode="brochure", metadata=metadata).text == ""
        assert "tabularx" in renderer.render_body(nodes, mode="standalone", metadata=metadata).text

    def test_header_expansion_kept_in_brochure_when_configured(self, metadata):
        nodes = [ContentNode(NodeType.EXPAND, meta="header")]
        renderer = TexRenderer(TexRendererOptions(skip_header_in_brochure=False))
        assert "tabularx" in renderer.render_body(nodes, mode="brochure", metadata=metadata).text
