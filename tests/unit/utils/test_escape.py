#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/utils/test_escape.py
"""Unit tests for LaTeX escaping and math conversion."""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from tasktex.utils.escape import escape_url, tex_escape_chars, tex_math, tex_mathify


@pytest.mark.unit
class TestEscapeChars:
    """Tests for tex_escape_chars()."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("a & b", "a \\& b"),
            ("100%", "100\\%"),
            ("$5", "\\$5"),
            ("#1", "\\#1"),
            ("a_b", "a\\_b"),
            ("{x}", "\\{x\\}"),
            ("~", "\\textasciitilde{}"),
            ("^", "\\textasciicircum{}"),
            ("\\", "\\textbackslash{}"),
            ("plain text", "plain text"),
        ],
    )
    def test_special_characters(self, raw, expected):
        assert tex_escape_chars(raw) == expected

    def test_quote_placeholders_become_commands(self):
        assert tex_escape_chars("⍀enquote⦃a & b⦄") == "\\enquote{a \\& b}"

    def test_backslash_escape_is_not_escaped_again(self):
        assert tex_escape_chars("\\{") == "\\textbackslash{}\\{"


@pytest.mark.unit
class TestMath:
    """Tests for tex_mathify() and tex_math()."""

    def test_mathify_symbols(self):
        assert tex_mathify("a ≠ b ≥ c") == "a $\\neq$ b $\\geq$ c"

    def test_mathify_minus_sign(self):
        assert tex_mathify("−3") == "$-$3"

    def test_mathify_leaves_plain_text(self):
        assert tex_mathify("no symbols") == "no symbols"

    def test_math_inside_formula(self):
        assert tex_math("a×b") == "a\\times b"
        assert tex_math("x−1") == "x-1"


@pytest.mark.unit
class TestEscapeUrl:
    """Tests for escape_url()."""

    def test_percent_and_hash(self):
        assert escape_url("https://x.org/%C3%A9#top") == "https://x.org/\\%C3\\%A9\\#top"

    def test_plain_url(self):
        assert escape_url("https://bebras.ch") == "https://bebras.ch"


@pytest.mark.unit
@pytest.mark.fuzzing
class TestEscapeProperties:
    """Property-based tests for escaping."""

    @given(st.text(max_size=50).filter(lambda s: not set(s) & set("⍀⦃⦄")))
    def test_no_unescaped_specials(self, raw):
        escaped = tex_escape_chars(raw)
        for char in "%$#&_":
            assert escaped.count(char) == escaped.count("\\" + char)

    @given(st.text(alphabet="abc ", max_size=30))
    def test_plain_text_is_unchanged(self, raw):
        assert tex_mathify(tex_escape_chars(raw)) == raw
