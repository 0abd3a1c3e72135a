#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/tasktex/utils/escape.py
"""LaTeX text escaping and math symbol conversion.

The Markdown front end emits typographic quotes as ``⍀enquote⦃…⦄`` so that
escaping does not touch them; :func:`tex_escape_chars` turns those
placeholder characters back into a backslash and braces.

"""

from __future__ import annotations

import re

# Characters with a special meaning in LaTeX, and the placeholder characters
# standing for a literal backslash and braces
_TEX_ESCAPES: dict[str, str] = {
    "\\": r"\textbackslash{}",
    "{": r"\{",
    "}": r"\}",
    "$": r"\$",
    "%": r"\%",
    "&": r"\&",
    "#": r"\#",
    "_": r"\_",
    "~": r"\textasciitilde{}",
    "^": r"\textasciicircum{}",
    "⍀": "\\",
    "⦃": "{",
    "⦄": "}",
}

_TEX_ESCAPE_RE = re.compile("|".join(re.escape(char) for char in _TEX_ESCAPES))

# Unicode symbol -> math-mode command
_MATH_SYMBOLS: dict[str, str] = {
    "×": r"\times",
    "÷": r"\div",
    "−": "-",
    "±": r"\pm",
    "≤": r"\leq",
    "≥": r"\geq",
    "≠": r"\neq",
    "≈": r"\approx",
    "·": r"\cdot",
    "→": r"\rightarrow",
    "←": r"\leftarrow",
    "↔": r"\leftrightarrow",
    "⇒": r"\Rightarrow",
    "⇔": r"\Leftrightarrow",
    "∞": r"\infty",
}

_MATH_SYMBOL_RE = re.compile("|".join(re.escape(char) for char in _MATH_SYMBOLS))


def tex_escape_chars(text: str) -> str:
    r"""Escape LaTeX special characters in running text.

    Parameters
    ----------
    text : str
        Plain text

    Returns
    -------
    str
        Text safe to place in a LaTeX document

    Examples
    --------
        >>> tex_escape_chars("50% of #1")
        '50\\% of \\#1'
        >>> tex_escape_chars("⍀enquote⦃hi⦄")
        '\\enquote{hi}'

    """
    return _TEX_ESCAPE_RE.sub(lambda m: _TEX_ESCAPES[m.group(0)], text)


def tex_mathify(text: str) -> str:
    r"""Typeset mathematical symbols found in (already escaped) running text.

    Examples
    --------
        >>> tex_mathify("3 × 4 ≤ 12")
        '3 $\\times$ 4 $\\leq$ 12'

    """
    return _MATH_SYMBOL_RE.sub(lambda m: "$" + _MATH_SYMBOLS[m.group(0)] + "$", text)


def tex_math(content: str) -> str:
    """Convert Unicode symbols inside a math formula into math commands."""

    def replace(match: re.Match[str]) -> str:
        command = _MATH_SYMBOLS[match.group(0)]
        return command + " " if command.startswith("\\") else command

    return _MATH_SYMBOL_RE.sub(replace, content)


def escape_url(url: str) -> str:
    r"""Escape the characters of a URL that ``\href`` does not accept verbatim."""
    return url.replace("%", "\\%").replace("#", "\\#")


__all__ = ["tex_escape_chars", "tex_mathify", "tex_math", "escape_url"]
