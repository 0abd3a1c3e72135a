#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/tasktex/renderers/_tex_sections.py
"""Per-section rendering policies and section text capture.

A task is split into named sections ("Body", "Answer Explanation", ...).
Each section has a :class:`SectionPolicy` telling the renderer whether to
drop it from the brochure, what markup surrounds it and whether symbols in
its text are typeset as math. While rendering, :class:`SectionCapture`
records every emitted fragment under the name of the section being
traversed so that the brochure template can place sections individually.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from tasktex.constants import (
    INITIAL_SECTION_NAME,
    INTERSECTION_SECTION_NAME,
    MISSING_SECTION_PLACEHOLDER,
    SECTION_ANSWER_EXPLANATION,
    SECTION_ANSWER_OPTIONS,
    SECTION_BODY,
    SECTION_COMMENTS,
    SECTION_CONTRIBUTORS,
    SECTION_ITS_INFORMATICS,
    SECTION_KEYWORDS,
    SECTION_LICENSE,
    SECTION_QUESTION,
    SECTION_SUPPORT_FILES,
    SECTION_WORDING,
)


@dataclass(frozen=True)
class SectionPolicy:
    """How a named section is rendered.

    Parameters
    ----------
    skip_in_brochure : bool, default False
        Drop the whole section subtree when rendering the brochure
    pre : str, default ""
        Markup emitted before the section content
    post : str, default ""
        Markup emitted after the section content
    disable_mathify : bool, default False
        Keep symbols such as ``×`` or ``≤`` as plain text

    """

    skip_in_brochure: bool = False
    pre: str = ""
    post: str = ""
    disable_mathify: bool = False


# Policy applied to sections missing from the table: shown, unwrapped, mathified
FALLBACK_POLICY = SectionPolicy()

DEFAULT_SECTION_POLICIES: Mapping[str, SectionPolicy] = MappingProxyType(
    {
        SECTION_BODY: SectionPolicy(),
        SECTION_QUESTION: SectionPolicy(pre="{\\em\n", post="}", disable_mathify=True),
        SECTION_ANSWER_OPTIONS: SectionPolicy(),
        SECTION_ANSWER_EXPLANATION: SectionPolicy(),
        SECTION_ITS_INFORMATICS: SectionPolicy(),
        SECTION_KEYWORDS: SectionPolicy(pre="{\\raggedright\n", post="\n}", disable_mathify=True),
        SECTION_WORDING: SectionPolicy(skip_in_brochure=True, disable_mathify=True),
        SECTION_COMMENTS: SectionPolicy(skip_in_brochure=True, disable_mathify=True),
        SECTION_CONTRIBUTORS: SectionPolicy(skip_in_brochure=True, disable_mathify=True),
        SECTION_SUPPORT_FILES: SectionPolicy(skip_in_brochure=True, disable_mathify=True),
        SECTION_LICENSE: SectionPolicy(skip_in_brochure=True, disable_mathify=True),
    }
)


def policy_for(name: str, policies: Mapping[str, SectionPolicy]) -> SectionPolicy:
    """Return the policy of section ``name``, or the fallback policy."""
    return policies.get(name, FALLBACK_POLICY)


class SectionCapture:
    """Text emitted during one render, grouped by section name.

    The current section starts as ``"prologue"``. Opening a section body
    makes that section current; closing it switches to
    ``"intersection_text"`` until the next body opens.

    Examples
    --------
        >>> capture = SectionCapture()
        >>> capture.enter("Body")
        >>> capture.append("Hello")
        >>> capture.leave()
        >>> capture.text_for("Body"), capture.text_for("Comments")
        ('Hello', 'TODO')

    """

    def __init__(self) -> None:
        self.current: str = INITIAL_SECTION_NAME
        self._parts: dict[str, list[str]] = {}

    def enter(self, name: str) -> None:
        self.current = name

    def leave(self) -> None:
        self.current = INTERSECTION_SECTION_NAME

    def append(self, text: str) -> None:
        self._parts.setdefault(self.current, []).append(text)

    def text_for(self, name: str, placeholder: str = MISSING_SECTION_PLACEHOLDER) -> str:
        """Joined text of section ``name``, or ``placeholder`` if it was never entered."""
        parts = self._parts.get(name)
        if parts is None:
            return placeholder
        return "".join(parts)

    def names(self) -> list[str]:
        """Section names in the order they first received text."""
        return list(self._parts)

    def __contains__(self, name: object) -> bool:
        return name in self._parts
