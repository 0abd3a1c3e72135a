#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for the tasktex library.

This module centralizes hardcoded values, magic numbers, and default
configuration constants used across tasktex.

Constants are organized by category:
1. Type Definitions - All Literal types and type aliases
2. Node Vocabulary - Structural constants of the node stream
3. Table Layout - Column specifications and cell markup
4. Image Placement - Width conversion and adjacency heuristics
5. Sections and Templates - Section names, age brackets, categories
6. Dependencies - Optional package requirements
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions - All Literal Types and Type Aliases
# =============================================================================

RenderMode = Literal["standalone", "brochure"]
CellKind = Literal["thead", "makecell", "plain"]
RowKind = Literal["header", "body"]
ImagePlacement = Literal["unspecified", "left", "right"]
ContainerName = Literal["center", "clear", "indent", "nobreak"]

# =============================================================================
# Node Vocabulary
# =============================================================================

# Name of the section that is current before the first section body opens
INITIAL_SECTION_NAME = "prologue"

# Name of the section that is current between two section bodies
INTERSECTION_SECTION_NAME = "intersection_text"

# Text substituted for sections that were never encountered
MISSING_SECTION_PLACEHOLDER = "TODO"

# Opening/closing markup of heading levels 1..5 (deeper levels reuse the last)
SECTION_COMMANDS: tuple[tuple[str, str], ...] = (
    ("\\section*{\\centering{} ", "}"),
    ("\\subsection*{", "}"),
    ("\\subsubsection*{", "}"),
    ("\\paragraph*{", "}"),
    ("\\subparagraph*{", "}"),
)

# =============================================================================
# Table Layout
# =============================================================================

# Column alignment codes: (non-expanding, expanding)
COLUMN_SPECS: dict[str, tuple[str, str]] = {
    "": ("l", "J"),
    "default": ("l", "J"),
    "left": ("l", "L"),
    "center": ("c", "C"),
    "right": ("r", "R"),
}

# Expanding code that means "justified"; degrades to left outside X columns
JUSTIFIED_COLUMN_CODE = "J"

# Node kinds inside a body cell that prevent stacked (makecell) rendering
STACKING_BLOCKERS = frozenset({"table_open", "ordered_list_open", "bullet_list_open"})

# =============================================================================
# Image Placement
# =============================================================================

# HTML pixel to TeX pixel conversion ratio for absolute image widths
DEFAULT_PIXEL_RATIO = 0.75

# Inline images at least this wide (in TeX px) keep their height when raised.
# Width stands in for height, which the task format does not record.
DEFAULT_TALL_IMAGE_THRESHOLD_PX = 30

# Adjacency distances used to infer the structural context of an image
PARAGRAPH_ADJACENCY = 1
CELL_IN_PARAGRAPH_ADJACENCY = 2

# LaTeX macro prefixed to relative image paths
DEFAULT_GRAPHICS_FOLDER = "\\taskGraphicsFolder"

# License logo included by the license expansion
DEFAULT_LICENSE_LOGO = "CC_by-sa.pdf"

# =============================================================================
# Sections and Templates
# =============================================================================

DEFAULT_LANGUAGE_CODE = "eng"

SECTION_BODY = "Body"
SECTION_QUESTION = "Question/Challenge"
SECTION_ANSWER_OPTIONS = "Answer Options/Interactivity Description"
SECTION_ANSWER_EXPLANATION = "Answer Explanation"
SECTION_ITS_INFORMATICS = "It's Informatics"
SECTION_KEYWORDS = "Keywords and Websites"
SECTION_WORDING = "Wording and Phrases"
SECTION_COMMENTS = "Comments"
SECTION_CONTRIBUTORS = "Contributors"
SECTION_SUPPORT_FILES = "Support Files"
SECTION_LICENSE = "License"

KNOWN_SECTION_NAMES: tuple[str, ...] = (
    SECTION_BODY,
    SECTION_QUESTION,
    SECTION_ANSWER_OPTIONS,
    SECTION_ANSWER_EXPLANATION,
    SECTION_ITS_INFORMATICS,
    SECTION_KEYWORDS,
    SECTION_WORDING,
    SECTION_COMMENTS,
    SECTION_CONTRIBUTORS,
    SECTION_SUPPORT_FILES,
    SECTION_LICENSE,
)

# Header column title -> metadata age bracket
AGE_CATEGORIES: dict[str, str] = {
    "6yo–8yo": "6-8",
    "8yo–10yo": "8-10",
    "10yo–12yo": "10-12",
    "12yo–14yo": "12-14",
    "14yo–16yo": "14-16",
    "16yo–19yo": "16-19",
}

# Brochure difficulty counter suffix -> metadata age bracket
BROCHURE_AGE_COUNTERS: tuple[tuple[str, str], ...] = (
    ("3to4", "8-10"),
    ("5to6", "10-12"),
    ("7to8", "12-14"),
    ("9to10", "14-16"),
    ("11to13", "16-19"),
)

TASK_CATEGORIES: tuple[str, ...] = (
    "algorithms and programming",
    "data structures and representations",
    "computer processes and hardware",
    "communication and networking",
    "interactions, systems and society",
)

DIFFICULTY_LEVELS: dict[str, int] = {
    "easy": 1,
    "medium": 2,
    "hard": 3,
}

# Country code used when a contributor's country is not recognized
UNKNOWN_COUNTRY_CODE = "aa"

# Task country code used when the task id does not parse
UNKNOWN_TASK_COUNTRY = "??"

# Initial used when a contributor name cannot be split
UNSPLITTABLE_NAME_INITIAL = "A"

# Suffix of the brochure output next to the standalone output
BROCHURE_SUFFIX = "_brochure.tex"

TASK_FILE_SUFFIX = ".task.md"

LICENSE_URL = "https://creativecommons.org/licenses/by-sa/4.0/"

# =============================================================================
# Dependencies
# =============================================================================

DEPS_MARKDOWN = [("mistune", "mistune", ">=3.0.0"), ("PyYAML", "yaml", ">=6.0")]
DEPS_TEMPLATES = [("Jinja2", "jinja2", ">=3.1.0")]
