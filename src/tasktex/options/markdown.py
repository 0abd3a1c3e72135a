#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for parsing task files written in Markdown."""
# src/tasktex/options/markdown.py


from __future__ import annotations

from dataclasses import dataclass, field

from tasktex.constants import KNOWN_SECTION_NAMES
from tasktex.options.base import BaseParserOptions


@dataclass(frozen=True)
class MarkdownParserOptions(BaseParserOptions):
    """Configuration options for turning a task file into a node stream.

    Parameters
    ----------
    parse_tables : bool, default True
        Whether to parse table syntax (GFM pipe tables).
    parse_math : bool, default True
        Whether to parse inline ($...$) and block ($$...$$) math.
    parse_superscript : bool, default True
        Whether to parse superscript syntax (^text^).
    parse_subscript : bool, default True
        Whether to parse subscript syntax (~text~).
    parse_containers : bool, default True
        Whether to recognise ``::: center|clear|indent|nobreak`` fenced containers.
    smart_quotes : bool, default True
        Whether to turn double-quoted text into ``\\enquote{}`` so the
        language-specific quote style applies.
    section_names : tuple of str
        Level-2 heading texts that open a task section.

    """

    parse_tables: bool = field(
        default=True,
        metadata={"help": "Parse table syntax (GFM pipe tables)", "cli_name": "no-parse-tables", "importance": "core"},
    )
    parse_math: bool = field(
        default=True,
        metadata={
            "help": "Parse inline and block math ($...$ and $$...$$)",
            "cli_name": "no-parse-math",
            "importance": "core",
        },
    )
    parse_superscript: bool = field(
        default=True,
        metadata={
            "help": "Parse superscript syntax (^text^)",
            "cli_name": "no-parse-superscript",
            "importance": "advanced",
        },
    )
    parse_subscript: bool = field(
        default=True,
        metadata={
            "help": "Parse subscript syntax (~text~)",
            "cli_name": "no-parse-subscript",
            "importance": "advanced",
        },
    )
    parse_containers: bool = field(
        default=True,
        metadata={
            "help": "Recognise ::: center|clear|indent|nobreak containers",
            "cli_name": "no-parse-containers",
            "importance": "core",
        },
    )
    smart_quotes: bool = field(
        default=True,
        metadata={
            "help": "Render double-quoted text with \\enquote",
            "cli_name": "no-smart-quotes",
            "importance": "advanced",
        },
    )
    section_names: tuple[str, ...] = field(
        default=KNOWN_SECTION_NAMES,
        metadata={
            "help": "Level-2 headings that open a task section",
            "exclude_from_cli": True,
            "importance": "advanced",
        },
    )

    def __post_init__(self) -> None:
        """Normalize the section names to a tuple."""
        super().__post_init__()
        object.__setattr__(self, "section_names", tuple(self.section_names))
