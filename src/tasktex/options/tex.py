#  Copyright (c) 2025 Tom Villani, Ph.D.

# tasktex/options/tex.py
"""Configuration options for rendering tasks as LaTeX.

This module defines the options of :class:`tasktex.renderers.tex.TexRenderer`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping

from tasktex.constants import (
    DEFAULT_GRAPHICS_FOLDER,
    DEFAULT_LANGUAGE_CODE,
    DEFAULT_LICENSE_LOGO,
    DEFAULT_PIXEL_RATIO,
    DEFAULT_TALL_IMAGE_THRESHOLD_PX,
    RenderMode,
)
from tasktex.options.base import BaseRendererOptions
from tasktex.renderers._tex_sections import DEFAULT_SECTION_POLICIES, SectionPolicy
from tasktex.utils.codes import BABEL_BY_LANGUAGE, COUNTRY_CODE_BY_NAME


@dataclass(frozen=True)
class TexRendererOptions(BaseRendererOptions):
    r"""Configuration options for rendering a task as LaTeX.

    Parameters
    ----------
    mode : {"standalone", "brochure"}, default "standalone"
        Which document to produce: a self-contained printable document or a
        chapter fragment for the compiled brochure.
    skip_header_in_brochure : bool, default True
        Omit the metadata header table (ages, categories, keywords) when
        rendering the brochure.
    section_policies : Mapping[str, SectionPolicy]
        Section name to rendering policy. Sections missing from the mapping
        are always shown, unwrapped and mathified.
    babel_by_language : Mapping[str, str]
        Language code to the preamble block configuring babel.
    country_codes : Mapping[str, str]
        Country name to ISO code, used for the contributor flags.
    default_language : str, default "eng"
        Language used when the task language has no preamble block.
    graphics_folder : str, default "\\taskGraphicsFolder"
        LaTeX macro prefixed to relative image paths.
    license_logo : str, default "CC_by-sa.pdf"
        Graphics file shown next to the license text.
    pixel_ratio : float, default 0.75
        Conversion ratio from HTML pixels to TeX pixels for absolute widths.
    tall_image_threshold_px : float, default 30
        Inline images whose width reaches this value keep their height when
        raised to the text baseline.

    """

    mode: RenderMode = field(
        default="standalone",
        metadata={
            "help": "Output flavour: standalone document or brochure chapter",
            "choices": ["standalone", "brochure"],
            "importance": "core",
        },
    )
    skip_header_in_brochure: bool = field(
        default=True,
        metadata={
            "help": "Omit the metadata header table in brochure output",
            "cli_name": "no-skip-header-in-brochure",
            "importance": "advanced",
        },
    )
    section_policies: Mapping[str, SectionPolicy] = field(
        default_factory=lambda: dict(DEFAULT_SECTION_POLICIES),
        metadata={"help": "Section name to rendering policy", "exclude_from_cli": True, "importance": "advanced"},
    )
    babel_by_language: Mapping[str, str] = field(
        default_factory=lambda: dict(BABEL_BY_LANGUAGE),
        metadata={"help": "Language code to babel preamble block", "exclude_from_cli": True, "importance": "advanced"},
    )
    country_codes: Mapping[str, str] = field(
        default_factory=lambda: dict(COUNTRY_CODE_BY_NAME),
        metadata={"help": "Country name to ISO country code", "exclude_from_cli": True, "importance": "advanced"},
    )
    default_language: str = field(
        default=DEFAULT_LANGUAGE_CODE,
        metadata={"help": "Fallback language for the preamble", "type": str, "importance": "core"},
    )
    graphics_folder: str = field(
        default=DEFAULT_GRAPHICS_FOLDER,
        metadata={"help": "LaTeX macro prefixed to relative image paths", "type": str, "importance": "advanced"},
    )
    license_logo: str = field(
        default=DEFAULT_LICENSE_LOGO,
        metadata={"help": "Graphics file shown next to the license", "type": str, "importance": "advanced"},
    )
    pixel_ratio: float = field(
        default=DEFAULT_PIXEL_RATIO,
        metadata={"help": "HTML px to TeX px conversion ratio", "type": float, "importance": "advanced"},
    )
    tall_image_threshold_px: float = field(
        default=DEFAULT_TALL_IMAGE_THRESHOLD_PX,
        metadata={
            "help": "Width from which inline images keep their height when raised",
            "type": float,
            "importance": "advanced",
        },
    )

    def __post_init__(self) -> None:
        """Validate option values.

        Raises
        ------
        ValueError
            If any field value is outside its valid range.

        """
        super().__post_init__()

        if self.mode not in ("standalone", "brochure"):
            raise ValueError(f"mode must be 'standalone' or 'brochure', got {self.mode!r}")
        if self.pixel_ratio <= 0:
            raise ValueError(f"pixel_ratio must be positive, got {self.pixel_ratio}")
        if self.tall_image_threshold_px < 0:
            raise ValueError(f"tall_image_threshold_px must be non-negative, got {self.tall_image_threshold_px}")
        if self.default_language not in self.babel_by_language:
            raise ValueError(
                f"default_language {self.default_language!r} has no entry in babel_by_language "
                f"(known: {', '.join(sorted(self.babel_by_language))})"
            )

    @property
    def is_brochure(self) -> bool:
        return self.mode == "brochure"
