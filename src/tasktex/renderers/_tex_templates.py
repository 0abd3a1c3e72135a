#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/tasktex/renderers/_tex_templates.py
"""Assembly of the final LaTeX documents.

The rendered body is placed into one of two Jinja2 templates shipped with
the package:

``standalone.tex.j2``
    A complete document with preamble, language setup and page footer.
``brochure.tex.j2``
    A chapter fragment for the compiled brochure. It sets the difficulty
    counters of the age groups, includes the captured sections in a fixed
    order and defines one marker macro per contributor.

The templates use LaTeX-friendly delimiters: ``((* ... *))`` for
statements, ``((( ... )))`` for expressions and ``((= ... =))`` for
comments, so that TeX braces and percent signs need no escaping.
"""

from __future__ import annotations

import logging
import re
import unicodedata
from functools import lru_cache
from pathlib import Path
from typing import TYPE_CHECKING, Iterable, Mapping, Optional

from tasktex.constants import (
    BROCHURE_AGE_COUNTERS,
    DEPS_TEMPLATES,
    DIFFICULTY_LEVELS,
    UNKNOWN_COUNTRY_CODE,
    UNKNOWN_TASK_COUNTRY,
    UNSPLITTABLE_NAME_INITIAL,
)
from tasktex.renderers._tex_sections import SectionCapture
from tasktex.utils.decorators import requires_dependencies
from tasktex.utils.escape import tex_escape_chars
from tasktex.utils.metadata import TaskMetadata
from tasktex.utils.patterns import CONTRIBUTOR

if TYPE_CHECKING:
    from jinja2 import Environment

    from tasktex.options.tex import TexRendererOptions

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates"
STANDALONE_TEMPLATE = "standalone.tex.j2"
BROCHURE_TEMPLATE = "brochure.tex.j2"

_COMBINING_MARKS_RE = re.compile("[\u0300-\u036f]")


@lru_cache(maxsize=1)
@requires_dependencies("templates", DEPS_TEMPLATES)
def template_environment() -> "Environment":
    """Jinja2 environment loading the bundled LaTeX templates."""
    from jinja2 import Environment, FileSystemLoader, StrictUndefined

    # nosemgrep: python.flask.security.xss.audit.direct-use-of-jinja2.direct-use-of-jinja2
    return Environment(  # nosec B701
        loader=FileSystemLoader(str(TEMPLATE_DIR)),
        autoescape=False,
        undefined=StrictUndefined,
        block_start_string="((*",
        block_end_string="*))",
        variable_start_string="(((",
        variable_end_string=")))",
        comment_start_string="((=",
        comment_end_string="=))",
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )


def difficulty_index(label: Optional[str]) -> int:
    """Map a difficulty label to the brochure counter value.

    Examples
    --------
        >>> [difficulty_index(x) for x in ("easy", "medium", "hard", "--", "--x", "tricky")]
        [1, 2, 3, 0, 0, 0]

    """
    if not label or label.startswith("--"):
        return 0
    return DIFFICULTY_LEVELS.get(label, 0)


def asciify(name: str) -> str:
    """Strip diacritics and hyphens so a name can be part of a macro name.

    Examples
    --------
        >>> asciify("Müller-Łukasiewicz")
        'MullerLukasiewicz'

    """
    decomposed = unicodedata.normalize("NFD", name)
    return _COMBINING_MARKS_RE.sub("", decomposed).replace("ł", "l").replace("Ł", "L").replace("-", "")


def split_author_name(full_name: str) -> tuple[str, str]:
    """Split a contributor name into (surname, first initial), both asciified.

    The surname is the last word and the initial comes from the first word.
    A name made of a single word keeps it as the surname with the initial "A".
    """
    parts = [part for part in full_name.strip().split(" ") if part]
    if len(parts) <= 1:
        logger.warning(f"Cannot split full name {full_name!r} into first and last name")
        return asciify(parts[0] if parts else full_name), UNSPLITTABLE_NAME_INITIAL
    return asciify(parts[-1]), asciify(parts[0][0]).upper()


def author_marker(line: str, country_codes: Mapping[str, str]) -> Optional[str]:
    r"""Marker definition for one contributor line, or None if the line does not parse.

    Examples
    --------
        >>> author_marker("Jean-Philippe Pellet, Switzerland", {"Switzerland": "CH"})
        '\\def\\AuthorPelletJ{} % \\ifdefined\\AuthorPelletJ \\BrochureFlag{ch}{} Jean-Philippe Pellet\\fi'

    """
    match = CONTRIBUTOR.match(line.strip())
    if not match:
        return None
    name = match.group("name")
    surname, initial = split_author_name(name)
    command = f"\\Author{surname}{initial}"

    country = match.group("country")
    code = country_codes.get(country)
    if code is None:
        logger.warning(f"Unrecognized country {country!r} in contributor line {line!r}")
        country_code = UNKNOWN_COUNTRY_CODE
    else:
        country_code = code.lower()

    display_name = name.replace(". ", ".~")
    return f"\\def{command}{{}} % \\ifdefined{command} \\BrochureFlag{{{country_code}}}{{}} {display_name}\\fi"


def author_markers(lines: Iterable[str], country_codes: Mapping[str, str]) -> str:
    """Marker definitions of all parseable contributor lines, one per line."""
    markers = (author_marker(line, country_codes) for line in lines)
    return "\n".join(marker for marker in markers if marker is not None)


def task_country_code(metadata: TaskMetadata) -> str:
    return metadata.country_code or UNKNOWN_TASK_COUNTRY


def resolve_language(language_code: Optional[str], options: "TexRendererOptions") -> str:
    """Language whose preamble is used, falling back silently to the default."""
    if language_code and language_code in options.babel_by_language:
        return language_code
    return options.default_language


def assemble_standalone(
    body: str, metadata: TaskMetadata, language_code: Optional[str], options: "TexRendererOptions"
) -> str:
    """Wrap a rendered body into a complete LaTeX document.

    Parameters
    ----------
    body : str
        Rendered task body
    metadata : TaskMetadata
        Task metadata, used in the page footer
    language_code : str or None
        Language of the task; unknown languages use ``options.default_language``
    options : TexRendererOptions
        Renderer options supplying the lookup tables

    Returns
    -------
    str
        The complete document

    """
    language = resolve_language(language_code, options)
    folder = options.graphics_folder
    template = template_environment().get_template(STANDALONE_TEMPLATE)
    return template.render(
        babel=options.babel_by_language[language],
        quote_language=language,
        short_copyright=tex_escape_chars(metadata.task_license().short_copyright()),
        task_id=tex_escape_chars(metadata.id),
        title=tex_escape_chars(metadata.title),
        graphics_folder_definition=f"\\newcommand{{{folder}}}{{..}}" if folder.startswith("\\") else "",
        body=body,
    )


def assemble_brochure(capture: SectionCapture, metadata: TaskMetadata, options: "TexRendererOptions") -> str:
    """Place captured sections into the brochure chapter template.

    Sections that were never rendered appear as ``TODO``.
    """
    template = template_environment().get_template(BROCHURE_TEMPLATE)
    return template.render(
        difficulty_counters=[
            (counter, difficulty_index(metadata.age_label(bracket))) for counter, bracket in BROCHURE_AGE_COUNTERS
        ],
        title=tex_escape_chars(metadata.title),
        country_code=task_country_code(metadata),
        section=capture.text_for,
        author_markers=author_markers(metadata.contributors, options.country_codes),
    )
