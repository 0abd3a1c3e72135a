#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/tasktex/renderers/_tex_header.py
"""Expansion rules producing metadata-driven blocks.

The parser marks the places where generated content goes with
``bebras_html_expand`` nodes whose ``meta`` names the expansion: ``header``
for the table of age difficulties, answer type, categories and keywords
under the title, and ``license_body`` for the license notice.
"""

from __future__ import annotations

from tasktex.constants import AGE_CATEGORIES, TASK_CATEGORIES
from tasktex.utils.escape import tex_escape_chars
from tasktex.utils.metadata import TaskMetadata
from tasktex.utils.patterns import KEYWORD

CHECKED_BOX = "$\\boxtimes$"
UNCHECKED_BOX = "$\\square$"


def _multicolumn(n: int, contents: str) -> str:
    spec = f"{{|>{{\\hsize=\\dimexpr{n}\\hsize+{n + 1}\\tabcolsep+{n - 1}\\arrayrulewidth\\relax}}X|}}"
    return f"\\multicolumn{{{n}}}{spec}{{{contents}}}"


def _category_row(category: str, metadata: TaskMetadata) -> str:
    box = CHECKED_BOX if category in metadata.categories else UNCHECKED_BOX
    return f"{box} {tex_escape_chars(category)}"


def keyword_terms(metadata: TaskMetadata) -> list[str]:
    """Keywords without the URLs that may follow them."""
    terms = []
    for line in metadata.keywords:
        match = KEYWORD.match(line)
        terms.append(match.group("keyword") if match else line)
    return terms


def render_header(metadata: TaskMetadata) -> str:
    """Metadata table shown under the task title.

    Parameters
    ----------
    metadata : TaskMetadata
        Task metadata

    Returns
    -------
    str
        A ``tabularx`` block with one column per age group, the answer
        type, the categories as checkboxes in two halves and the keywords.

    """
    age_titles = " & ".join(f"\\textit{{{title}:}}" for title in AGE_CATEGORIES)
    age_values = " & ".join(metadata.age_label(bracket) for bracket in AGE_CATEGORIES.values())

    first_half = len(TASK_CATEGORIES) // 2
    categories_left = "\\textit{Categories:}" + "".join(
        f"\\newline {_category_row(category, metadata)}" for category in TASK_CATEGORIES[:first_half]
    )
    categories_right = "\\newline ".join(
        _category_row(category, metadata) for category in TASK_CATEGORIES[first_half:]
    )

    keywords_caption = "\\textit{Keywords: }"
    terms = keyword_terms(metadata)
    keywords = ", ".join(tex_escape_chars(term) for term in terms) if terms else "—"

    answer_type = _multicolumn(6, f"\\textit{{Answer Type:}} {tex_escape_chars(metadata.answer_type)}")
    keywords_cell = _multicolumn(
        6, f"\\settowidth{{\\hangindent}}{{{keywords_caption}}}{keywords_caption}{keywords}"
    )

    return (
        "\n"
        "\\renewcommand{\\tabularxcolumn}[1]{>{}p{#1}}\n"
        "{\\footnotesize\\begin{tabularx}{\\columnwidth}{ | *{6}{ >{\\centering\\arraybackslash}X | } }\n"
        "  \\hline\n"
        f"  {age_titles} \\\\\n"
        f"  {age_values} \\\\\n"
        "  \\hline\n"
        f"  {answer_type} \\\\\n"
        "  \\hline\n"
        f"  {_multicolumn(3, categories_left)} &  {_multicolumn(3, categories_right)} \\\\\n"
        "  \\hline\n"
        f"  {keywords_cell} \\\\\n"
        "  \\hline\n"
        "\\end{tabularx}}\n"
        "\\renewcommand{\\tabularxcolumn}[1]{>{}m{#1}}\n"
    )


def render_license_body(metadata: TaskMetadata, license_logo: str) -> str:
    """License notice: logo, full copyright text and license URL."""
    task_license = metadata.task_license()
    return (
        "\n"
        " \\renewcommand{\\tabularxcolumn}[1]{>{}m{#1}}\n"
        " {\\begin{tabularx}{\\columnwidth}{ l X }\n"
        f" \\makecell[c]{{\\includegraphics{{{license_logo}}}}} & \\scriptsize {task_license.full_copyright()} "
        f"\\href{{{task_license.url}}}{{{task_license.url}}}\n"
        "\\end{tabularx}}\n"
        "\\renewcommand{\\tabularxcolumn}[1]{>{}m{#1}}\n"
    )
