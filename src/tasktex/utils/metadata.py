#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/tasktex/utils/metadata.py
"""Task metadata read from the front matter of a task file.

The renderers consume :class:`TaskMetadata` read-only. It is built from the
YAML front matter by :meth:`TaskMetadata.from_dict`, which tolerates
missing keys and normalizes the list-valued fields.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from tasktex.constants import AGE_CATEGORIES, LICENSE_URL
from tasktex.utils.patterns import TASK_ID

logger = logging.getLogger(__name__)


def _as_string_list(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, (list, tuple)):
        return [str(item) for item in value if item is not None]
    return [str(value)]


@dataclass(frozen=True)
class TaskLicense:
    """License information shown in footers and in the license section.

    Parameters
    ----------
    year : str
        Copyright year
    url : str
        URL of the license text

    """

    year: str
    url: str = LICENSE_URL

    def short_copyright(self) -> str:
        return f"© {self.year} Bebras, CC BY-SA 4.0"

    def full_copyright(self) -> str:
        return (
            f"© {self.year} Bebras – International Challenge on Informatics and Computational Thinking. "
            "This work is licensed under a Creative Commons Attribution–ShareAlike 4.0 International License. "
            "To view a copy of this license, visit"
        )


@dataclass(frozen=True)
class TaskMetadata:
    """Front matter of a task.

    Parameters
    ----------
    id : str
        Task identifier, e.g. "2023-CH-07"
    title : str
        Task title
    ages : Mapping[str, str]
        Age bracket ("6-8", "8-10", ...) to difficulty label
        ("easy", "medium", "hard" or a dash-prefixed label for "not applicable")
    answer_type : str
        Kind of answer expected (multiple choice, interactive, ...)
    categories : tuple of str
        Task categories the task belongs to
    keywords : tuple of str
        Keyword lines, optionally followed by " - url"
    contributors : tuple of str
        Contributor lines, "Name, [email,] Country [(roles)]"
    support_files : tuple of str
        Support file lines
    license : str
        License label from the front matter

    """

    id: str = ""
    title: str = ""
    ages: Mapping[str, str] = field(default_factory=dict)
    answer_type: str = ""
    categories: tuple[str, ...] = ()
    keywords: tuple[str, ...] = ()
    contributors: tuple[str, ...] = ()
    support_files: tuple[str, ...] = ()
    license: str = ""

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "TaskMetadata":
        """Build metadata from a parsed front matter mapping.

        Unknown keys are ignored. Missing age brackets are filled with "--".
        """
        data = data or {}
        raw_ages = data.get("ages") or {}
        if not isinstance(raw_ages, Mapping):
            logger.warning(f"Ignoring malformed 'ages' entry in front matter: {raw_ages!r}")
            raw_ages = {}
        ages = {bracket: str(raw_ages.get(bracket) or "--") for bracket in AGE_CATEGORIES.values()}
        for bracket, label in raw_ages.items():
            ages.setdefault(str(bracket), str(label))

        return cls(
            id=str(data.get("id") or ""),
            title=str(data.get("title") or ""),
            ages=ages,
            answer_type=str(data.get("answer_type") or ""),
            categories=tuple(_as_string_list(data.get("categories"))),
            keywords=tuple(_as_string_list(data.get("keywords"))),
            contributors=tuple(_as_string_list(data.get("contributors"))),
            support_files=tuple(_as_string_list(data.get("support_files"))),
            license=str(data.get("license") or ""),
        )

    @property
    def year(self) -> str:
        match = TASK_ID.match(self.id)
        return match.group("year") if match else ""

    @property
    def country_code(self) -> Optional[str]:
        match = TASK_ID.match(self.id)
        return match.group("country_code") if match else None

    def age_label(self, bracket: str) -> str:
        """Difficulty label for an age bracket, "--" when absent."""
        return self.ages.get(bracket) or "--"

    def task_license(self) -> TaskLicense:
        return TaskLicense(year=self.year)
