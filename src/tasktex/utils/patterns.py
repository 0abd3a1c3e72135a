#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/tasktex/utils/patterns.py
"""Regular expressions for the line formats used in task files."""

from __future__ import annotations

import re

# Task identifier, e.g. "2023-CH-07b"
TASK_ID = re.compile(r"^(?P<year>\d{4})-(?P<country_code>[A-Z]{2})-(?P<number>\d{2})(?P<variant>[a-z])?$")

# Contributor line: "Name, [email,] Country [(roles)]"
CONTRIBUTOR = re.compile(
    r"^(?P<name>[^,(]+?)\s*,\s*"
    r"(?:(?P<email>[^,\s]+@[^,\s]+)\s*,\s*)?"
    r"(?P<country>[^,(]+?)\s*"
    r"(?:\((?P<roles>[^)]*)\))?\s*$"
)

# Keyword line: "keyword [- url[, url...]]"
KEYWORD = re.compile(r"^(?P<keyword>.+?)(?:\s+-\s+(?P<urls>https?://\S+(?:\s*,\s*https?://\S+)*))?\s*$")

# Image directive at the end of an image title: "(120px left)", "(50%)", "(right)".
# Widths need a unit, so a title such as "Figure (2)" is left alone.
IMAGE_OPTIONS = re.compile(
    r"\(\s*"
    r"(?:(?P<width_abs>\d+(?:\.\d+)?)px|(?P<width_rel>\d+(?:\.\d+)?%))?"
    r"\s*(?P<placement>left|right)?"
    r"\s*\)\s*$"
)

# Language code embedded in a task file name, e.g. "2023-CH-07-eng.task.md"
LANGUAGE_IN_PATH = re.compile(r"-(?P<lang>[a-z]{3})\.task\.md$")

# Fenced container line, e.g. "::: center" or a bare closing ":::"
CONTAINER_FENCE = re.compile(r"^:{3,}\s*(?P<name>[A-Za-z]+)?\s*$")

# Inline HTML line break, the only way to break a line inside a table cell
HTML_LINE_BREAK = re.compile(r"^<br\s*/?>$", re.IGNORECASE)
