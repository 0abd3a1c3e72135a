#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/tasktex/utils/numbers.py
"""Lenient number parsing and formatting for node attributes."""

from __future__ import annotations

import math
import re
from typing import Optional

_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")


def leading_int(value: Optional[str]) -> Optional[int]:
    """Parse the integer at the start of ``value``.

    Trailing garbage is ignored, so ``"3px"`` gives 3 and ``"0.5\\linewidth"``
    gives 0. Returns None when ``value`` does not start with digits.

    Examples
    --------
        >>> leading_int("12px"), leading_int(" 2"), leading_int("px")
        (12, 2, None)

    """
    if value is None:
        return None
    match = _LEADING_INT_RE.match(value)
    return int(match.group(1)) if match else None


def round_tenth(x: float) -> float:
    """Round to one decimal, halves rounding up (2.25 -> 2.3)."""
    return math.floor(x * 10 + 0.5) / 10


def format_number(x: float) -> str:
    """Format a number without a trailing ``.0`` for whole values.

    Examples
    --------
        >>> format_number(90.0), format_number(0.5)
        ('90', '0.5')

    """
    if x == int(x):
        return str(int(x))
    return repr(x)
