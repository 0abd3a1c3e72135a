#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/utils/test_numbers.py
"""Unit tests for lenient number parsing and formatting."""

import pytest

from tasktex.utils.numbers import format_number, leading_int, round_tenth


@pytest.mark.unit
class TestLeadingInt:
    """Tests for leading_int()."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("3", 3),
            ("12px", 12),
            ("  7 rows", 7),
            ("-2", -2),
            ("+4", 4),
            ("0.5", 0),
            ("px", None),
            ("", None),
            (None, None),
        ],
    )
    def test_values(self, value, expected):
        assert leading_int(value) == expected


@pytest.mark.unit
class TestRounding:
    """Tests for round_tenth() and format_number()."""

    @pytest.mark.parametrize("value,expected", [(90.0, 90.0), (1.6875, 1.7), (0.25, 0.3), (0.24, 0.2)])
    def test_round_tenth(self, value, expected):
        assert round_tenth(value) == pytest.approx(expected)

    @pytest.mark.parametrize("value,expected", [(90.0, "90"), (0.5, "0.5"), (1.7, "1.7"), (0.0, "0"), (112.5, "112.5")])
    def test_format_number(self, value, expected):
        assert format_number(value) == expected
