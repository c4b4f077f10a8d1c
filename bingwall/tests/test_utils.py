"""
Tests for cli_utils/utils.py

The days-back argument is clamped into [0, 7] and anything that does not parse as an
integer falls back to today (0) without raising.
"""

import pytest

# following entities are tested in this module:
from bingwall.cli_utils.utils import clamp_days_back
from bingwall.cli_utils.utils import parse_days_back


@pytest.mark.parametrize("days", range(-20, 21))
def test_clamp_days_back_range(days):
    assert clamp_days_back(days) == max(0, min(days, 7))


@pytest.mark.parametrize(
    "args, expected",
    [
        ((), 0),
        (("0",), 0),
        (("3",), 3),
        (("7",), 7),
        (("99",), 7),
        (("-4",), 0),
        ((" 5 ",), 5),
        (("+4",), 4),
        (("99999999999",), 7),
        (("1_0",), 0),
        (("\u0663",), 0),
        (("0x3",), 0),
        (("abc",), 0),
        (("",), 0),
        (("2.5",), 0),
        (("3", "extra", "--words"), 3),
        (("abc", "3"), 0),
    ],
)
def test_parse_days_back(args, expected):
    assert parse_days_back(args) == expected


def test_parse_days_back_custom_upper():
    assert parse_days_back(["12"], upper=10) == 10
