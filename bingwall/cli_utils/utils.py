"""
bingwall CLI Utilities

Helpers for interpreting the raw command line. bingwall accepts a single optional
positional value: how many days back from today's picture to go.
"""

import re
from collections.abc import Sequence

MIN_DAYS_BACK = 0
MAX_DAYS_BACK = 7  # the archive only serves the last eight pictures

# optional sign and ASCII digits only; int() alone would also take "1_0" or non-ASCII digits
INTEGER_PATTERN = re.compile(r"\s*[+-]?[0-9]+\s*")


def clamp_days_back(days: int, upper: int = MAX_DAYS_BACK) -> int:
    """Clamp days into the inclusive range [0, upper]."""

    return max(MIN_DAYS_BACK, min(days, upper))


def parse_days_back(args: Sequence[str], upper: int = MAX_DAYS_BACK) -> int:
    """
    Read the days-back offset from the first command line argument. Anything that is
    missing or not a plain decimal integer silently falls back to 0 (today's picture).
    Remaining arguments are ignored.

    Integers of any size are clamped, so "99999999999" means the oldest picture.
    """

    if not args or not INTEGER_PATTERN.fullmatch(str(args[0])):
        return MIN_DAYS_BACK

    return clamp_days_back(int(args[0]), upper=upper)
