"""
Quarter index arithmetic for hcp-to-wiki.

A quarter index is a dense integer encoding of a (year, calendar quarter)
pair::

    index = year * 4 + (quarter - 1)

Months 1-3 are quarter 1, months 4-6 quarter 2, and so on.  Every place
that positions a price in a series, or compares dates, goes through these
functions so the aggregator and the renderer agree on array offsets.
"""

from __future__ import annotations

QUARTERS_PER_YEAR = 4


def quarter_of_month(month: int) -> int:
    """Return the calendar quarter (1-4) containing *month* (1-12)."""
    return (month - 1) // 3 + 1


def to_index(year: int, quarter: int) -> int:
    """Combine a year and a quarter (1-4) into a quarter index."""
    return year * QUARTERS_PER_YEAR + (quarter - 1)


def index_for_month(year: int, month: int) -> int:
    """Quarter index of the quarter containing *year*-*month*."""
    return to_index(year, quarter_of_month(month))


def from_index(index: int) -> tuple[int, int]:
    """Split a quarter index back into ``(year, quarter)``."""
    year, offset = divmod(index, QUARTERS_PER_YEAR)
    return year, offset + 1


def quarter_label(index: int) -> str:
    """Human-readable label for a quarter index, e.g. ``"1982-Q2"``."""
    year, quarter = from_index(index)
    return f"{year}-Q{quarter}"
