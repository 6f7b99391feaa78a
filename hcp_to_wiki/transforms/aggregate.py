"""
Price aggregation for hcp-to-wiki.

Builds, for each system, a dense series of the cheapest advertised price
per quarter.  Every series covers the same range, ``min_date`` to
``max_date`` over ALL records, so position ``i`` means the same quarter
for every system.

A slot holds ``None`` until a positive price is seen for that quarter;
prices of zero or less carry no information and never fill one.  A later
price replaces the stored one only when strictly cheaper, so the first
of several equal prices is the one kept.
"""

from __future__ import annotations

import logging
from typing import Iterable

from hcp_to_wiki.parsers.base import AdvertRecord

logger = logging.getLogger(__name__)

PriceSeries = list[int | None]


def build_price_series(
    records: Iterable[AdvertRecord],
    min_date: int,
    max_date: int,
) -> dict[str, PriceSeries]:
    """Build a ``system -> PriceSeries`` mapping.

    Args:
        records: Validated adverts (any order).
        min_date: Lowest quarter index covered by the series.
        max_date: Highest quarter index covered by the series.

    Returns:
        Dict mapping system name to a list of length
        ``max_date - min_date + 1``.

    Raises:
        ValueError: If the range is empty or a record falls outside it.
    """
    if max_date < min_date:
        raise ValueError(f"Empty quarter range: {min_date}..{max_date}")
    length = max_date - min_date + 1

    series: dict[str, PriceSeries] = {}
    # Row that supplied each stored price, for the debug log
    source_rows: dict[tuple[str, int], int] = {}

    for record in records:
        index = record.quarter_index
        if not min_date <= index <= max_date:
            raise ValueError(
                f"Row {record.source_row} ({record.year}-{record.month:02d}) "
                f"is outside the quarter range {min_date}..{max_date}"
            )
        pos = index - min_date
        prices = series.setdefault(record.system, [None] * length)
        if record.price <= 0:
            logger.debug(
                "%d/%d %s has no positive price (%d); row %d ignored",
                record.year, record.month, record.system, record.price, record.source_row,
            )
            continue
        stored = prices[pos]

        if stored is None:
            logger.debug(
                "%d/%d %s found for first time at %d; row %d",
                record.year, record.month, record.system, record.price, record.source_row,
            )
        elif record.price < stored:
            logger.debug(
                "%d/%d %s found as cheaper (%d against %d); row %d replaces row %d",
                record.year, record.month, record.system, record.price, stored,
                record.source_row, source_rows[(record.system, pos)],
            )
        else:
            logger.debug(
                "%d/%d %s found as pricier (%d against %d); row %d leaves row %d",
                record.year, record.month, record.system, record.price, stored,
                record.source_row, source_rows[(record.system, pos)],
            )
            continue

        prices[pos] = record.price
        source_rows[(record.system, pos)] = record.source_row

    logger.info("Aggregated prices for %d systems over %d quarters", len(series), length)
    return series


def merge_min(first: PriceSeries, second: PriceSeries) -> PriceSeries:
    """Slot-wise minimum of two equal-length series, ignoring ``None``."""
    if len(first) != len(second):
        raise ValueError(f"Series lengths differ: {len(first)} != {len(second)}")
    merged: PriceSeries = []
    for a, b in zip(first, second):
        if a is None:
            merged.append(b)
        elif b is None:
            merged.append(a)
        else:
            merged.append(min(a, b))
    return merged
