"""
Wiki table renderer for hcp-to-wiki.

The observed date range is cut into five-year blocks aligned to
multiples of five (1975-1979, 1980-1984, ...).  Each block becomes one
MediaWiki table::

    == 1980 - 1984 ==

    {| class="wikitable"
    |-
    !  || colspan="4" | 1980 || ... || colspan="4" | 1984
    |-
     ! style="width: 10%;" | System
     ! JAN-MAR || APR-JUN || JUL-SEP || OCT-DEC || ... (x5)
    |-
    | ZX81
         | <Q1 1980> || <Q2 1980> || <Q3 1980> || <Q4 1980>
         | ...
    |}

Only systems with at least one price inside the block get a row.  A cell
shows ``£<price>`` for a positive price and an ``&mdash;`` placeholder
otherwise.
"""

from __future__ import annotations

import logging
from typing import Iterable, Mapping

from hcp_to_wiki.parsers.base import AdvertRecord
from hcp_to_wiki.quarters import QUARTERS_PER_YEAR, from_index, to_index
from hcp_to_wiki.transforms.aggregate import PriceSeries

logger = logging.getLogger(__name__)

BLOCK_YEARS = 5
QUARTER_NAMES = ("JAN-MAR", "APR-JUN", "JUL-SEP", "OCT-DEC")

_EMPTY_CELL = 'style="text-align: center;" | &mdash; '
_PRICE_CELL = 'style="text-align: right;"  | £{price:<4d}   '


def block_start_years(min_date: int, max_date: int) -> list[int]:
    """First year of every five-year block touching ``min_date..max_date``."""
    min_year, _ = from_index(min_date)
    max_year, _ = from_index(max_date)
    start_year = (min_year // BLOCK_YEARS) * BLOCK_YEARS
    return list(range(start_year, max_year + 1, BLOCK_YEARS))


def price_at(prices: PriceSeries, index: int, min_date: int, max_date: int) -> int | None:
    """Stored price for quarter *index*, or ``None`` outside the range."""
    if index < min_date or index > max_date:
        return None
    return prices[index - min_date]


def _is_price(value: int | None) -> bool:
    return value is not None and value > 0


def has_price_data(
    prices: PriceSeries,
    start_year: int,
    end_year: int,
    min_date: int,
    max_date: int,
) -> bool:
    """Whether *prices* holds any price from Q1 *start_year* to Q4 *end_year*."""
    low = max(to_index(start_year, 1), min_date)
    high = min(to_index(end_year, QUARTERS_PER_YEAR), max_date)
    return any(_is_price(prices[i - min_date]) for i in range(low, high + 1))


def _format_cell(price: int | None) -> str:
    if not _is_price(price):
        return _EMPTY_CELL
    return _PRICE_CELL.format(price=price)


def render_block(
    series: Mapping[str, PriceSeries],
    group_year: int,
    min_date: int,
    max_date: int,
) -> list[str]:
    """Render one five-year block as a list of lines."""
    years = range(group_year, group_year + BLOCK_YEARS)
    lines = [
        f"== {group_year} - {group_year + BLOCK_YEARS - 1} ==",
        "",
        '{| class="wikitable"',
        "|-",
        "!  || " + " || ".join(f'colspan="4" | {year}' for year in years),
        "|-",
        ' ! style="width: 10%;" | System ',
        " ! " + " || ".join(QUARTER_NAMES * BLOCK_YEARS),
    ]

    for name in sorted(series):
        prices = series[name]
        if not has_price_data(prices, group_year, years[-1], min_date, max_date):
            continue
        lines.append("|-")
        lines.append(f"| {name}")
        for year in years:
            cells = [
                _format_cell(price_at(prices, to_index(year, quarter), min_date, max_date))
                for quarter in range(1, QUARTERS_PER_YEAR + 1)
            ]
            lines.append("     | " + "|| ".join(cells))

    lines.append("|}")
    lines.append("")
    return lines


def render_wiki(
    series: Mapping[str, PriceSeries],
    min_date: int | None,
    max_date: int | None,
) -> str:
    """Render all five-year blocks as wiki markup.

    Returns an empty string when there is no date range (no records).
    """
    if min_date is None or max_date is None:
        return ""
    starts = block_start_years(min_date, max_date)
    logger.info("Start Year: %d (%d block(s))", starts[0], len(starts))
    lines: list[str] = []
    for group_year in starts:
        lines.extend(render_block(series, group_year, min_date, max_date))
    return "\n".join(lines) + "\n"


def render_debug_dump(
    records: Iterable[AdvertRecord],
    series: Mapping[str, PriceSeries],
    limit: int = 10,
) -> str:
    """Plain-text dump of the first *limit* records and every series.

    Series lines are ``<name padded/truncated to 40>: [p, p, ...]`` with
    ``-`` for empty quarters.
    """
    lines: list[str] = []
    for count, record in enumerate(records):
        if count >= limit:
            break
        page = "?" if record.page is None else record.page
        lines.append(
            f"Row {record.source_row}: {record.magazine} {record.year}-{record.month:02d} "
            f"p{page} {record.system} £{record.price} kit={record.kit} board={record.board}"
        )
    for name in sorted(series):
        values = " ".join("-" if p is None else str(p) for p in series[name])
        lines.append(f"{name[:40]:<40}: [{values}]")
    return "\n".join(lines) + "\n" if lines else ""
