"""
Advert CSV reader and record builder.

Input structure:
  - Zero or more preamble rows (titles, notes) which are ignored.
  - A header row whose first cell is ``Source``.
  - Data rows with eight columns: magazine, ``YYYY-MM``, ``pNNN`` page,
    system name, ``£`` price, an unused column, kit flag, board flag.
  - Blank separator lines anywhere (ignored).

``read_advert_rows()`` checks the file against the strict CSV grammar,
loads it into memory with pandas and binds each row to an
``AdvertRow``.  ``build_records()`` then validates the rows and returns
the surviving ``AdvertRecord``s, the quarter-index range they span, and one
``RowDiagnostic`` per failing field.
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Sequence

import pandas as pd

from hcp_to_wiki.exceptions import FieldParseError, InputReadError
from hcp_to_wiki.parsers.base import AdvertRecord, AdvertRow, RowDiagnostic
from hcp_to_wiki.parsers.fields import parse_page_number, parse_price, parse_year_month

logger = logging.getLogger(__name__)

ADVERT_COLUMN_COUNT = len(AdvertRow._fields)


@dataclass
class BuildResult:
    """Output of the record builder.

    Attributes:
        records: Valid adverts, in input order.
        min_date: Lowest quarter index among ``records`` (``None`` if empty).
        max_date: Highest quarter index among ``records`` (``None`` if empty).
        diagnostics: One entry per failing field of a data row.
        header_found: Whether the header row was seen at all.
        rows_read: Data rows after the header (blank rows included).
        rows_blank: Data rows skipped because the system cell was empty.
        rows_rejected: Data rows discarded for a bad date or price.
    """

    records: list[AdvertRecord] = field(default_factory=list)
    min_date: int | None = None
    max_date: int | None = None
    diagnostics: list[RowDiagnostic] = field(default_factory=list)
    header_found: bool = False
    rows_read: int = 0
    rows_blank: int = 0
    rows_rejected: int = 0

    def _track(self, index: int) -> None:
        if self.min_date is None or index < self.min_date:
            self.min_date = index
        if self.max_date is None or index > self.max_date:
            self.max_date = index


# Scanner states for check_csv_structure()
_CELL_START, _UNQUOTED, _QUOTED, _QUOTE_IN_QUOTED = range(4)


def _close_record(cells: int, expected: int | None, line: int) -> int:
    if expected is not None and cells != expected:
        raise ValueError(f"line {line} has {cells} cells, expected {expected}")
    return cells


def check_csv_structure(text: str) -> None:
    """Reject CSV text that a strict reader would refuse.

    pandas pads short rows and keeps a stray ``"`` inside an unquoted
    cell.  Here both are errors, as is a quoted cell whose closing quote
    is followed by anything but a comma or end of line, or which is never
    closed.  Blank lines are skipped.  Every other record must have as
    many cells as the first.

    Raises:
        ValueError: Naming the offending line.
    """
    expected: int | None = None
    line = record_line = 1
    cells = 0
    started = False
    state = _CELL_START

    for char in text:
        if state == _QUOTED:
            if char == '"':
                state = _QUOTE_IN_QUOTED
            elif char == "\n":
                line += 1
            continue
        if state == _QUOTE_IN_QUOTED:
            if char == '"':
                state = _QUOTED
                continue
            if char not in ",\n":
                raise ValueError(f'line {line}: extraneous or missing \'"\' in quoted cell')
            state = _UNQUOTED

        if char == ",":
            cells += 1
            started = True
            state = _CELL_START
        elif char == "\n":
            if started:
                expected = _close_record(cells + 1, expected, record_line)
            line += 1
            record_line = line
            cells = 0
            started = False
            state = _CELL_START
        elif char == '"':
            if state != _CELL_START:
                raise ValueError(f'line {line}: bare \'"\' in unquoted cell')
            started = True
            state = _QUOTED
        else:
            started = True
            state = _UNQUOTED

    if state == _QUOTED:
        raise ValueError(f"line {record_line}: quoted cell is never closed")
    if started:
        _close_record(cells + 1, expected, record_line)


def read_advert_rows(path: str | Path, encoding: str = "utf-8-sig") -> list[AdvertRow]:
    """Read the whole advert CSV into a list of ``AdvertRow``.

    Every cell is read as a string; nothing is converted to NaN.  Blank
    lines are kept so list positions line up with file line numbers.
    The text is checked with ``check_csv_structure()`` before pandas
    parses it, so every row has exactly as many cells as the first.

    Raises:
        InputReadError: If the file cannot be opened or decoded, is empty,
            is malformed CSV, or has fewer than eight columns.
    """
    path = Path(path)
    logger.info("Reading advert CSV: %s", path)
    try:
        text = path.read_text(encoding=encoding)
    except OSError as exc:
        raise InputReadError(f"Cannot open '{path}': {exc}") from exc
    except (UnicodeDecodeError, LookupError) as exc:
        raise InputReadError(f"Cannot read CSV data from '{path}': {exc}") from exc

    try:
        check_csv_structure(text)
    except ValueError as exc:
        raise InputReadError(f"Cannot read CSV data from '{path}': {exc}") from exc

    try:
        df = pd.read_csv(
            io.StringIO(text),
            header=None,
            dtype=str,
            keep_default_na=False,
            na_filter=False,
            skip_blank_lines=False,
        )
    except pd.errors.EmptyDataError as exc:
        raise InputReadError(f"Cannot read CSV data from '{path}': file is empty") from exc
    except pd.errors.ParserError as exc:
        raise InputReadError(f"Cannot read CSV data from '{path}': {exc}") from exc

    if len(df.columns) < ADVERT_COLUMN_COUNT:
        raise InputReadError(
            f"Expected {ADVERT_COLUMN_COUNT} columns in '{path}', "
            f"found {len(df.columns)}"
        )

    df = df.fillna("")
    rows = [AdvertRow.from_cells(cells) for cells in df.itertuples(index=False, name=None)]
    logger.info("Read %d rows x %d columns", len(rows), len(df.columns))
    return rows


def build_records(
    rows: Iterable[Sequence[str]],
    header_marker: str = "Source",
) -> BuildResult:
    """Validate raw rows into advert records.

    Steps for each row, numbered from 1:

    1. Until a row whose magazine cell equals *header_marker* is seen,
       skip.  The header row itself is skipped too.
    2. Skip rows with an empty system cell.
    3. Parse date, page and price.  A bad date or price discards the row;
       a bad page only records a diagnostic and leaves ``page=None``.

    Args:
        rows: Raw rows, either ``AdvertRow`` or plain sequences of cells.
        header_marker: First-column text identifying the header row.

    Returns:
        ``BuildResult`` with the records, their quarter-index range and
        the diagnostics.
    """
    result = BuildResult()

    for row_number, cells in enumerate(rows, start=1):
        row = AdvertRow.from_cells(cells)

        if not result.header_found:
            if row.magazine == header_marker:
                result.header_found = True
                logger.debug("Header row found at line %d", row_number)
            continue

        result.rows_read += 1
        if not row.system:
            result.rows_blank += 1
            continue

        failures: list[tuple[str, str, FieldParseError, bool]] = []

        year = month = None
        try:
            year, month = parse_year_month(row.year_month)
        except FieldParseError as exc:
            failures.append(("YYYY-MM", row.year_month, exc, True))

        page = None
        try:
            page = parse_page_number(row.page)
        except FieldParseError as exc:
            failures.append(("page number", row.page, exc, False))

        price = None
        try:
            price = parse_price(row.price)
        except FieldParseError as exc:
            failures.append(("price", row.price, exc, True))

        rejected = any(discards for *_, discards in failures)
        for field_name, text, exc, _ in failures:
            result.diagnostics.append(
                RowDiagnostic(
                    row=row_number,
                    field=field_name,
                    text=text,
                    error=exc,
                    cells=tuple(row),
                    rejected=rejected,
                )
            )

        if rejected:
            result.rows_rejected += 1
            continue

        record = AdvertRecord(
            source_row=row_number,
            magazine=row.magazine,
            year=year,
            month=month,
            page=page,
            system=row.system,
            price=price,
            kit=row.kit,
            board=row.board,
        )
        result.records.append(record)
        result._track(record.quarter_index)

    if not result.header_found:
        logger.warning("No header row with '%s' in the first column was found", header_marker)

    logger.info(
        "Built %d records from %d data rows (%d blank, %d rejected)",
        len(result.records),
        result.rows_read,
        result.rows_blank,
        result.rows_rejected,
    )
    return result
