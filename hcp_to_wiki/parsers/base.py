"""
Row and record types shared by the advert parsers.

- ``AdvertRow``: one raw CSV row with its eight columns bound to names.
  Binding happens once, when the row is decoded, so downstream code never
  indexes cells by position.
- ``AdvertRecord``: a validated advert, produced by the record builder and
  consumed by the aggregator.
- ``RowDiagnostic``: one failing field of one row, kept for reporting.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple, Sequence

from hcp_to_wiki.exceptions import FieldParseError
from hcp_to_wiki.quarters import index_for_month, quarter_of_month


class AdvertRow(NamedTuple):
    """The eight columns of the advert CSV, in file order."""

    magazine: str
    year_month: str
    page: str
    system: str
    price: str
    blank: str
    kit: str
    board: str

    @classmethod
    def from_cells(cls, cells: Sequence[str]) -> AdvertRow:
        """Bind a sequence of cell strings to named fields.

        Short rows are padded with empty strings; cells past the eighth
        are ignored.
        """
        width = len(cls._fields)
        padded = list(cells[:width]) + [""] * (width - len(cells))
        return cls(*padded)


@dataclass(frozen=True)
class AdvertRecord:
    """One validated observation of a system's advertised price.

    Attributes:
        source_row: 1-based row number in the input CSV.
        magazine: Source publication name.
        year: Issue year (1945-2099).
        month: Issue month (1-12).
        page: Page number (0-500), or ``None`` if the page text was unusable.
        system: Computer system name.
        price: Price in whole pounds (0-100,000).
        kit: Kit flag, passed through unvalidated.
        board: Board flag, passed through unvalidated.
    """

    source_row: int
    magazine: str
    year: int
    month: int
    page: int | None
    system: str
    price: int
    kit: str = ""
    board: str = ""

    @property
    def quarter(self) -> int:
        return quarter_of_month(self.month)

    @property
    def quarter_index(self) -> int:
        return index_for_month(self.year, self.month)


@dataclass(frozen=True)
class RowDiagnostic:
    """A field that failed to parse on a given input row.

    Attributes:
        row: 1-based row number in the input CSV.
        field: Which field failed (``"YYYY-MM"``, ``"page number"``, ``"price"``).
        text: The offending cell text.
        error: The parse error raised for the cell.
        cells: The full row, for context.
        rejected: ``True`` if the failure caused the row to be discarded.
    """

    row: int
    field: str
    text: str
    error: FieldParseError
    cells: tuple[str, ...]
    rejected: bool

    def format(self) -> str:
        """One-line report, e.g. ``Line 7: Bad price [$50] (...) in [...]``."""
        return (
            f"Line {self.row}: Bad {self.field} [{self.text}] "
            f"({self.error}) in [{' '.join(self.cells)}]"
        )
