"""
Field parsers for advert CSV cells.

Each parser turns one raw cell into a typed value or raises a
``FieldParseError``:

- ``FormatError`` when the cell is structurally wrong (separator,
  length, prefix, currency sign).
- ``RangeError`` when the value parsed but lies outside its bounds.

Checks run in a fixed order and the first failing check raises; nothing
is accumulated.  Digits are ASCII ``0-9`` only, so signs, whitespace and
underscores (all of which ``int()`` would accept) are rejected.
"""

from __future__ import annotations

import re

from hcp_to_wiki.exceptions import FormatError, RangeError

MIN_YEAR = 1945
MAX_YEAR = 2099
MAX_PAGE_NUMBER = 500
MAX_PRICE = 100_000
CURRENCY_SIGN = "£"

_DIGITS_RE = re.compile(r"[0-9]+")


def _is_digits(text: str) -> bool:
    return _DIGITS_RE.fullmatch(text) is not None


def parse_year_month(text: str) -> tuple[int, int]:
    """Parse a ``YYYY-MM`` cell into ``(year, month)``.

    Raises:
        FormatError: Separator missing or misplaced, length not 7, or
            non-digit characters in the year/month positions.
        RangeError: Year outside 1945-2099 or month outside 1-12.
    """
    if len(text) < 5 or text[4] != "-":
        raise FormatError(f"bad YYYY-MM separator from [{text}]")
    if len(text) != 7:
        raise FormatError(f"bad YYYY-MM: length invalid: [{text}]")

    year_text, month_text = text[:4], text[5:]
    if not _is_digits(year_text):
        raise FormatError(f"bad year digits [{year_text}]")
    if not _is_digits(month_text):
        raise FormatError(f"bad month digits [{month_text}]")

    year = int(year_text)
    if not MIN_YEAR <= year <= MAX_YEAR:
        raise RangeError(f"bad year [{year}] outside range {MIN_YEAR}-{MAX_YEAR}")
    month = int(month_text)
    if not 1 <= month <= 12:
        raise RangeError(f"bad month [{month}]")
    return year, month


def parse_page_number(text: str) -> int:
    """Parse a ``pNNN`` page cell into an integer page number.

    Raises:
        FormatError: Shorter than two characters or missing the ``p`` prefix.
        RangeError: Remainder is not a number, or exceeds 500.
    """
    if len(text) < 2:
        raise FormatError(f"bad page number text [{text}]")
    if text[0] != "p":
        raise FormatError(f"bad page number format [{text}]")
    digits = text[1:]
    if not _is_digits(digits):
        raise RangeError(f"bad page number data [{text}]")
    page = int(digits)
    if page > MAX_PAGE_NUMBER:
        raise RangeError(f"bad page number value [{page}]")
    return page


def parse_price(text: str) -> int:
    """Parse a ``£N,NNN[.cc]`` price cell into whole pounds.

    Anything after the first ``.`` is discarded and grouping commas are
    removed, so ``"£1,234.50"`` gives ``1234``.

    Raises:
        FormatError: The first character is not ``£`` (or the cell is empty).
        RangeError: The amount does not parse or exceeds £100,000.
    """
    if not text or text[0] != CURRENCY_SIGN:
        currency = text[:1]
        raise FormatError(f"bad price currency [{currency}] from [{text}]")
    amount = text[1:].split(".", 1)[0].replace(",", "")
    if not _is_digits(amount):
        raise RangeError(f"bad price data [{amount}]")
    price = int(amount)
    if price > MAX_PRICE:
        raise RangeError(f"unlikely price data [{text}] (greater than {MAX_PRICE})")
    return price
