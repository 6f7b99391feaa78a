"""
Custom exception hierarchy for hcp-to-wiki.

Two families of errors exist:

- Row-level field errors (``FormatError``, ``RangeError``).  These are
  raised by the field parsers and recovered by the record builder, which
  discards (or, for page numbers, keeps) the offending row and emits a
  diagnostic.
- Run-level errors (``InputReadError``, ``ConfigValidationError``,
  ``ExportError``).  These abort the whole run; the CLI turns them into a
  non-zero exit status.
"""


class HcpToWikiError(Exception):
    """Base exception for all hcp-to-wiki errors."""


class FieldParseError(HcpToWikiError):
    """Base class for errors raised while parsing a single CSV field."""


class FormatError(FieldParseError):
    """Raised when a field is structurally malformed.

    For example a missing ``-`` in ``YYYY-MM``, a page number without the
    ``p`` prefix, or a price that does not start with ``£``.
    """


class RangeError(FieldParseError):
    """Raised when a field has the right shape but an unacceptable value.

    For example a year before 1945, month 13, page 900, or a price above
    £100,000.
    """


class InputReadError(HcpToWikiError):
    """Raised when the input CSV cannot be opened or parsed as CSV.

    Covers missing/unreadable files, undecodable bytes, malformed quoting,
    inconsistent column counts and files with too few columns.
    """


class ConfigValidationError(HcpToWikiError):
    """Raised when an hcpconfig.yaml file is empty or fails validation."""


class ExportError(HcpToWikiError):
    """Raised when the price matrix cannot be written to disk."""
