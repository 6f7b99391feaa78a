"""
Parsers sub-package for hcp-to-wiki.

Turns the raw advert CSV into validated records.

- base.py defines the row/record/diagnostic types.
- fields.py holds the per-cell parsers (date, page number, price).
- adverts.py reads the CSV and builds records from its rows.
"""
