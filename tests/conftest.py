"""
Shared test fixtures for hcp-to-wiki tests.

All tests use synthetic advert data; CSV files are written to
``tmp_path`` so no input files are needed in the repository.
"""

import csv
from pathlib import Path

import pytest


@pytest.fixture()
def write_csv(tmp_path):
    """Factory: write rows (lists of cells) to a UTF-8 CSV and return its path."""

    def _write(rows: list[list[str]], name: str = "adverts.csv") -> Path:
        path = tmp_path / name
        with open(path, "w", encoding="utf-8", newline="") as f:
            csv.writer(f).writerows(rows)
        return path

    return _write


@pytest.fixture()
def zx81_rows() -> list[list[str]]:
    """Header plus two ZX81 adverts in consecutive quarters of 1982."""
    return [
        ["Source", "YYYY-MM", "Page", "System", "Price", "", "Kit", "Board"],
        ["Mag", "1982-03", "p12", "ZX81", "£70", "", "N", ""],
        ["Mag", "1982-06", "p15", "ZX81", "£65", "", "N", ""],
    ]


# ---------------------------------------------------------------------------
# Pytest markers
# ---------------------------------------------------------------------------
def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers",
        "integration: mark test as integration test (runs the full CSV -> wiki conversion)",
    )
