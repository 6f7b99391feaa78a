"""
Unit tests for the price-matrix exporter (hcp_to_wiki.export).

Tests CSV and Parquet export, directory creation and error handling
using pytest's tmp_path fixture.
"""

from __future__ import annotations

import pandas as pd
import pytest

from hcp_to_wiki.exceptions import ExportError
from hcp_to_wiki.export import export_price_matrix, price_matrix_frame
from hcp_to_wiki.quarters import to_index

_MIN = to_index(1981, 4)
_MAX = to_index(1982, 2)


def _make_series() -> dict[str, list[int | None]]:
    return {
        "ZX81": [None, 70, 65],
        "VIC-20": [199, None, 180],
    }


class TestPriceMatrixFrame:

    def test_shape_and_labels(self):
        df = price_matrix_frame(_make_series(), _MIN, _MAX)
        assert list(df.index) == ["VIC-20", "ZX81"]
        assert df.index.name == "system"
        assert list(df.columns) == ["1981-Q4", "1982-Q1", "1982-Q2"]

    def test_nullable_integers(self):
        df = price_matrix_frame(_make_series(), _MIN, _MAX)
        assert all(str(dtype) == "Int64" for dtype in df.dtypes)
        assert pd.isna(df.loc["ZX81", "1981-Q4"])
        assert df.loc["ZX81", "1982-Q2"] == 65


class TestExportPriceMatrix:

    def test_csv(self, tmp_path):
        path = export_price_matrix(_make_series(), _MIN, _MAX, tmp_path / "prices.csv")
        loaded = pd.read_csv(path, encoding="utf-8-sig", index_col="system")
        assert list(loaded.index) == ["VIC-20", "ZX81"]
        assert loaded.loc["VIC-20", "1981-Q4"] == 199
        assert pd.isna(loaded.loc["VIC-20", "1982-Q1"])

    def test_parquet_round_trip(self, tmp_path):
        path = export_price_matrix(
            _make_series(), _MIN, _MAX, tmp_path / "prices.parquet", output_format="parquet"
        )
        loaded = pd.read_parquet(path)
        expected = price_matrix_frame(_make_series(), _MIN, _MAX)
        pd.testing.assert_frame_equal(
            loaded, expected, check_index_type=False, check_column_type=False
        )

    def test_creates_parent_directory(self, tmp_path):
        path = export_price_matrix(_make_series(), _MIN, _MAX, tmp_path / "a" / "b" / "prices.csv")
        assert (tmp_path / "a" / "b" / "prices.csv").exists()
        assert path.endswith("prices.csv")

    def test_unsupported_format(self, tmp_path):
        with pytest.raises(ExportError, match="Unsupported"):
            export_price_matrix(_make_series(), _MIN, _MAX, tmp_path / "p.xlsx", output_format="xlsx")

    def test_write_failure_wrapped(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("x")
        with pytest.raises(ExportError, match="Failed to write"):
            export_price_matrix(_make_series(), _MIN, _MAX, blocker / "prices.csv")
