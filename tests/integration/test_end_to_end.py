"""
Integration tests: advert CSV -> wiki text through the public API.

Writes synthetic CSV files to tmp_path and runs ``hcp_to_wiki.convert()``
with the built-in configuration.
"""

from __future__ import annotations

import pytest

import hcp_to_wiki
from hcp_to_wiki.config import HcpConfig, OutputConfig, load_default_config
from hcp_to_wiki.exceptions import InputReadError
from hcp_to_wiki.quarters import to_index

_HEADER = ["Source", "YYYY-MM", "Page", "System", "Price", "", "Kit", "Board"]
_DASH = 'style="text-align: center;" | &mdash; '


@pytest.mark.integration
class TestZx81Example:
    """Two ZX81 adverts in Q1 and Q2 1982."""

    def test_price_series(self, write_csv, zx81_rows):
        result = hcp_to_wiki.convert(write_csv(zx81_rows))
        pipeline = result.pipeline

        assert list(pipeline.series) == ["ZX81"]
        prices = pipeline.series["ZX81"]
        assert prices[to_index(1982, 1) - pipeline.min_date] == 70
        assert prices[to_index(1982, 2) - pipeline.min_date] == 65

    def test_rendered_block(self, write_csv, zx81_rows):
        text = hcp_to_wiki.convert(write_csv(zx81_rows)).wiki_text
        lines = text.splitlines()

        assert lines[0] == "== 1980 - 1984 =="
        assert text.count('{| class="wikitable"') == 1
        start = lines.index("| ZX81")
        # Q1 1980 is a dash
        assert lines[start + 1].startswith("     | " + _DASH)
        # 1982 row: £70, £65, then dashes
        assert "£70 " in lines[start + 3]
        assert "£65 " in lines[start + 3]
        assert lines[start + 3].index("£70") < lines[start + 3].index("£65")
        assert text.rstrip().endswith("|}")


@pytest.mark.integration
class TestRealisticFile:
    """A file with a preamble, blank lines, bad rows and rule targets."""

    def _rows(self) -> list[list[str]]:
        return [
            ["Home computer prices from magazine adverts", "", "", "", "", "", "", ""],
            ["", "", "", "", "", "", "", ""],
            _HEADER,
            ["Practical Computing", "1978-11", "p44", "Science of Cambridge MK14", "£39.95", "", "Y", "Y"],
            ["Practical Computing", "1978-11", "p45", "Nascom 1", "£197.50", "", "Y", "Y"],
            ["Personal Computer World", "1979-02", "p3", "Apple II", "£1,195", "", "N", "N"],
            [],
            ["Personal Computer World", "1979-05", "p9", "Exidy Sorcerer", "£859", "", "N", "N"],
            ["Your Computer", "1981-04", "p12", "ZX81", "£69.95", "", "N", "N"],
            ["Your Computer", "1981-05", "p88", "ZX81", "£49.95", "", "Y", "N"],
            ["Your Computer", "1981-06", "pxx", "ZX81", "£59.95", "", "N", "N"],
            ["Your Computer", "1981-13", "p12", "VIC-20", "£199", "", "N", "N"],
            ["Computing Today", "1985-01", "p7", "Amstrad CPC464", "$249", "", "N", "N"],
            ["Computing Today", "1985-02", "p7", "Amstrad CPC464", "£239", "", "N", "N"],
        ]

    def test_series(self, write_csv):
        result = hcp_to_wiki.convert(write_csv(self._rows()))
        pipeline = result.pipeline

        assert list(pipeline.series) == ["Amstrad CPC464", "MK14", "Nascom 1", "ZX81"]
        assert pipeline.min_date == to_index(1978, 4)
        assert pipeline.max_date == to_index(1985, 1)
        assert pipeline.series["ZX81"][to_index(1981, 2) - pipeline.min_date] == 49

    def test_diagnostics(self, write_csv):
        result = hcp_to_wiki.convert(write_csv(self._rows()))
        summary = [(d.row, d.field, d.rejected) for d in result.pipeline.diagnostics]
        assert summary == [
            (11, "page number", False),
            (12, "YYYY-MM", True),
            (13, "price", True),
        ]
        assert result.pipeline.build.rows_blank == 1
        assert result.pipeline.build.rows_rejected == 2

    def test_wiki_blocks(self, write_csv):
        text = hcp_to_wiki.convert(write_csv(self._rows())).wiki_text
        blocks = text.split("== ")[1:]
        assert [b.splitlines()[0] for b in blocks] == [
            "1975 - 1979 ==",
            "1980 - 1984 ==",
            "1985 - 1989 ==",
        ]
        assert "| MK14" in blocks[0] and "| Nascom 1" in blocks[0]
        assert "| ZX81" not in blocks[0]
        assert "| ZX81" in blocks[1]
        assert "| MK14" not in blocks[1]
        assert "| Amstrad CPC464" in blocks[2]
        assert "£239 " in blocks[2]
        for name in ("Apple II", "Exidy Sorcerer", "Science of Cambridge MK14", "VIC-20"):
            assert name not in text

    def test_export_alongside(self, write_csv, tmp_path):
        config = load_default_config()
        config = config.model_copy(
            update={"output": OutputConfig(matrix_path=str(tmp_path / "prices.csv"))}
        )
        result = hcp_to_wiki.convert(write_csv(self._rows()), config)
        assert result.written == (str(tmp_path / "prices.csv"),)


@pytest.mark.integration
class TestFailures:

    def test_missing_file(self, tmp_path):
        with pytest.raises(InputReadError):
            hcp_to_wiki.convert(tmp_path / "missing.csv", HcpConfig())

    def test_header_only(self, write_csv):
        result = hcp_to_wiki.convert(write_csv([_HEADER]))
        assert result.wiki_text == ""
        assert result.pipeline.records == []
