"""
Price-matrix exporter for hcp-to-wiki.

Writes the per-system price series as a table, alongside the wiki
output, for analysis outside the wiki:

  - one row per system (sorted), indexed by ``system``
  - one column per quarter, labelled ``YYYY-Qn``
  - nullable ``Int64`` values; empty quarters are missing (``<NA>``)

CSV is written with ``utf-8-sig`` (BOM) so system names display
correctly when opened in Excel.  Parquet keeps the nullable integer dtype.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal, Mapping

import pandas as pd

from hcp_to_wiki.exceptions import ExportError
from hcp_to_wiki.quarters import quarter_label
from hcp_to_wiki.transforms.aggregate import PriceSeries

logger = logging.getLogger(__name__)

_SUPPORTED_FORMATS = {"csv", "parquet"}


def price_matrix_frame(
    series: Mapping[str, PriceSeries],
    min_date: int,
    max_date: int,
) -> pd.DataFrame:
    """Build the systems x quarters DataFrame."""
    columns = [quarter_label(i) for i in range(min_date, max_date + 1)]
    systems = sorted(series)
    df = pd.DataFrame(
        [series[name] for name in systems],
        index=pd.Index(systems, name="system"),
        columns=columns,
        dtype=object,
    )
    return df.astype("Int64")


def export_price_matrix(
    series: Mapping[str, PriceSeries],
    min_date: int,
    max_date: int,
    path: str | Path,
    output_format: Literal["csv", "parquet"] = "csv",
) -> str:
    """Write the price matrix to *path*.

    The parent directory is created if needed.

    Returns:
        The path written, as a string.

    Raises:
        ExportError: If *output_format* is unsupported or the write fails.
    """
    if output_format not in _SUPPORTED_FORMATS:
        raise ExportError(
            f"Unsupported output format: '{output_format}'. "
            f"Supported formats: {sorted(_SUPPORTED_FORMATS)}"
        )

    path = Path(path)
    df = price_matrix_frame(series, min_date, max_date)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        if output_format == "csv":
            df.to_csv(path, encoding="utf-8-sig")
        else:  # parquet
            df.to_parquet(path, engine="pyarrow")
    except Exception as exc:
        raise ExportError(
            f"Failed to write {path.name} as {output_format}: {exc}"
        ) from exc

    logger.info(
        "Exported price matrix -> %s (%d systems, %d quarters)",
        path, len(df), len(df.columns),
    )
    return str(path)
