"""
hcp-to-wiki: turn a CSV of home-computer price adverts into wiki tables.

The input lists one advert per row (magazine, issue date, page, system,
price, ...).  The output is one MediaWiki table per five-year block,
showing the cheapest advertised price of each system in each quarter.

Public API surface:

- ``convert(path, config=None)`` -- read the CSV, validate and aggregate
  the adverts, and render the wiki text.  Returns a ``ConversionResult``.
- ``load_config(path)`` / ``load_default_config()`` -- load an
  ``hcpconfig.yaml`` (input settings, output options, system rules).
"""

from __future__ import annotations

import logging
from pathlib import Path

from hcp_to_wiki._pipeline import ConversionResult, run_pipeline_and_render
from hcp_to_wiki.config import HcpConfig, load_config, load_default_config
from hcp_to_wiki.parsers.adverts import read_advert_rows

__all__ = ["convert", "load_config", "load_default_config", "ConversionResult", "HcpConfig"]

__version__ = "0.1.0"

logger = logging.getLogger(__name__)


def convert(input_path: str | Path, config: HcpConfig | None = None) -> ConversionResult:
    """Convert an advert CSV into wiki tables.

    Orchestration:
      1. ``read_advert_rows()`` -> rows (whole file, in memory).
      2. ``run_pipeline_and_render()`` -> records, series, wiki text,
         optional debug dump and price-matrix export.

    Args:
        input_path: Path to the advert CSV.
        config: Settings and system rules.  If ``None``, the built-in
            defaults (``defaults/hcpconfig.yaml``) are used.

    Returns:
        A ``ConversionResult``.

    Raises:
        InputReadError: If the CSV cannot be opened or parsed.
        ExportError: If the price-matrix export fails.
    """
    if config is None:
        config = load_default_config()

    logger.info("convert() -- input_path=%s", input_path)
    rows = read_advert_rows(input_path, encoding=config.input.encoding)
    return run_pipeline_and_render(config, rows)
