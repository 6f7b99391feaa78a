"""
Internal pipeline orchestration for hcp-to-wiki.

Extracted from ``__init__.py`` so that both ``convert()`` and callers
that already hold the rows in memory (tests, other tools) can reuse the
same transform -> report -> render -> export sequence.

This module is **not** part of the public API.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Sequence

from hcp_to_wiki.config import HcpConfig
from hcp_to_wiki.export import export_price_matrix
from hcp_to_wiki.parsers.base import RowDiagnostic
from hcp_to_wiki.render import render_debug_dump, render_wiki
from hcp_to_wiki.transforms.pipeline import PipelineResult, TransformPipeline

logger = logging.getLogger(__name__)

# Row diagnostics go to their own logger so they can be routed separately
diagnostics_logger = logging.getLogger("hcp_to_wiki.diagnostics")


@dataclass
class ConversionResult:
    """Everything produced by one conversion run.

    Attributes:
        pipeline: The transform pipeline's result.
        wiki_text: The rendered wiki tables.
        debug_text: The debug dump, or ``""`` when disabled.
        written: Paths of any exported files.
    """

    pipeline: PipelineResult
    wiki_text: str
    debug_text: str = ""
    written: tuple[str, ...] = ()


def report_diagnostics(diagnostics: Iterable[RowDiagnostic]) -> int:
    """Log one WARNING line per diagnostic; return how many were logged."""
    count = 0
    for diagnostic in diagnostics:
        diagnostics_logger.warning("%s", diagnostic.format())
        count += 1
    return count


def run_pipeline_and_render(
    config: HcpConfig,
    rows: Iterable[Sequence[str]],
) -> ConversionResult:
    """Run the transform pipeline, report diagnostics, render, and export.

    Steps:
      1. Run the transform pipeline (records -> series -> rules).
      2. Log every row diagnostic.
      3. Render the wiki tables (and the debug dump when enabled).
      4. Export the price matrix when ``output.matrix_path`` is set.

    Args:
        config: The validated HcpConfig.
        rows: Every row of the input CSV, preamble included.

    Returns:
        A ``ConversionResult``.
    """
    # 1. Transform pipeline
    result = TransformPipeline(config).run(rows)

    # 2. Diagnostics
    reported = report_diagnostics(result.diagnostics)
    if reported:
        logger.info("%d field problem(s) reported", reported)

    # 3. Render
    wiki_text = render_wiki(result.series, result.min_date, result.max_date)
    debug_text = ""
    if config.output.debug_dump:
        debug_text = render_debug_dump(result.records, result.series)

    # 4. Export
    written: list[str] = []
    if config.output.matrix_path:
        if result.min_date is None:
            logger.warning("No records; price matrix not exported")
        else:
            written.append(
                export_price_matrix(
                    result.series,
                    result.min_date,
                    result.max_date,
                    config.output.matrix_path,
                    output_format=config.output.matrix_format,
                )
            )

    return ConversionResult(
        pipeline=result,
        wiki_text=wiki_text,
        debug_text=debug_text,
        written=tuple(written),
    )
