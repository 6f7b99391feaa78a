"""
Transform pipeline orchestrator for hcp-to-wiki.

Runs the processing steps on the raw advert rows:

1. **RecordBuilder**: Skip to the header, validate rows into records.
2. **Aggregator**: Build the per-system cheapest-price series.
3. **SystemRules**: Rename / suppress systems per the config.

Returns a ``PipelineResult`` carrying everything the renderer and the
exporter need, plus the diagnostics for reporting.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from hcp_to_wiki.config import HcpConfig
from hcp_to_wiki.parsers.adverts import BuildResult, build_records
from hcp_to_wiki.parsers.base import AdvertRecord, RowDiagnostic
from hcp_to_wiki.transforms.aggregate import PriceSeries, build_price_series
from hcp_to_wiki.transforms.rules import apply_system_rules

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    """Output of the transform pipeline.

    Attributes:
        build: The record builder's result (records, range, counters).
        aggregated: Per-system series before the rules were applied.
        series: Per-system series after the rules, keys sorted.
    """

    build: BuildResult
    aggregated: dict[str, PriceSeries] = field(default_factory=dict)
    series: dict[str, PriceSeries] = field(default_factory=dict)

    @property
    def records(self) -> list[AdvertRecord]:
        return self.build.records

    @property
    def diagnostics(self) -> list[RowDiagnostic]:
        return self.build.diagnostics

    @property
    def min_date(self) -> int | None:
        return self.build.min_date

    @property
    def max_date(self) -> int | None:
        return self.build.max_date


class TransformPipeline:
    """Orchestrates record building, aggregation and system rules.

    The pipeline is **stateless** -- each call to ``run()`` processes a
    fresh set of rows independently.
    """

    def __init__(self, config: HcpConfig) -> None:
        self.config = config

    def run(self, rows: Iterable[Sequence[str]]) -> PipelineResult:
        """Run all steps over *rows* (the full CSV, preamble included)."""
        # -- Step 1: Record building --------------------------------------
        logger.info("Step 1/3: Building advert records")
        build = build_records(rows, header_marker=self.config.input.header_marker)

        if not build.records:
            logger.warning("No valid advert records; nothing to aggregate")
            return PipelineResult(build=build)

        # -- Step 2: Aggregation ------------------------------------------
        logger.info("Step 2/3: Aggregating prices by system and quarter")
        aggregated = build_price_series(build.records, build.min_date, build.max_date)

        # -- Step 3: System rules -----------------------------------------
        logger.info("Step 3/3: Applying %d system rule(s)", len(self.config.rules))
        series = apply_system_rules(aggregated, self.config.rules)

        return PipelineResult(
            build=build,
            aggregated=aggregated,
            series=dict(sorted(series.items())),
        )
