"""
System rules for hcp-to-wiki.

Applies the configured ``SystemRule`` list to the aggregated price
series, in order.  Each rule sees the mapping as left by the previous
one, so a rename followed by a suppress of the new name removes it.

- ``rename``: the series under ``match`` moves to ``new_name``.  When
  ``new_name`` already has a series the two are merged slot by slot,
  keeping the cheaper price.
- ``suppress``: the series under ``match`` is dropped.

Rules whose ``match`` is absent are no-ops.
"""

from __future__ import annotations

import logging
from typing import Iterable

from hcp_to_wiki.config import SystemRule
from hcp_to_wiki.transforms.aggregate import PriceSeries, merge_min

logger = logging.getLogger(__name__)


def apply_system_rules(
    series: dict[str, PriceSeries],
    rules: Iterable[SystemRule],
) -> dict[str, PriceSeries]:
    """Return a new mapping with *rules* applied; *series* is not modified."""
    result = dict(series)

    for rule in rules:
        if rule.match not in result:
            logger.debug("Rule %s '%s': no such system, skipped", rule.action, rule.match)
            continue

        prices = result.pop(rule.match)
        if rule.action == "suppress":
            logger.info("Suppressed system '%s'", rule.match)
            continue

        existing = result.get(rule.new_name)
        if existing is not None:
            logger.info(
                "Renamed system '%s' -> '%s' (merged with existing series)",
                rule.match, rule.new_name,
            )
            prices = merge_min(existing, prices)
        else:
            logger.info("Renamed system '%s' -> '%s'", rule.match, rule.new_name)
        result[rule.new_name] = prices

    return result
