"""
Unit tests for system rules (hcp_to_wiki.transforms.rules).
"""

from __future__ import annotations

from hcp_to_wiki.config import SystemRule, load_default_config
from hcp_to_wiki.transforms.rules import apply_system_rules


def _rename(match: str, new_name: str) -> SystemRule:
    return SystemRule(match=match, action="rename", new_name=new_name)


def _suppress(match: str) -> SystemRule:
    return SystemRule(match=match, action="suppress")


class TestApplySystemRules:

    def test_rename(self):
        result = apply_system_rules({"Science of Cambridge MK14": [40, None]}, [_rename("Science of Cambridge MK14", "MK14")])
        assert result == {"MK14": [40, None]}

    def test_suppress(self):
        result = apply_system_rules({"Apple II": [900], "ZX81": [70]}, [_suppress("Apple II")])
        assert result == {"ZX81": [70]}

    def test_missing_match_is_noop(self):
        series = {"ZX81": [70]}
        assert apply_system_rules(series, [_suppress("Apple II"), _rename("X", "Y")]) == series

    def test_input_not_modified(self):
        series = {"Apple II": [900]}
        apply_system_rules(series, [_suppress("Apple II")])
        assert series == {"Apple II": [900]}

    def test_rules_applied_in_order(self):
        """A later rule sees the result of an earlier rename."""
        rules = [_rename("Old", "New"), _suppress("New")]
        assert apply_system_rules({"Old": [1], "ZX81": [70]}, rules) == {"ZX81": [70]}

    def test_suppress_before_rename_wins(self):
        rules = [_suppress("Old"), _rename("Old", "New")]
        assert apply_system_rules({"Old": [1]}, rules) == {}

    def test_rename_onto_existing_merges_cheapest(self):
        series = {"Science of Cambridge MK14": [40, None, 45], "MK14": [39, 50, None]}
        result = apply_system_rules(series, [_rename("Science of Cambridge MK14", "MK14")])
        assert result == {"MK14": [39, 50, 45]}

    def test_other_systems_untouched(self):
        series = {"ZX81": [70], "VIC-20": [199]}
        result = apply_system_rules(series, load_default_config().rules)
        assert result == series

    def test_default_rules(self):
        series = {
            "Science of Cambridge MK14": [40],
            "Apple II": [900],
            "Exidy Sorcerer": [800],
            "ZX81": [70],
        }
        result = apply_system_rules(series, load_default_config().rules)
        assert result == {"MK14": [40], "ZX81": [70]}
