"""Unit tests for bonus tax: actual liability versus supplemental withholding."""

import logging

import pytest

from takehome.sdk import BonusTaxInput, calculate_bonus_tax


def bonus_tax(rules, base, bonus, **kwargs):
    return calculate_bonus_tax(BonusTaxInput(base_salary=base, bonus=bonus, **kwargs), rules)


class TestBonusTax:

    def test_withholding_matches_in_22_percent_bracket(self, rules_2025):
        result = bonus_tax(rules_2025, 100000, 10000)
        assert result.actual_federal_tax == pytest.approx(2200)
        assert result.withheld_federal == pytest.approx(2200)
        assert result.actual_social_security == pytest.approx(620)
        assert result.withheld_social_security == pytest.approx(620)
        assert result.withholding_difference == pytest.approx(0)

    def test_over_withheld_in_12_percent_bracket(self, rules_2025):
        result = bonus_tax(rules_2025, 50000, 5000)
        assert result.actual_federal_tax == pytest.approx(600)
        assert result.withheld_federal == pytest.approx(1100)
        assert result.withholding_difference == pytest.approx(500)
        assert result.net_bonus_withheld < result.net_bonus_actual

    def test_social_security_stops_at_wage_base(self, rules_2025):
        result = bonus_tax(rules_2025, 170000, 20000)
        assert result.withheld_social_security == pytest.approx(6100 * 0.062)
        assert result.actual_social_security == pytest.approx(6100 * 0.062)

    def test_high_rate_above_threshold(self, rules_2025):
        result = bonus_tax(rules_2025, 0, 1500000)
        assert result.withheld_federal == pytest.approx(1000000 * 0.22 + 500000 * 0.37)

    def test_state_withholding_is_actual(self, rules_2025):
        result = bonus_tax(rules_2025, 80000, 10000, state="CA")
        assert result.actual_state_tax > 0
        assert result.withheld_state == result.actual_state_tax

    def test_effective_rate_percent(self, rules_2025):
        result = bonus_tax(rules_2025, 100000, 10000)
        assert result.effective_bonus_tax_rate == pytest.approx(result.actual_total_tax / 100)

    def test_zero_bonus(self, rules_2025):
        result = bonus_tax(rules_2025, 100000, 0)
        assert result.actual_total_tax == pytest.approx(0)
        assert result.effective_bonus_tax_rate == 0


class TestBonusState:

    def test_known_state_reported(self, rules_2025):
        result = bonus_tax(rules_2025, 80000, 10000, state="ca")
        assert result.state == "CA"
        assert result.state_status == "progressive"

    def test_unknown_state_warned_once(self, rules_2025, caplog):
        with caplog.at_level(logging.WARNING):
            result = bonus_tax(rules_2025, 80000, 10000, state="ZZ")
        assert result.state_status == "unknown"
        assert result.actual_state_tax == 0
        warnings = [r for r in caplog.records if "No state tax rules" in r.getMessage()]
        assert len(warnings) == 1
