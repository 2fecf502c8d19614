"""Unit tests for self-employment tax."""

import pytest

from takehome.sdk import SelfEmploymentInput, calculate_self_employment_tax


def se(rules, net, status="single"):
    return calculate_self_employment_tax(
        SelfEmploymentInput(net_earnings=net, filing_status=status), rules
    )


class TestSelfEmploymentTax:

    def test_100000(self, rules_2025):
        result = se(rules_2025, 100000)
        assert result.self_employment_tax_base == pytest.approx(92350)
        assert result.social_security_tax == pytest.approx(11451.40)
        assert result.medicare_tax == pytest.approx(2678.15)
        assert result.total_self_employment_tax == pytest.approx(14129.55)
        assert result.deductible_portion == pytest.approx(7064.775)

    def test_social_security_capped(self, rules_2025):
        result = se(rules_2025, 200000)
        assert result.social_security_tax == pytest.approx(176100 * 0.124)

    def test_additional_medicare(self, rules_2025):
        # Base 230875: 2.9% on all plus 0.9% above 200000
        result = se(rules_2025, 250000)
        assert result.medicare_tax == pytest.approx(6973.25)

    def test_filing_status_threshold(self, rules_2025):
        single = se(rules_2025, 250000, "single")
        joint = se(rules_2025, 250000, "married_jointly")
        assert joint.medicare_tax < single.medicare_tax

    def test_zero_and_negative(self, rules_2025):
        assert se(rules_2025, 0).total_self_employment_tax == 0
        assert se(rules_2025, -5000).net_earnings == 0
