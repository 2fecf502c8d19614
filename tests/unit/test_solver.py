"""Unit tests for the net-to-gross solver."""

import logging

import pytest

from takehome.sdk import FILING_STATUSES, SalaryInput, calculate_salary, solve_gross_for_net
from takehome.sdk.solver import bisect_monotone


class TestBisectMonotone:

    def test_linear(self):
        x, value, iterations, converged = bisect_monotone(lambda v: v * 2, 50, 0, 100, 0.01, 100)
        assert converged
        assert x == pytest.approx(25, abs=0.01)
        assert iterations >= 1

    def test_budget_exhausted(self):
        x, value, iterations, converged = bisect_monotone(lambda v: v, 12.345, 0, 1000, 1e-9, 3)
        assert not converged
        assert iterations == 3


class TestSolveGrossForNet:

    def test_texas_single(self, rules_2025):
        result = solve_gross_for_net(48000, rules=rules_2025)
        assert result.converged
        assert abs(result.take_home_pay - 48000) < 1
        assert result.gross_salary > 48000
        assert result.difference == pytest.approx(result.take_home_pay - 48000)

    def test_round_trip_through_calculator(self, rules_2025):
        result = solve_gross_for_net(90000, "married_jointly", "CA", rules=rules_2025)
        check = calculate_salary(
            SalaryInput(gross_salary=result.gross_salary, filing_status="married_jointly", state="CA"),
            rules_2025,
        )
        assert check.yearly.take_home_pay == pytest.approx(90000, abs=1)

    def test_high_target_expands_bracket(self, rules_2025):
        result = solve_gross_for_net(400000, "single", "NY", rules=rules_2025, include_local_tax=True)
        assert result.converged
        assert result.gross_salary > 600000

    def test_zero_target(self, rules_2025):
        result = solve_gross_for_net(0, rules=rules_2025)
        assert result.converged
        assert result.gross_salary == 0

    def test_negative_target_treated_as_zero(self, rules_2025):
        assert solve_gross_for_net(-500, rules=rules_2025).target_net == 0

    def test_not_converged_reports_flag(self, rules_2025, caplog):
        with caplog.at_level(logging.WARNING):
            result = solve_gross_for_net(60000, rules=rules_2025, tolerance=1e-9, max_iterations=2)
        assert not result.converged
        assert result.iterations == 2
        assert "did not converge" in caplog.text

    def test_unknown_state_reported_and_warned_once(self, rules_2025, caplog):
        with caplog.at_level(logging.WARNING):
            result = solve_gross_for_net(48000, "single", "zz", rules=rules_2025)
        assert result.state == "ZZ"
        assert result.state_status == "unknown"
        assert result.converged
        warnings = [r for r in caplog.records if "No state tax rules" in r.getMessage()]
        assert len(warnings) == 1

    def test_known_state_status(self, rules_2025):
        result = solve_gross_for_net(60000, "single", "CA", rules=rules_2025)
        assert result.state_status == "progressive"


@pytest.mark.parametrize("filing_status", FILING_STATUSES)
@pytest.mark.parametrize("state", ["TX", "CA", "NY", "IL", "MI", "MD"])
@pytest.mark.parametrize("target", [20000, 35000, 60000, 100000, 180000, 300000, 500000])
def test_round_trip_grid(rules_2025, target, state, filing_status):
    """The solved gross, run forward through the calculator, lands within $1 of the target."""
    result = solve_gross_for_net(target, filing_status, state, rules=rules_2025)
    assert result.converged
    check = calculate_salary(
        SalaryInput(gross_salary=result.gross_salary, filing_status=filing_status, state=state),
        rules_2025,
    )
    assert abs(check.yearly.take_home_pay - target) < 1
