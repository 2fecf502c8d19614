"""Tests for MCP tool functions (requires the mcp extra)."""

import asyncio

import pytest

pytest.importorskip("mcp")

from takehome.mcp import server


def run(coro):
    return asyncio.run(coro)


class TestTools:

    def test_calculate_take_home(self):
        result = run(server.calculate_take_home(
            gross_salary=50000,
            state="TX",
            filing_status="single",
            retirement_401k=0,
            hsa_contribution=0,
            include_local_tax=False,
            tax_year=None,
        ))
        assert result["yearly"]["take_home_pay"] == pytest.approx(42213.50)
        assert result["state_status"] == "no_income_tax"

    def test_errors_returned_not_raised(self):
        result = run(server.calculate_take_home(
            gross_salary=50000,
            state="TX",
            filing_status="single",
            retirement_401k=0,
            hsa_contribution=0,
            include_local_tax=False,
            tax_year="1999",
        ))
        assert result["result"] is None
        assert "1999" in result["error"]

    def test_net_to_gross(self):
        result = run(server.net_to_gross(
            target_net=48000, state="TX", filing_status="single",
            include_local_tax=False, tax_year=None,
        ))
        assert result["converged"] is True

    def test_list_states(self):
        result = run(server.list_states(mode="flat"))
        assert result["count"] == len(result["states"])
        assert any(row["code"] == "IL" for row in result["states"])

    def test_net_to_gross_unknown_state(self):
        result = run(server.net_to_gross(
            target_net=48000, state="ZZ", filing_status="single",
            include_local_tax=False, tax_year=None,
        ))
        assert result["state"] == "ZZ"
        assert result["state_status"] == "unknown"

    def test_pay_rise(self):
        result = run(server.pay_rise(
            current_salary=50000, rise_value=10, rise_type="percentage", state="TX",
            filing_status="single", retirement_401k=0, tax_year="2025",
        ))
        assert result["take_home_increase"] == pytest.approx(4017.50)

    def test_hourly_to_salary(self):
        result = run(server.hourly_to_salary(
            hourly_rate=25, hours_per_week=40, weeks_per_year=52, state="TX",
            filing_status="single", tax_year="2025",
        ))
        assert result["annual_salary"] == pytest.approx(52000)
        assert result["yearly"]["take_home_pay"] == pytest.approx(43820.50)

    def test_salary_comparison(self):
        result = run(server.salary_comparison(
            entries=[
                {"label": "Texas", "salary": 50000, "state": "TX"},
                {"label": "Illinois", "salary": 50000, "state": "IL"},
            ],
            tax_year="2025",
        ))
        assert result["highest_take_home"] == "Texas"
        assert result["take_home_spread"] == pytest.approx(2475)

    def test_salary_comparison_needs_two(self):
        result = run(server.salary_comparison(entries=[{"label": "A", "salary": 1}], tax_year=None))
        assert result["result"] is None


class TestToolRulesLoading:
    """Each tool loads one rules snapshot and hands it to the calculator."""

    @pytest.fixture
    def load_calls(self, monkeypatch):
        calls = []
        real_load = server.load_tax_rules

        def counting_load(year=None):
            calls.append(year)
            return real_load(year)

        monkeypatch.setattr(server, "load_tax_rules", counting_load)
        monkeypatch.setattr("takehome.sdk.salary.load_tax_rules", counting_load)
        monkeypatch.setattr("takehome.sdk.employer.load_tax_rules", counting_load)
        monkeypatch.setattr("takehome.sdk.self_employment.load_tax_rules", counting_load)
        return calls

    def test_take_home_loads_once(self, load_calls):
        run(server.calculate_take_home(
            gross_salary=50000, state="TX", filing_status="single", retirement_401k=0,
            hsa_contribution=0, include_local_tax=False, tax_year="2024",
        ))
        assert load_calls == ["2024"]

    def test_employer_cost_loads_once(self, load_calls):
        result = run(server.employer_cost(gross_salary=60000, employer_401k_match=4, tax_year=None))
        assert load_calls == [None]
        assert result["total_cost"] == pytest.approx(67302)

    def test_self_employment_loads_once(self, load_calls):
        result = run(server.self_employment_tax(net_earnings=100000, filing_status="single", tax_year=None))
        assert load_calls == [None]
        assert result["total_self_employment_tax"] == pytest.approx(14129.55)

    def test_settings_year_used(self, isolated_config, load_calls):
        (isolated_config / "settings.json").write_text('{"tax_year": "2024"}')
        result = run(server.employer_cost(gross_salary=60000, employer_401k_match=0, tax_year=None))
        assert result["tax_year"] == "2024"
