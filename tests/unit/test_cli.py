"""Tests for the take-home CLI.

Text output is rendered by rich; assertions on it stick to short labels.
Numbers are checked through --format json.
"""

import json

import pytest
from click.testing import CliRunner

from takehome import __version__
from takehome.cli.__main__ import cli


@pytest.fixture
def runner():
    return CliRunner()


def invoke_json(runner, *args):
    result = runner.invoke(cli, [*args, "--format", "json"])
    assert result.exit_code == 0, result.output
    return json.loads(result.output)


class TestSalaryCommand:

    def test_json_output(self, runner):
        data = invoke_json(runner, "salary", "50000")
        assert data["state"] == "TX"
        assert data["filing_status"] == "single"
        assert data["yearly"]["take_home_pay"] == pytest.approx(42213.50)
        assert data["monthly"]["take_home_pay"] == pytest.approx(42213.50 / 12)

    def test_k_suffix_and_options(self, runner):
        data = invoke_json(runner, "salary", "60k", "--state", "ca", "--401k", "6000")
        assert data["state"] == "CA"
        assert data["yearly"]["state_tax"] == pytest.approx(1530.62, abs=0.01)

    def test_local_tax_flag(self, runner):
        data = invoke_json(runner, "salary", "100000", "-s", "NY", "--local-tax")
        assert data["yearly"]["local_tax"] > 0

    def test_year_option(self, runner):
        data = invoke_json(runner, "salary", "500000", "--year", "2024")
        assert data["tax_year"] == "2024"
        assert data["yearly"]["social_security"] == pytest.approx(168600 * 0.062)

    def test_text_output(self, runner):
        result = runner.invoke(cli, ["salary", "50000", "--period", "yearly"])
        assert result.exit_code == 0, result.output
        assert "TAKE-HOME PAY" in result.output
        assert "$42,213.50" in result.output

    def test_bad_amount(self, runner):
        result = runner.invoke(cli, ["salary", "lots"])
        assert result.exit_code != 0
        assert "not a dollar amount" in result.output

    def test_unknown_year(self, runner):
        result = runner.invoke(cli, ["salary", "50000", "--year", "1999"])
        assert result.exit_code == 1
        assert "1999" in result.output

    def test_settings_defaults(self, runner):
        runner.invoke(cli, ["settings", "set", "default_state", "il"])
        data = invoke_json(runner, "salary", "50000")
        assert data["state"] == "IL"
        assert data["yearly"]["state_tax"] == pytest.approx(2475.0)


class TestOtherCalculators:

    def test_net_to_gross(self, runner):
        data = invoke_json(runner, "net-to-gross", "48000")
        assert data["converged"] is True
        assert abs(data["take_home_pay"] - 48000) < 1

    def test_net_to_gross_monthly(self, runner):
        data = invoke_json(runner, "net-to-gross", "4000", "--monthly")
        assert data["target_net"] == pytest.approx(48000)

    def test_employer_cost(self, runner):
        data = invoke_json(runner, "employer-cost", "60000", "--match", "4")
        assert data["total_cost"] == pytest.approx(67302)

    def test_self_employment(self, runner):
        data = invoke_json(runner, "self-employment", "100000")
        assert data["total_self_employment_tax"] == pytest.approx(14129.55)

    def test_bonus(self, runner):
        data = invoke_json(runner, "bonus", "50000", "5000")
        assert data["withholding_difference"] == pytest.approx(500)

    def test_multiple_jobs(self, runner):
        data = invoke_json(runner, "multiple-jobs", "90000", "40000")
        assert len(data["jobs"]) == 2
        assert data["federal_shortfall"] == pytest.approx(6271.5)


class TestUnknownStateNote:
    """States without rules are reported, in JSON and as a note in text output."""

    def test_net_to_gross_json(self, runner):
        data = invoke_json(runner, "net-to-gross", "48000", "--state", "ZZ")
        assert data["state"] == "ZZ"
        assert data["state_status"] == "unknown"

    @pytest.mark.parametrize("args", [
        ["net-to-gross", "48000", "--state", "ZZ"],
        ["salary", "50000", "--state", "ZZ"],
        ["bonus", "50000", "5000", "--state", "ZZ"],
        ["multiple-jobs", "90000", "40000", "--state", "ZZ"],
        ["pay-rise", "50000", "10", "--state", "ZZ"],
        ["hourly", "25", "--state", "ZZ"],
        ["compare", "50000:ZZ", "60000:TX"],
    ])
    def test_text_note(self, runner, args):
        result = runner.invoke(cli, args)
        assert result.exit_code == 0, result.output
        assert "No tax rules for state" in result.output

    def test_known_state_has_no_note(self, runner):
        result = runner.invoke(cli, ["net-to-gross", "48000", "--state", "CA"])
        assert result.exit_code == 0, result.output
        assert "No tax rules for state" not in result.output


class TestPayRiseHourlyCompare:

    def test_pay_rise(self, runner):
        data = invoke_json(runner, "pay-rise", "50000", "10")
        assert data["new_salary"] == pytest.approx(55000)
        assert data["take_home_increase"] == pytest.approx(4017.50)

    def test_pay_rise_new_salary(self, runner):
        data = invoke_json(runner, "pay-rise", "50k", "55k", "--type", "new_salary")
        assert data["salary_increase"] == pytest.approx(5000)

    def test_pay_rise_text(self, runner):
        result = runner.invoke(cli, ["pay-rise", "50000", "5000", "--type", "amount"])
        assert result.exit_code == 0, result.output
        assert "of the raise" in result.output

    def test_hourly(self, runner):
        data = invoke_json(runner, "hourly", "25")
        assert data["annual_salary"] == pytest.approx(52000)
        assert data["salary"]["yearly"]["take_home_pay"] == pytest.approx(43820.50)

    def test_hourly_options(self, runner):
        data = invoke_json(runner, "hourly", "20", "--hours", "20", "--weeks", "50")
        assert data["hours_per_year"] == 1000

    def test_hourly_text(self, runner):
        result = runner.invoke(cli, ["hourly", "25"])
        assert result.exit_code == 0, result.output
        assert "per hour worked" in result.output

    def test_compare(self, runner):
        data = invoke_json(runner, "compare", "50000:TX", "50k:il")
        assert [row["label"] for row in data["rows"]] == ["Salary A", "Salary B"]
        assert data["rows"][1]["state"] == "IL"
        assert data["highest_take_home"] == "Salary A"
        assert data["take_home_spread"] == pytest.approx(2475)

    def test_compare_filing_status_per_entry(self, runner):
        data = invoke_json(runner, "compare", "100000", "100000::married_jointly")
        assert data["rows"][1]["filing_status"] == "married_jointly"
        assert data["rows"][1]["state"] == "TX"

    def test_compare_text(self, runner):
        result = runner.invoke(cli, ["compare", "50000:TX", "50000:IL"])
        assert result.exit_code == 0, result.output
        assert "Highest take-home: Salary A" in result.output

    def test_compare_needs_two(self, runner):
        result = runner.invoke(cli, ["compare", "50000"])
        assert result.exit_code == 1
        assert "Invalid input" in result.output

    def test_compare_bad_entry(self, runner):
        result = runner.invoke(cli, ["compare", "50000", "lots:TX"])
        assert result.exit_code != 0
        assert "not a dollar amount" in result.output

    def test_compare_bad_filing_status(self, runner):
        result = runner.invoke(cli, ["compare", "50000", "60000:TX:widowed"])
        assert result.exit_code != 0
        assert "Invalid filing status" in result.output


class TestListings:

    def test_states_filtered(self, runner):
        rows = invoke_json(runner, "states", "--mode", "no_income_tax")
        codes = {row["code"] for row in rows}
        assert "TX" in codes
        assert "CA" not in codes

    def test_brackets(self, runner):
        rows = invoke_json(runner, "brackets", "-f", "married_jointly")
        assert rows[0] == {"rate": "10%", "range": "$0 - $23,850"}

    def test_brackets_text(self, runner):
        result = runner.invoke(cli, ["brackets"])
        assert result.exit_code == 0
        assert "Over $626,350" in result.output


class TestSettingsCommands:

    def test_set_show_unset(self, runner, isolated_config):
        result = runner.invoke(cli, ["settings", "set", "default_filing_status", "married_jointly"])
        assert result.exit_code == 0
        assert "Set default_filing_status" in result.output

        result = runner.invoke(cli, ["settings", "show"])
        assert "default_filing_status: married_jointly" in result.output
        assert str(isolated_config) in result.output

        result = runner.invoke(cli, ["settings", "unset", "default_filing_status"])
        assert "Cleared default_filing_status" in result.output

    def test_invalid_state(self, runner):
        result = runner.invoke(cli, ["settings", "set", "default_state", "Texas"])
        assert result.exit_code != 0
        assert "Must be 2 letters" in result.output

    def test_invalid_key(self, runner):
        result = runner.invoke(cli, ["settings", "set", "color", "blue"])
        assert result.exit_code != 0


def test_version(runner):
    result = runner.invoke(cli, ["--version"])
    assert __version__ in result.output
