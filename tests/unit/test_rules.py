"""Unit tests for tax rules loading and validation."""

import pytest
import yaml
from pydantic import ValidationError

from takehome.sdk import set_setting
from takehome.sdk.taxes import (
    StateTaxConfig,
    TaxRulesNotFoundError,
    TaxYearConfig,
    get_available_years,
    get_tax_rules_dir,
    load_state_configs,
    load_tax_rules,
    load_tax_year,
    resolve_tax_year,
)


def packaged_year(year="2025"):
    with open(get_tax_rules_dir() / f"{year}.yaml") as f:
        return yaml.safe_load(f)


@pytest.fixture
def custom_rules_dir(tmp_path, monkeypatch):
    """Custom rules dir holding a 2030 copy of the 2025 rules and a tiny states file."""
    data = packaged_year("2025")
    data["year"] = "2030"
    data["social_security"]["wage_base"] = 200000

    rules_dir = tmp_path / "rules"
    rules_dir.mkdir()
    with open(rules_dir / "2030.yaml", "w") as f:
        yaml.safe_dump(data, f)
    with open(rules_dir / "states.yaml", "w") as f:
        yaml.safe_dump({"states": {"tx": {"name": "Texas", "has_income_tax": False}}}, f)

    monkeypatch.setenv("TAKE_HOME_TAX_RULES_DIR", str(rules_dir))
    return rules_dir


class TestPackagedRules:

    def test_available_years(self):
        years = get_available_years()
        assert years[:2] == ["2025", "2024"]

    def test_latest_year_is_default(self):
        assert resolve_tax_year() == "2025"
        assert load_tax_rules().year == "2025"

    def test_explicit_year(self):
        config = load_tax_year("2024")
        assert config.social_security.wage_base == 168600
        assert config.standard_deduction["single"] == 14600

    def test_integer_year(self):
        assert load_tax_year(2024).year == "2024"

    def test_missing_year(self):
        with pytest.raises(TaxRulesNotFoundError, match="1999"):
            load_tax_year("1999")

    def test_missing_year_is_file_not_found(self):
        with pytest.raises(FileNotFoundError):
            load_tax_rules("1999")

    def test_states_loaded(self):
        states = load_state_configs()
        assert len(states) == 51
        assert states["TX"].mode == "no_income_tax"
        assert states["IL"].mode == "flat"
        assert states["CA"].mode == "progressive"

    def test_cached_snapshot(self):
        assert load_tax_year("2025") is load_tax_year("2025")


class TestRulesResolution:

    def test_tax_year_setting(self):
        set_setting("tax_year", "2024")
        assert resolve_tax_year() == "2024"
        assert resolve_tax_year("2025") == "2025"

    def test_custom_dir_from_env(self, custom_rules_dir):
        assert get_tax_rules_dir() == custom_rules_dir
        rules = load_tax_rules()
        assert rules.year == "2030"
        assert rules.federal.social_security.wage_base == 200000
        assert list(rules.states) == ["TX"]

    def test_custom_dir_from_setting(self, custom_rules_dir, monkeypatch):
        monkeypatch.delenv("TAKE_HOME_TAX_RULES_DIR")
        set_setting("tax_rules_dir", str(custom_rules_dir))
        assert get_available_years() == ["2030"]

    def test_missing_states_file(self, custom_rules_dir):
        (custom_rules_dir / "states.yaml").unlink()
        assert load_state_configs() == {}

    def test_empty_dir(self, tmp_path, monkeypatch):
        monkeypatch.setenv("TAKE_HOME_TAX_RULES_DIR", str(tmp_path))
        with pytest.raises(TaxRulesNotFoundError):
            resolve_tax_year()


class TestYearValidation:
    """Malformed federal tables are rejected at load time."""

    def test_valid_packaged_data(self):
        assert TaxYearConfig.model_validate(packaged_year()).year == "2025"

    def test_bounded_top_bracket(self):
        data = packaged_year()
        data["federal_brackets"]["single"][-1]["max"] = 9999999
        with pytest.raises(ValidationError, match="unbounded"):
            TaxYearConfig.model_validate(data)

    def test_gap_between_brackets(self):
        data = packaged_year()
        data["federal_brackets"]["single"][1]["min"] = 12000
        with pytest.raises(ValidationError, match="contiguous"):
            TaxYearConfig.model_validate(data)

    def test_decreasing_rate(self):
        data = packaged_year()
        data["federal_brackets"]["single"][2]["rate"] = 0.05
        with pytest.raises(ValidationError, match="nondecreasing"):
            TaxYearConfig.model_validate(data)

    def test_missing_filing_status(self):
        data = packaged_year()
        del data["standard_deduction"]["head_of_household"]
        with pytest.raises(ValidationError, match="head_of_household"):
            TaxYearConfig.model_validate(data)

    def test_unknown_key(self):
        data = packaged_year()
        data["surprise"] = 1
        with pytest.raises(ValidationError):
            TaxYearConfig.model_validate(data)


class TestStateValidation:

    def test_flat_and_brackets_both_set(self):
        with pytest.raises(ValidationError, match="exactly one"):
            StateTaxConfig(
                name="Nowhere",
                has_income_tax=True,
                flat_rate=0.05,
                brackets=[{"min": 0, "max": float("inf"), "rate": 0.05}],
            )

    def test_taxed_state_without_rate(self):
        with pytest.raises(ValidationError):
            StateTaxConfig(name="Nowhere", has_income_tax=True)

    def test_untaxed_state_with_rate(self):
        with pytest.raises(ValidationError):
            StateTaxConfig(name="Nowhere", has_income_tax=False, flat_rate=0.03)

    def test_progressive_mode(self):
        config = StateTaxConfig(
            name="Somewhere",
            has_income_tax=True,
            brackets=[
                {"min": 0, "max": 10000, "rate": 0.02},
                {"min": 10000, "max": float("inf"), "rate": 0.05},
            ],
        )
        assert config.mode == "progressive"
