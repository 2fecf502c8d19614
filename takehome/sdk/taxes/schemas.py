"""Pydantic schemas for tax rules validation.

These schemas validate the tax_rules/*.yaml files and provide typed access
to tax parameters like the SS wage base, bracket tables and state modes.
Loaded rules are frozen: a single snapshot is shared by every calculation.
"""

import math
from typing import Literal, Optional, get_args

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


FilingStatus = Literal["single", "married_jointly", "married_separately", "head_of_household"]
FILING_STATUSES: tuple[str, ...] = get_args(FilingStatus)

StateTaxMode = Literal["no_income_tax", "flat", "progressive"]
StateTaxStatus = Literal["no_income_tax", "flat", "progressive", "unknown"]


class Bracket(BaseModel):
    """Single tax bracket entry."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    min: float = Field(..., ge=0, description="Lower bound (previous bracket's max)")
    max: float = Field(..., gt=0, description="Upper bound (.inf for the top bracket)")
    rate: float = Field(..., ge=0, le=1, description="Tax rate as decimal")

    @property
    def unbounded(self) -> bool:
        return math.isinf(self.max)


def check_bracket_table(brackets: list[Bracket], label: str) -> None:
    """Validate that a bracket table is a usable progressive schedule.

    Raises:
        ValueError: If the table is empty, has gaps or overlaps, is not
            ascending, has a bounded top bracket, or has a decreasing rate.
    """
    if not brackets:
        raise ValueError(f"{label}: bracket table is empty")

    if brackets[0].min != 0:
        raise ValueError(f"{label}: first bracket must start at 0, got {brackets[0].min}")

    for previous, current in zip(brackets, brackets[1:]):
        if previous.unbounded:
            raise ValueError(f"{label}: only the last bracket may be unbounded")
        if current.min != previous.max:
            raise ValueError(
                f"{label}: brackets not contiguous ({previous.max} -> {current.min})"
            )
        if current.max <= previous.max:
            raise ValueError(f"{label}: bracket max values must ascend ({previous.max} -> {current.max})")
        if current.rate < previous.rate:
            raise ValueError(f"{label}: rates must be nondecreasing ({previous.rate} -> {current.rate})")

    if not brackets[-1].unbounded:
        raise ValueError(f"{label}: last bracket must be unbounded (max: .inf)")


def _check_all_statuses(values: dict, label: str) -> None:
    missing = [status for status in FILING_STATUSES if status not in values]
    if missing:
        raise ValueError(f"{label}: missing filing status(es): {', '.join(missing)}")


class SocialSecurityRules(BaseModel):
    """Social Security tax rules."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    rate: float = Field(..., ge=0, le=1, description="SS tax rate (employee portion)")
    wage_base: float = Field(..., gt=0, description="SS wage base (max taxable)")


class MedicareRules(BaseModel):
    """Medicare tax rules, including the Additional Medicare Tax."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    rate: float = Field(..., ge=0, le=1)
    additional_rate: float = Field(..., ge=0, le=1, description="Surtax above the threshold (employee only)")
    additional_threshold: dict[FilingStatus, float]

    @model_validator(mode="after")
    def check_thresholds(self) -> "MedicareRules":
        _check_all_statuses(self.additional_threshold, "medicare.additional_threshold")
        return self


class SelfEmploymentRules(BaseModel):
    """SE tax rates (both halves of FICA)."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    social_security_rate: float = Field(..., ge=0, le=1)
    medicare_rate: float = Field(..., ge=0, le=1)
    deductible_portion: float = Field(..., ge=0, le=1)
    earnings_factor: float = Field(default=0.9235, gt=0, le=1, description="Share of net earnings subject to SE tax")


class UnemploymentRules(BaseModel):
    """Employer-paid FUTA/SUTA parameters."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    futa_wage_base: float = Field(default=7000, ge=0)
    futa_rate: float = Field(default=0.006, ge=0, le=1, description="Effective rate after state credit")
    suta_wage_base: float = Field(default=10000, ge=0)
    suta_rate: float = Field(default=0.027, ge=0, le=1, description="Average estimate, not state-specific")


class SupplementalRules(BaseModel):
    """Flat federal withholding on supplemental wages (bonuses)."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    rate: float = Field(default=0.22, ge=0, le=1)
    high_rate: float = Field(default=0.37, ge=0, le=1)
    high_threshold: float = Field(default=1_000_000, ge=0)


class Retirement401kRules(BaseModel):
    """401(k) contribution limits."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    employee_limit: float = Field(..., ge=0, description="Pre-tax + Roth employee limit")
    catch_up_limit: float = Field(..., ge=0)
    employer_limit: float = Field(..., ge=0, description="Total including employer match")


class HsaRules(BaseModel):
    """HSA contribution limits."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    self_only: float = Field(..., ge=0)
    family: float = Field(..., ge=0)
    catch_up_limit: float = Field(..., ge=0)


class TaxYearConfig(BaseModel):
    """Complete federal rules for a tax year."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    year: str
    label: str = ""
    standard_deduction: dict[FilingStatus, float]
    federal_brackets: dict[FilingStatus, list[Bracket]]
    social_security: SocialSecurityRules
    medicare: MedicareRules
    self_employment: SelfEmploymentRules
    unemployment: UnemploymentRules = Field(default_factory=UnemploymentRules)
    supplemental: SupplementalRules = Field(default_factory=SupplementalRules)
    retirement_401k: Retirement401kRules
    hsa: Optional[HsaRules] = None

    @field_validator("year", mode="before")
    @classmethod
    def year_as_string(cls, v):
        return str(v)

    @model_validator(mode="after")
    def check_tables(self) -> "TaxYearConfig":
        _check_all_statuses(self.standard_deduction, "standard_deduction")
        _check_all_statuses(self.federal_brackets, "federal_brackets")
        for status, brackets in self.federal_brackets.items():
            check_bracket_table(brackets, f"federal_brackets.{status}")
        return self


class StateTaxConfig(BaseModel):
    """Income tax rules for one state.

    A state is one of three shapes: no income tax, a flat rate, or
    progressive brackets. Exactly one of flat_rate/brackets is set when
    has_income_tax is true, and neither when it is false.
    """
    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str
    has_income_tax: bool
    flat_rate: Optional[float] = Field(default=None, ge=0, le=1)
    brackets: Optional[list[Bracket]] = None
    standard_deduction: float = Field(default=0, ge=0)
    personal_exemption: float = Field(default=0, ge=0)
    local_tax_rate: Optional[float] = Field(default=None, ge=0, le=1)

    @model_validator(mode="after")
    def check_mode(self) -> "StateTaxConfig":
        has_flat = self.flat_rate is not None
        has_brackets = self.brackets is not None

        if not self.has_income_tax:
            if has_flat or has_brackets:
                raise ValueError(f"{self.name}: no-income-tax state cannot define flat_rate or brackets")
            return self

        if has_flat == has_brackets:
            raise ValueError(f"{self.name}: exactly one of flat_rate or brackets is required")
        if has_brackets:
            check_bracket_table(self.brackets, f"{self.name} brackets")
        return self

    @property
    def mode(self) -> StateTaxMode:
        if not self.has_income_tax:
            return "no_income_tax"
        if self.flat_rate is not None:
            return "flat"
        return "progressive"


class TaxRules(BaseModel):
    """Immutable snapshot of everything a calculation needs."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    federal: TaxYearConfig
    states: dict[str, StateTaxConfig]

    @property
    def year(self) -> str:
        return self.federal.year


class StateTaxResult(BaseModel):
    """Outcome of a state tax evaluation.

    status is "unknown" when the state code has no rules. Tax is zero in
    that case, the same as a no-income-tax state, but callers can tell
    the two apart.
    """
    model_config = ConfigDict(extra="forbid", frozen=True)

    state: str
    status: StateTaxStatus
    taxable_income: float = Field(default=0, ge=0, description="Basis after state deductions")
    state_tax: float = Field(default=0, ge=0)
    local_tax: float = Field(default=0, ge=0)

    @property
    def known(self) -> bool:
        return self.status != "unknown"
