"""Pydantic schemas for calculator inputs and results.

All schemas use extra='forbid' to reject unknown fields. Money inputs are
clamped to 0 rather than rejected: the calculators treat every input as an
already-valid number. Results are frozen.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .taxes.schemas import FilingStatus, StateTaxStatus


def _clamp_money(v: float) -> float:
    return max(0.0, v)


def _tax_year_as_string(v):
    return None if v is None else str(v)


# =============================================================================
# Take-home pay
# =============================================================================


class SalaryInput(BaseModel):
    """Inputs for a take-home pay calculation."""

    model_config = ConfigDict(extra="forbid")

    gross_salary: float = Field(..., description="Annual gross salary")
    bonus: float = Field(default=0, description="Annual bonus, added to gross")
    filing_status: FilingStatus = "single"
    state: str = Field(default="TX", description="Two-letter state code")
    retirement_401k: float = Field(default=0, description="Annual pre-tax 401(k) contribution")
    hsa_contribution: float = Field(default=0, description="Annual pre-tax HSA contribution")
    include_local_tax: bool = Field(default=False, description="Apply the state's local tax rate (NYC, MD counties)")
    tax_year: Optional[str] = Field(default=None, description="Tax year (default: latest available)")

    @field_validator("gross_salary", "bonus", "retirement_401k", "hsa_contribution")
    @classmethod
    def clamp_money(cls, v: float) -> float:
        return _clamp_money(v)

    @field_validator("state")
    @classmethod
    def normalize_state(cls, v: str) -> str:
        return v.strip().upper()

    @field_validator("tax_year", mode="before")
    @classmethod
    def tax_year_as_string(cls, v):
        return _tax_year_as_string(v)


class TaxBreakdown(BaseModel):
    """Tax and deduction lines for one pay period.

    Money fields scale with the period. effective_tax_rate and
    marginal_tax_rate are percentages and are the same for every period.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    gross_income: float
    adjusted_gross_income: float = Field(..., description="Gross after pre-tax 401(k)/HSA")
    standard_deduction: float
    taxable_income: float = Field(..., description="Federal taxable income")
    federal_tax: float
    state_tax: float
    local_tax: float
    social_security: float
    medicare: float
    retirement_401k: float
    hsa_contribution: float
    total_federal_deductions: float = Field(..., description="Federal tax + Social Security + Medicare")
    total_state_deductions: float = Field(..., description="State tax + local tax")
    total_deductions: float = Field(..., description="All taxes plus 401(k) and HSA")
    take_home_pay: float
    effective_tax_rate: float = Field(..., description="Taxes only / gross, percent")
    marginal_tax_rate: float = Field(..., description="Federal marginal rate, percent")

    @property
    def total_taxes(self) -> float:
        """Taxes only, excluding voluntary 401(k)/HSA contributions."""
        return self.total_federal_deductions + self.total_state_deductions


class SalaryResult(BaseModel):
    """Yearly breakdown plus its projections onto shorter pay periods."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    yearly: TaxBreakdown
    monthly: TaxBreakdown
    biweekly: TaxBreakdown
    weekly: TaxBreakdown
    daily: TaxBreakdown
    hourly: TaxBreakdown
    tax_year: str
    filing_status: FilingStatus
    state: str
    state_name: str
    state_status: StateTaxStatus = Field(..., description="'unknown' when no state rules matched")

    def period(self, name: str) -> TaxBreakdown:
        return getattr(self, name)


# =============================================================================
# Net to gross
# =============================================================================


class GrossForNetResult(BaseModel):
    """Result of solving for the gross salary that yields a target net pay."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    target_net: float
    gross_salary: float
    take_home_pay: float = Field(..., description="Annual take-home at gross_salary")
    difference: float = Field(..., description="take_home_pay - target_net")
    iterations: int = Field(..., ge=0, description="Bisection steps performed")
    converged: bool = Field(..., description="False when the iteration budget ran out before tolerance")
    state: str
    state_status: StateTaxStatus = Field(..., description="'unknown' when no state rules matched")


# =============================================================================
# Employer cost
# =============================================================================


class EmployerCostInput(BaseModel):
    """Inputs for total employer cost of a salary."""

    model_config = ConfigDict(extra="forbid")

    gross_salary: float
    state: Optional[str] = None
    employer_401k_match: float = Field(default=0, description="Match as percent of gross (e.g. 4 for 4%)")
    tax_year: Optional[str] = None

    @field_validator("gross_salary")
    @classmethod
    def clamp_money(cls, v: float) -> float:
        return _clamp_money(v)

    @field_validator("employer_401k_match")
    @classmethod
    def clamp_percent(cls, v: float) -> float:
        return min(100.0, max(0.0, v))

    @field_validator("state")
    @classmethod
    def normalize_state(cls, v: Optional[str]) -> Optional[str]:
        return v.strip().upper() if v else None

    @field_validator("tax_year", mode="before")
    @classmethod
    def tax_year_as_string(cls, v):
        return _tax_year_as_string(v)


class EmployerCostResult(BaseModel):
    """Employer-side payroll cost breakdown."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    gross_salary: float
    state: Optional[str] = None
    employer_social_security: float
    employer_medicare: float
    employer_futa: float = Field(..., description="Federal unemployment tax")
    employer_suta: float = Field(..., description="State unemployment tax (average estimate)")
    employer_401k_match: float
    total_cost: float
    cost_per_month: float
    cost_per_day: float = Field(..., description="Per working day (260/year)")
    tax_year: str


# =============================================================================
# Self-employment
# =============================================================================


class SelfEmploymentInput(BaseModel):
    """Inputs for self-employment tax."""

    model_config = ConfigDict(extra="forbid")

    net_earnings: float
    filing_status: FilingStatus = "single"
    tax_year: Optional[str] = None

    @field_validator("net_earnings")
    @classmethod
    def clamp_money(cls, v: float) -> float:
        return _clamp_money(v)

    @field_validator("tax_year", mode="before")
    @classmethod
    def tax_year_as_string(cls, v):
        return _tax_year_as_string(v)


class SelfEmploymentResult(BaseModel):
    """Self-employment tax breakdown.

    deductible_portion is informational: it is the employer-equivalent half
    that reduces income elsewhere, and is not applied here.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    net_earnings: float
    self_employment_tax_base: float
    social_security_tax: float
    medicare_tax: float
    total_self_employment_tax: float
    deductible_portion: float
    tax_year: str


# =============================================================================
# Bonus
# =============================================================================


class BonusTaxInput(BaseModel):
    """Inputs for tax on a bonus paid on top of a base salary."""

    model_config = ConfigDict(extra="forbid")

    base_salary: float
    bonus: float
    filing_status: FilingStatus = "single"
    state: str = "TX"
    retirement_401k: float = 0
    tax_year: Optional[str] = None

    @field_validator("base_salary", "bonus", "retirement_401k")
    @classmethod
    def clamp_money(cls, v: float) -> float:
        return _clamp_money(v)

    @field_validator("state")
    @classmethod
    def normalize_state(cls, v: str) -> str:
        return v.strip().upper()

    @field_validator("tax_year", mode="before")
    @classmethod
    def tax_year_as_string(cls, v):
        return _tax_year_as_string(v)


class BonusTaxResult(BaseModel):
    """Actual tax on a bonus versus what supplemental withholding takes."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    bonus: float
    # Actual: incremental liability from adding the bonus to salary
    actual_federal_tax: float
    actual_state_tax: float
    actual_social_security: float
    actual_medicare: float
    actual_total_tax: float
    net_bonus_actual: float
    # Withheld: flat supplemental federal rate plus FICA
    withheld_federal: float
    withheld_state: float
    withheld_social_security: float
    withheld_medicare: float
    total_withheld: float
    net_bonus_withheld: float
    withholding_difference: float = Field(..., description="Withheld - actual; positive means a likely refund")
    effective_bonus_tax_rate: float = Field(..., description="Actual total tax / bonus, percent")
    tax_year: str
    state: str
    state_status: StateTaxStatus


# =============================================================================
# Multiple jobs
# =============================================================================


class Job(BaseModel):
    """One job's annual salary."""

    model_config = ConfigDict(extra="forbid")

    name: str
    salary: float

    @field_validator("salary")
    @classmethod
    def clamp_money(cls, v: float) -> float:
        return _clamp_money(v)


class MultipleJobsInput(BaseModel):
    """Inputs for withholding across several concurrent jobs."""

    model_config = ConfigDict(extra="forbid")

    jobs: List[Job] = Field(..., min_length=1)
    filing_status: FilingStatus = "single"
    state: str = "TX"
    tax_year: Optional[str] = None

    @field_validator("state")
    @classmethod
    def normalize_state(cls, v: str) -> str:
        return v.strip().upper()

    @field_validator("tax_year", mode="before")
    @classmethod
    def tax_year_as_string(cls, v):
        return _tax_year_as_string(v)


class JobWithholding(BaseModel):
    """What one employer withholds, treating its job as the only income."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str
    salary: float
    federal_tax: float
    state_tax: float
    social_security: float
    medicare: float
    total_withheld: float
    take_home: float


class MultipleJobsResult(BaseModel):
    """Per-job withholding compared with the liability on combined income."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    jobs: List[JobWithholding]
    total_income: float
    total_federal_withheld: float
    total_state_withheld: float
    total_fica_withheld: float
    total_withheld: float
    actual_federal_tax: float
    actual_state_tax: float
    actual_fica: float
    federal_shortfall: float = Field(..., description="Actual federal - withheld; positive means owed at filing")
    state_shortfall: float
    excess_social_security: float = Field(..., description="SS withheld over the single-wage-base cap, refundable")
    combined_take_home: float
    tax_year: str
    state: str
    state_status: StateTaxStatus


# =============================================================================
# Pay rise
# =============================================================================


RiseType = Literal["percentage", "amount", "new_salary"]


class PayRiseInput(BaseModel):
    """Inputs for the take-home effect of a raise."""

    model_config = ConfigDict(extra="forbid")

    current_salary: float
    rise_type: RiseType = "percentage"
    rise_value: float = Field(..., description="Percent, dollar amount or new salary, per rise_type")
    retirement_401k: float = Field(default=0, description="Annual pre-tax 401(k) contribution, same before and after")
    filing_status: FilingStatus = "single"
    state: str = "TX"
    tax_year: Optional[str] = None

    @field_validator("current_salary", "retirement_401k")
    @classmethod
    def clamp_money(cls, v: float) -> float:
        return _clamp_money(v)

    @field_validator("state")
    @classmethod
    def normalize_state(cls, v: str) -> str:
        return v.strip().upper()

    @field_validator("tax_year", mode="before")
    @classmethod
    def tax_year_as_string(cls, v):
        return _tax_year_as_string(v)


class PayRiseResult(BaseModel):
    """Before/after comparison for a raise."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    current_salary: float
    new_salary: float
    salary_increase: float
    percentage_increase: float = Field(..., description="Percent of current salary, 0 when current is 0")
    current_take_home: float
    new_take_home: float
    take_home_increase: float = Field(..., description="Yearly")
    monthly_increase: float
    weekly_increase: float
    federal_tax_increase: float
    state_tax_increase: float
    fica_increase: float
    retirement_401k_increase: float
    retention_rate: float = Field(..., description="Take-home increase / salary increase, percent; 0 without a raise")
    state: str
    state_status: StateTaxStatus
    tax_year: str


# =============================================================================
# Hourly to salary
# =============================================================================


class HourlyInput(BaseModel):
    """Inputs for converting an hourly wage to an annual salary."""

    model_config = ConfigDict(extra="forbid")

    hourly_rate: float
    hours_per_week: float = Field(default=40, ge=0, le=168)
    weeks_per_year: float = Field(default=52, ge=0, le=52)
    filing_status: FilingStatus = "single"
    state: str = "TX"
    tax_year: Optional[str] = None

    @field_validator("hourly_rate")
    @classmethod
    def clamp_money(cls, v: float) -> float:
        return _clamp_money(v)

    @field_validator("state")
    @classmethod
    def normalize_state(cls, v: str) -> str:
        return v.strip().upper()

    @field_validator("tax_year", mode="before")
    @classmethod
    def tax_year_as_string(cls, v):
        return _tax_year_as_string(v)


class HourlyResult(BaseModel):
    """Annual salary from an hourly wage, with its take-home breakdown."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    hourly_rate: float
    hours_per_week: float
    weeks_per_year: float
    hours_per_year: float
    annual_salary: float
    take_home_per_hour: float = Field(..., description="Yearly take-home / hours worked, 0 when no hours")
    salary: SalaryResult


# =============================================================================
# Salary comparison
# =============================================================================


class ComparisonEntry(BaseModel):
    """One salary in a comparison; state and filing status may differ per entry."""

    model_config = ConfigDict(extra="forbid")

    label: str
    salary: float
    filing_status: FilingStatus = "single"
    state: str = "TX"

    @field_validator("salary")
    @classmethod
    def clamp_money(cls, v: float) -> float:
        return _clamp_money(v)

    @field_validator("state")
    @classmethod
    def normalize_state(cls, v: str) -> str:
        return v.strip().upper()


class SalaryComparisonInput(BaseModel):
    """Two to four salaries to compare side by side."""

    model_config = ConfigDict(extra="forbid")

    entries: List[ComparisonEntry] = Field(..., min_length=2, max_length=4)
    tax_year: Optional[str] = None

    @field_validator("tax_year", mode="before")
    @classmethod
    def tax_year_as_string(cls, v):
        return _tax_year_as_string(v)


class ComparisonRow(BaseModel):
    """Yearly figures for one compared salary."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    label: str
    salary: float
    filing_status: FilingStatus
    state: str
    state_status: StateTaxStatus
    federal_tax: float
    state_tax: float
    fica: float = Field(..., description="Social Security + Medicare")
    take_home_pay: float
    monthly_take_home: float
    effective_tax_rate: float
    take_home_percent: float = Field(..., description="Take-home / gross, percent; 0 for a zero salary")


class SalaryComparisonResult(BaseModel):
    """Side-by-side rows plus the spread (max - min) of each figure."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    rows: List[ComparisonRow]
    salary_spread: float
    federal_tax_spread: float
    state_tax_spread: float
    fica_spread: float
    take_home_spread: float
    effective_rate_spread: float
    highest_take_home: str = Field(..., description="Label of the row with the most take-home pay")
    lowest_take_home: str
    tax_year: str
