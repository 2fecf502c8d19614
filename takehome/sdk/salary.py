"""Take-home pay calculation.

Pipeline:
    SalaryInput -> AGI / federal taxable income
                -> federal, state, FICA evaluators
                -> yearly TaxBreakdown
                -> period projections (monthly ... hourly)

401(k) and HSA contributions reduce AGI for federal and state income tax.
FICA is always computed on gross.
"""

import logging
from typing import Optional

from .schemas import SalaryInput, SalaryResult, TaxBreakdown
from .taxes import (
    TaxRules,
    TaxYearConfig,
    federal_tax,
    get_state_name,
    load_tax_rules,
    marginal_rate,
    medicare,
    social_security,
    state_tax,
    warn_unknown_state,
)

logger = logging.getLogger(__name__)

# Divisors that project a yearly amount onto each pay period
PERIOD_DIVISORS = {
    "yearly": 1,
    "monthly": 12,
    "biweekly": 26,
    "weekly": 52,
    "daily": 260,
    "hourly": 2080,
}

RATE_FIELDS = ("effective_tax_rate", "marginal_tax_rate")


def _check_contribution_limits(salary_input: SalaryInput, config: TaxYearConfig) -> None:
    """Log a warning for contributions above the year's maximum, catch-up included.

    Amounts are still used as given.
    """
    limits = config.retirement_401k
    max_401k = limits.employee_limit + limits.catch_up_limit
    if salary_input.retirement_401k > max_401k:
        logger.warning(
            f"401(k) contribution {salary_input.retirement_401k:,.2f} exceeds the {config.year} "
            f"limit of {max_401k:,.2f}"
        )

    if config.hsa is not None:
        max_hsa = config.hsa.family + config.hsa.catch_up_limit
        if salary_input.hsa_contribution > max_hsa:
            logger.warning(
                f"HSA contribution {salary_input.hsa_contribution:,.2f} exceeds the {config.year} "
                f"limit of {max_hsa:,.2f}"
            )


def scale_breakdown(yearly: TaxBreakdown, divisor: float) -> TaxBreakdown:
    """Project a yearly breakdown onto a shorter period.

    Every money field is divided by divisor; rate fields are copied.
    """
    values = yearly.model_dump()
    scaled = {
        name: value if name in RATE_FIELDS else value / divisor
        for name, value in values.items()
    }
    return TaxBreakdown(**scaled)


def calculate_salary(
    salary_input: SalaryInput,
    rules: Optional[TaxRules] = None,
    *,
    warn: bool = True,
) -> SalaryResult:
    """Calculate the full tax breakdown and take-home pay for a salary.

    Args:
        salary_input: Salary, filing status, state and pre-tax deductions
        rules: Rules snapshot. When None, loaded for salary_input.tax_year
               (or the default year) once, here.
        warn: Log input warnings (unknown state, over-limit contributions).
              Callers that evaluate the same inputs many times pass False
              and warn once themselves.

    Returns:
        SalaryResult with yearly and per-period breakdowns
    """
    if rules is None:
        rules = load_tax_rules(salary_input.tax_year)
    config = rules.federal
    filing_status = salary_input.filing_status
    if warn:
        _check_contribution_limits(salary_input, config)

    gross_income = salary_input.gross_salary + salary_input.bonus
    retirement_401k = salary_input.retirement_401k
    hsa_contribution = salary_input.hsa_contribution

    # Pre-tax deductions reduce AGI
    adjusted_gross_income = max(0.0, gross_income - retirement_401k - hsa_contribution)

    standard_deduction = config.standard_deduction[filing_status]
    taxable_income = max(0.0, adjusted_gross_income - standard_deduction)

    fed_tax = federal_tax(taxable_income, filing_status, config)
    state = state_tax(
        adjusted_gross_income,
        salary_input.state,
        rules.states,
        include_local_tax=salary_input.include_local_tax,
    )
    if warn and not state.known:
        warn_unknown_state(state.state)

    # FICA on gross, not AGI
    ss_tax = social_security(gross_income, config)
    medicare_tax = medicare(gross_income, filing_status, config)

    total_federal_deductions = fed_tax + ss_tax + medicare_tax
    total_state_deductions = state.state_tax + state.local_tax
    total_deductions = max(
        0.0,
        total_federal_deductions + total_state_deductions + retirement_401k + hsa_contribution,
    )
    take_home_pay = gross_income - total_deductions

    # Effective rate counts taxes only, not voluntary contributions
    taxes_only = total_federal_deductions + total_state_deductions
    effective_tax_rate = (taxes_only / gross_income) * 100 if gross_income > 0 else 0.0

    yearly = TaxBreakdown(
        gross_income=gross_income,
        adjusted_gross_income=adjusted_gross_income,
        standard_deduction=standard_deduction,
        taxable_income=taxable_income,
        federal_tax=fed_tax,
        state_tax=state.state_tax,
        local_tax=state.local_tax,
        social_security=ss_tax,
        medicare=medicare_tax,
        retirement_401k=retirement_401k,
        hsa_contribution=hsa_contribution,
        total_federal_deductions=total_federal_deductions,
        total_state_deductions=total_state_deductions,
        total_deductions=total_deductions,
        take_home_pay=take_home_pay,
        effective_tax_rate=effective_tax_rate,
        marginal_tax_rate=marginal_rate(taxable_income, filing_status, config),
    )

    logger.debug(
        f"salary {gross_income:.2f} ({filing_status}, {state.state}): "
        f"federal={fed_tax:.2f} state={state.state_tax:.2f} take_home={take_home_pay:.2f}"
    )

    periods = {
        name: scale_breakdown(yearly, divisor)
        for name, divisor in PERIOD_DIVISORS.items()
        if name != "yearly"
    }

    return SalaryResult(
        yearly=yearly,
        **periods,
        tax_year=config.year,
        filing_status=filing_status,
        state=state.state,
        state_name=get_state_name(state.state, rules.states),
        state_status=state.status,
    )
