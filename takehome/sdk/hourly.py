"""Hourly wage to annual salary."""

from typing import Optional

from .salary import calculate_salary
from .schemas import HourlyInput, HourlyResult, SalaryInput
from .taxes import TaxRules, load_tax_rules


def calculate_hourly_salary(hourly_input: HourlyInput, rules: Optional[TaxRules] = None) -> HourlyResult:
    """Annualize an hourly wage and run it through the take-home calculator.

    annual = rate x hours per week x weeks per year. take_home_per_hour
    divides yearly take-home by the hours actually worked, not the
    standard 2,080.
    """
    if rules is None:
        rules = load_tax_rules(hourly_input.tax_year)

    hours_per_year = hourly_input.hours_per_week * hourly_input.weeks_per_year
    annual = hourly_input.hourly_rate * hours_per_year

    result = calculate_salary(
        SalaryInput(
            gross_salary=annual,
            filing_status=hourly_input.filing_status,
            state=hourly_input.state,
        ),
        rules,
    )

    take_home = result.yearly.take_home_pay
    return HourlyResult(
        hourly_rate=hourly_input.hourly_rate,
        hours_per_week=hourly_input.hours_per_week,
        weeks_per_year=hourly_input.weeks_per_year,
        hours_per_year=hours_per_year,
        annual_salary=annual,
        take_home_per_hour=take_home / hours_per_year if hours_per_year > 0 else 0.0,
        salary=result,
    )
