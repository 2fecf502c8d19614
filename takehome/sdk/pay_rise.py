"""Take-home effect of a pay rise.

A raise is stated as a percentage, a dollar amount or the new salary. Both
salaries run through the same calculator with the same state, filing
status and 401(k), so the deltas show how much of the raise survives tax.
"""

import logging
from typing import Optional

from .salary import PERIOD_DIVISORS, calculate_salary
from .schemas import PayRiseInput, PayRiseResult, SalaryInput
from .taxes import TaxRules, load_tax_rules

logger = logging.getLogger(__name__)


def new_salary_after_rise(current: float, rise_type: str, rise_value: float) -> float:
    """Apply a raise to the current salary. Never below zero."""
    if rise_type == "percentage":
        new = current * (1 + rise_value / 100)
    elif rise_type == "amount":
        new = current + rise_value
    elif rise_type == "new_salary":
        new = rise_value
    else:
        raise ValueError(f"Unknown rise type '{rise_type}'")
    return max(0.0, new)


def calculate_pay_rise(rise_input: PayRiseInput, rules: Optional[TaxRules] = None) -> PayRiseResult:
    """Compare take-home pay before and after a raise."""
    if rules is None:
        rules = load_tax_rules(rise_input.tax_year)

    current = rise_input.current_salary
    new = new_salary_after_rise(current, rise_input.rise_type, rise_input.rise_value)

    common = dict(
        filing_status=rise_input.filing_status,
        state=rise_input.state,
        retirement_401k=rise_input.retirement_401k,
    )
    before = calculate_salary(SalaryInput(gross_salary=current, **common), rules)
    after = calculate_salary(SalaryInput(gross_salary=new, **common), rules, warn=False)
    old, updated = before.yearly, after.yearly

    salary_increase = new - current
    take_home_increase = updated.take_home_pay - old.take_home_pay
    if new < current:
        logger.info(f"pay rise of {salary_increase:.2f} is a cut")

    return PayRiseResult(
        current_salary=current,
        new_salary=new,
        salary_increase=salary_increase,
        percentage_increase=(salary_increase / current) * 100 if current > 0 else 0.0,
        current_take_home=old.take_home_pay,
        new_take_home=updated.take_home_pay,
        take_home_increase=take_home_increase,
        monthly_increase=take_home_increase / PERIOD_DIVISORS["monthly"],
        weekly_increase=take_home_increase / PERIOD_DIVISORS["weekly"],
        federal_tax_increase=updated.federal_tax - old.federal_tax,
        state_tax_increase=(updated.state_tax + updated.local_tax) - (old.state_tax + old.local_tax),
        fica_increase=(updated.social_security + updated.medicare) - (old.social_security + old.medicare),
        retirement_401k_increase=updated.retirement_401k - old.retirement_401k,
        # Only a real raise has a meaningful share kept
        retention_rate=(take_home_increase / salary_increase) * 100 if salary_increase > 0 else 0.0,
        state=before.state,
        state_status=before.state_status,
        tax_year=before.tax_year,
    )
