"""Bonus tax: actual liability versus supplemental withholding.

Employers usually withhold federal tax on a bonus at the flat supplemental
rate (22%, 37% on the part above $1M), which rarely matches the tax the
bonus actually adds once it is stacked on the base salary. This module
computes both.
"""

from typing import Optional

from .salary import calculate_salary
from .schemas import BonusTaxInput, BonusTaxResult, SalaryInput
from .taxes import TaxRules, load_tax_rules


def calculate_bonus_tax(bonus_input: BonusTaxInput, rules: Optional[TaxRules] = None) -> BonusTaxResult:
    """Compare a bonus's actual incremental tax with what gets withheld."""
    if rules is None:
        rules = load_tax_rules(bonus_input.tax_year)
    config = rules.federal
    bonus = bonus_input.bonus

    common = dict(
        gross_salary=bonus_input.base_salary,
        filing_status=bonus_input.filing_status,
        state=bonus_input.state,
        retirement_401k=bonus_input.retirement_401k,
    )
    base_result = calculate_salary(SalaryInput(**common), rules)
    without_bonus = base_result.yearly
    with_bonus = calculate_salary(SalaryInput(bonus=bonus, **common), rules, warn=False).yearly

    actual_federal = with_bonus.federal_tax - without_bonus.federal_tax
    actual_state = with_bonus.state_tax - without_bonus.state_tax
    actual_ss = with_bonus.social_security - without_bonus.social_security
    actual_medicare = with_bonus.medicare - without_bonus.medicare
    actual_total = actual_federal + actual_state + actual_ss + actual_medicare

    supplemental = config.supplemental
    below_threshold = min(bonus, supplemental.high_threshold)
    above_threshold = max(0.0, bonus - supplemental.high_threshold)
    withheld_federal = below_threshold * supplemental.rate + above_threshold * supplemental.high_rate

    # SS stops once year-to-date wages reach the wage base
    remaining_wage_base = max(0.0, config.social_security.wage_base - bonus_input.base_salary)
    withheld_ss = min(bonus, remaining_wage_base) * config.social_security.rate
    withheld_medicare = bonus * config.medicare.rate
    # No flat supplemental rate for states here; withhold the actual increment
    withheld_state = actual_state

    total_withheld = withheld_federal + withheld_state + withheld_ss + withheld_medicare

    return BonusTaxResult(
        bonus=bonus,
        actual_federal_tax=actual_federal,
        actual_state_tax=actual_state,
        actual_social_security=actual_ss,
        actual_medicare=actual_medicare,
        actual_total_tax=actual_total,
        net_bonus_actual=bonus - actual_total,
        withheld_federal=withheld_federal,
        withheld_state=withheld_state,
        withheld_social_security=withheld_ss,
        withheld_medicare=withheld_medicare,
        total_withheld=total_withheld,
        net_bonus_withheld=bonus - total_withheld,
        withholding_difference=total_withheld - actual_total,
        effective_bonus_tax_rate=(actual_total / bonus) * 100 if bonus > 0 else 0.0,
        tax_year=config.year,
        state=base_result.state,
        state_status=base_result.state_status,
    )
