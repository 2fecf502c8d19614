"""Employer-side payroll cost of a salary."""

from typing import Optional

from .schemas import EmployerCostInput, EmployerCostResult
from .taxes import TaxRules, load_tax_rules, social_security


def calculate_employer_cost(cost_input: EmployerCostInput, rules: Optional[TaxRules] = None) -> EmployerCostResult:
    """Calculate the total cost of employing someone at a gross salary.

    Employer Social Security and Medicare mirror the employee amounts,
    except the Additional Medicare Tax, which is employee-only. SUTA uses
    the average rate from the rules and does not vary by state.
    """
    if rules is None:
        rules = load_tax_rules(cost_input.tax_year)
    config = rules.federal
    unemployment = config.unemployment
    gross = cost_input.gross_salary

    employer_ss = social_security(gross, config)
    employer_medicare = gross * config.medicare.rate
    futa = min(gross, unemployment.futa_wage_base) * unemployment.futa_rate
    suta = min(gross, unemployment.suta_wage_base) * unemployment.suta_rate
    match = gross * cost_input.employer_401k_match / 100

    total_cost = gross + employer_ss + employer_medicare + futa + suta + match

    return EmployerCostResult(
        gross_salary=gross,
        state=cost_input.state,
        employer_social_security=employer_ss,
        employer_medicare=employer_medicare,
        employer_futa=futa,
        employer_suta=suta,
        employer_401k_match=match,
        total_cost=total_cost,
        cost_per_month=total_cost / 12,
        cost_per_day=total_cost / 260,
        tax_year=config.year,
    )
