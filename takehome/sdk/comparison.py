"""Side-by-side comparison of two to four salaries.

Each entry may use its own state and filing status, which makes this the
tool for comparing job offers in different states. All entries share one
rules snapshot.
"""

from typing import Optional

from .salary import PERIOD_DIVISORS, calculate_salary
from .schemas import ComparisonRow, SalaryComparisonInput, SalaryComparisonResult, SalaryInput
from .taxes import TaxRules, get_state_status, load_tax_rules, warn_unknown_state


def _spread(rows: list[ComparisonRow], field: str) -> float:
    values = [getattr(row, field) for row in rows]
    return max(values) - min(values)


def compare_salaries(
    comparison_input: SalaryComparisonInput,
    rules: Optional[TaxRules] = None,
) -> SalaryComparisonResult:
    """Calculate take-home pay for each entry and the spread between them.

    Ties for highest or lowest take-home go to the earlier entry.
    """
    if rules is None:
        rules = load_tax_rules(comparison_input.tax_year)
    entries = comparison_input.entries

    for state in dict.fromkeys(entry.state for entry in entries):
        if get_state_status(state, rules.states) == "unknown":
            warn_unknown_state(state)

    rows = []
    for entry in entries:
        result = calculate_salary(
            SalaryInput(gross_salary=entry.salary, filing_status=entry.filing_status, state=entry.state),
            rules,
            warn=False,
        )
        yearly = result.yearly
        rows.append(ComparisonRow(
            label=entry.label,
            salary=entry.salary,
            filing_status=entry.filing_status,
            state=result.state,
            state_status=result.state_status,
            federal_tax=yearly.federal_tax,
            state_tax=yearly.state_tax + yearly.local_tax,
            fica=yearly.social_security + yearly.medicare,
            take_home_pay=yearly.take_home_pay,
            monthly_take_home=yearly.take_home_pay / PERIOD_DIVISORS["monthly"],
            effective_tax_rate=yearly.effective_tax_rate,
            take_home_percent=(yearly.take_home_pay / entry.salary) * 100 if entry.salary > 0 else 0.0,
        ))

    highest = max(rows, key=lambda row: row.take_home_pay)
    lowest = min(rows, key=lambda row: row.take_home_pay)

    return SalaryComparisonResult(
        rows=rows,
        salary_spread=_spread(rows, "salary"),
        federal_tax_spread=_spread(rows, "federal_tax"),
        state_tax_spread=_spread(rows, "state_tax"),
        fica_spread=_spread(rows, "fica"),
        take_home_spread=_spread(rows, "take_home_pay"),
        effective_rate_spread=_spread(rows, "effective_tax_rate"),
        highest_take_home=highest.label,
        lowest_take_home=lowest.label,
        tax_year=rules.year,
    )
