"""Federal income tax calculations."""

from typing import Sequence

from .schemas import Bracket, FilingStatus, TaxYearConfig


def bracket_tax(income: float, brackets: Sequence[Bracket]) -> float:
    """Calculate progressive tax on income over an ordered bracket table.

    Each bracket taxes only the slice of income between the previous
    bracket's max and its own max, so the total is continuous at every
    boundary. Shared by the federal and state evaluators.
    """
    if income <= 0:
        return 0.0

    tax = 0.0
    remaining = income
    previous_max = 0.0

    for bracket in brackets:
        if remaining <= 0:
            break

        width = remaining if bracket.unbounded else bracket.max - previous_max
        taxable_in_bracket = min(remaining, width)
        tax += taxable_in_bracket * bracket.rate
        remaining -= taxable_in_bracket
        previous_max = bracket.max

    return max(0.0, tax)


def federal_tax(taxable_income: float, filing_status: FilingStatus, config: TaxYearConfig) -> float:
    """Calculate federal income tax on taxable income (after the standard deduction)."""
    return bracket_tax(taxable_income, config.federal_brackets[filing_status])


def marginal_rate(taxable_income: float, filing_status: FilingStatus, config: TaxYearConfig) -> float:
    """Rate applied to the next dollar of taxable income, as a percentage.

    Returns the rate of the highest bracket whose lower boundary is below
    taxable_income, or the first bracket's rate when there is no taxable
    income.
    """
    brackets = config.federal_brackets[filing_status]

    for index in range(len(brackets) - 1, -1, -1):
        lower = 0.0 if index == 0 else brackets[index - 1].max
        if taxable_income > lower:
            return brackets[index].rate * 100

    return brackets[0].rate * 100


def federal_bracket_info(filing_status: FilingStatus, config: TaxYearConfig) -> list[dict]:
    """Describe a filing status's brackets for display.

    Returns:
        List of dicts with:
            - rate: e.g. "22%"
            - range: e.g. "$48,475 - $103,350" or "Over $626,350"
    """
    info = []
    for bracket in config.federal_brackets[filing_status]:
        if bracket.unbounded:
            label = f"Over ${bracket.min:,.0f}"
        else:
            label = f"${bracket.min:,.0f} - ${bracket.max:,.0f}"
        info.append({"rate": f"{bracket.rate * 100:.0f}%", "range": label})
    return info
