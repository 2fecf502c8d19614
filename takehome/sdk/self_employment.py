"""Self-employment (SE) tax.

SE tax covers both halves of FICA on net earnings from self-employment.
Only 92.35% of net earnings is subject to it, which stands in for the
employer-equivalent deduction an employee's wages never see.
"""

from typing import Optional

from .schemas import SelfEmploymentInput, SelfEmploymentResult
from .taxes import TaxRules, additional_medicare, load_tax_rules


def calculate_self_employment_tax(
    se_input: SelfEmploymentInput,
    rules: Optional[TaxRules] = None,
) -> SelfEmploymentResult:
    """Calculate Social Security and Medicare owed on self-employment income.

    The deductible half is reported but not applied; feeding it back into
    an income tax calculation is the caller's decision.
    """
    if rules is None:
        rules = load_tax_rules(se_input.tax_year)
    config = rules.federal
    se_rules = config.self_employment

    tax_base = se_input.net_earnings * se_rules.earnings_factor

    ss_tax = min(tax_base, config.social_security.wage_base) * se_rules.social_security_rate
    medicare_tax = tax_base * se_rules.medicare_rate
    medicare_tax += additional_medicare(tax_base, se_input.filing_status, config)

    total = ss_tax + medicare_tax

    return SelfEmploymentResult(
        net_earnings=se_input.net_earnings,
        self_employment_tax_base=tax_base,
        social_security_tax=ss_tax,
        medicare_tax=medicare_tax,
        total_self_employment_tax=total,
        deductible_portion=total * se_rules.deductible_portion,
        tax_year=config.year,
    )
