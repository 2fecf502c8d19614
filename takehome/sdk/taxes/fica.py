"""FICA (Social Security + Medicare) calculations.

Both taxes are computed on gross wages. 401(k) and HSA contributions
reduce income tax wages but never FICA wages here.
"""

from .schemas import FilingStatus, TaxYearConfig


def social_security(gross_income: float, config: TaxYearConfig) -> float:
    """Employee Social Security tax, capped at the wage base."""
    taxable = min(max(0.0, gross_income), config.social_security.wage_base)
    return taxable * config.social_security.rate


def additional_medicare(gross_income: float, filing_status: FilingStatus, config: TaxYearConfig) -> float:
    """Additional Medicare Tax on wages above the filing-status threshold."""
    threshold = config.medicare.additional_threshold[filing_status]
    return max(0.0, gross_income - threshold) * config.medicare.additional_rate


def medicare(gross_income: float, filing_status: FilingStatus, config: TaxYearConfig) -> float:
    """Employee Medicare tax: base rate on all wages plus the surtax.

    The threshold is the only place filing status affects FICA.
    """
    base = max(0.0, gross_income) * config.medicare.rate
    return base + additional_medicare(gross_income, filing_status, config)
