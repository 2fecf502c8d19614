"""Display helpers. No tax logic lives here."""

import re
from typing import Optional


def format_currency(value: float, decimals: int = 2) -> str:
    """Format a dollar amount, e.g. 1234.5 -> "$1,234.50", -20 -> "-$20.00"."""
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.{decimals}f}"


def format_percent(value: float, decimals: int = 1) -> str:
    """Format a percentage value (already x100), e.g. 22 -> "22.0%"."""
    return f"{value:.{decimals}f}%"


def parse_salary(text: str) -> Optional[float]:
    """Parse a salary from loose text.

    Accepts "75000", "$75,000", "75k", "52.5k", "75k-salary".
    Returns None if no number can be read.
    """
    if text is None:
        return None

    cleaned = re.sub(r"[^0-9k.]", "", str(text).lower())
    multiplier = 1
    if "k" in cleaned:
        cleaned = cleaned.replace("k", "")
        multiplier = 1000

    try:
        return float(cleaned) * multiplier
    except ValueError:
        return None
