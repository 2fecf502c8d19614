"""State and local income tax calculations."""

import logging
from typing import Mapping, Optional

from .federal import bracket_tax
from .schemas import StateTaxConfig, StateTaxMode, StateTaxResult, StateTaxStatus

logger = logging.getLogger(__name__)


def state_tax(
    basis: float,
    state_code: str,
    states: Mapping[str, StateTaxConfig],
    include_local_tax: bool = False,
) -> StateTaxResult:
    """Calculate state (and optionally local) income tax.

    Args:
        basis: Federal AGI. The federal standard deduction is NOT applied;
               the state's own standard deduction and personal exemption are.
        state_code: Two-letter state code (e.g. "CA")
        states: State rules keyed by code
        include_local_tax: Charge the state's local_tax_rate (NYC, MD
                           counties). Without it local tax is 0 even when a
                           rate is configured.

    Returns:
        StateTaxResult. An unmapped code returns zero tax with
        status="unknown" so it is not mistaken for a no-income-tax state.
    """
    code = (state_code or "").strip().upper()
    config = states.get(code)

    if config is None:
        logger.debug(f"no state tax rules for '{code}'")
        return StateTaxResult(state=code, status="unknown")

    if config.mode == "no_income_tax":
        return StateTaxResult(state=code, status="no_income_tax")

    taxable = max(0.0, basis - config.standard_deduction - config.personal_exemption)

    if config.mode == "flat":
        tax = taxable * config.flat_rate
    else:
        tax = bracket_tax(taxable, config.brackets)

    local = 0.0
    if include_local_tax and config.local_tax_rate:
        local = taxable * config.local_tax_rate

    return StateTaxResult(
        state=code,
        status=config.mode,
        taxable_income=taxable,
        state_tax=max(0.0, tax),
        local_tax=max(0.0, local),
    )


def get_state_status(state_code: str, states: Mapping[str, StateTaxConfig]) -> StateTaxStatus:
    """Get how a state taxes income, or "unknown" when it has no rules."""
    config = states.get((state_code or "").strip().upper())
    return config.mode if config else "unknown"


def warn_unknown_state(state_code: str) -> None:
    """Log the once-per-calculation warning for a state without rules."""
    logger.warning(f"No state tax rules for '{state_code}', state tax assumed 0")


def get_state_name(state_code: str, states: Mapping[str, StateTaxConfig]) -> str:
    """Get a state's display name, falling back to the code itself."""
    config = states.get((state_code or "").upper())
    return config.name if config else state_code


def get_all_states(
    states: Mapping[str, StateTaxConfig],
    mode: Optional[StateTaxMode] = None,
) -> list[dict]:
    """List states sorted by name, optionally filtered by tax mode.

    Returns:
        List of dicts with code, name, mode
    """
    rows = [
        {"code": code, "name": config.name, "mode": config.mode}
        for code, config in states.items()
        if mode is None or config.mode == mode
    ]
    return sorted(rows, key=lambda row: row["name"])


def get_states_with_no_income_tax(states: Mapping[str, StateTaxConfig]) -> list[str]:
    return [code for code, config in states.items() if config.mode == "no_income_tax"]


def get_states_with_flat_tax(states: Mapping[str, StateTaxConfig]) -> list[str]:
    return [code for code, config in states.items() if config.mode == "flat"]
