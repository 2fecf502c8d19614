"""Net-to-gross solver.

Take-home pay is monotone nondecreasing in gross salary: every tax is a
nondecreasing piecewise-linear function of gross and the combined marginal
rate stays below 100%. That makes bisection on the whole calculate_salary
pipeline valid.
"""

import logging
from typing import Callable, Optional

from .salary import calculate_salary
from .schemas import GrossForNetResult, SalaryInput
from .taxes import (
    FilingStatus,
    TaxRules,
    get_state_status,
    load_tax_rules,
    warn_unknown_state,
)

logger = logging.getLogger(__name__)

DEFAULT_TOLERANCE = 1.0
DEFAULT_MAX_ITERATIONS = 100
DEFAULT_CEILING = 1_000_000.0
EXPANSION_FACTOR = 1.5


def bisect_monotone(
    func: Callable[[float], float],
    target: float,
    low: float,
    high: float,
    tolerance: float,
    max_iterations: int,
) -> tuple[float, float, int, bool]:
    """Find x in [low, high] with |func(x) - target| < tolerance.

    func must be nondecreasing. Stops on tolerance or after max_iterations.

    Returns:
        Tuple of (x, func(x), iterations, converged). When the budget runs
        out, x is the midpoint of the final interval and converged is False.
    """
    for iteration in range(1, max_iterations + 1):
        mid = (low + high) / 2
        value = func(mid)
        diff = value - target

        if abs(diff) < tolerance:
            return mid, value, iteration, True

        if diff > 0:
            high = mid
        else:
            low = mid

    mid = (low + high) / 2
    value = func(mid)
    return mid, value, max_iterations, abs(value - target) < tolerance


def solve_gross_for_net(
    target_net: float,
    filing_status: FilingStatus = "single",
    state: str = "TX",
    *,
    rules: Optional[TaxRules] = None,
    include_local_tax: bool = False,
    tolerance: float = DEFAULT_TOLERANCE,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
    ceiling: float = DEFAULT_CEILING,
) -> GrossForNetResult:
    """Find the annual gross salary whose take-home pay is target_net.

    The search starts from [target, 2 x target] and grows the upper bound
    by 1.5x until it brackets the target or reaches ceiling, then bisects.

    Args:
        target_net: Desired annual take-home pay (negative treated as 0)
        filing_status: Filing status
        state: Two-letter state code
        rules: Rules snapshot (default: loaded once for the default year)
        include_local_tax: Include the state's local tax
        tolerance: Accept when |take_home - target| < tolerance dollars
        max_iterations: Bisection step budget
        ceiling: Upper bound beyond which the bracket is not expanded

    Returns:
        GrossForNetResult; converged is False if the budget ran out first.
    """
    if rules is None:
        rules = load_tax_rules()
    target = max(0.0, target_net)
    state = state.strip().upper()
    state_status = get_state_status(state, rules.states)
    if state_status == "unknown":
        warn_unknown_state(state)

    def take_home(gross: float) -> float:
        salary_input = SalaryInput(
            gross_salary=gross,
            filing_status=filing_status,
            state=state,
            include_local_tax=include_local_tax,
        )
        return calculate_salary(salary_input, rules, warn=False).yearly.take_home_pay

    # Taxes are never negative, so take_home(target) <= target
    low = target
    high = target * 2
    while take_home(high) < target and high < ceiling:
        high *= EXPANSION_FACTOR

    gross, net, iterations, converged = bisect_monotone(
        take_home, target, low, high, tolerance, max_iterations
    )

    if converged:
        logger.debug(f"net-to-gross: {target:.2f} -> {gross:.2f} in {iterations} iterations")
    else:
        logger.warning(
            f"net-to-gross did not converge for {target:.2f} after {iterations} iterations "
            f"(best gross {gross:.2f}, take-home {net:.2f})"
        )

    return GrossForNetResult(
        target_net=target,
        gross_salary=gross,
        take_home_pay=net,
        difference=net - target,
        iterations=iterations,
        converged=converged,
        state=state,
        state_status=state_status,
    )
