"""
IRR and NPV Calculations

Implements IRR for periodic cash flows using the Newton-Raphson method.
The solver never raises: it returns its best estimate together with a
convergence flag, and reports an undefined rate as None.
"""

import math
from dataclasses import dataclass
from typing import List, Optional, Sequence

MAX_ITERATIONS = 100
TOLERANCE = 1e-4
DEFAULT_GUESS = 0.1


@dataclass(frozen=True)
class IRRResult:
    """Outcome of an IRR solve."""

    rate: Optional[float]  # None when the rate is undefined
    iterations: int
    converged: bool


def calculate_npv(cash_flows: Sequence[float], discount_rate: float) -> float:
    """
    Calculate NPV (Net Present Value) of cash flows.

    Args:
        cash_flows: Array of cash flows (negative = outflow, positive = inflow)
        discount_rate: Periodic discount rate (e.g., 0.10 for 10%)

    Returns:
        NPV value
    """
    npv = 0.0
    for period, cf in enumerate(cash_flows):
        npv += cf / ((1 + discount_rate) ** period)
    return npv


def _npv_derivative(cash_flows: Sequence[float], rate: float) -> float:
    """Calculate derivative of NPV with respect to rate (for Newton-Raphson)."""
    dnpv = 0.0
    for period, cf in enumerate(cash_flows):
        dnpv -= (period * cf) / ((1 + rate) ** (period + 1))
    return dnpv


def solve_irr(cash_flows: Sequence[float], guess: float = DEFAULT_GUESS) -> IRRResult:
    """
    Solve for IRR (Internal Rate of Return) using Newton-Raphson.

    cash_flows[0] is the initial outlay; the final entry already includes
    any terminal proceeds. The sequence is not checked for a sign change.

    Stops once successive estimates differ by less than TOLERANCE or after
    MAX_ITERATIONS steps. In the latter case the last estimate is returned
    with converged=False. A zero derivative, a rate of exactly -100%, or an
    estimate that leaves the finite range makes the rate undefined.
    """
    flows: List[float] = [float(cf) for cf in cash_flows]
    rate = guess

    for iteration in range(1, MAX_ITERATIONS + 1):
        try:
            npv = calculate_npv(flows, rate)
            dnpv = _npv_derivative(flows, rate)
            new_rate = rate - npv / dnpv
        except (ZeroDivisionError, OverflowError):
            return IRRResult(rate=None, iterations=iteration, converged=False)

        if not math.isfinite(new_rate):
            return IRRResult(rate=None, iterations=iteration, converged=False)

        if abs(new_rate - rate) < TOLERANCE:
            return IRRResult(rate=new_rate, iterations=iteration, converged=True)

        rate = new_rate

    return IRRResult(rate=rate, iterations=MAX_ITERATIONS, converged=False)


def calculate_irr(
    cash_flows: Sequence[float], guess: float = DEFAULT_GUESS
) -> Optional[float]:
    """
    Calculate IRR for periodic cash flows.

    Returns:
        Best-effort IRR as decimal (e.g., 0.15 for 15%), or None if undefined
    """
    return solve_irr(cash_flows, guess).rate


def calculate_multiple(cash_flows: Sequence[float]) -> float:
    """
    Calculate equity multiple from a cash flow series.

    Args:
        cash_flows: Array of cash flows (investments are negative)

    Returns:
        Multiple (e.g., 2.0 = 2.0x return), 0 when there is no outflow
    """
    total_inflows = sum(cf for cf in cash_flows if cf > 0)
    total_outflows = abs(sum(cf for cf in cash_flows if cf < 0))

    if total_outflows == 0:
        return 0.0

    return total_inflows / total_outflows
