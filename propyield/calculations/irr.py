"""
IRR and NPV Calculations

Implements IRR using the Newton-Raphson method over yearly cash flows.
The solver never raises: a series it cannot solve returns its last guess.
"""

import logging
from typing import List, Sequence
from dataclasses import dataclass
import numpy as np

logger = logging.getLogger(__name__)

MAX_ITERATIONS = 100
TOLERANCE = 1e-4
DEFAULT_GUESS = 0.1

# Keeps (1 + rate) positive between steps
MIN_RATE = -0.99
MAX_RATE = 10.0


@dataclass(frozen=True)
class IRRResult:
    """Outcome of a Newton-Raphson IRR run."""

    rate: float  # Decimal, unclamped (may be negative)
    iterations: int
    converged: bool

    @property
    def rate_pct(self) -> float:
        """IRR in percent, floored at zero."""
        return max(0.0, self.rate * 100)


def calculate_npv(cash_flows: Sequence[float], discount_rate: float) -> float:
    """
    Calculate NPV (Net Present Value) of cash flows.

    Args:
        cash_flows: Array of cash flows (negative = outflow, positive = inflow)
        discount_rate: Annual discount rate (e.g., 0.10 for 10%)

    Returns:
        NPV value
    """
    flows = np.asarray(cash_flows, dtype=float)
    periods = np.arange(len(flows))
    return float(np.sum(flows / (1 + discount_rate) ** periods))


def _npv_derivative(cash_flows: Sequence[float], rate: float) -> float:
    """Calculate derivative of NPV with respect to rate (for Newton-Raphson)."""
    flows = np.asarray(cash_flows, dtype=float)
    periods = np.arange(len(flows))
    return float(-np.sum(periods * flows / (1 + rate) ** (periods + 1)))


def newton_irr(
    cash_flows: Sequence[float], guess: float = DEFAULT_GUESS
) -> IRRResult:
    """
    Run Newton-Raphson on NPV(rate) and report how it went.

    Stops when the derivative is too flat to divide by or when the step
    falls under TOLERANCE. A series without both inflows and outflows has
    no IRR and reports rate 0, not converged.
    """
    has_positive = any(cf > 0 for cf in cash_flows)
    has_negative = any(cf < 0 for cf in cash_flows)

    if len(cash_flows) < 2 or not has_positive or not has_negative:
        logger.debug("IRR undefined for cash flows without a sign change")
        return IRRResult(rate=0.0, iterations=0, converged=False)

    rate = guess

    for iteration in range(1, MAX_ITERATIONS + 1):
        npv = calculate_npv(cash_flows, rate)
        dnpv = _npv_derivative(cash_flows, rate)

        if abs(dnpv) < TOLERANCE:
            logger.debug(f"IRR stopped on flat derivative at rate {rate:.6f}")
            return IRRResult(rate=rate, iterations=iteration, converged=False)

        new_rate = min(MAX_RATE, max(MIN_RATE, rate - npv / dnpv))

        if abs(new_rate - rate) < TOLERANCE:
            # A step pinned at a bound has stalled, not found a root
            converged = MIN_RATE < new_rate < MAX_RATE
            if not converged:
                logger.warning(f"IRR stalled at rate bound {new_rate:.2f}")
            return IRRResult(rate=new_rate, iterations=iteration, converged=converged)

        rate = new_rate

    logger.warning(
        f"IRR did not converge after {MAX_ITERATIONS} iterations, using {rate:.6f}"
    )
    return IRRResult(rate=rate, iterations=MAX_ITERATIONS, converged=False)


def solve_irr(cash_flows: Sequence[float], guess: float = DEFAULT_GUESS) -> float:
    """
    Calculate IRR in percent.

    Negative rates are reported as 0%. Never raises.

    Args:
        cash_flows: Yearly cash flows, initial investment first
        guess: Initial guess for rate (default 0.1 = 10%)

    Returns:
        IRR in percent (e.g., 12.5 for 12.5%)
    """
    return newton_irr(cash_flows, guess).rate_pct


def build_cash_flows(series, total_investment: float) -> List[float]:
    """
    Build the IRR cash-flow series from a yearly projection.

    The sale is modeled as receiving the final year's equity on top of that
    year's net cash flow. Exit cap rate and selling costs are not applied.
    """
    flows = [-total_investment]
    flows.extend(year.net_cash_flow for year in series)

    if series:
        flows[-1] += series[-1].equity

    return flows


def calculate_multiple(cash_flows: Sequence[float]) -> float:
    """
    Calculate equity multiple.

    Returns 0 when there is no investment to measure against.
    """
    total_inflows = sum(cf for cf in cash_flows if cf > 0)
    total_outflows = abs(sum(cf for cf in cash_flows if cf < 0))

    if total_outflows == 0:
        return 0.0

    return total_inflows / total_outflows


def calculate_profit(cash_flows: Sequence[float]) -> float:
    """Calculate profit (total inflows minus total outflows)."""
    return sum(cash_flows)
