"""
Rent Recommendation

Suggests a monthly rent that reaches a target net yield on the purchase
price, then applies property-type and location premiums.

The expense side is evaluated once at the entered rent. Maintenance and
management are percentages of rent, so the suggested rent is an
approximation rather than a fixed point of the yield equation.
"""

from typing import Dict, Optional, Sequence, Tuple
from dataclasses import dataclass

from propyield.calculations.amortization import monthly_payment as loan_payment
from propyield.calculations.metrics import monthly_operating_expenses
from propyield.calculations.parameters import ParameterSet

DEFAULT_TARGET_NET_YIELD_PCT = 6.0
DEFAULT_PREMIUM_LOCATIONS = ("downtown", "marina")

VILLA_PREMIUM = 1.15
PENTHOUSE_PREMIUM = 1.25
LOCATION_PREMIUM = 1.20


@dataclass(frozen=True)
class RentRecommendation:
    """Suggested rent and what it implies."""

    suggested_rent: float  # Monthly, after premiums
    base_rent: float  # Monthly, before premiums
    target_net_yield_pct: float
    net_yield_pct: float  # At base rent
    gross_yield_pct: float  # At base rent
    monthly_cash_flow: float  # At base rent, after debt service
    premiums: Tuple[str, ...]
    reasoning: Tuple[str, ...]

    def to_dict(self) -> Dict:
        return {
            "suggested_rent": self.suggested_rent,
            "base_rent": self.base_rent,
            "target_net_yield_pct": self.target_net_yield_pct,
            "net_yield_pct": self.net_yield_pct,
            "gross_yield_pct": self.gross_yield_pct,
            "monthly_cash_flow": self.monthly_cash_flow,
            "premiums": list(self.premiums),
            "reasoning": list(self.reasoning),
        }


def market_position(gross_yield_pct: float) -> str:
    if gross_yield_pct >= 10:
        return "Premium"
    if gross_yield_pct >= 8:
        return "Competitive"
    return "Below Market"


def apply_premiums(
    rent: float,
    property_type: str,
    area: str,
    premium_locations: Sequence[str] = DEFAULT_PREMIUM_LOCATIONS,
) -> Tuple[float, Tuple[str, ...]]:
    """
    Apply multiplicative rent premiums.

    A villa or penthouse premium (villa wins if both match) stacks with a
    location premium when the area names a premium location.
    """
    applied = []
    kind = property_type.lower()
    place = area.lower()

    if "villa" in kind:
        rent *= VILLA_PREMIUM
        applied.append("Villa premium (+15%)")
    elif "penthouse" in kind:
        rent *= PENTHOUSE_PREMIUM
        applied.append("Penthouse premium (+25%)")

    if any(keyword.lower() in place for keyword in premium_locations if keyword):
        rent *= LOCATION_PREMIUM
        applied.append("Location premium (+20%)")

    return rent, tuple(applied)


def recommend_rent(
    params: ParameterSet,
    target_net_yield_pct: float = DEFAULT_TARGET_NET_YIELD_PCT,
    premium_locations: Sequence[str] = DEFAULT_PREMIUM_LOCATIONS,
    monthly_payment: Optional[float] = None,
) -> RentRecommendation:
    """
    Recommend a monthly rent for a target net yield.

    Args:
        params: Analysis inputs
        target_net_yield_pct: Net yield on price to aim for, in percent
        premium_locations: Area keywords that earn the location premium
        monthly_payment: Loan payment, computed from params when omitted

    Returns:
        RentRecommendation
    """
    if monthly_payment is None:
        monthly_payment = loan_payment(
            params.loan_amount, params.interest_rate_pct, params.loan_term_years
        )

    monthly_expenses = monthly_operating_expenses(params)

    required_annual_rent = target_net_yield_pct / 100 * params.price + monthly_expenses * 12
    base_rent = required_annual_rent / 12

    net_yield_pct = (base_rent * 12 - monthly_expenses * 12) / params.price * 100
    gross_yield_pct = base_rent * 12 / params.price * 100
    cash_flow = base_rent - monthly_payment - monthly_expenses

    suggested_rent, premiums = apply_premiums(
        base_rent, params.property_type, params.area, premium_locations
    )

    reasoning = [
        f"Target net yield: {target_net_yield_pct:g}%",
        f"Gross yield: {gross_yield_pct:.1f}% (industry target: 8-12%)",
        f"Net yield: {net_yield_pct:.1f}% (after operating expenses)",
        f"Monthly cash flow: {'Positive' if cash_flow >= 0 else 'Negative'}",
        f"Market position: {market_position(gross_yield_pct)}",
    ]
    if premiums:
        reasoning.append("Market adjustment: " + " + ".join(premiums))

    return RentRecommendation(
        suggested_rent=suggested_rent,
        base_rent=base_rent,
        target_net_yield_pct=target_net_yield_pct,
        net_yield_pct=net_yield_pct,
        gross_yield_pct=gross_yield_pct,
        monthly_cash_flow=cash_flow,
        premiums=premiums,
        reasoning=tuple(reasoning),
    )
