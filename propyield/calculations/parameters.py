"""
Analysis input parameters.

A ParameterSet is built by the caller from already-validated form or request
data. The calculation modules read it but never change it.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ParameterSet:
    """Property, financing, and growth assumptions for one analysis."""

    # Purchase and financing
    price: float
    down_payment_pct: float = 25.0
    loan_term_years: int = 25
    interest_rate_pct: float = 4.5

    # Revenue
    monthly_rent: float = 0.0
    additional_income: float = 0.0  # Monthly, not subject to vacancy
    vacancy_rate_pct: float = 0.0

    # Operating expenses
    maintenance_rate_pct: float = 0.0  # % of rent
    management_fee_pct: float = 0.0  # % of rent
    management_base_fee: float = 0.0  # Fixed monthly fee
    insurance_annual: float = 0.0
    other_expenses_annual: float = 0.0

    # Growth
    rent_growth_pct: float = 0.0
    appreciation_rate_pct: float = 0.0
    expense_inflation_pct: float = 0.0

    # Exit (carried for reporting; not applied to the projection)
    exit_cap_rate_pct: float = 0.0
    selling_costs_pct: float = 0.0

    # Acquisition costs
    agent_fee_pct: float = 0.0
    dld_fee_included: bool = False

    # Descriptive
    name: str = ""
    property_type: str = ""
    area: str = ""

    @property
    def loan_amount(self) -> float:
        return self.price * (100 - self.down_payment_pct) / 100

    @property
    def down_payment_amount(self) -> float:
        return self.price * self.down_payment_pct / 100


def acquisition_costs(params: ParameterSet, dld_fee_pct: float = 4.0) -> float:
    """Agent fee plus the land department transfer fee, if the buyer pays it."""
    agent_fee = params.price * params.agent_fee_pct / 100
    dld_fee = params.price * dld_fee_pct / 100 if params.dld_fee_included else 0.0
    return agent_fee + dld_fee


def total_investment(params: ParameterSet, dld_fee_pct: float = 4.0) -> float:
    """Cash the buyer puts in at closing: down payment plus acquisition costs."""
    return params.down_payment_amount + acquisition_costs(params, dld_fee_pct)
