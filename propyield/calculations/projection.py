"""
Multi-Year Projection

Builds the year-by-year forecast of income, expenses, debt paydown, equity,
and total return for a single property.
"""

from typing import List, Dict
from dataclasses import dataclass, asdict

from propyield.calculations.amortization import (
    amortize_year,
    calculate_dscr,
    monthly_payment,
)
from propyield.calculations.parameters import ParameterSet

DEFAULT_HORIZON_YEARS = 10


@dataclass(frozen=True)
class YearlyProjection:
    """One year of the forecast."""

    year: int
    net_cash_flow: float
    cumulative_cash: float
    equity: float
    dscr: float
    total_return_pct: float
    property_value: float
    remaining_debt: float
    total_income: float
    annual_expenses: float
    annual_debt_service: float
    monthly_rent: float  # Grown rent for this year

    def to_dict(self) -> Dict:
        return asdict(self)


def annual_operating_expenses(
    params: ParameterSet, rent: float, insurance: float
) -> float:
    """
    Operating expenses for one year at the given monthly rent.

    Maintenance and management scale with the rent passed in. The fixed
    management fee and other expenses are used as entered.
    """
    return (
        rent * params.maintenance_rate_pct / 100 * 12
        + rent * params.management_fee_pct / 100 * 12
        + params.management_base_fee * 12
        + insurance
        + params.other_expenses_annual
    )


def generate(
    params: ParameterSet,
    total_investment: float,
    horizon_years: int = DEFAULT_HORIZON_YEARS,
) -> List[YearlyProjection]:
    """
    Generate the yearly projection series.

    Rent and insurance compound from the previous year's grown value. Debt
    and cumulative cash carry forward year to year; property value is taken
    directly from the purchase price.

    Args:
        params: Analysis inputs
        total_investment: Cash invested at closing
        horizon_years: Number of years to project

    Returns:
        One YearlyProjection per year, years 1..horizon_years
    """
    series = []

    payment = monthly_payment(
        params.loan_amount, params.interest_rate_pct, params.loan_term_years
    )
    annual_debt_service = payment * 12

    running_rent = params.monthly_rent
    running_insurance = params.insurance_annual
    remaining_debt = max(0.0, params.loan_amount)
    cumulative_cash = 0.0

    for year in range(1, horizon_years + 1):
        # === GROWTH ===
        running_rent = running_rent * (1 + params.rent_growth_pct / 100)
        running_insurance = running_insurance * (1 + params.expense_inflation_pct / 100)

        # === INCOME ===
        effective_rent = running_rent * (1 - params.vacancy_rate_pct / 100)
        total_income = effective_rent * 12 + params.additional_income * 12

        # === EXPENSES ===
        annual_expenses = annual_operating_expenses(
            params, running_rent, running_insurance
        )

        net_cash_flow = total_income - annual_expenses - annual_debt_service

        # === DEBT AND VALUE ===
        remaining_debt = amortize_year(
            remaining_debt, payment, params.interest_rate_pct
        )
        # The last scheduled payment retires the loan; drop rounding residue
        if year >= params.loan_term_years:
            remaining_debt = 0.0
        property_value = params.price * (1 + params.appreciation_rate_pct / 100) ** year

        # === RETURNS ===
        equity = max(0.0, property_value - remaining_debt)
        cumulative_cash += net_cash_flow

        if total_investment != 0:
            total_return_pct = (
                (cumulative_cash + equity - total_investment) / total_investment * 100
            )
        else:
            total_return_pct = 0.0

        dscr = calculate_dscr(total_income - annual_expenses, annual_debt_service)

        series.append(
            YearlyProjection(
                year=year,
                net_cash_flow=net_cash_flow,
                cumulative_cash=cumulative_cash,
                equity=equity,
                dscr=dscr,
                total_return_pct=total_return_pct,
                property_value=property_value,
                remaining_debt=remaining_debt,
                total_income=total_income,
                annual_expenses=annual_expenses,
                annual_debt_service=annual_debt_service,
                monthly_rent=running_rent,
            )
        )

    return series
