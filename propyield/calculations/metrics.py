"""
Summary Investment Metrics

First-year ratios at the entered rent: cash flow, yields, leverage, and
expense load. These feed the scoring rubric and the dashboard headline.
"""

from typing import Dict
from dataclasses import dataclass, asdict, field

from propyield.calculations.amortization import amortize_year, calculate_dscr
from propyield.calculations.parameters import ParameterSet


@dataclass(frozen=True)
class InvestmentMetrics:
    """Headline ratios for one analysis. Percentages are in percent units."""

    monthly_income: float
    monthly_operating_expenses: float
    monthly_payment: float
    monthly_cash_flow: float
    cash_on_cash_pct: float
    gross_yield_pct: float
    net_yield_pct: float
    debt_to_equity_pct: float
    monthly_expense_ratio_pct: float
    dscr: float
    annual_roi_pct: float
    expense_breakdown: Dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> Dict:
        return asdict(self)


def monthly_operating_expenses(params: ParameterSet) -> float:
    """Operating expenses for one month at the entered rent, excluding debt service."""
    return (
        params.monthly_rent * (params.maintenance_rate_pct / 100)
        + params.monthly_rent * (params.management_fee_pct / 100)
        + params.management_base_fee
        + params.insurance_annual / 12
        + params.other_expenses_annual / 12
    )


def expense_breakdown(params: ParameterSet, monthly_payment: float) -> Dict[str, float]:
    """Monthly outgoings by category."""
    return {
        "mortgage": monthly_payment,
        "management": params.monthly_rent * (params.management_fee_pct / 100)
        + params.management_base_fee,
        "maintenance": params.monthly_rent * (params.maintenance_rate_pct / 100),
        "insurance": params.insurance_annual / 12,
        "other": params.other_expenses_annual / 12,
    }


def _ratio_pct(numerator: float, denominator: float) -> float:
    if denominator == 0:
        return 0.0
    return numerator / denominator * 100


def summarize(
    params: ParameterSet, monthly_payment: float, total_investment: float
) -> InvestmentMetrics:
    """
    Calculate headline metrics at the entered (year-0) rent.

    Zero denominators produce 0 or infinity rather than raising.

    Args:
        params: Analysis inputs
        monthly_payment: Loan payment from the amortization model
        total_investment: Cash invested at closing

    Returns:
        InvestmentMetrics
    """
    monthly_income = (
        params.monthly_rent * (1 - params.vacancy_rate_pct / 100)
        + params.additional_income
    )
    opex = monthly_operating_expenses(params)
    monthly_cash_flow = monthly_income - monthly_payment - opex
    annual_cash_flow = monthly_cash_flow * 12

    gross_yield_pct = _ratio_pct(
        (params.monthly_rent + params.additional_income) * 12, params.price
    )
    net_yield_pct = _ratio_pct((monthly_income - opex) * 12, params.price)
    cash_on_cash_pct = _ratio_pct(annual_cash_flow, total_investment)

    loan_amount = params.loan_amount
    down_payment = params.down_payment_amount
    if down_payment > 0:
        debt_to_equity_pct = loan_amount / down_payment * 100
    elif loan_amount > 0:
        debt_to_equity_pct = float("inf")
    else:
        debt_to_equity_pct = 0.0

    if monthly_income > 0:
        monthly_expense_ratio_pct = (monthly_payment + opex) / monthly_income * 100
    else:
        monthly_expense_ratio_pct = float("inf")

    dscr = calculate_dscr((monthly_income - opex) * 12, monthly_payment * 12)

    # First-year principal paydown counts toward return
    closing_balance = amortize_year(
        max(0.0, loan_amount), monthly_payment, params.interest_rate_pct
    )
    principal_paid = max(0.0, loan_amount) - closing_balance
    annual_roi_pct = _ratio_pct(annual_cash_flow + principal_paid, total_investment)

    return InvestmentMetrics(
        monthly_income=monthly_income,
        monthly_operating_expenses=opex,
        monthly_payment=monthly_payment,
        monthly_cash_flow=monthly_cash_flow,
        cash_on_cash_pct=cash_on_cash_pct,
        gross_yield_pct=gross_yield_pct,
        net_yield_pct=net_yield_pct,
        debt_to_equity_pct=debt_to_equity_pct,
        monthly_expense_ratio_pct=monthly_expense_ratio_pct,
        dscr=dscr,
        annual_roi_pct=annual_roi_pct,
        expense_breakdown=expense_breakdown(params, monthly_payment),
    )
