"""
Financial calculation API endpoints.

These endpoints validate inputs and hand them to the pure calculation
engine. Validation lives here; the engine assumes well-formed values.
"""

import math
from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field
from typing import Any, List, Optional
from datetime import date

from propyield.calculations import amortization, irr, projection, rent, scoring
from propyield.calculations.parameters import ParameterSet, total_investment
from propyield.calculations.report import build_report
from propyield.config import get_settings

router = APIRouter()


def _json_safe(value: Any) -> Any:
    """Replace infinite/NaN floats with None so the response serializes."""
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, dict):
        return {k: _json_safe(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_json_safe(v) for v in value]
    return value


class ParameterSetInput(BaseModel):
    """Input for a property analysis."""

    # Purchase and financing
    price: float = Field(gt=0)
    down_payment_pct: float = Field(25.0, ge=0, le=100)
    loan_term_years: int = Field(25, gt=0, le=40)
    interest_rate_pct: float = Field(4.5, ge=0)

    # Revenue
    monthly_rent: float = Field(ge=0)
    additional_income: float = Field(0.0, ge=0)
    vacancy_rate_pct: float = Field(0.0, ge=0, le=100)

    # Expenses
    maintenance_rate_pct: float = Field(0.0, ge=0)
    management_fee_pct: float = Field(0.0, ge=0)
    management_base_fee: float = Field(0.0, ge=0)
    insurance_annual: float = Field(0.0, ge=0)
    other_expenses_annual: float = Field(0.0, ge=0)

    # Growth
    rent_growth_pct: float = Field(0.0, ge=0)
    appreciation_rate_pct: float = Field(0.0, ge=0)
    expense_inflation_pct: float = Field(0.0, ge=0)

    # Exit
    exit_cap_rate_pct: float = Field(0.0, ge=0)
    selling_costs_pct: float = Field(0.0, ge=0)

    # Acquisition costs
    agent_fee_pct: float = Field(2.0, ge=0)
    dld_fee_included: bool = True

    # Descriptive
    name: str = ""
    property_type: str = ""
    area: str = ""

    def to_parameters(self) -> ParameterSet:
        return ParameterSet(**self.model_dump())


class AnalysisInput(BaseModel):
    """Analysis request: parameters plus optional policy overrides."""

    parameters: ParameterSetInput
    horizon_years: Optional[int] = Field(None, ge=1, le=50)
    target_net_yield_pct: Optional[float] = Field(None, ge=0)


@router.post("/analysis")
async def calculate_analysis(inputs: AnalysisInput):
    """Run the full analysis and return the report."""
    settings = get_settings()

    report = build_report(
        inputs.parameters.to_parameters(),
        horizon_years=inputs.horizon_years or settings.projection_horizon_years,
        target_net_yield_pct=(
            inputs.target_net_yield_pct
            if inputs.target_net_yield_pct is not None
            else settings.target_net_yield_pct
        ),
        dld_fee_pct=settings.dld_fee_pct,
        premium_locations=settings.premium_locations,
    )

    return _json_safe(report.to_dict())


@router.post("/projection")
async def calculate_projection(inputs: AnalysisInput):
    """Return the yearly projection series only."""
    settings = get_settings()
    params = inputs.parameters.to_parameters()
    invested = total_investment(params, settings.dld_fee_pct)

    series = projection.generate(
        params,
        invested,
        inputs.horizon_years or settings.projection_horizon_years,
    )

    return _json_safe(
        {
            "total_investment": invested,
            "series": [year.to_dict() for year in series],
        }
    )


class IRRInput(BaseModel):
    """Input for IRR calculation."""

    cash_flows: List[float]


class IRRResponse(BaseModel):
    """Response with IRR calculation."""

    irr_pct: float
    converged: bool
    iterations: int
    multiple: float
    profit: float
    npv_at_10_percent: float


@router.post("/irr", response_model=IRRResponse)
async def calculate_irr_endpoint(inputs: IRRInput):
    """Calculate IRR for given cash flows."""
    if len(inputs.cash_flows) < 2:
        raise HTTPException(status_code=400, detail="At least 2 cash flows required")

    result = irr.newton_irr(inputs.cash_flows)

    return IRRResponse(
        irr_pct=result.rate_pct,
        converged=result.converged,
        iterations=result.iterations,
        multiple=irr.calculate_multiple(inputs.cash_flows),
        profit=irr.calculate_profit(inputs.cash_flows),
        npv_at_10_percent=irr.calculate_npv(inputs.cash_flows, 0.10),
    )


class AmortizationInput(BaseModel):
    """Input for amortization calculation."""

    loan_amount: float = Field(ge=0)
    annual_rate_pct: float = Field(ge=0)
    term_years: int = Field(gt=0, le=40)
    start_date: Optional[date] = None


@router.post("/amortization")
async def calculate_amortization(inputs: AmortizationInput):
    """Generate loan amortization schedule."""
    schedule = amortization.generate_amortization_schedule(
        loan_amount=inputs.loan_amount,
        annual_rate_pct=inputs.annual_rate_pct,
        term_years=inputs.term_years,
        start_date=inputs.start_date,
    )

    return {
        "monthly_payment": amortization.monthly_payment(
            inputs.loan_amount, inputs.annual_rate_pct, inputs.term_years
        ),
        "schedule": schedule,
        "total_interest": amortization.calculate_total_interest(schedule),
        "total_principal": sum(row["principal"] for row in schedule),
    }


class ScoreInput(BaseModel):
    """Headline ratios to score directly."""

    monthly_cash_flow: float
    cash_on_cash_pct: float
    net_yield_pct: float
    gross_yield_pct: float
    debt_to_equity_pct: float
    monthly_expense_ratio_pct: float
    appreciation_rate_pct: float = Field(ge=0)


@router.post("/score")
async def calculate_score(inputs: ScoreInput):
    """Score a set of headline ratios."""
    card = scoring.score_ratios(**inputs.model_dump())
    return card.to_dict()


@router.post("/rent")
async def calculate_rent(inputs: AnalysisInput):
    """Recommend a monthly rent for the target net yield."""
    settings = get_settings()

    recommendation = rent.recommend_rent(
        inputs.parameters.to_parameters(),
        target_net_yield_pct=(
            inputs.target_net_yield_pct
            if inputs.target_net_yield_pct is not None
            else settings.target_net_yield_pct
        ),
        premium_locations=settings.premium_locations,
    )

    return _json_safe(recommendation.to_dict())
