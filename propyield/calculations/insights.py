"""
Analysis Insights

Area benchmarks and rule-based commentary that accompany the numbers:
insights, recommendations, risk factors, score-improvement tips, and
multi-year total ROI implied by the IRR.

Benchmarks are a fixed reference table, not live market data.
"""

from typing import Dict, Sequence, Tuple
from dataclasses import dataclass, asdict

from propyield.calculations.metrics import InvestmentMetrics
from propyield.calculations.parameters import ParameterSet

DEFAULT_ROI_YEARS = (1, 3, 5, 10)

# Estimated floor area by property type, in square meters
ESTIMATED_AREA_SQM = {
    "studio": 450,
    "apartment": 800,
    "townhouse": 1500,
    "villa": 2500,
}
DEFAULT_AREA_SQM = 800


@dataclass(frozen=True)
class MarketData:
    """Reference benchmarks for one area."""

    area: str
    avg_yield_pct: float
    avg_price_per_sqm: float
    growth_pct: float
    trend: str


MARKET_DATA = {
    "dubai marina": MarketData(
        "Dubai Marina", 6.5, 15000, 8.2,
        "High demand from young professionals, strong rental market.",
    ),
    "downtown dubai": MarketData(
        "Downtown Dubai", 5.8, 18000, 7.5,
        "Premium location with consistent appreciation, corporate demand.",
    ),
    "jumeirah village circle": MarketData(
        "Jumeirah Village Circle", 7.2, 12000, 9.1,
        "Family-friendly area with good value, growing popularity.",
    ),
    "business bay": MarketData(
        "Business Bay", 6.8, 14000, 8.7,
        "Business district with mixed-use development, strong rental demand.",
    ),
    "dubai hills estate": MarketData(
        "Dubai Hills Estate", 5.5, 16000, 6.8,
        "New development with modern amenities, premium family market.",
    ),
}


@dataclass(frozen=True)
class Insight:
    kind: str  # "positive" or "warning"
    message: str
    impact: str


@dataclass(frozen=True)
class Recommendation:
    title: str
    description: str
    impact: str = ""


@dataclass(frozen=True)
class RiskFactor:
    factor: str
    level: str  # "low", "medium", "high"
    description: str
    mitigation: str


@dataclass(frozen=True)
class InsightReport:
    """Commentary bundle attached to a ProjectionReport."""

    market: MarketData
    price_per_sqm: float
    insights: Tuple[Insight, ...]
    recommendations: Tuple[Recommendation, ...]
    risk_factors: Tuple[RiskFactor, ...]
    score_improvements: Tuple[Recommendation, ...]
    total_roi_pct: Dict[int, float]

    def to_dict(self) -> Dict:
        return asdict(self)


def market_data(area: str) -> MarketData:
    """
    Look up benchmarks for an area by name (case-insensitive).

    Unknown areas get citywide averages.
    """
    found = MARKET_DATA.get(area.strip().lower())
    if found is not None:
        return found
    return MarketData(
        area or "Dubai", 6.2, 14500, 7.8,
        "Stable growth area with good investment potential.",
    )


def estimated_area_sqm(property_type: str) -> float:
    return ESTIMATED_AREA_SQM.get(property_type.strip().lower(), DEFAULT_AREA_SQM)


def price_per_sqm(params: ParameterSet) -> float:
    return params.price / estimated_area_sqm(params.property_type)


def total_roi_pct(irr_pct: float, years: int) -> float:
    """Cumulative return over a holding period, compounding the IRR."""
    return ((1 + irr_pct / 100) ** years - 1) * 100


def generate_insights(
    params: ParameterSet, gross_yield_pct: float, market: MarketData
) -> Tuple[Insight, ...]:
    insights = []

    if gross_yield_pct > market.avg_yield_pct:
        insights.append(
            Insight(
                "positive",
                f"Excellent rental yield of {gross_yield_pct:.1f}% exceeds market "
                f"average by {gross_yield_pct - market.avg_yield_pct:.1f}%",
                "Strong cash flow potential",
            )
        )

    if params.down_payment_pct >= 30:
        insights.append(
            Insight(
                "positive",
                "Conservative financing with high down payment reduces risk",
                "Lower monthly obligations and interest costs",
            )
        )

    if params.vacancy_rate_pct <= 5:
        insights.append(
            Insight(
                "positive",
                "Low vacancy rate assumption indicates strong rental demand",
                "Stable income stream expected",
            )
        )

    if params.interest_rate_pct > 5.5:
        insights.append(
            Insight(
                "warning",
                "Interest rate is above current market average",
                "Consider negotiating better rates with lenders",
            )
        )

    return tuple(insights)


def generate_recommendations(params: ParameterSet) -> Tuple[Recommendation, ...]:
    recommendations = []

    if params.management_fee_pct > 10:
        recommendations.append(
            Recommendation(
                "Reduce Management Fees",
                "Consider self-managing or negotiating lower fees to improve cash flow",
                "Could increase annual return by AED 5,000+",
            )
        )

    if params.down_payment_pct < 25:
        recommendations.append(
            Recommendation(
                "Increase Down Payment",
                "Higher down payment reduces monthly mortgage and improves cash flow",
                "Better loan terms and reduced financial risk",
            )
        )

    recommendations.append(
        Recommendation(
            "Optimize Rental Pricing",
            "Research comparable properties to ensure competitive rental rates",
            "Maximize rental income potential",
        )
    )

    return tuple(recommendations)


def generate_risk_factors(params: ParameterSet) -> Tuple[RiskFactor, ...]:
    risks = [
        RiskFactor(
            "Market Risk",
            "medium",
            "Property values and rental rates may fluctuate with market conditions",
            "Long-term investment horizon helps weather market cycles",
        )
    ]

    if params.down_payment_pct < 25:
        risks.append(
            RiskFactor(
                "Leverage Risk",
                "high",
                "High loan-to-value ratio increases financial risk",
                "Consider increasing down payment or building cash reserves",
            )
        )

    risks.append(
        RiskFactor(
            "Vacancy Risk",
            "low",
            "Risk of extended vacancy periods affecting cash flow",
            "Good area selection and competitive pricing reduce vacancy risk",
        )
    )

    return tuple(risks)


def score_improvements(
    metrics: InvestmentMetrics, score_total: int, appreciation_rate_pct: float
) -> Tuple[Recommendation, ...]:
    """Suggestions keyed to the rubric categories that fell short."""
    tips = []

    if metrics.monthly_cash_flow <= 0:
        tips.append(
            Recommendation(
                "Improve Cash Flow",
                "Consider increasing rent, reducing vacancy rate, or negotiating "
                "lower management fees.",
            )
        )

    if metrics.dscr < 1.5:
        tips.append(
            Recommendation(
                "Strengthen Debt Coverage",
                "Increase down payment to reduce loan amount, or optimize rental "
                "income to improve DSCR above 1.5.",
            )
        )

    if metrics.monthly_expense_ratio_pct > 30:
        tips.append(
            Recommendation(
                "Reduce Expense Ratio",
                "Negotiate lower management fees, consider self-management, or shop "
                "for better insurance rates.",
            )
        )

    if appreciation_rate_pct <= 3:
        tips.append(
            Recommendation(
                "Consider Growth Areas",
                "Look for properties in developing areas with infrastructure projects "
                "or upcoming metro stations.",
            )
        )

    if score_total >= 8:
        tips.append(
            Recommendation(
                "Excellent Investment!",
                "This property shows strong fundamentals across all metrics. "
                "Consider proceeding with confidence.",
            )
        )

    return tuple(tips)


def build_insights(
    params: ParameterSet,
    metrics: InvestmentMetrics,
    score_total: int,
    irr_pct: float,
    roi_years: Sequence[int] = DEFAULT_ROI_YEARS,
) -> InsightReport:
    """Assemble benchmarks and commentary for one analysis."""
    market = market_data(params.area)

    return InsightReport(
        market=market,
        price_per_sqm=price_per_sqm(params),
        insights=generate_insights(params, metrics.gross_yield_pct, market),
        recommendations=generate_recommendations(params),
        risk_factors=generate_risk_factors(params),
        score_improvements=score_improvements(
            metrics, score_total, params.appreciation_rate_pct
        ),
        total_roi_pct={years: total_roi_pct(irr_pct, years) for years in roi_years},
    )
