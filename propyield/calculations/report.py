"""
Analysis Report

Runs the full calculation chain for one set of inputs and returns an
immutable report. Nothing is cached: each call recomputes from scratch.
"""

import logging
from typing import Dict, Sequence, Tuple
from dataclasses import dataclass

from propyield.calculations import (
    amortization,
    insights,
    irr,
    metrics,
    projection,
    rent,
    scoring,
)
from propyield.calculations.parameters import ParameterSet, total_investment

logger = logging.getLogger(__name__)

DEFAULT_DLD_FEE_PCT = 4.0


@dataclass(frozen=True)
class ProjectionReport:
    """Everything the dashboard and document export need for one analysis."""

    total_investment: float
    loan_amount: float
    monthly_payment: float
    series: Tuple[projection.YearlyProjection, ...]
    irr_pct: float
    irr_converged: bool
    score: scoring.ScoreCard
    suggested_rent: float
    metrics: metrics.InvestmentMetrics
    rent_recommendation: rent.RentRecommendation
    insights: insights.InsightReport

    def to_dict(self) -> Dict:
        """Return a fresh, plain-dict copy for consumers."""
        return {
            "total_investment": self.total_investment,
            "loan_amount": self.loan_amount,
            "monthly_payment": self.monthly_payment,
            "series": [year.to_dict() for year in self.series],
            "irr_pct": self.irr_pct,
            "irr_converged": self.irr_converged,
            "score": self.score.to_dict(),
            "suggested_rent": self.suggested_rent,
            "metrics": self.metrics.to_dict(),
            "rent_recommendation": self.rent_recommendation.to_dict(),
            "insights": self.insights.to_dict(),
        }


def build_report(
    params: ParameterSet,
    horizon_years: int = projection.DEFAULT_HORIZON_YEARS,
    target_net_yield_pct: float = rent.DEFAULT_TARGET_NET_YIELD_PCT,
    dld_fee_pct: float = DEFAULT_DLD_FEE_PCT,
    premium_locations: Sequence[str] = rent.DEFAULT_PREMIUM_LOCATIONS,
) -> ProjectionReport:
    """
    Analyze one property.

    Args:
        params: Validated analysis inputs
        horizon_years: Years to project
        target_net_yield_pct: Net yield the rent recommendation aims for
        dld_fee_pct: Transfer fee rate applied when dld_fee_included is set
        premium_locations: Area keywords that earn the location premium

    Returns:
        ProjectionReport
    """
    invested = total_investment(params, dld_fee_pct)
    loan_amount = params.loan_amount
    payment = amortization.monthly_payment(
        loan_amount, params.interest_rate_pct, params.loan_term_years
    )

    series = projection.generate(params, invested, horizon_years)

    irr_result = irr.newton_irr(irr.build_cash_flows(series, invested))

    summary = metrics.summarize(params, payment, invested)
    score_card = scoring.score_investment(summary, params.appreciation_rate_pct)

    recommendation = rent.recommend_rent(
        params,
        target_net_yield_pct=target_net_yield_pct,
        premium_locations=premium_locations,
        monthly_payment=payment,
    )

    commentary = insights.build_insights(
        params, summary, score_card.total, irr_result.rate_pct
    )

    logger.debug(
        f"Built report: investment={invested:.2f} irr={irr_result.rate_pct:.2f}% "
        f"score={score_card.total}/{scoring.MAX_SCORE}"
    )

    return ProjectionReport(
        total_investment=invested,
        loan_amount=loan_amount,
        monthly_payment=payment,
        series=tuple(series),
        irr_pct=irr_result.rate_pct,
        irr_converged=irr_result.converged,
        score=score_card,
        suggested_rent=recommendation.suggested_rent,
        metrics=summary,
        rent_recommendation=recommendation,
        insights=commentary,
    )
