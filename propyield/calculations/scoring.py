"""
Investment Scoring

Deterministic 10-point rubric across four categories. Every rule records a
pass or fail line so the dashboard can show why points were (not) awarded.

Thresholds are strict comparisons: a value sitting exactly on a threshold
does not earn the point.
"""

from typing import List, Dict, Tuple
from dataclasses import dataclass

from propyield.calculations.metrics import InvestmentMetrics

MAX_SCORE = 10


@dataclass(frozen=True)
class CategoryScore:
    """Points earned in one rubric category."""

    category: str
    points: int
    max_points: int
    rationale: Tuple[str, ...]

    def to_dict(self) -> Dict:
        return {
            "category": self.category,
            "points": self.points,
            "max_points": self.max_points,
            "rationale": list(self.rationale),
        }


@dataclass(frozen=True)
class ScoreCard:
    """Total score, risk band, and per-category breakdown."""

    total: int
    risk_level: str
    recommendation: str
    categories: Tuple[CategoryScore, ...]

    def category(self, name: str) -> CategoryScore:
        for item in self.categories:
            if item.category == name:
                return item
        raise KeyError(name)

    def to_dict(self) -> Dict:
        return {
            "total": self.total,
            "max_total": MAX_SCORE,
            "risk_level": self.risk_level,
            "recommendation": self.recommendation,
            "categories": [c.to_dict() for c in self.categories],
        }


def _rule(
    passed: bool, points: int, pass_text: str, fail_text: str
) -> Tuple[int, str]:
    if passed:
        return points, pass_text
    return 0, fail_text


def _category(name: str, max_points: int, rules: List[Tuple[int, str]]) -> CategoryScore:
    return CategoryScore(
        category=name,
        points=sum(points for points, _ in rules),
        max_points=max_points,
        rationale=tuple(text for _, text in rules),
    )


def score_cash_flow(monthly_cash_flow: float, cash_on_cash_pct: float) -> CategoryScore:
    """Cash Flow (max 4)."""
    return _category(
        "Cash Flow",
        4,
        [
            _rule(
                monthly_cash_flow > 0,
                2,
                "Positive monthly cash flow",
                "Monthly cash flow is not positive",
            ),
            _rule(
                cash_on_cash_pct > 6,
                1,
                "Good cash-on-cash return (>6%)",
                "Cash-on-cash return at or below 6%",
            ),
            _rule(
                cash_on_cash_pct > 10,
                1,
                "Excellent cash-on-cash return (>10%)",
                "Cash-on-cash return at or below 10%",
            ),
        ],
    )


def score_yield(net_yield_pct: float, gross_yield_pct: float) -> CategoryScore:
    """Yield (max 3)."""
    return _category(
        "Yield",
        3,
        [
            _rule(
                net_yield_pct > 5,
                1,
                "Good net yield (>5%)",
                "Net yield at or below 5%",
            ),
            _rule(
                net_yield_pct > 7,
                1,
                "Excellent net yield (>7%)",
                "Net yield at or below 7%",
            ),
            _rule(
                gross_yield_pct > 8,
                1,
                "Strong gross yield (>8%)",
                "Gross yield at or below 8%",
            ),
        ],
    )


def score_risk(debt_to_equity_pct: float, monthly_expense_ratio_pct: float) -> CategoryScore:
    """Risk (max 2)."""
    return _category(
        "Risk",
        2,
        [
            _rule(
                debt_to_equity_pct < 80,
                1,
                "Moderate leverage (debt-to-equity <80%)",
                "High leverage (debt-to-equity 80% or more)",
            ),
            _rule(
                monthly_expense_ratio_pct < 30,
                1,
                "Low expense ratio (<30%)",
                "Expense ratio 30% or more",
            ),
        ],
    )


def score_growth(appreciation_rate_pct: float) -> CategoryScore:
    """Growth (max 1)."""
    return _category(
        "Growth",
        1,
        [
            _rule(
                appreciation_rate_pct > 3,
                1,
                "Good appreciation potential (>3%)",
                "Appreciation at or below 3%",
            ),
        ],
    )


def risk_level(total: int) -> str:
    """Map a total score to a Low / Medium / High risk band."""
    if total >= 8:
        return "Low"
    if total >= 6:
        return "Medium"
    return "High"


def recommendation(total: int) -> str:
    """Map a total score to a buy/hold label."""
    if total >= 8:
        return "Strong Buy"
    if total >= 6:
        return "Buy"
    if total >= 4:
        return "Hold"
    return "Avoid"


def score_investment(metrics: InvestmentMetrics, appreciation_rate_pct: float) -> ScoreCard:
    """
    Score an investment out of 10.

    Args:
        metrics: Headline ratios from metrics.summarize
        appreciation_rate_pct: Expected annual appreciation in percent

    Returns:
        ScoreCard with the total, risk level, and category breakdown
    """
    return score_ratios(
        monthly_cash_flow=metrics.monthly_cash_flow,
        cash_on_cash_pct=metrics.cash_on_cash_pct,
        net_yield_pct=metrics.net_yield_pct,
        gross_yield_pct=metrics.gross_yield_pct,
        debt_to_equity_pct=metrics.debt_to_equity_pct,
        monthly_expense_ratio_pct=metrics.monthly_expense_ratio_pct,
        appreciation_rate_pct=appreciation_rate_pct,
    )


def score_ratios(
    monthly_cash_flow: float,
    cash_on_cash_pct: float,
    net_yield_pct: float,
    gross_yield_pct: float,
    debt_to_equity_pct: float,
    monthly_expense_ratio_pct: float,
    appreciation_rate_pct: float,
) -> ScoreCard:
    """Score raw ratios, all in percent except monthly cash flow."""
    categories = (
        score_cash_flow(monthly_cash_flow, cash_on_cash_pct),
        score_yield(net_yield_pct, gross_yield_pct),
        score_risk(debt_to_equity_pct, monthly_expense_ratio_pct),
        score_growth(appreciation_rate_pct),
    )
    total = sum(c.points for c in categories)

    return ScoreCard(
        total=total,
        risk_level=risk_level(total),
        recommendation=recommendation(total),
        categories=categories,
    )
