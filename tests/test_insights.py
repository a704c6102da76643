"""
Tests for market benchmarks and analysis commentary.
"""

import pytest
from dataclasses import replace

from propyield.calculations.amortization import monthly_payment
from propyield.calculations.insights import (
    build_insights,
    estimated_area_sqm,
    generate_insights,
    generate_recommendations,
    generate_risk_factors,
    market_data,
    price_per_sqm,
    score_improvements,
    total_roi_pct,
)
from propyield.calculations.metrics import summarize


def _metrics(params):
    payment = monthly_payment(
        params.loan_amount, params.interest_rate_pct, params.loan_term_years
    )
    return summarize(params, payment, 310000)


class TestMarketData:
    """Test area benchmark lookup."""

    def test_known_area(self):
        """Test a listed area returns its benchmarks."""
        market = market_data("Dubai Marina")
        assert market.avg_yield_pct == 6.5
        assert market.avg_price_per_sqm == 15000
        assert market.growth_pct == 8.2
        assert "young professionals" in market.trend

    def test_lookup_ignores_case_and_whitespace(self):
        """Test area names match loosely."""
        assert market_data("  business bay ") == market_data("Business Bay")

    def test_unknown_area_falls_back(self):
        """Test unlisted areas get citywide averages."""
        market = market_data("Al Barsha")
        assert market.area == "Al Barsha"
        assert market.avg_yield_pct == 6.2
        assert market.avg_price_per_sqm == 14500
        assert market.growth_pct == 7.8

    @pytest.mark.parametrize(
        "property_type,sqm",
        [("Studio", 450), ("Apartment", 800), ("Townhouse", 1500), ("Villa", 2500), ("Penthouse", 800)],
    )
    def test_estimated_area(self, property_type, sqm):
        assert estimated_area_sqm(property_type) == sqm

    def test_price_per_sqm(self, reference_params):
        """Test price is spread over the estimated area."""
        assert price_per_sqm(reference_params) == 1_000_000.0 / 800


class TestTotalROI:
    """Test IRR compounding over a holding period."""

    def test_one_year_equals_irr(self):
        assert total_roi_pct(12.0, 1) == pytest.approx(12.0)

    def test_compounds(self):
        assert total_roi_pct(10.0, 3) == pytest.approx(33.1)

    def test_zero_irr(self):
        assert total_roi_pct(0.0, 10) == 0.0


class TestCommentary:
    """Test rule-based insights, recommendations, and risk factors."""

    def test_reference_insights(self, reference_params):
        """Test only the above-market yield fires for the reference apartment."""
        insights = generate_insights(reference_params, 9.6, market_data("Dubai Marina"))
        assert len(insights) == 1
        assert insights[0].kind == "positive"
        assert insights[0].message == (
            "Excellent rental yield of 9.6% exceeds market average by 3.1%"
        )

    def test_all_insights(self, reference_params):
        """Test each insight rule can fire."""
        params = replace(
            reference_params, down_payment_pct=30.0, vacancy_rate_pct=5.0, interest_rate_pct=6.0
        )
        insights = generate_insights(params, 9.6, market_data("Dubai Marina"))
        assert [i.kind for i in insights] == ["positive", "positive", "positive", "warning"]

    def test_yield_at_market_average_is_not_praised(self, reference_params):
        assert generate_insights(reference_params, 6.5, market_data("Dubai Marina")) == ()

    def test_recommendations(self, reference_params):
        """Test pricing advice is always given; fee and leverage advice on thresholds."""
        titles = [r.title for r in generate_recommendations(reference_params)]
        assert titles == ["Optimize Rental Pricing"]

        params = replace(reference_params, management_fee_pct=12.0, down_payment_pct=20.0)
        titles = [r.title for r in generate_recommendations(params)]
        assert titles == [
            "Reduce Management Fees",
            "Increase Down Payment",
            "Optimize Rental Pricing",
        ]

    def test_risk_factors(self, reference_params):
        """Test leverage risk appears only below 25% down."""
        risks = generate_risk_factors(reference_params)
        assert [(r.factor, r.level) for r in risks] == [
            ("Market Risk", "medium"),
            ("Vacancy Risk", "low"),
        ]

        leveraged = generate_risk_factors(replace(reference_params, down_payment_pct=20.0))
        assert ("Leverage Risk", "high") in [(r.factor, r.level) for r in leveraged]


class TestScoreImprovements:
    """Test score-improvement suggestions."""

    def test_reference_improvements(self, reference_params):
        """Test weak coverage and high expense ratio are flagged."""
        tips = score_improvements(_metrics(reference_params), 7, 4.0)
        assert [t.title for t in tips] == ["Strengthen Debt Coverage", "Reduce Expense Ratio"]

    def test_negative_cash_flow_and_low_growth(self, reference_params):
        params = replace(reference_params, monthly_rent=3000.0)
        tips = score_improvements(_metrics(params), 2, 3.0)
        titles = [t.title for t in tips]
        assert titles[0] == "Improve Cash Flow"
        assert "Consider Growth Areas" in titles

    def test_high_score_is_congratulated(self, reference_params):
        params = replace(reference_params, down_payment_pct=100.0)
        tips = score_improvements(_metrics(params), 8, 4.0)
        assert tips[-1].title == "Excellent Investment!"
        assert "Strengthen Debt Coverage" not in [t.title for t in tips]


class TestBuildInsights:
    def test_bundle(self, reference_params):
        """Test the bundle carries benchmarks and total ROI per holding period."""
        bundle = build_insights(reference_params, _metrics(reference_params), 7, 10.0)
        assert bundle.market.area == "Dubai Marina"
        assert bundle.price_per_sqm == 1250.0
        assert sorted(bundle.total_roi_pct) == [1, 3, 5, 10]
        assert bundle.total_roi_pct[3] == pytest.approx(33.1)

        data = bundle.to_dict()
        assert data["market"]["avg_yield_pct"] == 6.5
        assert data["risk_factors"][0]["factor"] == "Market Risk"
