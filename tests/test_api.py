"""
Tests for the calculation API endpoints.
"""

import pytest
from fastapi.testclient import TestClient

from propyield.main import app


@pytest.fixture
def client():
    """Create test client."""
    return TestClient(app)


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestAnalysisEndpoint:
    """Test the full analysis endpoint."""

    def test_analysis(self, client, reference_payload):
        """Test a valid analysis returns the report."""
        response = client.post("/api/calculate/analysis", json={"parameters": reference_payload})
        assert response.status_code == 200
        data = response.json()
        assert data["total_investment"] == 310000
        assert len(data["series"]) == 10
        assert data["score"]["total"] == 7
        assert data["score"]["risk_level"] == "Medium"
        assert len(data["score"]["categories"]) == 4
        assert data["suggested_rent"] == pytest.approx(73700 / 12 * 1.20)

    def test_analysis_includes_insights(self, client, reference_payload):
        """Test market commentary is returned with the report."""
        response = client.post("/api/calculate/analysis", json={"parameters": reference_payload})
        insights = response.json()["insights"]
        assert insights["market"]["area"] == "Dubai Marina"
        assert insights["price_per_sqm"] == 1250.0
        assert set(insights["total_roi_pct"]) == {"1", "3", "5", "10"}
        assert insights["recommendations"][-1]["title"] == "Optimize Rental Pricing"

    def test_analysis_horizon_override(self, client, reference_payload):
        """Test the horizon can be set per request."""
        response = client.post(
            "/api/calculate/analysis",
            json={"parameters": reference_payload, "horizon_years": 5},
        )
        assert response.status_code == 200
        assert len(response.json()["series"]) == 5

    def test_cash_purchase_serializes_infinite_dscr(self, client, reference_payload):
        """Test infinite DSCR is returned as null."""
        payload = dict(reference_payload, down_payment_pct=100)
        response = client.post("/api/calculate/analysis", json={"parameters": payload})
        assert response.status_code == 200
        data = response.json()
        assert data["series"][0]["dscr"] is None
        assert data["metrics"]["dscr"] is None

    @pytest.mark.parametrize(
        "field,value",
        [("price", 0), ("down_payment_pct", 120), ("loan_term_years", 0), ("vacancy_rate_pct", -1)],
    )
    def test_invalid_parameters_rejected(self, client, reference_payload, field, value):
        """Test validation happens before the engine runs."""
        payload = dict(reference_payload, **{field: value})
        response = client.post("/api/calculate/analysis", json={"parameters": payload})
        assert response.status_code == 422


class TestProjectionEndpoint:
    def test_projection(self, client, reference_payload):
        """Test the projection series is returned with the investment."""
        response = client.post("/api/calculate/projection", json={"parameters": reference_payload})
        assert response.status_code == 200
        data = response.json()
        assert data["total_investment"] == 310000
        assert data["series"][0]["year"] == 1
        assert data["series"][-1]["year"] == 10


class TestIRREndpoint:
    def test_irr(self, client):
        """Test IRR with metrics."""
        response = client.post("/api/calculate/irr", json={"cash_flows": [-100, 110]})
        assert response.status_code == 200
        data = response.json()
        assert data["irr_pct"] == pytest.approx(10.0, abs=0.1)
        assert data["converged"] is True
        assert data["multiple"] == pytest.approx(1.1)
        assert data["profit"] == pytest.approx(10)

    def test_irr_requires_two_flows(self, client):
        """Test a single cash flow is rejected."""
        response = client.post("/api/calculate/irr", json={"cash_flows": [-100]})
        assert response.status_code == 400

    def test_irr_negative_clamped(self, client):
        """Test losing cash flows report 0%."""
        response = client.post("/api/calculate/irr", json={"cash_flows": [-100, 40, 40, 10]})
        assert response.json()["irr_pct"] == 0.0


class TestAmortizationEndpoint:
    def test_amortization(self, client):
        """Test schedule generation."""
        response = client.post(
            "/api/calculate/amortization",
            json={
                "loan_amount": 100000,
                "annual_rate_pct": 6,
                "term_years": 5,
                "start_date": "2025-01-01",
            },
        )
        assert response.status_code == 200
        data = response.json()
        assert len(data["schedule"]) == 60
        assert data["total_principal"] == pytest.approx(100000, abs=1)
        assert data["monthly_payment"] == pytest.approx(1933.28, abs=0.01)


class TestScoreEndpoint:
    def test_score(self, client):
        """Test raw ratios are scored."""
        response = client.post(
            "/api/calculate/score",
            json={
                "monthly_cash_flow": 500,
                "cash_on_cash_pct": 7,
                "net_yield_pct": 6,
                "gross_yield_pct": 9,
                "debt_to_equity_pct": 300,
                "monthly_expense_ratio_pct": 70,
                "appreciation_rate_pct": 4,
            },
        )
        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 6
        assert data["recommendation"] == "Buy"


class TestRentEndpoint:
    def test_rent(self, client, reference_payload):
        """Test rent recommendation with a custom target."""
        response = client.post(
            "/api/calculate/rent",
            json={"parameters": reference_payload, "target_net_yield_pct": 6},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["base_rent"] == pytest.approx(73700 / 12)
        assert data["premiums"] == ["Location premium (+20%)"]
