"""
Pytest configuration and shared fixtures.
"""

import pytest
import sys
import os

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from propyield.calculations.parameters import ParameterSet


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "slow: marks tests as slow")
    config.addinivalue_line("markers", "integration: marks integration tests")


@pytest.fixture(scope="session")
def anyio_backend():
    """Backend for async tests."""
    return "asyncio"


@pytest.fixture
def reference_params():
    """The reference apartment: 1M AED, 25% down, 25 years at 4.5%."""
    return ParameterSet(
        price=1_000_000.0,
        down_payment_pct=25.0,
        loan_term_years=25,
        interest_rate_pct=4.5,
        monthly_rent=8000.0,
        additional_income=0.0,
        vacancy_rate_pct=10.0,
        maintenance_rate_pct=2.0,
        management_fee_pct=8.0,
        management_base_fee=200.0,
        insurance_annual=1500.0,
        other_expenses_annual=200.0,
        rent_growth_pct=3.0,
        appreciation_rate_pct=4.0,
        expense_inflation_pct=2.5,
        exit_cap_rate_pct=6.0,
        selling_costs_pct=3.0,
        agent_fee_pct=2.0,
        dld_fee_included=True,
        name="Marina Heights Tower",
        property_type="Apartment",
        area="Dubai Marina",
    )


@pytest.fixture
def reference_payload():
    """Request body equivalent of reference_params."""
    return {
        "price": 1_000_000,
        "down_payment_pct": 25,
        "loan_term_years": 25,
        "interest_rate_pct": 4.5,
        "monthly_rent": 8000,
        "vacancy_rate_pct": 10,
        "maintenance_rate_pct": 2,
        "management_fee_pct": 8,
        "management_base_fee": 200,
        "insurance_annual": 1500,
        "other_expenses_annual": 200,
        "rent_growth_pct": 3,
        "appreciation_rate_pct": 4,
        "expense_inflation_pct": 2.5,
        "exit_cap_rate_pct": 6,
        "selling_costs_pct": 3,
        "agent_fee_pct": 2,
        "dld_fee_included": True,
        "name": "Marina Heights Tower",
        "property_type": "Apartment",
        "area": "Dubai Marina",
    }
