"""
Pytest configuration and shared fixtures for the wealth planner tests.
"""

import pytest

from wealth_planner import create_app
from wealth_planner.config import reset_global_settings
from wealth_planner.models.entities import (
    Debt,
    ExpenseCategory,
    IncomeSource,
    RealEstateProperty,
    ScenarioData,
)


@pytest.fixture
def app(monkeypatch):
    """Create an application with a valid test configuration."""
    reset_global_settings()
    monkeypatch.setenv("SECRET_KEY", "test-secret-key-123")
    monkeypatch.setenv("APP_ENV", "testing")
    application = create_app()
    yield application
    application.extensions["forecast_service"].monte_carlo.shutdown()
    reset_global_settings()


@pytest.fixture
def client(app):
    """Create a Flask test client."""
    return app.test_client()


@pytest.fixture
def salary_income():
    """A flat $120,000 salary."""
    return IncomeSource(
        name="Salary", type="salary", amount=120000, frequency="annually"
    )


@pytest.fixture
def sample_property():
    """A $500,000 home bought in year 1 with a $400,000 30-year loan."""
    return RealEstateProperty(
        id="home",
        name="Home",
        purchase_price=500000,
        down_payment=100000,
        loan_amount=400000,
        interest_rate=6.0,
        loan_term_years=30,
        purchase_year=1,
        appreciation_rate=3.0,
        maintenance_rate=1.0,
        property_tax_rate=1.2,
    )


@pytest.fixture
def sample_debts():
    """A credit card and a car loan with different APRs and balances."""
    return [
        Debt(id="card", name="Credit Card", balance=5000, apr=22.0, loan_term_years=5),
        Debt(id="car", name="Car Loan", balance=2000, apr=6.0, loan_term_years=3),
    ]


@pytest.fixture
def sample_scenario_data(salary_income, sample_property, sample_debts):
    """A household with a salary, living expenses, a home and two debts."""
    return ScenarioData(
        incomes=[salary_income],
        expenses=[
            ExpenseCategory(
                name="Living", amount=3000, frequency="monthly", growth_rate=3.0
            )
        ],
        properties=[sample_property],
        debts=sample_debts,
        initial_wealth=50000,
        investment_return=7,
        projection_years=10,
        state="California",
        filing_status="single",
    )
