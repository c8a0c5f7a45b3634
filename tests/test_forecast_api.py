"""
Tests for the forecast API endpoints.
"""

from unittest.mock import patch

import pytest

from wealth_planner.models.tax_engine import total_tax


class TestProjectionEndpoint:
    """Test POST /api/projection."""

    def test_projection_with_defaults(self, client):
        """Omitted state, filing status and horizon use configured defaults."""
        response = client.post(
            "/api/projection",
            json={
                "incomes": [{"name": "Salary", "type": "salary", "amount": 120000}],
                "initialWealth": 0,
                "investmentReturn": 0,
            },
        )

        assert response.status_code == 200
        projections = response.get_json()["projections"]
        assert len(projections) == 10
        assert projections[0]["year"] == 1
        assert projections[0]["gross_income"] == 120000
        assert projections[0]["taxes"] == pytest.approx(
            total_tax(120000, "salary", "California", "single")
        )

    def test_projection_horizon(self, client):
        response = client.post("/api/projection", json={"projectionYears": 3})

        assert response.status_code == 200
        assert [p["year"] for p in response.get_json()["projections"]] == [1, 2, 3]

    def test_projection_invalid_income_type(self, client):
        response = client.post(
            "/api/projection", json={"incomes": [{"type": "lottery", "amount": 1}]}
        )

        assert response.status_code == 400
        data = response.get_json()
        assert "error" in data
        assert data["details"]

    def test_projection_failure(self, client):
        """Engine failures are reported as server errors."""
        with patch(
            "wealth_planner.services.forecast_service.ProjectionEngine.project",
            side_effect=RuntimeError("boom"),
        ):
            response = client.post("/api/projection", json={})

        assert response.status_code == 500
        assert response.get_json()["message"] == "boom"


class TestTaxEndpoint:
    """Test POST /api/tax."""

    def test_tax_split(self, client):
        response = client.post(
            "/api/tax",
            json={"income": 120000, "incomeType": "salary", "state": "California"},
        )

        assert response.status_code == 200
        data = response.get_json()
        assert data["income_type"] == "salary"
        assert data["filing_status"] == "single"
        assert data["federal"] == pytest.approx(21842.5)
        assert data["state_tax"] == pytest.approx(7702.362)
        assert data["total"] == pytest.approx(21842.5 + 7702.362)
        assert data["effective_rate"] == pytest.approx(data["total"] / 120000 * 100)

    def test_tax_default_state(self, client):
        response = client.post("/api/tax", json={"income": 100000, "income_type": "investment"})

        data = response.get_json()
        assert data["state"] == "California"
        assert data["federal"] == pytest.approx(15000)

    def test_tax_unknown_type(self, client):
        response = client.post("/api/tax", json={"income": 1, "income_type": "lottery"})
        assert response.status_code == 400


class TestDebtEndpoints:
    """Test the debt payoff endpoints."""

    debts = [
        {"id": "card", "balance": 5000, "apr": 22, "loanTermYears": 5},
        {"id": "car", "balance": 2000, "apr": 6, "loanTermYears": 3},
    ]

    def test_plan(self, client):
        response = client.post(
            "/api/debts/plan",
            json={"debts": self.debts, "extraPayment": 200, "strategy": "snowball"},
        )

        assert response.status_code == 200
        plan = response.get_json()
        assert plan["strategy"] == "snowball"
        assert plan["converged"] is True
        assert plan["payoff_months"] == len(plan["monthly_schedule"])

    def test_plan_defaults_to_avalanche(self, client):
        response = client.post("/api/debts/plan", json={"debts": self.debts})
        assert response.get_json()["strategy"] == "avalanche"

    def test_plan_invalid_strategy(self, client):
        response = client.post(
            "/api/debts/plan", json={"debts": self.debts, "strategy": "tsunami"}
        )
        assert response.status_code == 400

    def test_compare(self, client):
        response = client.post(
            "/api/debts/compare", json={"debts": self.debts, "extra_payment": 200}
        )

        assert response.status_code == 200
        data = response.get_json()
        assert data["interest_saved"] >= 0
        assert data["snowball"]["strategy"] == "snowball"
        assert data["avalanche"]["strategy"] == "avalanche"


class TestMonteCarloEndpoint:
    """Test POST /api/monte-carlo."""

    def test_run(self, client):
        response = client.post(
            "/api/monte-carlo",
            json={
                "initial_wealth": 100000,
                "annual_contribution": 10000,
                "years": 10,
                "simulations": 200,
                "seed": 1,
            },
        )

        assert response.status_code == 200
        data = response.get_json()
        assert data["simulations"] == 200
        assert len(data["percentiles"]["p50"]) == 10
        assert len(data["final_values"]) == 200
        assert 0 <= data["success_rate"] <= 1

    def test_invalid_params(self, client):
        response = client.post("/api/monte-carlo", json={"simulations": 0})

        assert response.status_code == 400
        assert "details" in response.get_json()

    def test_simulation_limit(self, app, client):
        app.extensions["forecast_service"].max_simulations = 10

        response = client.post("/api/monte-carlo", json={"simulations": 50})

        assert response.status_code == 400
        assert "10" in response.get_json()["error"]

    def test_simulation_failure(self, client):
        with patch(
            "wealth_planner.models.monte_carlo.MonteCarloProjector.simulate",
            side_effect=RuntimeError("worker crashed"),
        ):
            response = client.post("/api/monte-carlo", json={"simulations": 5})

        assert response.status_code == 500
        assert response.get_json()["message"] == "worker crashed"
