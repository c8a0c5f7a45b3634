"""
Tests for the scenario API endpoints.
"""

from unittest.mock import patch

import pytest


class TestScenarioListing:
    """Test listing and fetching scenarios."""

    def test_list(self, client):
        response = client.get("/api/scenarios")

        assert response.status_code == 200
        data = response.get_json()
        assert data["current_scenario_id"] == "base"
        assert [s["id"] for s in data["scenarios"]] == ["base", "optimistic", "bear"]
        assert data["scenarios"][0]["is_current"] is True

    def test_get(self, client):
        response = client.get("/api/scenarios/bear")

        assert response.status_code == 200
        data = response.get_json()
        assert data["name"] == "Bear Case"
        assert data["data"]["investment_return"] == 4

    def test_get_missing(self, client):
        response = client.get("/api/scenarios/missing")

        assert response.status_code == 404
        assert "error" in response.get_json()


class TestScenarioMutations:
    """Test create, update, activate and delete."""

    def test_create(self, client):
        response = client.post(
            "/api/scenarios", json={"name": "Sabbatical", "base_scenario_id": "optimistic"}
        )

        assert response.status_code == 201
        data = response.get_json()
        assert data["id"].startswith("scenario_")
        assert data["data"]["investment_return"] == 10

        listing = client.get("/api/scenarios").get_json()
        assert len(listing["scenarios"]) == 4

    def test_create_requires_name(self, client):
        response = client.post("/api/scenarios", json={})
        assert response.status_code == 400

    def test_update(self, client):
        response = client.patch(
            "/api/scenarios/base", json={"initialWealth": 75000, "state": "Texas"}
        )

        assert response.status_code == 200
        data = response.get_json()["data"]
        assert data["initial_wealth"] == 75000
        assert data["state"] == "Texas"

    def test_update_invalid(self, client):
        response = client.patch(
            "/api/scenarios/base", json={"incomes": [{"type": "lottery"}]}
        )

        assert response.status_code == 400
        assert client.get("/api/scenarios/base").get_json()["data"]["incomes"] == []

    def test_update_missing(self, client):
        response = client.patch("/api/scenarios/missing", json={"state": "Texas"})
        assert response.status_code == 404

    def test_activate(self, client):
        response = client.post("/api/scenarios/bear/activate")

        assert response.status_code == 200
        assert response.get_json()["current_scenario_id"] == "bear"
        assert client.get("/api/scenarios").get_json()["current_scenario_id"] == "bear"

    def test_activate_missing(self, client):
        assert client.post("/api/scenarios/missing/activate").status_code == 404

    def test_delete(self, client):
        response = client.delete("/api/scenarios/bear")

        assert response.status_code == 200
        assert client.get("/api/scenarios/bear").status_code == 404

    def test_delete_default(self, client):
        response = client.delete("/api/scenarios/base")

        assert response.status_code == 400
        assert client.get("/api/scenarios/base").status_code == 200

    def test_delete_missing(self, client):
        assert client.delete("/api/scenarios/missing").status_code == 404


class TestScenarioProjectionAndCompare:
    """Test projecting and comparing stored scenarios."""

    def test_projection(self, client):
        response = client.get("/api/scenarios/base/projection")

        assert response.status_code == 200
        data = response.get_json()
        assert data["scenario_id"] == "base"
        assert len(data["projections"]) == 10
        # Base case: $50k growing at 7% with no income or expenses
        assert data["projections"][0]["cumulative_wealth"] == pytest.approx(53500)

    def test_projection_missing(self, client):
        assert client.get("/api/scenarios/missing/projection").status_code == 404

    def test_projection_failure(self, client):
        """Engine failures are reported as JSON server errors."""
        with patch(
            "wealth_planner.services.forecast_service.ProjectionEngine.project",
            side_effect=RuntimeError("boom"),
        ):
            response = client.get("/api/scenarios/base/projection")

        assert response.status_code == 500
        assert response.content_type == "application/json"
        assert response.get_json() == {"error": "Projection failed", "message": "boom"}

    def test_compare(self, client):
        response = client.get("/api/scenarios/compare?a=base&b=bear")

        assert response.status_code == 200
        data = response.get_json()
        assert data["has_changes"] is True
        assert "root['investment_return']" in data["changes"]["values_changed"]

    def test_compare_requires_both(self, client):
        assert client.get("/api/scenarios/compare?a=base").status_code == 400

    def test_compare_missing(self, client):
        assert client.get("/api/scenarios/compare?a=base&b=missing").status_code == 404
