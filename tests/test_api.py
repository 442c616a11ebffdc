"""
Tests for the FastAPI backend.

Run with: pytest tests/test_api.py -v
"""

import pytest

pytest.importorskip("fastapi")
pytest.importorskip("httpx")

from fastapi.testclient import TestClient

from jmrel.api import app


@pytest.fixture
def client():
    return TestClient(app)


class TestAPIModels:
    """Test Pydantic models for API."""

    def test_estimate_request_defaults(self):
        from jmrel.api import EstimateRequest

        request = EstimateRequest()
        assert request.intervals is None
        assert request.text is None
        assert request.cumulative is False
        assert request.steps == 5
        assert request.solver.max_bisections == 200

    def test_solver_settings_validation(self):
        from pydantic import ValidationError
        from jmrel.api import SolverSettings

        with pytest.raises(ValidationError):
            SolverSettings(tolerance=-1.0)

    def test_solver_config_mapping(self):
        from jmrel.api import SolverSettings, _solver_config

        config = _solver_config(SolverSettings(tolerance=1e-6, max_bisections=50))
        assert config.tolerance == 1e-6
        assert config.max_bisections == 50
        assert config.max_expansions == 1000


class TestAPIEndpoints:
    """Test API endpoints through the test client."""

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200

        data = response.json()
        assert data["status"] == "healthy"
        assert "version" in data

    def test_estimate_from_intervals(self, client):
        response = client.post("/api/estimate", json={"intervals": [10, 20, 30]})
        assert response.status_code == 200

        data = response.json()
        assert data["estimate"]["n"] == 3
        assert data["estimate"]["b"] == pytest.approx(3.1547005, abs=1e-6)
        assert data["estimate"]["time_to_end_of_testing"]["value"] == 0.0
        assert data["predicted_intervals"] == []
        assert "Jelinski-Moranda" in data["summary"]

    def test_estimate_from_text(self, client):
        response = client.post(
            "/api/estimate",
            json={"text": "1 2 3 4 5 6 7 8 9 10", "steps": 3},
        )
        assert response.status_code == 200

        data = response.json()
        assert data["estimate"]["n"] == 10
        assert len(data["predicted_intervals"]) >= 1

        first = data["predicted_intervals"][0]
        assert first["never"] is False
        assert first["value"] > 0

    def test_forecast_never_reported(self, client):
        response = client.post(
            "/api/estimate",
            json={"intervals": [x * 1e13 for x in range(1, 11)], "steps": 3},
        )
        assert response.status_code == 200

        forecast = response.json()["predicted_intervals"]
        assert len(forecast) == 1
        assert forecast[0] == {"value": None, "never": True, "defined": True}

    def test_estimate_cumulative(self, client):
        response = client.post(
            "/api/estimate",
            json={"intervals": [10, 30, 60], "cumulative": True},
        )
        assert response.status_code == 200
        assert response.json()["estimate"]["sum_xi"] == 60.0

    def test_fallback_reported(self, client):
        response = client.post("/api/estimate", json={"intervals": [30, 20, 10]})
        assert response.status_code == 200

        solver = response.json()["estimate"]["solver"]
        assert solver["state"] == "fallback"
        assert solver["warning"]

    def test_no_numbers_rejected(self, client):
        response = client.post("/api/estimate", json={"text": "nothing here"})
        assert response.status_code == 422

    def test_empty_request_rejected(self, client):
        response = client.post("/api/estimate", json={})
        assert response.status_code == 422


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
