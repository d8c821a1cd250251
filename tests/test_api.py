"""Tests for the HTTP API."""

import json

import pytest
from fastapi.testclient import TestClient

from channel_mix.api.app import create_app


@pytest.fixture
def client():
    return TestClient(create_app())


@pytest.fixture
def payload():
    return {
        "channels": [
            {"id": "search", "name": "Search", "base_return": 4.0, "saturation_spend": 50000},
            {"id": "social", "name": "Social", "base_return": 3.0, "saturation_spend": 40000,
             "incrementality": 0.85},
        ],
        "total_budget": 20000,
        "step": 1000,
        "content_lift_per_10k": 0,
    }


class TestMetaEndpoints:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_root(self, client):
        data = client.get("/").json()
        assert data["endpoints"]["optimize"] == "/api/v1/optimize"

    def test_default_channels(self, client):
        data = client.get("/api/v1/channels/defaults").json()
        assert len(data) == 9
        assert data[0]["id"] == "paid_search_nonbrand"


class TestOptimizeEndpoints:
    def test_optimize(self, client, payload):
        response = client.post("/api/v1/optimize", json=payload)
        assert response.status_code == 200

        data = response.json()
        assert [row["id"] for row in data["rows"]] == ["search", "social"]
        assert data["totals"]["spend"] == pytest.approx(20000)
        assert data["stop_reason"] == "budget_exhausted"
        assert data["objective"] == "auto"

    def test_optimize_validation_error(self, client, payload):
        payload["seasonality"] = [1.0, 1.0, 1.0]
        response = client.post("/api/v1/optimize", json=payload)
        assert response.status_code == 422

    def test_optimize_unknown_objective(self, client, payload):
        payload["objective"] = "profit"
        assert client.post("/api/v1/optimize", json=payload).status_code == 422

    def test_optimize_rejects_non_finite_calibration(self, client, payload):
        """JSON Infinity and NaN are refused before the optimizer runs."""
        for literal in ("Infinity", "NaN"):
            body = json.dumps(payload).replace("50000", literal, 1)
            response = client.post(
                "/api/v1/optimize/csv",
                content=body,
                headers={"Content-Type": "application/json"},
            )
            assert response.status_code == 422

    def test_optimize_rejects_oversized_iteration_bound(self, client, payload):
        payload["max_iterations"] = 10**12
        assert client.post("/api/v1/optimize", json=payload).status_code == 422

        body = {"request": payload, "min_budget": 10000, "max_budget": 40000, "n_points": 4}
        assert client.post("/api/v1/frontier", json=body).status_code == 422

    def test_csv_export(self, client, payload):
        response = client.post("/api/v1/optimize/csv", json=payload)

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert "attachment" in response.headers["content-disposition"]

        lines = response.text.splitlines()
        assert lines[0] == "Channel,Spend,Revenue,ROAS"
        assert lines[-1].startswith("TOTAL,20000,")

    def test_frontier(self, client, payload):
        body = {"request": payload, "min_budget": 10000, "max_budget": 40000, "n_points": 4}
        response = client.post("/api/v1/frontier", json=body)

        assert response.status_code == 200
        points = response.json()["points"]
        assert [p["budget"] for p in points] == pytest.approx([10000, 20000, 30000, 40000])
