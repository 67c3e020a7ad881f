"""
API endpoint tests.
"""
import json

import httpx
import pytest
from fastapi.testclient import TestClient

from api.dependencies import get_roster, get_weather_service
from api.main import app
from api.services.weather_service import WeatherService
from agroguard.models.weather import FarmerLocation


def forecast_payload(rain_per_hour):
    times = [f"2025-03-0{day}T{hour:02d}:00" for day in range(1, 8) for hour in range(24)]
    return {
        "latitude": -0.3,
        "longitude": 36.08,
        "current": {"temperature_2m": 21.0, "relative_humidity_2m": 55, "precipitation": 0.0, "weather_code": 0},
        "hourly": {
            "time": times,
            "temperature_2m": [20.0] * len(times),
            "relative_humidity_2m": [55] * len(times),
            "precipitation": [rain_per_hour] * len(times),
            "weather_code": [0] * len(times),
        },
    }


@pytest.fixture
def client():
    yield TestClient(app)
    app.dependency_overrides.clear()


def override_weather(handler):
    app.dependency_overrides[get_weather_service] = lambda: WeatherService(
        transport=httpx.MockTransport(handler),
        retry_delay=0,
        max_retries=1,
    )


class TestRoot:

    def test_root(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert response.json()["health"] == "/api/v1/health"

    def test_health(self, client):
        override_weather(lambda request: httpx.Response(200, json={}))

        body = client.get("/api/v1/health").json()

        assert body["status"] == "healthy"
        assert body["weather_api"] == "available"
        assert body["risk_monitor"] == "disabled"

    def test_health_degraded(self, client):
        override_weather(lambda request: httpx.Response(500))

        assert client.get("/api/v1/health").json()["status"] == "degraded"


class TestRiskEndpoints:

    def test_detect_with_roster(self, client, snapshot_payload):
        body = {
            "snapshot": snapshot_payload,
            "farmers": [
                {"latitude": -0.4, "longitude": 36.2, "language": "en"},
                {"latitude": 12.0, "longitude": 40.0},
                {"latitude": -5.0, "longitude": 30.0},
            ],
        }

        response = client.post("/api/v1/risks/detect", json=body)

        assert response.status_code == 200
        data = response.json()
        flood = [risk for risk in data["risks"] if risk["type"] == "flood"][0]
        assert flood["severity"] == "severe"
        assert flood["affectedFarmers"] == 1
        assert data["location"] == "Nakuru"
        assert data["activeWarnings"] == 2  # high drought + severe flood

    def test_detect_rejects_nan(self, client, snapshot_payload):
        snapshot_payload["temperature"] = float("nan")

        response = client.post(
            "/api/v1/risks/detect",
            content=json.dumps({"snapshot": snapshot_payload}),
            headers={"content-type": "application/json"},
        )

        assert response.status_code == 422

    def test_detect_requires_forecast_fields(self, client, snapshot_payload):
        del snapshot_payload["forecast"][0]["tempMax"]

        response = client.post("/api/v1/risks/detect", json={"snapshot": snapshot_payload})

        assert response.status_code == 422

    def test_detect_for_coordinates(self, client):
        override_weather(lambda request: httpx.Response(200, json=forecast_payload(0.0)))
        app.dependency_overrides[get_roster] = lambda: [FarmerLocation(latitude=-0.2, longitude=36.0)]

        response = client.get("/api/v1/risks/coordinates/-0.3/36.08", params={"location": "Nakuru"})

        assert response.status_code == 200
        risks = response.json()["risks"]
        assert risks[0]["type"] == "drought"
        assert risks[0]["severity"] == "severe"
        assert risks[0]["affectedFarmers"] == 1

    def test_detect_for_coordinates_with_null_current_reading(self, client):
        payload = forecast_payload(0.0)
        payload["current"]["temperature_2m"] = None
        override_weather(lambda request: httpx.Response(200, json=payload))
        app.dependency_overrides[get_roster] = lambda: []

        response = client.get("/api/v1/risks/coordinates/-0.3/36.08")

        assert response.status_code == 200
        assert [risk["type"] for risk in response.json()["risks"]] == ["drought"]

    def test_detect_for_coordinates_provider_down(self, client):
        override_weather(lambda request: httpx.Response(502))
        app.dependency_overrides[get_roster] = lambda: []

        response = client.get("/api/v1/risks/coordinates/-0.3/36.08")

        assert response.status_code == 503

    def test_detect_for_invalid_coordinates(self, client):
        assert client.get("/api/v1/risks/coordinates/95/36.08").status_code == 422

    def test_latest_without_monitor(self, client):
        body = client.get("/api/v1/risks/latest").json()

        assert body == {"locations": [], "activeWarnings": 0}


class TestFieldEndpoints:

    def test_geometry(self, client):
        polygon = [
            {"lat": 0.0, "lng": 0.0},
            {"lat": 0.0, "lng": 0.001},
            {"lat": 0.001, "lng": 0.001},
            {"lat": 0.001, "lng": 0.0},
        ]

        data = client.post("/api/v1/fields/geometry", json={"polygon": polygon}).json()

        assert data["areaHectares"] == pytest.approx(1.2364, rel=1e-3)
        assert data["centerLatitude"] == pytest.approx(0.0005)
        assert data["centerLongitude"] == pytest.approx(0.0005)

    def test_geometry_degenerate_polygon(self, client):
        polygon = [{"latitude": 1.0, "longitude": 2.0}, {"latitude": 3.0, "longitude": 4.0}]

        data = client.post("/api/v1/fields/geometry", json={"polygon": polygon}).json()

        assert data == {"areaHectares": 0.0, "centerLatitude": 2.0, "centerLongitude": 3.0}

    def test_geometry_rejects_out_of_range(self, client):
        polygon = [{"lat": 91.0, "lng": 0.0}] * 3

        assert client.post("/api/v1/fields/geometry", json={"polygon": polygon}).status_code == 422


class TestAlertEndpoints:

    def test_compose(self, client):
        body = {"riskType": "drought", "description": "Sin lluvia", "language": "es"}

        data = client.post("/api/v1/alerts/compose", json=body).json()

        assert data["language"] == "es"
        assert data["message"].startswith("ALERTA DE SEQUIA: Sin lluvia.")

    def test_compose_unknown_language(self, client):
        body = {"riskType": "pest", "description": "Bugs", "language": "sw"}

        data = client.post("/api/v1/alerts/compose", json=body).json()

        assert data["language"] == "en"
        assert data["message"].startswith("PEST RISK ALERT: Bugs.")

    def test_compose_unknown_risk_type(self, client):
        body = {"riskType": "hail", "description": "Ice", "language": "en"}

        assert client.post("/api/v1/alerts/compose", json=body).status_code == 422

    def test_preview(self, client, snapshot_payload):
        body = {
            "snapshot": snapshot_payload,
            "farmers": [
                {"id": "f-1", "latitude": -0.4, "longitude": 36.2, "language": "hi"},
                {"id": "f-2", "latitude": 20.0, "longitude": 36.2, "language": "en"},
            ],
        }

        data = client.post("/api/v1/alerts/preview", json=body).json()

        assert data["skippedFarmers"] == 1
        assert {draft["riskType"] for draft in data["drafts"]} == {"drought", "flood"}
        assert all(draft["farmer"]["id"] == "f-1" for draft in data["drafts"])
        assert all(draft["language"] == "hi" for draft in data["drafts"])
