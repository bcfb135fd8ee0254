from __future__ import annotations

from datetime import date

import pytest
from fastapi.testclient import TestClient

from solar_yield import __version__
from solar_yield.api import dependencies
from solar_yield.api.app import create_app
from solar_yield.application import SolarApplication
from solar_yield.config import Settings
from solar_yield.weather import OpenWeatherClient

from conftest import FakeResponse, FakeSession


def create_test_client(app_service: SolarApplication, raise_server_exceptions: bool = True) -> TestClient:
    """Build a FastAPI test client bound to the given application service."""
    app = create_app(Settings(openweather_api_key=None, log_level="WARNING"))
    app.dependency_overrides[dependencies.get_application_service] = lambda: app_service
    return TestClient(app, raise_server_exceptions=raise_server_exceptions)


@pytest.fixture()
def client(application: SolarApplication) -> TestClient:
    return create_test_client(application)


def test_health(client: TestClient):
    resp = client.get("/health")
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "OK"
    assert body["version"] == __version__


def test_predict_reference_installation(client: TestClient):
    resp = client.post(
        "/api/solar/predict",
        json={
            "location": "Pune",
            "weatherData": {"temperature": 25, "humidity": 60, "cloudCover": 0, "solarIrradiance": 1000},
            "panelCapacity": 5,
            "panelEfficiency": 20,
        },
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    predictions = body["data"]["predictions"]
    assert predictions["dailyEnergy"] == pytest.approx(25.85)
    assert predictions["effectiveIrradiance"] == 940
    assert predictions["financials"]["paybackPeriod"] == pytest.approx(3.3)
    assert predictions["weatherFactors"]["humidityFactor"] == pytest.approx(0.94)
    assert body["data"]["algorithm"] == "AI-Enhanced Solar Prediction v1.0"


def test_predict_zero_irradiance_reports_null_payback(client: TestClient):
    resp = client.post(
        "/api/solar/predict",
        json={
            "location": "Pune",
            "weatherData": {"solarIrradiance": 0},
            "panelCapacity": 5,
            "panelEfficiency": 20,
        },
    )
    assert resp.status_code == 200
    assert resp.json()["data"]["predictions"]["financials"]["paybackPeriod"] is None


@pytest.mark.parametrize(
    "payload",
    [
        {"location": "P", "panelCapacity": 5, "panelEfficiency": 20},
        {"location": "Pune", "panelCapacity": 0, "panelEfficiency": 20},
        {"location": "Pune", "panelCapacity": 5, "panelEfficiency": 45},
        {"location": "Pune", "panelCapacity": 5, "panelEfficiency": 20, "tiltAngle": 120},
        {"location": "Pune", "panelEfficiency": 20},
    ],
)
def test_predict_rejects_invalid_requests(client: TestClient, payload: dict):
    resp = client.post("/api/solar/predict", json=payload)
    assert resp.status_code == 400
    body = resp.json()
    assert body["success"] is False
    assert body["message"] == "Invalid request parameters"
    assert body["error"]


def test_calculator_requirements(client: TestClient):
    resp = client.post(
        "/api/solar/calculator-requirements",
        json={
            "location": "Nagpur",
            "dailyConsumption": 15.5,
            "appliances": [{"name": "Fan", "wattage": 75, "quantity": 3, "hours": 10}],
        },
    )
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["numberOfPanels"] == 9
    assert data["applianceBreakdown"][0]["dailyConsumption"] == pytest.approx(2.25)
    assert data["applianceBreakdown"][0]["percentage"] == pytest.approx(100.0)


def test_calculator_requirements_rejects_non_positive_consumption(client: TestClient):
    resp = client.post(
        "/api/solar/calculator-requirements",
        json={"location": "Nagpur", "dailyConsumption": 0},
    )
    assert resp.status_code == 400


def test_historical_series(client: TestClient):
    resp = client.get("/api/solar/historical/Pune", params={"days": 7})
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["location"] == "Pune"
    assert data["days"] == 7
    assert len(data["data"]) == 7
    assert data["data"][-1]["date"] == date.today().isoformat()
    assert {"energy", "efficiency", "solarIrradiance", "isMonsoon", "weatherCondition"} <= set(data["data"][0])


def test_historical_defaults_to_thirty_days(client: TestClient):
    resp = client.get("/api/solar/historical/Atlantis")
    assert resp.status_code == 200
    assert len(resp.json()["data"]["data"]) == 30


@pytest.mark.parametrize("days", ["0", "-1", "abc", "3651"])
def test_historical_rejects_invalid_days(client: TestClient, days: str):
    resp = client.get("/api/solar/historical/Pune", params={"days": days})
    assert resp.status_code == 400
    assert resp.json()["success"] is False


def test_historical_summary(client: TestClient):
    resp = client.get("/api/solar/historical/Amravati/summary", params={"days": 20})
    assert resp.status_code == 200
    summary = resp.json()["data"]["summary"]
    assert summary["days"] == 20
    assert summary["totalEnergy"] > 0


def test_reference_endpoints(client: TestClient):
    potential = client.get("/api/solar/maharashtra-potential").json()["data"]
    assert potential["Solapur"]["bestSeason"] == "Oct-May"

    config = client.get("/api/solar/optimal-config/Atlantis").json()["data"]
    assert config == {
        "location": "Atlantis",
        "tiltAngle": 30,
        "azimuth": 180,
        "recommendedCapacity": 5,
        "notes": "Standard configuration",
    }

    cities = client.get("/api/weather/maharashtra-cities").json()["data"]
    assert "Aurangabad" in cities


def test_weather_current_for_supported_city(client: TestClient):
    resp = client.get("/api/weather/current/Pune")
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["isMaharashtraCity"] is True
    assert "solarIrradiance" in data


def test_weather_forecast_for_supported_city(client: TestClient):
    resp = client.get("/api/weather/forecast/Nashik")
    assert resp.status_code == 200
    assert len(resp.json()["data"]["list"]) == 2


def test_weather_unsupported_city(client: TestClient):
    resp = client.get("/api/weather/current/Delhi")
    assert resp.status_code == 400
    body = resp.json()
    assert body["success"] is False
    assert "Maharashtra" in body["message"]


def test_weather_coordinates_outside_state(client: TestClient):
    resp = client.get("/api/weather/coordinates/28.61/77.21")
    assert resp.status_code == 400


def test_weather_provider_not_found_maps_to_404():
    session = FakeSession({"weather": FakeResponse({"message": "city not found"}, status_code=404)})
    app_service = SolarApplication(
        weather_client=OpenWeatherClient(api_key="k", base_url="https://weather.test", session=session)
    )
    resp = create_test_client(app_service).get("/api/weather/current/Pune")
    assert resp.status_code == 404
    assert resp.json() == {"success": False, "message": "Location not found"}


def test_weather_provider_failure_maps_to_500():
    app_service = SolarApplication(
        weather_client=OpenWeatherClient(api_key="k", base_url="https://weather.test", session=FakeSession())
    )
    resp = create_test_client(app_service).get("/api/weather/forecast/Pune")
    assert resp.status_code == 500
    body = resp.json()
    assert body["message"] == "Error fetching weather data"
    assert body["error"]


def _predict_body(weather: str) -> str:
    return '{"location": "Pune", "panelCapacity": 5, "panelEfficiency": 20, "weatherData": %s}' % weather


@pytest.mark.parametrize(
    "weather",
    [
        '{"temperature": 1e308}',
        '{"solarIrradiance": NaN}',
        '{"humidity": Infinity}',
        '{"cloudCover": 140}',
        '{"main": {"temp": 1e308}}',
    ],
)
def test_predict_rejects_non_physical_weather(client: TestClient, weather: str):
    resp = client.post(
        "/api/solar/predict",
        content=_predict_body(weather),
        headers={"Content-Type": "application/json"},
    )
    assert resp.status_code == 400
    body = resp.json()
    assert body["success"] is False
    assert body["message"] == "Invalid request parameters"


def test_predict_ignores_weather_sections_that_are_not_objects(client: TestClient):
    resp = client.post(
        "/api/solar/predict",
        json={
            "location": "Pune",
            "weatherData": {"main": 5, "clouds": "grey", "solarIrradiance": 1000},
            "panelCapacity": 5,
            "panelEfficiency": 20,
        },
    )
    assert resp.status_code == 200
    factors = resp.json()["data"]["predictions"]["weatherFactors"]
    assert factors["tempFactor"] == pytest.approx(1.0)
    assert factors["cloudFactor"] == 100


def test_predict_accepts_full_openweather_payload(client: TestClient):
    resp = client.post(
        "/api/solar/predict",
        json={
            "location": "Pune",
            "weatherData": {
                "name": "Pune",
                "main": {"temp": 25, "humidity": 60, "pressure": 1012},
                "clouds": {"all": 0},
                "wind": {"speed": 2, "deg": 270},
                "weather": [{"main": "Clear"}],
                "solarIrradiance": 1000,
                "isMaharashtraCity": True,
            },
            "panelCapacity": 5,
            "panelEfficiency": 20,
        },
    )
    assert resp.status_code == 200
    assert resp.json()["data"]["predictions"]["dailyEnergy"] == pytest.approx(25.85)


def test_unexpected_failure_returns_envelope():
    class BrokenService(SolarApplication):
        def cities(self):
            raise RuntimeError("boom")

    client = create_test_client(BrokenService(), raise_server_exceptions=False)
    resp = client.get("/api/weather/maharashtra-cities")
    assert resp.status_code == 500
    assert resp.json() == {"success": False, "message": "Internal server error"}
