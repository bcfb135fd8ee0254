from __future__ import annotations

import pytest

from solar_yield.exceptions import UnsupportedLocationError, WeatherServiceError
from solar_yield.weather import OpenWeatherClient, estimate_irradiance, solar_potential

from conftest import FakeResponse, FakeSession, openweather_current


def test_estimate_irradiance_combines_clouds_and_condition():
    assert estimate_irradiance({"clouds": {"all": 0}, "weather": [{"main": "Clear"}]}) == 1000
    assert estimate_irradiance({"clouds": {"all": 50}, "weather": [{"main": "Clouds"}]}) == 390
    assert estimate_irradiance({"clouds": {"all": 100}, "weather": [{"main": "Rain"}]}) == 90
    assert estimate_irradiance({}) == 1000


def test_solar_potential_assumes_six_peak_hours():
    potential = solar_potential({"clouds": {"all": 0}, "weather": [{"main": "Clear"}]})
    assert potential == {"irradiance": 1000, "dailyEnergy": 6.0, "efficiency": 100.0}


def test_current_for_city_enriches_payload(weather_client: OpenWeatherClient, fake_session: FakeSession):
    data = weather_client.current_for_city("Pune")

    url, params = fake_session.calls[0]
    assert url == "https://weather.test/data/2.5/weather"
    assert params == {"lat": 18.5204, "lon": 73.8567, "appid": "test-key", "units": "metric"}

    assert data["isMaharashtraCity"] is True
    assert data["solarIrradiance"] == estimate_irradiance(openweather_current())
    assert isinstance(data["monsoonSeason"], bool)
    assert data["main"]["temp"] == 31.0


def test_forecast_slots_get_potential(weather_client: OpenWeatherClient):
    data = weather_client.forecast_for_city("Nagpur")
    slots = data["list"]
    assert [slot["solarIrradiance"] for slot in slots] == [1000, 90]
    assert slots[1]["solarPotential"]["dailyEnergy"] == pytest.approx(0.54)
    assert data["city"]["name"] == "Pune"


def test_unsupported_city_is_rejected_before_any_request(
    weather_client: OpenWeatherClient, fake_session: FakeSession
):
    with pytest.raises(UnsupportedLocationError):
        weather_client.current_for_city("Delhi")
    assert fake_session.calls == []


def test_coordinates_outside_maharashtra_are_rejected(weather_client: OpenWeatherClient):
    with pytest.raises(UnsupportedLocationError):
        weather_client.current_for_coordinates(28.61, 77.21)
    assert weather_client.current_for_coordinates(19.0, 73.0)["isMaharashtraCity"] is True


def test_missing_api_key_fails_fast():
    session = FakeSession()
    client = OpenWeatherClient(api_key=None, base_url="https://weather.test", session=session)
    with pytest.raises(WeatherServiceError) as excinfo:
        client.current_for_city("Mumbai")
    assert excinfo.value.status_code is None
    assert session.calls == []


def test_provider_http_error_keeps_status_code():
    session = FakeSession({"weather": FakeResponse({"message": "city not found"}, status_code=404)})
    client = OpenWeatherClient(api_key="k", base_url="https://weather.test", session=session)
    with pytest.raises(WeatherServiceError) as excinfo:
        client.current_for_city("Mumbai")
    assert excinfo.value.status_code == 404


def test_network_error_is_wrapped():
    client = OpenWeatherClient(api_key="k", base_url="https://weather.test", session=FakeSession())
    with pytest.raises(WeatherServiceError) as excinfo:
        client.forecast_for_city("Mumbai")
    assert excinfo.value.status_code is None


def test_invalid_json_is_wrapped():
    session = FakeSession({"weather": FakeResponse(ValueError("Expecting value"))})
    client = OpenWeatherClient(api_key="k", base_url="https://weather.test", session=session)
    with pytest.raises(WeatherServiceError):
        client.current_for_city("Mumbai")
