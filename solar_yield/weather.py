"""
OpenWeather provider client.

Fetches current weather and 5-day forecasts for the supported cities and
enriches each payload with an irradiance estimate derived from cloud cover
and the reported weather condition.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Dict, Mapping

import requests

from .calendar_utils import is_monsoon
from .config import Settings, get_settings
from .exceptions import UnsupportedLocationError, WeatherServiceError
from .simulation.estimator import round_half_up
from .simulation.locations import CITY_COORDINATES, is_within_maharashtra

logger = logging.getLogger(__name__)

CLEAR_SKY_IRRADIANCE = 1000.0
PEAK_HOURS_FOR_POTENTIAL = 6


def _condition_factor(payload: Mapping[str, Any]) -> float:
    conditions = payload.get("weather") or []
    if not conditions:
        return 1.0
    main = str(conditions[0].get("main", "")).lower()
    if "rain" in main or "snow" in main:
        return 0.3
    if "clouds" in main:
        return 0.6
    return 1.0


def estimate_irradiance(payload: Mapping[str, Any]) -> int:
    """
    Irradiance estimate (W/m²) for one OpenWeather observation.

    Clear-sky 1000 W/m², reduced by up to 70% for cloud cover and by a
    condition factor (rain/snow 0.3, clouds 0.6, clear 1.0).
    """
    cloud_cover = (payload.get("clouds") or {}).get("all") or 0
    cloud_factor = 1 - (cloud_cover / 100) * 0.7
    return int(round_half_up(CLEAR_SKY_IRRADIANCE * cloud_factor * _condition_factor(payload)))


def solar_potential(payload: Mapping[str, Any]) -> Dict[str, float]:
    """Daily potential (kWh/m²/day, assuming 6 peak hours) for a forecast slot."""
    irradiance = estimate_irradiance(payload)
    daily_energy = irradiance * PEAK_HOURS_FOR_POTENTIAL / 1000
    return {
        "irradiance": irradiance,
        "dailyEnergy": round_half_up(daily_energy, 2),
        "efficiency": min(100.0, max(0.0, irradiance / CLEAR_SKY_IRRADIANCE * 100)),
    }


class OpenWeatherClient:
    """
    Thin client over the OpenWeather 2.5 REST API.

    Attributes:
        api_key: Provider API key. Requests fail fast when it is missing.
        base_url: API root, e.g. ``https://api.openweathermap.org/data/2.5``.
        timeout: Request timeout in seconds.
        session: ``requests.Session`` (injectable for tests).
    """

    def __init__(
        self,
        api_key: str | None,
        base_url: str,
        timeout: float = 10.0,
        session: requests.Session | None = None,
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "OpenWeatherClient":
        settings = settings or get_settings()
        return cls(
            api_key=settings.openweather_api_key,
            base_url=settings.openweather_base_url,
            timeout=settings.http_timeout,
        )

    def _get(self, endpoint: str, lat: float, lon: float) -> Dict[str, Any]:
        if not self.api_key:
            raise WeatherServiceError("OpenWeather API key is not configured")

        url = f"{self.base_url}/{endpoint}"
        params = {"lat": lat, "lon": lon, "appid": self.api_key, "units": "metric"}
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except requests.exceptions.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            logger.error("OpenWeather %s request failed with status %s", endpoint, status)
            raise WeatherServiceError(f"Weather provider returned {status}", status_code=status) from exc
        except requests.exceptions.RequestException as exc:
            logger.error("OpenWeather %s request error: %s", endpoint, exc)
            raise WeatherServiceError(f"Weather provider unreachable: {exc}") from exc
        except ValueError as exc:
            logger.error("OpenWeather %s returned invalid JSON: %s", endpoint, exc)
            raise WeatherServiceError("Weather provider returned invalid JSON") from exc

    def _enrich_current(self, payload: Dict[str, Any], today: date | None = None) -> Dict[str, Any]:
        return {
            **payload,
            "isMaharashtraCity": True,
            "solarIrradiance": estimate_irradiance(payload),
            "monsoonSeason": is_monsoon(today or date.today()),
        }

    def current(self, lat: float, lon: float) -> Dict[str, Any]:
        """Current conditions with irradiance and monsoon flags."""
        logger.debug("Fetching current weather for (%s, %s)", lat, lon)
        return self._enrich_current(self._get("weather", lat, lon))

    def forecast(self, lat: float, lon: float) -> Dict[str, Any]:
        """5-day/3-hour forecast; each slot gets irradiance and potential."""
        logger.debug("Fetching forecast for (%s, %s)", lat, lon)
        payload = self._get("forecast", lat, lon)
        slots = [
            {**item, "solarIrradiance": estimate_irradiance(item), "solarPotential": solar_potential(item)}
            for item in payload.get("list", [])
        ]
        return {**payload, "list": slots}

    @staticmethod
    def _city_coordinates(city: str) -> tuple[float, float]:
        try:
            return CITY_COORDINATES[city]
        except KeyError:
            raise UnsupportedLocationError(
                "Only Maharashtra cities are supported. Please select a city from Maharashtra."
            ) from None

    def current_for_city(self, city: str) -> Dict[str, Any]:
        lat, lon = self._city_coordinates(city)
        return self.current(lat, lon)

    def forecast_for_city(self, city: str) -> Dict[str, Any]:
        lat, lon = self._city_coordinates(city)
        return self.forecast(lat, lon)

    def current_for_coordinates(self, lat: float, lon: float) -> Dict[str, Any]:
        if not is_within_maharashtra(lat, lon):
            raise UnsupportedLocationError("Only locations within Maharashtra are supported.")
        return self.current(lat, lon)
