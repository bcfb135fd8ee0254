from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from typing import Any, Dict, Iterable, List, Mapping

import numpy as np

from .exceptions import SolarYieldError, WeatherServiceError
from .result_builder import history_frame, summarize_history
from .simulation.estimator import PanelConfiguration, WeatherSnapshot, YieldEstimator
from .simulation.history import HistoricalRecord, HistoricalSeriesSynthesizer
from .simulation.locations import (
    CITY_COORDINATES,
    DEFAULT_PROFILES,
    SOLAR_POTENTIAL,
    ClimateProfileTable,
    optimal_config,
)
from .simulation.requirements import Appliance, RequirementsCalculator
from .weather import OpenWeatherClient

logger = logging.getLogger(__name__)

ALGORITHM_NAME = "AI-Enhanced Solar Prediction v1.0"
DEFAULT_HISTORY_DAYS = 30


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


class SolarApplication:
    """
    High-level orchestrator shared by the FastAPI routes and the CLI.

    Owns one estimator, one synthesizer and one requirements calculator, all
    built on the same injected profile table.
    """

    def __init__(
        self,
        *,
        profiles: ClimateProfileTable = DEFAULT_PROFILES,
        weather_client: OpenWeatherClient | None = None,
        rng: np.random.Generator | None = None,
    ) -> None:
        """
        Args:
            profiles: Climate profile table injected into every model.
            weather_client: Optional provider client used when a prediction
                request carries no weather data.
            rng: Optional random generator for the historical synthesizer.
        """
        self.profiles = profiles
        self.weather_client = weather_client
        self.estimator = YieldEstimator()
        self.synthesizer = HistoricalSeriesSynthesizer(profiles, rng=rng)
        self.requirements_calculator = RequirementsCalculator(profiles)

    def _live_weather(self, location: str) -> Mapping[str, Any] | None:
        if self.weather_client is None:
            return None
        try:
            return self.weather_client.current_for_city(location)
        except SolarYieldError as exc:
            logger.warning("Live weather unavailable for %s, using defaults: %s", location, exc)
            return None

    def predict(
        self,
        *,
        location: str,
        panel_capacity: float,
        panel_efficiency: float,
        weather_data: Mapping[str, Any] | None = None,
        tilt_angle: float | None = None,
        azimuth: float | None = None,
    ) -> Dict[str, Any]:
        """
        Estimate power, energy and payback for one installation.

        Args:
            location: City name echoed in the response and used for live weather.
            panel_capacity: Capacity (kW).
            panel_efficiency: Module efficiency (%).
            weather_data: Weather payload (flat or OpenWeather shape). When None,
                live weather is fetched if a client is configured.
            tilt_angle: Tilt (degrees), default 30.
            azimuth: Azimuth (degrees), default 180.

        Defaults replace absent values only. An explicit ``0`` (temperature,
        humidity, irradiance, tilt or azimuth) is used as given, whereas the
        legacy Node service treated any falsy value as missing.

        Returns:
            Dictionary with location, predictions, timestamp and algorithm.
        """
        if weather_data is None:
            weather_data = self._live_weather(location)

        config = PanelConfiguration(
            capacity_kw=panel_capacity,
            efficiency_pct=panel_efficiency,
            tilt_deg=30.0 if tilt_angle is None else tilt_angle,
            azimuth_deg=180.0 if azimuth is None else azimuth,
        )
        result = self.estimator.estimate(WeatherSnapshot.from_payload(weather_data), config)
        logger.info(
            "Prediction for %s: %.3f kW, %.2f kWh/day",
            location,
            result.current_power,
            result.daily_energy,
        )
        return {
            "location": location,
            "predictions": result.to_dict(),
            "timestamp": _timestamp(),
            "algorithm": ALGORITHM_NAME,
        }

    def historical_records(
        self,
        location: str,
        days: int = DEFAULT_HISTORY_DAYS,
        today: date | None = None,
    ) -> List[HistoricalRecord]:
        return self.synthesizer.synthesize(location, days, today=today)

    def historical(self, location: str, days: int = DEFAULT_HISTORY_DAYS) -> Dict[str, Any]:
        """Synthesized daily history ending today."""
        records = self.historical_records(location, days)
        return {
            "location": location,
            "days": days,
            "data": [r.to_dict() for r in records],
        }

    def historical_summary(self, location: str, days: int = DEFAULT_HISTORY_DAYS) -> Dict[str, Any]:
        """Statistics over a freshly synthesized history."""
        records = self.historical_records(location, days)
        return {
            "location": location,
            "days": days,
            "summary": summarize_history(history_frame(records)),
        }

    def requirements(
        self,
        *,
        location: str,
        daily_consumption: float,
        appliances: Iterable[Mapping[str, Any] | Appliance] = (),
    ) -> Dict[str, Any]:
        items = [a if isinstance(a, Appliance) else Appliance.from_payload(a) for a in appliances]
        return self.requirements_calculator.calculate(location, daily_consumption, items)

    def cities(self) -> List[str]:
        return list(CITY_COORDINATES)

    def potential(self) -> Dict[str, Any]:
        return {city: dict(values) for city, values in SOLAR_POTENTIAL.items()}

    def optimal_config(self, location: str) -> Dict[str, Any]:
        return {"location": location, **optimal_config(location).to_dict()}

    def _require_weather_client(self) -> OpenWeatherClient:
        if self.weather_client is None:
            raise WeatherServiceError("Weather provider is not configured")
        return self.weather_client

    def current_weather(self, location: str) -> Dict[str, Any]:
        return self._require_weather_client().current_for_city(location)

    def forecast_weather(self, location: str) -> Dict[str, Any]:
        return self._require_weather_client().forecast_for_city(location)

    def weather_by_coordinates(self, lat: float, lon: float) -> Dict[str, Any]:
        return self._require_weather_client().current_for_coordinates(lat, lon)
