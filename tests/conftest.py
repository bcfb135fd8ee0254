from __future__ import annotations

import pytest
from pathlib import Path
import sys
from typing import Any, Dict, List, Tuple

import numpy as np
import requests

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from solar_yield.application import SolarApplication  # noqa: E402
from solar_yield.simulation.history import HistoricalSeriesSynthesizer  # noqa: E402
from solar_yield.weather import OpenWeatherClient  # noqa: E402


class FakeResponse:
    """Minimal stand-in for ``requests.Response``."""

    def __init__(self, payload: Any, status_code: int = 200) -> None:
        self._payload = payload
        self.status_code = status_code

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"{self.status_code} error", response=self)

    def json(self) -> Any:
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class FakeSession:
    """Records GET calls and answers from a per-endpoint table."""

    def __init__(self, responses: Dict[str, FakeResponse] | None = None) -> None:
        self.responses = responses or {}
        self.calls: List[Tuple[str, Dict[str, Any]]] = []

    def get(self, url: str, params: Dict[str, Any] | None = None, timeout: float | None = None):
        self.calls.append((url, dict(params or {})))
        endpoint = url.rsplit("/", 1)[-1]
        response = self.responses.get(endpoint)
        if response is None:
            raise requests.exceptions.ConnectionError("no route to host")
        return response


def openweather_current(clouds: float = 20, condition: str = "Clouds") -> Dict[str, Any]:
    return {
        "name": "Pune",
        "main": {"temp": 31.0, "humidity": 55},
        "clouds": {"all": clouds},
        "wind": {"speed": 3.1},
        "weather": [{"main": condition, "description": condition.lower()}],
    }


@pytest.fixture()
def rng() -> np.random.Generator:
    """Seeded generator so random series are reproducible."""
    return np.random.default_rng(1234)


@pytest.fixture()
def synthesizer(rng) -> HistoricalSeriesSynthesizer:
    return HistoricalSeriesSynthesizer(rng=rng)


@pytest.fixture()
def fake_session() -> FakeSession:
    return FakeSession(
        {
            "weather": FakeResponse(openweather_current()),
            "forecast": FakeResponse(
                {
                    "city": {"name": "Pune"},
                    "list": [
                        {"dt": 1, "clouds": {"all": 0}, "weather": [{"main": "Clear"}]},
                        {"dt": 2, "clouds": {"all": 100}, "weather": [{"main": "Rain"}]},
                    ],
                }
            ),
        }
    )


@pytest.fixture()
def weather_client(fake_session: FakeSession) -> OpenWeatherClient:
    return OpenWeatherClient(
        api_key="test-key",
        base_url="https://weather.test/data/2.5",
        timeout=5,
        session=fake_session,
    )


@pytest.fixture()
def application(weather_client: OpenWeatherClient, rng) -> SolarApplication:
    """SolarApplication wired to the fake provider and a seeded generator."""
    return SolarApplication(weather_client=weather_client, rng=rng)
