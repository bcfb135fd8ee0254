from __future__ import annotations

from functools import lru_cache

from ..application import SolarApplication
from ..config import Settings, get_settings
from ..weather import OpenWeatherClient


@lru_cache()
def get_app_settings() -> Settings:
    """
    Provide the process settings, read once.
    """
    return get_settings()


@lru_cache()
def get_application_service() -> SolarApplication:
    """
    Provide a SolarApplication wired to the OpenWeather provider.
    """
    settings = get_app_settings()
    return SolarApplication(weather_client=OpenWeatherClient.from_settings(settings))
