"""
Live weather endpoints backed by the OpenWeather provider.

Provider and location errors are translated into JSON envelopes by the
exception handlers registered in :func:`solar_yield.api.app.create_app`.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Path

from ...application import SolarApplication
from .. import dependencies
from ..schemas import common as common_schemas

router = APIRouter(prefix="/api/weather", tags=["weather"])


@router.get("/maharashtra-cities", response_model=common_schemas.ApiResponse)
def maharashtra_cities(
    app_service: SolarApplication = Depends(dependencies.get_application_service),
) -> common_schemas.ApiResponse:
    return common_schemas.ApiResponse(data=app_service.cities())


@router.get("/current/{location}", response_model=common_schemas.ApiResponse)
def current_weather(
    location: str = Path(..., min_length=2, max_length=50),
    app_service: SolarApplication = Depends(dependencies.get_application_service),
) -> common_schemas.ApiResponse:
    """
    Current weather for a supported city, with irradiance and monsoon flags.
    """
    return common_schemas.ApiResponse(data=app_service.current_weather(location))


@router.get("/forecast/{location}", response_model=common_schemas.ApiResponse)
def forecast(
    location: str = Path(..., min_length=2, max_length=50),
    app_service: SolarApplication = Depends(dependencies.get_application_service),
) -> common_schemas.ApiResponse:
    """
    5-day forecast; every slot carries ``solarIrradiance`` and ``solarPotential``.
    """
    return common_schemas.ApiResponse(data=app_service.forecast_weather(location))


@router.get("/coordinates/{lat}/{lon}", response_model=common_schemas.ApiResponse)
def weather_by_coordinates(
    lat: float = Path(..., ge=-90, le=90),
    lon: float = Path(..., ge=-180, le=180),
    app_service: SolarApplication = Depends(dependencies.get_application_service),
) -> common_schemas.ApiResponse:
    """
    Current weather for coordinates inside Maharashtra.
    """
    return common_schemas.ApiResponse(data=app_service.weather_by_coordinates(lat, lon))
