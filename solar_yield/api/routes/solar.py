"""
Solar estimation API endpoints.

Endpoints:
- POST /api/solar/predict: Weather-driven power/energy/payback estimate
- POST /api/solar/calculator-requirements: Installation sizing from a load list
- GET /api/solar/historical/{location}: Synthesized daily history
- GET /api/solar/historical/{location}/summary: Statistics over that history
- GET /api/solar/maharashtra-potential: Qualitative potential per city
- GET /api/solar/optimal-config/{location}: Recommended installation
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from ...application import DEFAULT_HISTORY_DAYS, SolarApplication
from .. import dependencies
from ..schemas import common as common_schemas
from ..schemas import solar as solar_schemas

router = APIRouter(prefix="/api/solar", tags=["solar"])

MAX_HISTORY_DAYS = 3650


@router.post("/predict", response_model=solar_schemas.PredictionResponse)
def predict(
    payload: solar_schemas.PredictionRequest,
    app_service: SolarApplication = Depends(dependencies.get_application_service),
) -> solar_schemas.PredictionResponse:
    """
    Estimate instantaneous power, energy and payback for one installation.

    When ``weatherData`` is omitted the current weather of the city is fetched
    from the provider; if that fails the default weather is used.

    Example:
        ```python
        # Response
        {
            "success": true,
            "data": {
                "location": "Pune",
                "predictions": {"currentPower": 4.7, "dailyEnergy": 25.85, ...},
                "timestamp": "2025-01-15T10:30:45.123456Z",
                "algorithm": "AI-Enhanced Solar Prediction v1.0"
            }
        }
        ```
    """
    weather_data = payload.weather_data.to_payload() if payload.weather_data is not None else None
    data = app_service.predict(
        location=payload.location,
        panel_capacity=payload.panel_capacity,
        panel_efficiency=payload.panel_efficiency,
        weather_data=weather_data,
        tilt_angle=payload.tilt_angle,
        azimuth=payload.azimuth,
    )
    return solar_schemas.PredictionResponse(data=data)


@router.post("/calculator-requirements", response_model=common_schemas.ApiResponse)
def calculator_requirements(
    payload: solar_schemas.RequirementsRequest,
    app_service: SolarApplication = Depends(dependencies.get_application_service),
) -> common_schemas.ApiResponse:
    """
    Size an installation (400 W panels) to cover a daily consumption.
    """
    data = app_service.requirements(
        location=payload.location,
        daily_consumption=payload.daily_consumption,
        appliances=[a.model_dump(by_alias=True) for a in payload.appliances],
    )
    return common_schemas.ApiResponse(data=data)


@router.get("/historical/{location}", response_model=solar_schemas.HistoricalResponse)
def historical(
    location: str,
    days: int = Query(DEFAULT_HISTORY_DAYS, ge=1, le=MAX_HISTORY_DAYS),
    app_service: SolarApplication = Depends(dependencies.get_application_service),
) -> solar_schemas.HistoricalResponse:
    """
    Return ``days`` synthesized daily records ending today, oldest first.

    Unknown locations use the Mumbai climate profile.
    """
    return solar_schemas.HistoricalResponse(data=app_service.historical(location, days))


@router.get("/historical/{location}/summary", response_model=common_schemas.ApiResponse)
def historical_summary(
    location: str,
    days: int = Query(DEFAULT_HISTORY_DAYS, ge=1, le=MAX_HISTORY_DAYS),
    app_service: SolarApplication = Depends(dependencies.get_application_service),
) -> common_schemas.ApiResponse:
    """
    Total, average, peak and lowest energy over a synthesized history.
    """
    return common_schemas.ApiResponse(data=app_service.historical_summary(location, days))


@router.get("/maharashtra-potential", response_model=common_schemas.ApiResponse)
def maharashtra_potential(
    app_service: SolarApplication = Depends(dependencies.get_application_service),
) -> common_schemas.ApiResponse:
    return common_schemas.ApiResponse(data=app_service.potential())


@router.get("/optimal-config/{location}", response_model=common_schemas.ApiResponse)
def optimal_config(
    location: str,
    app_service: SolarApplication = Depends(dependencies.get_application_service),
) -> common_schemas.ApiResponse:
    """
    Recommended tilt, azimuth and capacity; unknown cities get the standard setup.
    """
    return common_schemas.ApiResponse(data=app_service.optimal_config(location))
