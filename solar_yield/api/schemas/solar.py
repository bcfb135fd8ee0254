"""
Solar prediction, history and sizing schemas.

Request models enforce the numeric ranges of the public API; the models
below them are never reached with out-of-range values. Response models
mirror the camelCase JSON produced by the simulation layer.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import ConfigDict, Field, field_validator

from ...simulation.estimator import (
    IRRADIANCE_BOUNDS,
    PERCENT_BOUNDS,
    TEMPERATURE_BOUNDS,
    WIND_SPEED_BOUNDS,
)
from .common import AliasedModel


class WeatherSection(AliasedModel):
    """Nested OpenWeather block; unknown keys are kept as-is."""

    model_config = ConfigDict(populate_by_name=True, extra="allow", allow_inf_nan=False)

    temp: Optional[float] = Field(None, ge=TEMPERATURE_BOUNDS[0], le=TEMPERATURE_BOUNDS[1])
    humidity: Optional[float] = Field(None, ge=PERCENT_BOUNDS[0], le=PERCENT_BOUNDS[1])
    all: Optional[float] = Field(None, ge=PERCENT_BOUNDS[0], le=PERCENT_BOUNDS[1])
    speed: Optional[float] = Field(None, ge=WIND_SPEED_BOUNDS[0], le=WIND_SPEED_BOUNDS[1])


class WeatherDataIn(AliasedModel):
    """
    Weather object of a prediction request, flat or OpenWeather-shaped.

    Numbers must be finite and inside their physical range. Nested ``main``,
    ``clouds`` and ``wind`` values that are not objects are ignored, so the
    corresponding defaults apply.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow", allow_inf_nan=False)

    temperature: Optional[float] = Field(None, ge=TEMPERATURE_BOUNDS[0], le=TEMPERATURE_BOUNDS[1])
    humidity: Optional[float] = Field(None, ge=PERCENT_BOUNDS[0], le=PERCENT_BOUNDS[1])
    cloud_cover: Optional[float] = Field(
        None, ge=PERCENT_BOUNDS[0], le=PERCENT_BOUNDS[1], alias="cloudCover"
    )
    wind_speed: Optional[float] = Field(
        None, ge=WIND_SPEED_BOUNDS[0], le=WIND_SPEED_BOUNDS[1], alias="windSpeed"
    )
    solar_irradiance: Optional[float] = Field(
        None, ge=IRRADIANCE_BOUNDS[0], le=IRRADIANCE_BOUNDS[1], alias="solarIrradiance"
    )
    main: Optional[WeatherSection] = None
    clouds: Optional[WeatherSection] = None
    wind: Optional[WeatherSection] = None

    @field_validator("main", "clouds", "wind", mode="before")
    @classmethod
    def _drop_non_objects(cls, value: Any) -> Any:
        return value if isinstance(value, dict) else None

    def to_payload(self) -> Dict[str, Any]:
        """Plain JSON object handed to the estimator."""
        return self.model_dump(by_alias=True, exclude_none=True)


class PredictionRequest(AliasedModel):
    """
    Request schema for ``POST /api/solar/predict``.

    Attributes:
        location: City name (2-50 characters). Unknown cities are accepted.
        weather_data: Weather object, flat or OpenWeather-shaped. When omitted
            the live weather of the city is fetched.
        panel_capacity: Installed capacity in kW (0.1-100).
        panel_efficiency: Module efficiency in % (5-30).
        tilt_angle: Tilt in degrees (0-90), default 30.
        azimuth: Azimuth in degrees (0-360), default 180.

    Example:
        ```python
        # POST /api/solar/predict
        {
            "location": "Pune",
            "weatherData": {"main": {"temp": 31, "humidity": 55}, "clouds": {"all": 20},
                            "solarIrradiance": 860},
            "panelCapacity": 5,
            "panelEfficiency": 20,
            "tiltAngle": 28
        }
        ```
    """

    location: str = Field(..., min_length=2, max_length=50)
    weather_data: Optional[WeatherDataIn] = Field(None, alias="weatherData")
    panel_capacity: float = Field(..., ge=0.1, le=100, alias="panelCapacity")
    panel_efficiency: float = Field(..., ge=5, le=30, alias="panelEfficiency")
    tilt_angle: Optional[float] = Field(None, ge=0, le=90, alias="tiltAngle")
    azimuth: Optional[float] = Field(None, ge=0, le=360)


class FinancialsOut(AliasedModel):
    total_cost: float = Field(..., alias="totalCost")
    yearly_savings: float = Field(..., alias="yearlySavings")
    payback_period: Optional[float] = Field(None, alias="paybackPeriod")
    roi: float


class WeatherFactorsOut(AliasedModel):
    cloud_factor: float = Field(..., alias="cloudFactor")
    temp_factor: float = Field(..., alias="tempFactor")
    humidity_factor: float = Field(..., alias="humidityFactor")
    tilt_efficiency: float = Field(..., alias="tiltEfficiency")
    azimuth_efficiency: float = Field(..., alias="azimuthEfficiency")


class PredictionsOut(AliasedModel):
    current_power: float = Field(..., alias="currentPower")
    daily_energy: float = Field(..., alias="dailyEnergy")
    monthly_energy: float = Field(..., alias="monthlyEnergy")
    yearly_energy: float = Field(..., alias="yearlyEnergy")
    efficiency: float
    peak_sun_hours: float = Field(..., alias="peakSunHours")
    effective_irradiance: float = Field(..., alias="effectiveIrradiance")
    financials: FinancialsOut
    weather_factors: WeatherFactorsOut = Field(..., alias="weatherFactors")


class PredictionData(AliasedModel):
    location: str
    predictions: PredictionsOut
    timestamp: str
    algorithm: str


class PredictionResponse(AliasedModel):
    success: bool = True
    data: PredictionData


class HistoricalRecordOut(AliasedModel):
    date: str
    energy: float
    efficiency: float
    solar_irradiance: int = Field(..., alias="solarIrradiance")
    is_monsoon: bool = Field(..., alias="isMonsoon")
    weather_condition: str = Field(..., alias="weatherCondition")


class HistoricalData(AliasedModel):
    location: str
    days: int
    data: List[HistoricalRecordOut]


class HistoricalResponse(AliasedModel):
    success: bool = True
    data: HistoricalData


class ApplianceItem(AliasedModel):
    """
    One appliance line. ``dailyConsumption`` is derived from
    ``wattage × hours × quantity / 1000`` when omitted.
    """

    name: str = Field(..., min_length=1, max_length=100)
    wattage: float = Field(..., ge=0)
    quantity: int = Field(1, ge=0)
    hours: Optional[float] = Field(None, ge=0, le=24)
    daily_consumption: Optional[float] = Field(None, ge=0, alias="dailyConsumption")


class RequirementsRequest(AliasedModel):
    """
    Request schema for ``POST /api/solar/calculator-requirements``.

    Example:
        ```python
        {
            "location": "Nagpur",
            "dailyConsumption": 15.5,
            "appliances": [{"name": "Fan", "wattage": 75, "quantity": 3, "hours": 10}]
        }
        ```
    """

    location: str = Field(..., min_length=1, max_length=50)
    daily_consumption: float = Field(..., gt=0, alias="dailyConsumption")
    appliances: List[ApplianceItem] = Field(default_factory=list)
