"""
Solar yield models.

This package collects the pure computation behind the service:

* Location climate profiles and reference tables (`locations`).
* The deterministic weather-to-energy estimator (`estimator`).
* The randomized historical series synthesizer (`history`).
* Installation sizing from an appliance load (`requirements`).

None of these modules performs I/O; HTTP, CLI and provider access live in
the higher layers (`application`, `api`, `cli`, `weather`).
"""

from __future__ import annotations

from .estimator import (
    Financials,
    PanelConfiguration,
    PredictionResult,
    WeatherFactors,
    WeatherSnapshot,
    YieldEstimator,
    azimuth_efficiency,
    peak_sun_hours,
    round_half_up,
    tilt_efficiency,
)
from .history import HistoricalRecord, HistoricalSeriesSynthesizer, seasonal_factor, weather_condition
from .locations import (
    CITY_COORDINATES,
    DEFAULT_LOCATION,
    DEFAULT_PROFILES,
    MAHARASHTRA_BOUNDS,
    OPTIMAL_CONFIGS,
    SOLAR_POTENTIAL,
    ClimateProfileTable,
    LocationClimateProfile,
    OptimalConfiguration,
    is_within_maharashtra,
    optimal_config,
)
from .requirements import Appliance, LoadSummary, RequirementsCalculator, summarize_load

__all__ = [
    # Location data
    "CITY_COORDINATES",
    "DEFAULT_LOCATION",
    "DEFAULT_PROFILES",
    "MAHARASHTRA_BOUNDS",
    "OPTIMAL_CONFIGS",
    "SOLAR_POTENTIAL",
    "ClimateProfileTable",
    "LocationClimateProfile",
    "OptimalConfiguration",
    "is_within_maharashtra",
    "optimal_config",
    # Estimation
    "Financials",
    "PanelConfiguration",
    "PredictionResult",
    "WeatherFactors",
    "WeatherSnapshot",
    "YieldEstimator",
    "azimuth_efficiency",
    "peak_sun_hours",
    "round_half_up",
    "tilt_efficiency",
    # History
    "HistoricalRecord",
    "HistoricalSeriesSynthesizer",
    "seasonal_factor",
    "weather_condition",
    # Sizing
    "Appliance",
    "LoadSummary",
    "RequirementsCalculator",
    "summarize_load",
]
