"""
Weather-driven solar yield estimation.

Provides the input value objects (:class:`WeatherSnapshot`,
:class:`PanelConfiguration`), the :class:`PredictionResult` output and the
:class:`YieldEstimator` which turns one weather observation and one panel
installation into instantaneous power, energy and payback figures.

The model is a chain of fixed multiplicative factors, not an irradiance
transposition model. All coefficients are constants.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Tuple

OPTIMAL_TILT_DEG = 30.0
OPTIMAL_AZIMUTH_DEG = 180.0
REFERENCE_TEMPERATURE_C = 25.0
TEMPERATURE_COEFFICIENT = 0.004
BASE_PEAK_SUN_HOURS = 5.5
TYPICAL_PEAK_RATIO = 0.8
COST_PER_WATT_INR = 50.0
ELECTRICITY_RATE_INR_PER_KWH = 8.0

# Physical envelopes; values outside are clamped before estimation.
TEMPERATURE_BOUNDS = (-90.0, 70.0)
PERCENT_BOUNDS = (0.0, 100.0)
WIND_SPEED_BOUNDS = (0.0, 120.0)
IRRADIANCE_BOUNDS = (0.0, 2000.0)


def round_half_up(value: float, digits: int = 0) -> float:
    """
    Round halves toward positive infinity, as the browser UI does.

    ``round()`` uses banker's rounding, which would shift golden values
    such as 0.5 or 2.5 by one unit.
    """
    scale = 10 ** digits
    return math.floor(value * scale + 0.5) / scale


@dataclass(frozen=True)
class WeatherSnapshot:
    """
    One weather observation. Every field may be absent.

    Attributes:
        temperature: Air temperature (°C).
        humidity: Relative humidity (%, 0-100).
        cloud_cover: Cloud cover (%, 0-100).
        wind_speed: Wind speed (m/s). Carried for completeness, unused by the model.
        solar_irradiance: Global irradiance (W/m², >= 0).
    """

    temperature: float | None = None
    humidity: float | None = None
    cloud_cover: float | None = None
    wind_speed: float | None = None
    solar_irradiance: float | None = None

    DEFAULT_TEMPERATURE = 25.0
    DEFAULT_HUMIDITY = 60.0
    DEFAULT_CLOUD_COVER = 0.0
    DEFAULT_WIND_SPEED = 2.0
    DEFAULT_IRRADIANCE = 500.0

    def resolved(self) -> "WeatherSnapshot":
        """
        Return a copy where each absent or non-finite field carries its default
        and every value is clamped to its physical range.
        """
        return WeatherSnapshot(
            temperature=_or_default(self.temperature, self.DEFAULT_TEMPERATURE, TEMPERATURE_BOUNDS),
            humidity=_or_default(self.humidity, self.DEFAULT_HUMIDITY, PERCENT_BOUNDS),
            cloud_cover=_or_default(self.cloud_cover, self.DEFAULT_CLOUD_COVER, PERCENT_BOUNDS),
            wind_speed=_or_default(self.wind_speed, self.DEFAULT_WIND_SPEED, WIND_SPEED_BOUNDS),
            solar_irradiance=_or_default(
                self.solar_irradiance, self.DEFAULT_IRRADIANCE, IRRADIANCE_BOUNDS
            ),
        )

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any] | None) -> "WeatherSnapshot":
        """
        Build a snapshot from a JSON object.

        Accepts the flat shape (``temperature``, ``humidity``, ``cloudCover``,
        ``windSpeed``, ``solarIrradiance``) and the OpenWeather current-weather
        shape (``main.temp``, ``main.humidity``, ``clouds.all``, ``wind.speed``)
        enriched with a top-level ``solarIrradiance``. Flat keys win when both
        are present.
        """
        if not payload:
            return cls()
        main = _section(payload, "main")
        clouds = _section(payload, "clouds")
        wind = _section(payload, "wind")
        return cls(
            temperature=_first_number(payload.get("temperature"), main.get("temp")),
            humidity=_first_number(payload.get("humidity"), main.get("humidity")),
            cloud_cover=_first_number(payload.get("cloudCover"), clouds.get("all")),
            wind_speed=_first_number(payload.get("windSpeed"), wind.get("speed")),
            solar_irradiance=_first_number(payload.get("solarIrradiance")),
        )


def _section(payload: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    section = payload.get(key)
    return section if isinstance(section, Mapping) else {}


def _or_default(value: float | None, default: float, bounds: Tuple[float, float]) -> float:
    if value is None or not math.isfinite(value):
        return default
    low, high = bounds
    return min(high, max(low, float(value)))


def _first_number(*candidates: Any) -> float | None:
    for candidate in candidates:
        if candidate is None or isinstance(candidate, bool):
            continue
        try:
            number = float(candidate)
        except (TypeError, ValueError):
            continue
        if math.isfinite(number):
            return number
    return None


@dataclass(frozen=True)
class PanelConfiguration:
    """
    Fixed photovoltaic installation.

    Attributes:
        capacity_kw: Nameplate capacity (kW, > 0).
        efficiency_pct: Module efficiency (%, validated to 5-30 at the boundary).
        tilt_deg: Tilt from horizontal (degrees, 0-90).
        azimuth_deg: Orientation (degrees, 0-360, 180 = south).
    """

    capacity_kw: float
    efficiency_pct: float
    tilt_deg: float = OPTIMAL_TILT_DEG
    azimuth_deg: float = OPTIMAL_AZIMUTH_DEG


@dataclass(frozen=True)
class Financials:
    total_cost: float
    yearly_savings: float
    payback_period: float | None
    roi: float

    def to_dict(self) -> Dict[str, float | None]:
        return {
            "totalCost": self.total_cost,
            "yearlySavings": self.yearly_savings,
            "paybackPeriod": self.payback_period,
            "roi": self.roi,
        }


@dataclass(frozen=True)
class WeatherFactors:
    """Factors reported for debugging: cloud/tilt/azimuth in %, temp/humidity as ratios."""

    cloud_factor: float
    temp_factor: float
    humidity_factor: float
    tilt_efficiency: float
    azimuth_efficiency: float

    def to_dict(self) -> Dict[str, float]:
        return {
            "cloudFactor": self.cloud_factor,
            "tempFactor": self.temp_factor,
            "humidityFactor": self.humidity_factor,
            "tiltEfficiency": self.tilt_efficiency,
            "azimuthEfficiency": self.azimuth_efficiency,
        }


@dataclass(frozen=True)
class PredictionResult:
    """
    Rounded forecast for one weather snapshot and one installation.

    Attributes:
        current_power: Instantaneous AC-side estimate (kW, 3 dp).
        daily_energy: kWh/day (2 dp).
        monthly_energy: kWh over 30 days (integer).
        yearly_energy: kWh over 365 days (integer).
        efficiency: Output relative to 80% of nameplate (%, 1 dp).
        peak_sun_hours: Equivalent full-sun hours (1 dp).
        effective_irradiance: Irradiance after weather factors (W/m², integer).
        financials: Cost, savings, payback and ROI.
        weather_factors: Intermediate factors.
    """

    current_power: float
    daily_energy: float
    monthly_energy: float
    yearly_energy: float
    efficiency: float
    peak_sun_hours: float
    effective_irradiance: float
    financials: Financials
    weather_factors: WeatherFactors

    def to_dict(self) -> Dict[str, Any]:
        return {
            "currentPower": self.current_power,
            "dailyEnergy": self.daily_energy,
            "monthlyEnergy": self.monthly_energy,
            "yearlyEnergy": self.yearly_energy,
            "efficiency": self.efficiency,
            "peakSunHours": self.peak_sun_hours,
            "effectiveIrradiance": self.effective_irradiance,
            "financials": self.financials.to_dict(),
            "weatherFactors": self.weather_factors.to_dict(),
        }


def tilt_efficiency(tilt_deg: float, temperature: float) -> float:
    """
    Orientation derating for tilt, combined with a temperature term.

    Up to 30% loss at a 90° offset from the 30° optimum, multiplied by
    ``1 - (T - 25) * 0.004`` and floored at 0.5.
    """
    tilt_loss = 1 - (abs(tilt_deg - OPTIMAL_TILT_DEG) / 90) * 0.3
    temp_eff = 1 - (temperature - REFERENCE_TEMPERATURE_C) * TEMPERATURE_COEFFICIENT
    return max(0.5, tilt_loss * temp_eff)


def azimuth_efficiency(azimuth_deg: float) -> float:
    """Up to 20% loss when facing due north (180° away from south)."""
    return 1 - (abs(azimuth_deg - OPTIMAL_AZIMUTH_DEG) / 180) * 0.2


def peak_sun_hours(cloud_cover: float) -> float:
    """5.5 h base, reduced by up to 60% under full overcast."""
    return BASE_PEAK_SUN_HOURS * (1 - (cloud_cover / 100) * 0.6)


class YieldEstimator:
    """
    Deterministic weather-to-energy estimator.

    The estimator is stateless apart from its tariff constants, so a single
    instance can serve concurrent requests.

    Attributes:
        cost_per_watt: Installed cost in INR/W used for the financial block.
        electricity_rate: Grid tariff in INR/kWh used for yearly savings.

    Example:
        ```python
        estimator = YieldEstimator()
        result = estimator.estimate(
            WeatherSnapshot(temperature=25, humidity=60, cloud_cover=0, solar_irradiance=1000),
            PanelConfiguration(capacity_kw=5, efficiency_pct=20),
        )
        result.daily_energy  # 25.85
        ```
    """

    def __init__(
        self,
        cost_per_watt: float = COST_PER_WATT_INR,
        electricity_rate: float = ELECTRICITY_RATE_INR_PER_KWH,
    ) -> None:
        self.cost_per_watt = cost_per_watt
        self.electricity_rate = electricity_rate

    def estimate(self, weather: WeatherSnapshot, config: PanelConfiguration) -> PredictionResult:
        """
        Compute the forecast for one snapshot and one installation.

        Args:
            weather: Observation; absent fields take their defaults.
            config: Installation description.

        Returns:
            PredictionResult rounded for presentation.
        """
        w = weather.resolved()
        temperature = w.temperature
        humidity = w.humidity
        cloud_cover = w.cloud_cover

        cloud_factor = 1 - (cloud_cover / 100) * 0.7
        # Temperature derating is applied to irradiance, not to module efficiency.
        temp_factor = 1 + (temperature - REFERENCE_TEMPERATURE_C) * TEMPERATURE_COEFFICIENT
        humidity_factor = 1 - (humidity / 100) * 0.1

        effective_irradiance = w.solar_irradiance * cloud_factor * temp_factor * humidity_factor

        tilt_eff = tilt_efficiency(config.tilt_deg, temperature)
        azimuth_eff = azimuth_efficiency(config.azimuth_deg)

        efficiency_ratio = config.efficiency_pct / 100
        panel_area_m2 = config.capacity_kw * 1000 / efficiency_ratio / 1000
        theoretical_power_kw = effective_irradiance * panel_area_m2 * efficiency_ratio / 1000
        actual_power_kw = theoretical_power_kw * tilt_eff * azimuth_eff

        sun_hours = peak_sun_hours(cloud_cover)
        daily_energy = actual_power_kw * sun_hours
        monthly_energy = daily_energy * 30
        yearly_energy = daily_energy * 365

        efficiency = actual_power_kw / (config.capacity_kw * TYPICAL_PEAK_RATIO) * 100

        total_cost = config.capacity_kw * 1000 * self.cost_per_watt
        yearly_savings = yearly_energy * self.electricity_rate
        # No production means no payback; reported as null.
        payback_period = total_cost / yearly_savings if yearly_savings > 0 else None
        roi = yearly_savings / total_cost * 100 if total_cost else 0.0

        return PredictionResult(
            current_power=round_half_up(actual_power_kw, 3),
            daily_energy=round_half_up(daily_energy, 2),
            monthly_energy=round_half_up(monthly_energy),
            yearly_energy=round_half_up(yearly_energy),
            efficiency=round_half_up(efficiency, 1),
            peak_sun_hours=round_half_up(sun_hours, 1),
            effective_irradiance=round_half_up(effective_irradiance),
            financials=Financials(
                total_cost=round_half_up(total_cost),
                yearly_savings=round_half_up(yearly_savings),
                payback_period=None if payback_period is None else round_half_up(payback_period, 1),
                roi=round_half_up(roi, 1),
            ),
            weather_factors=WeatherFactors(
                cloud_factor=round_half_up(cloud_factor * 100),
                temp_factor=round_half_up(temp_factor, 2),
                humidity_factor=round_half_up(humidity_factor, 2),
                tilt_efficiency=round_half_up(tilt_eff * 100),
                azimuth_efficiency=round_half_up(azimuth_eff * 100),
            ),
        )
