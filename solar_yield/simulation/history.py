"""
Synthetic daily solar history per city.

Provides :class:`HistoricalRecord` and :class:`HistoricalSeriesSynthesizer`,
which walks backward from today producing one record per day. Each day
combines an annual seasonal cycle, a monsoon reduction taken from the city's
climate profile and bounded random weather noise.
"""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, List

import numpy as np

from ..calendar_utils import build_history_calendar
from .estimator import round_half_up
from .locations import DEFAULT_PROFILES, ClimateProfileTable

EFFICIENCY_BOUNDS = (60.0, 95.0)
REFERENCE_IRRADIANCE = 1000.0


@dataclass(frozen=True)
class HistoricalRecord:
    """
    One synthesized day.

    Attributes:
        date: Calendar day.
        energy: Daily energy (kWh, 2 dp).
        efficiency: Daily performance (%, 1 dp, within [60, 95]).
        solar_irradiance: Daily irradiance (W/m², integer).
        is_monsoon: True for June–September.
        weather_condition: One of Clear, Partly Cloudy, Cloudy, Rainy.
    """

    date: date
    energy: float
    efficiency: float
    solar_irradiance: int
    is_monsoon: bool
    weather_condition: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "energy": self.energy,
            "efficiency": self.efficiency,
            "solarIrradiance": self.solar_irradiance,
            "isMonsoon": self.is_monsoon,
            "weatherCondition": self.weather_condition,
        }


def seasonal_factor(day_of_year: int | np.ndarray) -> float | np.ndarray:
    """Annual cycle in [0.2, 1.0], peaking around day 171."""
    return 0.6 + 0.4 * np.sin((np.asarray(day_of_year) - 80) * 2 * math.pi / 365)


def weather_condition(is_monsoon: bool, draw: float) -> str:
    """
    Map a uniform draw in [0, 1) to a weather label.

    Monsoon: Rainy 40%, Cloudy 30%, Partly Cloudy 30%.
    Otherwise: Clear 60%, Partly Cloudy 20%, Cloudy 20%.
    """
    if is_monsoon:
        if draw < 0.4:
            return "Rainy"
        if draw < 0.7:
            return "Cloudy"
        return "Partly Cloudy"
    if draw < 0.6:
        return "Clear"
    if draw < 0.8:
        return "Partly Cloudy"
    return "Cloudy"


class HistoricalSeriesSynthesizer:
    """
    Generator of plausible daily production histories.

    Randomness comes only from the injected ``numpy.random.Generator``; pass a
    seeded generator for reproducible series. Instances hold no other state.

    Attributes:
        profiles: Climate profile table; unknown cities use its fallback.
        rng: Random source used for the per-day noise draws.

    Example:
        ```python
        synth = HistoricalSeriesSynthesizer(rng=np.random.default_rng(7))
        records = synth.synthesize("Pune", 30)
        records[-1].date == date.today()  # True
        ```
    """

    def __init__(
        self,
        profiles: ClimateProfileTable = DEFAULT_PROFILES,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.profiles = profiles
        self.rng = rng if rng is not None else np.random.default_rng()

    def synthesize(
        self,
        location: str,
        days: int,
        today: date | None = None,
    ) -> List[HistoricalRecord]:
        """
        Produce ``days`` records ending at ``today``, oldest first.

        Args:
            location: City name; exact, case-sensitive match with fallback.
            days: Number of days (positive integer).
            today: Last day of the series. Defaults to the current local date.

        Returns:
            List of HistoricalRecord in ascending date order.

        Raises:
            ValueError: If ``days`` is not a positive integer.
        """
        if isinstance(days, bool) or not isinstance(days, numbers.Integral) or days < 1:
            raise ValueError("days must be a positive integer")

        profile = self.profiles.resolve(location)
        end = today or date.today()
        dates, doy, _, monsoon = build_history_calendar(int(days), end)
        seasonal = seasonal_factor(doy)

        low, high = EFFICIENCY_BOUNDS
        records: List[HistoricalRecord] = []
        for i, day in enumerate(dates):
            is_monsoon = bool(monsoon[i])
            monsoon_factor = (1 - profile.monsoon_impact) if is_monsoon else 1.0

            variation = self.rng.uniform(0.8, 1.2)
            energy = profile.base_energy * seasonal[i] * monsoon_factor * variation

            efficiency = profile.efficiency_pct + self.rng.uniform(-5.0, 5.0)
            efficiency = min(high, max(low, efficiency))

            irradiance = (
                REFERENCE_IRRADIANCE * seasonal[i] * monsoon_factor * self.rng.uniform(0.7, 1.3)
            )

            records.append(
                HistoricalRecord(
                    date=day,
                    energy=round_half_up(float(energy), 2),
                    efficiency=round_half_up(float(efficiency), 1),
                    solar_irradiance=int(round_half_up(float(irradiance))),
                    is_monsoon=is_monsoon,
                    weather_condition=weather_condition(is_monsoon, float(self.rng.random())),
                )
            )
        return records
