"""
Per-city climate reference data for Maharashtra.

Provides :class:`LocationClimateProfile`, the immutable
:class:`ClimateProfileTable` shared by the estimator, the historical
synthesizer and the requirements calculator, plus the static reference
tables served by the API (coordinates, recommended configurations,
qualitative solar potential).
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Iterator, Mapping, Tuple

DEFAULT_LOCATION = "Mumbai"


@dataclass(frozen=True)
class LocationClimateProfile:
    """
    Static climate constants for one city.

    Attributes:
        peak_sun_hours: Baseline equivalent full-sun hours per day.
        system_efficiency: Baseline system efficiency as a fraction (0-1),
            used when sizing an installation for a given consumption.
        monsoon_impact: Fractional output reduction during June–September.
            Example: 0.35 means monsoon days produce 65% of a dry day.
        cost_per_watt: Installed cost in INR per watt peak.
        base_energy: Baseline daily energy (kWh/day) of the reference
            installation used by the historical synthesizer.
        efficiency_pct: Baseline performance (%) around which the historical
            synthesizer draws daily efficiency values.
    """

    peak_sun_hours: float
    system_efficiency: float
    monsoon_impact: float
    cost_per_watt: float
    base_energy: float
    efficiency_pct: float


class ClimateProfileTable(Mapping[str, LocationClimateProfile]):
    """
    Read-only mapping from city name to :class:`LocationClimateProfile`.

    Lookups through :meth:`resolve` are case-sensitive exact matches; a name
    that is not in the table resolves to the fallback profile instead of
    raising. Plain mapping access (``table[name]``) keeps the usual KeyError
    semantics.
    """

    def __init__(
        self,
        profiles: Mapping[str, LocationClimateProfile],
        fallback: str = DEFAULT_LOCATION,
    ) -> None:
        if fallback not in profiles:
            raise ValueError(f"fallback location '{fallback}' missing from profiles")
        self._profiles = MappingProxyType(dict(profiles))
        self.fallback = fallback

    def __getitem__(self, name: str) -> LocationClimateProfile:
        return self._profiles[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._profiles)

    def __len__(self) -> int:
        return len(self._profiles)

    def resolve(self, name: str | None) -> LocationClimateProfile:
        """Return the profile for ``name`` or the fallback profile."""
        if name is not None and name in self._profiles:
            return self._profiles[name]
        return self._profiles[self.fallback]

    def is_known(self, name: str | None) -> bool:
        return name is not None and name in self._profiles


DEFAULT_PROFILES = ClimateProfileTable(
    {
        "Mumbai": LocationClimateProfile(5.2, 0.75, 0.35, 50, 12, 75),
        "Pune": LocationClimateProfile(5.5, 0.78, 0.30, 48, 14, 78),
        "Nagpur": LocationClimateProfile(5.8, 0.82, 0.25, 45, 16, 82),
        "Nashik": LocationClimateProfile(5.3, 0.76, 0.32, 49, 13, 76),
        "Aurangabad": LocationClimateProfile(5.4, 0.79, 0.28, 47, 15, 79),
        "Solapur": LocationClimateProfile(5.9, 0.84, 0.22, 44, 17, 84),
        "Kolhapur": LocationClimateProfile(5.1, 0.73, 0.38, 51, 11, 73),
        "Amravati": LocationClimateProfile(5.6, 0.80, 0.27, 46, 15, 80),
    }
)

CITY_COORDINATES: Mapping[str, Tuple[float, float]] = MappingProxyType(
    {
        "Mumbai": (19.0760, 72.8777),
        "Pune": (18.5204, 73.8567),
        "Nagpur": (21.1458, 79.0882),
        "Nashik": (19.9975, 73.7898),
        "Aurangabad": (19.8762, 75.3433),
        "Solapur": (17.6599, 75.9064),
        "Kolhapur": (16.7050, 74.2433),
        "Amravati": (20.9374, 77.7796),
    }
)

# Approximate state boundaries (degrees).
MAHARASHTRA_BOUNDS: Mapping[str, float] = MappingProxyType(
    {"north": 22.0, "south": 15.5, "east": 80.5, "west": 72.5}
)


def is_within_maharashtra(lat: float, lon: float) -> bool:
    """Return True when the coordinates fall inside the Maharashtra bounding box."""
    return (
        MAHARASHTRA_BOUNDS["south"] <= lat <= MAHARASHTRA_BOUNDS["north"]
        and MAHARASHTRA_BOUNDS["west"] <= lon <= MAHARASHTRA_BOUNDS["east"]
    )


@dataclass(frozen=True)
class OptimalConfiguration:
    """Recommended fixed installation for a city."""

    tilt_angle: float
    azimuth: float
    recommended_capacity: float
    notes: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tiltAngle": self.tilt_angle,
            "azimuth": self.azimuth,
            "recommendedCapacity": self.recommended_capacity,
            "notes": self.notes,
        }


STANDARD_CONFIGURATION = OptimalConfiguration(30, 180, 5, "Standard configuration")

OPTIMAL_CONFIGS: Mapping[str, OptimalConfiguration] = MappingProxyType(
    {
        "Mumbai": OptimalConfiguration(25, 180, 5, "Coastal climate, consider salt resistance"),
        "Pune": OptimalConfiguration(28, 180, 5, "Moderate climate, excellent solar potential"),
        "Nagpur": OptimalConfiguration(32, 180, 6, "Hot climate, consider cooling systems"),
        "Nashik": OptimalConfiguration(30, 180, 5, "Pleasant climate, good for solar"),
        "Aurangabad": OptimalConfiguration(29, 180, 5, "Moderate climate, stable performance"),
        "Solapur": OptimalConfiguration(33, 180, 6, "Hot climate, high solar potential"),
        "Kolhapur": OptimalConfiguration(26, 180, 5, "Humid climate, consider ventilation"),
        "Amravati": OptimalConfiguration(31, 180, 5, "Moderate climate, good solar potential"),
    }
)


def optimal_config(location: str) -> OptimalConfiguration:
    """
    Recommended configuration for ``location``.

    Unlike climate profiles, unknown cities get the generic standard
    configuration rather than Mumbai's.
    """
    return OPTIMAL_CONFIGS.get(location, STANDARD_CONFIGURATION)


def _potential(irradiance: str, sun_hours: str, monsoon: str, solar_class: str) -> Dict[str, str]:
    return {
        "annualIrradiance": irradiance,
        "peakSunHours": sun_hours,
        "monsoonImpact": monsoon,
        "bestSeason": "Oct-May",
        "solarClass": solar_class,
    }


SOLAR_POTENTIAL: Mapping[str, Mapping[str, str]] = MappingProxyType(
    {
        "Mumbai": _potential("5.8 kWh/m²/day", "5.2 hours/day", "35% reduction", "Excellent"),
        "Pune": _potential("6.1 kWh/m²/day", "5.5 hours/day", "30% reduction", "Excellent"),
        "Nagpur": _potential("6.3 kWh/m²/day", "5.8 hours/day", "25% reduction", "Outstanding"),
        "Nashik": _potential("5.9 kWh/m²/day", "5.3 hours/day", "32% reduction", "Excellent"),
        "Aurangabad": _potential("6.0 kWh/m²/day", "5.4 hours/day", "28% reduction", "Excellent"),
        "Solapur": _potential("6.4 kWh/m²/day", "5.9 hours/day", "22% reduction", "Outstanding"),
        "Kolhapur": _potential("5.7 kWh/m²/day", "5.1 hours/day", "38% reduction", "Very Good"),
        "Amravati": _potential("6.2 kWh/m²/day", "5.6 hours/day", "27% reduction", "Excellent"),
    }
)
