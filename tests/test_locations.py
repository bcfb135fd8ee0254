from __future__ import annotations

from dataclasses import FrozenInstanceError

import pytest

from solar_yield.simulation.locations import (
    CITY_COORDINATES,
    DEFAULT_PROFILES,
    OPTIMAL_CONFIGS,
    SOLAR_POTENTIAL,
    STANDARD_CONFIGURATION,
    ClimateProfileTable,
    LocationClimateProfile,
    is_within_maharashtra,
    optimal_config,
)


def test_reference_tables_cover_the_same_cities():
    cities = set(DEFAULT_PROFILES)
    assert len(cities) == 8
    assert set(CITY_COORDINATES) == cities
    assert set(OPTIMAL_CONFIGS) == cities
    assert set(SOLAR_POTENTIAL) == cities


def test_resolve_falls_back_to_mumbai():
    assert DEFAULT_PROFILES.resolve("Nagpur").peak_sun_hours == pytest.approx(5.8)
    assert DEFAULT_PROFILES.resolve("Unknown") is DEFAULT_PROFILES["Mumbai"]
    assert DEFAULT_PROFILES.resolve(None) is DEFAULT_PROFILES["Mumbai"]
    assert DEFAULT_PROFILES.resolve("pune") is DEFAULT_PROFILES["Mumbai"]
    assert not DEFAULT_PROFILES.is_known("pune")
    assert DEFAULT_PROFILES.is_known("Pune")


def test_table_is_read_only():
    with pytest.raises(TypeError):
        DEFAULT_PROFILES["Goa"] = DEFAULT_PROFILES["Mumbai"]  # type: ignore[index]
    with pytest.raises(FrozenInstanceError):
        DEFAULT_PROFILES["Mumbai"].peak_sun_hours = 1.0  # type: ignore[misc]


def test_table_requires_fallback_entry():
    profile = LocationClimateProfile(5.0, 0.8, 0.3, 50, 12, 75)
    with pytest.raises(ValueError):
        ClimateProfileTable({"Pune": profile})
    table = ClimateProfileTable({"Pune": profile}, fallback="Pune")
    assert table.resolve("Elsewhere") is profile


def test_optimal_config_falls_back_to_standard():
    assert optimal_config("Nagpur").tilt_angle == 32
    assert optimal_config("Nagpur").recommended_capacity == 6
    assert optimal_config("Atlantis") is STANDARD_CONFIGURATION
    assert optimal_config("Atlantis").to_dict() == {
        "tiltAngle": 30,
        "azimuth": 180,
        "recommendedCapacity": 5,
        "notes": "Standard configuration",
    }


def test_maharashtra_bounds():
    lat, lon = CITY_COORDINATES["Pune"]
    assert is_within_maharashtra(lat, lon)
    assert not is_within_maharashtra(28.61, 77.21)  # Delhi
    assert not is_within_maharashtra(15.0, 74.0)
