"""
Sizing of a rooftop installation from an appliance load list.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping

from .locations import DEFAULT_PROFILES, ClimateProfileTable

PANEL_RATING_W = 400
ELECTRICITY_RATE_INR_PER_KWH = 8.0


@dataclass
class Appliance:
    """
    One appliance line of a household load.

    Attributes:
        name: Display name.
        wattage: Rated power of one unit (W).
        quantity: Number of units.
        hours: Daily usage hours, used to derive consumption when missing.
        daily_consumption: Daily energy of the whole line (kWh).
    """

    name: str
    wattage: float
    quantity: int = 1
    hours: float | None = None
    daily_consumption: float | None = None

    def __post_init__(self) -> None:
        if self.daily_consumption is None:
            hours = self.hours or 0.0
            self.daily_consumption = self.wattage * hours * self.quantity / 1000

    @property
    def connected_load_w(self) -> float:
        return self.wattage * self.quantity

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Appliance":
        return cls(
            name=str(payload.get("name", "")),
            wattage=float(payload.get("wattage", 0) or 0),
            quantity=int(payload.get("quantity", 1) or 0),
            hours=payload.get("hours"),
            daily_consumption=payload.get("dailyConsumption"),
        )


@dataclass
class LoadSummary:
    """Totals of an appliance list."""

    total_load_w: float
    daily_consumption_kwh: float
    monthly_consumption_kwh: float
    breakdown: List[Dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalLoad": self.total_load_w,
            "dailyConsumption": self.daily_consumption_kwh,
            "monthlyConsumption": self.monthly_consumption_kwh,
            "applianceBreakdown": self.breakdown,
        }


def _breakdown(appliances: List[Appliance], total_load_w: float) -> List[Dict[str, Any]]:
    return [
        {
            "name": a.name,
            "wattage": a.wattage,
            "quantity": a.quantity,
            "dailyConsumption": a.daily_consumption,
            "percentage": (a.connected_load_w / total_load_w * 100) if total_load_w else 0.0,
        }
        for a in appliances
    ]


def summarize_load(appliances: Iterable[Appliance]) -> LoadSummary:
    """
    Aggregate connected load and consumption of an appliance list.

    Percentages are shares of connected load (W), not of energy.
    """
    items = list(appliances)
    total_load = sum(a.connected_load_w for a in items)
    daily = sum(a.daily_consumption or 0.0 for a in items)
    return LoadSummary(
        total_load_w=total_load,
        daily_consumption_kwh=daily,
        monthly_consumption_kwh=daily * 30,
        breakdown=_breakdown(items, total_load),
    )


class RequirementsCalculator:
    """
    Panel count, cost and payback needed to cover a daily consumption.

    Location constants come from the injected profile table; unknown cities
    are sized with the fallback profile.
    """

    def __init__(
        self,
        profiles: ClimateProfileTable = DEFAULT_PROFILES,
        panel_rating_w: int = PANEL_RATING_W,
        electricity_rate: float = ELECTRICITY_RATE_INR_PER_KWH,
    ) -> None:
        self.profiles = profiles
        self.panel_rating_w = panel_rating_w
        self.electricity_rate = electricity_rate

    def calculate(
        self,
        location: str,
        daily_consumption: float,
        appliances: Iterable[Appliance] = (),
    ) -> Dict[str, Any]:
        """
        Size an installation for ``daily_consumption`` kWh/day.

        Args:
            location: City name (fallback applies).
            daily_consumption: Energy to cover (kWh/day, > 0).
            appliances: Optional appliance list for the breakdown.

        Returns:
            Dictionary in the JSON shape served by the API. ``totalLoad`` and
            ``applianceConsumption`` summarize the appliance list; they are 0
            when no appliances are given.
        """
        profile = self.profiles.resolve(location)
        items = list(appliances)

        required_capacity = daily_consumption / (profile.peak_sun_hours * profile.system_efficiency)
        number_of_panels = math.ceil(required_capacity * 1000 / self.panel_rating_w)
        actual_capacity = number_of_panels * self.panel_rating_w / 1000

        total_cost = number_of_panels * self.panel_rating_w * profile.cost_per_watt
        daily_savings = daily_consumption * self.electricity_rate
        payback_period = total_cost / (daily_savings * 365) if daily_savings > 0 else None

        load = summarize_load(items)

        return {
            "location": location,
            "dailyConsumption": daily_consumption,
            "requiredCapacity": required_capacity,
            "numberOfPanels": number_of_panels,
            "panelCapacity": self.panel_rating_w,
            "actualCapacity": actual_capacity,
            "peakSunHours": profile.peak_sun_hours,
            "efficiency": profile.system_efficiency,
            "estimatedGeneration": actual_capacity * profile.peak_sun_hours * profile.system_efficiency,
            "costEstimate": total_cost,
            "dailySavings": daily_savings,
            "paybackPeriod": payback_period,
            "monthlyConsumption": daily_consumption * 30,
            "totalLoad": load.total_load_w,
            "applianceConsumption": load.daily_consumption_kwh,
            "applianceBreakdown": load.breakdown,
        }
