"""
API route modules, organized by domain:
- solar: estimation, history, sizing and reference data
- weather: live provider data
"""

from __future__ import annotations

from .solar import router as solar_router
from .weather import router as weather_router

__all__ = [
    "solar_router",
    "weather_router",
]
