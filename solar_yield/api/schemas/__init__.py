"""
Pydantic schemas for API request/response validation.

- common: response envelopes and the aliased base model
- solar: prediction, history and sizing schemas
"""

from __future__ import annotations

from .common import AliasedModel, ApiResponse, ErrorResponse
from .solar import (
    ApplianceItem,
    HistoricalResponse,
    PredictionRequest,
    PredictionResponse,
    RequirementsRequest,
    WeatherDataIn,
)

__all__ = [
    "AliasedModel",
    "ApiResponse",
    "ErrorResponse",
    "ApplianceItem",
    "HistoricalResponse",
    "PredictionRequest",
    "PredictionResponse",
    "RequirementsRequest",
    "WeatherDataIn",
]
