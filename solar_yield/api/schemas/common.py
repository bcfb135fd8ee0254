"""
Response envelope shared by every endpoint.

Successful calls answer ``{"success": true, "data": ...}``; failures answer
``{"success": false, "message": ..., "error": ...}``.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict


class AliasedModel(BaseModel):
    """Base for camelCase JSON models that also accept field names."""

    model_config = ConfigDict(populate_by_name=True)


class ApiResponse(BaseModel):
    """Generic success envelope."""

    success: bool = True
    data: Any = None


class ErrorResponse(BaseModel):
    """
    Failure envelope.

    Attributes:
        success: Always False.
        message: Human-readable summary.
        error: Optional detail (first validation error, provider status...).
    """

    success: bool = False
    message: str
    error: Optional[str] = None
