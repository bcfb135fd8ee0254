"""
Error types raised outside the estimation core.

The estimator and the synthesizer never raise domain errors: inputs are
defaulted and unknown locations fall back to the default profile. These
exceptions belong to the weather provider boundary.
"""

from __future__ import annotations


class SolarYieldError(Exception):
    """Base class for service-level failures."""


class WeatherServiceError(SolarYieldError):
    """
    Failure while talking to the weather provider.

    Attributes:
        status_code: HTTP status returned by the provider, or None when the
            request never produced a response (timeout, DNS, missing API key).
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class UnsupportedLocationError(SolarYieldError):
    """Requested city or coordinates are outside the supported region."""
