from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .. import __version__
from ..config import Settings, configure_logging, get_settings
from ..exceptions import SolarYieldError, UnsupportedLocationError, WeatherServiceError
from .routes import solar_router, weather_router
from .schemas.common import ErrorResponse

logger = logging.getLogger(__name__)


def _error(status_code: int, message: str, error: str | None = None) -> JSONResponse:
    body = ErrorResponse(message=message, error=error)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(RequestValidationError)
    async def _validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = exc.errors()
        detail = None
        if errors:
            first = errors[0]
            field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
            detail = f"{field}: {first.get('msg')}" if field else first.get("msg")
        return _error(400, "Invalid request parameters", detail)

    @app.exception_handler(UnsupportedLocationError)
    async def _unsupported_location(request: Request, exc: UnsupportedLocationError) -> JSONResponse:
        return _error(400, str(exc))

    @app.exception_handler(WeatherServiceError)
    async def _weather_error(request: Request, exc: WeatherServiceError) -> JSONResponse:
        logger.error("Weather API error on %s: %s", request.url.path, exc)
        if exc.status_code == 404:
            return _error(404, "Location not found")
        return _error(500, "Error fetching weather data", str(exc))

    @app.exception_handler(SolarYieldError)
    async def _service_error(request: Request, exc: SolarYieldError) -> JSONResponse:
        logger.error("Service error on %s: %s", request.url.path, exc)
        return _error(500, "Internal server error", str(exc))

    @app.exception_handler(Exception)
    async def _unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s", request.url.path)
        return _error(500, "Internal server error")


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Instantiate the FastAPI application and register routers.

    Registers:
    - solar: prediction, history, sizing and reference data
    - weather: live provider data
    - GET /health

    Args:
        settings: Optional settings; read from the environment when omitted.

    Returns:
        FastAPI: Configured application instance.

    Example:
        ```python
        app = create_app()
        uvicorn.run(app, host="0.0.0.0", port=5000)
        ```
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Solar Yield Forecast API",
        version=__version__,
        description="Weather-driven solar power, energy and payback estimates for Maharashtra.",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Content-Type", "Authorization"],
    )

    _register_exception_handlers(app)

    @app.get("/health", tags=["system"])
    def health() -> dict:
        return {
            "status": "OK",
            "message": "Solar yield backend is running",
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "version": __version__,
        }

    app.include_router(solar_router)
    app.include_router(weather_router)

    return app
