from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Tuple

DEFAULT_OPENWEATHER_BASE_URL = "https://api.openweathermap.org/data/2.5"
DEFAULT_CORS_ORIGINS: Tuple[str, ...] = (
    "http://localhost:5000",
    "http://localhost:3000",
    "http://127.0.0.1:5000",
)
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def _load_dotenv(path: str = ".env") -> Dict[str, str]:
    """
    Populate os.environ from a .env file without overriding real variables.
    Returns a mapping of parsed key/value pairs.
    """
    env_path = Path(path)
    if not env_path.exists():
        return {}

    parsed: Dict[str, str] = {}
    for line in env_path.read_text(encoding="utf-8").splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#") or "=" not in stripped:
            continue
        key, value = stripped.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        os.environ.setdefault(key, value)
        parsed[key] = value
    return parsed


_load_dotenv()


@dataclass(frozen=True)
class Settings:
    """
    Runtime settings for the HTTP service, the CLI and the weather client.

    Attributes:
        openweather_api_key: API key for the OpenWeather provider. When missing,
            live weather lookups fail and predictions fall back to default weather.
        openweather_base_url: Base URL of the OpenWeather 2.5 REST API.
        http_timeout: Timeout in seconds for provider requests.
        log_level: Logging level name applied by :func:`configure_logging`.
        cors_origins: Origins allowed by the CORS middleware.
        port: Port used by ``solar-yield serve``.
    """

    openweather_api_key: str | None
    openweather_base_url: str = DEFAULT_OPENWEATHER_BASE_URL
    http_timeout: float = 10.0
    log_level: str = "INFO"
    cors_origins: Tuple[str, ...] = DEFAULT_CORS_ORIGINS
    port: int = 5000


def _parse_origins(raw: str | None) -> Tuple[str, ...]:
    if not raw:
        return DEFAULT_CORS_ORIGINS
    origins = tuple(token.strip() for token in raw.split(",") if token.strip())
    return origins or DEFAULT_CORS_ORIGINS


def get_settings() -> Settings:
    """
    Build the settings from the process environment.

    Returns:
        Settings populated from environment variables (and the .env file).
    """
    return Settings(
        openweather_api_key=os.getenv("OPENWEATHER_API_KEY") or None,
        openweather_base_url=os.getenv("OPENWEATHER_BASE_URL", DEFAULT_OPENWEATHER_BASE_URL).rstrip("/"),
        http_timeout=float(os.getenv("SOLAR_YIELD_HTTP_TIMEOUT", "10")),
        log_level=os.getenv("SOLAR_YIELD_LOG_LEVEL", "INFO").upper(),
        cors_origins=_parse_origins(os.getenv("SOLAR_YIELD_CORS_ORIGINS")),
        port=int(os.getenv("PORT", "5000")),
    )


def configure_logging(level: str | int = "INFO") -> None:
    """
    Configure the root logger once for CLI and server entry points.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("solar_yield").setLevel(level)
