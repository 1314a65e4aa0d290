"""Configuration helpers for API keys and defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

from dotenv import dotenv_values

from .cache import DEFAULT_TTL_SECONDS


@dataclass(frozen=True)
class ApiKeys:
    openweather: str
    nasa: Optional[str] = None


def _read_settings(env_path: Path | None = None) -> Dict[str, Optional[str]]:
    env_path = env_path or Path(".env")
    values: Dict[str, Optional[str]] = {}
    if env_path.exists():
        values.update(dotenv_values(str(env_path)))
    values.update({key: value for key, value in os.environ.items() if value})
    return values


def load_api_keys(env_path: Path | None = None) -> ApiKeys:
    """Load upstream API keys from environment variables or a .env file."""
    values = _read_settings(env_path)
    openweather = values.get("WEATHER_API_KEY")
    if not openweather:
        raise RuntimeError("WEATHER_API_KEY must be set in environment variables or .env")
    return ApiKeys(openweather=openweather, nasa=values.get("NASA_API_KEY") or None)


def get_cache_ttl_seconds(env_path: Path | None = None) -> float:
    """Return how long upstream responses stay fresh in the response cache."""
    raw = _read_settings(env_path).get("AIRWATCH_CACHE_TTL_SECONDS")
    return float(raw) if raw else DEFAULT_TTL_SECONDS


def get_request_timeout(env_path: Path | None = None) -> float:
    raw = _read_settings(env_path).get("AIRWATCH_REQUEST_TIMEOUT")
    return float(raw) if raw else 60.0
