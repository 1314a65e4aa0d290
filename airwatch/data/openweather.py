"""Access OpenWeather air pollution, weather and geocoding data."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

import requests

from ..services.aqi import AQIValue, PollutantReading
from ..utils.cache import ResponseCache, make_key
from ..utils.dates import days_before, from_unix, to_ymd
from .demo import Location, Observation

LOGGER = logging.getLogger(__name__)

OPENWEATHER_BASE_URL = "https://api.openweathermap.org"
NASA_ASSETS_URL = "https://api.nasa.gov/planetary/earth/assets"
FORECAST_LIMIT = 24


@dataclass
class ApiUsage:
    """Running count of upstream calls since the last reset."""

    openweather: int = 0
    nasa: int = 0
    last_reset: float = field(default_factory=time.time)

    def record(self, service: str, calls: int = 1) -> None:
        setattr(self, service, getattr(self, service) + calls)

    def reset(self) -> None:
        self.openweather = 0
        self.nasa = 0
        self.last_reset = time.time()

    def to_dict(self) -> Dict[str, int]:
        return {"openweather": self.openweather, "nasa": self.nasa, "lastReset": int(self.last_reset * 1000)}


def parse_observation(entry: Dict[str, Any]) -> Observation:
    """Turn one ``list`` item of an air pollution response into an observation."""
    return Observation(
        timestamp=from_unix(entry["dt"]),
        aqi=AQIValue.qualitative(entry["main"]["aqi"]),
        pollutants=PollutantReading.from_components(entry.get("components", {})),
    )


class OpenWeatherClient:
    """Thin wrapper around the OpenWeather APIs used by the air quality report."""

    def __init__(
        self,
        api_key: str,
        cache: Optional[ResponseCache] = None,
        usage: Optional[ApiUsage] = None,
        timeout: float = 60.0,
    ) -> None:
        self.api_key = api_key
        self.cache = cache if cache is not None else ResponseCache()
        self.usage = usage if usage is not None else ApiUsage()
        self.timeout = timeout

    def _request(self, path: str, params: Dict[str, object]) -> Any:
        query = dict(params)
        query["appid"] = self.api_key
        LOGGER.debug("Requesting OpenWeather %s", path)
        response = requests.get(f"{OPENWEATHER_BASE_URL}/{path}", params=query, timeout=self.timeout)
        self.usage.record("openweather")
        response.raise_for_status()
        return response.json()

    def air_pollution(self, latitude: float, longitude: float) -> Observation:
        payload = self._request("data/2.5/air_pollution", {"lat": latitude, "lon": longitude})
        return parse_observation(payload["list"][0])

    def air_pollution_forecast(self, latitude: float, longitude: float, limit: int = FORECAST_LIMIT) -> List[Observation]:
        payload = self._request("data/2.5/air_pollution/forecast", {"lat": latitude, "lon": longitude})
        return [parse_observation(entry) for entry in payload.get("list", [])[:limit]]

    def weather(self, latitude: float, longitude: float) -> Dict[str, Any]:
        """Current weather, plus the place name OpenWeather associates with the point."""
        payload = self._request("data/2.5/weather", {"lat": latitude, "lon": longitude, "units": "metric"})
        main = payload.get("main", {})
        return {
            "city": payload.get("name"),
            "country": payload.get("sys", {}).get("country"),
            "temperature": main.get("temp"),
            "humidity": main.get("humidity"),
            "pressure": main.get("pressure"),
            "windSpeed": payload.get("wind", {}).get("speed"),
            "description": (payload.get("weather") or [{}])[0].get("description"),
        }

    def reverse_geocode(self, latitude: float, longitude: float) -> Location:
        key = make_key("geocode", latitude, longitude)
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        results = self._request("geo/1.0/reverse", {"lat": latitude, "lon": longitude, "limit": 1})
        if not results:
            raise LookupError(f"No location found for {latitude}, {longitude}")
        first = results[0]
        location = Location(
            latitude=first.get("lat", latitude),
            longitude=first.get("lon", longitude),
            city=first.get("name"),
            country=first.get("country"),
            state=first.get("state"),
        )
        self.cache.put(key, location)
        return location


class NasaClient:
    """Optional NASA Earth imagery lookup; failures only cost the extra context."""

    def __init__(self, api_key: str, usage: Optional[ApiUsage] = None, timeout: float = 60.0) -> None:
        self.api_key = api_key
        self.usage = usage if usage is not None else ApiUsage()
        self.timeout = timeout

    def earth_assets(self, latitude: float, longitude: float, begin: Optional[datetime] = None) -> Optional[Dict[str, Any]]:
        params = {
            "lat": latitude,
            "lon": longitude,
            "begin": to_ymd(begin or days_before(None, 30)),
            "api_key": self.api_key,
        }
        try:
            response = requests.get(NASA_ASSETS_URL, params=params, timeout=self.timeout)
            self.usage.record("nasa")
            response.raise_for_status()
            return response.json()
        except requests.RequestException as exc:
            LOGGER.warning("NASA API failed: %s", exc)
            return None
