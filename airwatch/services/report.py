"""Assemble the air quality report presented for a location."""

from __future__ import annotations

import logging
import random
from datetime import datetime
from typing import Dict, List, Optional

import requests

from ..data.demo import DemoSnapshot, Location, Observation, generate_demo_snapshot, generate_historical_data
from ..data.openweather import ApiUsage, NasaClient, OpenWeatherClient
from ..utils.cache import ResponseCache, make_key
from ..utils.dates import to_iso, utcnow
from .alerts import classify_qualitative, classify_standard, health_recommendations, pollutant_status
from .aqi import aqi_for_reading, concentration_in_table_units
from .forecast import BoundedRandomWalk, ForecastSeries, ForecastStrategy

LOGGER = logging.getLogger(__name__)


def describe_observation(observation: Observation) -> Dict[str, object]:
    """Provider index and locally computed US AQI, reported side by side."""
    table_units = {
        pollutant: concentration_in_table_units(pollutant, value)
        for pollutant, value in observation.pollutants.items()
    }
    us_aqi = aqi_for_reading(table_units)
    return {
        "timestamp": to_iso(observation.timestamp),
        "aqi": observation.aqi.value,
        "aqiCategory": classify_qualitative(observation.aqi).to_dict(),
        "usAqi": us_aqi.value if us_aqi is not None else None,
        "usAqiCategory": classify_standard(us_aqi).to_dict() if us_aqi is not None else None,
        "pollutants": observation.pollutants.as_dict(),
    }


def describe_current(observation: Observation) -> Dict[str, object]:
    section = describe_observation(observation)
    statuses = {}
    for pollutant, value in observation.pollutants.items():
        status = pollutant_status(pollutant, value)
        statuses[pollutant] = {"status": status.name, "color": status.color}
    section["pollutantStatus"] = statuses
    section["recommendations"] = health_recommendations(observation.aqi)
    return section


def assemble_report(
    location: Location,
    current: Observation,
    forecast: List[Observation],
    weather: Dict[str, object],
    predictions: ForecastSeries,
    data_sources: Dict[str, str],
    nasa: Optional[Dict[str, object]] = None,
    now: Optional[datetime] = None,
) -> Dict[str, object]:
    return {
        "location": location.to_dict(),
        "current": describe_current(current),
        "forecast": [describe_observation(observation) for observation in forecast],
        "weather": weather,
        "nasa": nasa,
        "predictions": predictions.to_dict(),
        "dataSources": data_sources,
        "lastUpdated": to_iso(now or utcnow()),
    }


def build_demo_report(
    latitude: float,
    longitude: float,
    city: Optional[str] = None,
    country: Optional[str] = None,
    strategy: Optional[ForecastStrategy] = None,
    rng: Optional[random.Random] = None,
    now: Optional[datetime] = None,
) -> Dict[str, object]:
    now = now or utcnow()
    strategy = strategy or BoundedRandomWalk(rng=rng)
    snapshot: DemoSnapshot = generate_demo_snapshot(latitude, longitude, city, country, rng=rng, now=now)
    predictions = strategy.synthesize(snapshot.current.aqi, now=now)
    return assemble_report(
        location=snapshot.location,
        current=snapshot.current,
        forecast=snapshot.forecast,
        weather=snapshot.weather,
        predictions=predictions,
        data_sources={"openweather": "demo", "nasa": "unavailable"},
        now=now,
    )


def _resolve_location(
    latitude: float,
    longitude: float,
    weather: Dict[str, object],
    client: OpenWeatherClient,
) -> Location:
    """Place name from the weather response, else from reverse geocoding."""
    if weather.get("city"):
        return Location(latitude, longitude, weather["city"], weather.get("country") or "XX")
    try:
        geocoded = client.reverse_geocode(latitude, longitude)
    except LookupError:
        LOGGER.info("No place name found for %s, %s", latitude, longitude)
        return Location(latitude, longitude, "Unknown City", weather.get("country") or "XX")
    return Location(
        latitude,
        longitude,
        geocoded.city or "Unknown City",
        geocoded.country or weather.get("country") or "XX",
        state=geocoded.state,
    )


def fetch_live_report(
    latitude: float,
    longitude: float,
    client: OpenWeatherClient,
    nasa: Optional[NasaClient] = None,
    strategy: Optional[ForecastStrategy] = None,
    with_history: bool = False,
    rng: Optional[random.Random] = None,
    now: Optional[datetime] = None,
) -> Dict[str, object]:
    """Fetch upstream data for a location; HTTP errors propagate."""
    now = now or utcnow()
    strategy = strategy or BoundedRandomWalk(rng=rng)
    LOGGER.info("Fetching air pollution data for %s, %s", latitude, longitude)

    current = client.air_pollution(latitude, longitude)
    forecast = client.air_pollution_forecast(latitude, longitude)
    weather = client.weather(latitude, longitude)
    nasa_data = nasa.earth_assets(latitude, longitude) if nasa is not None else None

    history = generate_historical_data(current.pollutants, now=now, rng=rng) if with_history else None
    predictions = strategy.synthesize(current.aqi, detail=True, history=history, now=now)

    location = _resolve_location(latitude, longitude, weather, client)
    conditions = {key: value for key, value in weather.items() if key not in ("city", "country")}
    report = assemble_report(
        location=location,
        current=current,
        forecast=forecast,
        weather=conditions,
        predictions=predictions,
        data_sources={"openweather": "live", "nasa": "live" if nasa_data else "unavailable"},
        nasa=nasa_data,
        now=now,
    )
    LOGGER.info("Air pollution data fetched successfully for %s", location.city)
    return report


def build_report(
    latitude: float,
    longitude: float,
    cache: ResponseCache,
    client: Optional[OpenWeatherClient] = None,
    nasa: Optional[NasaClient] = None,
    strategy: Optional[ForecastStrategy] = None,
    with_history: bool = False,
    city: Optional[str] = None,
    country: Optional[str] = None,
    rng: Optional[random.Random] = None,
    now: Optional[datetime] = None,
) -> Dict[str, object]:
    """Return the report for a location, preferring a fresh cached copy.

    Live reports are cached; demo reports, used when there is no client, the
    upstream fetch fails or it returns values outside their valid ranges, are not.
    """
    key = make_key("air-pollution", latitude, longitude)
    cached = cache.get(key)
    if cached is not None:
        LOGGER.info("Using cached air pollution data for %s", key)
        return cached

    if client is not None:
        try:
            report = fetch_live_report(latitude, longitude, client, nasa, strategy, with_history, rng, now)
        except (requests.RequestException, LookupError, ValueError) as exc:
            LOGGER.warning("Live air pollution data unavailable (%s); using demo data", exc)
        else:
            cache.put(key, report)
            return report

    return build_demo_report(latitude, longitude, city, country, strategy, rng, now)


def service_status(cache: ResponseCache, usage: ApiUsage, now: Optional[datetime] = None) -> Dict[str, object]:
    return {
        "status": "running",
        "timestamp": to_iso(now or utcnow()),
        "apiCalls": usage.to_dict(),
        "cacheSize": len(cache),
    }
