"""Simulated observations used when live upstream data is unavailable."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Dict, List, Mapping, Optional, Tuple

import pandas as pd

from ..services.aqi import AQIValue, PollutantReading
from ..services.breakpoints import SUPPORTED_POLLUTANTS
from ..utils.dates import cadence, utcnow

KNOWN_CITIES: Dict[str, Tuple[str, str]] = {
    "40.7128,-74.0060": ("New York", "US"),
    "51.5074,-0.1278": ("London", "GB"),
    "35.6762,139.6503": ("Tokyo", "JP"),
    "48.8566,2.3522": ("Paris", "FR"),
}

DEMO_POLLUTANT_RANGES: Dict[str, Tuple[float, float]] = {
    "pm2_5": (5.0, 25.0),
    "pm10": (10.0, 40.0),
    "no2": (5.0, 20.0),
    "o3": (20.0, 45.0),
    "co": (0.5, 2.5),
    "so2": (1.0, 6.0),
}

DEMO_FORECAST_HOURS = 24


@dataclass(frozen=True)
class Location:
    latitude: float
    longitude: float
    city: str
    country: str
    state: Optional[str] = None

    def to_dict(self) -> Dict[str, object]:
        return {"lat": self.latitude, "lon": self.longitude, "city": self.city, "country": self.country}


@dataclass(frozen=True)
class Observation:
    """Provider index and pollutant snapshot at one point in time."""

    timestamp: datetime
    aqi: AQIValue
    pollutants: PollutantReading


@dataclass
class DemoSnapshot:
    location: Location
    current: Observation
    forecast: List[Observation]
    weather: Dict[str, object] = field(default_factory=dict)


def resolve_demo_location(
    latitude: float,
    longitude: float,
    city: Optional[str] = None,
    country: Optional[str] = None,
) -> Location:
    known = KNOWN_CITIES.get(f"{latitude:.4f},{longitude:.4f}")
    if known:
        return Location(latitude, longitude, *known)
    return Location(latitude, longitude, city or "Unknown City", country or "XX")


def random_reading(rng: random.Random, ranges: Mapping[str, Tuple[float, float]] = DEMO_POLLUTANT_RANGES) -> PollutantReading:
    return PollutantReading({pollutant: round(rng.uniform(low, high), 2) for pollutant, (low, high) in ranges.items()})


def generate_demo_snapshot(
    latitude: float,
    longitude: float,
    city: Optional[str] = None,
    country: Optional[str] = None,
    rng: Optional[random.Random] = None,
    now: Optional[datetime] = None,
) -> DemoSnapshot:
    """Build a plausible current reading and 24 hour provider forecast for a location."""
    rng = rng or random.Random()
    now = now or utcnow()
    level = rng.randint(1, 5)

    forecast = []
    for timestamp in cadence(now, DEMO_FORECAST_HOURS, timedelta(hours=1), include_start=True):
        forecast_level = max(1, min(5, level + rng.randint(-1, 1)))
        forecast.append(Observation(timestamp, AQIValue.qualitative(forecast_level), random_reading(rng)))

    weather = {
        "temperature": math.floor(rng.uniform(10, 40)),
        "humidity": math.floor(rng.uniform(40, 80)),
        "pressure": math.floor(rng.uniform(1000, 1050)),
        "windSpeed": round(rng.uniform(2, 12), 1),
        "description": "partly cloudy",
    }
    return DemoSnapshot(
        location=resolve_demo_location(latitude, longitude, city, country),
        current=Observation(now, AQIValue.qualitative(level), random_reading(rng)),
        forecast=forecast,
        weather=weather,
    )


def generate_historical_data(
    current: Mapping[str, float],
    hours: int = 24,
    now: Optional[datetime] = None,
    rng: Optional[random.Random] = None,
) -> pd.DataFrame:
    """Simulate hourly history ending at ``now`` around the current concentrations.

    Each row applies a daily sine cycle plus a little noise to every pollutant.
    """
    rng = rng or random.Random()
    now = now or utcnow()
    timestamps = [now - timedelta(hours=offset) for offset in range(hours, -1, -1)]

    rows = []
    for timestamp in timestamps:
        daily = math.sin(timestamp.hour / 24 * math.pi * 2) * 0.3
        variation = daily + rng.uniform(-0.1, 0.1)
        rows.append({pollutant: max(0.0, float(current.get(pollutant, 0) or 0) * (1 + variation)) for pollutant in SUPPORTED_POLLUTANTS})

    return pd.DataFrame(rows, index=pd.DatetimeIndex(timestamps, name="timestamp"))
