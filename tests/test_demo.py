"""
Tests for demo observations and simulated history.
"""

import random
from datetime import timedelta

import pytest

from airwatch.data.demo import (
    DEMO_POLLUTANT_RANGES,
    generate_demo_snapshot,
    generate_historical_data,
    resolve_demo_location,
)
from airwatch.services.aqi import AQIScale
from airwatch.services.breakpoints import SUPPORTED_POLLUTANTS


class TestDemoLocation:
    """Test suite for resolve_demo_location."""

    def test_known_city(self):
        location = resolve_demo_location(51.5074, -0.1278)
        assert (location.city, location.country) == ("London", "GB")

    def test_supplied_names(self):
        location = resolve_demo_location(1.0, 2.0, "Nairobi", "KE")
        assert (location.city, location.country) == ("Nairobi", "KE")

    def test_unknown_city(self):
        location = resolve_demo_location(1.0, 2.0)
        assert (location.city, location.country) == ("Unknown City", "XX")
        assert location.to_dict() == {"lat": 1.0, "lon": 2.0, "city": "Unknown City", "country": "XX"}


class TestDemoSnapshot:
    """Test suite for generate_demo_snapshot."""

    def test_current_reading(self, rng, fixed_now):
        snapshot = generate_demo_snapshot(40.7128, -74.0060, rng=rng, now=fixed_now)
        assert snapshot.location.city == "New York"
        assert snapshot.current.timestamp == fixed_now
        assert snapshot.current.aqi.scale is AQIScale.QUALITATIVE
        for pollutant, (low, high) in DEMO_POLLUTANT_RANGES.items():
            assert low <= snapshot.current.pollutants[pollutant] <= high

    def test_hourly_forecast_stays_near_current_level(self, fixed_now):
        for seed in range(30):
            snapshot = generate_demo_snapshot(0, 0, rng=random.Random(seed), now=fixed_now)
            assert len(snapshot.forecast) == 24
            assert snapshot.forecast[0].timestamp == fixed_now
            assert snapshot.forecast[-1].timestamp == fixed_now + timedelta(hours=23)
            for observation in snapshot.forecast:
                assert 1 <= observation.aqi.value <= 5
                assert abs(observation.aqi.value - snapshot.current.aqi.value) <= 1

    def test_weather(self, rng, fixed_now):
        weather = generate_demo_snapshot(0, 0, rng=rng, now=fixed_now).weather
        assert 10 <= weather["temperature"] < 40
        assert weather["description"] == "partly cloudy"


class TestHistoricalData:
    """Test suite for generate_historical_data."""

    def test_shape_and_index(self, rng, fixed_now):
        history = generate_historical_data({"pm2_5": 20.0}, hours=24, now=fixed_now, rng=rng)
        assert len(history) == 25
        assert list(history.columns) == list(SUPPORTED_POLLUTANTS)
        assert history.index[0] == fixed_now - timedelta(hours=24)
        assert history.index[-1] == fixed_now

    def test_values_follow_current_reading(self, rng, fixed_now):
        history = generate_historical_data({"pm2_5": 20.0, "co": 1.0}, now=fixed_now, rng=rng)
        assert (history >= 0).all().all()
        assert (history["so2"] == 0).all()
        assert history["pm2_5"].between(20.0 * 0.6, 20.0 * 1.4).all()

    def test_daily_cycle(self, fixed_now):
        class NoNoise:
            def uniform(self, low, high):
                return 0.0

        history = generate_historical_data({"pm2_5": 10.0}, hours=24, now=fixed_now, rng=NoNoise())
        six_am = history.loc[history.index.hour == 6, "pm2_5"].iloc[0]
        assert six_am == pytest.approx(13.0)
