"""Generate narrative insights and pattern statistics for forecasts."""

from __future__ import annotations

import random
from datetime import datetime
from typing import List, Optional, Sequence

import numpy as np
import pandas as pd

FALLBACK_INSIGHTS: List[str] = [
    "📊 Air quality will fluctuate over the next 48 hours",
    "🌡️ Weather conditions may impact pollution levels",
    "⏰ Peak pollution expected during morning hours",
    "🌬️ Wind patterns will help disperse pollutants",
]

TREND_THRESHOLD = 0.1


def variance(values: Sequence[float]) -> float:
    """Population variance; zero when there are fewer than two values."""
    values = [float(v) for v in values]
    if len(values) < 2:
        return 0.0
    return float(np.var(values))


def pm25_trend(history: pd.DataFrame) -> float:
    """Normalised least-squares slope of PM2.5 over the historical samples."""
    if len(history) < 3 or "pm2_5" not in history:
        return 0.0
    values = history["pm2_5"].to_numpy(dtype=float)
    values = values[values > 0]
    if len(values) < 3:
        return 0.0
    slope = np.polyfit(np.arange(len(values)), values, 1)[0]
    return float(np.clip(slope / 100, -0.5, 0.5))


def _is_rush_hour(hour: int) -> bool:
    return 7 <= hour <= 9 or 17 <= hour <= 19


def seasonal_factor(timestamp: datetime, pollutant: str) -> float:
    """Diurnal and weekend multiplier for a pollutant at ``timestamp``."""
    hour = timestamp.hour
    factor = 1.0
    if pollutant in ("pm2_5", "pm10"):
        if _is_rush_hour(hour):
            factor = 1.2
        elif hour >= 22 or hour <= 6:
            factor = 0.8
    elif pollutant == "o3":
        # photochemistry peaks with afternoon sunlight
        if 12 <= hour <= 18:
            factor = 1.3
        elif hour >= 20 or hour <= 8:
            factor = 0.6
    elif pollutant == "no2":
        if _is_rush_hour(hour):
            factor = 1.4
        elif hour >= 22 or hour <= 6:
            factor = 0.7
    elif pollutant == "co":
        if _is_rush_hour(hour):
            factor = 1.5
        elif hour >= 22 or hour <= 6:
            factor = 0.5
    elif pollutant == "so2":
        if 8 <= hour <= 17:
            factor = 1.1

    if timestamp.weekday() >= 5:
        factor *= 0.8
    return factor


def _time_indexed(history: pd.DataFrame) -> Optional[pd.DataFrame]:
    """History indexed by timestamp, from its index or a ``datetime`` column."""
    if isinstance(history.index, pd.DatetimeIndex):
        return history
    if "datetime" in history:
        frame = history.assign(datetime=pd.to_datetime(history["datetime"]))
        return frame.set_index("datetime").sort_index()
    return None


def _mean_between_hours(history: pd.DataFrame, first: int, last: int) -> Optional[float]:
    hours = history.index.hour
    window = history.loc[(hours >= first) & (hours <= last), "pm2_5"]
    if window.empty:
        return None
    return float(window.mean())


def generate_insights(
    history: pd.DataFrame,
    predictions: Sequence,
    rng: Optional[random.Random] = None,
) -> List[str]:
    """Pick narrative insights from the PM2.5 trend, daily pattern and timing.

    ``history`` holds one row per sample, indexed by timestamp or carrying a
    ``datetime`` column; without either the daily pattern rule is skipped.
    """
    rng = rng or random.Random()
    insights: List[str] = []

    trend = pm25_trend(history)
    if trend > TREND_THRESHOLD:
        insights.append("📈 PM2.5 levels are increasing - expect worsening air quality")
    elif trend < -TREND_THRESHOLD:
        insights.append("📉 PM2.5 levels are decreasing - air quality improving")
    else:
        insights.append("📊 PM2.5 levels are stable - no significant changes expected")

    timed = _time_indexed(history)
    if timed is not None and not timed.empty and "pm2_5" in timed:
        morning = _mean_between_hours(timed, 6, 10)
        evening = _mean_between_hours(timed, 17, 21)
        if morning is not None and evening is not None and evening > morning * 1.2:
            insights.append("🌆 Evening rush hour shows higher pollution - avoid outdoor activities")

    # No wind feed yet; the speed is simulated.
    wind_speed = rng.uniform(0, 10)
    if wind_speed > 7:
        insights.append("💨 Strong winds expected - pollution will disperse quickly")
    elif wind_speed < 3:
        insights.append("🌫️ Light winds - pollution may accumulate locally")

    if predictions:
        next_hour = predictions[0].timestamp.hour
        if 6 <= next_hour <= 9:
            insights.append("🌅 Morning rush hour approaching - expect higher pollution")
        elif 17 <= next_hour <= 19:
            insights.append("🌆 Evening rush hour approaching - air quality may worsen")

    return insights
