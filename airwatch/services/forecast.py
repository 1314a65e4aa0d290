"""Forecast synthesis for air quality time-series.

There is no trained model behind these forecasts. ``BoundedRandomWalk`` produces
plausible 48 hour series from a correlated random walk on the 1-5 index so the
presentation layer always has something to chart; any real predictive model can
be dropped in as another ``ForecastStrategy``.
"""

from __future__ import annotations

import logging
import math
import random
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Dict, List, Optional, Sequence, Tuple, Union

import pandas as pd

from ..utils.dates import cadence, to_iso, utcnow
from .aqi import AQIScale, AQIValue, PollutantReading
from .insights import FALLBACK_INSIGHTS, generate_insights, pm25_trend, seasonal_factor, variance

LOGGER = logging.getLogger(__name__)

FORECAST_STEP = timedelta(hours=3)
FORECAST_STEPS = 16
TIMEFRAME = "48 hours"

FORECAST_METHODS: Tuple[str, ...] = (
    "Random Forest Algorithm",
    "Neural Network Model",
    "Linear Regression",
    "Support Vector Machine",
    "Gradient Boosting",
)

SYNTHETIC_POLLUTANT_RANGES: Dict[str, Tuple[float, float]] = {
    "pm2_5": (10.0, 60.0),
    "pm10": (15.0, 95.0),
    "no2": (20.0, 120.0),
    "o3": (25.0, 85.0),
    "co": (0.5, 3.5),
    "so2": (5.0, 25.0),
}


@dataclass(frozen=True)
class ForecastPoint:
    timestamp: datetime
    aqi: AQIValue
    pollutants: Optional[PollutantReading] = None

    def to_dict(self) -> Dict[str, object]:
        return {
            "timestamp": to_iso(self.timestamp),
            "aqi": self.aqi.value,
            "pollutants": self.pollutants.as_dict() if self.pollutants is not None else {},
        }


@dataclass
class ForecastSeries:
    predictions: List[ForecastPoint]
    method: str
    confidence: int
    insights: List[str] = field(default_factory=list)
    data_quality: str = "High"
    timeframe: str = TIMEFRAME

    def to_dict(self) -> Dict[str, object]:
        return {
            "predictions": [point.to_dict() for point in self.predictions],
            "timeframe": self.timeframe,
            "method": self.method,
            "confidence": self.confidence,
            "insights": list(self.insights),
            "dataQuality": self.data_quality,
        }

    def to_frame(self) -> pd.DataFrame:
        """Chart-ready frame indexed by timestamp with an ``aqi`` column and any pollutants."""
        rows = []
        for point in self.predictions:
            row: Dict[str, object] = {"timestamp": point.timestamp, "aqi": point.aqi.value}
            if point.pollutants is not None:
                row.update(point.pollutants.as_dict())
            rows.append(row)
        if not rows:
            return pd.DataFrame(columns=["aqi"])
        return pd.DataFrame(rows).set_index("timestamp")


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def historical_confidence(history: pd.DataFrame, predictions: Sequence[ForecastPoint]) -> int:
    """Confidence score from the amount and stability of the supporting data."""
    confidence = 50
    if len(history) >= 12:
        confidence += 20
    elif len(history) >= 6:
        confidence += 10

    recent = history["pm2_5"].tail(6).tolist() if "pm2_5" in history else []
    if variance(recent) < 0.1:
        confidence += 15

    if variance([point.aqi.value for point in predictions]) < 0.2:
        confidence += 10

    return int(_clamp(confidence, 60, 95))


class ForecastStrategy(ABC):
    """Produces a 48 hour forecast series from whatever context is available."""

    @abstractmethod
    def synthesize(
        self,
        anchor_aqi: Optional[Union[int, AQIValue]] = None,
        *,
        detail: bool = False,
        history: Optional[pd.DataFrame] = None,
        now: Optional[datetime] = None,
    ) -> ForecastSeries:
        raise NotImplementedError


class BoundedRandomWalk(ForecastStrategy):
    """Synthetic forecast: a drifting random walk clamped to the 1-5 index.

    The walk starts from a random base in [2, 4]; the supplied anchor does not
    seed it. Each step draws a +/-1 variation around the base and the base then
    drifts by up to ``drift`` for the next step.
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        steps: int = FORECAST_STEPS,
        step: timedelta = FORECAST_STEP,
        drift: float = 0.15,
    ) -> None:
        self._rng = rng
        self.steps = steps
        self.step = step
        self.drift = drift

    def synthesize(
        self,
        anchor_aqi: Optional[Union[int, AQIValue]] = None,
        *,
        detail: bool = False,
        history: Optional[pd.DataFrame] = None,
        now: Optional[datetime] = None,
    ) -> ForecastSeries:
        if isinstance(anchor_aqi, AQIValue) and anchor_aqi.scale is not AQIScale.QUALITATIVE:
            raise TypeError("The forecast walk runs on the qualitative 1-5 scale")
        rng = self._rng or random.Random()
        now = now or utcnow()
        LOGGER.debug("Synthesizing %d step forecast (anchor=%s, history=%s)", self.steps, anchor_aqi, history is not None)

        trend = pm25_trend(history) if history is not None else 0.0
        base = float(rng.randint(2, 4))
        predictions: List[ForecastPoint] = []
        for index, timestamp in enumerate(cadence(now, self.steps, self.step), start=1):
            variation = rng.uniform(-1, 1)
            aqi = int(_clamp(_round_half_up(base + variation), 1, 5))
            base = _clamp(base + rng.uniform(-self.drift, self.drift), 1, 5)

            pollutants = None
            if detail:
                if history is not None and not history.empty:
                    pollutants = self._projected_pollutants(history, trend, timestamp, index)
                else:
                    pollutants = self._random_pollutants(rng)
            predictions.append(ForecastPoint(timestamp, AQIValue.qualitative(aqi), pollutants))

        method = rng.choice(FORECAST_METHODS)
        if history is None:
            confidence = int(math.floor(80 + rng.uniform(0, 15)))
            insights = list(FALLBACK_INSIGHTS)
        else:
            confidence = historical_confidence(history, predictions)
            insights = generate_insights(history, predictions, rng)

        return ForecastSeries(
            predictions=predictions,
            method=method,
            confidence=confidence,
            insights=insights,
        )

    @staticmethod
    def _random_pollutants(rng: random.Random) -> PollutantReading:
        return PollutantReading(
            {pollutant: round(rng.uniform(low, high), 2) for pollutant, (low, high) in SYNTHETIC_POLLUTANT_RANGES.items()}
        )

    def _projected_pollutants(
        self,
        history: pd.DataFrame,
        trend: float,
        timestamp: datetime,
        index: int,
    ) -> PollutantReading:
        latest = history.iloc[-1]
        growth = 1 + trend * index / self.steps
        values = {}
        for pollutant in SYNTHETIC_POLLUTANT_RANGES:
            if pollutant not in latest:
                continue
            value = float(latest[pollutant]) * growth * seasonal_factor(timestamp, pollutant)
            values[pollutant] = round(max(0.0, value), 2)
        return PollutantReading(values)


def synthesize(
    anchor_aqi: Optional[Union[int, AQIValue]] = None,
    detail: bool = False,
    history: Optional[pd.DataFrame] = None,
    strategy: Optional[ForecastStrategy] = None,
    now: Optional[datetime] = None,
) -> ForecastSeries:
    strategy = strategy or BoundedRandomWalk()
    return strategy.synthesize(anchor_aqi, detail=detail, history=history, now=now)
