"""Health risk categorization for AQI values and individual pollutants."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Tuple, Union

from .aqi import AQIScale, AQIValue


class CategoryLevel(Enum):
    GOOD = "Good"
    FAIR = "Fair"
    MODERATE = "Moderate"
    UNHEALTHY_SENSITIVE = "Unhealthy for Sensitive Groups"
    POOR = "Poor"
    UNHEALTHY = "Unhealthy"
    VERY_POOR = "Very Poor"
    VERY_UNHEALTHY = "Very Unhealthy"
    HAZARDOUS = "Hazardous"


@dataclass(frozen=True)
class Category:
    level: CategoryLevel
    color: str
    advisory: str
    scale: AQIScale

    @property
    def label(self) -> str:
        return self.level.value

    def to_dict(self) -> Dict[str, str]:
        return {"level": self.label, "color": self.color, "description": self.advisory}


QUALITATIVE_CATEGORIES: List[Tuple[int, Category]] = [
    (1, Category(CategoryLevel.GOOD, "#00e400", "Air quality is satisfactory", AQIScale.QUALITATIVE)),
    (2, Category(CategoryLevel.FAIR, "#ffff00", "Air quality is acceptable", AQIScale.QUALITATIVE)),
    (3, Category(CategoryLevel.MODERATE, "#ff8c00", "Sensitive people may experience minor breathing discomfort", AQIScale.QUALITATIVE)),
    (4, Category(CategoryLevel.POOR, "#ff0000", "Everyone may experience health effects", AQIScale.QUALITATIVE)),
    (5, Category(CategoryLevel.VERY_POOR, "#8f3f97", "Health warnings of emergency conditions", AQIScale.QUALITATIVE)),
]

STANDARD_CATEGORIES: List[Tuple[int, Category]] = [
    (50, Category(CategoryLevel.GOOD, "#28a745", "Air quality is satisfactory and poses little or no risk.", AQIScale.STANDARD)),
    (100, Category(
        CategoryLevel.MODERATE,
        "#ffc107",
        "Air quality is acceptable for most people, but sensitive groups may experience minor issues.",
        AQIScale.STANDARD,
    )),
    (150, Category(CategoryLevel.UNHEALTHY_SENSITIVE, "#fd7e14", "Sensitive groups should avoid prolonged outdoor exertion.", AQIScale.STANDARD)),
    (200, Category(CategoryLevel.UNHEALTHY, "#dc3545", "Everyone should avoid outdoor activities.", AQIScale.STANDARD)),
    (300, Category(CategoryLevel.VERY_UNHEALTHY, "#6f42c1", "Everyone should stay indoors.", AQIScale.STANDARD)),
    (500, Category(
        CategoryLevel.HAZARDOUS,
        "#8b0000",
        "Emergency conditions. Everyone should avoid all outdoor activities.",
        AQIScale.STANDARD,
    )),
]


def _raw_value(aqi: Union[int, float, AQIValue], scale: AQIScale) -> float:
    if isinstance(aqi, AQIValue):
        if aqi.scale is not scale:
            raise TypeError(f"Expected a {scale.value} AQI, got a {aqi.scale.value} AQI")
        return aqi.value
    return aqi


def _classify(value: float, bands: List[Tuple[int, Category]]) -> Category:
    for upper, category in bands:
        if value <= upper:
            return category
    return bands[-1][1]


def classify_qualitative(aqi: Union[int, float, AQIValue]) -> Category:
    """Category for the provider's 1-5 index."""
    return _classify(_raw_value(aqi, AQIScale.QUALITATIVE), QUALITATIVE_CATEGORIES)


def classify_standard(aqi: Union[int, float, AQIValue]) -> Category:
    """Category for a 0-500 EPA AQI."""
    return _classify(_raw_value(aqi, AQIScale.STANDARD), STANDARD_CATEGORIES)


def classify(aqi: AQIValue) -> Category:
    if aqi.scale is AQIScale.QUALITATIVE:
        return classify_qualitative(aqi)
    return classify_standard(aqi)


HEALTH_RECOMMENDATIONS: Dict[int, List[str]] = {
    1: ["✅ Enjoy outdoor activities", "✅ Good air quality for everyone", "✅ No health concerns"],
    2: [
        "⚠️ Sensitive people should consider limiting outdoor activities",
        "✅ Generally safe for most people",
        "✅ Normal outdoor activities are fine",
    ],
    3: [
        "⚠️ Sensitive groups should avoid outdoor activities",
        "⚠️ Consider wearing a mask if sensitive",
        "⚠️ Limit outdoor exercise",
    ],
    4: [
        "🚫 Avoid outdoor activities",
        "🏠 Stay indoors with air purifiers",
        "😷 Wear N95 masks if going outside",
        "🚫 Avoid strenuous outdoor activities",
    ],
    5: [
        "🚨 Stay indoors",
        "🏠 Use air purifiers",
        "🚫 Avoid all outdoor activities",
        "🚨 Consider evacuating if possible",
    ],
}


def health_recommendations(aqi: Union[int, float, AQIValue]) -> List[str]:
    value = _raw_value(aqi, AQIScale.QUALITATIVE)
    for level in range(1, 5):
        if value <= level:
            return list(HEALTH_RECOMMENDATIONS[level])
    return list(HEALTH_RECOMMENDATIONS[5])


@dataclass(frozen=True)
class PollutantStatus:
    name: str
    color: str


STATUS_GOOD = PollutantStatus("Good", "#00e400")
STATUS_MODERATE = PollutantStatus("Moderate", "#ff8c00")
STATUS_UNHEALTHY = PollutantStatus("Unhealthy", "#ff0000")

# (moderate above, unhealthy above) applied to the raw concentration.
POLLUTANT_STATUS_THRESHOLDS: Dict[str, Tuple[float, float]] = {
    "pm2_5": (15, 35),
    "pm10": (25, 50),
    "no2": (100, 200),
    "o3": (50, 100),
}


def pollutant_status(pollutant: str, value: float) -> PollutantStatus:
    """Display status of a single pollutant concentration.

    Pollutants without secondary thresholds always report ``Good``.
    """
    thresholds = POLLUTANT_STATUS_THRESHOLDS.get(pollutant)
    if not thresholds:
        return STATUS_GOOD
    moderate, unhealthy = thresholds
    if value > unhealthy:
        return STATUS_UNHEALTHY
    if value > moderate:
        return STATUS_MODERATE
    return STATUS_GOOD
