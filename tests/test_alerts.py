"""
Tests for category classification and pollutant status.

Tests cover:
- Equivalence classes on both AQI scales
- Boundary value analysis at every category threshold
- Scale separation: a value is only classified on its own scale
- Per-pollutant display thresholds and health recommendations
"""

import pytest

from airwatch.services.alerts import (
    CategoryLevel,
    classify,
    classify_qualitative,
    classify_standard,
    health_recommendations,
    pollutant_status,
)
from airwatch.services.aqi import AQIScale, AQIValue


class TestQualitativeClassifier:
    """Test suite for the provider 1-5 index."""

    @pytest.mark.parametrize(
        "aqi,level,color",
        [
            (1, CategoryLevel.GOOD, "#00e400"),
            (2, CategoryLevel.FAIR, "#ffff00"),
            (3, CategoryLevel.MODERATE, "#ff8c00"),
            (4, CategoryLevel.POOR, "#ff0000"),
            (5, CategoryLevel.VERY_POOR, "#8f3f97"),
        ],
    )
    def test_levels_and_colors(self, aqi, level, color):
        category = classify_qualitative(aqi)
        assert category.level is level
        assert category.color == color
        assert category.scale is AQIScale.QUALITATIVE

    def test_values_above_five_are_very_poor(self):
        assert classify_qualitative(7).level is CategoryLevel.VERY_POOR

    def test_fractional_values_use_upper_threshold(self):
        assert classify_qualitative(1.5).level is CategoryLevel.FAIR

    def test_accepts_tagged_value(self):
        assert classify_qualitative(AQIValue.qualitative(4)).level is CategoryLevel.POOR

    def test_rejects_standard_value(self):
        with pytest.raises(TypeError):
            classify_qualitative(AQIValue.standard(4))

    def test_to_dict(self):
        assert classify_qualitative(1).to_dict() == {
            "level": "Good",
            "color": "#00e400",
            "description": "Air quality is satisfactory",
        }


class TestStandardClassifier:
    """Test suite for the 0-500 EPA index."""

    @pytest.mark.parametrize(
        "aqi,level",
        [
            (0, CategoryLevel.GOOD),
            (50, CategoryLevel.GOOD),
            (51, CategoryLevel.MODERATE),
            (100, CategoryLevel.MODERATE),
            (101, CategoryLevel.UNHEALTHY_SENSITIVE),
            (150, CategoryLevel.UNHEALTHY_SENSITIVE),
            (151, CategoryLevel.UNHEALTHY),
            (200, CategoryLevel.UNHEALTHY),
            (201, CategoryLevel.VERY_UNHEALTHY),
            (300, CategoryLevel.VERY_UNHEALTHY),
            (301, CategoryLevel.HAZARDOUS),
            (500, CategoryLevel.HAZARDOUS),
        ],
    )
    def test_thresholds(self, aqi, level):
        assert classify_standard(aqi).level is level

    def test_color_ramp(self):
        colors = [classify_standard(aqi).color for aqi in (25, 75, 125, 175, 250, 400)]
        assert colors == ["#28a745", "#ffc107", "#fd7e14", "#dc3545", "#6f42c1", "#8b0000"]

    def test_rejects_qualitative_value(self):
        with pytest.raises(TypeError):
            classify_standard(AQIValue.qualitative(3))

    def test_labels(self):
        assert classify_standard(120).label == "Unhealthy for Sensitive Groups"
        assert classify_standard(350).advisory.startswith("Emergency conditions")


class TestClassifyDispatch:
    """Test suite for classify on tagged values."""

    def test_dispatches_on_scale(self):
        assert classify(AQIValue.qualitative(3)).scale is AQIScale.QUALITATIVE
        assert classify(AQIValue.standard(3)).scale is AQIScale.STANDARD
        assert classify(AQIValue.standard(3)).level is CategoryLevel.GOOD
        assert classify(AQIValue.qualitative(3)).level is CategoryLevel.MODERATE

    def test_same_level_is_stable(self):
        assert classify_qualitative(2) is classify_qualitative(AQIValue.qualitative(2))


class TestPollutantStatus:
    """Test suite for per-pollutant display status."""

    @pytest.mark.parametrize(
        "pollutant,value,status",
        [
            ("pm2_5", 15, "Good"),
            ("pm2_5", 15.1, "Moderate"),
            ("pm2_5", 35, "Moderate"),
            ("pm2_5", 35.1, "Unhealthy"),
            ("pm10", 25, "Good"),
            ("pm10", 26, "Moderate"),
            ("pm10", 51, "Unhealthy"),
            ("no2", 100, "Good"),
            ("no2", 150, "Moderate"),
            ("no2", 201, "Unhealthy"),
            ("o3", 50, "Good"),
            ("o3", 75, "Moderate"),
            ("o3", 101, "Unhealthy"),
        ],
    )
    def test_thresholds(self, pollutant, value, status):
        assert pollutant_status(pollutant, value).name == status

    def test_colors(self):
        assert pollutant_status("pm2_5", 1).color == "#00e400"
        assert pollutant_status("pm2_5", 20).color == "#ff8c00"
        assert pollutant_status("pm2_5", 40).color == "#ff0000"

    @pytest.mark.parametrize("pollutant", ["co", "so2"])
    def test_pollutants_without_thresholds_are_good(self, pollutant):
        assert pollutant_status(pollutant, 10_000).name == "Good"


class TestHealthRecommendations:
    """Test suite for health recommendations."""

    def test_good_air(self):
        recommendations = health_recommendations(1)
        assert len(recommendations) == 3
        assert "Enjoy outdoor activities" in recommendations[0]

    def test_very_poor_air(self):
        recommendations = health_recommendations(AQIValue.qualitative(5))
        assert len(recommendations) == 4
        assert any("evacuating" in item for item in recommendations)

    def test_returns_a_copy(self):
        health_recommendations(2).append("extra")
        assert len(health_recommendations(2)) == 3
