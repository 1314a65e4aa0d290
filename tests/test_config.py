"""
Tests for configuration loading.
"""

import pytest

from airwatch.utils.config import get_cache_ttl_seconds, get_request_timeout, load_api_keys


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for name in ("WEATHER_API_KEY", "NASA_API_KEY", "AIRWATCH_CACHE_TTL_SECONDS", "AIRWATCH_REQUEST_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


class TestLoadApiKeys:
    """Test suite for load_api_keys."""

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("WEATHER_API_KEY", "ow-key")
        monkeypatch.setenv("NASA_API_KEY", "nasa-key")
        keys = load_api_keys()
        assert keys.openweather == "ow-key"
        assert keys.nasa == "nasa-key"

    def test_reads_dotenv_file(self, tmp_path):
        env_file = tmp_path / "custom.env"
        env_file.write_text("WEATHER_API_KEY=from-file\n", encoding="utf-8")
        keys = load_api_keys(env_file)
        assert keys.openweather == "from-file"
        assert keys.nasa is None

    def test_environment_wins_over_file(self, monkeypatch, tmp_path):
        (tmp_path / ".env").write_text("WEATHER_API_KEY=from-file\n", encoding="utf-8")
        monkeypatch.setenv("WEATHER_API_KEY", "from-env")
        assert load_api_keys().openweather == "from-env"

    def test_missing_key_raises(self):
        with pytest.raises(RuntimeError):
            load_api_keys()


class TestSettings:
    """Test suite for numeric settings."""

    def test_defaults(self):
        assert get_cache_ttl_seconds() == 300.0
        assert get_request_timeout() == 60.0

    def test_overrides(self, monkeypatch):
        monkeypatch.setenv("AIRWATCH_CACHE_TTL_SECONDS", "120")
        monkeypatch.setenv("AIRWATCH_REQUEST_TIMEOUT", "5")
        assert get_cache_ttl_seconds() == 120.0
        assert get_request_timeout() == 5.0
