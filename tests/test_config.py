"""Tests for configuration management."""

import pytest
import os
from unittest.mock import patch


class TestConfigDefaults:
    """Tests for default configuration values."""

    def test_default_log_level(self):
        """Should default to INFO log level."""
        with patch.dict(os.environ, {}, clear=True):
            from importlib import reload
            import seasonal_glass.config as config
            reload(config)
            assert config.LOG_LEVEL == "INFO"

    def test_default_mock_mode(self):
        """Should default to mock mode disabled."""
        with patch.dict(os.environ, {}, clear=True):
            from importlib import reload
            import seasonal_glass.config as config
            reload(config)
            assert config.MOCK_MODE is False

    def test_default_weather(self):
        """Should default to weather disabled with a sunny fallback."""
        with patch.dict(os.environ, {}, clear=True):
            from importlib import reload
            import seasonal_glass.config as config
            reload(config)
            assert config.WEATHER_ENABLED is False
            assert config.WEATHER_UPDATE_INTERVAL == 900
            assert config.WEATHER_FALLBACK == "sunny"
            assert config.WEATHER_INTENSITY_MULTIPLIER == 1.0

    def test_default_transitions(self):
        """Should default to a two second spring transition."""
        with patch.dict(os.environ, {}, clear=True):
            from importlib import reload
            import seasonal_glass.config as config
            reload(config)
            assert config.TRANSITION_DURATION == 2.0
            assert config.TRANSITION_EASING == "spring"
            assert config.REVERSE_ON_CANCEL is False

    def test_default_auto_transition(self):
        """Should default to daily boundary checks."""
        with patch.dict(os.environ, {}, clear=True):
            from importlib import reload
            import seasonal_glass.config as config
            reload(config)
            assert config.AUTO_TRANSITION is True
            assert config.AUTO_TRANSITION_CHECK_INTERVAL == 86400

    def test_default_location_unset(self):
        """Should default to no observer location."""
        with patch.dict(os.environ, {}, clear=True):
            from importlib import reload
            import seasonal_glass.config as config
            reload(config)
            assert config.LOCATION_LATITUDE is None
            assert config.LOCATION_LONGITUDE is None

    def test_default_frame_rate_and_cache(self):
        """Should default to 60 FPS and a 256 entry cache."""
        with patch.dict(os.environ, {}, clear=True):
            from importlib import reload
            import seasonal_glass.config as config
            reload(config)
            assert config.ANIMATION_FPS == 60
            assert config.RESOLVER_CACHE_SIZE == 256


class TestConfigEnvironmentOverrides:
    """Tests for environment variable overrides."""

    def test_override_log_level(self):
        """Should override LOG_LEVEL from environment."""
        with patch.dict(os.environ, {"LOG_LEVEL": "DEBUG"}, clear=True):
            from importlib import reload
            import seasonal_glass.config as config
            reload(config)
            assert config.LOG_LEVEL == "DEBUG"

    def test_override_mock_mode(self):
        """Should enable mock mode from environment."""
        with patch.dict(os.environ, {"MOCK_MODE": "true"}, clear=True):
            from importlib import reload
            import seasonal_glass.config as config
            reload(config)
            assert config.MOCK_MODE is True

    def test_override_weather(self):
        """Should override weather settings from environment."""
        env = {
            "WEATHER_ENABLED": "TRUE",
            "WEATHER_UPDATE_INTERVAL": "60",
            "WEATHER_FALLBACK": "cloudy",
            "WEATHER_INTENSITY_MULTIPLIER": "1.5",
        }
        with patch.dict(os.environ, env, clear=True):
            from importlib import reload
            import seasonal_glass.config as config
            reload(config)
            assert config.WEATHER_ENABLED is True
            assert config.WEATHER_UPDATE_INTERVAL == 60
            assert config.WEATHER_FALLBACK == "cloudy"
            assert config.WEATHER_INTENSITY_MULTIPLIER == 1.5

    def test_override_transitions(self):
        """Should override transition settings from environment."""
        env = {
            "TRANSITION_DURATION": "0.5",
            "TRANSITION_EASING": "linear",
            "REVERSE_ON_CANCEL": "true",
        }
        with patch.dict(os.environ, env, clear=True):
            from importlib import reload
            import seasonal_glass.config as config
            reload(config)
            assert config.TRANSITION_DURATION == 0.5
            assert config.TRANSITION_EASING == "linear"
            assert config.REVERSE_ON_CANCEL is True

    def test_override_auto_transition_disabled(self):
        """Should disable auto transitions from environment."""
        with patch.dict(os.environ, {"AUTO_TRANSITION": "false"}, clear=True):
            from importlib import reload
            import seasonal_glass.config as config
            reload(config)
            assert config.AUTO_TRANSITION is False

    def test_override_location(self):
        """Should parse observer coordinates."""
        env = {"LOCATION_LATITUDE": "51.5074", "LOCATION_LONGITUDE": "-0.1278"}
        with patch.dict(os.environ, env, clear=True):
            from importlib import reload
            import seasonal_glass.config as config
            reload(config)
            assert config.LOCATION_LATITUDE == pytest.approx(51.5074)
            assert config.LOCATION_LONGITUDE == pytest.approx(-0.1278)

    def test_invalid_number(self):
        """Should fail loudly on non-numeric values."""
        with patch.dict(os.environ, {"ANIMATION_FPS": "fast"}, clear=True):
            from importlib import reload
            import seasonal_glass.config as config
            with pytest.raises(ValueError):
                reload(config)
        # Restore defaults for later tests
        with patch.dict(os.environ, {}, clear=True):
            reload(config)
