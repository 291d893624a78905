"""
Configuration management with environment variable support.

All settings can be overridden via environment variables.
Automatically loads .env file if present.
"""

import os
from pathlib import Path
from typing import Literal
from dotenv import load_dotenv

# Load .env file from project root (one level up from seasonal_glass/)
env_path = Path(__file__).parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

# Logging configuration
LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = os.getenv("LOG_LEVEL", "INFO")

# Simulated weather provider (for running without a weather service)
MOCK_MODE: bool = os.getenv("MOCK_MODE", "false").lower() == "true"

# Weather integration
WEATHER_ENABLED: bool = os.getenv("WEATHER_ENABLED", "false").lower() == "true"
WEATHER_UPDATE_INTERVAL: int = int(os.getenv("WEATHER_UPDATE_INTERVAL", "900"))  # seconds (15 min)
WEATHER_FALLBACK: str = os.getenv("WEATHER_FALLBACK", "sunny")
WEATHER_INTENSITY_MULTIPLIER: float = float(os.getenv("WEATHER_INTENSITY_MULTIPLIER", "1.0"))

# Transitions
TRANSITION_DURATION: float = float(os.getenv("TRANSITION_DURATION", "2.0"))  # seconds
TRANSITION_EASING: Literal["linear", "ease-in-out", "spring", "cubic-bezier"] = os.getenv(
    "TRANSITION_EASING", "spring"
)
REVERSE_ON_CANCEL: bool = os.getenv("REVERSE_ON_CANCEL", "false").lower() == "true"

# Seasonal boundary auto transitions
AUTO_TRANSITION: bool = os.getenv("AUTO_TRANSITION", "true").lower() == "true"
AUTO_TRANSITION_CHECK_INTERVAL: int = int(os.getenv("AUTO_TRANSITION_CHECK_INTERVAL", "86400"))  # daily

# Frame driver
ANIMATION_FPS: int = int(os.getenv("ANIMATION_FPS", "60"))

# Observer location for solar time of day (both unset = hour-based detection)
LOCATION_LATITUDE: float | None = (
    float(os.getenv("LOCATION_LATITUDE")) if os.getenv("LOCATION_LATITUDE") else None
)
LOCATION_LONGITUDE: float | None = (
    float(os.getenv("LOCATION_LONGITUDE")) if os.getenv("LOCATION_LONGITUDE") else None
)

# Memoized resolver
RESOLVER_CACHE_SIZE: int = int(os.getenv("RESOLVER_CACHE_SIZE", "256"))
