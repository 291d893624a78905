"""
Mock weather implementations for running without a weather service.

Enable mock mode by setting MOCK_MODE=true in .env

Features:
- Mock weather provider with realistic variations
- Scripted condition sequences for demos and tests
- Error injection (network, auth, rate-limit, not-found)
- Mock location provider that can deny access
- Compatible interface with real providers
"""

import asyncio
import random
import time
from typing import Literal, Optional

from seasonal_glass.errors import LocationUnavailableError, WeatherFetchError
from seasonal_glass.logger import logger
from seasonal_glass.models import ThemeSuggestion, WeatherReading
from seasonal_glass.weather import suggest_theme

ErrorType = Literal["network", "auth", "rate-limit", "not-found"]

ERROR_MESSAGES = {
    "network": "Network error: Unable to connect to weather service",
    "auth": "Authentication error: Invalid API key",
    "rate-limit": "Rate limit exceeded: Too many requests",
    "not-found": "Location not found",
}


class MockWeatherProvider:
    """
    Mock weather provider.

    Simulates:
    - Small random variations in temperature, humidity and wind
    - Optional network latency
    - Scripted condition sequences (cycled on each fetch)
    """

    def __init__(
        self,
        condition: str = "sunny",
        base_temperature: float = 22.0,
        location: str = "Tokyo",
        conditions: Optional[list[str]] = None,
        delay: float = 0.0,
        variation: bool = True,
    ):
        """
        Initialize mock provider.

        Args:
            condition: Condition reported when no script is set
            base_temperature: Base temperature in Celsius
            location: Location name attached to readings
            conditions: Optional scripted sequence of conditions
            delay: Simulated network latency in seconds
            variation: Add random noise to numeric readings
        """
        self.condition = condition
        self.base_temperature = base_temperature
        self.location = location
        self.delay = delay
        self.variation = variation
        self._script = list(conditions) if conditions else []
        self._script_index = 0
        self._error: Optional[ErrorType] = None
        self.fetch_count = 0

        logger.info(f"[MOCK] Weather provider ready: {condition} at {location} (base: {base_temperature}°C)")

    def script(self, conditions: list[str]) -> None:
        """Replace the scripted condition sequence."""
        self._script = list(conditions)
        self._script_index = 0

    def enable_error(self, error_type: ErrorType = "network") -> None:
        """Make every fetch fail with the given error type."""
        if error_type not in ERROR_MESSAGES:
            raise ValueError(f"Unknown error type: {error_type}")
        self._error = error_type
        logger.info(f"[MOCK] Weather errors enabled: {error_type}")

    def disable_error(self) -> None:
        self._error = None
        logger.info("[MOCK] Weather errors disabled")

    def _next_condition(self) -> str:
        if not self._script:
            return self.condition
        condition = self._script[self._script_index % len(self._script)]
        self._script_index += 1
        return condition

    async def _simulate_latency(self) -> None:
        if self.delay > 0:
            await asyncio.sleep(self.delay)

    def _raise_if_failing(self) -> None:
        if self._error is not None:
            raise WeatherFetchError(ERROR_MESSAGES[self._error])

    async def fetch_current_weather(self, location: Optional[tuple[float, float]] = None) -> WeatherReading:
        """Return a mock reading with realistic variation."""
        await self._simulate_latency()
        self._raise_if_failing()

        self.fetch_count += 1
        noise = random.uniform(-0.5, 0.5) if self.variation else 0.0
        humidity = 60.0 + (random.uniform(-5.0, 5.0) if self.variation else 0.0)
        wind = 5.2 + (random.uniform(-1.0, 1.0) if self.variation else 0.0)

        location_name = self.location
        if location is not None:
            location_name = f"{location[0]:.4f},{location[1]:.4f}"

        reading = WeatherReading(
            condition=self._next_condition(),
            temperature=self.base_temperature + noise,
            humidity=humidity,
            wind_speed=max(0.0, wind),
            visibility=10000.0,
            pressure=1013.0,
            location=location_name,
            timestamp=time.time(),
        )
        logger.debug(f"[MOCK] Weather reading: {reading.condition}, {reading.temperature:.1f}°C")
        return reading

    async def suggest_theme_for(self, reading: WeatherReading) -> ThemeSuggestion:
        await self._simulate_latency()
        self._raise_if_failing()
        return suggest_theme(reading)


class MockLocationProvider:
    """Mock geolocation source (defaults to Tokyo)."""

    def __init__(self, latitude: float = 35.6762, longitude: float = 139.6503, denied: bool = False):
        self.latitude = latitude
        self.longitude = longitude
        self.denied = denied

    async def get_location(self) -> tuple[float, float]:
        if self.denied:
            raise LocationUnavailableError("User denied geolocation")
        return self.latitude, self.longitude
