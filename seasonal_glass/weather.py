"""
Weather integration for environmental glass effect adjustments.

Features:
- Periodic refresh loop (default every 15 minutes)
- Cache of the last successful reading
- Graceful fallback on provider or location failure
- Theme suggestions derived from readings

This is the only stateful/async part of the engine. It hands the
resolver nothing but a weather condition string.
"""

import asyncio
import time
from datetime import datetime
from typing import Any, Callable, Optional, Protocol

from seasonal_glass.config import (
    WEATHER_FALLBACK,
    WEATHER_INTENSITY_MULTIPLIER,
    WEATHER_UPDATE_INTERVAL,
)
from seasonal_glass.effect_math import round_half_up
from seasonal_glass.errors import LocationUnavailableError
from seasonal_glass.logger import logger
from seasonal_glass.models import Season, ThemeSuggestion, WeatherGlassEffect, WeatherReading
from seasonal_glass.season_profiles import WEATHER_GLASS
from seasonal_glass.solar_time import time_of_day_for_hour


class WeatherProvider(Protocol):
    """Source of live weather (HTTP client, sensor, simulator...)."""

    async def fetch_current_weather(self, location: Optional[tuple[float, float]] = None) -> WeatherReading:
        ...

    async def suggest_theme_for(self, reading: WeatherReading) -> ThemeSuggestion:
        ...


class LocationProvider(Protocol):
    """Source of the observer position. Raises LocationUnavailableError when denied."""

    async def get_location(self) -> tuple[float, float]:
        ...


# ============================================================================
# Condition handling
# ============================================================================

CONDITION_ALIASES = {
    "clear": "sunny",
    "clouds": "cloudy",
    "overcast": "cloudy",
    "partly-cloudy": "cloudy",
    "rain": "rainy",
    "drizzle": "rainy",
    "showers": "rainy",
    "snow": "snowy",
    "sleet": "snowy",
    "thunderstorm": "stormy",
    "storm": "stormy",
    "mist": "foggy",
    "haze": "foggy",
    "fog": "foggy",
}


def normalize_condition(condition: str) -> str:
    """Map provider vocabulary onto weather conditions; unknown values pass through lower-cased."""
    key = condition.strip().lower()
    return CONDITION_ALIASES.get(key, key)


def suggest_theme(reading: WeatherReading, hour: Optional[int] = None) -> ThemeSuggestion:
    """
    Suggest a season and particle effect for a reading.

    Temperature picks the season (>=25 summer, >=15 spring, >=5 autumn,
    else winter); rain adds intensity and forces rain particles.
    """
    temp = reading.temperature

    if temp >= 25:
        season, intensity, particle = Season.SUMMER, 0.9, "waterdrops"
    elif temp >= 15:
        season, intensity, particle = Season.SPRING, 0.7, "sakura"
    elif temp >= 5:
        season, intensity, particle = Season.AUTUMN, 0.6, "leaves"
    else:
        season, intensity, particle = Season.WINTER, 1.0, "snow"

    if normalize_condition(reading.condition) == "rainy":
        intensity += 0.2
        particle = "rain"

    if hour is None:
        hour = datetime.now().hour

    return ThemeSuggestion(
        season=season,
        time_of_day=time_of_day_for_hour(hour),
        particle_effect=particle,
        intensity=min(intensity, 1.0),
    )


def get_weather_glass_effect(condition: str, intensity_multiplier: float = WEATHER_INTENSITY_MULTIPLIER) -> WeatherGlassEffect:
    """Weather-only glass effect scaled by intensity (unknown conditions use sunny)."""
    base = WEATHER_GLASS.get(normalize_condition(condition), WEATHER_GLASS["sunny"])

    return WeatherGlassEffect(
        blur_intensity=base["blur"] * intensity_multiplier,
        opacity_level=min(base["opacity"] * intensity_multiplier, 0.8),
        particle_count=round_half_up(base["count"] * intensity_multiplier),
        particle_type=base["particle"],
        animation_speed=base["speed"] * intensity_multiplier,
        color_overlay=base["overlay"],
    )


def fallback_reading(condition: str) -> WeatherReading:
    return WeatherReading(
        condition=condition,
        temperature=20.0,
        humidity=50.0,
        wind_speed=5.0,
        visibility=10000.0,
        pressure=1013.0,
        timestamp=time.time(),
    )


# ============================================================================
# WeatherIntegration
# ============================================================================

class WeatherIntegration:
    """
    Periodically fetches weather and caches the latest good reading.

    Failures never propagate: the last cached reading keeps being
    served, or the configured fallback when nothing was ever fetched.
    The refresh interval stays fixed after failures.
    """

    def __init__(
        self,
        provider: WeatherProvider,
        location_provider: Optional[LocationProvider] = None,
        update_interval: float = WEATHER_UPDATE_INTERVAL,
        fallback_weather: str = WEATHER_FALLBACK,
        intensity_multiplier: float = WEATHER_INTENSITY_MULTIPLIER,
        on_update: Optional[Callable[[WeatherReading, Optional[ThemeSuggestion]], None]] = None,
    ):
        """
        Args:
            provider: Weather source
            location_provider: Optional position source (geolocation variant)
            update_interval: Seconds between refreshes
            fallback_weather: Condition served when no reading is cached
            intensity_multiplier: Scale for the weather-only glass effect
            on_update: Called with (reading, suggestion) after each successful fetch
        """
        if update_interval <= 0:
            raise ValueError(f"update_interval must be positive, got {update_interval}")

        self.provider = provider
        self.location_provider = location_provider
        self.update_interval = update_interval
        self.fallback_weather = normalize_condition(fallback_weather)
        self.intensity_multiplier = intensity_multiplier
        self.on_update = on_update

        self._cached_reading: Optional[WeatherReading] = None
        self._cached_suggestion: Optional[ThemeSuggestion] = None
        self._last_success: Optional[float] = None
        self._last_error: Optional[str] = None
        self._failure_count = 0
        self._task: Optional[asyncio.Task] = None

    @property
    def current_reading(self) -> WeatherReading:
        """Cached reading, or the fallback reading if none was fetched."""
        if self._cached_reading is not None:
            return self._cached_reading
        return fallback_reading(self.fallback_weather)

    @property
    def current_condition(self) -> str:
        return self.current_reading.condition

    @property
    def current_suggestion(self) -> Optional[ThemeSuggestion]:
        return self._cached_suggestion

    @property
    def glass_effect(self) -> WeatherGlassEffect:
        return get_weather_glass_effect(self.current_condition, self.intensity_multiplier)

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def refresh(self) -> WeatherReading:
        """
        Fetch once and update the cache.

        Returns:
            The fresh reading, or the degraded (cached/fallback) one on failure
        """
        location = None
        if self.location_provider is not None:
            try:
                location = await self.location_provider.get_location()
            except LocationUnavailableError as e:
                self._record_failure(f"Location unavailable: {e}")
                return self.current_reading
            except Exception as e:
                self._record_failure(f"Location lookup failed: {e}")
                return self.current_reading

        try:
            reading = await self.provider.fetch_current_weather(location)
        except Exception as e:
            self._record_failure(f"Weather fetch failed: {e}")
            return self.current_reading

        reading = reading.model_copy(update={"condition": normalize_condition(reading.condition)})

        try:
            suggestion = await self.provider.suggest_theme_for(reading)
        except Exception as e:
            logger.warning(f"Theme suggestion failed: {e}")
            suggestion = None

        self._cached_reading = reading
        self._cached_suggestion = suggestion
        self._last_success = time.time()
        self._last_error = None
        self._failure_count = 0

        logger.debug(f"Weather updated: condition={reading.condition}, temperature={reading.temperature}")

        if self.on_update is not None:
            try:
                self.on_update(reading, suggestion)
            except Exception:
                logger.error("Error in weather update callback", exc_info=True)

        return reading

    def _record_failure(self, message: str) -> None:
        self._failure_count += 1
        self._last_error = message
        served = "cached reading" if self._cached_reading is not None else f"fallback '{self.fallback_weather}'"
        logger.warning(f"{message} - serving {served}")

    def enable(self) -> asyncio.Task:
        """
        Start the refresh loop on the running event loop.

        The first refresh runs immediately. Call disable() to stop it.
        """
        if self.is_running:
            logger.warning("Weather refresh loop already running")
            return self._task

        self._task = asyncio.create_task(self._refresh_loop(), name="WeatherRefresh")
        logger.info(f"Weather refresh started (interval: {self.update_interval}s)")
        return self._task

    def disable(self) -> None:
        """Cancel the refresh loop. Safe to call repeatedly."""
        if self._task is not None:
            self._task.cancel()
            self._task = None
            logger.info("Weather refresh stopped")

    async def _refresh_loop(self) -> None:
        while True:
            try:
                await self.refresh()
            except Exception:
                logger.error("Weather refresh error", exc_info=True)

            await asyncio.sleep(self.update_interval)

    def get_status(self) -> dict[str, Any]:
        """Integration status for APIs and logging."""
        reading = self.current_reading
        status = {
            "running": self.is_running,
            "condition": reading.condition,
            "reading": reading.model_dump(),
            "cached": self._cached_reading is not None,
            "update_interval": self.update_interval,
            "fallback_weather": self.fallback_weather,
            "failure_count": self._failure_count,
            "last_error": self._last_error,
            "last_success": self._last_success,
        }

        if self._cached_suggestion is not None:
            status["suggestion"] = self._cached_suggestion.model_dump(mode="json")

        return status
