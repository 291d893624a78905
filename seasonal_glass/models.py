"""
Value objects shared by the resolver, transitions and weather integration.

All models are frozen: every resolver call creates a fresh snapshot and
callers compare snapshots by value.
"""

from datetime import datetime
from enum import Enum
from typing import Literal, Optional
from pydantic import BaseModel, ConfigDict, Field

from seasonal_glass.errors import InvalidInputError


# ============================================================================
# Enumerations
# ============================================================================

class Season(str, Enum):
    """Calendar season (Northern Hemisphere)."""
    SPRING = "spring"
    SUMMER = "summer"
    AUTUMN = "autumn"
    WINTER = "winter"


class TimeOfDay(str, Enum):
    """Coarse time of day."""
    MORNING = "morning"
    DAY = "day"
    EVENING = "evening"
    NIGHT = "night"


class PerformanceTier(str, Enum):
    """Device performance classification (derived, never supplied directly)."""
    LOW_POWER = "low-power"
    STANDARD = "standard"
    GPU_ACCELERATED = "gpu-accelerated"


class BoundaryType(str, Enum):
    EQUINOX = "equinox"
    SOLSTICE = "solstice"


# Recognized weather conditions. Any other string is accepted and
# resolves like "sunny".
KNOWN_WEATHER_CONDITIONS = ("sunny", "cloudy", "rainy", "snowy", "stormy", "foggy")


def parse_season(value) -> Season:
    """Coerce a string to Season, rejecting unknown values."""
    try:
        return Season(value)
    except ValueError:
        raise InvalidInputError(
            f"Invalid season: {value!r}. Must be one of: {', '.join(s.value for s in Season)}"
        ) from None


def parse_time_of_day(value) -> TimeOfDay:
    """Coerce a string to TimeOfDay, rejecting unknown values."""
    try:
        return TimeOfDay(value)
    except ValueError:
        raise InvalidInputError(
            f"Invalid time of day: {value!r}. Must be one of: {', '.join(t.value for t in TimeOfDay)}"
        ) from None


# ============================================================================
# Data Structures
# ============================================================================

class EffectConfig(BaseModel):
    """Resolved glass effect parameters for one input combination."""
    model_config = ConfigDict(frozen=True)

    blur_intensity: float = Field(..., ge=0.0, description="Backdrop blur intensity")
    opacity_level: float = Field(..., ge=0.0, le=1.0, description="Glass opacity (0.0-1.0)")
    saturation: float = Field(..., ge=1.0, description="Backdrop saturation multiplier")
    particle_effect: str = Field(..., description="Particle type, 'none' when disabled")
    particle_count: int = Field(..., ge=0, description="Number of particles")
    background_gradient: tuple[str, str] = Field(..., description="Gradient start/end colors")
    color_overlay: Optional[str] = Field(None, description="Weather tint, None for clear sky")
    animation_speed: float = Field(..., gt=0.0, description="Animation speed multiplier")


class DeviceCapability(BaseModel):
    """Host-supplied description of the rendering device."""
    model_config = ConfigDict(frozen=True)

    supports_gpu: bool = True
    max_particles: int = Field(100, ge=0)
    target_fps: int = Field(60, gt=0)
    memory_limit_mb: float = Field(100.0, gt=0.0)


class EffectOptions(BaseModel):
    """Optional caller adjustments applied on top of the resolved tables."""
    model_config = ConfigDict(frozen=True)

    enable_particles: bool = True
    custom_gradient: Optional[tuple[str, str]] = None
    color_intensity: float = Field(1.0, gt=0.0)
    blur_multiplier: float = Field(1.0, ge=0.0)
    opacity_multiplier: float = Field(1.0, ge=0.0)


class EffectInputs(BaseModel):
    """
    Inputs accepted at the API boundary.

    Every field is optional; missing season/time fall back to the
    caller's current values, missing weather to "sunny" and a missing
    device to the standard tier.
    """
    model_config = ConfigDict(frozen=True)

    season: Optional[Season] = None
    time_of_day: Optional[TimeOfDay] = None
    weather_condition: Optional[str] = None
    device: Optional[DeviceCapability] = None


class SeasonalBoundary(BaseModel):
    """Equinox or solstice reference date."""
    model_config = ConfigDict(frozen=True)

    date: datetime
    season: Season
    type: BoundaryType
    label: str


class PerformanceEstimate(BaseModel):
    """Heuristic performance estimate (never measured)."""
    model_config = ConfigDict(frozen=True)

    expected_fps: int = Field(..., ge=15)
    memory_usage: Literal["low", "medium", "high"]
    gpu_usage: Literal["none", "minimal", "moderate", "intensive"]


class WeatherReading(BaseModel):
    """Normalized weather observation."""
    model_config = ConfigDict(frozen=True)

    condition: str
    temperature: float = 20.0
    humidity: float = Field(50.0, ge=0.0, le=100.0)
    wind_speed: float = Field(5.0, ge=0.0)
    visibility: float = Field(10000.0, ge=0.0)
    pressure: float = 1013.0
    location: Optional[str] = None
    timestamp: float = 0.0


class ThemeSuggestion(BaseModel):
    """Season/particle suggestion derived from a weather reading."""
    model_config = ConfigDict(frozen=True)

    season: Season
    time_of_day: TimeOfDay
    particle_effect: str
    intensity: float = Field(..., ge=0.0, le=1.0)


class WeatherGlassEffect(BaseModel):
    """Weather-only glass effect, scaled by the integration intensity."""
    model_config = ConfigDict(frozen=True)

    blur_intensity: float
    opacity_level: float
    particle_count: int
    particle_type: str
    animation_speed: float
    color_overlay: str
