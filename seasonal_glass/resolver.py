"""
Effect parameter resolver.

Maps (season, time of day, weather, performance tier) to an immutable
EffectConfig. Pure: no I/O, no hidden state, identical inputs always
produce equal snapshots.

Algorithm:
    1. Base seasonal profile (blur, opacity, saturation, particle, gradient)
    2. Time-of-day multiplier on blur and opacity
    3. Weather multiplier on blur and opacity, plus particle override
       for rainy/snowy/stormy (unknown weather uses the sunny row)
    4. Tier scaling: blur, particle count and animation speed
    5. Clamping to tier ceilings
"""

from functools import lru_cache
from typing import Optional

from seasonal_glass.config import RESOLVER_CACHE_SIZE
from seasonal_glass.effect_math import clamp, round_half_up
from seasonal_glass.models import (
    EffectConfig,
    EffectInputs,
    EffectOptions,
    PerformanceTier,
    Season,
    TimeOfDay,
    parse_season,
    parse_time_of_day,
)
from seasonal_glass.performance import classify_tier, get_tier_profile
from seasonal_glass.season_profiles import (
    DEFAULT_PARTICLE_COUNT,
    PARTICLE_COUNTS,
    SEASONS,
    TIME_OF_DAY,
    WEATHER,
)

DEFAULT_WEATHER = "sunny"
DEFAULT_TIER = PerformanceTier.STANDARD

BLUR_CEILING = 2.0
BLUR_CEILING_GPU = 3.0
OPACITY_CEILING = 0.6
OPACITY_CEILING_LOW_POWER = 0.3
SATURATION_FLOOR = 1.0
SATURATION_CEILING = 2.0
SATURATION_CEILING_GPU = 2.5

_DEFAULT_OPTIONS = EffectOptions()


def default_particle_count(particle_effect: str) -> int:
    """Default particle count for a particle type (30 for unknown types)."""
    return PARTICLE_COUNTS.get(particle_effect, DEFAULT_PARTICLE_COUNT)


def normalize_weather(weather_condition: Optional[str]) -> str:
    """Return the weather table key used for a condition."""
    if not weather_condition:
        return DEFAULT_WEATHER
    key = weather_condition.strip().lower()
    return key if key in WEATHER else DEFAULT_WEATHER


def resolve(
    season,
    time_of_day,
    weather_condition: Optional[str] = None,
    performance_tier=None,
    options: Optional[EffectOptions] = None,
    max_particles: Optional[int] = None,
) -> EffectConfig:
    """
    Resolve glass effect parameters.

    Args:
        season: Season (or its string value)
        time_of_day: TimeOfDay (or its string value)
        weather_condition: Any string; unrecognized or None behaves like "sunny"
        performance_tier: PerformanceTier; None behaves like "standard"
        options: Caller adjustments (particles on/off, custom gradient, ...)
        max_particles: Device particle ceiling; None leaves the count unbounded

    Returns:
        Fresh EffectConfig snapshot

    Raises:
        InvalidInputError: If season or time_of_day is not recognized
    """
    season = parse_season(season)
    time_of_day = parse_time_of_day(time_of_day)
    tier = PerformanceTier(performance_tier) if performance_tier is not None else DEFAULT_TIER
    options = options or _DEFAULT_OPTIONS

    base = SEASONS[season.value]
    time_mult = TIME_OF_DAY[time_of_day.value]
    weather = WEATHER[normalize_weather(weather_condition)]
    profile = get_tier_profile(tier)

    # Blur: compose and clamp, then scale by caller and tier and clamp again
    blur_ceiling = BLUR_CEILING_GPU if tier == PerformanceTier.GPU_ACCELERATED else BLUR_CEILING
    blur = clamp(base["blur"] * time_mult["blur"] * weather["blur"], 0.0, blur_ceiling)
    blur = clamp(blur * options.blur_multiplier * profile.blur_multiplier, 0.0, blur_ceiling)

    opacity_ceiling = OPACITY_CEILING_LOW_POWER if tier == PerformanceTier.LOW_POWER else OPACITY_CEILING
    opacity = base["opacity"] * time_mult["opacity"] * weather["opacity"] * options.opacity_multiplier
    opacity = clamp(opacity, 0.0, opacity_ceiling)

    # Saturation ignores time and weather
    saturation_ceiling = (
        SATURATION_CEILING_GPU if tier == PerformanceTier.GPU_ACCELERATED else SATURATION_CEILING
    )
    saturation = clamp(base["saturation"] * options.color_intensity, SATURATION_FLOOR, saturation_ceiling)

    if options.enable_particles:
        particle_effect = weather["particle"] or base["particle"]
        particle_count = round_half_up(default_particle_count(particle_effect) * profile.particle_multiplier)
        if max_particles is not None:
            particle_count = min(particle_count, max_particles)
        particle_count = max(0, particle_count)
    else:
        particle_effect = "none"
        particle_count = 0

    return EffectConfig(
        blur_intensity=blur,
        opacity_level=opacity,
        saturation=saturation,
        particle_effect=particle_effect,
        particle_count=particle_count,
        background_gradient=options.custom_gradient or base["gradient"],
        color_overlay=weather["overlay"],
        animation_speed=weather["speed"] * profile.animation_speed_multiplier,
    )


@lru_cache(maxsize=RESOLVER_CACHE_SIZE)
def resolve_cached(
    season,
    time_of_day,
    weather_condition: Optional[str] = None,
    performance_tier=None,
    options: Optional[EffectOptions] = None,
    max_particles: Optional[int] = None,
) -> EffectConfig:
    """Memoized resolve(); safe because resolve() is pure and EffectConfig is frozen."""
    return resolve(season, time_of_day, weather_condition, performance_tier, options, max_particles)


def resolve_inputs(
    inputs: EffectInputs,
    default_season: Season = Season.SPRING,
    default_time_of_day: TimeOfDay = TimeOfDay.MORNING,
    options: Optional[EffectOptions] = None,
) -> EffectConfig:
    """
    Resolve a partially specified input record.

    Missing season/time use the given defaults, missing weather is sunny,
    and the tier and particle ceiling come from the device when present.
    """
    tier = classify_tier(inputs.device) if inputs.device is not None else DEFAULT_TIER
    max_particles = inputs.device.max_particles if inputs.device is not None else None

    return resolve_cached(
        inputs.season or default_season,
        inputs.time_of_day or default_time_of_day,
        inputs.weather_condition,
        tier,
        options,
        max_particles,
    )


def to_css_variables(config: EffectConfig) -> dict[str, str]:
    """
    Project an EffectConfig onto CSS custom properties.

    Every value comes straight from a config field; blur carries the
    "px" unit the backdrop-filter expects.
    """
    return {
        "--seasonal-blur": f"{config.blur_intensity}px",
        "--seasonal-opacity": str(config.opacity_level),
        "--seasonal-saturation": str(config.saturation),
        "--seasonal-gradient-start": config.background_gradient[0],
        "--seasonal-gradient-end": config.background_gradient[1],
        "--seasonal-particle-effect": config.particle_effect,
        "--seasonal-particle-count": str(config.particle_count),
        "--seasonal-animation-speed": str(config.animation_speed),
    }
