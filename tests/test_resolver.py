"""Tests for the effect parameter resolver."""

import itertools
from unittest.mock import patch

import pytest

from seasonal_glass.errors import InvalidInputError
from seasonal_glass.models import (
    DeviceCapability,
    EffectInputs,
    EffectOptions,
    PerformanceTier,
    Season,
    TimeOfDay,
)
from seasonal_glass.resolver import (
    normalize_weather,
    resolve,
    resolve_cached,
    resolve_inputs,
    to_css_variables,
)
from seasonal_glass.season_profiles import SEASONS

ALL_WEATHER = ["sunny", "cloudy", "rainy", "snowy", "stormy", "foggy", "hail", None]


class TestBaseProfiles:
    """Tests for seasonal baselines."""

    def test_spring_day_sunny(self):
        """Should return the plain spring profile."""
        config = resolve("spring", "day", "sunny")
        assert config.blur_intensity == pytest.approx(0.7)
        assert config.opacity_level == pytest.approx(0.10)
        assert config.saturation == pytest.approx(1.5)
        assert config.particle_effect == "sakura"
        assert config.particle_count == 50
        assert config.background_gradient == ("#ffb3d9", "#98fb98")
        assert config.color_overlay is None
        assert config.animation_speed == pytest.approx(1.0)

    def test_accepts_enums(self):
        """Should accept enum members as well as strings."""
        assert resolve(Season.AUTUMN, TimeOfDay.DAY) == resolve("autumn", "day")

    def test_time_of_day_scales_blur_and_opacity(self):
        """Should increase blur and opacity toward night."""
        morning = resolve("summer", "morning")
        night = resolve("summer", "night")
        assert morning.blur_intensity < night.blur_intensity
        assert morning.opacity_level < night.opacity_level
        assert morning.saturation == night.saturation


class TestWeather:
    """Tests for weather adjustments."""

    def test_rain_overrides_particles(self):
        """Should replace seasonal particles with rain."""
        config = resolve("autumn", "day", "rainy")
        assert config.particle_effect == "rain"
        assert config.particle_count == 80
        assert config.color_overlay == "rgba(0, 100, 200, 0.3)"

    def test_cloudy_keeps_seasonal_particles(self):
        """Should not override particles for cloudy weather."""
        assert resolve("summer", "day", "cloudy").particle_effect == "waterdrops"

    def test_foggy_keeps_seasonal_particles(self):
        """Should not override particles for fog."""
        assert resolve("spring", "day", "foggy").particle_effect == "sakura"

    def test_unknown_weather_behaves_like_sunny(self):
        """Should map unknown conditions to the sunny row."""
        assert resolve("winter", "evening", "hail") == resolve("winter", "evening", "sunny")

    def test_missing_weather_behaves_like_sunny(self):
        """Should treat None as sunny."""
        assert resolve("winter", "evening") == resolve("winter", "evening", "sunny")

    def test_normalize_weather(self):
        """Should lower-case known keys and default the rest."""
        assert normalize_weather("Rainy ") == "rainy"
        assert normalize_weather("volcanic ash") == "sunny"
        assert normalize_weather("") == "sunny"


class TestValidation:
    """Tests for closed enum validation."""

    def test_invalid_season(self):
        """Should reject unknown seasons."""
        with pytest.raises(InvalidInputError):
            resolve("monsoon", "day")

    def test_invalid_time_of_day(self):
        """Should reject unknown times of day."""
        with pytest.raises(InvalidInputError):
            resolve("spring", "dusk")


class TestTierScaling:
    """Tests for performance tier scaling."""

    def test_winter_night_snowy_gpu(self):
        """Should scale snow particles up and stay under the GPU blur ceiling."""
        config = resolve("winter", "night", "snowy", PerformanceTier.GPU_ACCELERATED)
        assert config.particle_effect == "snow"
        assert config.particle_count == 90
        assert config.blur_intensity == pytest.approx(1.0 * 1.2 * 1.4 * 1.2)
        assert config.blur_intensity <= 3.0
        assert config.animation_speed == pytest.approx(0.5 * 1.3)

    def test_particle_count_clamped_to_device(self):
        """Should clamp particle count to the device maximum."""
        config = resolve("winter", "night", "snowy", "gpu-accelerated", max_particles=50)
        assert config.particle_count == 50

    def test_low_power_scales_down(self):
        """Should cut particles, blur and speed under low-power."""
        config = resolve("spring", "day", "sunny", "low-power")
        assert config.particle_count == 15
        assert config.blur_intensity == pytest.approx(0.35)
        assert config.animation_speed == pytest.approx(0.7)

    def test_low_power_opacity_ceiling(self):
        """Should cap opacity at 0.3 under low-power."""
        config = resolve("winter", "night", "stormy", "low-power")
        assert config.opacity_level == pytest.approx(0.3)

    def test_missing_tier_is_standard(self):
        """Should treat a missing tier as standard."""
        assert resolve("summer", "day", "sunny") == resolve("summer", "day", "sunny", "standard")


class TestClamping:
    """Tests for output ranges."""

    @pytest.mark.parametrize(
        "season,time_of_day,weather,tier",
        list(itertools.product(
            [s.value for s in Season],
            [t.value for t in TimeOfDay],
            ALL_WEATHER,
            [t.value for t in PerformanceTier],
        )),
    )
    def test_ranges_hold_everywhere(self, season, time_of_day, weather, tier):
        """Should keep blur, opacity, saturation and count in range."""
        config = resolve(season, time_of_day, weather, tier)
        assert 0.0 <= config.blur_intensity <= 3.0
        assert 0.0 <= config.opacity_level <= 0.6
        assert 1.0 <= config.saturation <= 2.5
        assert config.particle_count >= 0
        assert config.animation_speed > 0

    def test_extreme_multipliers_clamped(self):
        """Should clamp at the tier ceilings with huge caller multipliers."""
        options = EffectOptions(blur_multiplier=10.0, opacity_multiplier=10.0, color_intensity=10.0)
        gpu = resolve("winter", "night", "stormy", "gpu-accelerated", options)
        assert gpu.blur_intensity == 3.0
        assert gpu.opacity_level == 0.6
        assert gpu.saturation == 2.5

        standard = resolve("winter", "night", "stormy", "standard", options)
        assert standard.blur_intensity == 2.0
        assert standard.saturation == 2.0

    def test_composed_blur_clamped_before_tier_scaling(self):
        """Should clamp the seasonal blur before caller and tier multipliers."""
        with patch.dict(SEASONS["winter"], {"blur": 5.0}):
            config = resolve("winter", "night", "sunny", "low-power")
        # min(5.0 * 1.2, 2.0) * 0.5
        assert config.blur_intensity == pytest.approx(1.0)

    def test_caller_multiplier_after_first_clamp(self):
        """Should scale an in-range composed blur by caller and tier."""
        options = EffectOptions(blur_multiplier=2.0)
        config = resolve("winter", "night", "stormy", "low-power", options)
        # 1.0 * 1.2 * 1.5 stays under 2.0, then * 2.0 * 0.5
        assert config.blur_intensity == pytest.approx(1.8)

    def test_saturation_floor(self):
        """Should never drop saturation below 1.0."""
        config = resolve("autumn", "day", options=EffectOptions(color_intensity=0.1))
        assert config.saturation == 1.0


class TestOptions:
    """Tests for caller options."""

    def test_disable_particles(self):
        """Should force particles off."""
        config = resolve("winter", "night", "snowy", options=EffectOptions(enable_particles=False))
        assert config.particle_effect == "none"
        assert config.particle_count == 0

    def test_custom_gradient(self):
        """Should replace the seasonal gradient."""
        options = EffectOptions(custom_gradient=("#111111", "#222222"))
        assert resolve("summer", "day", options=options).background_gradient == ("#111111", "#222222")


class TestPurity:
    """Tests for deterministic output."""

    def test_identical_inputs_equal_snapshots(self):
        """Should return equal configs for identical inputs."""
        first = resolve("winter", "night", "snowy", "gpu-accelerated")
        second = resolve("winter", "night", "snowy", "gpu-accelerated")
        assert first == second
        assert first.model_dump_json() == second.model_dump_json()

    def test_configs_are_frozen(self):
        """Should refuse mutation."""
        config = resolve("spring", "day")
        with pytest.raises(ValueError):
            config.blur_intensity = 5.0

    def test_cached_returns_same_snapshot(self):
        """Should memoize on identical arguments."""
        assert resolve_cached("spring", "day", "rainy") is resolve_cached("spring", "day", "rainy")
        assert resolve_cached("spring", "day", "rainy") == resolve("spring", "day", "rainy")


class TestResolveInputs:
    """Tests for partially specified inputs."""

    def test_defaults(self):
        """Should fill season, time of day and weather defaults."""
        assert resolve_inputs(EffectInputs()) == resolve("spring", "morning", "sunny", "standard")

    def test_device_selects_tier_and_ceiling(self):
        """Should classify the device and clamp to its particle limit."""
        device = DeviceCapability(supports_gpu=False, max_particles=10, target_fps=24, memory_limit_mb=10)
        config = resolve_inputs(EffectInputs(season=Season.SPRING, time_of_day=TimeOfDay.MORNING, device=device))
        assert config.particle_count == 10
        assert config.blur_intensity == pytest.approx(0.7 * 0.8 * 0.5)
        assert config.opacity_level <= 0.3


class TestCssVariables:
    """Tests for the CSS projection."""

    def test_keys(self):
        """Should expose exactly the eight seasonal variables."""
        css = to_css_variables(resolve("spring", "day"))
        assert set(css) == {
            "--seasonal-blur",
            "--seasonal-opacity",
            "--seasonal-saturation",
            "--seasonal-gradient-start",
            "--seasonal-gradient-end",
            "--seasonal-particle-effect",
            "--seasonal-particle-count",
            "--seasonal-animation-speed",
        }

    def test_values_come_from_config(self):
        """Should only carry values present in the config."""
        config = resolve("spring", "day")
        css = to_css_variables(config)
        assert css["--seasonal-blur"] == f"{config.blur_intensity}px"
        assert css["--seasonal-particle-effect"] == "sakura"
        assert css["--seasonal-particle-count"] == "50"
        assert css["--seasonal-gradient-start"] == "#ffb3d9"
        assert css["--seasonal-gradient-end"] == "#98fb98"
