"""
Performance tier classification and heuristic estimates.

Nothing in here measures the runtime; estimates are for capacity
planning and telemetry only.
"""

from dataclasses import dataclass

from seasonal_glass.models import (
    DeviceCapability,
    EffectConfig,
    PerformanceEstimate,
    PerformanceTier,
)


@dataclass(frozen=True)
class TierProfile:
    """Multipliers applied to resolved effects for one tier."""
    particle_multiplier: float
    blur_multiplier: float
    animation_speed_multiplier: float
    enable_complex_effects: bool
    base_fps: int


TIER_PROFILES: dict[PerformanceTier, TierProfile] = {
    PerformanceTier.LOW_POWER: TierProfile(0.3, 0.5, 0.7, False, 30),
    PerformanceTier.STANDARD: TierProfile(1.0, 1.0, 1.0, True, 45),
    PerformanceTier.GPU_ACCELERATED: TierProfile(1.5, 1.2, 1.3, True, 60),
}

MIN_EXPECTED_FPS = 15


def classify_tier(capabilities: DeviceCapability) -> PerformanceTier:
    """
    Classify a device into a performance tier.

    Priority:
        1. No GPU or target below 30 FPS -> low-power
        2. GPU, target >= 60 FPS and more than 50 MB memory -> gpu-accelerated
        3. Otherwise -> standard
    """
    if not capabilities.supports_gpu or capabilities.target_fps < 30:
        return PerformanceTier.LOW_POWER
    if capabilities.target_fps >= 60 and capabilities.memory_limit_mb > 50:
        return PerformanceTier.GPU_ACCELERATED
    return PerformanceTier.STANDARD


def get_tier_profile(tier: PerformanceTier) -> TierProfile:
    return TIER_PROFILES[PerformanceTier(tier)]


def estimate_performance(config: EffectConfig, tier: PerformanceTier) -> PerformanceEstimate:
    """
    Estimate frame rate, memory and GPU load for a resolved effect.

    Args:
        config: Resolved effect
        tier: Tier the effect was resolved for

    Returns:
        PerformanceEstimate with expected FPS (floored at 15)
    """
    tier = PerformanceTier(tier)
    particles_enabled = config.particle_effect != "none" and config.particle_count > 0

    expected_fps = TIER_PROFILES[tier].base_fps
    if particles_enabled:
        if config.particle_count > 50:
            expected_fps -= 10
        if config.particle_count > 100:
            expected_fps -= 10

    if tier == PerformanceTier.LOW_POWER or not particles_enabled:
        memory_usage = "low"
    elif tier == PerformanceTier.GPU_ACCELERATED:
        memory_usage = "high"
    else:
        memory_usage = "medium"

    if tier == PerformanceTier.LOW_POWER:
        gpu_usage = "none"
    elif tier == PerformanceTier.GPU_ACCELERATED:
        gpu_usage = "intensive" if particles_enabled else "moderate"
    else:
        gpu_usage = "moderate" if particles_enabled else "minimal"

    return PerformanceEstimate(
        expected_fps=max(MIN_EXPECTED_FPS, expected_fps),
        memory_usage=memory_usage,
        gpu_usage=gpu_usage,
    )
