"""Shared pytest fixtures for all tests."""

import pytest

from seasonal_glass.models import EffectConfig
from seasonal_glass.resolver import resolve


class FakeFrameDriver:
    """Frame driver that only fires when a test says so."""

    def __init__(self):
        self.pending = {}
        self.cancelled = []
        self.requested = 0

    def request_frame(self, callback):
        self.requested += 1
        handle = self.requested
        self.pending[handle] = callback
        return handle

    def cancel_frame(self, handle):
        self.pending.pop(handle, None)
        self.cancelled.append(handle)

    def fire(self, timestamp: float):
        """Run every pending callback with the given timestamp."""
        callbacks = list(self.pending.values())
        self.pending.clear()
        for callback in callbacks:
            callback(timestamp)


@pytest.fixture
def fake_driver():
    """Manually fired frame driver."""
    return FakeFrameDriver()


@pytest.fixture
def make_config():
    """Factory for EffectConfig with overridable fields."""
    def _make(**overrides):
        fields = {
            "blur_intensity": 1.0,
            "opacity_level": 0.2,
            "saturation": 1.5,
            "particle_effect": "sakura",
            "particle_count": 50,
            "background_gradient": ("#000000", "#ffffff"),
            "color_overlay": None,
            "animation_speed": 1.0,
        }
        fields.update(overrides)
        return EffectConfig(**fields)

    return _make


@pytest.fixture
def spring_config():
    """Spring morning, clear sky, standard tier."""
    return resolve("spring", "morning", "sunny")


@pytest.fixture
def winter_config():
    """Winter night, snowing, standard tier."""
    return resolve("winter", "night", "snowy")
