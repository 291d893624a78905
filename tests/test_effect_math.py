"""Tests for easing, interpolation and color helpers."""

import pytest

from seasonal_glass.effect_math import (
    EASING_FUNCTIONS,
    clamp,
    ease_in_out,
    get_easing,
    lerp,
    mix_hex_colors,
    parse_hex_color,
    round_half_up,
    smoothstep,
    spring,
)
from seasonal_glass.errors import InvalidTransitionError


class TestBasics:
    """Tests for scalar helpers."""

    def test_lerp(self):
        """Should interpolate linearly."""
        assert lerp(0.0, 10.0, 0.25) == 2.5
        assert lerp(10.0, 0.0, 1.0) == 0.0

    def test_clamp(self):
        """Should clamp into range."""
        assert clamp(5, 0, 3) == 3
        assert clamp(-1, 0, 3) == 0
        assert clamp(2, 0, 3) == 2

    def test_smoothstep_midpoint(self):
        """Should be 0.5 at the midpoint."""
        assert smoothstep(0.5) == 0.5

    def test_round_half_up(self):
        """Should round halves up instead of to even."""
        assert round_half_up(2.5) == 3
        assert round_half_up(0.5) == 1
        assert round_half_up(14.4) == 14
        assert round_half_up(90.0) == 90


class TestEasing:
    """Tests for easing functions."""

    @pytest.mark.parametrize("easing_id", list(EASING_FUNCTIONS))
    def test_endpoints_exact(self, easing_id):
        """Should map 0 to exactly 0 and 1 to exactly 1."""
        fn = get_easing(easing_id)
        assert fn(0.0) == 0.0
        assert fn(1.0) == 1.0

    @pytest.mark.parametrize("easing_id", list(EASING_FUNCTIONS))
    def test_out_of_range_pinned(self, easing_id):
        """Should pin inputs outside [0, 1]."""
        fn = get_easing(easing_id)
        assert fn(-0.5) == 0.0
        assert fn(1.5) == 1.0

    def test_ease_in_out_quadratic(self):
        """Should follow the quadratic in-out curve."""
        assert ease_in_out(0.25) == pytest.approx(0.125)
        assert ease_in_out(0.75) == pytest.approx(0.875)

    def test_cubic_bezier_is_smoothstep(self):
        """Should approximate cubic-bezier with 3t^2 - 2t^3."""
        fn = get_easing("cubic-bezier")
        assert fn(0.3) == pytest.approx(3 * 0.09 - 2 * 0.027)

    def test_spring_overshoots(self):
        """Should dip below 0 early and overshoot 1 late."""
        assert spring(0.1) < 0.0
        assert spring(0.9) > 1.0

    def test_unknown_easing(self):
        """Should reject unknown easing ids."""
        with pytest.raises(InvalidTransitionError):
            get_easing("bounce")


class TestColors:
    """Tests for hex color parsing and mixing."""

    def test_parse_long_form(self):
        """Should parse #rrggbb."""
        assert parse_hex_color("#ff8c00") == (255, 140, 0)

    def test_parse_short_form(self):
        """Should expand #rgb."""
        assert parse_hex_color("#fff") == (255, 255, 255)

    def test_parse_invalid(self):
        """Should reject non-hex strings."""
        with pytest.raises(ValueError):
            parse_hex_color("#12345")

    def test_mix_midpoint(self):
        """Should mix channels and round halves up."""
        assert mix_hex_colors("#000000", "#ffffff", 0.5) == "#808080"

    def test_mix_endpoints_unchanged(self):
        """Should return input strings verbatim at the ends."""
        assert mix_hex_colors("#FFF", "#000000", 0.0) == "#FFF"
        assert mix_hex_colors("#FFF", "#ABCDEF", 1.0) == "#ABCDEF"

    def test_mix_outside_range_returns_endpoint(self):
        """Should hold the endpoint colors when easing overshoots."""
        assert mix_hex_colors("#000000", "#ffffff", 1.2) == "#ffffff"
        assert mix_hex_colors("#808080", "#ffffff", -0.5) == "#808080"
