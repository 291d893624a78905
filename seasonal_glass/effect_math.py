"""
Mathematical helpers for smooth, non-flickering effect transitions.
"""

import math
from typing import Callable

from seasonal_glass.errors import InvalidTransitionError


def smoothstep(t: float) -> float:
    """Smooth ease-in / ease-out curve."""
    return t * t * (3 - 2 * t)


def lerp(a: float, b: float, t: float) -> float:
    """Linear interpolation."""
    return a + (b - a) * t


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def round_half_up(value: float) -> int:
    """Round halves up (Python's round() rounds them to even)."""
    return int(math.floor(value + 0.5))


# ============================================================================
# Easing
# ============================================================================

def linear(t: float) -> float:
    return t


def ease_in_out(t: float) -> float:
    """Quadratic ease-in-out."""
    if t < 0.5:
        return 2 * t * t
    return -1 + (4 - 2 * t) * t


_SPRING_C1 = 1.70158
_SPRING_C2 = _SPRING_C1 * 1.525


def spring(t: float) -> float:
    """
    Ease-in-out with overshoot ("back" curve).

    Not monotonic: dips below 0 early and overshoots 1 late.
    """
    if t < 0.5:
        return (math.pow(2 * t, 2) * ((_SPRING_C2 + 1) * 2 * t - _SPRING_C2)) / 2
    return (math.pow(2 * t - 2, 2) * ((_SPRING_C2 + 1) * (t * 2 - 2) + _SPRING_C2) + 2) / 2


def cubic_bezier(t: float) -> float:
    """Fixed cubic-bezier approximation (smoothstep)."""
    return smoothstep(t)


EASING_FUNCTIONS: dict[str, Callable[[float], float]] = {
    "linear": linear,
    "ease-in-out": ease_in_out,
    "spring": spring,
    "cubic-bezier": cubic_bezier,
}


def get_easing(easing_id: str) -> Callable[[float], float]:
    """
    Look up an easing function by id.

    The returned function maps [0, 1] onto progress with the endpoints
    pinned to exactly 0.0 and 1.0.

    Raises:
        InvalidTransitionError: If easing_id is unknown
    """
    fn = EASING_FUNCTIONS.get(easing_id)
    if fn is None:
        raise InvalidTransitionError(
            f"Unknown easing: {easing_id!r}. Must be one of: {', '.join(EASING_FUNCTIONS)}"
        )

    def pinned(t: float) -> float:
        if t <= 0.0:
            return 0.0
        if t >= 1.0:
            return 1.0
        return fn(t)

    return pinned


# ============================================================================
# Colors
# ============================================================================

def parse_hex_color(color: str) -> tuple[int, int, int]:
    """
    Parse "#rgb" or "#rrggbb" into an (r, g, b) tuple.

    Raises:
        ValueError: If color is not a hex color
    """
    value = color.strip().lstrip("#")
    if len(value) == 3:
        value = "".join(c * 2 for c in value)
    if len(value) != 6:
        raise ValueError(f"Invalid hex color: {color!r}")
    return int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16)


def format_hex_color(rgb: tuple[int, int, int]) -> str:
    r, g, b = (int(clamp(c, 0, 255)) for c in rgb)
    return f"#{r:02x}{g:02x}{b:02x}"


def mix_hex_colors(start: str, end: str, t: float) -> str:
    """
    Mix two hex colors channel-wise at factor t.

    Returns the input strings unchanged at t <= 0 and t >= 1 so
    completed transitions carry no rounding residue.
    """
    if t <= 0.0:
        return start
    if t >= 1.0:
        return end

    r1, g1, b1 = parse_hex_color(start)
    r2, g2, b2 = parse_hex_color(end)

    return format_hex_color((
        round_half_up(lerp(r1, r2, t)),
        round_half_up(lerp(g1, g2, t)),
        round_half_up(lerp(b1, b2, t)),
    ))
