"""
Transition state machine between two resolved effect configurations.

Phases:
    IDLE -> TRANSITIONING -> IDLE            (completed, progress = 1)
    TRANSITIONING <-> PAUSED                 (pause / resume)
    TRANSITIONING | PAUSED -> IDLE           (cancel)
    TRANSITIONING | PAUSED -> reverse -> IDLE (cancel with reverse)

The controller never owns a clock. The host drives it by calling
tick(now) from its frame loop, directly or through a FrameDriver.
Timestamps and durations are seconds.
"""

from concurrent.futures import Future
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Callable, Optional, Protocol

from seasonal_glass.effect_math import clamp, get_easing, lerp, mix_hex_colors, round_half_up
from seasonal_glass.errors import InvalidTransitionError
from seasonal_glass.logger import logger
from seasonal_glass.models import EffectConfig

# Categorical fields switch from start to end at this eased progress
CATEGORICAL_SWAP_PROGRESS = 0.5

MIN_ANIMATION_SPEED = 0.01


class TransitionPhase(str, Enum):
    IDLE = "idle"
    TRANSITIONING = "transitioning"
    PAUSED = "paused"


class FrameDriver(Protocol):
    """Host-supplied animation frame source."""

    def request_frame(self, callback: Callable[[float], None]) -> Any:
        """Schedule callback(timestamp) for the next frame and return a handle."""
        ...

    def cancel_frame(self, handle: Any) -> None:
        """Unregister a pending frame callback."""
        ...


@dataclass
class TransitionState:
    """Observable transition state. One instance per controller."""
    phase: TransitionPhase = TransitionPhase.IDLE
    from_config: Optional[EffectConfig] = None
    to_config: Optional[EffectConfig] = None
    progress: float = 0.0
    easing: str = "spring"
    duration: float = 0.0
    elapsed_excluding_pauses: float = 0.0
    reversing: bool = False


def interpolate_config(start: EffectConfig, end: EffectConfig, progress: float) -> EffectConfig:
    """
    Blend two configs at an eased progress value.

    Numeric fields interpolate linearly (and extrapolate for overshooting
    easings, re-clamped to valid ranges). Gradient colors mix per RGB
    channel. particle_effect and color_overlay swap at the midpoint.
    Exactly 0 and 1 return the endpoint objects themselves.
    """
    if progress == 0.0:
        return start
    if progress == 1.0:
        return end

    swapped = progress >= CATEGORICAL_SWAP_PROGRESS

    return EffectConfig(
        blur_intensity=max(0.0, lerp(start.blur_intensity, end.blur_intensity, progress)),
        opacity_level=clamp(lerp(start.opacity_level, end.opacity_level, progress), 0.0, 1.0),
        saturation=max(1.0, lerp(start.saturation, end.saturation, progress)),
        particle_effect=end.particle_effect if swapped else start.particle_effect,
        particle_count=max(0, round_half_up(lerp(start.particle_count, end.particle_count, progress))),
        background_gradient=(
            mix_hex_colors(start.background_gradient[0], end.background_gradient[0], progress),
            mix_hex_colors(start.background_gradient[1], end.background_gradient[1], progress),
        ),
        color_overlay=end.color_overlay if swapped else start.color_overlay,
        animation_speed=max(MIN_ANIMATION_SPEED, lerp(start.animation_speed, end.animation_speed, progress)),
    )


class TransitionController:
    """
    Interpolates from one EffectConfig to another over time.

    Last call wins: starting a transition while one is active supersedes
    it, and the new transition starts from the config on screen at that
    moment.
    """

    def __init__(self, initial_config: Optional[EffectConfig] = None, driver: Optional[FrameDriver] = None):
        """
        Args:
            initial_config: Config shown before the first transition
            driver: Optional frame source; without one the host calls tick()
        """
        self.driver = driver
        self._state = TransitionState()
        self._settled: Optional[EffectConfig] = initial_config

        self._easing_fn: Callable[[float], float] = get_easing("linear")
        self._future: Optional[Future] = None
        self._frame_handle: Any = None

        # Clock bookkeeping, all in host timestamps
        self._start_time: Optional[float] = None
        self._last_tick: Optional[float] = None
        self._paused_accumulator = 0.0
        self._rebase_raw = 0.0
        self._reverse_from = 0.0

    # ------------------------------------------------------------------
    # Observation
    # ------------------------------------------------------------------

    @property
    def state(self) -> TransitionState:
        """Copy of the current state."""
        return replace(self._state)

    @property
    def phase(self) -> TransitionPhase:
        return self._state.phase

    @property
    def progress(self) -> float:
        return self._state.progress

    @property
    def is_active(self) -> bool:
        return self._state.phase != TransitionPhase.IDLE

    @property
    def current_config(self) -> Optional[EffectConfig]:
        """Effective config: settled when idle, interpolated otherwise."""
        if not self.is_active:
            return self._settled
        return interpolate_config(self._state.from_config, self._state.to_config, self._state.progress)

    def set_settled(self, config: EffectConfig) -> None:
        """Replace the idle config without animating (ignored mid-transition)."""
        if self.is_active:
            logger.debug("Ignoring settled config update during transition")
            return
        self._settled = config

    # ------------------------------------------------------------------
    # Control
    # ------------------------------------------------------------------

    def start(self, to_config: EffectConfig, duration: float, easing: str = "spring") -> Future:
        """
        Begin a transition toward to_config.

        Returns:
            Future resolved with True on completion, False when cancelled
            or superseded

        Raises:
            InvalidTransitionError: If duration <= 0 or easing is unknown
        """
        if duration <= 0:
            raise InvalidTransitionError(f"Transition duration must be positive, got {duration}")
        easing_fn = get_easing(easing)

        from_config = self.current_config or to_config
        if self.is_active:
            logger.info("Superseding active transition")
            self._finish(completed=False, settle=from_config)

        self._easing_fn = easing_fn
        self._state = TransitionState(
            phase=TransitionPhase.TRANSITIONING,
            from_config=from_config,
            to_config=to_config,
            progress=0.0,
            easing=easing,
            duration=duration,
        )
        self._reset_clock()
        self._future = Future()

        logger.info(f"Starting transition: duration={duration}s, easing={easing}")
        self._schedule_frame()
        return self._future

    def tick(self, now: float) -> Optional[EffectConfig]:
        """
        Advance the transition to host timestamp `now`.

        Returns:
            The effective config after advancing
        """
        state = self._state
        if state.phase == TransitionPhase.IDLE:
            return self._settled

        # First frame anchors the clock
        if self._start_time is None:
            self._start_time = now - self._rebase_raw * state.duration
            self._last_tick = now

        if state.phase == TransitionPhase.PAUSED:
            self._paused_accumulator += now - self._last_tick
            self._last_tick = now
            self._schedule_frame()
            return self.current_config

        self._last_tick = now
        elapsed = now - self._start_time - self._paused_accumulator
        state.elapsed_excluding_pauses = max(0.0, elapsed)
        raw_progress = clamp(elapsed / state.duration, 0.0, 1.0)
        eased = self._easing_fn(raw_progress)

        if state.reversing:
            state.progress = self._reverse_from * (1.0 - eased)
        else:
            state.progress = eased

        if raw_progress >= 1.0:
            if state.reversing:
                logger.info("Reverse transition completed")
                self._finish(completed=False, settle=state.from_config)
            else:
                logger.info("Transition completed")
                self._finish(completed=True, settle=state.to_config)
            return self._settled

        self._schedule_frame()
        return self.current_config

    def pause(self) -> None:
        """Freeze progress; the frame loop keeps ticking as a no-op."""
        if self._state.phase == TransitionPhase.TRANSITIONING:
            self._state.phase = TransitionPhase.PAUSED
            logger.info(f"Transition paused at progress={self._state.progress:.3f}")

    def resume(self) -> None:
        if self._state.phase == TransitionPhase.PAUSED:
            self._state.phase = TransitionPhase.TRANSITIONING
            logger.info("Transition resumed")
            self._schedule_frame()

    def cancel(self, reverse_on_cancel: bool = False) -> None:
        """
        Cancel the active transition. No-op when idle.

        Without reverse, snaps back to from_config immediately. With
        reverse, animates from the current progress back to 0 over the
        duration scaled by that progress, then settles on from_config.
        """
        state = self._state
        if state.phase == TransitionPhase.IDLE:
            return

        self._cancel_frame()

        if reverse_on_cancel and state.progress > 0 and not state.reversing:
            self._reverse_from = state.progress
            state.reversing = True
            state.phase = TransitionPhase.TRANSITIONING
            state.duration = state.duration * clamp(state.progress, 0.0, 1.0)
            self._reset_clock()
            logger.info(f"Reversing transition from progress={state.progress:.3f} over {state.duration:.3f}s")
            self._schedule_frame()
            return

        logger.info("Transition cancelled")
        self._finish(completed=False, settle=state.from_config)

    def set_progress(self, progress: float) -> None:
        """
        Manually pin progress (clamped to [0, 1]).

        The next tick continues from this point. Pinning a forward
        transition to 1 completes it; pinning a reverse to 0 ends it.
        """
        state = self._state
        if state.phase == TransitionPhase.IDLE:
            logger.debug("Ignoring set_progress while idle")
            return

        progress = clamp(progress, 0.0, 1.0)
        state.progress = progress

        if state.reversing:
            if progress <= 0.0:
                self._finish(completed=False, settle=state.from_config)
                return
            full_duration = state.duration / clamp(self._reverse_from, 1e-9, 1.0)
            self._reverse_from = progress
            state.duration = full_duration * progress
            self._reset_clock()
            return

        if progress >= 1.0:
            logger.info("Transition completed by manual progress")
            self._finish(completed=True, settle=state.to_config)
            return

        self._reset_clock()
        self._rebase_raw = progress

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _reset_clock(self) -> None:
        self._start_time = None
        self._last_tick = None
        self._paused_accumulator = 0.0
        self._rebase_raw = 0.0

    def _finish(self, completed: bool, settle: Optional[EffectConfig]) -> None:
        self._cancel_frame()
        self._settled = settle
        self._state = TransitionState(
            phase=TransitionPhase.IDLE,
            progress=1.0 if completed else 0.0,
            easing=self._state.easing,
        )
        self._reset_clock()

        future, self._future = self._future, None
        if future is not None and not future.done():
            future.set_result(completed)

    def _schedule_frame(self) -> None:
        if self.driver is None or self._frame_handle is not None:
            return
        self._frame_handle = self.driver.request_frame(self._on_frame)

    def _cancel_frame(self) -> None:
        if self.driver is not None and self._frame_handle is not None:
            self.driver.cancel_frame(self._frame_handle)
        self._frame_handle = None

    def _on_frame(self, timestamp: float) -> None:
        self._frame_handle = None
        self.tick(timestamp)

    def get_snapshot(self) -> dict[str, Any]:
        """State as a plain dictionary (for APIs and logging)."""
        state = self._state
        return {
            "phase": state.phase.value,
            "progress": state.progress,
            "easing": state.easing,
            "duration": state.duration,
            "elapsed": state.elapsed_excluding_pauses,
            "reversing": state.reversing,
            "from_config": state.from_config.model_dump() if state.from_config else None,
            "to_config": state.to_config.model_dump() if state.to_config else None,
        }
