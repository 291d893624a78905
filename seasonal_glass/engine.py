"""
Seasonal glass engine: one instance owns the current inputs, the
transition controller and the optional weather integration.

Build it with create_engine(). There is no process-wide singleton; the
host keeps a reference and drives tick() (or hands a FrameDriver in).
"""

import asyncio
from concurrent.futures import Future
from datetime import datetime, timezone
from typing import Any, Optional, Union

from seasonal_glass.boundaries import detect_seasonal_boundary, get_current_season
from seasonal_glass.config import (
    AUTO_TRANSITION,
    AUTO_TRANSITION_CHECK_INTERVAL,
    LOCATION_LATITUDE,
    LOCATION_LONGITUDE,
    REVERSE_ON_CANCEL,
    TRANSITION_DURATION,
    TRANSITION_EASING,
)
from seasonal_glass.logger import logger
from seasonal_glass.models import (
    DeviceCapability,
    EffectConfig,
    EffectInputs,
    EffectOptions,
    PerformanceEstimate,
    PerformanceTier,
    Season,
    SeasonalBoundary,
    ThemeSuggestion,
    TimeOfDay,
    WeatherReading,
    parse_season,
    parse_time_of_day,
)
from seasonal_glass.performance import classify_tier, estimate_performance
from seasonal_glass.resolver import DEFAULT_TIER, DEFAULT_WEATHER, resolve_cached, to_css_variables
from seasonal_glass.solar_time import detect_time_of_day
from seasonal_glass.transitions import FrameDriver, TransitionController, TransitionState
from seasonal_glass.weather import LocationProvider, WeatherIntegration, WeatherProvider

TransitionTarget = Union[Season, str, EffectInputs]


class SeasonalGlassEngine:
    """
    Glass effect engine instance.

    Inputs are always fully populated (season, time of day, weather);
    the device is optional and selects the performance tier.
    """

    def __init__(
        self,
        inputs: EffectInputs,
        options: Optional[EffectOptions] = None,
        driver: Optional[FrameDriver] = None,
        weather: Optional[WeatherIntegration] = None,
        auto_transition: bool = AUTO_TRANSITION,
        auto_detect: bool = False,
        reverse_on_cancel: bool = REVERSE_ON_CANCEL,
        transition_duration: float = TRANSITION_DURATION,
        transition_easing: str = TRANSITION_EASING,
        latitude: Optional[float] = LOCATION_LATITUDE,
        longitude: Optional[float] = LOCATION_LONGITUDE,
    ):
        """
        Args:
            inputs: Initial inputs; season and time_of_day are required
            options: Resolver adjustments applied to every config
            driver: Frame source for transitions (None = host calls tick())
            weather: Weather integration feeding update_weather()
            auto_transition: Transition automatically at seasonal boundaries
            auto_detect: Follow weather theme suggestions and the clock
            reverse_on_cancel: Default cancel policy
            transition_duration: Default transition duration in seconds
            transition_easing: Default easing id
            latitude: Observer latitude for solar time of day
            longitude: Observer longitude for solar time of day
        """
        if inputs.season is None or inputs.time_of_day is None:
            raise ValueError("Engine inputs need a season and a time of day")

        self._inputs = inputs.model_copy(
            update={"weather_condition": inputs.weather_condition or DEFAULT_WEATHER}
        )
        self.options = options or EffectOptions()
        self.auto_transition = auto_transition
        self.auto_detect = auto_detect
        self.reverse_on_cancel = reverse_on_cancel
        self.transition_duration = transition_duration
        self.transition_easing = transition_easing
        self.latitude = latitude
        self.longitude = longitude

        self.controller = TransitionController(initial_config=self._resolve(), driver=driver)

        # Inputs to restore if the active transition is cancelled
        self._transition_future: Optional[Future] = None
        self._inputs_before_transition: Optional[EffectInputs] = None
        self._inputs_changed_during_transition = False

        self.weather = weather
        if weather is not None:
            weather.on_update = self._on_weather_update

        self._auto_task: Optional[asyncio.Task] = None

    # ========================================================================
    # Inputs
    # ========================================================================

    @property
    def inputs(self) -> EffectInputs:
        return self._inputs

    @property
    def season(self) -> Season:
        return self._inputs.season

    @property
    def time_of_day(self) -> TimeOfDay:
        return self._inputs.time_of_day

    @property
    def weather_condition(self) -> str:
        return self._inputs.weather_condition

    @property
    def device(self) -> Optional[DeviceCapability]:
        return self._inputs.device

    @property
    def performance_tier(self) -> PerformanceTier:
        if self._inputs.device is None:
            return DEFAULT_TIER
        return classify_tier(self._inputs.device)

    def _resolve(self, inputs: Optional[EffectInputs] = None) -> EffectConfig:
        inputs = inputs or self._inputs
        tier = classify_tier(inputs.device) if inputs.device is not None else DEFAULT_TIER
        max_particles = inputs.device.max_particles if inputs.device is not None else None
        return resolve_cached(
            inputs.season,
            inputs.time_of_day,
            inputs.weather_condition,
            tier,
            self.options,
            max_particles,
        )

    def _update_inputs(self, **changes) -> None:
        self._inputs = self._inputs.model_copy(update=changes)

        if self.controller.is_active:
            # Applied when the transition settles
            if self._inputs_before_transition is not None:
                self._inputs_before_transition = self._inputs_before_transition.model_copy(update=changes)
            self._inputs_changed_during_transition = True
            return

        self.controller.set_settled(self._resolve())

    def update_season(self, season: Union[Season, str]) -> None:
        """Switch season immediately (use transition_to() to animate)."""
        self._update_inputs(season=parse_season(season))

    def update_time_of_day(self, time_of_day: Union[TimeOfDay, str]) -> None:
        self._update_inputs(time_of_day=parse_time_of_day(time_of_day))

    def update_weather(self, weather_condition: Optional[str]) -> None:
        """Set the weather condition; None resets to sunny."""
        self._update_inputs(weather_condition=weather_condition or DEFAULT_WEATHER)

    def update_device(self, device: Optional[DeviceCapability]) -> None:
        self._update_inputs(device=device)

    def update_options(self, options: EffectOptions) -> None:
        self.options = options
        self._update_inputs()

    def sync_time_of_day(self, now: Optional[datetime] = None) -> TimeOfDay:
        """Re-detect time of day from the clock (or the sun, when a location is set)."""
        detected = detect_time_of_day(now, self.latitude, self.longitude)
        if detected != self.time_of_day:
            logger.info(f"Time of day changed: {self.time_of_day.value} -> {detected.value}")
            self.update_time_of_day(detected)
        return detected

    # ========================================================================
    # Output
    # ========================================================================

    def current_config(self) -> EffectConfig:
        """Effective config, interpolated while a transition runs."""
        return self.controller.current_config

    def css_variables(self) -> dict[str, str]:
        return to_css_variables(self.current_config())

    def performance_estimate(self) -> PerformanceEstimate:
        return estimate_performance(self.current_config(), self.performance_tier)

    def snapshot(self) -> dict[str, Any]:
        """Engine state as a plain dictionary (for APIs and logging)."""
        config = self.current_config()
        snapshot = {
            "inputs": self._inputs.model_dump(mode="json"),
            "performance_tier": self.performance_tier.value,
            "config": config.model_dump(mode="json"),
            "css_variables": to_css_variables(config),
            "performance": self.performance_estimate().model_dump(),
            "transition": self.controller.get_snapshot(),
            "auto_transition": self.auto_transition,
            "auto_detect": self.auto_detect,
        }

        if self.weather is not None:
            snapshot["weather"] = self.weather.get_status()

        return snapshot

    # ========================================================================
    # Transitions
    # ========================================================================

    @property
    def transition_state(self) -> TransitionState:
        return self.controller.state

    def _target_inputs(self, target: TransitionTarget) -> EffectInputs:
        if isinstance(target, EffectInputs):
            changes = target.model_dump(exclude_none=True)
            # model_dump turns nested models into dicts
            if target.device is not None:
                changes["device"] = target.device
            return self._inputs.model_copy(update=changes)
        return self._inputs.model_copy(update={"season": parse_season(target)})

    def transition_to(
        self,
        target: TransitionTarget,
        duration: Optional[float] = None,
        easing: Optional[str] = None,
    ) -> Future:
        """
        Animate toward a new season (or a set of inputs).

        An active transition is superseded; the new one starts from the
        config currently on screen.

        Returns:
            Future resolved with True on completion, False if cancelled
            or superseded

        Raises:
            InvalidInputError: Unknown season or time of day
            InvalidTransitionError: duration <= 0 or unknown easing
        """
        target_inputs = self._target_inputs(target)
        to_config = self._resolve(target_inputs)

        superseding = self.controller.is_active

        # Detach the current future so superseding does not restore its inputs
        detached, self._transition_future = self._transition_future, None
        try:
            future = self.controller.start(
                to_config,
                duration if duration is not None else self.transition_duration,
                easing or self.transition_easing,
            )
        except ValueError:
            self._transition_future = detached
            raise

        # A superseding transition keeps the inputs from before the first one
        if not superseding or self._inputs_before_transition is None:
            self._inputs_before_transition = self._inputs
            self._inputs_changed_during_transition = False
        self._inputs = target_inputs
        self._transition_future = future
        future.add_done_callback(self._on_transition_done)

        logger.info(f"Transition to {target_inputs.season.value}/{target_inputs.time_of_day.value}/"
                    f"{target_inputs.weather_condition}")
        return future

    def _on_transition_done(self, future: Future) -> None:
        if future is not self._transition_future:
            return
        self._transition_future = None

        if future.result():
            if self._inputs_changed_during_transition:
                self.controller.set_settled(self._resolve())
        else:
            self._inputs = self._inputs_before_transition or self._inputs
            # Cancelling a superseding transition settles on a mid-blend config
            restored = self._resolve()
            if self.controller.current_config != restored:
                self.controller.set_settled(restored)

        self._inputs_before_transition = None
        self._inputs_changed_during_transition = False

    def cancel_transition(self, reverse: Optional[bool] = None) -> None:
        """Cancel the active transition (no-op when idle)."""
        self.controller.cancel(self.reverse_on_cancel if reverse is None else reverse)

    def pause_transition(self) -> None:
        self.controller.pause()

    def resume_transition(self) -> None:
        self.controller.resume()

    def set_progress(self, progress: float) -> None:
        """Manually pin transition progress (clamped to [0, 1])."""
        self.controller.set_progress(progress)

    def tick(self, now: float) -> EffectConfig:
        """Advance the active transition to host timestamp `now`."""
        return self.controller.tick(now)

    # ========================================================================
    # Automation
    # ========================================================================

    def check_seasonal_boundary(self, now: Optional[datetime] = None) -> Optional[SeasonalBoundary]:
        """
        Transition when `now` is on a boundary into a different season.

        Returns:
            The boundary that triggered a transition, else None
        """
        now = now or datetime.now(timezone.utc)
        boundary = detect_seasonal_boundary(now)

        if boundary is None or boundary.season == self.season:
            return None

        logger.info(f"Seasonal boundary reached: {boundary.label}")
        self.transition_to(boundary.season)
        return boundary

    async def run_auto_transition(self, interval: float = AUTO_TRANSITION_CHECK_INTERVAL) -> None:
        """
        Boundary check loop; the host schedules it as a task.

        Checks immediately, then every `interval` seconds. With
        auto_detect on, also keeps time of day in sync with the clock.
        """
        if not self.auto_transition and not self.auto_detect:
            logger.info("Auto transition disabled")
            return

        logger.info(f"Auto transition started (interval: {interval}s)")
        while True:
            try:
                if self.auto_transition:
                    self.check_seasonal_boundary()
                if self.auto_detect:
                    self.sync_time_of_day()
            except Exception:
                logger.error("Auto transition check failed", exc_info=True)

            await asyncio.sleep(interval)

    def start_auto_transition(self, interval: float = AUTO_TRANSITION_CHECK_INTERVAL) -> asyncio.Task:
        """Schedule run_auto_transition() on the running loop."""
        if self._auto_task is None or self._auto_task.done():
            self._auto_task = asyncio.create_task(self.run_auto_transition(interval), name="AutoTransition")
        return self._auto_task

    def _on_weather_update(self, reading: WeatherReading, suggestion: Optional[ThemeSuggestion]) -> None:
        if reading.condition != self.weather_condition:
            logger.info(f"Weather changed: {self.weather_condition} -> {reading.condition}")
            self.update_weather(reading.condition)

        if self.auto_detect and suggestion is not None and suggestion.season != self.season:
            logger.info(f"Weather suggests {suggestion.season.value} (intensity {suggestion.intensity:.2f})")
            self.transition_to(suggestion.season)

    def shutdown(self) -> None:
        """Stop background work: weather loop, auto-transition task and pending frames."""
        if self.weather is not None:
            self.weather.disable()
        if self._auto_task is not None:
            self._auto_task.cancel()
            self._auto_task = None
        self.controller.cancel(reverse_on_cancel=False)
        logger.info("Engine shut down")


def create_engine(
    season: Union[Season, str, None] = None,
    time_of_day: Union[TimeOfDay, str, None] = None,
    weather_condition: Optional[str] = None,
    device: Optional[DeviceCapability] = None,
    options: Optional[EffectOptions] = None,
    driver: Optional[FrameDriver] = None,
    weather_provider: Optional[WeatherProvider] = None,
    location_provider: Optional[LocationProvider] = None,
    now: Optional[datetime] = None,
    **kwargs,
) -> SeasonalGlassEngine:
    """
    Build an engine.

    Missing season comes from the calendar and missing time of day from
    the clock (or the sun when a location is configured). A weather
    provider enables the weather integration; the host still has to
    call engine.weather.enable() inside its event loop.

    Extra keyword arguments go to SeasonalGlassEngine.
    """
    latitude = kwargs.get("latitude", LOCATION_LATITUDE)
    longitude = kwargs.get("longitude", LOCATION_LONGITUDE)

    inputs = EffectInputs(
        season=parse_season(season) if season is not None else get_current_season(now),
        time_of_day=(
            parse_time_of_day(time_of_day) if time_of_day is not None
            else detect_time_of_day(now, latitude, longitude)
        ),
        weather_condition=weather_condition,
        device=device,
    )

    weather = None
    if weather_provider is not None:
        weather = WeatherIntegration(weather_provider, location_provider=location_provider)

    engine = SeasonalGlassEngine(inputs, options=options, driver=driver, weather=weather, **kwargs)
    logger.info(f"Engine created: {engine.season.value}/{engine.time_of_day.value}/"
                f"{engine.weather_condition}, tier={engine.performance_tier.value}")
    return engine
