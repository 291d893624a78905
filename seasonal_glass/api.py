"""
HTTP API for the seasonal glass engine.

IMPORTANT:
- Must run with ONE worker (engine state lives in this process)
"""

import asyncio
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, HTTPException, APIRouter
from pydantic import BaseModel, Field

from seasonal_glass.boundaries import get_next_seasonal_boundary, get_seasonal_boundaries
from seasonal_glass.config import (
    AUTO_TRANSITION,
    AUTO_TRANSITION_CHECK_INTERVAL,
    LOG_LEVEL,
    MOCK_MODE,
    WEATHER_ENABLED,
)
from seasonal_glass.drivers import AsyncioFrameDriver
from seasonal_glass.engine import SeasonalGlassEngine, create_engine
from seasonal_glass.errors import InvalidInputError, InvalidTransitionError
from seasonal_glass.logger import logger
from seasonal_glass.models import DeviceCapability, EffectInputs, Season, TimeOfDay
from seasonal_glass.performance import classify_tier, estimate_performance
from seasonal_glass.resolver import resolve_inputs, to_css_variables

# Conditional imports based on MOCK_MODE
if MOCK_MODE:
    logger.info("🎭 MOCK MODE ENABLED - Using simulated weather")
    from seasonal_glass.mock_weather import MockWeatherProvider, MockLocationProvider


# ============================================================================
# Engine initialization
# ============================================================================

def build_engine() -> SeasonalGlassEngine:
    """Create the process engine, with simulated weather in mock mode."""
    weather_provider = None
    location_provider = None

    if MOCK_MODE:
        weather_provider = MockWeatherProvider()
        location_provider = MockLocationProvider()
    elif WEATHER_ENABLED:
        logger.warning("WEATHER_ENABLED=true but no weather provider is configured (set MOCK_MODE=true)")

    return create_engine(
        driver=AsyncioFrameDriver(),
        weather_provider=weather_provider,
        location_provider=location_provider,
    )


engine = build_engine()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    FastAPI lifespan context manager.

    Starts the weather refresh loop and the seasonal boundary check on
    startup. Stops both on shutdown.
    """
    logger.info("Seasonal glass engine starting up")
    logger.info(f"Configuration: LOG_LEVEL={LOG_LEVEL}, MOCK_MODE={MOCK_MODE}, "
                f"WEATHER_ENABLED={WEATHER_ENABLED}, AUTO_TRANSITION={AUTO_TRANSITION}")

    weather_task = None
    if WEATHER_ENABLED and engine.weather is not None:
        weather_task = engine.weather.enable()

    auto_task = None
    if AUTO_TRANSITION:
        auto_task = engine.start_auto_transition(AUTO_TRANSITION_CHECK_INTERVAL)
        logger.info(f"Seasonal boundary checks started (interval: {AUTO_TRANSITION_CHECK_INTERVAL}s)")

    # App is running
    yield

    # Shutdown sequence
    logger.info("Starting graceful shutdown...")
    engine.shutdown()

    # 1. Stop weather refresh
    if weather_task:
        try:
            await weather_task
        except asyncio.CancelledError:
            logger.info("Weather refresh stopped")

    # 2. Stop boundary checks
    if auto_task:
        try:
            await auto_task
        except asyncio.CancelledError:
            logger.info("Seasonal boundary checks stopped")

    logger.info("Shutdown complete")


# ============================================================================
# FastAPI App
# ============================================================================

app = FastAPI(
    title="Seasonal Glass API",
    lifespan=lifespan,
    redoc_url=None,
    docs_url="/docs"
)

transition_router = APIRouter(
    prefix="/transition",
    tags=["Transitions"]
)


# ------------------------------------------------------------------

class TransitionRequest(BaseModel):
    season: Optional[Season] = Field(None, description="Target season (default: current)")
    time_of_day: Optional[TimeOfDay] = Field(None, description="Target time of day (default: current)")
    weather_condition: Optional[str] = Field(None, description="Target weather (default: current)")
    duration: Optional[float] = Field(None, description="Duration in seconds (default: TRANSITION_DURATION)")
    easing: Optional[str] = Field(None, description="linear, ease-in-out, spring or cubic-bezier")


class CancelRequest(BaseModel):
    reverse: Optional[bool] = Field(None, description="Animate back instead of snapping (default: REVERSE_ON_CANCEL)")


class ProgressRequest(BaseModel):
    progress: float = Field(..., description="Manual progress, clamped to 0.0-1.0")


class InputsRequest(BaseModel):
    season: Optional[Season] = None
    time_of_day: Optional[TimeOfDay] = None
    weather_condition: Optional[str] = None
    device: Optional[DeviceCapability] = None


# ============================================================================
# Effect endpoints
# ============================================================================

@app.get("/effect")
async def get_effect(
    season: Optional[Season] = None,
    time_of_day: Optional[TimeOfDay] = None,
    weather_condition: Optional[str] = None,
    supports_gpu: Optional[bool] = None,
    max_particles: Optional[int] = None,
    target_fps: Optional[int] = None,
    memory_limit_mb: Optional[float] = None,
):
    """
    Resolve an effect config for the given inputs.

    Missing season/time/weather use the engine's current inputs. Device
    fields, when any is given, describe the device (others default).

    Returns:
        {
            "config": {...},
            "css_variables": {"--seasonal-blur": "0.56px", ...},
            "performance_tier": "standard",
            "performance": {"expected_fps": 45, ...}
        }
    """
    device_fields = {
        "supports_gpu": supports_gpu,
        "max_particles": max_particles,
        "target_fps": target_fps,
        "memory_limit_mb": memory_limit_mb,
    }
    device_fields = {k: v for k, v in device_fields.items() if v is not None}

    try:
        device = DeviceCapability(**device_fields) if device_fields else engine.device
        inputs = EffectInputs(
            season=season,
            time_of_day=time_of_day,
            weather_condition=weather_condition or engine.weather_condition,
            device=device,
        )
        config = resolve_inputs(
            inputs,
            default_season=engine.season,
            default_time_of_day=engine.time_of_day,
            options=engine.options,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    tier = classify_tier(device) if device is not None else engine.performance_tier
    return {
        "config": config.model_dump(mode="json"),
        "css_variables": to_css_variables(config),
        "performance_tier": tier.value,
        "performance": estimate_performance(config, tier).model_dump(),
    }


@app.get("/effect/css")
async def get_effect_css():
    """Current (possibly interpolated) config as CSS custom properties."""
    return engine.css_variables()


@app.get("/state")
async def get_state():
    """Full engine snapshot: inputs, config, transition and weather status."""
    return engine.snapshot()


@app.post("/inputs")
async def set_inputs(req: InputsRequest):
    """Update engine inputs without animating."""
    if req.season is not None:
        engine.update_season(req.season)
    if req.time_of_day is not None:
        engine.update_time_of_day(req.time_of_day)
    if req.weather_condition is not None:
        engine.update_weather(req.weather_condition)
    if req.device is not None:
        engine.update_device(req.device)

    return engine.snapshot()


# ============================================================================
# Weather endpoints
# ============================================================================

@app.get("/weather")
async def get_weather():
    """Cached weather reading, integration status and weather glass effect."""
    if engine.weather is None:
        raise HTTPException(status_code=503, detail="Weather integration not enabled")

    status = engine.weather.get_status()
    status["glass_effect"] = engine.weather.glass_effect.model_dump()
    return status


@app.post("/weather/refresh")
async def refresh_weather():
    """Fetch weather now. Failures degrade to the cached/fallback reading."""
    if engine.weather is None:
        raise HTTPException(status_code=503, detail="Weather integration not enabled")

    reading = await engine.weather.refresh()
    return {
        "reading": reading.model_dump(),
        "weather_condition": engine.weather_condition,
    }


# ============================================================================
# Seasonal boundary endpoints
# ============================================================================

@app.get("/boundaries/next")
async def get_next_boundary(date: Optional[datetime] = None):
    """Next equinox/solstice after `date` (default: now)."""
    boundary = get_next_seasonal_boundary(date or datetime.now(timezone.utc))
    if boundary is None:
        raise HTTPException(status_code=404, detail="No upcoming seasonal boundary")
    return boundary.model_dump(mode="json")


@app.get("/boundaries/{year}")
async def get_boundaries(year: int):
    """The four seasonal boundaries of a year."""
    if not 1 <= year <= 9998:
        raise HTTPException(status_code=400, detail=f"Year out of range: {year}")

    return {
        "year": year,
        "boundaries": [b.model_dump(mode="json") for b in get_seasonal_boundaries(year)],
    }


# ============================================================================
# Transition endpoints
# ============================================================================

@transition_router.post("")
async def start_transition(req: TransitionRequest):
    """
    Start a transition toward new inputs (supersedes an active one).

    Example:
        POST /transition {"season": "winter", "duration": 2.0, "easing": "ease-in-out"}
    """
    target = EffectInputs(
        season=req.season,
        time_of_day=req.time_of_day,
        weather_condition=req.weather_condition,
    )

    try:
        engine.transition_to(target, duration=req.duration, easing=req.easing)
    except (InvalidInputError, InvalidTransitionError) as e:
        raise HTTPException(status_code=400, detail=str(e))

    return engine.controller.get_snapshot()


@transition_router.post("/pause")
async def pause_transition():
    engine.pause_transition()
    return engine.controller.get_snapshot()


@transition_router.post("/resume")
async def resume_transition():
    engine.resume_transition()
    return engine.controller.get_snapshot()


@transition_router.post("/cancel")
async def cancel_transition(req: Optional[CancelRequest] = None):
    """Cancel the active transition (no-op when idle)."""
    engine.cancel_transition(reverse=req.reverse if req else None)
    return engine.controller.get_snapshot()


@transition_router.post("/progress")
async def set_transition_progress(req: ProgressRequest):
    """Pin transition progress manually."""
    engine.set_progress(req.progress)
    return engine.controller.get_snapshot()


app.include_router(transition_router)
