"""Tests for the asyncio frame driver."""

import asyncio

import pytest

from seasonal_glass.drivers import AsyncioFrameDriver
from seasonal_glass.transitions import TransitionController, TransitionPhase


class TestAsyncioFrameDriver:
    """Tests for loop-scheduled frames."""

    def test_invalid_fps(self):
        """Should reject non-positive frame rates."""
        with pytest.raises(ValueError):
            AsyncioFrameDriver(fps=0)

    @pytest.mark.asyncio
    async def test_request_frame_passes_loop_time(self):
        """Should call back with the loop clock."""
        driver = AsyncioFrameDriver(fps=100)
        loop = asyncio.get_running_loop()
        stamps = []

        before = loop.time()
        driver.request_frame(stamps.append)
        await asyncio.sleep(0.05)

        assert len(stamps) == 1
        assert stamps[0] >= before

    @pytest.mark.asyncio
    async def test_cancel_frame(self):
        """Should drop a cancelled callback."""
        driver = AsyncioFrameDriver(fps=100)
        stamps = []

        handle = driver.request_frame(stamps.append)
        driver.cancel_frame(handle)
        await asyncio.sleep(0.05)

        assert stamps == []

    @pytest.mark.asyncio
    async def test_drives_transition_to_completion(self, spring_config, winter_config):
        """Should run a transition to the end without manual ticks."""
        driver = AsyncioFrameDriver(fps=100)
        controller = TransitionController(initial_config=spring_config, driver=driver)

        future = controller.start(winter_config, duration=0.05, easing="linear")
        completed = await asyncio.wait_for(asyncio.wrap_future(future), timeout=2.0)

        assert completed is True
        assert controller.state.phase == TransitionPhase.IDLE
        assert controller.current_config == winter_config
