"""
Frame driver backed by the asyncio event loop.

Calls back at ANIMATION_FPS with loop.time() as the timestamp, the
asyncio counterpart of a browser's requestAnimationFrame.
"""

import asyncio
from typing import Callable, Optional

from seasonal_glass.config import ANIMATION_FPS


class AsyncioFrameDriver:
    """FrameDriver that schedules callbacks with loop.call_later()."""

    def __init__(self, fps: int = ANIMATION_FPS, loop: Optional[asyncio.AbstractEventLoop] = None):
        if fps <= 0:
            raise ValueError(f"fps must be positive, got {fps}")
        self.frame_interval = 1.0 / fps
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        """Explicit loop, else the loop running the caller."""
        return self._loop or asyncio.get_running_loop()

    def now(self) -> float:
        return self.loop.time()

    def request_frame(self, callback: Callable[[float], None]) -> asyncio.TimerHandle:
        loop = self.loop
        return loop.call_later(self.frame_interval, lambda: callback(loop.time()))

    def cancel_frame(self, handle: asyncio.TimerHandle) -> None:
        handle.cancel()
