"""Frame schedulers that drive simulation ticks.

All schedulers run callbacks on a single thread: either the asyncio event
loop that owns the view, or whoever calls ``ManualFrameScheduler.advance``.
Pointer handlers dispatched on that same thread can therefore never
interleave with a tick.
"""

import asyncio
import logging
from collections.abc import Callable
from typing import Protocol

from ideagraph.config import settings

logger = logging.getLogger(__name__)

FrameCallback = Callable[[], None]


class FrameHandle(Protocol):
    """Handle for a requested frame."""

    def cancel(self) -> None: ...


class FrameScheduler(Protocol):
    """Anything that can call back once on the next display frame."""

    def request_frame(self, callback: FrameCallback) -> FrameHandle: ...


class _ManualHandle:
    def __init__(self, callback: FrameCallback) -> None:
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualFrameScheduler:
    """
    Scheduler advanced explicitly by the host.

    Used for headless layout and in tests: each ``advance()`` runs the
    callbacks requested before it started, i.e. one display frame.
    """

    def __init__(self) -> None:
        self._queue: list[_ManualHandle] = []
        self.frames = 0

    def request_frame(self, callback: FrameCallback) -> _ManualHandle:
        handle = _ManualHandle(callback)
        self._queue.append(handle)
        return handle

    @property
    def pending(self) -> int:
        return sum(1 for h in self._queue if not h.cancelled)

    def advance(self, frames: int = 1) -> int:
        """Run up to ``frames`` frames. Returns the number of callbacks run."""
        ran = 0
        for _ in range(frames):
            batch, self._queue = self._queue, []
            live = [h for h in batch if not h.cancelled]
            if not live:
                break
            self.frames += 1
            for handle in live:
                handle.callback()
                ran += 1
        return ran

    def run_until_idle(self, max_frames: int = 10_000) -> int:
        """Advance until nothing is scheduled. Returns frames run."""
        start = self.frames
        while self.pending and self.frames - start < max_frames:
            self.advance()
        return self.frames - start


class AsyncioFrameScheduler:
    """Schedules frames on an asyncio event loop at a fixed frame rate."""

    def __init__(
        self,
        loop: asyncio.AbstractEventLoop | None = None,
        frame_rate: float | None = None,
    ) -> None:
        self._loop = loop
        self.frame_rate = frame_rate or settings.frame_rate

    @property
    def interval(self) -> float:
        return 1.0 / self.frame_rate

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def request_frame(self, callback: FrameCallback) -> asyncio.TimerHandle:
        return self.loop.call_later(self.interval, callback)
