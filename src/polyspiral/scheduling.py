"""
Frame scheduling - "run this before the next repaint", plus a throttle.

The host repaints at its own native cadence. Work is handed to it as short
callbacks through FrameScheduler.request_frame(); nothing blocks and there
is no parallelism. Callbacks run strictly in the order they were requested.

A callback requested while a frame is running waits for the next frame,
like a browser's requestAnimationFrame. Already-queued callbacks cannot be
revoked; cancellation is up to the callback itself.

FrameThrottle sits on top: hosts may repaint faster than the logical step
rate, so the driver asks the throttle whether a full frame interval has
elapsed before doing any work.
"""

import asyncio
import logging
import time
from abc import ABC, abstractmethod
from collections import deque
from typing import Callable, Deque, Optional

logger = logging.getLogger(__name__)

FrameCallback = Callable[[], None]


class FrameScheduler(ABC):
    """Abstract repaint scheduling primitive."""

    @abstractmethod
    def request_frame(self, callback: FrameCallback) -> None:
        """Invoke callback before the next repaint."""
        pass


class QueuedFrameScheduler(FrameScheduler):
    """FIFO queue of frame callbacks, drained one frame at a time.

    Whoever owns the repaint loop calls run_frame() once per repaint. Tests
    call it (or run_next()) directly.
    """

    def __init__(self):
        self._pending: Deque[FrameCallback] = deque()
        self.frames_run: int = 0

    @property
    def pending(self) -> int:
        """Number of callbacks waiting for a frame."""
        return len(self._pending)

    def request_frame(self, callback: FrameCallback) -> None:
        self._pending.append(callback)

    def run_frame(self) -> int:
        """Run every callback that was pending when the frame started.

        Returns how many ran.
        """
        batch = len(self._pending)
        for _ in range(batch):
            self._pending.popleft()()
        self.frames_run += 1
        return batch

    def run_next(self) -> bool:
        """Run only the oldest pending callback. Returns False if none was queued."""
        if not self._pending:
            return False
        self._pending.popleft()()
        return True

    def clear(self) -> None:
        """Drop all pending callbacks."""
        self._pending.clear()


class AsyncioFrameScheduler(QueuedFrameScheduler):
    """Queued scheduler whose frames fire on an asyncio loop at native_hz.

    A timer is armed only while callbacks are pending, so an idle driver
    leaves the loop idle. A callback that raises is logged and the rest of
    the queue runs on the following repaints.
    """

    def __init__(self, native_hz: float = 60.0, loop: Optional[asyncio.AbstractEventLoop] = None):
        super().__init__()
        if native_hz <= 0:
            raise ValueError(f"native_hz must be positive, got {native_hz}")
        self.native_hz = native_hz
        self._loop = loop
        self._handle: Optional[asyncio.TimerHandle] = None

    def request_frame(self, callback: FrameCallback) -> None:
        super().request_frame(callback)
        self._arm()

    def _arm(self) -> None:
        if self._handle is None:
            loop = self._loop or asyncio.get_running_loop()
            self._handle = loop.call_later(1.0 / self.native_hz, self._on_repaint)

    def _on_repaint(self) -> None:
        self._handle = None
        try:
            self.run_frame()
        except Exception:
            # Callbacks behind the failing one stay queued for the next repaint
            logger.exception("Frame callback failed")
        finally:
            if self._pending:
                self._arm()

    def close(self) -> None:
        """Cancel the armed timer and drop pending callbacks."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        self.clear()


class FrameThrottle:
    """Paces logical ticks to a target rate independent of the repaint rate.

    ready() is True when at least one frame interval has elapsed since the
    last executed tick. The reference time is re-based to
    now - (elapsed % interval) so late ticks do not accumulate drift.
    """

    def __init__(self, fps: float = 60.0, clock: Callable[[], float] = time.monotonic):
        if fps <= 0:
            raise ValueError(f"fps must be positive, got {fps}")
        self.fps = fps
        self._clock = clock
        self._then: Optional[float] = None

    @property
    def interval(self) -> float:
        """Seconds per logical frame."""
        return 1.0 / self.fps

    def ready(self) -> bool:
        now = self._clock()
        if self._then is None:
            self._then = now
            return True

        elapsed = now - self._then
        if elapsed >= self.interval:
            self._then = now - (elapsed % self.interval)
            return True
        return False

    def reset(self) -> None:
        """Forget the last tick; the next ready() call passes."""
        self._then = None
