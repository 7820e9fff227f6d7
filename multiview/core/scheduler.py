"""
Cooperative timers for notification auto-expiry.

Nothing here uses threads. A scheduler only decides *when* a callback is due;
the owning event loop (asyncio, a Dash interval tick, or a test calling
advance()) decides when due callbacks actually run.
"""

from __future__ import annotations

import asyncio
import heapq
import itertools
import time
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional, Protocol, Tuple


Callback = Callable[[], None]


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callback) -> Any: ...

    def cancel(self, handle: Any) -> None: ...


class TimerQueue(ABC):
    """
    Due-time queue shared by the polling schedulers.

    - call_later() queues a callback at now() + delay
    - run_due() runs everything due at now(); the host decides when to call it
    - cancel() of an unknown / already-fired handle is a no-op
    """

    def __init__(self) -> None:
        self._seq = itertools.count()
        self._queue: List[Tuple[float, int]] = []
        self._callbacks: Dict[int, Callback] = {}

    @abstractmethod
    def now(self) -> float:
        raise NotImplementedError

    def call_later(self, delay: float, callback: Callback) -> int:
        handle = next(self._seq)
        self._callbacks[handle] = callback
        heapq.heappush(self._queue, (self.now() + max(delay, 0.0), handle))
        return handle

    def cancel(self, handle: Any) -> None:
        self._callbacks.pop(handle, None)

    def pending(self) -> int:
        return len(self._callbacks)

    def run_due(self) -> int:
        """Run every callback due at the current clock. Returns how many ran."""
        ran = 0
        now = self.now()
        while self._queue and self._queue[0][0] <= now:
            _, handle = heapq.heappop(self._queue)
            callback = self._callbacks.pop(handle, None)
            if callback is None:
                continue
            callback()
            ran += 1
        return ran


class ManualScheduler(TimerQueue):
    """Virtual clock: advance(seconds) moves time forward and runs what fell due."""

    def __init__(self, start: float = 0.0) -> None:
        super().__init__()
        self._now = start

    def now(self) -> float:
        return self._now

    def advance(self, seconds: float) -> int:
        self._now += seconds
        return self.run_due()


class PollingScheduler(TimerQueue):
    """
    Wall-clock queue for hosts that poll. Time is never advanced by hand:
    the host (a Dash dcc.Interval tick) calls run_due().
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        super().__init__()
        self._clock = clock

    def now(self) -> float:
        return self._clock()


class AsyncioScheduler:
    """Delegates to an asyncio event loop's call_later."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def call_later(self, delay: float, callback: Callback) -> asyncio.TimerHandle:
        return self.loop.call_later(delay, callback)

    def cancel(self, handle: Any) -> None:
        if handle is not None:
            handle.cancel()
