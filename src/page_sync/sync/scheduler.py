"""Debounced, per-surface redisplay after a surface changed page."""

from __future__ import annotations

import asyncio
import heapq
import time
from contextlib import nullcontext
from dataclasses import dataclass, field
from typing import Callable, ContextManager, Dict, List, Optional, Protocol

from page_sync.runtime import telemetry
from page_sync.surfaces import Surface


class TimerHandle(Protocol):
    def cancel(self) -> None:
        ...


class TimerBackend(Protocol):
    """Anything able to run a zero-argument callback after ``delay`` seconds."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        ...


@dataclass(order=True)
class ManualTimer:
    deadline: float
    generation: int
    callback: Callable[[], None] = field(compare=False)
    cancelled: bool = field(default=False, compare=False)

    def cancel(self) -> None:
        self.cancelled = True


class ManualTimerBackend:
    """Deadline queue driven by the host calling :meth:`process_due`.

    Headless hosts poll it from their event loop; tests use :meth:`flush` to
    fire everything that is still pending.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._queue: List[ManualTimer] = []
        self._timer_counter = 0

    def call_later(self, delay: float, callback: Callable[[], None]) -> ManualTimer:
        self._timer_counter += 1
        timer = ManualTimer(
            deadline=self._clock() + delay,
            generation=self._timer_counter,
            callback=callback,
        )
        heapq.heappush(self._queue, timer)
        return timer

    @property
    def pending_count(self) -> int:
        return sum(1 for timer in self._queue if not timer.cancelled)

    def process_due(self, now: Optional[float] = None) -> int:
        """Fire every live timer whose deadline has passed; returns the count."""

        current = self._clock() if now is None else now
        fired = 0
        while self._queue and self._queue[0].deadline <= current:
            timer = heapq.heappop(self._queue)
            if timer.cancelled:
                continue
            timer.callback()
            fired += 1
        return fired

    def flush(self) -> int:
        """Fire all live timers regardless of their deadline."""

        fired = 0
        while self._queue:
            timer = heapq.heappop(self._queue)
            if timer.cancelled:
                continue
            timer.callback()
            fired += 1
        return fired


class AsyncioTimerBackend:
    """Schedules redisplays on an asyncio event loop."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        self._loop = loop

    def call_later(
        self, delay: float, callback: Callable[[], None]
    ) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay, callback)


@dataclass(slots=True)
class PendingRedisplay:
    surface: Surface
    page: int
    handle: TimerHandle
    generation: int


class RedisplayScheduler:
    """Owns at most one pending redisplay timer per surface.

    Scheduling again for a surface cancels the older timer, so only the most
    recent page is ever delivered. A surface that is no longer live when its
    timer fires is dropped silently.
    """

    def __init__(
        self,
        backend: TimerBackend,
        *,
        delay_ms: float = 1.0,
        is_live: Callable[[Surface], bool] = lambda _surface: True,
        activate: Callable[[Surface], ContextManager[object]] | None = None,
        logger_name: str | None = None,
    ) -> None:
        if delay_ms < 0:
            raise ValueError("delay_ms cannot be negative")
        self.backend = backend
        self.delay_ms = delay_ms
        self._is_live = is_live
        self._activate = activate or (lambda _surface: nullcontext())
        self._logger_name = logger_name
        self._pending: Dict[Surface, PendingRedisplay] = {}
        self._generation = 0

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def pending(self, surface: Surface) -> Optional[PendingRedisplay]:
        return self._pending.get(surface)

    def schedule(
        self, surface: Surface, redisplay_fn: Callable[[int], object], page: int
    ) -> PendingRedisplay:
        self.cancel(surface)
        self._generation += 1
        generation = self._generation
        handle = self.backend.call_later(
            self.delay_ms / 1000.0,
            lambda: self._fire(surface, redisplay_fn, page, generation),
        )
        entry = PendingRedisplay(
            surface=surface, page=page, handle=handle, generation=generation
        )
        self._pending[surface] = entry
        return entry

    def cancel(self, surface: Surface) -> bool:
        entry = self._pending.pop(surface, None)
        if entry is None:
            return False
        entry.handle.cancel()
        return True

    def cancel_all(self) -> int:
        surfaces = list(self._pending)
        for surface in surfaces:
            self.cancel(surface)
        return len(surfaces)

    def _fire(
        self,
        surface: Surface,
        redisplay_fn: Callable[[int], object],
        page: int,
        generation: int,
    ) -> None:
        entry = self._pending.get(surface)
        if entry is None or entry.generation != generation:
            return
        del self._pending[surface]
        if not self._is_live(surface):
            telemetry.record_event(
                "redisplay.dropped",
                level="debug",
                data={"surface": surface, "page": page},
                logger_name=self._logger_name,
            )
            return
        try:
            with self._activate(surface):
                redisplay_fn(page)
        except Exception as exc:
            telemetry.record_event(
                "redisplay.failed",
                level="warning",
                data={"surface": surface, "page": page, "error": repr(exc)},
                logger_name=self._logger_name,
            )


__all__ = [
    "AsyncioTimerBackend",
    "ManualTimer",
    "ManualTimerBackend",
    "PendingRedisplay",
    "RedisplayScheduler",
    "TimerBackend",
    "TimerHandle",
]
