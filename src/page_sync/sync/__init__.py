"""Target computation, re-entrancy guard, redisplay scheduling and the sync pass."""

from .controller import ControllerStats, PageSyncController
from .engine import PageSynchronizer, SyncResult
from .guard import HookEntry, NavigationHooks, SurfaceFailure, SyncGuard
from .scheduler import (
    AsyncioTimerBackend,
    ManualTimerBackend,
    PendingRedisplay,
    RedisplayScheduler,
    TimerBackend,
)
from .targets import InvalidPageRangeError, compute_targets

__all__ = [
    "AsyncioTimerBackend",
    "ControllerStats",
    "HookEntry",
    "InvalidPageRangeError",
    "ManualTimerBackend",
    "NavigationHooks",
    "PageSyncController",
    "PageSynchronizer",
    "PendingRedisplay",
    "RedisplayScheduler",
    "SurfaceFailure",
    "SyncGuard",
    "SyncResult",
    "TimerBackend",
    "compute_targets",
]
