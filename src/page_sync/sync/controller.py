"""Per-document toggle wiring navigation hooks to the synchronizer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Set

from page_sync.config import SyncSettings
from page_sync.runtime import telemetry
from page_sync.surfaces import Buffer, Surface, SurfaceHost
from page_sync.viewers import ViewerRegistry

from .engine import PageSynchronizer, SyncResult
from .guard import NavigationHooks, SyncGuard
from .scheduler import ManualTimerBackend, RedisplayScheduler, TimerBackend


@dataclass(slots=True)
class ControllerStats:
    enabled_buffers: int
    hooked_modes: tuple[str, ...]
    pending_redisplays: int


class PageSyncController:
    """Enables page sync per buffer and reacts to navigation events.

    A mode's hooks are installed while at least one of its buffers is enabled
    and removed when the last one is disabled. Navigation in a buffer that is
    not enabled is ignored even when the mode is hooked.
    """

    def __init__(
        self,
        host: SurfaceHost,
        viewers: ViewerRegistry,
        *,
        hooks: NavigationHooks | None = None,
        timer_backend: TimerBackend | None = None,
        settings: SyncSettings | None = None,
        logger_name: str | None = "page_sync.controller",
    ) -> None:
        self.host = host
        self.viewers = viewers
        self.settings = settings or SyncSettings.from_env()
        self.hooks = hooks or NavigationHooks()
        self.guard = SyncGuard(self.hooks, logger_name=logger_name)
        self.scheduler = RedisplayScheduler(
            timer_backend or ManualTimerBackend(),
            delay_ms=self.settings.redisplay_delay_ms,
            is_live=host.is_live,
            activate=host.activate,
            logger_name=logger_name,
        )
        self.synchronizer = PageSynchronizer(
            host, viewers, self.guard, self.scheduler, logger_name=logger_name
        )
        self._enabled: Dict[str, Set[Buffer]] = {}
        self._logger_name = logger_name
        self.last_result: Optional[SyncResult] = None

    def is_enabled(self, buffer: Buffer) -> bool:
        mode = self.host.mode_of(buffer)
        return buffer in self._enabled.get(mode, ())

    def enable(self, buffer: Buffer) -> bool:
        """Turn sync on for ``buffer``; ``False`` when its mode is unsupported."""

        mode = self.host.mode_of(buffer)
        viewer = self.viewers.get(mode)
        if viewer is None:
            return False
        buffers = self._enabled.setdefault(mode, set())
        buffers.add(buffer)
        if not self.hooks.is_installed(mode):
            self.hooks.install(mode, viewer.navigation_operations, self._on_navigation)
        telemetry.record_event(
            "sync.enable",
            data={"mode": mode, "buffer": buffer},
            logger_name=self._logger_name,
        )
        return True

    def disable(self, buffer: Buffer) -> bool:
        mode = self.host.mode_of(buffer)
        buffers = self._enabled.get(mode)
        if not buffers or buffer not in buffers:
            return False
        buffers.discard(buffer)
        for surface in self.host.surfaces_for(buffer):
            self.scheduler.cancel(surface)
        if not buffers:
            del self._enabled[mode]
            self.hooks.remove(mode)
        telemetry.record_event(
            "sync.disable",
            data={"mode": mode, "buffer": buffer},
            logger_name=self._logger_name,
        )
        return True

    def toggle(self, buffer: Buffer) -> bool:
        """Flip the toggle; returns whether sync is now on."""

        if self.is_enabled(buffer):
            self.disable(buffer)
            return False
        return self.enable(buffer)

    def auto_enable(self, buffer: Buffer) -> bool:
        """Host hook for a buffer becoming visible."""

        if not self.settings.auto_enable:
            return False
        if self.is_enabled(buffer):
            return True
        return self.enable(buffer)

    def resync(self, surface: Surface) -> SyncResult:
        """Run a pass from ``surface`` without waiting for a navigation."""

        result = self.synchronizer.sync(surface)
        self.last_result = result
        return result

    def shutdown(self) -> None:
        for mode in list(self._enabled):
            self.hooks.remove(mode)
        self._enabled.clear()
        self.scheduler.cancel_all()

    def stats(self) -> ControllerStats:
        return ControllerStats(
            enabled_buffers=sum(len(buffers) for buffers in self._enabled.values()),
            hooked_modes=self.hooks.modes(),
            pending_redisplays=self.scheduler.pending_count,
        )

    def _on_navigation(self, surface: Surface, operation: str) -> None:
        if not self.host.is_live(surface):
            return
        buffer = self.host.buffer_of(surface)
        if not self.is_enabled(buffer):
            return
        telemetry.record_event(
            "sync.navigation",
            level="debug",
            data={"operation": operation, "surface": surface},
            logger_name=self._logger_name,
        )
        self.last_result = self.synchronizer.sync(surface)


__all__ = ["ControllerStats", "PageSyncController"]
