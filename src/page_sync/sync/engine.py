"""One synchronization pass: preconditions, ordering, targets, apply loop."""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import partial
from typing import Literal, Optional, Tuple

from page_sync.runtime import telemetry
from page_sync.surfaces import Surface, SurfaceHost, order_surfaces
from page_sync.viewers import ViewerCapability, ViewerRegistry

from .guard import SurfaceFailure, SyncGuard
from .scheduler import RedisplayScheduler
from .targets import compute_targets

SyncStatus = Literal[
    "ok",
    "unsupported_mode",
    "insufficient_surfaces",
    "trigger_not_found",
]


@dataclass(slots=True)
class SyncResult:
    """Outcome of :meth:`PageSynchronizer.sync`."""

    status: SyncStatus
    mode: Optional[str] = None
    targets: Tuple[int, ...] = ()
    moved: Tuple[Tuple[Surface, int], ...] = ()
    skipped: Tuple[Surface, ...] = ()
    failures: Tuple[SurfaceFailure, ...] = field(default_factory=tuple)

    @property
    def synced(self) -> bool:
        return self.status == "ok"


class PageSynchronizer:
    """Moves every other surface of a document onto the staircase.

    The pass is synchronous. Page changes go through the viewer's
    ``goto_page``; hooks for the viewer's mode stay disabled while that happens
    so the navigation does not start another pass.
    """

    def __init__(
        self,
        host: SurfaceHost,
        viewers: ViewerRegistry,
        guard: SyncGuard,
        scheduler: RedisplayScheduler,
        *,
        logger_name: str | None = "page_sync.sync",
    ) -> None:
        self.host = host
        self.viewers = viewers
        self.guard = guard
        self.scheduler = scheduler
        self._logger_name = logger_name

    def sync(self, surface: Surface) -> SyncResult:
        buffer = self.host.buffer_of(surface)
        mode = self.host.mode_of(buffer)
        viewer = self.viewers.get(mode)
        if viewer is None:
            return self._skip("unsupported_mode", mode, surface)

        surfaces = [item for item in self.host.surfaces_for(buffer) if self.host.is_live(item)]
        if len(surfaces) < 2:
            return self._skip("insufficient_surfaces", mode, surface)

        ordered = order_surfaces(surfaces, self.host.position)
        try:
            trigger_index = ordered.index(surface)
        except ValueError:
            return self._skip("trigger_not_found", mode, surface)

        with telemetry.span(
            "sync::pass",
            logger_name=self._logger_name,
            component="sync",
            metadata={"mode": mode, "surfaces": len(ordered)},
        ) as handle:
            current_page = viewer.current_page(surface)
            max_page = viewer.max_page(surface)
            targets = compute_targets(ordered, trigger_index, current_page, max_page)
            handle.add_metadata("targets", targets)
            moved, skipped, failures = self._apply(
                viewer, mode, ordered, trigger_index, targets
            )
            handle.add_metadata("moved", len(moved))
            if failures:
                handle.add_metadata("failures", len(failures))

        return SyncResult(
            status="ok",
            mode=mode,
            targets=tuple(targets),
            moved=tuple(moved),
            skipped=tuple(skipped),
            failures=tuple(failures),
        )

    def _apply(
        self,
        viewer: ViewerCapability,
        mode: str,
        ordered: list[Surface],
        trigger_index: int,
        targets: list[int],
    ) -> tuple[list[tuple[Surface, int]], list[Surface], list[SurfaceFailure]]:
        moved: list[tuple[Surface, int]] = []
        skipped: list[Surface] = []
        with self.guard.suspended(mode) as failures:
            for index, (target_surface, target) in enumerate(zip(ordered, targets)):
                if index == trigger_index:
                    continue
                if not self.host.is_live(target_surface):
                    skipped.append(target_surface)
                    continue
                with self.guard.isolate(target_surface, failures):
                    if viewer.current_page(target_surface) == target:
                        continue
                    viewer.goto_page(target_surface, target)
                    moved.append((target_surface, target))
                    self.scheduler.schedule(
                        target_surface, partial(viewer.redisplay, target_surface), target
                    )
        return moved, skipped, failures

    def _skip(self, status: SyncStatus, mode: str, surface: Surface) -> SyncResult:
        telemetry.record_event(
            "sync.skip",
            level="debug",
            data={"reason": status, "mode": mode, "surface": surface},
            logger_name=self._logger_name,
        )
        return SyncResult(status=status, mode=mode)


__all__ = ["PageSynchronizer", "SyncResult", "SyncStatus"]
