"""Textual adapter pieces that do not import Textual itself.

Panes are duck-typed: anything exposing ``document``, ``page``, ``region``
(with ``x``/``y``), ``is_attached`` and ``render_page(page)`` works, which lets
the tests drive the adapter without a running terminal app.
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Callable, Iterator, List, Optional, Sequence

from page_sync.config import SyncSettings
from page_sync.host.memory import MemoryDocument
from page_sync.surfaces import Position
from page_sync.sync import NavigationHooks, PageSyncController, SyncResult
from page_sync.viewers import ViewerCapability, ViewerRegistry

PANE_MODE = "textual-pane"


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


class _TimerHandle:
    def __init__(self, timer: Any) -> None:
        self._timer = timer

    def cancel(self) -> None:
        self._timer.stop()


class TextualTimerBackend:
    """Runs redisplay callbacks through ``App.set_timer``."""

    def __init__(self, app: Any) -> None:
        self.app = app

    def call_later(self, delay: float, callback: Callable[[], None]) -> _TimerHandle:
        return _TimerHandle(self.app.set_timer(delay, callback))


class PaneHost:
    """``SurfaceHost`` over the page panes currently mounted in an app."""

    def __init__(self, panes: Callable[[], Sequence[Any]]) -> None:
        self._panes = panes
        self.selected: Optional[Any] = None

    def surfaces_for(self, buffer: MemoryDocument) -> List[Any]:
        return [pane for pane in self._panes() if pane.document is buffer]

    def buffer_of(self, surface: Any) -> MemoryDocument:
        return surface.document

    def mode_of(self, buffer: MemoryDocument) -> str:
        return buffer.mode

    def position(self, surface: Any) -> Position:
        region = surface.region
        return (region.x, region.y)

    def is_live(self, surface: Any) -> bool:
        return bool(surface.is_attached)

    @contextmanager
    def activate(self, surface: Any) -> Iterator[Any]:
        previous = self.selected
        self.selected = surface
        try:
            yield surface
        finally:
            self.selected = previous


class PaneViewer(ViewerCapability):
    """Viewer capability for page panes."""

    navigation_operations = frozenset(
        {"next_page", "previous_page", "first_page", "last_page", "goto_page"}
    )

    def __init__(self, hooks: NavigationHooks, *, mode: str = PANE_MODE) -> None:
        self.hooks = hooks
        self.mode = mode

    def current_page(self, surface: Any) -> int:
        return surface.page

    def max_page(self, surface: Any) -> int:
        return surface.document.page_count

    def goto_page(self, surface: Any, page: int) -> None:
        self.hooks.run(self.mode, "goto_page", surface, self._set_page, page)

    def navigate(self, surface: Any, operation: str) -> None:
        pages = {
            "next_page": surface.page + 1,
            "previous_page": surface.page - 1,
            "first_page": 1,
            "last_page": surface.document.page_count,
        }
        if operation not in pages:
            raise ValueError(f"Unknown navigation operation '{operation}'")
        self.hooks.run(self.mode, operation, surface, self._set_page, pages[operation])

    def redisplay(self, surface: Any, page: int) -> None:
        surface.render_page(page)

    @staticmethod
    def _set_page(surface: Any, page: int) -> None:
        surface.page = max(1, min(surface.document.page_count, page))
        surface.render_page(surface.page)


@dataclass(slots=True)
class PaneUIHooks:
    """Callbacks the adapter uses to update the hosting app."""

    update_status: Callable[[str], None] = _noop
    log: Callable[[str], None] = _noop


class TextualPageSyncAdapter:
    """Bridges pane key actions to the page sync controller."""

    def __init__(
        self,
        app: Any,
        panes: Callable[[], Sequence[Any]],
        hooks: PaneUIHooks | None = None,
        *,
        settings: SyncSettings | None = None,
    ) -> None:
        self.ui = hooks or PaneUIHooks()
        self.navigation_hooks = NavigationHooks()
        self.viewer = PaneViewer(self.navigation_hooks)
        self.registry = ViewerRegistry(logger_name="page_sync.textual")
        self.registry.register(self.viewer)
        self.host = PaneHost(panes)
        self.controller = PageSyncController(
            self.host,
            self.registry,
            hooks=self.navigation_hooks,
            timer_backend=TextualTimerBackend(app),
            settings=settings,
            logger_name="page_sync.textual",
        )
        self._seen_documents: set[Any] = set()

    def pane_opened(self, pane: Any) -> Optional[SyncResult]:
        """Line ``pane`` up with its siblings.

        The first pane shown for a document auto-enables sync for it. Later
        panes only resync, so a document the user toggled off stays off.
        """

        document = pane.document
        if document not in self._seen_documents:
            self._seen_documents.add(document)
            self.controller.auto_enable(document)
        if not self.controller.is_enabled(document):
            self._log_state("open ->", pane=pane, enabled=False)
            return None
        result = self.controller.resync(pane)
        self._after_result(result)
        return result

    def pane_split(self, pane: Any) -> Optional[SyncResult]:
        """Resync from ``pane`` after a sibling was split off it."""

        return self.pane_opened(pane)

    def pane_closed(self, pane: Any) -> None:
        self.controller.scheduler.cancel(pane)
        self._log_state("close ->", pane=pane)

    def navigate(self, pane: Any, operation: str) -> Optional[SyncResult]:
        self._log_state("nav ->", pane=pane, operation=operation)
        before = self.controller.last_result
        self.viewer.navigate(pane, operation)
        result = self.controller.last_result
        if result is before:
            self.ui.update_status(f"page {pane.page}/{pane.document.page_count}")
            return None
        self._after_result(result)
        return result

    def toggle(self, pane: Any) -> bool:
        enabled = self.controller.toggle(pane.document)
        self.ui.update_status("sync on" if enabled else "sync off")
        if enabled:
            self._after_result(self.controller.resync(pane))
        return enabled

    def _after_result(self, result: Optional[SyncResult]) -> None:
        if result is None:
            return
        if result.synced:
            pages = " ".join(str(page) for page in result.targets)
            self.ui.update_status(f"sync [{pages}]")
        else:
            self.ui.update_status(f"sync skipped: {result.status}")
        self._log_state(
            "result <-",
            status=result.status,
            moved=len(result.moved),
            failures=len(result.failures) or None,
        )

    def _log_state(self, prefix: str, **fields: object) -> None:
        stats = self.controller.stats()
        snapshot: dict[str, object] = {
            "enabled": stats.enabled_buffers,
            "pending": stats.pending_redisplays,
        }
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.ui.log(" ".join(parts))


__all__ = [
    "PANE_MODE",
    "PaneHost",
    "PaneUIHooks",
    "PaneViewer",
    "TextualPageSyncAdapter",
    "TextualTimerBackend",
]
