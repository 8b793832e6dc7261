"""Headless host keeping windows and documents in plain Python objects."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
from itertools import count
from typing import Iterator, List, Optional, Sequence

from page_sync.surfaces import Position, SurfaceGoneError
from page_sync.sync.guard import NavigationHooks
from page_sync.viewers import ViewerCapability

_window_ids = count(1)


@dataclass(eq=False)
class MemoryDocument:
    """Paginated document shown by one or more windows."""

    name: str
    page_count: int
    mode: str = "memory-view"

    def __post_init__(self) -> None:
        if self.page_count < 1:
            raise ValueError("page_count must be >= 1")

    def __hash__(self) -> int:
        return id(self)

    def __repr__(self) -> str:
        return f"MemoryDocument({self.name!r}, pages={self.page_count})"


@dataclass(eq=False)
class MemoryWindow:
    """Window showing a document at a screen offset."""

    document: MemoryDocument
    left: int = 0
    top: int = 0
    page: int = 1
    live: bool = True
    id: int = field(default_factory=lambda: next(_window_ids))
    redisplays: List[int] = field(default_factory=list)

    def __hash__(self) -> int:
        return self.id

    def __repr__(self) -> str:
        return f"MemoryWindow#{self.id}(page={self.page}, at={self.left},{self.top})"


class MemoryHost:
    """In-process window manager implementing the ``SurfaceHost`` protocol."""

    def __init__(self) -> None:
        self.windows: List[MemoryWindow] = []
        self.selected: Optional[MemoryWindow] = None

    def open_window(
        self, document: MemoryDocument, *, left: int = 0, top: int = 0, page: int = 1
    ) -> MemoryWindow:
        window = MemoryWindow(document=document, left=left, top=top, page=page)
        self.windows.append(window)
        if self.selected is None:
            self.selected = window
        return window

    def close_window(self, window: MemoryWindow) -> None:
        window.live = False
        if window in self.windows:
            self.windows.remove(window)
        if self.selected is window:
            self.selected = self.windows[0] if self.windows else None

    def surfaces_for(self, buffer: MemoryDocument) -> Sequence[MemoryWindow]:
        return [window for window in self.windows if window.document is buffer]

    def buffer_of(self, surface: MemoryWindow) -> MemoryDocument:
        return surface.document

    def mode_of(self, buffer: MemoryDocument) -> str:
        return buffer.mode

    def position(self, surface: MemoryWindow) -> Position:
        return (surface.left, surface.top)

    def is_live(self, surface: MemoryWindow) -> bool:
        return surface.live

    @contextmanager
    def activate(self, surface: MemoryWindow) -> Iterator[MemoryWindow]:
        previous = self.selected
        self.selected = surface
        try:
            yield surface
        finally:
            self.selected = previous if previous is None or previous.live else None


class MemoryViewer(ViewerCapability):
    """Viewer for :class:`MemoryDocument` windows.

    Every navigation goes through ``hooks.run`` so that the sync hooks see it,
    exactly like a user-issued page turn.
    """

    navigation_operations = frozenset(
        {"next_page", "previous_page", "first_page", "last_page", "goto_page"}
    )

    def __init__(self, hooks: NavigationHooks, *, mode: str = "memory-view") -> None:
        self.hooks = hooks
        self.mode = mode

    def current_page(self, surface: MemoryWindow) -> int:
        self._require_live(surface)
        return surface.page

    def max_page(self, surface: MemoryWindow) -> int:
        return surface.document.page_count

    def goto_page(self, surface: MemoryWindow, page: int) -> None:
        self.hooks.run(self.mode, "goto_page", surface, self._set_page, page)

    def next_page(self, surface: MemoryWindow) -> None:
        self.hooks.run(
            self.mode, "next_page", surface, self._set_page, surface.page + 1
        )

    def previous_page(self, surface: MemoryWindow) -> None:
        self.hooks.run(
            self.mode, "previous_page", surface, self._set_page, surface.page - 1
        )

    def first_page(self, surface: MemoryWindow) -> None:
        self.hooks.run(self.mode, "first_page", surface, self._set_page, 1)

    def last_page(self, surface: MemoryWindow) -> None:
        self.hooks.run(
            self.mode, "last_page", surface, self._set_page, surface.document.page_count
        )

    def redisplay(self, surface: MemoryWindow, page: int) -> None:
        self._require_live(surface)
        surface.redisplays.append(page)

    def _set_page(self, surface: MemoryWindow, page: int) -> None:
        self._require_live(surface)
        surface.page = max(1, min(surface.document.page_count, page))

    @staticmethod
    def _require_live(surface: MemoryWindow) -> None:
        if not surface.live:
            raise SurfaceGoneError(f"{surface!r} was closed", surface=surface)


def layout_side_by_side(
    host: MemoryHost, document: MemoryDocument, total: int, *, width: int = 80
) -> List[MemoryWindow]:
    """Open ``total`` windows on ``document`` laid out left to right."""

    return [host.open_window(document, left=index * width) for index in range(total)]


__all__ = [
    "MemoryDocument",
    "MemoryHost",
    "MemoryViewer",
    "MemoryWindow",
    "layout_side_by_side",
]
