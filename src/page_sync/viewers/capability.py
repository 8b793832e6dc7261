"""Viewer capability interface consumed by the sync core."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, FrozenSet, Iterable

from page_sync.surfaces import Surface


def _normalize_operations(operations: Iterable[str]) -> FrozenSet[str]:
    cleaned = frozenset(op.strip() for op in operations if op and op.strip())
    if not cleaned:
        raise ValueError("a viewer needs at least one navigation operation")
    return cleaned


class ViewerCapability(ABC):
    """Navigation, inspection and redisplay operations of one document mode.

    Subclasses describe a concrete viewer. ``navigation_operations`` lists the
    operation ids whose invocation should trigger a synchronization pass.
    """

    mode: str
    navigation_operations: FrozenSet[str]

    @abstractmethod
    def current_page(self, surface: Surface) -> int:
        """Return the 1-based page ``surface`` currently shows."""

    @abstractmethod
    def max_page(self, surface: Surface) -> int:
        """Return the page count of the document shown in ``surface``."""

    @abstractmethod
    def goto_page(self, surface: Surface, page: int) -> None:
        """Move ``surface`` to ``page``."""

    def redisplay(self, surface: Surface, page: int) -> None:
        """Force ``surface`` to repaint after a page change."""

        return None

    def describe(self) -> str:
        ops = ",".join(sorted(self.navigation_operations))
        return f"{type(self).__name__}(mode={self.mode!r}, operations={ops})"


@dataclass(frozen=True)
class CallbackViewer(ViewerCapability):
    """Viewer assembled from plain callables.

    Useful when an integration already exposes page functions and only needs
    to be registered, without writing a subclass.
    """

    mode: str
    navigation_operations: FrozenSet[str]
    read_page: Callable[[Surface], int]
    read_max_page: Callable[[Surface], int]
    navigate: Callable[[Surface, int], None]
    refresh: Callable[[Surface, int], None] | None = None

    def __post_init__(self) -> None:
        if not self.mode:
            raise ValueError("viewer mode cannot be empty")
        object.__setattr__(
            self,
            "navigation_operations",
            _normalize_operations(self.navigation_operations),
        )
        for name in ("read_page", "read_max_page", "navigate"):
            if not callable(getattr(self, name)):
                raise TypeError(f"{name} must be callable")

    def current_page(self, surface: Surface) -> int:
        return self.read_page(surface)

    def max_page(self, surface: Surface) -> int:
        return self.read_max_page(surface)

    def goto_page(self, surface: Surface, page: int) -> None:
        self.navigate(surface, page)

    def redisplay(self, surface: Surface, page: int) -> None:
        if self.refresh is not None:
            self.refresh(surface, page)


__all__ = ["CallbackViewer", "ViewerCapability"]
