"""Adapter boundary types describing what the sync core asks of a host."""

from __future__ import annotations

from typing import ContextManager, Hashable, Protocol, Sequence, Tuple

Surface = Hashable
Buffer = Hashable
Position = Tuple[int, int]  # (left, top)


class SurfaceHost(Protocol):
    """Protocol a host editor/UI implements so windows can be synchronized.

    Surfaces and buffers are opaque handles owned by the host. The core never
    creates or destroys them; it only lists, inspects and activates them.
    """

    def surfaces_for(self, buffer: Buffer) -> Sequence[Surface]:
        """Return the surfaces currently displaying ``buffer``."""
        ...

    def buffer_of(self, surface: Surface) -> Buffer:
        """Return the buffer ``surface`` displays."""
        ...

    def mode_of(self, buffer: Buffer) -> str:
        """Return the document-mode identifier of ``buffer``."""
        ...

    def position(self, surface: Surface) -> Position:
        """Return the ``(left, top)`` screen offset of ``surface``."""
        ...

    def is_live(self, surface: Surface) -> bool:
        """Return ``False`` once ``surface`` has been closed by the host."""
        ...

    def activate(self, surface: Surface) -> ContextManager[object]:
        """Make ``surface`` the active context for the duration of the block."""
        ...


class SurfaceGoneError(RuntimeError):
    """Raised by hosts when an operation targets a surface that was closed."""

    def __init__(self, message: str, *, surface: Surface | None = None) -> None:
        super().__init__(message)
        self.surface = surface


__all__ = ["Buffer", "Position", "Surface", "SurfaceGoneError", "SurfaceHost"]
