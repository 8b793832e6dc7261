"""Reference host implementations."""

from .memory import (
    MemoryDocument,
    MemoryHost,
    MemoryViewer,
    MemoryWindow,
    layout_side_by_side,
)

__all__ = [
    "MemoryDocument",
    "MemoryHost",
    "MemoryViewer",
    "MemoryWindow",
    "layout_side_by_side",
]
