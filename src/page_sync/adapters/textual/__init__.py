"""Textual adapter: timer backend, pane host and viewer."""

from .controller import (
    PANE_MODE,
    PaneHost,
    PaneUIHooks,
    PaneViewer,
    TextualPageSyncAdapter,
    TextualTimerBackend,
)

__all__ = [
    "PANE_MODE",
    "PaneHost",
    "PaneUIHooks",
    "PaneViewer",
    "TextualPageSyncAdapter",
    "TextualTimerBackend",
]
