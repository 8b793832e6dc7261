"""Keep windows showing one paginated document on consecutive pages."""

from .config import SyncSettings
from .sync import PageSyncController, PageSynchronizer, SyncResult
from .viewers import CallbackViewer, ViewerCapability, ViewerRegistry

__all__ = [
    "adapters",
    "host",
    "runtime",
    "surfaces",
    "sync",
    "viewers",
    "CallbackViewer",
    "PageSyncController",
    "PageSynchronizer",
    "SyncResult",
    "SyncSettings",
    "ViewerCapability",
    "ViewerRegistry",
]

__version__ = "0.1.0"
