"""Viewer capability interface and the per-mode registry."""

from .capability import CallbackViewer, ViewerCapability
from .registry import RegistryStats, ViewerConflictError, ViewerRegistry

__all__ = [
    "CallbackViewer",
    "ViewerCapability",
    "ViewerRegistry",
    "ViewerConflictError",
    "RegistryStats",
]
