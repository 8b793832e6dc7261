"""Registry mapping document-mode identifiers to viewer capabilities."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, Optional

from page_sync.runtime.telemetry import span

from .capability import ViewerCapability


@dataclass(slots=True)
class RegistryStats:
    """Lightweight snapshot describing registry state."""

    viewer_count: int
    modes: tuple[str, ...]
    revision: int


class ViewerConflictError(RuntimeError):
    """Raised when a mode already has a viewer and ``replace`` was not given."""

    def __init__(self, viewer: ViewerCapability, existing: ViewerCapability):
        super().__init__(
            f"Mode '{viewer.mode}' already served by {existing.describe()}"
        )
        self.viewer = viewer
        self.existing = existing


class ViewerRegistry:
    """Owns the one-viewer-per-mode table the sync core dispatches through."""

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._viewers: Dict[str, ViewerCapability] = {}
        self._logger_name = logger_name
        self._revision = 0

    def revision(self) -> int:
        return self._revision

    def register(
        self, viewer: ViewerCapability, *, replace: bool = False
    ) -> ViewerCapability:
        with span(
            "viewers::register",
            logger_name=self._logger_name,
            component="viewers",
            metadata={"mode": getattr(viewer, "mode", "")},
        ) as handle:
            mode = getattr(viewer, "mode", "")
            if not mode:
                raise ValueError("viewer mode cannot be empty")
            if not viewer.navigation_operations:
                raise ValueError(
                    f"Viewer for mode '{mode}' declares no navigation operations"
                )
            existing = self._viewers.get(mode)
            if existing is not None and existing is not viewer and not replace:
                handle.add_metadata("conflict", existing.describe())
                raise ViewerConflictError(viewer, existing)
            self._viewers[mode] = viewer
            self._revision += 1
            return viewer

    def unregister(self, mode: str) -> Optional[ViewerCapability]:
        with span(
            "viewers::unregister",
            logger_name=self._logger_name,
            component="viewers",
            metadata={"mode": mode},
        ):
            viewer = self._viewers.pop(mode, None)
            if viewer is not None:
                self._revision += 1
            return viewer

    def get(self, mode: str) -> Optional[ViewerCapability]:
        return self._viewers.get(mode)

    def lookup(self, mode: str) -> ViewerCapability:
        try:
            return self._viewers[mode]
        except KeyError as exc:
            raise KeyError(f"No viewer registered for mode '{mode}'") from exc

    def modes(self) -> tuple[str, ...]:
        return tuple(sorted(self._viewers))

    def __contains__(self, mode: object) -> bool:
        return mode in self._viewers

    def __iter__(self) -> Iterator[ViewerCapability]:
        return iter(list(self._viewers.values()))

    def __len__(self) -> int:
        return len(self._viewers)

    def stats(self) -> RegistryStats:
        return RegistryStats(
            viewer_count=len(self._viewers),
            modes=self.modes(),
            revision=self._revision,
        )


__all__ = ["RegistryStats", "ViewerConflictError", "ViewerRegistry"]
