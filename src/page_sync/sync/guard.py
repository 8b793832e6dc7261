"""Navigation hook table and the re-entrancy guard around sync passes."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Callable, Dict, FrozenSet, Iterable, Iterator, List, TypeVar

from page_sync.runtime import telemetry
from page_sync.surfaces import Surface

T = TypeVar("T")

NavigationCallback = Callable[[Surface, str], object]


@dataclass(slots=True)
class HookEntry:
    """Callback installed on the navigation operations of one mode."""

    mode: str
    operations: FrozenSet[str]
    callback: NavigationCallback
    enabled: bool = True


@dataclass(slots=True)
class SurfaceFailure:
    """Error captured while applying a page to one surface."""

    surface: Surface
    error: Exception
    stage: str = "apply"


class NavigationHooks:
    """Per-mode after-navigation hooks.

    Viewers report every navigation they perform through :meth:`run` (or
    :meth:`notify`). When a hook is installed and enabled for the viewer's
    mode, its callback fires with the surface and the operation id.
    """

    def __init__(self) -> None:
        self._entries: Dict[str, HookEntry] = {}

    def install(
        self, mode: str, operations: Iterable[str], callback: NavigationCallback
    ) -> HookEntry:
        if not mode:
            raise ValueError("hook mode cannot be empty")
        entry = HookEntry(mode=mode, operations=frozenset(operations), callback=callback)
        self._entries[mode] = entry
        telemetry.record_event(
            "hooks.install",
            level="debug",
            data={"mode": mode, "operations": sorted(entry.operations)},
        )
        return entry

    def remove(self, mode: str) -> bool:
        removed = self._entries.pop(mode, None) is not None
        if removed:
            telemetry.record_event("hooks.remove", level="debug", data={"mode": mode})
        return removed

    def is_installed(self, mode: str) -> bool:
        return mode in self._entries

    def is_enabled(self, mode: str) -> bool:
        entry = self._entries.get(mode)
        return entry is not None and entry.enabled

    def set_enabled(self, mode: str, enabled: bool) -> bool:
        """Flip the enabled flag; returns the previous value."""

        entry = self._entries.get(mode)
        if entry is None:
            return False
        previous = entry.enabled
        entry.enabled = enabled
        return previous

    def modes(self) -> tuple[str, ...]:
        return tuple(sorted(self._entries))

    def notify(self, mode: str, operation: str, surface: Surface) -> bool:
        """Fire the hook for ``mode`` if ``operation`` is one it tracks."""

        entry = self._entries.get(mode)
        if entry is None or not entry.enabled or operation not in entry.operations:
            return False
        entry.callback(surface, operation)
        return True

    def run(
        self,
        mode: str,
        operation: str,
        surface: Surface,
        func: Callable[..., T],
        *args: object,
        **kwargs: object,
    ) -> T:
        """Perform a navigation with ``func`` and then notify the hook."""

        result = func(surface, *args, **kwargs)
        self.notify(mode, operation, surface)
        return result


class SyncGuard:
    """Disables a mode's navigation hooks while a sync pass moves surfaces."""

    def __init__(self, hooks: NavigationHooks, *, logger_name: str | None = None) -> None:
        self.hooks = hooks
        self._logger_name = logger_name
        self._active: set[str] = set()

    def is_active(self, mode: str) -> bool:
        return mode in self._active

    @contextmanager
    def suspended(self, mode: str) -> Iterator[List[SurfaceFailure]]:
        """Run the block with ``mode``'s hooks disabled.

        Yields the list that :meth:`isolate` appends per-surface failures to.
        The hooks are enabled again on every exit path, including errors
        escaping the block.
        """

        if mode in self._active:
            raise RuntimeError(f"Sync pass for mode '{mode}' is already running")
        self._active.add(mode)
        self.hooks.set_enabled(mode, False)
        failures: List[SurfaceFailure] = []
        try:
            yield failures
        finally:
            self.hooks.set_enabled(mode, True)
            self._active.discard(mode)

    @contextmanager
    def isolate(
        self,
        surface: Surface,
        failures: List[SurfaceFailure],
        *,
        stage: str = "apply",
    ) -> Iterator[None]:
        """Capture an ``Exception`` raised for one surface instead of propagating."""

        try:
            yield
        except Exception as exc:
            failures.append(SurfaceFailure(surface=surface, error=exc, stage=stage))
            telemetry.record_event(
                "sync.surface_failed",
                level="warning",
                data={"surface": surface, "stage": stage, "error": repr(exc)},
                logger_name=self._logger_name,
            )


__all__ = [
    "HookEntry",
    "NavigationCallback",
    "NavigationHooks",
    "SurfaceFailure",
    "SyncGuard",
]
