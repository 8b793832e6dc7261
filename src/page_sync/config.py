"""Runtime settings read from ``PAGE_SYNC_*`` environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Optional

ENV_PREFIX = "PAGE_SYNC_"
DEFAULT_REDISPLAY_DELAY_MS = 1.0


def env_value(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}", default)


def env_flag(name: str, default: bool) -> bool:
    raw = env_value(name)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True, slots=True)
class SyncSettings:
    """Tunables shared by the controller and the redisplay scheduler."""

    redisplay_delay_ms: float = DEFAULT_REDISPLAY_DELAY_MS
    auto_enable: bool = True

    def __post_init__(self) -> None:
        if self.redisplay_delay_ms < 0:
            raise ValueError("redisplay_delay_ms cannot be negative")

    @property
    def redisplay_delay(self) -> float:
        """Delay in seconds, as timer backends expect it."""

        return self.redisplay_delay_ms / 1000.0

    def with_changes(self, **changes: object) -> "SyncSettings":
        return replace(self, **changes)

    @classmethod
    def from_env(cls) -> "SyncSettings":
        raw_delay = env_value("REDISPLAY_DELAY_MS")
        try:
            delay = float(raw_delay) if raw_delay else DEFAULT_REDISPLAY_DELAY_MS
        except ValueError as exc:
            raise ValueError(
                f"{ENV_PREFIX}REDISPLAY_DELAY_MS must be a number, got {raw_delay!r}"
            ) from exc
        return cls(
            redisplay_delay_ms=delay,
            auto_enable=env_flag("AUTO_ENABLE", True),
        )


__all__ = ["ENV_PREFIX", "SyncSettings", "env_flag", "env_value"]
