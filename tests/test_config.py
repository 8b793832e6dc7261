from __future__ import annotations

import pytest

from page_sync.config import SyncSettings


def test_defaults() -> None:
    settings = SyncSettings()

    assert settings.redisplay_delay_ms == 1.0
    assert settings.redisplay_delay == pytest.approx(0.001)
    assert settings.auto_enable is True


def test_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PAGE_SYNC_REDISPLAY_DELAY_MS", "15")
    monkeypatch.setenv("PAGE_SYNC_AUTO_ENABLE", "off")

    settings = SyncSettings.from_env()

    assert settings.redisplay_delay_ms == 15.0
    assert settings.auto_enable is False


def test_from_env_rejects_garbage(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PAGE_SYNC_REDISPLAY_DELAY_MS", "soon")

    with pytest.raises(ValueError):
        SyncSettings.from_env()


def test_negative_delay_rejected() -> None:
    with pytest.raises(ValueError):
        SyncSettings(redisplay_delay_ms=-2)
    with pytest.raises(ValueError):
        SyncSettings().with_changes(redisplay_delay_ms=-1)
