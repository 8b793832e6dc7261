from __future__ import annotations

import pytest

pytest.importorskip("textual")

from page_sync.adapters.textual import app as demo  # noqa: E402
from page_sync.runtime import telemetry  # noqa: E402


def test_parse_args_accepts_log_preset(monkeypatch) -> None:
    monkeypatch.delenv("PAGE_SYNC_LOG_PRESET", raising=False)

    args = demo._parse_args(["--pages", "8", "--log-preset", "quiet"])

    assert (args.pages, args.log_preset) == (8, "quiet")
    assert demo._parse_args([]).log_preset is None


def test_parse_args_rejects_unknown_preset() -> None:
    with pytest.raises(SystemExit):
        demo._parse_args(["--log-preset", "loud"])


def test_main_configures_preset_before_running(monkeypatch) -> None:
    calls: list[object] = []
    monkeypatch.setattr(telemetry, "configure", lambda **kwargs: calls.append(kwargs))
    monkeypatch.setattr(demo.PageSyncApp, "run", lambda self: calls.append(("run", self.document.page_count)))

    demo.main(["--pages", "6", "--log-preset", "development"])

    assert calls == [{"preset": "development"}, ("run", 6)]
