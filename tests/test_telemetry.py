from __future__ import annotations

import pytest

from page_sync.runtime import telemetry


@pytest.fixture(autouse=True)
def reset_config():
    yield
    telemetry.configure()


def test_configure_preset_rebuilds_cached_loggers() -> None:
    telemetry.configure(preset="quiet")
    first = telemetry.get_logger("page_sync.test")
    assert telemetry.get_logger("page_sync.test") is first

    telemetry.configure(preset="QUIET")

    assert telemetry.get_logger("page_sync.test") is not first


def test_unknown_preset_rejected() -> None:
    with pytest.raises(ValueError, match="known: demo, development, quiet"):
        telemetry.configure(preset="verbose")


def test_record_event_rejects_unknown_level() -> None:
    telemetry.configure(preset="quiet")

    with pytest.raises(ValueError):
        telemetry.record_event("sync.test", level="shout")


def test_span_reraises_and_keeps_metadata() -> None:
    telemetry.configure(preset="quiet")

    with pytest.raises(RuntimeError, match="boom"):
        with telemetry.span("sync.test", component="sync", metadata={"mode": "pdf"}) as handle:
            handle.add_metadata("targets", [1, 2])
            raise RuntimeError("boom")

    assert handle.metadata == {"mode": "pdf", "targets": "[1, 2]"}
