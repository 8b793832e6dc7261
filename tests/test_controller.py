from __future__ import annotations

from page_sync.config import SyncSettings
from page_sync.host import MemoryDocument, MemoryHost, MemoryViewer, layout_side_by_side
from page_sync.sync import ManualTimerBackend, NavigationHooks, PageSyncController
from page_sync.viewers import ViewerRegistry


def make_controller(*, auto_enable: bool = True):
    host = MemoryHost()
    hooks = NavigationHooks()
    viewer = MemoryViewer(hooks)
    registry = ViewerRegistry()
    registry.register(viewer)
    backend = ManualTimerBackend()
    controller = PageSyncController(
        host,
        registry,
        hooks=hooks,
        timer_backend=backend,
        settings=SyncSettings(auto_enable=auto_enable),
    )
    return controller, host, viewer, backend


def test_navigation_syncs_enabled_document() -> None:
    controller, host, viewer, backend = make_controller()
    document = MemoryDocument("paper.pdf", 12)
    left, right = layout_side_by_side(host, document, 2)
    assert controller.enable(document) is True

    viewer.next_page(left)
    viewer.next_page(left)

    assert (left.page, right.page) == (3, 4)
    assert controller.last_result is not None
    assert controller.last_result.targets == (3, 4)
    backend.flush()
    assert right.redisplays == [4]


def test_navigating_the_right_window_pulls_the_left_one() -> None:
    controller, host, viewer, _backend = make_controller()
    document = MemoryDocument("paper.pdf", 12)
    left, right = layout_side_by_side(host, document, 2)
    controller.enable(document)

    viewer.goto_page(right, 8)

    assert left.page == 7


def test_disabled_document_is_not_synced() -> None:
    controller, host, viewer, _backend = make_controller()
    document = MemoryDocument("paper.pdf", 12)
    left, right = layout_side_by_side(host, document, 2)
    controller.enable(document)
    controller.disable(document)

    viewer.next_page(left)

    assert right.page == 1
    assert controller.hooks.is_installed(viewer.mode) is False


def test_hooks_stay_while_another_buffer_of_the_mode_is_enabled() -> None:
    controller, host, viewer, _backend = make_controller()
    first = MemoryDocument("a.pdf", 5)
    second = MemoryDocument("b.pdf", 5)
    a_left, a_right = layout_side_by_side(host, first, 2)
    b_left, b_right = layout_side_by_side(host, second, 2)
    controller.enable(first)
    controller.enable(second)
    controller.disable(first)

    viewer.next_page(a_left)
    viewer.next_page(b_left)

    assert controller.hooks.is_installed(viewer.mode)
    assert a_right.page == 1
    assert b_right.page == 3


def test_toggle_flips_state() -> None:
    controller, _host, _viewer, _backend = make_controller()
    document = MemoryDocument("paper.pdf", 3)

    assert controller.toggle(document) is True
    assert controller.is_enabled(document)
    assert controller.toggle(document) is False
    assert not controller.is_enabled(document)


def test_enable_unsupported_mode_returns_false() -> None:
    controller, _host, _viewer, _backend = make_controller()
    document = MemoryDocument("notes.txt", 3, mode="text")

    assert controller.enable(document) is False
    assert controller.auto_enable(document) is False
    assert controller.stats().hooked_modes == ()


def test_auto_enable_respects_settings() -> None:
    controller, _host, _viewer, _backend = make_controller(auto_enable=False)
    document = MemoryDocument("paper.pdf", 3)

    assert controller.auto_enable(document) is False
    assert not controller.is_enabled(document)


def test_auto_enable_registered_mode() -> None:
    controller, _host, viewer, _backend = make_controller()
    document = MemoryDocument("paper.pdf", 3)

    assert controller.auto_enable(document) is True
    assert controller.auto_enable(document) is True
    assert controller.stats().enabled_buffers == 1
    assert controller.stats().hooked_modes == (viewer.mode,)


def test_resync_lines_up_new_window() -> None:
    controller, host, _viewer, _backend = make_controller()
    document = MemoryDocument("paper.pdf", 12)
    left = host.open_window(document, left=0, page=6)
    controller.enable(document)
    right = host.open_window(document, left=80)

    result = controller.resync(left)

    assert result.synced
    assert right.page == 7


def test_shutdown_clears_everything() -> None:
    controller, host, viewer, backend = make_controller()
    document = MemoryDocument("paper.pdf", 12)
    left, _right = layout_side_by_side(host, document, 2)
    controller.enable(document)
    viewer.next_page(left)
    assert controller.stats().pending_redisplays == 1

    controller.shutdown()

    stats = controller.stats()
    assert stats.enabled_buffers == 0
    assert stats.hooked_modes == ()
    assert stats.pending_redisplays == 0
    assert backend.flush() == 0


def test_closed_window_does_not_trigger() -> None:
    controller, host, viewer, _backend = make_controller()
    document = MemoryDocument("paper.pdf", 12)
    left, middle, right = layout_side_by_side(host, document, 3)
    controller.enable(document)
    host.close_window(middle)

    viewer.goto_page(left, 5)

    assert right.page == 6
    assert middle.page == 1
