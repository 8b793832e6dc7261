from __future__ import annotations

import pytest

from page_sync.viewers import (
    CallbackViewer,
    ViewerCapability,
    ViewerConflictError,
    ViewerRegistry,
)


def make_viewer(mode: str = "pdf-view", **overrides) -> CallbackViewer:
    pages = {"w1": 2}
    options = dict(
        mode=mode,
        navigation_operations={"next_page", " goto_page "},
        read_page=pages.__getitem__,
        read_max_page=lambda surface: 10,
        navigate=pages.__setitem__,
    )
    options.update(overrides)
    return CallbackViewer(**options)


def test_register_and_lookup() -> None:
    registry = ViewerRegistry()
    viewer = make_viewer()

    registry.register(viewer)

    assert registry.lookup("pdf-view") is viewer
    assert registry.get("doc-view") is None
    assert "pdf-view" in registry
    assert registry.stats().viewer_count == 1


def test_duplicate_mode_conflicts() -> None:
    registry = ViewerRegistry()
    registry.register(make_viewer())

    with pytest.raises(ViewerConflictError):
        registry.register(make_viewer())


def test_replace_swaps_viewer() -> None:
    registry = ViewerRegistry()
    registry.register(make_viewer())
    replacement = make_viewer()

    registry.register(replacement, replace=True)

    assert registry.lookup("pdf-view") is replacement
    assert registry.revision() == 2


def test_unregister_and_unknown_lookup() -> None:
    registry = ViewerRegistry()
    registry.register(make_viewer())
    registry.register(make_viewer("doc-view"))

    assert registry.unregister("pdf-view") is not None
    assert registry.unregister("pdf-view") is None
    assert registry.modes() == ("doc-view",)
    with pytest.raises(KeyError):
        registry.lookup("pdf-view")


def test_callback_viewer_delegates() -> None:
    refreshed: list[tuple[str, int]] = []
    viewer = make_viewer(refresh=lambda surface, page: refreshed.append((surface, page)))

    viewer.goto_page("w1", 5)
    viewer.redisplay("w1", 5)

    assert viewer.current_page("w1") == 5
    assert viewer.max_page("w1") == 10
    assert viewer.navigation_operations == frozenset({"next_page", "goto_page"})
    assert refreshed == [("w1", 5)]


def test_callback_viewer_validation() -> None:
    with pytest.raises(ValueError):
        make_viewer(mode="")
    with pytest.raises(ValueError):
        make_viewer(navigation_operations=())
    with pytest.raises(TypeError):
        make_viewer(navigate="not callable")


class FixedViewer(ViewerCapability):
    mode = "fixed"
    navigation_operations = frozenset({"next_page"})

    def __init__(self) -> None:
        self.pages = {"w1": 1}

    def current_page(self, surface):
        return self.pages[surface]

    def max_page(self, surface):
        return 3

    def goto_page(self, surface, page):
        self.pages[surface] = page


def test_default_redisplay_is_a_no_op() -> None:
    viewer = FixedViewer()
    viewer.goto_page("w1", 2)

    assert viewer.redisplay("w1", 2) is None
    assert viewer.pages == {"w1": 2}
    assert viewer.describe() == "FixedViewer(mode='fixed', operations=next_page)"
