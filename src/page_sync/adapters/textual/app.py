"""Executable Textual app showing synchronized page panes."""

from __future__ import annotations

import argparse
import os
from typing import List, Optional, Sequence

try:  # pragma: no cover - imported only when demo is run
    from textual.app import App, ComposeResult
    from textual.containers import Horizontal
    from textual.widgets import Footer, Header, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use page_sync.adapters.textual.app"
    ) from exc

from page_sync.config import SyncSettings
from page_sync.host.memory import MemoryDocument
from page_sync.runtime import telemetry

from .controller import PANE_MODE, PaneUIHooks, TextualPageSyncAdapter


class PagePane(Static):
    """One window onto the shared document."""

    can_focus = True

    DEFAULT_CSS = """
    PagePane {
        width: 1fr;
        height: 1fr;
        border: round $primary;
        content-align: center middle;
    }

    PagePane:focus {
        border: double $accent;
    }
    """

    def __init__(self, document: MemoryDocument, *, page: int = 1) -> None:
        super().__init__("")
        self.document = document
        self.page = page

    def on_mount(self) -> None:
        self.render_page(self.page)

    def render_page(self, page: int) -> None:
        self.update(f"{self.document.name}\n\npage {page} / {self.document.page_count}")


class PageSyncApp(App[None]):
    """Side-by-side panes kept one page apart."""

    CSS = """
	#panes {
		height: 1fr;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("n", "navigate('next_page')", "Next"),
        ("p", "navigate('previous_page')", "Previous"),
        ("home", "navigate('first_page')", "First"),
        ("end", "navigate('last_page')", "Last"),
        ("s", "split", "Split"),
        ("x", "close_pane", "Close"),
        ("t", "toggle_sync", "Toggle sync"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, *, pages: int = 24, panes: int = 2) -> None:
        super().__init__()
        self.document = MemoryDocument("document", pages, mode=PANE_MODE)
        self._initial_panes = max(1, panes)
        self.adapter: TextualPageSyncAdapter | None = None
        self._status_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Horizontal(id="panes"):
            for _ in range(self._initial_panes):
                yield PagePane(self.document)
        self._status_widget = Static("", id="status-line")
        yield self._status_widget
        yield Footer()

    def on_mount(self) -> None:
        log = telemetry.get_logger("page_sync.textual")
        self.adapter = TextualPageSyncAdapter(
            self,
            self._panes,
            PaneUIHooks(update_status=self._update_status, log=log.debug),
            settings=SyncSettings.from_env(),
        )
        panes = self._panes()
        if panes:
            panes[0].focus()
            self.call_after_refresh(self.adapter.pane_opened, panes[0])

    def _panes(self) -> List[PagePane]:
        return list(self.query(PagePane))

    def _focused_pane(self) -> Optional[PagePane]:
        if isinstance(self.focused, PagePane):
            return self.focused
        panes = self._panes()
        return panes[0] if panes else None

    def action_navigate(self, operation: str) -> None:
        pane = self._focused_pane()
        if self.adapter and pane is not None:
            self.adapter.navigate(pane, operation)

    async def action_split(self) -> None:
        current = self._focused_pane()
        pane = PagePane(self.document, page=current.page if current else 1)
        await self.query_one("#panes", Horizontal).mount(pane)
        if self.adapter and current is not None:
            self.call_after_refresh(self.adapter.pane_split, current)

    async def action_close_pane(self) -> None:
        pane = self._focused_pane()
        if pane is None or len(self._panes()) == 1:
            return
        if self.adapter:
            self.adapter.pane_closed(pane)
        await pane.remove()

    def action_toggle_sync(self) -> None:
        pane = self._focused_pane()
        if self.adapter and pane is not None:
            self.adapter.toggle(pane)

    def _update_status(self, status: str) -> None:
        if self._status_widget:
            self._status_widget.update(status)


def _env_int(key: str, fallback: int) -> int:
    value = os.environ.get(key)
    if value is None:
        return fallback
    try:
        return int(value)
    except ValueError:
        return fallback


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the page sync Textual demo.")
    parser.add_argument(
        "--pages",
        type=int,
        default=_env_int("PAGE_SYNC_DEMO_PAGES", 24),
        help="Page count of the synthetic document (default: 24)",
    )
    parser.add_argument(
        "--panes",
        type=int,
        default=_env_int("PAGE_SYNC_DEMO_PANES", 2),
        help="Number of panes opened at start (default: 2)",
    )
    parser.add_argument(
        "--log-preset",
        choices=sorted(telemetry.PRESETS),
        default=os.environ.get("PAGE_SYNC_LOG_PRESET"),
        help="Logging preset; PAGE_SYNC_LOG_* variables apply when omitted",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    if args.log_preset:
        telemetry.configure(preset=args.log_preset)
    app = PageSyncApp(pages=args.pages, panes=args.panes)
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
