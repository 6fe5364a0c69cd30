"""
Textual console hosting the command palette.

Pages themselves are out of scope here: the page view shows which route is
active so navigation from the palette is visible.
"""

from __future__ import annotations

import logging

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.widgets import Footer, Header, Static

from servdesk.auth.session import RoleContext, SessionStore
from servdesk.navigation.router import Router
from servdesk.services.api_client import BackendClient

from .command_palette import CommandPaletteScreen, PaletteSession, RemoteFanout

logger = logging.getLogger(__name__)


class PageView(Vertical):
    """Shows the active route."""

    DEFAULT_CSS = """
    PageView {
        padding: 1 2;
    }

    #page-title {
        text-style: bold;
    }

    #page-path {
        color: $text-muted;
    }
    """

    def compose(self) -> ComposeResult:
        yield Static("", id="page-title")
        yield Static("", id="page-path")
        yield Static("[dim]Press Ctrl+K to search[/dim]", id="page-hint")

    def show(self, title: str, path: str) -> None:
        self.query_one("#page-title", Static).update(title)
        self.query_one("#page-path", Static).update(path)


class ServdeskApp(App[None]):
    """Service desk console."""

    TITLE = "servdesk"
    ENABLE_COMMAND_PALETTE = False

    BINDINGS = [
        Binding("ctrl+k", "open_palette", "Search", priority=True),
    ]

    def __init__(
        self,
        role_context: RoleContext | None = None,
        router: Router | None = None,
        fanout: RemoteFanout | None = None,
        client: BackendClient | None = None,
        **kwargs,
    ):
        super().__init__(**kwargs)
        store = SessionStore()
        self.role_context = role_context or store
        self.router = router or Router()
        self.client = client
        if fanout is None:
            self.client = client or BackendClient(token_provider=store.get_access_token)
            fanout = RemoteFanout.from_client(self.client)
        self.palette = PaletteSession(self.role_context, fanout, self.router.navigate)
        self.page_view = PageView(id="page-view")
        self._unsubscribe = self.router.subscribe(self._on_navigate)

    def compose(self) -> ComposeResult:
        yield Header()
        yield self.page_view
        yield Footer()

    def on_mount(self) -> None:
        self._show_page(self.router.current_path)

    async def on_unmount(self) -> None:
        self._unsubscribe()
        if self.client is not None:
            await self.client.close()

    def _show_page(self, path: str) -> None:
        self.sub_title = self.role_context.get_current_role() or "signed out"
        # The palette may still be on top of the screen stack
        self.page_view.show(self.router.title_for(path), path)

    def _on_navigate(self, path: str) -> None:
        self.palette.handle_navigation(path)
        self._show_page(path)

    def action_open_palette(self, initial_query: str = "") -> None:
        if self.palette.is_open:
            return
        logger.info("Opening command palette")
        self.push_screen(CommandPaletteScreen(self.palette, initial_query))
