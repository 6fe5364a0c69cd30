"""
Command Palette Screen - modal search overlay.

The screen is a thin adapter: keys, input changes and mouse events are
forwarded to a ``PaletteSession``, and every state update from the session
is rendered as grouped result sections.
"""

from __future__ import annotations

import logging

from rich.markup import escape
from textual import events
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Vertical, VerticalScroll
from textual.screen import ModalScreen
from textual.widgets import Input, Static

from .palette_items import PaletteItem
from .palette_merger import group_items
from .palette_selection import SelectionState
from .palette_session import PaletteSession

logger = logging.getLogger(__name__)


class PaletteGroupHeader(Static):
    """Section title above a group of results."""

    DEFAULT_CSS = """
    PaletteGroupHeader {
        height: 1;
        padding: 0 1;
        margin-top: 1;
        color: $text-muted;
        text-style: bold;
    }
    """


class PaletteResultWidget(Static):
    """Widget for a single palette result."""

    DEFAULT_CSS = """
    PaletteResultWidget {
        height: auto;
        padding: 0 2;
    }

    PaletteResultWidget.-active {
        background: $accent;
    }

    PaletteResultWidget:hover {
        background: $accent 50%;
    }
    """

    def __init__(self, item: PaletteItem, index: int, **kwargs):
        super().__init__(self._format(item), **kwargs)
        self.item = item
        self.index = index

    @staticmethod
    def _format(item: PaletteItem) -> str:
        # Record names come from the backend and may contain markup brackets
        title = item.title
        if len(title) > 50:
            title = title[:47] + "..."
        line = escape(f"{item.icon} {title}" if item.icon else title)
        if item.subtitle:
            subtitle = item.subtitle
            if len(subtitle) > 40:
                subtitle = subtitle[:37] + "..."
            line += f"  [dim]{escape(subtitle)}[/dim]"
        return line

    def on_enter(self, event: events.Enter) -> None:
        screen = self.screen
        if isinstance(screen, CommandPaletteScreen):
            screen.session.hover(self.index)

    def on_click(self, event: events.Click) -> None:
        event.stop()
        screen = self.screen
        if isinstance(screen, CommandPaletteScreen):
            screen.session.hover(self.index)
            screen.session.confirm()


class CommandPaletteScreen(ModalScreen[None]):
    """Command palette modal overlay."""

    CSS = """
    CommandPaletteScreen {
        align: center top;
        padding-top: 3;
    }

    #palette-container {
        width: 80;
        height: auto;
        max-height: 32;
        background: $surface;
        border: solid $primary;
    }

    #palette-input {
        width: 100%;
        border: none;
        border-bottom: solid $primary-darken-1;
        background: $surface-darken-1;
        padding: 0 1;
    }

    #palette-results {
        height: auto;
        max-height: 24;
    }

    #palette-status {
        height: auto;
        padding: 0 1;
        color: $text-muted;
    }

    #palette-hints {
        height: 1;
        background: $surface-darken-1;
        color: $text-muted;
        padding: 0 1;
    }
    """

    # Priority bindings so the focused Input never swallows navigation keys
    BINDINGS = [
        Binding("up", "palette_key('up')", "Up", show=False, priority=True),
        Binding("down", "palette_key('down')", "Down", show=False, priority=True),
        Binding("ctrl+p", "palette_key('ctrl+p')", "Up", show=False, priority=True),
        Binding("ctrl+n", "palette_key('ctrl+n')", "Down", show=False, priority=True),
        Binding("enter", "palette_key('enter')", "Select", show=False, priority=True),
        Binding("escape", "palette_key('escape')", "Close", show=False, priority=True),
    ]

    def __init__(self, session: PaletteSession, initial_query: str = "", **kwargs):
        super().__init__(**kwargs)
        self.session = session
        self.initial_query = initial_query
        self._rendered: tuple[PaletteItem, ...] | None = None
        self._render_id = 0
        self._dismissed = False

    def compose(self) -> ComposeResult:
        with Vertical(id="palette-container"):
            yield Input(
                placeholder="Search anything… (customers, devices, actions)",
                id="palette-input",
            )
            yield Static("", id="palette-status")
            yield VerticalScroll(id="palette-results")
            yield Static(
                "↑↓ Navigate │ Enter Select │ Esc Close │ Ctrl K",
                id="palette-hints",
            )

    def on_mount(self) -> None:
        self.session.on_state_update = self._on_state_update
        input_widget = self.query_one("#palette-input", Input)
        if self.initial_query:
            input_widget.value = self.initial_query
        self.session.open(self.initial_query)
        input_widget.focus()

    def on_unmount(self) -> None:
        if self.session.on_state_update == self._on_state_update:
            self.session.on_state_update = None
        if self.session.is_open:
            self.session.close()

    def _on_state_update(self, state: SelectionState) -> None:
        if not state.is_open:
            self._close_screen()
            return
        self._render_id += 1
        render_id = self._render_id
        self.call_later(self._render_state, state, render_id)

    def _close_screen(self) -> None:
        if self._dismissed:
            return
        self._dismissed = True
        self.dismiss(None)

    async def _render_state(self, state: SelectionState, render_id: int) -> None:
        # A newer update is already queued
        if render_id != self._render_id or self._dismissed:
            return

        status = self.query_one("#palette-status", Static)
        if state.is_searching:
            status.update("Searching…")
        elif not state.results:
            status.update("No results")
        else:
            status.update("")

        results_view = self.query_one("#palette-results", VerticalScroll)
        if state.results is not self._rendered:
            await results_view.remove_children()
            widgets: list[Static] = []
            index = 0
            for group, bucket in group_items(state.results):
                widgets.append(PaletteGroupHeader(group.value.upper()))
                for item in bucket:
                    widgets.append(PaletteResultWidget(item, index))
                    index += 1
            if widgets:
                await results_view.mount_all(widgets)
            self._rendered = state.results

        for widget in results_view.query(PaletteResultWidget):
            active = widget.index == state.active_index
            widget.set_class(active, "-active")
            if active:
                results_view.scroll_to_widget(widget, animate=False)

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id != "palette-input":
            return
        self.session.set_query(event.value)

    def action_palette_key(self, key: str) -> None:
        self.session.handle_key(key)
