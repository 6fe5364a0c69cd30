"""
Selection state machine for the command palette.

``transition(state, event)`` is the whole keyboard/mouse model: it never
performs side effects. A confirmed item is reported through
``SelectionState.confirmed`` and run by the caller.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from .palette_items import PaletteItem


class PaletteStatus(Enum):
    CLOSED = "closed"
    OPEN_IDLE = "open_idle"  # No query, static items only
    OPEN_SEARCHING = "open_searching"  # Waiting for a stable query / remote results
    OPEN_RESULTS = "open_results"  # Merged results for the stable query


@dataclass(frozen=True)
class SelectionState:
    status: PaletteStatus = PaletteStatus.CLOSED
    query: str = ""  # Raw input text
    stable_query: str = ""  # Query the current results belong to
    results: tuple[PaletteItem, ...] = ()  # Flattened, display order
    active_index: int = 0
    confirmed: PaletteItem | None = None  # Set by the transition that confirmed

    @property
    def is_open(self) -> bool:
        return self.status is not PaletteStatus.CLOSED

    @property
    def is_searching(self) -> bool:
        return self.status is PaletteStatus.OPEN_SEARCHING

    @property
    def active_item(self) -> PaletteItem | None:
        if 0 <= self.active_index < len(self.results):
            return self.results[self.active_index]
        return None


# =============================================================================
# Events
# =============================================================================


class PaletteEvent:
    """Base class for palette events."""


@dataclass(frozen=True)
class Opened(PaletteEvent):
    query: str = ""
    results: tuple[PaletteItem, ...] = ()


@dataclass(frozen=True)
class QueryEdited(PaletteEvent):
    raw: str


@dataclass(frozen=True)
class ResultsCommitted(PaletteEvent):
    query: str
    results: tuple[PaletteItem, ...]


@dataclass(frozen=True)
class QuerySettled(PaletteEvent):
    """Input went quiet on the query the current results already belong to."""

    query: str


@dataclass(frozen=True)
class MoveSelection(PaletteEvent):
    delta: int


@dataclass(frozen=True)
class Hovered(PaletteEvent):
    index: int


@dataclass(frozen=True)
class Confirmed(PaletteEvent):
    pass


@dataclass(frozen=True)
class Cancelled(PaletteEvent):
    pass


@dataclass(frozen=True)
class Navigated(PaletteEvent):
    """The host navigated somewhere; the palette must get out of the way."""

    path: str = ""


CLOSED_STATE = SelectionState()


def transition(state: SelectionState, event: PaletteEvent) -> SelectionState:
    """Next state for ``event``. Events that do not apply return ``state``."""
    if isinstance(event, Opened):
        status = PaletteStatus.OPEN_SEARCHING if event.query else PaletteStatus.OPEN_IDLE
        return SelectionState(
            status=status,
            query=event.query,
            stable_query="",
            results=tuple(event.results),
            active_index=0,
        )

    if not state.is_open:
        return state

    if isinstance(event, QueryEdited):
        if event.raw == state.query:
            return state
        return replace(state, query=event.raw, status=PaletteStatus.OPEN_SEARCHING)

    if isinstance(event, ResultsCommitted):
        if event.query != state.query:
            # Raw text already moved on; this commit only refreshes the list
            status = PaletteStatus.OPEN_SEARCHING
        elif event.query:
            status = PaletteStatus.OPEN_RESULTS
        else:
            status = PaletteStatus.OPEN_IDLE
        return replace(
            state,
            status=status,
            stable_query=event.query,
            results=tuple(event.results),
            active_index=0,
        )

    if isinstance(event, QuerySettled):
        if not state.is_searching or event.query != state.query or event.query != state.stable_query:
            return state
        status = PaletteStatus.OPEN_RESULTS if event.query else PaletteStatus.OPEN_IDLE
        return replace(state, status=status)

    if isinstance(event, MoveSelection):
        if not state.results:
            return state
        index = max(0, min(state.active_index + event.delta, len(state.results) - 1))
        return replace(state, active_index=index)

    if isinstance(event, Hovered):
        if not 0 <= event.index < len(state.results):
            return state
        return replace(state, active_index=event.index)

    if isinstance(event, Confirmed):
        item = state.active_item
        if item is None:
            return state
        return replace(CLOSED_STATE, confirmed=item)

    if isinstance(event, (Cancelled, Navigated)):
        return CLOSED_STATE

    return state


# =============================================================================
# Key adapter
# =============================================================================

KEY_EVENTS: dict[str, PaletteEvent] = {
    "up": MoveSelection(-1),
    "ctrl+p": MoveSelection(-1),
    "down": MoveSelection(1),
    "ctrl+n": MoveSelection(1),
    "enter": Confirmed(),
    "escape": Cancelled(),
}


def key_to_event(key: str) -> PaletteEvent | None:
    """Palette event for a Textual key name, or None if the palette ignores it."""
    return KEY_EVENTS.get(key)
