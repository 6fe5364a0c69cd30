"""
Palette session: lifecycle and search-cycle orchestration.

A session ties the pieces together:

- raw input goes through ``DebouncedInput``;
- each stable query starts a search cycle (static filter + remote fanout);
- a cycle commits its merge only if its token is still live, so results for
  a superseded query never reach the selection state;
- closing the palette cancels the session token, which silences the pending
  debounce timer and every in-flight cycle.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Sequence
from dataclasses import replace

from servdesk.auth.session import RoleContext
from servdesk.config.constants import PALETTE_DEBOUNCE_SECONDS, PALETTE_ENTITY_ROLES
from servdesk.navigation.nav_config import NAV_ITEMS, NavItem

from .cancellation import CancellationToken, SerialCanceller
from .debounce import DebouncedInput, Scheduler
from .palette_commands import ActionRegistry
from .palette_fanout import FanoutResult, RemoteFanout
from .palette_index import Navigate, StaticIndex
from .palette_items import PaletteItem
from .palette_merger import GroupedResults, ResultMerger, flatten_groups, group_items
from .palette_selection import (
    CLOSED_STATE,
    Cancelled,
    Confirmed,
    Hovered,
    MoveSelection,
    Navigated,
    Opened,
    PaletteEvent,
    QueryEdited,
    QuerySettled,
    ResultsCommitted,
    SelectionState,
    key_to_event,
    transition,
)

logger = logging.getLogger(__name__)


class PaletteSession:
    """Owns the palette's selection state and search cycles."""

    def __init__(
        self,
        role_context: RoleContext,
        fanout: RemoteFanout,
        navigate: Navigate,
        *,
        nav_items: Sequence[NavItem] = NAV_ITEMS,
        actions: ActionRegistry | None = None,
        entity_roles: Sequence[str] | frozenset[str] = PALETTE_ENTITY_ROLES,
        debounce_seconds: float = PALETTE_DEBOUNCE_SECONDS,
        call_later: Scheduler | None = None,
        on_state_update: Callable[[SelectionState], None] | None = None,
    ):
        self.role_context = role_context
        self.fanout = fanout
        self.on_state_update = on_state_update
        self.static_index = StaticIndex(role_context, navigate, nav_items, actions)
        self.merger = ResultMerger(role_context, navigate, entity_roles)

        self._state = CLOSED_STATE
        self._token = CancellationToken()
        self._token.cancel()  # Nothing may run until the first open()
        self._cycles = SerialCanceller(self._token)
        self._debouncer = DebouncedInput(
            self._on_stable_query,
            on_unchanged=lambda query: self.dispatch(QuerySettled(query)),
            delay=debounce_seconds,
            call_later=call_later,
            token=self._token,
        )
        self._tasks: set[asyncio.Task[None]] = set()
        self.role_snapshot: str | None = None
        self.cycles_started = 0

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def state(self) -> SelectionState:
        return self._state

    @property
    def is_open(self) -> bool:
        return self._state.is_open

    @property
    def grouped_results(self) -> GroupedResults:
        return group_items(self._state.results)

    def dispatch(self, event: PaletteEvent) -> SelectionState:
        """Apply ``event`` and notify the listener if anything changed."""
        previous = self._state
        self._state = transition(previous, event)
        if self._state is not previous and self.on_state_update:
            self.on_state_update(self._state)
        return self._state

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def open(self, initial_query: str = "") -> None:
        """Open the palette with fresh state."""
        if self.is_open:
            self._shutdown()

        self._token = CancellationToken()
        self._cycles = SerialCanceller(self._token)
        self._debouncer.reset("", token=self._token)
        self.role_snapshot = self.role_context.get_current_role()
        logger.debug(f"Palette opened (role={self.role_snapshot!r})")

        static = tuple(flatten_groups(group_items(self.static_index.items())))
        self.dispatch(Opened(query=initial_query, results=static))

        if initial_query:
            # Not typed, so there is nothing to debounce
            self._debouncer.reset(initial_query)
            self._on_stable_query(initial_query)

    def close(self) -> None:
        """Close without running anything."""
        self._shutdown()
        self.dispatch(Cancelled())

    def handle_navigation(self, path: str = "") -> None:
        """Host navigation happened: force-close and drop transient state."""
        if not self.is_open:
            return
        logger.debug(f"Palette force-closed by navigation to {path!r}")
        self._shutdown()
        self.dispatch(Navigated(path))

    def _shutdown(self) -> None:
        self._token.cancel()
        self._debouncer.reset("")

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def set_query(self, raw: str) -> None:
        if not self.is_open or raw == self._state.query:
            return
        self.dispatch(QueryEdited(raw))
        self._debouncer.push(raw)

    def move_selection(self, delta: int) -> None:
        self.dispatch(MoveSelection(delta))

    def hover(self, index: int) -> None:
        self.dispatch(Hovered(index))

    def cancel(self) -> None:
        self.close()

    def confirm(self) -> PaletteItem | None:
        """Close and run the active item. Returns it, or None if nothing ran."""
        if not self.is_open:
            return None
        state = self.dispatch(Confirmed())
        item = state.confirmed
        if item is None:
            return None

        self._shutdown()
        self._state = replace(state, confirmed=None)
        logger.debug(f"Palette running {item.id}")
        item.run()
        return item

    def handle_key(self, key: str) -> bool:
        """Feed a key name through the key adapter. Returns True if handled."""
        event = key_to_event(key)
        if event is None or not self.is_open:
            return False
        if isinstance(event, Confirmed):
            self.confirm()
        elif isinstance(event, Cancelled):
            self.close()
        else:
            self.dispatch(event)
        return True

    # ------------------------------------------------------------------
    # Search cycles
    # ------------------------------------------------------------------

    def _on_stable_query(self, query: str) -> None:
        if not self.is_open:
            return

        token = self._cycles.next()
        if token.is_cancelled():
            return
        self.cycles_started += 1

        if not query:
            self._commit(query, None, token)
            return

        task = asyncio.get_running_loop().create_task(self._run_cycle(query, token))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _run_cycle(self, query: str, token: CancellationToken) -> None:
        fanout = await self.fanout.fetch(query)
        if fanout.failed_sources:
            logger.debug(f"Palette query {query!r} degraded, failed: {fanout.failed_sources}")
        self._commit(query, fanout, token)

    def _commit(self, query: str, fanout: FanoutResult | None, token: CancellationToken) -> None:
        if token.is_cancelled():
            logger.debug(f"Discarding stale palette results for {query!r}")
            return
        grouped = self.merger.merge_grouped(self.static_index.items(), query, fanout)
        self.dispatch(ResultsCommitted(query, tuple(flatten_groups(grouped))))

    async def wait_idle(self) -> None:
        """Wait until no search cycle task is pending."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def search_once(self, query: str) -> GroupedResults:
        """Run a single cycle outside the interactive lifecycle."""
        fanout = await self.fanout.fetch(query) if query else None
        return self.merger.merge_grouped(self.static_index.items(), query, fanout)
