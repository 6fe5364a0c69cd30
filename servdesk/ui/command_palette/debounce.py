"""Debounced query input for the command palette."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Any, Protocol

from servdesk.config.constants import PALETTE_DEBOUNCE_SECONDS

from .cancellation import CancellationToken, SerialCanceller

logger = logging.getLogger(__name__)


class TimerHandle(Protocol):
    def cancel(self) -> Any: ...


Scheduler = Callable[[float, Callable[[], None]], TimerHandle]


def _loop_call_later(delay: float, callback: Callable[[], None]) -> TimerHandle:
    return asyncio.get_running_loop().call_later(delay, callback)


class DebouncedInput:
    """
    Turns a stream of raw text into stable queries.

    ``push()`` restarts the quiet window; when it elapses with no newer value
    ``on_stable`` receives the last raw value. A stable value equal to the
    previous one is not emitted again; ``on_unchanged`` hears about it
    instead. ``reset()`` drops the pending value without emitting.
    """

    def __init__(
        self,
        on_stable: Callable[[str], None],
        *,
        on_unchanged: Callable[[str], None] | None = None,
        delay: float = PALETTE_DEBOUNCE_SECONDS,
        call_later: Scheduler | None = None,
        token: CancellationToken | None = None,
    ):
        self.on_stable = on_stable
        self.on_unchanged = on_unchanged
        self.delay = delay
        self._call_later = call_later or _loop_call_later
        self._timers = SerialCanceller(token or CancellationToken())
        self.raw = ""
        self.stable = ""

    @property
    def pending(self) -> bool:
        current = self._timers.current
        return current is not None and not current.is_cancelled()

    def push(self, raw: str) -> None:
        """Record a new raw value and restart the quiet window."""
        self.raw = raw
        token = self._timers.next()
        if token.is_cancelled():
            # Owner already shut down
            return
        handle = self._call_later(self.delay, lambda: self._fire(token))
        token.on_cancel(handle.cancel)

    def _fire(self, token: CancellationToken) -> None:
        if token.is_cancelled():
            return
        self._timers.cancel()
        if self.raw == self.stable:
            logger.debug(f"Stable query unchanged: {self.raw!r}")
            if self.on_unchanged:
                self.on_unchanged(self.raw)
            return
        self.stable = self.raw
        self.on_stable(self.stable)

    def reset(self, value: str = "", token: CancellationToken | None = None) -> None:
        """Discard pending input and start over from ``value``.

        A new owner ``token`` ties future timers to a new session.
        """
        self._timers.cancel()
        if token is not None:
            self._timers = SerialCanceller(token)
        self.raw = value
        self.stable = value
