"""
Advisory cancellation for palette work.

Nothing here aborts I/O. A token only answers "is my work still wanted?";
async code checks it right before touching shared state. Tokens form a
tree: cancelling a session token cancels every timer and search cycle
token derived from it.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

logger = logging.getLogger(__name__)


class CancellationToken:
    """Cancel-once flag with optional parent and cancel callbacks."""

    def __init__(self, parent: CancellationToken | None = None):
        self._cancelled = False
        self._callbacks: list[Callable[[], None]] = []
        self._children: list[CancellationToken] = []
        self._parent = parent
        if parent is not None:
            if parent.is_cancelled():
                self._cancelled = True
            else:
                parent._children.append(self)

    def is_cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        """Cancel this token and all of its children. Idempotent."""
        if self._cancelled:
            return
        self._cancelled = True

        callbacks, self._callbacks = self._callbacks, []
        children, self._children = self._children, []
        for callback in callbacks:
            callback()
        for child in children:
            child.cancel()

        if self._parent is not None and self in self._parent._children:
            self._parent._children.remove(self)

    def on_cancel(self, callback: Callable[[], None]) -> None:
        """Run ``callback`` when cancelled (immediately if already cancelled)."""
        if self._cancelled:
            callback()
        else:
            self._callbacks.append(callback)

    def child(self) -> CancellationToken:
        return CancellationToken(parent=self)

    def __repr__(self) -> str:
        state = "cancelled" if self._cancelled else "active"
        return f"<CancellationToken {state}>"


class SerialCanceller:
    """Hands out tokens where each new one cancels its predecessor.

    Used for "only the latest one counts" work such as search cycles.
    """

    def __init__(self, parent: CancellationToken):
        self._parent = parent
        self._current: CancellationToken | None = None

    @property
    def current(self) -> CancellationToken | None:
        return self._current

    def next(self) -> CancellationToken:
        if self._current is not None:
            self._current.cancel()
        self._current = self._parent.child()
        return self._current

    def cancel(self) -> None:
        if self._current is not None:
            self._current.cancel()
            self._current = None
