"""
Path-based navigation for the console.

The router only tracks where the user is and tells subscribers when that
changes; screens decide what to render for a path.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from urllib.parse import urlsplit

from .nav_config import NAV_ITEMS, NavItem, path_pattern

logger = logging.getLogger(__name__)

NavigationListener = Callable[[str], None]


class Router:
    """Current location plus navigation listeners."""

    def __init__(self, initial_path: str = "/dashboard", routes: Sequence[NavItem] = NAV_ITEMS):
        self.current_path = initial_path
        self.history: list[str] = [initial_path]
        self._routes = list(routes)
        self._patterns = [(path_pattern(item.path), item) for item in self._routes]
        self._listeners: list[NavigationListener] = []

    def subscribe(self, listener: NavigationListener) -> Callable[[], None]:
        """Register a listener; returns a callable that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def navigate(self, path: str) -> None:
        """Move to ``path`` and notify listeners."""
        if not path.startswith("/"):
            raise ValueError(f"Navigation target must be an absolute path: {path!r}")

        logger.debug(f"Navigate {self.current_path} -> {path}")
        self.current_path = path
        self.history.append(path)

        for listener in list(self._listeners):
            listener(path)

    def resolve(self, path: str) -> NavItem | None:
        """Registry entry serving ``path`` (query string ignored)."""
        bare = urlsplit(path).path.rstrip("/") or "/"
        for pattern, item in self._patterns:
            if pattern.match(bare):
                return item
        return None

    def title_for(self, path: str) -> str:
        item = self.resolve(path)
        return item.name if item else "Not Found"
