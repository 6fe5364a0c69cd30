"""
Contextual actions for the command palette.

Actions sit next to route destinations in the static index. Each one either
navigates to a target path or calls a handler, and may be limited to a set
of roles.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from servdesk.navigation.nav_config import MANAGER, STAFF, SUPPORT_TEAM

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PaletteAction:
    """An action that can be run from the palette."""

    id: str  # Unique identifier, e.g. "action-new-customer"
    title: str  # Display name: "Create Customer"
    subtitle: str | None = None
    path: str | None = None  # Navigation target, if the action navigates
    handler: Callable[[], None] | None = None  # Called when there is no path
    roles: frozenset[str] | None = None  # None = every role
    icon: str = "+"

    def allows(self, role: str | None) -> bool:
        if self.roles is None:
            return True
        return role is not None and role in self.roles


class ActionRegistry:
    """Ordered registry of palette actions."""

    def __init__(self, register_defaults: bool = True):
        self._actions: dict[str, PaletteAction] = {}
        if register_defaults:
            self._register_defaults()

    def register(self, action: PaletteAction) -> None:
        if action.path is None and action.handler is None:
            raise ValueError(f"Action {action.id} needs a path or a handler")
        self._actions[action.id] = action
        logger.debug(f"Registered palette action: {action.id}")

    def unregister(self, action_id: str) -> bool:
        """Unregister an action. Returns True if found."""
        return self._actions.pop(action_id, None) is not None

    def get(self, action_id: str) -> PaletteAction | None:
        return self._actions.get(action_id)

    def get_all(self) -> list[PaletteAction]:
        """All actions in registration order."""
        return list(self._actions.values())

    def visible_for(self, role: str | None) -> list[PaletteAction]:
        return [a for a in self._actions.values() if a.allows(role)]

    def _register_defaults(self) -> None:
        self.register(
            PaletteAction(
                id="action-new-customer",
                title="Create Customer",
                path="/customers/create",
                roles=frozenset({MANAGER, STAFF}),
                icon="☺",
            )
        )
        self.register(
            PaletteAction(
                id="action-new-service-request",
                title="Create Service Request",
                subtitle="Support Center",
                path="/support/service-requests?create=1",
                roles=frozenset({SUPPORT_TEAM}),
                icon="✉",
            )
        )
        self.register(
            PaletteAction(
                id="action-new-contract",
                title="Create Contract",
                path="/contracts?create=1",
                roles=frozenset({MANAGER, STAFF}),
                icon="§",
            )
        )
