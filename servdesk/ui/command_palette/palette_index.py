"""
Static index of palette destinations and actions.

The index is a pure function of the role and the registries, so it is
built once per role and reused for every keystroke.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from servdesk.auth.session import RoleContext
from servdesk.navigation.nav_config import NAV_ITEMS, NavItem, has_placeholder

from .palette_commands import ActionRegistry, PaletteAction
from .palette_items import PaletteGroup, PaletteItem

logger = logging.getLogger(__name__)

Navigate = Callable[[str], None]

_UNSET = object()


def _navigate_to(navigate: Navigate, path: str) -> Callable[[], None]:
    return lambda: navigate(path)


def route_item(nav: NavItem, navigate: Navigate) -> PaletteItem:
    return PaletteItem(
        id=f"route-{nav.path}",
        title=nav.name,
        subtitle=nav.path,
        group=PaletteGroup.NAVIGATE,
        run=_navigate_to(navigate, nav.path),
        icon=nav.icon,
    )


def action_item(action: PaletteAction, navigate: Navigate) -> PaletteItem:
    if action.path is not None:
        run = _navigate_to(navigate, action.path)
    elif action.handler is not None:
        run = action.handler
    else:
        raise ValueError(f"Action {action.id} needs a path or a handler")
    return PaletteItem(
        id=action.id,
        title=action.title,
        subtitle=action.subtitle,
        group=PaletteGroup.ACTIONS,
        run=run,
        icon=action.icon,
    )


def build_static_items(
    role: str | None,
    navigate: Navigate,
    nav_items: Sequence[NavItem] = NAV_ITEMS,
    actions: ActionRegistry | None = None,
) -> list[PaletteItem]:
    """Routes then actions visible to ``role``.

    Parameterized routes are left out: the palette only offers pages it can
    open without further input.
    """
    routes = [
        route_item(nav, navigate)
        for nav in nav_items
        if nav.allows(role) and not has_placeholder(nav.path)
    ]
    registry = actions if actions is not None else ActionRegistry()
    return routes + [action_item(a, navigate) for a in registry.visible_for(role)]


def filter_items(items: Sequence[PaletteItem], query: str) -> list[PaletteItem]:
    """Items whose title or subtitle contains ``query`` (case-insensitive)."""
    if not query:
        return list(items)
    return [item for item in items if item.matches(query)]


class StaticIndex:
    """Role-keyed cache over ``build_static_items``."""

    def __init__(
        self,
        role_context: RoleContext,
        navigate: Navigate,
        nav_items: Sequence[NavItem] = NAV_ITEMS,
        actions: ActionRegistry | None = None,
    ):
        self.role_context = role_context
        self.navigate = navigate
        self.nav_items = list(nav_items)
        self.actions = actions if actions is not None else ActionRegistry()
        self._cached_role: object = _UNSET
        self._cached_items: list[PaletteItem] = []
        self.builds = 0

    def items(self) -> list[PaletteItem]:
        """Static items for the role the context reports right now."""
        role = self.role_context.get_current_role()
        if role != self._cached_role:
            self._cached_items = build_static_items(role, self.navigate, self.nav_items, self.actions)
            self._cached_role = role
            self.builds += 1
            logger.debug(f"Built static palette index for role={role!r}: {len(self._cached_items)} items")
        return self._cached_items

    def invalidate(self) -> None:
        """Force a rebuild on next access, e.g. after registering actions."""
        self._cached_role = _UNSET
