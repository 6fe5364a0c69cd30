"""Route registry and navigation for servdesk."""

from .nav_config import NAV_ITEMS, NavItem, has_placeholder
from .router import Router

__all__ = ["NAV_ITEMS", "NavItem", "Router", "has_placeholder"]
