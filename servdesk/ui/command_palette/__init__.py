"""
Command Palette - federated search overlay.

Provides:
- CommandPaletteScreen: Modal overlay for destinations, actions and records
- PaletteSession: Lifecycle, debouncing and search-cycle orchestration
- ActionRegistry: Registry of contextual actions
"""

from .palette_commands import ActionRegistry, PaletteAction
from .palette_fanout import RemoteFanout
from .palette_items import PaletteGroup, PaletteItem
from .palette_screen import CommandPaletteScreen
from .palette_session import PaletteSession

__all__ = [
    "ActionRegistry",
    "CommandPaletteScreen",
    "PaletteAction",
    "PaletteGroup",
    "PaletteItem",
    "PaletteSession",
    "RemoteFanout",
]
