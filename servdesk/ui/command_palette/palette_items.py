"""Result items shown in the command palette."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum


class PaletteGroup(Enum):
    """Result sections, in display order."""

    NAVIGATE = "Navigate"
    ACTIONS = "Actions"
    CUSTOMERS = "Customers"
    DEVICES = "Devices"
    CONTRACTS = "Contracts"


@dataclass(frozen=True, eq=False)
class PaletteItem:
    """A single selectable result.

    Items are rebuilt on every search cycle; ``id`` is only unique within
    one result list.
    """

    id: str  # e.g. "route-/customers", "cust-42"
    title: str
    group: PaletteGroup
    run: Callable[[], None]
    subtitle: str | None = None
    icon: str = ""

    def matches(self, needle: str) -> bool:
        """Case-insensitive substring match on title and subtitle."""
        needle = needle.lower()
        if needle in self.title.lower():
            return True
        return self.subtitle is not None and needle in self.subtitle.lower()
