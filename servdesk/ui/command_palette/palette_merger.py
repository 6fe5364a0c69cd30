"""
Merging of static and remote palette results.

Static items always come first, in registry order. Customer and device
records follow only when the current role may see cross-entity search.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from servdesk.auth.session import RoleContext
from servdesk.config.constants import PALETTE_ENTITY_ROLES
from servdesk.models.records import CustomerSummary, DeviceSummary

from .palette_fanout import FanoutResult
from .palette_index import Navigate, filter_items
from .palette_items import PaletteGroup, PaletteItem

logger = logging.getLogger(__name__)

GroupedResults = list[tuple[PaletteGroup, list[PaletteItem]]]


def can_see_entities(role: str | None, allowed: Iterable[str] = PALETTE_ENTITY_ROLES) -> bool:
    return role is not None and role in frozenset(allowed)


def customer_item(customer: CustomerSummary, navigate: Navigate) -> PaletteItem:
    path = f"/customers/{customer.id}"
    return PaletteItem(
        id=f"cust-{customer.id}",
        title=customer.name,
        subtitle=customer.email or customer.phone,
        group=PaletteGroup.CUSTOMERS,
        run=lambda: navigate(path),
        icon="☺",
    )


def device_item(device: DeviceSummary, navigate: Navigate) -> PaletteItem:
    path = f"/devices/{device.id}"
    return PaletteItem(
        id=f"dev-{device.id}",
        title=device.device_name or device.device_model or "Device",
        subtitle=f"SN {device.serial_number}" if device.serial_number else None,
        group=PaletteGroup.DEVICES,
        run=lambda: navigate(path),
        icon="▣",
    )


def dedupe(items: Iterable[PaletteItem]) -> list[PaletteItem]:
    """Drop items whose id was already seen; first occurrence wins."""
    seen: set[str] = set()
    unique: list[PaletteItem] = []
    for item in items:
        if item.id in seen:
            continue
        seen.add(item.id)
        unique.append(item)
    return unique


def group_items(items: Sequence[PaletteItem]) -> GroupedResults:
    """Partition into non-empty buckets, in PaletteGroup declaration order."""
    buckets: dict[PaletteGroup, list[PaletteItem]] = {group: [] for group in PaletteGroup}
    for item in items:
        buckets[item.group].append(item)
    return [(group, bucket) for group, bucket in buckets.items() if bucket]


def flatten_groups(groups: GroupedResults) -> list[PaletteItem]:
    return [item for _, bucket in groups for item in bucket]


class ResultMerger:
    """Builds the ordered result list for one search cycle."""

    def __init__(
        self,
        role_context: RoleContext,
        navigate: Navigate,
        entity_roles: Iterable[str] = PALETTE_ENTITY_ROLES,
    ):
        self.role_context = role_context
        self.navigate = navigate
        self.entity_roles = frozenset(entity_roles)

    def remote_items(self, fanout: FanoutResult) -> list[PaletteItem]:
        """Customer then device items, or nothing for roles outside the allow-list."""
        role = self.role_context.get_current_role()
        if not can_see_entities(role, self.entity_roles):
            if not fanout.is_empty:
                hidden = len(fanout.customers) + len(fanout.devices)
                logger.debug(f"Hiding {hidden} records from role={role!r}")
            return []
        customers = [customer_item(c, self.navigate) for c in fanout.customers]
        devices = [device_item(d, self.navigate) for d in fanout.devices]
        return customers + devices

    def merge(
        self,
        static_items: Sequence[PaletteItem],
        query: str,
        fanout: FanoutResult | None = None,
    ) -> list[PaletteItem]:
        """Flat merged list: matching static items, then permitted records."""
        local = filter_items(static_items, query)
        if not query or fanout is None:
            return dedupe(local)
        return dedupe(local + self.remote_items(fanout))

    def merge_grouped(
        self,
        static_items: Sequence[PaletteItem],
        query: str,
        fanout: FanoutResult | None = None,
    ) -> GroupedResults:
        return group_items(self.merge(static_items, query, fanout))
