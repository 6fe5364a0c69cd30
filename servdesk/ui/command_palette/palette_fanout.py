"""
Remote record lookups for the command palette.

One stable query fans out to the customer and device searches at the same
time. Each source fails on its own: an error becomes an empty list for that
source and is only logged.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any

from servdesk.config.constants import PALETTE_REMOTE_PAGE, PALETTE_REMOTE_PAGE_SIZE
from servdesk.models.records import CustomerSummary, DeviceSummary, Page
from servdesk.services.api_client import BackendClient
from servdesk.services.customer_service import CustomerService
from servdesk.services.device_service import DeviceService

logger = logging.getLogger(__name__)

SearchFn = Callable[[str, int, int], Awaitable[Page[Any]]]


@dataclass
class FanoutResult:
    """Records returned for one query, in backend order."""

    query: str = ""
    customers: list[CustomerSummary] = field(default_factory=list)
    devices: list[DeviceSummary] = field(default_factory=list)
    failed_sources: list[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.customers and not self.devices


class RemoteFanout:
    """Runs the customer and device searches for a query concurrently."""

    def __init__(
        self,
        search_customers: SearchFn,
        search_devices: SearchFn,
        page_size: int = PALETTE_REMOTE_PAGE_SIZE,
    ):
        self.search_customers = search_customers
        self.search_devices = search_devices
        self.page_size = page_size

    @classmethod
    def from_client(cls, client: BackendClient, page_size: int = PALETTE_REMOTE_PAGE_SIZE) -> RemoteFanout:
        """Fanout over the gateway's customer and device services."""
        return cls(
            CustomerService(client).search_customers,
            DeviceService(client).search_devices,
            page_size=page_size,
        )

    async def _safe_search(self, source: str, search: SearchFn, query: str, failed: list[str]) -> list[Any]:
        try:
            page = await search(query, PALETTE_REMOTE_PAGE, self.page_size)
        except Exception as e:
            logger.debug(f"Palette {source} search failed for {query!r}: {e}")
            failed.append(source)
            return []
        return list(page.content) if page is not None else []

    async def fetch(self, query: str) -> FanoutResult:
        """Search both sources for ``query``; an empty query issues no calls."""
        if not query:
            return FanoutResult(query=query)

        failed: list[str] = []
        customers, devices = await asyncio.gather(
            self._safe_search("customers", self.search_customers, query, failed),
            self._safe_search("devices", self.search_devices, query, failed),
        )
        return FanoutResult(query=query, customers=customers, devices=devices, failed_sources=sorted(failed))
