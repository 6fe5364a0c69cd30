"""Customer service client."""

from __future__ import annotations

from servdesk.models.records import CustomerSummary, Page

from .api_client import BackendClient

SERVICE = "customer"


class CustomerService:
    def __init__(self, client: BackendClient):
        self.client = client

    async def search_customers(self, keyword: str = "", page: int = 0, size: int = 20) -> Page[CustomerSummary]:
        """Paginated customer listing, filtered by name when ``keyword`` is set."""
        params: dict[str, object] = {"page": page, "size": size}
        if keyword:
            params["name"] = keyword
        data = await self.client.get_data("customer/v1/customers", service=SERVICE, params=params)
        return Page.from_dict(data, CustomerSummary.from_dict)
