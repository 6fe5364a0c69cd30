"""Customer device service client."""

from __future__ import annotations

from servdesk.models.records import DeviceSummary, Page

from .api_client import BackendClient

SERVICE = "device"


class DeviceService:
    def __init__(self, client: BackendClient):
        self.client = client

    async def search_devices(
        self,
        keyword: str = "",
        page: int = 0,
        size: int = 20,
        status: str | None = None,
    ) -> Page[DeviceSummary]:
        """Paginated customer devices matching ``keyword``.

        The device service wraps its payload in ``{"success": ..., "data": ...}``;
        ``success: false`` raises ``ApiError``.
        """
        params: dict[str, object] = {"page": page, "size": size}
        if keyword:
            params["keyword"] = keyword
        if status:
            params["status"] = status
        data = await self.client.get_data("device/customer-devices", service=SERVICE, params=params)
        return Page.from_dict(data, DeviceSummary.from_dict)
