"""Backend record shapes used by the palette and the CLI."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

T = TypeVar("T")


@dataclass
class Page(Generic[T]):
    """One page of a paginated backend listing."""

    content: list[T] = field(default_factory=list)
    total_elements: int = 0
    total_pages: int = 0
    number: int = 0
    size: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None, parse: Callable[[dict[str, Any]], T]) -> Page[T]:
        data = data or {}
        content = [parse(row) for row in data.get("content") or []]
        return cls(
            content=content,
            total_elements=int(data.get("totalElements", len(content))),
            total_pages=int(data.get("totalPages", 1 if content else 0)),
            number=int(data.get("number", 0)),
            size=int(data.get("size", len(content))),
        )


@dataclass
class CustomerSummary:
    id: int
    name: str
    email: str | None = None
    phone: str | None = None
    company: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CustomerSummary:
        return cls(
            id=data["id"],
            name=data.get("name") or "",
            email=data.get("email") or None,
            phone=data.get("phone") or None,
            company=data.get("company") or None,
        )


@dataclass
class DeviceSummary:
    id: int
    customer_id: int | None = None
    device_name: str | None = None
    device_model: str | None = None
    serial_number: str | None = None
    status: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DeviceSummary:
        return cls(
            id=data["id"],
            customer_id=data.get("customerId"),
            device_name=data.get("deviceName") or None,
            device_model=data.get("deviceModel") or None,
            serial_number=data.get("serialNumber") or None,
            status=data.get("status"),
        )
