"""
Route registry for the console.

Every page the console can show is listed here, in sidebar order. ``roles``
of ``None`` means any user may open the page. Detail pages use ``[param]``
placeholder segments; they can be resolved by the router but are never
offered as palette destinations.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

ADMIN = "ADMIN"
SUPER_ADMIN = "SUPER_ADMIN"
MANAGER = "MANAGER"
STAFF = "STAFF"
SUPPORT_TEAM = "SUPPORT_TEAM"
LEAD_TECH = "LEAD_TECH"
TECHNICIAN = "TECHNICIAN"
CUSTOMER = "CUSTOMER"

ALL_ROLES = (ADMIN, SUPER_ADMIN, MANAGER, STAFF, SUPPORT_TEAM, LEAD_TECH, TECHNICIAN, CUSTOMER)

_PLACEHOLDER = re.compile(r"\[[^/\]]*\]")


@dataclass(frozen=True)
class NavItem:
    name: str
    path: str
    roles: frozenset[str] | None = None
    icon: str = "▪"

    def allows(self, role: str | None) -> bool:
        """True when ``role`` may open this page."""
        if self.roles is None:
            return True
        return role is not None and role in self.roles


def has_placeholder(path: str) -> bool:
    """True for parameterized paths such as ``/customers/[id]``."""
    return "[" in path or "]" in path


def path_pattern(path: str) -> re.Pattern[str]:
    """Regex matching concrete paths for a (possibly parameterized) route."""
    parts = _PLACEHOLDER.split(path)
    return re.compile("^" + r"[^/]+".join(re.escape(p) for p in parts) + "$")


def _roles(*names: str) -> frozenset[str]:
    return frozenset(names)


NAV_ITEMS: list[NavItem] = [
    NavItem("Dashboard", "/dashboard", icon="◆"),
    # Support
    NavItem("Support Chat", "/support", _roles(SUPPORT_TEAM), "✉"),
    NavItem("Feedback", "/support/feedback", _roles(SUPPORT_TEAM, MANAGER), "✎"),
    NavItem("Service Request Management", "/support/service-requests", _roles(SUPPORT_TEAM), "✉"),
    NavItem("Task Management", "/support/tasks", _roles(SUPPORT_TEAM), "☰"),
    # Tech lead
    NavItem("Task Assignment", "/techlead/tasks", _roles(LEAD_TECH), "⚑"),
    NavItem("Technician Management", "/techlead/technicians", _roles(LEAD_TECH), "⚑"),
    # Technician
    NavItem("Work Schedule", "/technician/schedule", _roles(TECHNICIAN), "◷"),
    NavItem("My Tasks", "/technician/tasks", _roles(TECHNICIAN), "☑"),
    # General management
    NavItem(
        "Customer Management",
        "/customers",
        _roles(MANAGER, STAFF, SUPPORT_TEAM, LEAD_TECH, TECHNICIAN),
        "☺",
    ),
    NavItem("Create Customer", "/customers/create", _roles(MANAGER, STAFF), "☺"),
    NavItem(
        "Customer Details",
        "/customers/[id]",
        _roles(MANAGER, STAFF, SUPPORT_TEAM, LEAD_TECH, TECHNICIAN),
        "☺",
    ),
    NavItem(
        "Device Management",
        "/devices",
        _roles(MANAGER, STAFF, SUPPORT_TEAM, LEAD_TECH, TECHNICIAN),
        "▣",
    ),
    NavItem("Create Device", "/devices/create", _roles(MANAGER, STAFF), "▣"),
    NavItem(
        "Device Details",
        "/devices/[id]",
        _roles(MANAGER, STAFF, SUPPORT_TEAM, LEAD_TECH, TECHNICIAN),
        "▣",
    ),
    NavItem("Spare Part Management", "/spare-parts", _roles(MANAGER, STAFF), "⚙"),
    NavItem("Create Spare Part", "/spare-parts/create", _roles(MANAGER, STAFF), "⚙"),
    NavItem("Supplier Management", "/suppliers", _roles(MANAGER), "⌂"),
    NavItem("Create Supplier", "/suppliers/create", _roles(MANAGER), "⌂"),
    NavItem("Contract Management", "/contracts", _roles(MANAGER, STAFF, SUPPORT_TEAM, CUSTOMER), "§"),
    NavItem("Contract Details", "/contracts/[id]", _roles(MANAGER, STAFF, SUPPORT_TEAM, CUSTOMER), "§"),
    # Inventory
    NavItem("Inventory Overview", "/inventory", _roles(MANAGER, STAFF, SUPPORT_TEAM, LEAD_TECH), "▤"),
    NavItem("Import Inventory", "/inventory/import", _roles(STAFF), "⇪"),
    NavItem(
        "Inventory Transactions",
        "/inventory/transactions",
        _roles(MANAGER, STAFF, SUPPORT_TEAM, LEAD_TECH),
        "↻",
    ),
    NavItem("Warehouse Dashboard", "/inventory/dashboard", _roles(MANAGER, LEAD_TECH, SUPPORT_TEAM), "▥"),
    # Customer self-service
    NavItem("My Devices", "/my-devices", _roles(CUSTOMER), "▣"),
    NavItem("Service Requests", "/service-requests", _roles(CUSTOMER), "↻"),
    # Admin
    NavItem("User Management", "/users", _roles(ADMIN, SUPER_ADMIN), "⛨"),
    NavItem("Customer User Management", "/users/customers", _roles(ADMIN, SUPER_ADMIN), "⛨"),
    # Profile (any authenticated user)
    NavItem("My Profile", "/profile", icon="⛨"),
    NavItem("Edit Profile", "/profile/edit", icon="⛨"),
    NavItem("Change Password", "/profile/change-password", icon="⛨"),
]
