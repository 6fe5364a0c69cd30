"""Tests for the route registry and router."""

import pytest

from servdesk.navigation.nav_config import NAV_ITEMS, NavItem, has_placeholder
from servdesk.navigation.router import Router


class TestNavConfig:
    def test_paths_are_unique(self):
        paths = [item.path for item in NAV_ITEMS]
        assert len(paths) == len(set(paths))

    def test_open_routes(self):
        open_paths = [item.path for item in NAV_ITEMS if item.roles is None]
        assert open_paths == ["/dashboard", "/profile", "/profile/edit", "/profile/change-password"]

    def test_allows(self):
        item = NavItem("Suppliers", "/suppliers", frozenset({"MANAGER"}))

        assert item.allows("MANAGER")
        assert not item.allows("STAFF")
        assert not item.allows(None)
        assert NavItem("Dashboard", "/dashboard").allows(None)

    def test_has_placeholder(self):
        assert has_placeholder("/customers/[id]")
        assert not has_placeholder("/customers")


class TestRouter:
    def test_navigate_notifies_listeners(self):
        router = Router()
        seen = []
        router.subscribe(seen.append)

        router.navigate("/customers")

        assert seen == ["/customers"]
        assert router.current_path == "/customers"
        assert router.history == ["/dashboard", "/customers"]

    def test_unsubscribe(self):
        router = Router()
        seen = []
        unsubscribe = router.subscribe(seen.append)

        unsubscribe()
        unsubscribe()
        router.navigate("/devices")

        assert seen == []

    def test_relative_path_rejected(self):
        with pytest.raises(ValueError):
            Router().navigate("customers")

    def test_resolve_detail_pages(self):
        router = Router()

        assert router.title_for("/customers/42") == "Customer Details"
        assert router.title_for("/devices/7") == "Device Details"
        assert router.title_for("/customers/create") == "Create Customer"

    def test_resolve_ignores_query_string(self):
        assert Router().title_for("/contracts?create=1") == "Contract Management"

    def test_unknown_path(self):
        assert Router().resolve("/nowhere") is None
        assert Router().title_for("/nowhere") == "Not Found"
