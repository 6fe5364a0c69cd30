"""Pilot-based tests for the command palette inside the console app."""

from __future__ import annotations

import pytest

from conftest import make_customer, make_device
from servdesk.auth.session import StaticRoleContext
from servdesk.navigation.router import Router
from servdesk.ui.command_palette.palette_merger import customer_item
from servdesk.ui.command_palette.palette_screen import (
    CommandPaletteScreen,
    PaletteGroupHeader,
    PaletteResultWidget,
)
from servdesk.ui.console_app import ServdeskApp

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _make_app(fanout, role: str = "MANAGER") -> ServdeskApp:
    return ServdeskApp(role_context=StaticRoleContext(role), router=Router("/dashboard"), fanout=fanout)


async def _open_palette(pilot) -> None:
    await pilot.press("ctrl+k")
    await pilot.pause(0.1)


async def _settle(app, pilot) -> None:
    """Let the debounce window pass and the search cycle render."""
    await pilot.pause(0.4)
    await app.palette.wait_idle()
    await pilot.pause(0.1)


def _result_ids(app) -> list[str]:
    return [w.item.id for w in app.screen.query(PaletteResultWidget)]


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_ctrl_k_opens_palette_with_static_items(fanout):
    app = _make_app(fanout)
    async with app.run_test() as pilot:
        await _open_palette(pilot)

        assert isinstance(app.screen, CommandPaletteScreen)
        assert app.palette.is_open
        ids = _result_ids(app)
        assert "route-/customers" in ids
        assert "action-new-customer" in ids
        assert len(app.screen.query(PaletteGroupHeader)) == 2


@pytest.mark.asyncio
async def test_typing_shows_grouped_records(fanout, customers, devices):
    customers.results["acme"] = [make_customer(1, "Acme Corp", email="ops@acme.test")]
    devices.results["acme"] = [make_device(2, "Acme Printer", serial="P-2")]
    app = _make_app(fanout)
    async with app.run_test() as pilot:
        await _open_palette(pilot)
        await pilot.press("a", "c", "m", "e")
        await _settle(app, pilot)

        assert app.palette.state.stable_query == "acme"
        assert _result_ids(app) == ["cust-1", "dev-2"]
        assert customers.calls == [("acme", 0, 5)]


@pytest.mark.asyncio
async def test_arrow_and_enter_navigates_and_closes(fanout, customers, devices):
    customers.results["acme"] = [make_customer(1, "Acme Corp")]
    devices.results["acme"] = [make_device(2, "Acme Printer")]
    app = _make_app(fanout)
    async with app.run_test() as pilot:
        await _open_palette(pilot)
        await pilot.press("a", "c", "m", "e")
        await _settle(app, pilot)

        await pilot.press("down", "enter")
        await pilot.pause(0.1)

        assert app.router.current_path == "/devices/2"
        assert not app.palette.is_open
        assert not isinstance(app.screen, CommandPaletteScreen)


@pytest.mark.asyncio
async def test_escape_closes_without_navigating(fanout):
    app = _make_app(fanout)
    async with app.run_test() as pilot:
        await _open_palette(pilot)
        await pilot.press("escape")
        await pilot.pause(0.1)

        assert not app.palette.is_open
        assert not isinstance(app.screen, CommandPaletteScreen)
        assert app.router.current_path == "/dashboard"


@pytest.mark.asyncio
async def test_external_navigation_closes_palette(fanout):
    app = _make_app(fanout)
    async with app.run_test() as pilot:
        await _open_palette(pilot)

        app.router.navigate("/devices")
        await pilot.pause(0.1)

        assert not app.palette.is_open
        assert not isinstance(app.screen, CommandPaletteScreen)


@pytest.mark.asyncio
async def test_customer_role_sees_no_records(fanout, customers):
    customers.results["acme"] = [make_customer(1, "Acme Corp")]
    app = _make_app(fanout, role="CUSTOMER")
    async with app.run_test() as pilot:
        await _open_palette(pilot)
        await pilot.press("a", "c", "m", "e")
        await _settle(app, pilot)

        assert _result_ids(app) == []
        assert app.palette.is_open


@pytest.mark.asyncio
async def test_bracketed_record_names_render(fanout, customers, devices):
    customers.results["acme"] = [make_customer(1, "Acme [/] Corp", email="[b]ops@acme.test")]
    devices.results["acme"] = [make_device(2, "[red]Printer", serial="[/dim]")]
    app = _make_app(fanout)
    async with app.run_test() as pilot:
        await _open_palette(pilot)
        await pilot.press("a", "c", "m", "e")
        await _settle(app, pilot)

        assert _result_ids(app) == ["cust-1", "dev-2"]
        assert isinstance(app.screen, CommandPaletteScreen)


def test_result_text_escapes_markup():
    item = customer_item(make_customer(1, "Acme [/] Corp", email="[b]ops"), lambda path: None)

    text = PaletteResultWidget._format(item)

    assert "Acme \\[/] Corp" in text
    assert "[dim]\\[b]ops[/dim]" in text
