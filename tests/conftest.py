"""Shared pytest fixtures for servdesk tests."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from servdesk.auth.session import StaticRoleContext
from servdesk.models.records import CustomerSummary, DeviceSummary, Page
from servdesk.ui.command_palette.palette_commands import ActionRegistry
from servdesk.ui.command_palette.palette_fanout import RemoteFanout
from servdesk.ui.command_palette.palette_session import PaletteSession

# ---------------------------------------------------------------------------
# Environment isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def session_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the session store at a temp file for every test."""
    path = tmp_path / "session.json"
    monkeypatch.setenv("SERVDESK_SESSION_FILE", str(path))
    for name in ("SERVDESK_GATEWAY_URL", "SERVDESK_HTTP_TIMEOUT", "SERVDESK_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    return path


# ---------------------------------------------------------------------------
# Fake timer
# ---------------------------------------------------------------------------


class FakeTimer:
    def __init__(self, when: float, callback: Callable[[], None]):
        self.when = when
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class FakeScheduler:
    """Manual clock with the ``call_later`` signature of an event loop."""

    def __init__(self) -> None:
        self.now = 0.0
        self.timers: list[FakeTimer] = []

    def call_later(self, delay: float, callback: Callable[[], None]) -> FakeTimer:
        timer = FakeTimer(self.now + delay, callback)
        self.timers.append(timer)
        return timer

    @property
    def pending(self) -> list[FakeTimer]:
        return [t for t in self.timers if not t.cancelled]

    def advance(self, seconds: float) -> None:
        """Move the clock forward, firing due timers in order."""
        self.now += seconds
        while True:
            due = sorted((t for t in self.pending if t.when <= self.now), key=lambda t: t.when)
            if not due:
                return
            timer = due[0]
            self.timers.remove(timer)
            timer.callback()


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()


# ---------------------------------------------------------------------------
# Controllable remote searches
# ---------------------------------------------------------------------------


class FakeSearch:
    """Async search callable with canned pages, optional gates and failures."""

    def __init__(self, results: dict[str, list[Any]] | None = None, error: Exception | None = None):
        self.results = results or {}
        self.error = error
        self.calls: list[tuple[str, int, int]] = []
        self.gates: dict[str, asyncio.Event] = {}

    def hold(self, query: str) -> asyncio.Event:
        """Block searches for ``query`` until the returned event is set."""
        gate = asyncio.Event()
        self.gates[query] = gate
        return gate

    async def __call__(self, query: str, page: int, size: int) -> Page[Any]:
        self.calls.append((query, page, size))
        gate = self.gates.get(query)
        if gate is not None:
            await gate.wait()
        if self.error is not None:
            raise self.error
        return Page(content=list(self.results.get(query, [])))


def make_customer(id: int, name: str, email: str | None = None, phone: str | None = None) -> CustomerSummary:
    return CustomerSummary(id=id, name=name, email=email, phone=phone)


def make_device(id: int, name: str | None = None, serial: str | None = None) -> DeviceSummary:
    return DeviceSummary(id=id, device_name=name, serial_number=serial)


@pytest.fixture
def customers() -> FakeSearch:
    return FakeSearch()


@pytest.fixture
def devices() -> FakeSearch:
    return FakeSearch()


@pytest.fixture
def fanout(customers: FakeSearch, devices: FakeSearch) -> RemoteFanout:
    return RemoteFanout(customers, devices)


# ---------------------------------------------------------------------------
# Sessions
# ---------------------------------------------------------------------------


class NavigationLog:
    def __init__(self) -> None:
        self.paths: list[str] = []

    def __call__(self, path: str) -> None:
        self.paths.append(path)


@pytest.fixture
def navigations() -> NavigationLog:
    return NavigationLog()


@pytest.fixture
def make_session(
    fanout: RemoteFanout,
    navigations: NavigationLog,
    scheduler: FakeScheduler,
) -> Callable[..., PaletteSession]:
    """Factory for sessions on the fake clock; keyword args pass through."""

    def _make(role: str | None = "MANAGER", **kwargs: Any) -> PaletteSession:
        kwargs.setdefault("call_later", scheduler.call_later)
        kwargs.setdefault("actions", ActionRegistry())
        return PaletteSession(StaticRoleContext(role), fanout, navigations, **kwargs)

    return _make
