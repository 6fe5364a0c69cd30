"""Tests for the concurrent customer/device fanout."""

import asyncio

import pytest

from conftest import FakeSearch, make_customer, make_device
from servdesk.exceptions import ApiConnectionError
from servdesk.ui.command_palette.palette_fanout import RemoteFanout


@pytest.mark.asyncio
async def test_empty_query_issues_no_calls(fanout, customers, devices):
    result = await fanout.fetch("")

    assert result.is_empty
    assert customers.calls == []
    assert devices.calls == []


@pytest.mark.asyncio
async def test_both_sources_queried_with_page_size(fanout, customers, devices):
    customers.results["acme"] = [make_customer(1, "Acme Corp")]
    devices.results["acme"] = [make_device(9, "Acme Printer")]

    result = await fanout.fetch("acme")

    assert customers.calls == [("acme", 0, 5)]
    assert devices.calls == [("acme", 0, 5)]
    assert [c.id for c in result.customers] == [1]
    assert [d.id for d in result.devices] == [9]
    assert result.failed_sources == []


@pytest.mark.asyncio
async def test_sources_run_concurrently(fanout, customers, devices):
    customers.results["acme"] = [make_customer(1, "Acme Corp")]
    devices.results["acme"] = [make_device(9, "Acme Printer")]
    customer_gate = customers.hold("acme")
    device_gate = devices.hold("acme")

    task = asyncio.create_task(fanout.fetch("acme"))
    for _ in range(3):
        await asyncio.sleep(0)

    # Both searches started while neither had finished
    assert len(customers.calls) == 1
    assert len(devices.calls) == 1
    assert not task.done()

    # Devices resolve first
    device_gate.set()
    for _ in range(3):
        await asyncio.sleep(0)
    assert not task.done()
    customer_gate.set()
    result = await task

    assert [c.id for c in result.customers] == [1]
    assert [d.id for d in result.devices] == [9]


@pytest.mark.asyncio
async def test_one_failing_source_keeps_the_other(customers):
    customers.results["acme"] = [make_customer(1, "Acme Corp")]
    devices = FakeSearch(error=ApiConnectionError(service="device"))

    result = await RemoteFanout(customers, devices).fetch("acme")

    assert [c.id for c in result.customers] == [1]
    assert result.devices == []
    assert result.failed_sources == ["devices"]


@pytest.mark.asyncio
async def test_both_sources_failing_yields_empty_result():
    failing = RemoteFanout(FakeSearch(error=RuntimeError("boom")), FakeSearch(error=ValueError("bad")))

    result = await failing.fetch("acme")

    assert result.is_empty
    assert result.failed_sources == ["customers", "devices"]


@pytest.mark.asyncio
async def test_custom_page_size(customers, devices):
    await RemoteFanout(customers, devices, page_size=3).fetch("x")

    assert customers.calls == [("x", 0, 3)]
