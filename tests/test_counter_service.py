"""Tests for the per-IP counter store."""

import asyncio
import ipaddress

import pytest

from app.services.counter_service import IPCounterStore


@pytest.mark.asyncio
async def test_new_store_is_empty(store):
    assert await store.snapshot() == {}


@pytest.mark.asyncio
async def test_increment_inserts_then_adds(store):
    await store.increment("10.0.0.1")
    assert await store.count("10.0.0.1") == 1

    await store.increment("10.0.0.1")
    assert await store.count("10.0.0.1") == 2


@pytest.mark.asyncio
async def test_increment_does_not_touch_other_ips(store):
    await store.increment("10.0.0.1")
    await store.increment("10.0.0.1")
    await store.increment("10.0.0.2")

    assert await store.count("10.0.0.1") == 2
    assert await store.count("10.0.0.2") == 1
    assert await store.count("10.0.0.3") == 0


@pytest.mark.asyncio
async def test_concurrent_increments_are_not_lost(store):
    n = 500
    await asyncio.gather(*(store.increment("192.0.2.10") for _ in range(n)))

    assert await store.count("192.0.2.10") == n


@pytest.mark.asyncio
async def test_snapshot_keys_are_addresses(store):
    await store.increment("2001:db8::1")
    await store.increment(ipaddress.ip_address("2001:0db8:0000::0001"))

    snapshot = await store.snapshot()
    assert snapshot == {ipaddress.IPv6Address("2001:db8::1"): 2}


@pytest.mark.asyncio
async def test_snapshot_is_a_copy(store):
    await store.increment("10.0.0.1")
    snapshot = await store.snapshot()

    await store.increment("10.0.0.1")

    assert snapshot[ipaddress.ip_address("10.0.0.1")] == 1
    assert await store.count("10.0.0.1") == 2


@pytest.mark.asyncio
async def test_snapshot_reflects_completed_increments(store):
    for _ in range(7):
        await store.increment("198.51.100.4")

    snapshot = await store.snapshot()
    assert snapshot[ipaddress.ip_address("198.51.100.4")] == 7


@pytest.mark.asyncio
async def test_increment_rejects_non_ip(store):
    with pytest.raises(ValueError):
        await store.increment("testclient")

    assert await store.snapshot() == {}


def test_stores_are_independent():
    first = IPCounterStore()
    second = IPCounterStore()

    asyncio.run(first.increment("10.0.0.1"))

    assert asyncio.run(second.snapshot()) == {}
