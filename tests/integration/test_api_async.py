# tests/integration/test_api_async.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
import asyncio

import httpx
import pytest
import pytest_asyncio

from turntable.api import create_app
from turntable.core.state_machine import TurntableMachine
from turntable.core.states import StateId


@pytest_asyncio.fixture
async def slow_client(fake_catalog_cls, catalog_items):
    catalog = fake_catalog_cls(catalog_items, delay=0.05)
    machine = TurntableMachine(catalog, catalog_timeout=2.0)
    machine.power_on()
    app = create_app(machine=machine)
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client, machine, catalog


@pytest.mark.asyncio
async def test_concurrent_requests_load_once(slow_client):
    client, machine, catalog = slow_client
    # one put followed by four changes, in whatever order the lock admits them
    responses = await asyncio.gather(*(client.put("/resource/item") for _ in range(5)))
    assert all(r.status_code == 200 for r in responses)
    assert catalog.calls == 5
    assert machine.state_id == StateId.S4

    body = (await client.get("/resource")).json()
    assert body["media"] == "LOADED"
    assert body["item"] is not None


@pytest.mark.asyncio
async def test_async_conflict_envelope(slow_client):
    client, machine, _ = slow_client
    resp = await client.post("/resource/stop")
    assert resp.status_code == 409
    assert resp.json()["error"]["code"] == "INVALID_STATE_TRANSITION"
    assert machine.state_id == StateId.S3
