"""
Integration tests for the mock driver API and the remote record source.

The mock service runs in-process on an ephemeral port through aiohttp's test
server, so no external service is required.
"""

from __future__ import annotations

import socket

import pytest
from aiohttp import test_utils

from driver_roster.domain.fixtures import MOCK_DRIVERS
from driver_roster.errors import SourceUnavailable
from driver_roster.infrastructure.record_store import RecordStore, RemoteSource
from driver_roster.infrastructure.remote import fetch_payload
from driver_roster.mock_api import LIVENESS_MESSAGE, create_app

EXPECTED_DRIVERS = 9


def _closed_port_url() -> str:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        port = sock.getsockname()[1]
    return f"http://127.0.0.1:{port}/drivers"


class TestMockApi:
    @pytest.mark.asyncio
    async def test_drivers_endpoint(self):
        async with test_utils.TestClient(test_utils.TestServer(create_app())) as client:
            response = await client.get("/drivers")
            assert response.status == 200
            assert response.headers["Access-Control-Allow-Origin"] == "*"
            payload = await response.json()
        assert len(payload) == EXPECTED_DRIVERS
        assert payload[0] == {
            "id": 1,
            "name": "Alemu Bekele",
            "status": "Active",
            "location": "Addis Ababa",
            "hireDate": "2024-01-15",
        }

    @pytest.mark.asyncio
    async def test_liveness(self):
        async with test_utils.TestClient(test_utils.TestServer(create_app())) as client:
            response = await client.get("/")
            assert response.status == 200
            assert await response.text() == LIVENESS_MESSAGE

    @pytest.mark.asyncio
    async def test_unknown_path_is_404(self):
        async with test_utils.TestClient(test_utils.TestServer(create_app())) as client:
            response = await client.get("/trucks")
            assert response.status == 404


class TestRemoteSource:
    @pytest.mark.asyncio
    async def test_store_loads_from_mock_api(self):
        async with test_utils.TestClient(test_utils.TestServer(create_app(MOCK_DRIVERS[:3]))) as client:
            url = str(client.make_url("/drivers"))
            store = RecordStore()
            await store.load(RemoteSource(url=url, attempts=1, timeout_seconds=5))
        assert store.loaded_from == "api"
        assert store.records == MOCK_DRIVERS[:3]

    @pytest.mark.asyncio
    async def test_not_found_is_unavailable(self):
        async with test_utils.TestClient(test_utils.TestServer(create_app())) as client:
            url = str(client.make_url("/missing"))
            with pytest.raises(SourceUnavailable):
                await fetch_payload(url, attempts=2, timeout_seconds=5)

    @pytest.mark.asyncio
    async def test_unreachable_api_falls_back(self):
        store = RecordStore()
        await store.load(RemoteSource(url=_closed_port_url(), attempts=1, timeout_seconds=2))
        assert store.loaded_from == "fallback"
        assert len(store.records) == EXPECTED_DRIVERS
