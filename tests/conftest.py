# tests/conftest.py
"""Shared fixtures for tenant console tests."""

import inspect
import json
import sqlite3
from typing import Callable, List, Optional

import httpx
import pytest
import pytest_asyncio

from tenant_console.activity.log import ActivityLog
from tenant_console.generation.client import ContentGenerationClient
from tenant_console.storage.memory_blob_store import InMemoryBlobStore
from tenant_console.tenants.persistence import BlobTenantPersistence
from tenant_console.tenants.service import TenantStore

STORAGE_KEY = "saas_tenants_v2"
TEST_API_KEY = "test-gemini-key-123"


class FlakyBlobStore(InMemoryBlobStore):
    """In-memory blob store whose writes can be switched to fail."""

    def __init__(self, initial=None):
        super().__init__(initial)
        self.fail_writes = False
        self.put_calls = 0

    async def put(self, key: str, value: str) -> None:
        self.put_calls += 1
        if self.fail_writes:
            raise sqlite3.OperationalError("disk I/O error")
        await super().put(key, value)


def provider_response(payload: dict, status_code: int = 200) -> httpx.Response:
    """Wrap a generated payload the way the Gemini API returns it."""
    body = {"candidates": [{"content": {"parts": [{"text": json.dumps(payload)}], "role": "model"}}]}
    return httpx.Response(status_code, json=body)


GENERATED_PAYLOAD = {
    "heroTitle": "Fresh Bread Daily",
    "heroSubtitle": "Stone-baked loaves from our oven to your table.",
    "aboutSection": "A family bakery since 1998.",
    "suggestedColor": "#D2691E",
}


@pytest.fixture
def activity_log() -> ActivityLog:
    return ActivityLog(max_entries=100)


@pytest.fixture
def blob_store() -> FlakyBlobStore:
    """Blob store that starts with an explicitly empty saved collection."""
    return FlakyBlobStore({STORAGE_KEY: "[]"})


@pytest.fixture
def persistence(blob_store: FlakyBlobStore) -> BlobTenantPersistence:
    return BlobTenantPersistence(blob_store, STORAGE_KEY)


@pytest_asyncio.fixture
async def store(persistence: BlobTenantPersistence, activity_log: ActivityLog) -> TenantStore:
    tenant_store = TenantStore(persistence, activity_log, capacity=4)
    await tenant_store.initialize()
    return tenant_store


@pytest.fixture
def recorded_requests() -> List[httpx.Request]:
    return []


@pytest_asyncio.fixture
async def make_generation_client(recorded_requests: List[httpx.Request]):
    """Build a ContentGenerationClient whose HTTP traffic goes to a handler instead of the network."""
    clients: List[httpx.AsyncClient] = []

    def _make(
        handler: Optional[Callable] = None,
        api_key: Optional[str] = TEST_API_KEY,
        timeout_seconds: float = 5.0,
    ) -> ContentGenerationClient:
        def _default_handler(request: httpx.Request) -> httpx.Response:
            return provider_response(GENERATED_PAYLOAD)

        inner = handler or _default_handler

        async def _recording_handler(request: httpx.Request) -> httpx.Response:
            recorded_requests.append(request)
            response = inner(request)
            if inspect.isawaitable(response):
                response = await response
            return response

        http_client = httpx.AsyncClient(transport=httpx.MockTransport(_recording_handler))
        clients.append(http_client)
        return ContentGenerationClient(
            client=http_client,
            api_key=api_key,
            model="gemini-3-flash-preview",
            api_base_url="https://generativelanguage.test/v1beta",
            timeout_seconds=timeout_seconds,
        )

    yield _make

    for http_client in clients:
        await http_client.aclose()
