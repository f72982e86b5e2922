"""Shared fixtures: an in-memory document store, a ticking clock and an HTTP client."""

from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from tenant_admin.application.services import RoleMappingConfig
from tenant_admin.infrastructure.dependencies import get_document_store, get_role_mappings
from tenant_admin.infrastructure.memory import InMemoryDocumentStore
from tenant_admin.main import app


class TickingClock:
    """Deterministic clock that advances one second per call."""

    def __init__(self, start: datetime | None = None):
        self.now = start or datetime(2024, 1, 1, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        current = self.now
        self.now = current + timedelta(seconds=1)
        return current


@pytest.fixture
def store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


@pytest.fixture
def clock() -> TickingClock:
    return TickingClock()


@pytest_asyncio.fixture
async def client(store: InMemoryDocumentStore):
    """HTTP client against the app, backed by the in-memory store."""
    role_mappings = RoleMappingConfig().load()
    app.dependency_overrides[get_document_store] = lambda: store
    app.dependency_overrides[get_role_mappings] = lambda: role_mappings
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as http:
        yield http
    app.dependency_overrides.clear()
