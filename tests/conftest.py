"""Shared test fixtures.

Provides:
- FakeClock: controllable time source for deterministic timestamps
- A fresh in-memory Store per test
- A FastAPI app built around that Store with an instant code generator
- Async HTTP client for API testing
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from src.bizstudio.config import Settings
from src.bizstudio.main import create_app
from src.bizstudio.services.codegen import MockCodeGenerator
from src.bizstudio.store.memory import Store


class FakeClock:
    """Clock that only moves when told to."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2024, 1, 15, 9, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float = 1.0) -> datetime:
        self.now = self.now + timedelta(seconds=seconds)
        return self.now


DEAL_PAYLOAD = {
    "title": "Acme Onboarding",
    "clientName": "Acme",
    "clientEmail": "ops@acme.example.com",
    "value": 10000,
    "stage": "prospect",
    "probability": 25,
    "expectedCloseDate": "2024-06-30",
    "assignedTo": "hr-manager-1",
}


@pytest.fixture
def deal_payload():
    """Factory for a valid deal body with optional field overrides."""

    def _make(**overrides) -> dict:
        payload = dict(DEAL_PAYLOAD)
        payload.update(overrides)
        return payload

    return _make


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store(clock: FakeClock) -> Store:
    return Store(clock=clock)


@pytest.fixture
def settings() -> Settings:
    return Settings(GENERATION_DELAY_SECONDS=0, SENTRY_DSN="")


@pytest.fixture
def app(store: Store, settings: Settings):
    return create_app(
        store=store,
        settings=settings,
        code_generator=MockCodeGenerator(delay_seconds=0),
    )


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client for testing the API."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
