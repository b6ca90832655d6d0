"""Pytest fixtures for tmsai tests."""

from datetime import datetime, timezone

import pytest

from tmsai.config import reset_config
from tmsai.llm.providers.base import ProviderClient
from tmsai.llm.router import ModelRouter
from tmsai.service.ai_service import AIService
from tmsai.service.context import ContextManager
from tmsai.service.store import InMemoryStore

FIXED_NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


class FakeProvider(ProviderClient):
    """Provider returning a canned reply and recording what it was sent."""

    name = "fake"

    def __init__(self, reply="ok", chunks=None):
        super().__init__("fake-model")
        self._client = object()
        self.reply = reply
        self.chunks = chunks or ["Hel", "lo"]
        self.calls = []

    def generate(self, prompt, context=None):
        self.calls.append((prompt, context))
        return self.reply

    def stream(self, prompt, context=None):
        self.calls.append((prompt, context))
        yield from self.chunks


@pytest.fixture
def sample_records():
    """Rows for one organization plus one row belonging to another."""
    return {
        "profiles": [
            {"id": "user-1", "full_name": "Sam Carter", "role": "admin", "organization_id": "org-1"},
        ],
        "vehicles": [
            {"id": "v1", "vehicle_name": "Van 1", "status": "active", "organization_id": "org-1"},
            {"id": "v2", "vehicle_name": "Truck 2", "status": "maintenance", "organization_id": "org-1"},
            {"id": "v9", "vehicle_name": "Other", "status": "active", "organization_id": "org-2"},
        ],
        "drivers": [
            {"id": "d1", "full_name": "Alex", "status": "active",
             "license_expiry_date": "2026-01-01", "organization_id": "org-1"},
            {"id": "d2", "full_name": "Jo", "status": "active",
             "license_expiry_date": "2026-03-01T00:00:00Z", "organization_id": "org-1"},
        ],
        "vehicle_inspections": [
            {"id": "i1", "vehicle_id": "v1", "status": "passed",
             "inspection_date": "2025-05-20", "organization_id": "org-1"},
            {"id": "i2", "vehicle_id": "v2", "status": "passed",
             "inspection_date": "2025-05-25", "organization_id": "org-1"},
        ],
        "maintenance_schedule": [
            {"id": "m1", "vehicle_id": "v2", "maintenance_type": "brakes",
             "due_date": "2025-05-30", "organization_id": "org-1"},
            {"id": "m2", "vehicle_id": "v1", "maintenance_type": "service",
             "due_date": "2025-07-01", "organization_id": "org-1"},
        ],
    }


@pytest.fixture
def store(sample_records):
    return InMemoryStore(sample_records)


@pytest.fixture
def provider():
    return FakeProvider()


@pytest.fixture
def router(provider):
    return ModelRouter({"fake": provider}, default_model="fake")


@pytest.fixture
def context_manager(store):
    return ContextManager(store, clock=lambda: FIXED_NOW)


@pytest.fixture
def service(router, store, context_manager):
    return AIService(router, store, context_manager=context_manager)


@pytest.fixture
def context(context_manager):
    return context_manager.build_context("user-1")


@pytest.fixture
def fresh_config():
    """Reload config around a test that changes the environment."""
    reset_config()
    yield
    reset_config()
