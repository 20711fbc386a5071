"""Fixtures compartilhadas dos use cases do relay."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest
from tests.fakes.inspectable_store import InspectableMemoryStore

from app.services import CorrelationStore, UsageCounter


@pytest.fixture
def kv_store() -> InspectableMemoryStore:
    return InspectableMemoryStore()


@pytest.fixture
def correlation_store(kv_store: InspectableMemoryStore) -> CorrelationStore:
    return CorrelationStore(kv_store, ttl_seconds=3600)


@pytest.fixture
def usage_counter(kv_store: InspectableMemoryStore) -> UsageCounter:
    return UsageCounter(kv_store)


@pytest.fixture
def sleep() -> AsyncMock:
    return AsyncMock()
