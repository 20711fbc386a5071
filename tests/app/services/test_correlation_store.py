"""Testes do CorrelationStore."""

from __future__ import annotations

import pytest
from tests.fakes.inspectable_store import InspectableMemoryStore

from app.protocols.models import CorrelationRecord
from app.services import CorrelationStore


class FakeClock:
    def __init__(self, now: float = 0.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


def _record(**overrides: object) -> CorrelationRecord:
    values: dict[str, object] = {
        "task_id": "task-1",
        "correlation_id": "corr-1",
        "original_request": {"keyword": "pizza", "extra": {"ref": 7}, "webhook": "https://x/y"},
        "created_at": "2026-01-01T00:00:00+00:00",
        "credential_identity": 0,
    }
    values.update(overrides)
    return CorrelationRecord(**values)  # type: ignore[arg-type]


class TestCorrelationStore:
    """Testes do CorrelationStore."""

    @pytest.mark.asyncio
    async def test_save_and_load(self) -> None:
        """Record gravado é lido de volta sob task:<id>."""
        kv = InspectableMemoryStore()
        store = CorrelationStore(kv, ttl_seconds=3600)

        await store.save(_record())
        loaded = await store.load("task-1")

        assert loaded == _record()
        assert loaded.extra == {"ref": 7}
        assert loaded.webhook_override == "https://x/y"
        assert kv.keys() == ["task:task-1"]

    @pytest.mark.asyncio
    async def test_stored_layout_uses_camel_case(self) -> None:
        """Formato armazenado usa os nomes camelCase."""
        kv = InspectableMemoryStore()
        await CorrelationStore(kv, ttl_seconds=60).save(_record())

        stored = await kv.get_json("task:task-1")

        assert stored["taskId"] == "task-1"
        assert stored["correlationId"] == "corr-1"
        assert stored["status"] == "pending"
        assert stored["originalRequest"]["keyword"] == "pizza"

    @pytest.mark.asyncio
    async def test_missing_and_invalid_records(self) -> None:
        """Ausente ou ilegível retorna None."""
        kv = InspectableMemoryStore()
        store = CorrelationStore(kv, ttl_seconds=60)
        await kv.set_json("task:broken", {"status": "pending"})

        assert await store.load("nope") is None
        assert await store.load("broken") is None

    @pytest.mark.asyncio
    async def test_record_expires(self) -> None:
        """Record não reclamado expira com o TTL."""
        clock = FakeClock()
        kv = InspectableMemoryStore(clock=clock)
        store = CorrelationStore(kv, ttl_seconds=100)
        await store.save(_record())

        clock.now += 100

        assert await store.load("task-1") is None

    @pytest.mark.asyncio
    async def test_mark_status_keeps_ttl(self) -> None:
        """Troca de status não renova o prazo."""
        clock = FakeClock()
        kv = InspectableMemoryStore(clock=clock)
        store = CorrelationStore(kv, ttl_seconds=100)
        record = _record()
        await store.save(record)

        clock.now += 30
        await store.mark_status(record, "completed")

        loaded = await store.load("task-1")
        assert loaded is not None
        assert loaded.status == "completed"
        assert kv.ttl_of("task:task-1") == 70

    def test_webhook_override_empty_is_none(self) -> None:
        """Webhook vazio não é override."""
        assert _record(original_request={"webhook": ""}).webhook_override is None
