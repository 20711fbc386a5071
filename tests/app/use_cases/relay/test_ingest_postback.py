"""Testes do PostbackIngestor."""

from __future__ import annotations

import gzip
import json
import zlib
from unittest.mock import AsyncMock

import pytest
from relay_payloads import build_envelope, build_items
from tests.fakes.inspectable_store import InspectableMemoryStore

from app.policies import RateLimiter, TokenAuthority
from app.protocols.models import CorrelationRecord
from app.services import CorrelationStore, UsageCounter
from app.use_cases.relay import (
    PostbackIngestor,
    TaskSubmitter,
    count_unique_items,
    decode_body,
)
from utils.errors import MalformedPayload, RedisConnectionError


def _raw(envelope: object) -> bytes:
    return json.dumps(envelope).encode("utf-8")


async def _save_record(store: CorrelationStore, task_id: str = "task-1") -> CorrelationRecord:
    record = CorrelationRecord(
        task_id=task_id,
        correlation_id="corr-1",
        original_request={"keyword": "pizzaria", "extra": {"ref": 1}, "webhook": "https://o/hook"},
        created_at="2026-01-01T00:00:00+00:00",
        credential_identity=2,
    )
    await store.save(record)
    return record


class TestDecodeBody:
    """Testes de decode_body."""

    def test_plain_json(self) -> None:
        """Sem Content-Encoding, decodifica direto."""
        assert decode_body(b'{"a": 1}', {}) == {"a": 1}

    @pytest.mark.parametrize("encoding", ["gzip", "x-gzip", "GZIP"])
    def test_gzip(self, encoding: str) -> None:
        """gzip e x-gzip são descomprimidos."""
        raw = gzip.compress(b'{"a": 1}')
        assert decode_body(raw, {"Content-Encoding": encoding}) == {"a": 1}

    def test_deflate_with_and_without_zlib_header(self) -> None:
        """deflate aceita stream zlib e raw."""
        compressor = zlib.compressobj(wbits=-zlib.MAX_WBITS)
        raw_deflate = compressor.compress(b'{"a": 2}') + compressor.flush()

        assert decode_body(zlib.compress(b'{"a": 1}'), {"content-encoding": "deflate"}) == {"a": 1}
        assert decode_body(raw_deflate, {"content-encoding": "deflate"}) == {"a": 2}

    def test_corrupt_gzip(self) -> None:
        """gzip corrompido é MalformedPayload."""
        with pytest.raises(MalformedPayload, match="decompress"):
            decode_body(b"not gzip", {"content-encoding": "gzip"})

    def test_invalid_json(self) -> None:
        """JSON inválido é MalformedPayload."""
        with pytest.raises(MalformedPayload, match="Invalid JSON"):
            decode_body(b"{oops", {})

    def test_unsupported_encoding(self) -> None:
        """Encoding desconhecido é MalformedPayload."""
        with pytest.raises(MalformedPayload):
            decode_body(b"x", {"content-encoding": "br"})


class TestCountUniqueItems:
    """Testes de count_unique_items."""

    def test_counts_present_non_null_place_id(self) -> None:
        """Conta place_id presente e não nulo."""
        items = [{"place_id": "a"}, {"place_id": None}, {}, {"place_id": "a"}, "raw"]
        assert count_unique_items(items) == 2


class TestPostbackIngestor:
    """Testes do PostbackIngestor."""

    @pytest.mark.asyncio
    async def test_ingest_with_record(self, correlation_store: CorrelationStore) -> None:
        """Postback correlacionado recebe extra, webhook e identidade."""
        await _save_record(correlation_store)
        items = build_items(5, with_place_id=3)
        items[0]["work_hours"] = {
            "timetable": {"monday": [{"open": {"hour": 8, "minute": 0}, "close": None}]}
        }
        ingestor = PostbackIngestor(correlation_store)

        callback = await ingestor.ingest(
            "corr-1",
            gzip.compress(_raw(build_envelope(items))),
            {"content-encoding": "gzip"},
        )

        assert callback.task_id == "task-1"
        assert callback.correlation_id == "corr-1"
        assert callback.extra == {"ref": 1}
        assert callback.webhook_override == "https://o/hook"
        assert callback.credential_identity == 2
        assert callback.total_item_count == 5
        assert callback.unique_item_count == 3
        assert callback.keyword == "pizzaria"
        assert callback.record is not None
        normalized = callback.raw_envelope["tasks"][0]["result"][0]["items"][0]
        assert normalized["work_hours"]["timetable"]["monday"][0]["open"]["time"] == "08:00"

    @pytest.mark.asyncio
    async def test_ingest_without_record_degrades(self, correlation_store: CorrelationStore) -> None:
        """Sem record, extra e webhook ficam nulos."""
        ingestor = PostbackIngestor(correlation_store)

        callback = await ingestor.ingest("corr-x", _raw(build_envelope(build_items(2))), {})

        assert callback.record is None
        assert callback.extra is None
        assert callback.webhook_override is None
        assert callback.correlation_id is None
        assert callback.total_item_count == 2

    @pytest.mark.asyncio
    async def test_store_failure_degrades(self) -> None:
        """Erro do store na busca é tratado como record ausente."""
        store = AsyncMock()
        store.load.side_effect = RedisConnectionError("down")
        ingestor = PostbackIngestor(store)

        callback = await ingestor.ingest("corr-x", _raw(build_envelope(build_items(1))), {})

        assert callback.record is None

    @pytest.mark.asyncio
    async def test_path_id_used_when_envelope_has_no_task_id(
        self,
        correlation_store: CorrelationStore,
    ) -> None:
        """Sem tasks[0].id, o id do path é usado na busca."""
        await _save_record(correlation_store, task_id="from-path")
        envelope = build_envelope(build_items(1))
        del envelope["tasks"][0]["id"]
        ingestor = PostbackIngestor(correlation_store)

        callback = await ingestor.ingest("from-path", _raw(envelope), {})

        assert callback.task_id == "from-path"
        assert callback.record is not None

    @pytest.mark.asyncio
    async def test_missing_items_is_empty(self, correlation_store: CorrelationStore) -> None:
        """Sem result/items, o callback não tem itens."""
        ingestor = PostbackIngestor(correlation_store)

        callback = await ingestor.ingest("x", _raw(build_envelope(None)), {})

        assert callback.items == []
        assert callback.has_items is False
        assert callback.total_item_count == 0

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "envelope",
        [
            {},
            {"tasks": []},
            {"tasks": [{"id": "t"}]},
            {"tasks": [{"id": "t", "data": {"keyword": "k"}}]},
            {"tasks": [{"id": "t", "data": {"location_code": 1}}]},
            [1, 2],
        ],
    )
    async def test_malformed_envelopes(
        self,
        correlation_store: CorrelationStore,
        envelope: object,
    ) -> None:
        """Estrutura ou dados obrigatórios ausentes são rejeitados."""
        ingestor = PostbackIngestor(correlation_store)

        with pytest.raises(MalformedPayload):
            await ingestor.ingest("x", _raw(envelope), {})


class TestSubmitThenIngest:
    """Submissão seguida do postback no mesmo store."""

    @pytest.mark.asyncio
    async def test_postback_resolves_submission_override(
        self,
        kv_store: InspectableMemoryStore,
        correlation_store: CorrelationStore,
        usage_counter: UsageCounter,
    ) -> None:
        """O postback da tarefa criada recupera webhook, extra e identidade."""
        task_api = AsyncMock()
        task_api.create_tasks.return_value = {"tasks": [{"id": "task-1"}]}
        submitter = TaskSubmitter(
            token_authority=TokenAuthority(["tok-a"]),
            rate_limiter=RateLimiter(kv_store, limit=10, window_seconds=60),
            task_api=task_api,
            correlation_store=correlation_store,
            usage_counter=usage_counter,
            base_postback_url="https://relay.example/postback/",
        )
        body = [
            {
                "language_code": "pt",
                "location_code": 1001773,
                "keyword": "pizzaria",
                "depth": 100,
                "postback_data": "advanced",
                "extra": {"ref": 5},
                "webhook": "https://example.com/hook",
            }
        ]

        submitted = await submitter.submit(body, "tok-a", "1.2.3.4")
        callback = await PostbackIngestor(correlation_store).ingest(
            submitted.correlation_id,
            _raw(build_envelope(build_items(3))),
            {},
        )

        assert callback.task_id == submitted.task_id == "task-1"
        assert callback.correlation_id == submitted.correlation_id
        assert callback.webhook_override == "https://example.com/hook"
        assert callback.extra == {"ref": 5}
        assert callback.credential_identity == 0
