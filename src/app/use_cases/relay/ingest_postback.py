"""Use case de ingestão do postback da API externa.

Decodifica o body (gzip/deflate), valida a estrutura mínima, normaliza
os itens e enriquece com o CorrelationRecord. A ausência do record não
bloqueia a entrega: extra e webhook de override ficam nulos.
"""

from __future__ import annotations

import gzip
import json
import logging
import zlib
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from app.protocols.models import NormalizedCallback
from app.services.work_hours import normalize_work_hours
from config.logging import log_fallback
from utils.errors import InfrastructureError, MalformedPayload

if TYPE_CHECKING:
    from app.protocols.models import CorrelationRecord
    from app.services import CorrelationStore

logger = logging.getLogger(__name__)

UNIQUE_ITEM_FIELD = "place_id"
_GZIP_ENCODINGS = frozenset({"gzip", "x-gzip"})
_IDENTITY_ENCODINGS = frozenset({"", "identity"})


def _header(headers: Mapping[str, str], name: str) -> str:
    for key, value in headers.items():
        if key.lower() == name:
            return value
    return ""


def _inflate(raw_body: bytes) -> bytes:
    try:
        return zlib.decompress(raw_body)
    except zlib.error:
        # deflate sem cabeçalho zlib
        return zlib.decompress(raw_body, -zlib.MAX_WBITS)


def decode_body(raw_body: bytes, headers: Mapping[str, str]) -> Any:
    """Descomprime conforme Content-Encoding e decodifica JSON.

    Raises:
        MalformedPayload: Se a descompressão ou o JSON falharem.
    """
    encoding = _header(headers, "content-encoding").strip().lower()
    try:
        if encoding in _GZIP_ENCODINGS:
            body = gzip.decompress(raw_body)
        elif encoding == "deflate":
            body = _inflate(raw_body)
        elif encoding in _IDENTITY_ENCODINGS:
            body = raw_body
        else:
            raise MalformedPayload(f"Unsupported content encoding: {encoding}")
    except (OSError, EOFError, zlib.error) as exc:
        raise MalformedPayload("Failed to decompress postback body") from exc

    try:
        return json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise MalformedPayload("Invalid JSON in postback body") from exc


def _first_task(envelope: Any) -> dict[str, Any]:
    tasks = envelope.get("tasks") if isinstance(envelope, dict) else None
    if not isinstance(tasks, list) or not tasks:
        raise MalformedPayload("Invalid data structure: missing or empty tasks array")
    task = tasks[0]
    if not isinstance(task, dict) or not isinstance(task.get("data"), dict):
        raise MalformedPayload("Invalid task structure: missing data")
    return task


def _result_items(task: dict[str, Any]) -> list[Any] | None:
    results = task.get("result")
    if not isinstance(results, list) or not results or not isinstance(results[0], dict):
        return None
    items = results[0].get("items")
    return items if isinstance(items, list) else None


def count_unique_items(items: list[Any], field: str = UNIQUE_ITEM_FIELD) -> int:
    """Conta itens com o campo de identidade presente e não nulo."""
    return sum(1 for item in items if isinstance(item, dict) and item.get(field) is not None)


class PostbackIngestor:
    """Transforma o postback bruto em NormalizedCallback."""

    def __init__(self, correlation_store: CorrelationStore) -> None:
        self._correlation_store = correlation_store

    async def _lookup(self, task_id: str) -> CorrelationRecord | None:
        try:
            return await self._correlation_store.load(task_id)
        except InfrastructureError as exc:
            logger.warning(
                "correlation_lookup_failed",
                extra={"task_id": task_id, "error_type": type(exc).__name__},
            )
            return None

    async def ingest(
        self,
        task_id: str,
        raw_body: bytes,
        headers: Mapping[str, str],
    ) -> NormalizedCallback:
        """Decodifica, valida e enriquece um postback.

        Args:
            task_id: Identificador recebido no path do postback.
            raw_body: Body bruto (possivelmente comprimido).
            headers: Headers da requisição.

        Raises:
            MalformedPayload: Body ilegível ou sem location_code/keyword.
        """
        envelope = decode_body(raw_body, headers)
        task = _first_task(envelope)
        data = task["data"]
        location_code = data.get("location_code")
        keyword = data.get("keyword")
        if location_code is None or location_code == "" or not keyword:
            raise MalformedPayload("Missing required data: location_code or keyword")

        envelope_task_id = task.get("id")
        lookup_id = str(envelope_task_id) if envelope_task_id else task_id

        items = _result_items(task)
        if items is None:
            items = []
        for item in items:
            normalize_work_hours(item)

        record = await self._lookup(lookup_id)
        if record is None:
            log_fallback(
                logger,
                "postback_ingestor",
                reason="correlation_not_found",
                task_id=lookup_id,
            )
        elif task_id not in (record.correlation_id, record.task_id):
            logger.warning(
                "postback_correlation_mismatch",
                extra={"task_id": lookup_id, "postback_id": task_id},
            )

        callback = NormalizedCallback(
            task_id=lookup_id,
            correlation_id=record.correlation_id if record else None,
            extra=record.extra if record else None,
            webhook_override=record.webhook_override if record else None,
            total_item_count=len(items),
            unique_item_count=count_unique_items(items),
            items=items,
            raw_envelope=envelope,
            location_code=location_code,
            keyword=keyword,
            credential_identity=record.credential_identity if record else None,
            record=record,
        )
        logger.info(
            "postback_ingested",
            extra={
                "task_id": lookup_id,
                "total_item_count": callback.total_item_count,
                "unique_item_count": callback.unique_item_count,
                "correlated": record is not None,
            },
        )
        return callback
