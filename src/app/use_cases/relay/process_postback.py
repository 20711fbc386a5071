"""Pipeline do postback: ingestão, entrega e atualização do record."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING

from utils.errors import DeliveryFailed

if TYPE_CHECKING:
    from app.protocols.models import CorrelationStatus, DeliveryReport, NormalizedCallback
    from app.services import CorrelationStore, UsageCounter
    from app.use_cases.relay.deliver_result import DeliveryEngine
    from app.use_cases.relay.ingest_postback import PostbackIngestor

logger = logging.getLogger(__name__)

PROCESSED_MESSAGE = "Postback received and processed"
NO_ITEMS_MESSAGE = "Postback received but no items to process"


@dataclass(frozen=True, slots=True)
class PostbackOutcome:
    """Resultado do processamento de um postback."""

    message: str
    callback: NormalizedCallback
    report: DeliveryReport


class ProcessPostbackUseCase:
    """Orquestra PostbackIngestor e DeliveryEngine para um postback."""

    def __init__(
        self,
        *,
        ingestor: PostbackIngestor,
        engine: DeliveryEngine,
        correlation_store: CorrelationStore,
        usage_counter: UsageCounter,
        default_webhook_url: str | None,
    ) -> None:
        self._ingestor = ingestor
        self._engine = engine
        self._correlation_store = correlation_store
        self._usage_counter = usage_counter
        self._default_webhook_url = default_webhook_url

    async def execute(
        self,
        task_id: str,
        raw_body: bytes,
        headers: Mapping[str, str],
    ) -> PostbackOutcome:
        """Processa um postback recebido.

        Raises:
            MalformedPayload: Body ilegível ou incompleto.
            DeliveryFailed: Entrega abortada (inclui DeliveryExhausted).
        """
        callback = await self._ingestor.ingest(task_id, raw_body, headers)

        try:
            report = await self._engine.deliver(callback, self._default_webhook_url)
        except DeliveryFailed as exc:
            delivered = (exc.chunk_index or 1) - 1
            logger.error(
                "postback_delivery_failed",
                extra={
                    "task_id": callback.task_id,
                    "chunk_index": exc.chunk_index,
                    "response_status": exc.response_status,
                    "error_code": exc.error_code,
                },
            )
            await self._account_chunks(callback, delivered)
            await self._mark(callback, "failed")
            raise

        await self._account_chunks(callback, report.chunks_delivered)
        await self._mark(callback, "completed")

        message = NO_ITEMS_MESSAGE if report.acknowledged_only else PROCESSED_MESSAGE
        logger.info(
            "postback_processed",
            extra={
                "task_id": callback.task_id,
                "chunks_delivered": report.chunks_delivered,
                "total_chunks": report.total_chunks,
            },
        )
        return PostbackOutcome(message=message, callback=callback, report=report)

    async def _account_chunks(self, callback: NormalizedCallback, delivered: int) -> None:
        if callback.credential_identity is None:
            return
        for _ in range(delivered):
            await self._usage_counter.record_chunk(callback.credential_identity)

    async def _mark(self, callback: NormalizedCallback, status: CorrelationStatus) -> None:
        if callback.record is None:
            return
        try:
            await self._correlation_store.mark_status(callback.record, status)
        except Exception as exc:
            logger.warning(
                "correlation_status_update_failed",
                extra={
                    "task_id": callback.task_id,
                    "status": status,
                    "error_type": type(exc).__name__,
                },
            )
