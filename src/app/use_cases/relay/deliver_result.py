"""Entrega do resultado normalizado ao webhook de destino.

Os itens são enviados em chunks de até MAX_ITEMS_PER_CALL, em ordem e
um por vez. Respostas 429 são repetidas com backoff exponencial; qualquer
outra resposta não-2xx aborta os chunks restantes.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any

from app.infra.http import HttpError
from app.observability import record_retry
from app.protocols.models import DeliveryEnvelope, DeliveryReport
from utils.errors import DeliveryExhausted, DeliveryFailed

if TYPE_CHECKING:
    from app.protocols.http_client import HttpResponseProtocol, WebhookTransportProtocol
    from app.protocols.models import NormalizedCallback

logger = logging.getLogger(__name__)

MAX_ITEMS_PER_CALL = 25
MAX_DELIVERY_ATTEMPTS = 10
BACKOFF_BASE_SECONDS = 1.0
TOO_MANY_REQUESTS = 429
NO_ITEMS_MESSAGE = "No items found in the response"


def _is_success(status_code: int) -> bool:
    return 200 <= status_code < 300


def split_into_chunks(items: list[Any], size: int = MAX_ITEMS_PER_CALL) -> list[list[Any]]:
    """Divide a lista em chunks consecutivos de até `size` itens."""
    if size < 1:
        raise ValueError("size deve ser >= 1")
    return [items[start : start + size] for start in range(0, len(items), size)]


def build_payload_slice(envelope: dict[str, Any], chunk: list[Any]) -> dict[str, Any]:
    """Cópia do envelope original com apenas os itens do chunk.

    Somente o caminho tasks[0].result[0] é copiado; o envelope de
    entrada não é alterado.
    """
    tasks = list(envelope["tasks"])
    task = dict(tasks[0])
    results = list(task["result"])
    result = dict(results[0])
    result["items"] = chunk
    results[0] = result
    task["result"] = results
    tasks[0] = task
    payload = dict(envelope)
    payload["tasks"] = tasks
    return payload


class DeliveryEngine:
    """Envia NormalizedCallbacks ao destino, chunk a chunk."""

    def __init__(
        self,
        transport: WebhookTransportProtocol,
        *,
        max_items_per_call: int = MAX_ITEMS_PER_CALL,
        max_attempts: int = MAX_DELIVERY_ATTEMPTS,
        backoff_base_seconds: float = BACKOFF_BASE_SECONDS,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        self._transport = transport
        self._max_items_per_call = max_items_per_call
        self._max_attempts = max_attempts
        self._backoff_base_seconds = backoff_base_seconds
        self._sleep = sleep

    async def send_with_retry(self, url: str, payload: dict[str, Any]) -> HttpResponseProtocol:
        """POST com retry apenas para 429.

        Espera backoff_base * 2^tentativa entre tentativas. Não há espera
        após a última tentativa.

        Raises:
            DeliveryExhausted: Destino respondeu 429 em todas as tentativas.
            DeliveryFailed: Erro de transporte.
        """
        for attempt in range(self._max_attempts):
            try:
                response = await self._transport.post(url, json=payload)
            except HttpError as exc:
                raise DeliveryFailed(f"Webhook unreachable: {exc}") from exc

            if response.status_code != TOO_MANY_REQUESTS:
                return response

            if attempt + 1 >= self._max_attempts:
                break
            wait_seconds = self._backoff_base_seconds * (2**attempt)
            record_retry("delivery_engine", attempt + 1, wait_seconds)
            await self._sleep(wait_seconds)

        raise DeliveryExhausted(
            "Too many requests, even after retries",
            status_code=TOO_MANY_REQUESTS,
        )

    async def _acknowledge_empty(
        self,
        callback: NormalizedCallback,
        destination: str,
    ) -> DeliveryReport:
        report = DeliveryReport(destination=destination, total_chunks=0, acknowledged_only=True)
        acknowledgment = {
            "taskId": callback.task_id,
            "chunkIndex": 0,
            "totalChunks": 0,
            "totalItemCount": 0,
            "uniqueItemCount": 0,
            "message": NO_ITEMS_MESSAGE,
            "extra": callback.extra,
        }
        try:
            response = await self.send_with_retry(destination, acknowledgment)
        except DeliveryFailed as exc:
            logger.warning(
                "delivery_ack_failed",
                extra={"task_id": callback.task_id, "error": exc.message},
            )
            return report

        report.status_codes.append(response.status_code)
        if not _is_success(response.status_code):
            logger.warning(
                "delivery_ack_rejected",
                extra={"task_id": callback.task_id, "status_code": response.status_code},
            )
        return report

    async def deliver(
        self,
        callback: NormalizedCallback,
        destination_default: str | None,
    ) -> DeliveryReport:
        """Entrega o callback ao override do chamador ou ao destino padrão.

        Raises:
            DeliveryFailed: Destino ausente, resposta não-2xx ou erro de transporte.
            DeliveryExhausted: 429 persistente em algum chunk.
        """
        destination = callback.webhook_override or destination_default
        if not destination:
            raise DeliveryFailed("No destination webhook configured")

        if not callback.has_items:
            return await self._acknowledge_empty(callback, destination)

        chunks = split_into_chunks(callback.items, self._max_items_per_call)
        report = DeliveryReport(destination=destination, total_chunks=len(chunks))

        for chunk_index, chunk in enumerate(chunks, start=1):
            envelope = DeliveryEnvelope(
                task_id=callback.task_id,
                chunk_index=chunk_index,
                total_chunks=report.total_chunks,
                total_item_count=callback.total_item_count,
                unique_item_count=callback.unique_item_count,
                payload_slice=build_payload_slice(callback.raw_envelope, chunk),
                extra=callback.extra,
            )
            try:
                response = await self.send_with_retry(destination, envelope.to_dict())
            except DeliveryFailed as exc:
                exc.chunk_index = chunk_index
                raise

            if not _is_success(response.status_code):
                raise DeliveryFailed(
                    f"Webhook forwarding failed for chunk {chunk_index}: {response.status_code}",
                    chunk_index=chunk_index,
                    status_code=response.status_code,
                )

            report.chunks_delivered += 1
            report.status_codes.append(response.status_code)
            logger.info(
                "delivery_chunk_sent",
                extra={
                    "task_id": callback.task_id,
                    "chunk_index": chunk_index,
                    "total_chunks": report.total_chunks,
                    "items": len(chunk),
                },
            )

        return report
