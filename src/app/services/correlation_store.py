"""Persistência de CorrelationRecord no store chave-valor.

Key: task:<taskId>. O record expira se nenhum postback o reclamar.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.protocols.models import CorrelationRecord

if TYPE_CHECKING:
    from app.protocols.kv_store import AsyncKeyValueStoreProtocol
    from app.protocols.models import CorrelationStatus

logger = logging.getLogger(__name__)

TASK_PREFIX = "task:"


class CorrelationStore:
    """Grava e lê CorrelationRecord por task id.

    Args:
        store: Store chave-valor durável
        ttl_seconds: Expiração do record a partir da submissão
    """

    def __init__(self, store: AsyncKeyValueStoreProtocol, ttl_seconds: int) -> None:
        self._store = store
        self._ttl_seconds = ttl_seconds

    def _key(self, task_id: str) -> str:
        return f"{TASK_PREFIX}{task_id}"

    async def save(self, record: CorrelationRecord) -> None:
        await self._store.set_json(
            self._key(record.task_id),
            record.to_dict(),
            ttl_seconds=self._ttl_seconds,
        )
        logger.debug("correlation_record_saved", extra={"task_id": record.task_id})

    async def load(self, task_id: str) -> CorrelationRecord | None:
        """Carrega o record; None se ausente, expirado ou ilegível."""
        data = await self._store.get_json(self._key(task_id))
        if data is None:
            return None
        try:
            return CorrelationRecord.from_dict(data)
        except (KeyError, TypeError, AttributeError) as exc:
            logger.warning(
                "correlation_record_invalid",
                extra={"task_id": task_id, "error": str(exc)},
            )
            return None

    async def mark_status(self, record: CorrelationRecord, status: CorrelationStatus) -> None:
        """Atualiza o status preservando o prazo restante do record."""
        updated = record.with_status(status)
        await self._store.set_json(self._key(record.task_id), updated.to_dict(), keep_ttl=True)
        logger.debug(
            "correlation_record_status_updated",
            extra={"task_id": record.task_id, "status": status},
        )
