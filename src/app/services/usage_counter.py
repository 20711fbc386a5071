"""Contadores de uso por credencial, persistidos no store.

Contabilização é efeito colateral de observabilidade: falhas são logadas
e engolidas, nunca propagadas ao chamador.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.protocols.kv_store import AsyncKeyValueStoreProtocol

logger = logging.getLogger(__name__)

USAGE_PREFIX = "api_calls:"


class UsageCounter:
    """Contadores monotônicos por identidade de credencial.

    Keys:
        api_calls:<identity>                  -> submissões
        api_calls:<identity>:chunks           -> chunks entregues
        api_calls:<identity>:correlation_ids  -> log de correlation ids
    """

    def __init__(self, store: AsyncKeyValueStoreProtocol) -> None:
        self._store = store

    def _submissions_key(self, identity: int) -> str:
        return f"{USAGE_PREFIX}{identity}"

    def _chunks_key(self, identity: int) -> str:
        return f"{USAGE_PREFIX}{identity}:chunks"

    def _log_key(self, identity: int) -> str:
        return f"{USAGE_PREFIX}{identity}:correlation_ids"

    async def record_submission(self, identity: int, correlation_id: str) -> None:
        """Incrementa submissões e registra o correlation id (best-effort)."""
        try:
            count = await self._store.incr(self._submissions_key(identity))
            await self._store.lpush(self._log_key(identity), correlation_id)
        except Exception as exc:
            logger.warning(
                "usage_counter_update_failed",
                extra={
                    "counter": "submissions",
                    "identity": identity,
                    "error_type": type(exc).__name__,
                },
            )
            return
        logger.debug("usage_submission_recorded", extra={"identity": identity, "count": count})

    async def record_chunk(self, identity: int) -> None:
        """Incrementa o contador de chunks entregues (best-effort)."""
        try:
            await self._store.incr(self._chunks_key(identity))
        except Exception as exc:
            logger.warning(
                "usage_counter_update_failed",
                extra={
                    "counter": "chunks",
                    "identity": identity,
                    "error_type": type(exc).__name__,
                },
            )
