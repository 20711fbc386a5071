"""Rate limiter de janela deslizante sobre o store compartilhado.

Cada chave (ex.: IP do chamador) guarda a lista de timestamps admitidos
dentro da janela, com expiração igual ao tamanho da janela.

A sequência ler-filtrar-anexar não é atômica: chamadores concorrentes na
mesma chave podem admitir mais que `limit` requisições na janela. É uma
aproximação aceita; enforcement exato exigiria um script atômico no store
(append-trim-count) e muda o comportamento observável.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from utils.errors import InfrastructureError

if TYPE_CHECKING:
    from collections.abc import Callable

    from app.protocols.kv_store import AsyncKeyValueStoreProtocol

logger = logging.getLogger(__name__)

RATE_LIMIT_PREFIX = "ratelimit:"


class RateLimiter:
    """Admissão por janela deslizante.

    Args:
        store: Store chave-valor compartilhado
        limit: Máximo de requisições admitidas por janela
        window_seconds: Tamanho da janela em segundos
        clock: Fonte de tempo em segundos (injetável em testes)
    """

    def __init__(
        self,
        store: AsyncKeyValueStoreProtocol,
        limit: int,
        window_seconds: int,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if limit < 1:
            raise ValueError("limit deve ser >= 1")
        if window_seconds < 1:
            raise ValueError("window_seconds deve ser >= 1")
        self._store = store
        self._limit = limit
        self._window_seconds = window_seconds
        self._clock = clock

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def window_seconds(self) -> int:
        return self._window_seconds

    def _key(self, key: str) -> str:
        return f"{RATE_LIMIT_PREFIX}{key}"

    async def allow(self, key: str) -> bool:
        """Decide a admissão de uma requisição para a chave.

        Returns:
            True se admitida (timestamp registrado); False se a janela está
            cheia (estado armazenado não é alterado).
        """
        now = self._clock()
        window_start = now - self._window_seconds
        store_key = self._key(key)

        try:
            stored = await self._store.get_json(store_key)
        except InfrastructureError as exc:
            # Bookkeeping de admissão não derruba a operação principal
            logger.error(
                "rate_limit_store_unavailable",
                extra={"error_type": type(exc).__name__},
            )
            return True

        timestamps = [
            ts
            for ts in (stored if isinstance(stored, list) else [])
            if isinstance(ts, (int, float)) and ts > window_start
        ]

        if len(timestamps) >= self._limit:
            logger.info(
                "rate_limit_denied",
                extra={"window_count": len(timestamps), "limit": self._limit},
            )
            return False

        timestamps.append(now)
        try:
            await self._store.set_json(store_key, timestamps, ttl_seconds=self._window_seconds)
        except InfrastructureError as exc:
            logger.error(
                "rate_limit_store_write_failed",
                extra={"error_type": type(exc).__name__},
            )
        return True
