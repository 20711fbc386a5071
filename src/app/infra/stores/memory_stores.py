"""Stores em memória: apenas para desenvolvimento e testes.

ATENÇÃO: Não usar em staging/production. Sem persistência entre reinícios
e sem compartilhamento entre instâncias.
"""

from __future__ import annotations

import copy
import json
import time
from typing import TYPE_CHECKING, Any

from app.protocols.kv_store import AsyncKeyValueStoreProtocol

if TYPE_CHECKING:
    from collections.abc import Callable


class MemoryKeyValueStore(AsyncKeyValueStoreProtocol):
    """Store chave-valor em memória com expiração por chave.

    Args:
        clock: Fonte de tempo em segundos (injetável em testes).
    """

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._values: dict[str, Any] = {}
        self._expires_at: dict[str, float] = {}

    def _purge_if_expired(self, key: str) -> None:
        expires_at = self._expires_at.get(key)
        if expires_at is not None and self._clock() >= expires_at:
            self._values.pop(key, None)
            self._expires_at.pop(key, None)

    def _set_expiry(self, key: str, ttl_seconds: int | None) -> None:
        if ttl_seconds is None:
            self._expires_at.pop(key, None)
        else:
            self._expires_at[key] = self._clock() + ttl_seconds

    async def get_json(self, key: str) -> Any | None:
        self._purge_if_expired(key)
        if key not in self._values:
            return None
        return copy.deepcopy(self._values[key])

    async def set_json(
        self,
        key: str,
        value: Any,
        ttl_seconds: int | None = None,
        keep_ttl: bool = False,
    ) -> None:
        self._purge_if_expired(key)
        # Round-trip JSON para reproduzir a serialização do Redis
        self._values[key] = json.loads(json.dumps(value))
        if not keep_ttl:
            self._set_expiry(key, ttl_seconds)

    async def incr(self, key: str) -> int:
        self._purge_if_expired(key)
        current = int(self._values.get(key, 0)) + 1
        self._values[key] = current
        return current

    async def lpush(self, key: str, value: str) -> int:
        self._purge_if_expired(key)
        items = self._values.setdefault(key, [])
        items.insert(0, value)
        return len(items)
