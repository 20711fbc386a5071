"""Stores: implementações concretas de persistência.

Módulos disponíveis:
    - redis_kv_store: Store chave-valor usando Redis (Upstash/Vercel KV)
    - memory_stores: Stores em memória para desenvolvimento/testes
"""

from __future__ import annotations

from app.infra.stores.memory_stores import MemoryKeyValueStore
from app.infra.stores.redis_kv_store import RedisKeyValueStore

__all__ = [
    # Memory (dev/test)
    "MemoryKeyValueStore",
    # Redis
    "RedisKeyValueStore",
]
