"""Redis Key-Value Store: store durável do relay (Upstash/Vercel KV compatível).

Valores são gravados como JSON. Expiração por chave via SET EX; a troca
de status de um CorrelationRecord usa SET KEEPTTL para não renovar o prazo.

Contrato de Keys:
    As keys já chegam com namespace (task:, ratelimit:, api_calls:).
    NUNCA usar credenciais como parte da key; usar a identidade numérica.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from app.protocols.kv_store import AsyncKeyValueStoreProtocol
from utils.errors import RedisConnectionError

if TYPE_CHECKING:
    from redis.asyncio import Redis as AsyncRedis

logger = logging.getLogger(__name__)


class RedisKeyValueStore(AsyncKeyValueStoreProtocol):
    """Store chave-valor usando Redis assíncrono.

    Args:
        async_redis_client: Cliente redis.asyncio
    """

    def __init__(self, async_redis_client: AsyncRedis[bytes]) -> None:
        self._redis = async_redis_client

    async def get_json(self, key: str) -> Any | None:
        try:
            data = await self._redis.get(key)
        except Exception as exc:
            raise RedisConnectionError("Falha ao ler chave no Redis") from exc
        if data is None:
            return None
        try:
            return json.loads(data)
        except (json.JSONDecodeError, TypeError) as exc:
            logger.warning(
                "kv_value_decode_error",
                extra={"key_prefix": key.split(":", 1)[0], "error": str(exc)},
            )
            return None

    async def set_json(
        self,
        key: str,
        value: Any,
        ttl_seconds: int | None = None,
        keep_ttl: bool = False,
    ) -> None:
        data = json.dumps(value)
        try:
            if keep_ttl:
                await self._redis.set(key, data, keepttl=True)
            elif ttl_seconds is not None:
                await self._redis.set(key, data, ex=ttl_seconds)
            else:
                await self._redis.set(key, data)
        except Exception as exc:
            raise RedisConnectionError("Falha ao gravar chave no Redis") from exc
        logger.debug(
            "kv_value_saved",
            extra={"key_prefix": key.split(":", 1)[0], "ttl": ttl_seconds, "keep_ttl": keep_ttl},
        )

    async def incr(self, key: str) -> int:
        try:
            return int(await self._redis.incr(key))
        except Exception as exc:
            raise RedisConnectionError("Falha ao incrementar contador no Redis") from exc

    async def lpush(self, key: str, value: str) -> int:
        try:
            return int(await self._redis.lpush(key, value))
        except Exception as exc:
            raise RedisConnectionError("Falha ao inserir em lista no Redis") from exc
