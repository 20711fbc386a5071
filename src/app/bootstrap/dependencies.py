"""Factories do relay: criação de implementações concretas.

Este módulo centraliza a criação de stores, policies e use cases
baseadas nas configurações de ambiente.
"""

from __future__ import annotations

import logging

from app.bootstrap.clients import create_async_redis_client
from app.infra.http import HttpClient, HttpClientConfig
from app.infra.stores import MemoryKeyValueStore, RedisKeyValueStore
from app.infra.task_api import create_task_api_client
from app.policies import RateLimiter, TokenAuthority
from app.protocols.kv_store import AsyncKeyValueStoreProtocol
from app.services import CorrelationStore, UsageCounter
from app.use_cases.relay import (
    DeliveryEngine,
    PostbackIngestor,
    ProcessPostbackUseCase,
    TaskSubmitter,
)
from config.settings import (
    get_auth_settings,
    get_base_settings,
    get_relay_settings,
    get_store_settings,
)

logger = logging.getLogger(__name__)


def create_kv_store() -> AsyncKeyValueStoreProtocol:
    """Cria store chave-valor baseado na configuração.

    Lê KV_STORE_BACKEND da env:
    - "memory": MemoryKeyValueStore (dev only)
    - "redis": RedisKeyValueStore (staging/production)

    Returns:
        Implementação de AsyncKeyValueStoreProtocol
    """
    backend = get_store_settings().backend

    if backend == "redis":
        store = RedisKeyValueStore(create_async_redis_client())
        logger.info("kv_store_created", extra={"backend": "redis"})
        return store

    if backend == "memory":
        environment = get_base_settings().environment
        if environment != "development":
            logger.warning(
                "memory_store_in_non_dev",
                extra={"backend": "memory", "environment": environment},
            )
        logger.info("kv_store_created", extra={"backend": "memory"})
        return MemoryKeyValueStore()

    msg = f"KV_STORE_BACKEND inválido: {backend}"
    raise ValueError(msg)


def create_rate_limiter(store: AsyncKeyValueStoreProtocol) -> RateLimiter:
    relay = get_relay_settings()
    return RateLimiter(
        store,
        limit=relay.rate_limit_max_requests,
        window_seconds=relay.rate_limit_window_seconds,
    )


def create_token_authority() -> TokenAuthority:
    return TokenAuthority(get_auth_settings().tokens)


def create_correlation_store(store: AsyncKeyValueStoreProtocol) -> CorrelationStore:
    return CorrelationStore(store, ttl_seconds=get_relay_settings().correlation_ttl_seconds)


def create_task_submitter(store: AsyncKeyValueStoreProtocol) -> TaskSubmitter:
    """Monta o TaskSubmitter com policies, cliente da API e stores."""
    relay = get_relay_settings()
    return TaskSubmitter(
        token_authority=create_token_authority(),
        rate_limiter=create_rate_limiter(store),
        task_api=create_task_api_client(relay),
        correlation_store=create_correlation_store(store),
        usage_counter=UsageCounter(store),
        base_postback_url=relay.base_postback_url,
    )


def create_postback_processor(store: AsyncKeyValueStoreProtocol) -> ProcessPostbackUseCase:
    """Monta o pipeline de postback (ingestão + entrega)."""
    relay = get_relay_settings()
    correlation_store = create_correlation_store(store)
    transport = HttpClient(HttpClientConfig(timeout_seconds=relay.webhook_timeout_seconds))
    return ProcessPostbackUseCase(
        ingestor=PostbackIngestor(correlation_store),
        engine=DeliveryEngine(transport),
        correlation_store=correlation_store,
        usage_counter=UsageCounter(store),
        default_webhook_url=relay.default_webhook_url or None,
    )
