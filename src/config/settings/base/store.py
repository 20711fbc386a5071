"""Settings do store chave-valor durável.

Guarda CorrelationRecord, janelas de rate limit e contadores de uso.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from config.settings.base.core import BaseSettings

StoreBackend = Literal["memory", "redis"]


@dataclass(frozen=True)
class StoreSettings:
    """Configurações do store chave-valor.

    Attributes:
        backend: Backend do store (memory|redis)
    """

    backend: StoreBackend = "memory"

    def validate(self, base: BaseSettings) -> list[str]:
        """Valida configurações do store.

        Args:
            base: BaseSettings para verificar ambiente.

        Returns:
            Lista de erros de validação.
        """
        errors: list[str] = []

        if self.backend not in ("memory", "redis"):
            errors.append(f"KV_STORE_BACKEND inválido: {self.backend}")

        if self.backend == "memory" and not base.is_development:
            errors.append("KV_STORE_BACKEND=memory proibido em staging/production. Use Redis.")

        if self.backend == "redis" and not base.redis_url:
            errors.append("KV_STORE_BACKEND=redis requer REDIS_URL configurado")

        return errors


def _default_backend() -> StoreBackend:
    environment = os.getenv("ENVIRONMENT", "development").lower()
    return "redis" if environment in ("staging", "production") else "memory"


def _load_store_from_env() -> StoreSettings:
    """Carrega StoreSettings de variáveis de ambiente."""
    backend_str = os.getenv("KV_STORE_BACKEND", _default_backend()).lower()
    backend: StoreBackend = backend_str if backend_str in ("memory", "redis") else "memory"
    return StoreSettings(backend=backend)


@lru_cache(maxsize=1)
def get_store_settings() -> StoreSettings:
    """Retorna instância cacheada de StoreSettings."""
    return _load_store_from_env()
