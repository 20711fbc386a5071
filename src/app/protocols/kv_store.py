"""Protocolo do store chave-valor durável.

Único recurso mutável compartilhado do relay: guarda CorrelationRecord,
janelas de rate limit e contadores de uso. Acesso sem locks distribuídos.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class AsyncKeyValueStoreProtocol(ABC):
    """Contrato assíncrono mínimo para o store chave-valor.

    Valores são serializados como JSON pelas implementações.
    """

    @abstractmethod
    async def get_json(self, key: str) -> Any | None:
        """Lê e desserializa o valor da chave.

        Returns:
            Valor armazenado ou None se ausente/expirado.
        """

    @abstractmethod
    async def set_json(
        self,
        key: str,
        value: Any,
        ttl_seconds: int | None = None,
        keep_ttl: bool = False,
    ) -> None:
        """Grava valor serializado.

        Args:
            key: Chave completa (já com namespace)
            value: Valor serializável em JSON
            ttl_seconds: Expiração em segundos (None = sem expiração)
            keep_ttl: Preserva a expiração atual da chave (ignora ttl_seconds)
        """

    @abstractmethod
    async def incr(self, key: str) -> int:
        """Incrementa contador inteiro e retorna o novo valor."""

    @abstractmethod
    async def lpush(self, key: str, value: str) -> int:
        """Insere valor no início da lista e retorna o novo tamanho."""
