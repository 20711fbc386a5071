"""Protocolo do cliente da API externa de tarefas."""

from __future__ import annotations

from typing import Any, Protocol


class TaskApiClientProtocol(Protocol):
    """Contrato mínimo para criação de tarefas na API externa."""

    async def create_tasks(self, tasks: list[dict[str, Any]]) -> dict[str, Any]:
        """Submete o lote e retorna o JSON de resposta da API."""
        ...
