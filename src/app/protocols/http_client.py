"""Protocolos HTTP usados pelo app.

Evita dependência direta de httpx nos casos de uso.
"""

from __future__ import annotations

from typing import Any, Protocol


class HttpResponseProtocol(Protocol):
    """Visão mínima de uma resposta HTTP."""

    status_code: int


class WebhookTransportProtocol(Protocol):
    """Contrato mínimo para POST JSON ao webhook de destino."""

    async def post(
        self,
        url: str,
        json: dict[str, Any],
        headers: dict[str, str] | None = None,
    ) -> HttpResponseProtocol: ...
