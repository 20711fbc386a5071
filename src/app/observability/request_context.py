"""Gerenciamento de request_id para rastreamento de requisições.

O request_id é lido do header X-Request-Id (ou gerado) e injetado em logs.
Não confundir com o correlation id do relay, que identifica uma submissão
no caminho do postback.

Usa ContextVar para ser thread/async-safe.

Uso:
    from app.observability import get_request_id, set_request_id

    token = set_request_id(request.headers.get("x-request-id"))
    try:
        # processar request
    finally:
        reset_request_id(token)
"""

from __future__ import annotations

import uuid
from contextvars import ContextVar, Token

_request_id: ContextVar[str] = ContextVar("request_id", default="")


def get_request_id() -> str:
    """Retorna o request_id do contexto atual (ou string vazia)."""
    return _request_id.get()


def set_request_id(request_id: str | None = None) -> Token[str]:
    """Define o request_id no contexto atual.

    Args:
        request_id: ID a definir. Se None, gera um novo UUID.

    Returns:
        Token para reset posterior via reset_request_id().
    """
    value = request_id or str(uuid.uuid4())
    return _request_id.set(value)


def reset_request_id(token: Token[str]) -> None:
    """Restaura o request_id ao valor anterior."""
    _request_id.reset(token)
