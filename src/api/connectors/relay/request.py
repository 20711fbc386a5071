"""Extração de credencial, chave de cliente e body da submissão."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Mapping

BEARER_PREFIX = "bearer "
UNKNOWN_CLIENT = "unknown"


def extract_credential(headers: Mapping[str, str], header_name: str) -> str | None:
    """Credencial do header configurado, ou do Authorization Bearer.

    Args:
        headers: Headers recebidos (nomes em minúsculas)
        header_name: Header dedicado à credencial

    Returns:
        Credencial sem espaços nas bordas, ou None se ausente.
    """
    credential = (headers.get(header_name.lower()) or "").strip()
    if credential:
        return credential
    authorization = (headers.get("authorization") or "").strip()
    if authorization.lower().startswith(BEARER_PREFIX):
        return authorization[len(BEARER_PREFIX) :].strip() or None
    return None


def extract_client_key(headers: Mapping[str, str], peer_host: str | None) -> str:
    """Primeiro endereço do X-Forwarded-For, senão o endereço do peer."""
    forwarded = headers.get("x-forwarded-for") or ""
    first_hop = forwarded.split(",")[0].strip()
    if first_hop:
        return first_hop
    return peer_host or UNKNOWN_CLIENT


def parse_submission_body(raw_body: bytes) -> Any:
    """JSON do body, ou None se ilegível.

    A validação do formato fica a cargo do use case, depois da
    autenticação e do rate limit.
    """
    try:
        return json.loads(raw_body or b"null")
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None
