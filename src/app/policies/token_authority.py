"""Validação de credenciais e identidade estável por credencial."""

from __future__ import annotations

import hmac
import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = logging.getLogger(__name__)


class TokenAuthority:
    """Valida credenciais contra o conjunto configurado.

    A identidade de uma credencial é sua posição no conjunto, estável
    enquanto a configuração não muda. Conjunto vazio nega tudo.

    Args:
        tokens: Credenciais aceitas, na ordem que define a identidade
    """

    def __init__(self, tokens: Sequence[str]) -> None:
        self._tokens = tuple(tokens)

    @property
    def configured(self) -> bool:
        return bool(self._tokens)

    def _index_of(self, credential: str | None) -> int | None:
        if not credential:
            return None
        candidate = credential.encode("utf-8")
        match: int | None = None
        # Compara contra todas para não vazar posição por timing
        for index, token in enumerate(self._tokens):
            if hmac.compare_digest(candidate, token.encode("utf-8")) and match is None:
                match = index
        return match

    def validate(self, credential: str | None) -> bool:
        """Retorna True se a credencial pertence ao conjunto configurado."""
        if not self._tokens:
            logger.error(
                "auth_no_credentials_configured",
                extra={"component": "token_authority", "result": "deny_all"},
            )
            return False
        return self._index_of(credential) is not None

    def identity_of(self, credential: str | None) -> int | None:
        """Retorna a identidade (índice) da credencial, ou None se inválida."""
        return self._index_of(credential)
