"""Settings de credenciais dos chamadores.

O conjunto válido é formado pelos valores de todas as variáveis
AUTH_TOKEN_*, ordenadas pelo nome da variável. A posição na lista é a
identidade estável usada na contabilização de uso.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache

AUTH_TOKEN_PREFIX: str = "AUTH_TOKEN_"


@dataclass(frozen=True)
class AuthSettings:
    """Conjunto de credenciais aceitas.

    Attributes:
        tokens: Credenciais opacas, na ordem que define a identidade
    """

    tokens: tuple[str, ...] = field(default_factory=tuple)

    def validate(self) -> list[str]:
        """Valida o conjunto de credenciais.

        Returns:
            Lista de erros de validação.
        """
        if not self.tokens:
            return ["Nenhuma variável AUTH_TOKEN_* configurada (todas as submissões serão negadas)"]
        return []


def _load_from_env() -> AuthSettings:
    """Carrega AuthSettings a partir de variáveis de ambiente."""
    names = sorted(name for name in os.environ if name.startswith(AUTH_TOKEN_PREFIX))
    tokens = tuple(os.environ[name] for name in names if os.environ[name])
    return AuthSettings(tokens=tokens)


@lru_cache(maxsize=1)
def get_auth_settings() -> AuthSettings:
    """Retorna instância cacheada de AuthSettings."""
    return _load_from_env()
