"""Settings do relay de tarefas assíncronas.

Configura o acesso à API externa de tarefas, a URL base de postback,
o webhook de destino padrão e os limites de admissão.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

DEFAULT_CREDENTIAL_HEADER: str = "authentication"


@dataclass(frozen=True)
class RelaySettings:
    """Configurações do relay.

    Attributes:
        task_api_url: Endpoint de criação de tarefas da API externa
        task_api_login: Login para Basic auth na API externa
        task_api_password: Senha para Basic auth na API externa
        base_postback_url: URL base; o correlation id é anexado ao final
        default_webhook_url: Webhook de destino quando não há override
        task_api_timeout_seconds: Timeout da chamada de criação de tarefa
        webhook_timeout_seconds: Timeout de cada POST ao webhook de destino
        rate_limit_max_requests: Máximo de submissões por janela e por chave
        rate_limit_window_seconds: Tamanho da janela deslizante
        correlation_ttl_seconds: Expiração do CorrelationRecord não reclamado
        credential_header: Header HTTP que carrega a credencial do chamador
    """

    # API externa de tarefas
    task_api_url: str = ""
    task_api_login: str = ""
    task_api_password: str = ""
    base_postback_url: str = ""

    # Destino
    default_webhook_url: str = ""

    # Timeouts
    task_api_timeout_seconds: float = 30.0
    webhook_timeout_seconds: float = 30.0

    # Admissão
    rate_limit_max_requests: int = 1000
    rate_limit_window_seconds: int = 60

    # Correlação
    correlation_ttl_seconds: int = 7 * 24 * 3600

    credential_header: str = DEFAULT_CREDENTIAL_HEADER

    def validate(self) -> list[str]:
        """Valida configurações mínimas do relay.

        Returns:
            Lista de erros de validação (vazia = tudo OK).
        """
        errors: list[str] = []

        if not self.task_api_url:
            errors.append("TASK_API_URL não configurado")

        if not self.task_api_login or not self.task_api_password:
            errors.append("TASK_API_LOGIN/TASK_API_PASSWORD não configurados")

        if not self.base_postback_url:
            errors.append("BASE_POSTBACK_URL não configurado")

        if not self.default_webhook_url:
            errors.append("WEBHOOK_URL não configurado")

        if self.rate_limit_max_requests < 1:
            errors.append("RATE_LIMIT_MAX_REQUESTS deve ser >= 1")

        if self.rate_limit_window_seconds < 1:
            errors.append("RATE_LIMIT_WINDOW_SECONDS deve ser >= 1")

        if self.correlation_ttl_seconds <= 0:
            errors.append("CORRELATION_TTL_SECONDS deve ser > 0")

        if self.task_api_timeout_seconds <= 0 or self.webhook_timeout_seconds <= 0:
            errors.append("Timeouts HTTP devem ser > 0")

        return errors


def _load_from_env() -> RelaySettings:
    """Carrega RelaySettings a partir de variáveis de ambiente."""
    return RelaySettings(
        task_api_url=os.getenv("TASK_API_URL", os.getenv("API_URL", "")),
        task_api_login=os.getenv("TASK_API_LOGIN", os.getenv("API_LOGIN", "")),
        task_api_password=os.getenv("TASK_API_PASSWORD", os.getenv("API_PASSWORD", "")),
        base_postback_url=os.getenv("BASE_POSTBACK_URL", ""),
        default_webhook_url=os.getenv("WEBHOOK_URL", ""),
        task_api_timeout_seconds=float(os.getenv("TASK_API_TIMEOUT_SECONDS", "30")),
        webhook_timeout_seconds=float(os.getenv("WEBHOOK_TIMEOUT_SECONDS", "30")),
        rate_limit_max_requests=int(os.getenv("RATE_LIMIT_MAX_REQUESTS", "1000")),
        rate_limit_window_seconds=int(os.getenv("RATE_LIMIT_WINDOW_SECONDS", "60")),
        correlation_ttl_seconds=int(os.getenv("CORRELATION_TTL_SECONDS", str(7 * 24 * 3600))),
        credential_header=os.getenv("CREDENTIAL_HEADER", DEFAULT_CREDENTIAL_HEADER).lower(),
    )


@lru_cache(maxsize=1)
def get_relay_settings() -> RelaySettings:
    """Retorna instância cacheada de RelaySettings.

    A cache garante singleton para múltiplas injeções.
    """
    return _load_from_env()
