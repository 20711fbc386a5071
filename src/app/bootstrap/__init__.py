"""Bootstrap da aplicação: inicialização e wiring.

Este módulo é o composition root: configura logging, inicializa
dependências e conecta implementações concretas aos protocolos.

Uso:
    from app.bootstrap import initialize_app, get_task_submitter

    # Na inicialização do serviço
    initialize_app()

    # Obter use cases
    submitter = get_task_submitter()
    processor = get_postback_processor()
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache

from app.observability import get_request_id
from config.logging import configure_logging
from config.settings import (
    get_auth_settings,
    get_base_settings,
    get_relay_settings,
    get_store_settings,
)

# Nome do serviço para logs e métricas
SERVICE_NAME = "relay_postback"

# Nível de log padrão (pode ser sobrescrito por env)
DEFAULT_LOG_LEVEL = "INFO"
STRICT_VALIDATION_ENVS = {"staging", "production"}

logger = logging.getLogger(__name__)


def initialize_app() -> None:
    """Inicializa a aplicação com todas as configurações necessárias.

    Deve ser chamada uma vez no início do serviço.

    Configura:
    - Logging estruturado JSON com request_id
    """
    log_level = os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()

    configure_logging(
        level=log_level,
        service_name=SERVICE_NAME,
        request_id_getter=get_request_id,
    )


def initialize_test_app() -> None:
    """Inicializa a aplicação para testes em nível DEBUG."""
    configure_logging(
        level="DEBUG",
        service_name=f"{SERVICE_NAME}_test",
        request_id_getter=get_request_id,
    )


def validate_runtime_settings() -> None:
    """Valida settings obrigatórias no startup.

    Em `staging`/`production` falha rápido para impedir boot inválido.
    Em `development` mantém alerta sem bloquear execução local.
    """
    base = get_base_settings()
    environment = base.environment
    strict_mode = environment in STRICT_VALIDATION_ENVS
    errors: list[str] = []

    errors.extend(f"base: {error}" for error in base.validate())
    errors.extend(f"store: {error}" for error in get_store_settings().validate(base))
    errors.extend(f"relay: {error}" for error in get_relay_settings().validate())
    errors.extend(f"auth: {error}" for error in get_auth_settings().validate())

    if not errors:
        logger.info(
            "settings_validated",
            extra={"component": "bootstrap", "result": "ok", "environment": environment},
        )
        return

    logger.warning(
        "settings_validation_failed",
        extra={
            "component": "bootstrap",
            "result": "failed",
            "environment": environment,
            "error_count": len(errors),
            "errors": errors,
        },
    )
    if strict_mode:
        details = "\n".join(f"- {error}" for error in errors)
        raise RuntimeError(f"Configuração inválida para {environment}:\n{details}")


# ──────────────────────────────────────────────────────────────────────────────
# Getters (lazy initialization com cache)
# ──────────────────────────────────────────────────────────────────────────────


@lru_cache(maxsize=1)
def get_kv_store():
    """Obtém store chave-valor (singleton).

    Returns:
        AsyncKeyValueStoreProtocol configurado conforme env
    """
    from app.bootstrap.dependencies import create_kv_store
    return create_kv_store()


@lru_cache(maxsize=1)
def get_task_submitter():
    """Obtém o TaskSubmitter (singleton)."""
    from app.bootstrap.dependencies import create_task_submitter
    return create_task_submitter(get_kv_store())


@lru_cache(maxsize=1)
def get_postback_processor():
    """Obtém o pipeline de postback (singleton)."""
    from app.bootstrap.dependencies import create_postback_processor
    return create_postback_processor(get_kv_store())
