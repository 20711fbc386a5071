"""Configuração centralizada de logging.

Funções para configurar logging estruturado JSON com:
- Campos obrigatórios (request_id, service, level, logger, message)
- Formatação padronizada
- Níveis configuráveis por ambiente

Uso:
    from config.logging import configure_logging, get_logger

    # Na inicialização do serviço (app/bootstrap/)
    configure_logging(level="INFO", service_name="relay_postback")

    # Em qualquer módulo
    logger = get_logger(__name__)
    logger.info("task_submitted", extra={"task_id": "abc"})
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from config.logging.filters import RequestContextFilter
from config.logging.formatters import create_json_formatter

if TYPE_CHECKING:
    from collections.abc import Callable

# Níveis de log válidos
VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})

# Nome padrão do serviço
DEFAULT_SERVICE_NAME = "relay_postback"


def configure_logging(
    level: str = "INFO",
    service_name: str = DEFAULT_SERVICE_NAME,
    request_id_getter: Callable[[], str] | None = None,
) -> None:
    """Configura logging JSON estruturado para o serviço.

    Deve ser chamada uma vez na inicialização do serviço (app/bootstrap/).

    Args:
        level: Nível de log (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        service_name: Nome do serviço para identificação nos logs.
        request_id_getter: Função opcional que retorna o request_id
            do contexto atual (ex: de ContextVar).

    Raises:
        ValueError: Se o nível de log for inválido.
    """
    level_upper = level.upper()
    if level_upper not in VALID_LOG_LEVELS:
        raise ValueError(
            f"Nível de log inválido: {level}. "
            f"Válidos: {', '.join(sorted(VALID_LOG_LEVELS))}"
        )

    handler = logging.StreamHandler()
    handler.setLevel(level_upper)
    handler.setFormatter(create_json_formatter())
    handler.addFilter(RequestContextFilter(service_name, request_id_getter))

    root = logging.getLogger()
    root.setLevel(level_upper)
    # Substituir handlers existentes para evitar duplicação
    root.handlers = [handler]


def get_logger(name: str) -> logging.Logger:
    """Retorna logger para o módulo especificado.

    O filter injeta automaticamente service e request_id.
    """
    return logging.getLogger(name)


def log_fallback(
    logger: logging.Logger,
    component: str,
    reason: str | None = None,
    **context: object,
) -> None:
    """Log observável de fallback usado.

    Registra quando um caminho degradado foi acionado (ex: CorrelationRecord
    ausente, webhook padrão no lugar do override).

    Args:
        logger: Logger instance.
        component: Nome do componente (ex: "postback_ingestor").
        reason: Razão do fallback (ex: "correlation_not_found").
        **context: Campos extras sem dados sensíveis.

    Exemplo:
        log_fallback(logger, "postback_ingestor", reason="correlation_not_found", task_id=tid)
    """
    extra: dict[str, object] = {
        "fallback_used": True,
        "component": component,
        **context,
    }
    if reason:
        extra["reason"] = reason

    logger.info(
        "Fallback applied for %s",
        component,
        extra=extra,
    )
