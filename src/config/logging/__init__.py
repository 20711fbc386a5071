"""Configuração de logging estruturado.

Re-exporta funções e classes para configuração de logging JSON.

Uso:
    from config.logging import configure_logging, get_logger

    # Na inicialização (bootstrap)
    configure_logging(level="INFO", service_name="relay_postback")

    # Em qualquer módulo
    logger = get_logger(__name__)
    logger.info("Operação OK", extra={"latency_ms": 42})

Campos presentes em todo log (chaves sensíveis de extra saem mascaradas):
- request_id
- service
- level
- logger
- message
- asctime
"""

from config.logging.config import configure_logging, get_logger, log_fallback
from config.logging.filters import RequestContextFilter
from config.logging.formatters import (
    FIELD_RENAME_MAP,
    LOG_FIELDS,
    RelayJsonFormatter,
    create_json_formatter,
)

__all__ = [
    "FIELD_RENAME_MAP",
    "LOG_FIELDS",
    "RelayJsonFormatter",
    # Filters
    "RequestContextFilter",
    # Configuração principal
    "configure_logging",
    # Formatters
    "create_json_formatter",
    "get_logger",
    "log_fallback",
]
