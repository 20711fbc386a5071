"""Formatter JSON do relay.

Cada linha de log é um objeto JSON com asctime, level, logger, message,
request_id e service, mais o que vier em `extra`. Chaves sensíveis
(credenciais e senhas da API de tarefas) são mascaradas antes da
serialização, inclusive dentro de dicts e listas aninhados.
"""

from __future__ import annotations

from typing import Any

from pythonjsonlogger.json import JsonFormatter

LOG_FIELDS = (
    "asctime",
    "levelname",
    "name",
    "message",
    "request_id",
    "service",
)

FIELD_RENAME_MAP = {
    "levelname": "level",
    "name": "logger",
}

MASK = "***"

SENSITIVE_KEYS = frozenset(
    {
        "authentication",
        "authorization",
        "credential",
        "password",
        "token",
    }
)


def is_sensitive_key(key: str) -> bool:
    """Chave exata ou com sufixo `_<sensível>` (ex.: task_api_password)."""
    lowered = key.lower()
    return any(lowered == name or lowered.endswith(f"_{name}") for name in SENSITIVE_KEYS)


def mask_sensitive(value: Any) -> Any:
    if isinstance(value, dict):
        return {
            key: MASK if is_sensitive_key(str(key)) else mask_sensitive(item)
            for key, item in value.items()
        }
    if isinstance(value, list | tuple):
        return [mask_sensitive(item) for item in value]
    return value


class RelayJsonFormatter(JsonFormatter):
    """JsonFormatter que mascara chaves sensíveis vindas de `extra`."""

    def process_log_record(self, log_record: dict[str, Any]) -> dict[str, Any]:
        return mask_sensitive(log_record)


def create_json_formatter() -> RelayJsonFormatter:
    """Cria o formatter usado pelo handler raiz.

    Exemplo de output:
        {"asctime": "2026-02-02 10:30:00,123", "level": "WARNING",
         "logger": "app.services.usage_counter",
         "message": "usage_counter_update_failed", "request_id": "abc-123",
         "service": "relay_postback", "identity": 0}
    """
    return RelayJsonFormatter(
        " ".join(f"%({field})s" for field in LOG_FIELDS),
        rename_fields=FIELD_RENAME_MAP,
    )
