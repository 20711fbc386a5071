"""Observabilidade: logs estruturados, rastreamento e métricas.

Uso:
    from app.observability import get_request_id, set_request_id
    from app.observability import record_latency, record_retry
"""

from app.observability.metrics import record_latency, record_retry
from app.observability.request_context import (
    get_request_id,
    reset_request_id,
    set_request_id,
)

__all__ = [
    "get_request_id",
    "record_latency",
    "record_retry",
    "reset_request_id",
    "set_request_id",
]
