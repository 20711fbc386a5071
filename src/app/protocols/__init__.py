"""Protocolos e contratos do core da aplicação."""

from .http_client import HttpResponseProtocol, WebhookTransportProtocol
from .kv_store import AsyncKeyValueStoreProtocol
from .models import (
    CorrelationRecord,
    CorrelationStatus,
    DeliveryEnvelope,
    DeliveryReport,
    NormalizedCallback,
    SubmissionResult,
)
from .task_api import TaskApiClientProtocol

__all__ = [
    "AsyncKeyValueStoreProtocol",
    "CorrelationRecord",
    "CorrelationStatus",
    "DeliveryEnvelope",
    "DeliveryReport",
    "HttpResponseProtocol",
    "NormalizedCallback",
    "SubmissionResult",
    "TaskApiClientProtocol",
    "WebhookTransportProtocol",
]
