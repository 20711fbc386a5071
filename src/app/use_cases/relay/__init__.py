"""Use cases do relay de tarefas: submissão, ingestão e entrega."""

from .deliver_result import (
    MAX_DELIVERY_ATTEMPTS,
    MAX_ITEMS_PER_CALL,
    DeliveryEngine,
    build_payload_slice,
    split_into_chunks,
)
from .ingest_postback import PostbackIngestor, count_unique_items, decode_body
from .process_postback import PostbackOutcome, ProcessPostbackUseCase
from .submit_task import TaskSubmitter, generate_correlation_id

__all__ = [
    # Submissão
    "TaskSubmitter",
    "generate_correlation_id",
    # Postback
    "PostbackIngestor",
    "count_unique_items",
    "decode_body",
    # Entrega
    "MAX_DELIVERY_ATTEMPTS",
    "MAX_ITEMS_PER_CALL",
    "DeliveryEngine",
    "build_payload_slice",
    "split_into_chunks",
    # Pipeline
    "PostbackOutcome",
    "ProcessPostbackUseCase",
]
