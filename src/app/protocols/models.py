"""Modelos do relay compartilhados entre use cases, stores e rotas."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Literal

CorrelationStatus = Literal["pending", "completed", "failed"]


@dataclass(frozen=True, slots=True)
class CorrelationRecord:
    """Estado persistido na submissão para casar o postback com o chamador.

    Chave primária no store: task_id (atribuído pela API externa).
    """

    task_id: str
    correlation_id: str
    original_request: dict[str, Any]
    created_at: str
    status: CorrelationStatus = "pending"
    credential_identity: int | None = None

    @property
    def extra(self) -> Any:
        return self.original_request.get("extra")

    @property
    def webhook_override(self) -> str | None:
        return self.original_request.get("webhook") or None

    def with_status(self, status: CorrelationStatus) -> CorrelationRecord:
        return replace(self, status=status)

    def to_dict(self) -> dict[str, Any]:
        return {
            "taskId": self.task_id,
            "status": self.status,
            "originalRequest": self.original_request,
            "correlationId": self.correlation_id,
            "createdAt": self.created_at,
            "credentialIdentity": self.credential_identity,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CorrelationRecord:
        """Reconstrói o record a partir do JSON armazenado.

        Raises:
            KeyError: Se campos obrigatórios estiverem ausentes.
        """
        return cls(
            task_id=str(data["taskId"]),
            correlation_id=str(data["correlationId"]),
            original_request=dict(data.get("originalRequest") or {}),
            created_at=str(data.get("createdAt", "")),
            status=data.get("status", "pending"),
            credential_identity=data.get("credentialIdentity"),
        )


@dataclass(frozen=True, slots=True)
class SubmissionResult:
    """Resultado de uma submissão aceita."""

    task_id: str
    correlation_id: str


@dataclass(slots=True)
class NormalizedCallback:
    """Postback decodificado, validado e enriquecido com a correlação."""

    task_id: str
    correlation_id: str | None
    extra: Any
    webhook_override: str | None
    total_item_count: int
    unique_item_count: int
    items: list[dict[str, Any]]
    raw_envelope: dict[str, Any]
    location_code: Any = None
    keyword: str | None = None
    credential_identity: int | None = None
    record: CorrelationRecord | None = None

    @property
    def has_items(self) -> bool:
        return bool(self.items)


@dataclass(frozen=True, slots=True)
class DeliveryEnvelope:
    """Unidade enviada ao webhook de destino para um chunk."""

    task_id: str
    chunk_index: int
    total_chunks: int
    total_item_count: int
    unique_item_count: int
    payload_slice: dict[str, Any]
    extra: Any = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "taskId": self.task_id,
            "chunkIndex": self.chunk_index,
            "totalChunks": self.total_chunks,
            "totalItemCount": self.total_item_count,
            "uniqueItemCount": self.unique_item_count,
            "payloadSlice": self.payload_slice,
            "extra": self.extra,
        }


@dataclass(slots=True)
class DeliveryReport:
    """Resumo de uma entrega concluída."""

    destination: str
    total_chunks: int
    chunks_delivered: int = 0
    acknowledged_only: bool = False
    status_codes: list[int] = field(default_factory=list)
