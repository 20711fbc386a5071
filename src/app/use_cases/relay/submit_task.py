"""Use case de submissão de tarefas à API externa.

Fluxo: autenticação → rate limit → validação → correlationId →
postback_url → criação da tarefa → CorrelationRecord → contabilização.
"""

from __future__ import annotations

import logging
import secrets
import time
from collections.abc import Callable
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from app.domain import parse_task_batch
from app.infra.http import HttpError
from app.protocols.models import CorrelationRecord, SubmissionResult
from utils.errors import RateLimited, Unauthorized, UpstreamTaskCreationFailed

if TYPE_CHECKING:
    from app.policies import RateLimiter, TokenAuthority
    from app.protocols import TaskApiClientProtocol
    from app.services import CorrelationStore, UsageCounter

logger = logging.getLogger(__name__)

_BASE36_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"


def _to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(_BASE36_DIGITS[remainder])
    return "".join(reversed(digits))


def generate_correlation_id() -> str:
    """Timestamp em ms (base36) seguido de sufixo aleatório."""
    return f"{_to_base36(int(time.time() * 1000))}{secrets.token_hex(6)}"


def _utc_now_iso() -> str:
    return datetime.now(UTC).isoformat()


def _extract_task_id(response: dict[str, Any]) -> str | None:
    tasks = response.get("tasks")
    if not isinstance(tasks, list) or not tasks or not isinstance(tasks[0], dict):
        return None
    task_id = tasks[0].get("id")
    if task_id is None or task_id == "":
        return None
    return str(task_id)


class TaskSubmitter:
    """Aceita submissões autenticadas e registra a correlação da tarefa."""

    def __init__(
        self,
        *,
        token_authority: TokenAuthority,
        rate_limiter: RateLimiter,
        task_api: TaskApiClientProtocol,
        correlation_store: CorrelationStore,
        usage_counter: UsageCounter,
        base_postback_url: str,
        id_factory: Callable[[], str] = generate_correlation_id,
        clock: Callable[[], str] = _utc_now_iso,
    ) -> None:
        self._token_authority = token_authority
        self._rate_limiter = rate_limiter
        self._task_api = task_api
        self._correlation_store = correlation_store
        self._usage_counter = usage_counter
        self._base_postback_url = base_postback_url
        self._id_factory = id_factory
        self._clock = clock

    async def submit(
        self,
        body: Any,
        credential: str | None,
        client_key: str,
    ) -> SubmissionResult:
        """Processa uma submissão.

        Raises:
            Unauthorized: Credencial ausente ou desconhecida.
            RateLimited: Janela do cliente esgotada.
            InvalidRequest: Body fora do formato aceito.
            UpstreamTaskCreationFailed: API externa sem task id.
            InfrastructureError: Falha ao persistir o CorrelationRecord.
        """
        if not self._token_authority.validate(credential):
            raise Unauthorized("Unauthorized: Invalid or missing token")

        if not await self._rate_limiter.allow(client_key):
            raise RateLimited("Rate limit exceeded. Please try again later.")

        item = parse_task_batch(body)
        correlation_id = self._id_factory()
        postback_url = f"{self._base_postback_url}{correlation_id}"

        try:
            response = await self._task_api.create_tasks([item.to_task_payload(postback_url)])
        except (HttpError, ValueError) as exc:
            logger.error(
                "task_creation_request_failed",
                extra={"correlation_id": correlation_id, "error_type": type(exc).__name__},
            )
            raise UpstreamTaskCreationFailed("Failed to create task in API") from exc

        task_id = _extract_task_id(response)
        if task_id is None:
            logger.error(
                "task_creation_missing_id",
                extra={"correlation_id": correlation_id},
            )
            raise UpstreamTaskCreationFailed("No task ID received from API")

        identity = self._token_authority.identity_of(credential)
        record = CorrelationRecord(
            task_id=task_id,
            correlation_id=correlation_id,
            original_request=item.model_dump(exclude_unset=True),
            created_at=self._clock(),
            credential_identity=identity,
        )
        await self._correlation_store.save(record)

        if identity is not None:
            await self._usage_counter.record_submission(identity, correlation_id)

        logger.info(
            "task_submitted",
            extra={
                "task_id": task_id,
                "correlation_id": correlation_id,
                "credential_identity": identity,
            },
        )
        return SubmissionResult(task_id=task_id, correlation_id=correlation_id)
