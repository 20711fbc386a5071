"""Endpoint de submissão de tarefas.

Endpoints:
- POST /tasks: autentica, aplica rate limit, valida e cria a tarefa

Respostas:
- 200: {"success": true, "taskId": ..., "correlationId": ...}
- 400/401/429/500: {"success": false, "error": ...}
"""

from __future__ import annotations

import logging
import time

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from api.connectors.relay import (
    extract_client_key,
    extract_credential,
    parse_submission_body,
)
from app.bootstrap import get_task_submitter
from app.observability import record_latency, reset_request_id, set_request_id
from config.settings import get_relay_settings
from utils.errors import InfrastructureError, RelayError

logger = logging.getLogger(__name__)

router = APIRouter()


def _error_response(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(
        content={"success": False, "error": message},
        status_code=status_code,
    )


@router.post("", response_model=None)
async def submit_task(request: Request) -> JSONResponse:
    """Recebe um lote de um item e cria a tarefa na API externa."""
    token = set_request_id(request.headers.get("x-request-id"))
    started_at = time.perf_counter()
    outcome = "ok"

    try:
        settings = get_relay_settings()
        headers = request.headers
        credential = extract_credential(headers, settings.credential_header)
        peer_host = request.client.host if request.client else None
        client_key = extract_client_key(headers, peer_host)
        body = parse_submission_body(await request.body())

        try:
            result = await get_task_submitter().submit(body, credential, client_key)
        except RelayError as exc:
            outcome = exc.error_code
            logger.warning(
                "task_submission_rejected",
                extra={"error_code": exc.error_code, "status_code": exc.status_code},
            )
            return _error_response(exc.message, exc.status_code)
        except InfrastructureError as exc:
            outcome = "INFRASTRUCTURE_ERROR"
            logger.error(
                "task_submission_store_failed",
                extra={"error_type": type(exc).__name__},
            )
            return _error_response(
                "Internal server error",
                status.HTTP_500_INTERNAL_SERVER_ERROR,
            )
        except Exception:
            outcome = "UNEXPECTED_ERROR"
            logger.exception("task_submission_unexpected_error")
            return _error_response(
                "Internal server error",
                status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        return JSONResponse(
            content={
                "success": True,
                "taskId": result.task_id,
                "correlationId": result.correlation_id,
            },
            status_code=status.HTTP_200_OK,
        )
    finally:
        record_latency(
            "task_submitter",
            "submit",
            (time.perf_counter() - started_at) * 1000,
            outcome=outcome,
        )
        reset_request_id(token)
