"""Endpoint de postback da API externa de tarefas.

Endpoints:
- POST /postback/{postback_id}: ingere o resultado e entrega ao destino

O postback_id é o correlationId embutido no postback_url da submissão.
Respostas:
- 200: {"success": true, "message": ...}
- 500: {"success": false, "error": ...} (payload malformado ou entrega falhou)
"""

from __future__ import annotations

import logging
import time

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from app.bootstrap import get_postback_processor
from app.observability import record_latency, reset_request_id, set_request_id
from utils.errors import InfrastructureError, RelayError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/{postback_id}", response_model=None)
async def receive_postback(postback_id: str, request: Request) -> JSONResponse:
    """Recebe o postback (possivelmente comprimido) e repassa os itens."""
    token = set_request_id(request.headers.get("x-request-id"))
    started_at = time.perf_counter()
    outcome = "ok"

    try:
        raw_body = await request.body()
        headers = dict(request.headers)
        logger.info(
            "postback_received",
            extra={
                "postback_id": postback_id,
                "payload_size": len(raw_body),
                "content_encoding": headers.get("content-encoding"),
            },
        )

        try:
            result = await get_postback_processor().execute(postback_id, raw_body, headers)
        except RelayError as exc:
            outcome = exc.error_code
            logger.warning(
                "postback_processing_failed",
                extra={"postback_id": postback_id, "error_code": exc.error_code},
            )
            return JSONResponse(
                content={"success": False, "error": exc.message},
                status_code=exc.status_code,
            )
        except InfrastructureError as exc:
            outcome = "INFRASTRUCTURE_ERROR"
            logger.error(
                "postback_store_failed",
                extra={"postback_id": postback_id, "error_type": type(exc).__name__},
            )
            return JSONResponse(
                content={"success": False, "error": "Internal server error"},
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )
        except Exception:
            outcome = "UNEXPECTED_ERROR"
            logger.exception("postback_unexpected_error", extra={"postback_id": postback_id})
            return JSONResponse(
                content={"success": False, "error": "Internal server error"},
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        return JSONResponse(
            content={"success": True, "message": result.message},
            status_code=status.HTTP_200_OK,
        )
    finally:
        record_latency(
            "postback_pipeline",
            "execute",
            (time.perf_counter() - started_at) * 1000,
            outcome=outcome,
        )
        reset_request_id(token)
