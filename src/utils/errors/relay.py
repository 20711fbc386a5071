"""Taxonomia de erros do relay de tarefas.

Cada erro carrega o status HTTP e um código estável usados pelas rotas
para montar a resposta. Erros de infraestrutura ficam em exceptions.py.
"""

from __future__ import annotations


class RelayError(Exception):
    """Base para erros que encerram a requisição atual."""

    status_code: int = 500
    error_code: str = "RELAY_ERROR"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class Unauthorized(RelayError):
    """Credencial ausente ou inválida."""

    status_code = 401
    error_code = "UNAUTHORIZED"


class RateLimited(RelayError):
    """Admissão negada pelo rate limiter."""

    status_code = 429
    error_code = "RATE_LIMITED"


class InvalidRequest(RelayError):
    """Body da submissão fora do formato aceito."""

    status_code = 400
    error_code = "INVALID_REQUEST"


class UpstreamTaskCreationFailed(RelayError):
    """API externa de tarefas não devolveu um task id."""

    status_code = 500
    error_code = "UPSTREAM_TASK_CREATION_FAILED"


class MalformedPayload(RelayError):
    """Postback ilegível ou sem os campos de correlação obrigatórios."""

    status_code = 500
    error_code = "MALFORMED_PAYLOAD"


class DeliveryFailed(RelayError):
    """Entrega ao webhook de destino falhou (aborta os chunks restantes)."""

    status_code = 500
    error_code = "DELIVERY_FAILED"

    def __init__(
        self,
        message: str,
        chunk_index: int | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.chunk_index = chunk_index
        self.response_status = status_code


class DeliveryExhausted(DeliveryFailed):
    """Destino continuou em rate limit após todas as tentativas."""

    error_code = "DELIVERY_EXHAUSTED"
