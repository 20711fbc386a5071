"""Cliente HTTP base para chamadas externas (API de tarefas e webhooks)."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

import httpx

logger = logging.getLogger(__name__)


@dataclass
class HttpClientConfig:
    """Configuração do cliente HTTP."""

    timeout_seconds: float = 30.0
    default_headers: dict[str, str] = field(default_factory=dict)
    verify_ssl: bool = True


class HttpError(Exception):
    """Erro de requisição HTTP sem dados sensíveis."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        is_retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.is_retryable = is_retryable


class HttpClient:
    """Cliente HTTP simples: uma tentativa por chamada.

    Política de retry fica com quem chama (ex.: DeliveryEngine), pois cada
    destino tem regras próprias.
    """

    def __init__(self, config: HttpClientConfig | None = None) -> None:
        self._config = config or HttpClientConfig()

    async def post(
        self,
        url: str,
        json: Any,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Envia POST JSON e devolve a resposta, qualquer que seja o status.

        Raises:
            HttpError: Em timeout, falha de conexão ou URL inválida.
        """
        merged_headers = {**self._config.default_headers, **(headers or {})}
        try:
            async with httpx.AsyncClient(verify=self._config.verify_ssl) as client:
                response = await client.post(
                    url,
                    json=json,
                    headers=merged_headers,
                    timeout=self._config.timeout_seconds,
                )
        except httpx.TimeoutException as exc:
            raise HttpError("http_timeout", is_retryable=True) from exc
        except httpx.HTTPError as exc:
            raise HttpError("http_connection_error", is_retryable=True) from exc
        except httpx.InvalidURL as exc:
            # Webhook vem do chamador; URL inválida não chega a virar request
            raise HttpError("http_invalid_url") from exc

        logger.debug(
            "http_post_completed",
            extra={"host": httpx.URL(url).host, "status_code": response.status_code},
        )
        return response
