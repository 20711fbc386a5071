"""Cliente da API externa de tarefas assíncronas.

Estende HttpClient com o que a API exige:
- Basic auth (login/senha)
- Body JSON em lista (um item por tarefa)
- Resposta JSON obrigatória; o task id vem em tasks[i].id

Não faz retry: falha na criação é decidida pelo TaskSubmitter.
"""

from __future__ import annotations

import base64
import json
import logging
from typing import TYPE_CHECKING, Any

from app.infra.http import HttpClient, HttpClientConfig, HttpError

if TYPE_CHECKING:
    from config.settings import RelaySettings

logger = logging.getLogger(__name__)


class TaskApiClient(HttpClient):
    """Cliente HTTP especializado para a API de tarefas.

    Args:
        endpoint: URL de criação de tarefas
        login: Usuário para Basic auth
        password: Senha para Basic auth
        config: Configuração HTTP base
    """

    def __init__(
        self,
        endpoint: str,
        login: str,
        password: str,
        config: HttpClientConfig | None = None,
    ) -> None:
        super().__init__(config)
        self._endpoint = endpoint
        self._login = login
        self._password = password

    def _auth_headers(self) -> dict[str, str]:
        if not self._login or not self._password:
            raise ValueError("Credenciais da API de tarefas não configuradas")
        raw = f"{self._login}:{self._password}".encode()
        return {
            "Authorization": "Basic " + base64.b64encode(raw).decode("ascii"),
            "Content-Type": "application/json",
        }

    async def create_tasks(self, tasks: list[dict[str, Any]]) -> dict[str, Any]:
        """Submete tarefas e retorna o JSON da resposta.

        Raises:
            ValueError: Se endpoint ou credenciais não configurados
            HttpError: Se erro de transporte ou resposta não-JSON
        """
        if not self._endpoint:
            raise ValueError("TASK_API_URL não configurado")

        response = await self.post(self._endpoint, json=tasks, headers=self._auth_headers())
        try:
            data = response.json()
        except json.JSONDecodeError as exc:
            logger.error(
                "task_api_invalid_json",
                extra={"status_code": response.status_code},
            )
            raise HttpError("Response JSON inválido", status_code=response.status_code) from exc

        if not isinstance(data, dict):
            raise HttpError("Response da API de tarefas não é objeto", status_code=response.status_code)

        logger.info(
            "task_api_response",
            extra={
                "status_code": response.status_code,
                "api_status_code": data.get("status_code"),
                "tasks_count": data.get("tasks_count"),
            },
        )
        return data


def create_task_api_client(settings: RelaySettings | None = None) -> TaskApiClient:
    """Factory para criar cliente da API de tarefas com config padrão."""
    from config.settings import get_relay_settings

    relay = settings or get_relay_settings()
    return TaskApiClient(
        endpoint=relay.task_api_url,
        login=relay.task_api_login,
        password=relay.task_api_password,
        config=HttpClientConfig(timeout_seconds=relay.task_api_timeout_seconds),
    )
