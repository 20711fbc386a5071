"""Adapter da API externa de tarefas."""

from __future__ import annotations

from app.infra.task_api.client import TaskApiClient, create_task_api_client

__all__ = ["TaskApiClient", "create_task_api_client"]
