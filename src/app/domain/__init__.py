"""Modelos de domínio do relay."""

from __future__ import annotations

from app.domain.task_request import TaskRequestItem, parse_task_batch

__all__ = ["TaskRequestItem", "parse_task_batch"]
