"""Serviços de aplicação do relay."""

from __future__ import annotations

from app.services.correlation_store import TASK_PREFIX, CorrelationStore
from app.services.usage_counter import USAGE_PREFIX, UsageCounter
from app.services.work_hours import format_time_of_day, normalize_work_hours

__all__ = [
    "TASK_PREFIX",
    "USAGE_PREFIX",
    "CorrelationStore",
    "UsageCounter",
    "format_time_of_day",
    "normalize_work_hours",
]
