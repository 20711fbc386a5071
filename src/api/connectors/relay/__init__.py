"""Adapters HTTP do relay de tarefas."""

from __future__ import annotations

from api.connectors.relay.request import (
    extract_client_key,
    extract_credential,
    parse_submission_body,
)

__all__ = ["extract_client_key", "extract_credential", "parse_submission_body"]
