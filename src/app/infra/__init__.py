"""Infra: implementações concretas de IO (stores, HTTP, API de tarefas)."""
