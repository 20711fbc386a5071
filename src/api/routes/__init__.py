"""Rotas HTTP da API: adapters de entrada do relay.

Responsabilidades:
- Definir endpoints HTTP (submissão, postback, health)
- Extração de headers e body brutos
- Delegação para use_cases
- Mapeamento de erros para respostas HTTP

Estrutura:
- routes/tasks/: submissão de tarefas
- routes/postback/: postback da API externa
- routes/health/: health checks e readiness

Agregação:
- router.py: registra todos os routers no app principal
"""

from __future__ import annotations

from api.routes.router import create_api_router

__all__ = ["create_api_router"]
