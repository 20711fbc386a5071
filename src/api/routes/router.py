"""Agregador de rotas: registra os routers do relay.

Uso:
    from api.routes import create_api_router

    app = FastAPI()
    app.include_router(create_api_router())
"""

from __future__ import annotations

from fastapi import APIRouter

from api.routes.health.router import router as health_router
from api.routes.postback.router import router as postback_router
from api.routes.tasks.router import router as tasks_router


def create_api_router() -> APIRouter:
    """Cria router principal com todos os sub-routers registrados.

    Returns:
        APIRouter configurado com todos os endpoints.
    """
    api_router = APIRouter()

    # Health checks (sem prefixo para /health e /ready na raiz)
    api_router.include_router(health_router, tags=["health"])

    api_router.include_router(tasks_router, prefix="/tasks", tags=["tasks"])
    api_router.include_router(postback_router, prefix="/postback", tags=["postback"])

    return api_router
