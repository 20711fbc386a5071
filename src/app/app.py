"""Entrypoint do relay de tarefas.

Este módulo é o ponto de entrada principal do serviço.
Inicializa o bootstrap e expõe a aplicação ASGI (FastAPI).

Uso (produção):
    uvicorn app.app:app --host 0.0.0.0 --port 8080

Uso (desenvolvimento):
    uvicorn app.app:app --reload --host 0.0.0.0 --port 8080
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI

from api.routes import create_api_router
from app.bootstrap import initialize_app, validate_runtime_settings
from app.bootstrap.clients import create_async_redis_client
from config.logging import get_logger
from config.settings import get_base_settings, get_store_settings

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

# Inicializar logging ANTES de qualquer import que use logger
initialize_app()

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Gerencia ciclo de vida da aplicação.

    Startup:
    - Valida configurações
    - Inicializa conexão Redis (backend redis)

    Shutdown:
    - Fecha conexão Redis
    """
    service_name = get_base_settings().service_name
    logger.info("app_starting", extra={"service": service_name})
    validate_runtime_settings()
    app.state.redis_client = None

    if get_store_settings().backend == "redis":
        try:
            app.state.redis_client = create_async_redis_client()
        except ValueError as exc:
            logger.warning("redis_client_not_ready", extra={"error": str(exc)})

    yield

    logger.info("app_shutting_down", extra={"service": service_name})
    redis_client = getattr(app.state, "redis_client", None)
    if redis_client is not None:
        await redis_client.aclose()


def create_app() -> FastAPI:
    """Cria e configura a aplicação FastAPI.

    Returns:
        Aplicação FastAPI configurada.
    """
    fastapi_app = FastAPI(
        title="Relay Postback",
        description="Relay de tarefas assíncronas com entrega de postback em chunks",
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    # Registra todas as rotas
    fastapi_app.include_router(create_api_router())

    logger.info("app_configured")

    return fastapi_app


# Aplicação ASGI exposta para uvicorn
app = create_app()


def main() -> None:
    """Entrypoint para execução direta (desenvolvimento)."""
    import uvicorn

    logger.info("Starting relay in development mode")
    uvicorn.run(
        "app.app:app",
        host="0.0.0.0",
        port=8080,
        reload=True,
    )


if __name__ == "__main__":
    main()
