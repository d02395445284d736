"""Entrypoint da aplicação transmitsms-bridge.

Expõe a aplicação ASGI (FastAPI) com health checks e os webhooks de
callback da TransmitSMS.

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
from app.bootstrap import SERVICE_NAME, initialize_app, validate_runtime_settings
from config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from config.settings import TransmitSmsSettings

# Inicializar logging ANTES de qualquer import que use logger
initialize_app()

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Valida configurações no startup; loga o shutdown."""
    logger.info("app_starting", extra={"service": SERVICE_NAME})
    validate_runtime_settings()

    yield

    logger.info("app_shutting_down", extra={"service": SERVICE_NAME})


def create_app(settings: TransmitSmsSettings | None = None) -> FastAPI:
    """Cria e configura a aplicação FastAPI.

    Args:
        settings: TransmitSmsSettings opcional (padrão: ambiente).
    """
    fastapi_app = FastAPI(
        title="transmitsms-bridge",
        description="Envio de SMS e webhooks de callback TransmitSMS",
        version="1.0.0",
        lifespan=lifespan,
    )

    fastapi_app.include_router(create_api_router(settings))

    logger.info("app_configured", extra={"service": SERVICE_NAME})

    return fastapi_app


# Aplicação ASGI exposta para uvicorn
app = create_app()


def main() -> None:
    """Entrypoint para execução direta (desenvolvimento)."""
    import uvicorn

    logger.info("app_dev_server_starting", extra={"service": SERVICE_NAME})
    uvicorn.run(
        "app.app:app",
        host="0.0.0.0",
        port=8080,
        reload=True,
    )


if __name__ == "__main__":
    main()
