"""Agregador de rotas: registra health e os webhooks SMS.

Uso:
    from api.routes import create_api_router

    app = FastAPI()
    app.include_router(create_api_router())
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter

from api.routes.health.router import router as health_router
from api.routes.sms import create_sms_router

if TYPE_CHECKING:
    from config.settings import TransmitSmsSettings


def create_api_router(settings: TransmitSmsSettings | None = None) -> APIRouter:
    """Cria router principal.

    Os webhooks SMS só são montados com webhooks_enabled.
    """
    from config.settings import get_transmitsms_settings

    sms = settings or get_transmitsms_settings()
    api_router = APIRouter()

    # Health checks na raiz
    api_router.include_router(health_router, tags=["health"])

    if sms.webhooks_enabled:
        prefix = "/" + sms.webhooks_prefix.strip("/")
        api_router.include_router(create_sms_router(sms), prefix=prefix, tags=["sms"])

    return api_router
