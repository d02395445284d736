"""Router principal do SMS: agrega os endpoints do canal."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter

from api.routes.sms.webhook import create_webhook_router

if TYPE_CHECKING:
    from config.settings import TransmitSmsSettings


def create_sms_router(settings: TransmitSmsSettings) -> APIRouter:
    """Router com os callbacks ativos (sem prefixo; aplicado no agregador)."""
    router = APIRouter()
    router.include_router(create_webhook_router(settings))
    return router
