"""Endpoints de health check (liveness e readiness)."""

from __future__ import annotations

import logging
from datetime import UTC, datetime

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from config.settings import get_base_settings, get_transmitsms_settings

logger = logging.getLogger(__name__)

router = APIRouter()


class HealthResponse(BaseModel):
    """Resposta do health check."""

    status: str
    service: str
    timestamp: str
    version: str = "1.0.0"


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Liveness probe: serviço está rodando."""
    return HealthResponse(
        status="healthy",
        service=get_base_settings().service_name,
        timestamp=datetime.now(UTC).isoformat(),
    )


@router.get("/ready")
async def readiness_check() -> JSONResponse:
    """Readiness probe: configuração TransmitSMS válida.

    Não chama a API externa; só reporta quantos problemas de configuração
    existem (sem expor valores).
    """
    errors = get_transmitsms_settings().validate()
    ready = not errors
    if not ready:
        logger.warning("readiness_settings_invalid", extra={"error_count": len(errors)})

    payload = {
        "status": "ready" if ready else "not_ready",
        "checks": {
            "transmitsms_settings": {
                "status": "ok" if ready else "failed",
                "error_count": len(errors),
            },
        },
        "timestamp": datetime.now(UTC).isoformat(),
    }
    return JSONResponse(content=payload, status_code=200 if ready else 503)
