"""Endpoints de callback da TransmitSMS.

Endpoints (sob /<webhooks_prefix>, segmentos configuráveis por tipo):
- GET /dlr: recibo de entrega
- GET /reply: resposta recebida
- GET /link-hits: clique em link rastreado

Fluxo:
1. Verifica assinatura da query string (h, c, s); falha → 403
2. Normaliza os parâmetros no DTO do tipo
3. Notifica listeners globais e despacha o handler nomeado em "h"
4. Responde 200 "OK"
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import APIRouter, Request, Response, status

from api.normalizers.sms import normalize_callback
from app.constants.sms import CallbackType
from app.observability import (
    correlation_id_from_headers,
    get_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)
from config.logging import mask_phone_number
from utils.errors import InvalidSignatureError

if TYPE_CHECKING:
    from api.connectors.transmitsms.callbacks import CallbackUrlParser
    from app.coordinators.sms import CallbackHandlerRegistry
    from config.settings import TransmitSmsSettings

logger = logging.getLogger(__name__)


def _get_callback_parser() -> CallbackUrlParser:
    from app.bootstrap.dependencies import get_callback_url_parser

    return get_callback_url_parser()


def _get_registry() -> CallbackHandlerRegistry:
    from app.bootstrap.dependencies import get_callback_registry

    return get_callback_registry()


def _text_response(content: str, status_code: int) -> Response:
    return Response(content=content, media_type="text/plain", status_code=status_code)


async def handle_callback(request: Request, callback_type: CallbackType) -> Response:
    """Verifica, normaliza e despacha um callback recebido."""
    token = set_correlation_id(correlation_id_from_headers(request.headers))
    try:
        params = dict(request.query_params)
        try:
            parsed = _get_callback_parser().parse(params)
        except InvalidSignatureError as exc:
            logger.warning(
                "sms_callback_signature_invalid",
                extra={
                    "channel": "sms",
                    "callback_type": str(callback_type),
                    "correlation_id": get_correlation_id(),
                    "error": str(exc),
                },
            )
            return _text_response("Invalid signature", status.HTTP_403_FORBIDDEN)

        payload = normalize_callback(callback_type, params)
        logger.info(
            "sms_callback_received",
            extra={
                "channel": "sms",
                "callback_type": str(callback_type),
                "correlation_id": get_correlation_id(),
                "message_id": payload.message_id,
                "mobile": mask_phone_number(payload.mobile),
                "has_handler": parsed.handler is not None,
            },
        )

        registry = _get_registry()
        await registry.notify(callback_type, payload, parsed.context)
        if parsed.handler is not None:
            await registry.dispatch(callback_type, parsed.handler, payload, parsed.context)

        return _text_response("OK", status.HTTP_200_OK)
    finally:
        reset_correlation_id(token)


async def receive_dlr(request: Request) -> Response:
    return await handle_callback(request, CallbackType.DLR)


async def receive_reply(request: Request) -> Response:
    return await handle_callback(request, CallbackType.REPLY)


async def receive_link_hits(request: Request) -> Response:
    return await handle_callback(request, CallbackType.LINK_HITS)


def create_webhook_router(settings: TransmitSmsSettings) -> APIRouter:
    """Router só com os tipos de callback habilitados nas settings.

    Os segmentos vêm de settings.callback_paths, os mesmos usados pelo
    CallbackUrlBuilder; o nome da rota não depende do segmento.
    """
    router = APIRouter()
    paths = settings.callback_paths
    endpoints = (
        (CallbackType.DLR, settings.dlr_enabled, receive_dlr),
        (CallbackType.REPLY, settings.reply_enabled, receive_reply),
        (CallbackType.LINK_HITS, settings.link_hits_enabled, receive_link_hits),
    )
    for callback_type, enabled, endpoint in endpoints:
        if not enabled:
            continue
        router.add_api_route(
            f"/{paths[callback_type]}",
            endpoint,
            methods=["GET"],
            name=f"transmitsms.webhooks.{callback_type.path}",
            response_class=Response,
        )
    return router
