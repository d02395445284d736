"""Factories de dependências: singletons cacheados do canal SMS.

Cada getter usa lru_cache para garantir uma instância por processo.
Testes podem limpar com `<getter>.cache_clear()`.
"""

from __future__ import annotations

import logging
from functools import lru_cache

from api.connectors.transmitsms import (
    CallbackUrlBuilder,
    CallbackUrlParser,
    TransmitSmsHttpClient,
    create_transmitsms_http_client,
)
from api.validators.sms import CallbackUrlSafetyChecker
from app.coordinators.sms import CallbackHandlerRegistry
from app.use_cases.sms import SendOutboundSmsUseCase
from config.settings import get_transmitsms_settings

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_url_safety_checker() -> CallbackUrlSafetyChecker:
    settings = get_transmitsms_settings()
    return CallbackUrlSafetyChecker(dns_timeout_seconds=settings.dns_timeout_seconds)


@lru_cache(maxsize=1)
def get_callback_url_builder() -> CallbackUrlBuilder | None:
    """Builder de URLs assinadas.

    Returns:
        None quando TRANSMITSMS_PUBLIC_BASE_URL não está configurada (handlers
        de callback ficam indisponíveis no envio).
    """
    settings = get_transmitsms_settings()
    if not settings.callback_base_url:
        logger.warning(
            "callback_url_builder_unavailable",
            extra={"component": "bootstrap", "reason": "public_base_url_missing"},
        )
        return None
    return CallbackUrlBuilder(
        settings.callback_base_url,
        settings.signing_key,
        paths=settings.callback_paths,
    )


@lru_cache(maxsize=1)
def get_callback_url_parser() -> CallbackUrlParser:
    return CallbackUrlParser(get_transmitsms_settings().signing_key)


@lru_cache(maxsize=1)
def get_callback_registry() -> CallbackHandlerRegistry:
    return CallbackHandlerRegistry()


@lru_cache(maxsize=1)
def get_sms_client() -> TransmitSmsHttpClient:
    return create_transmitsms_http_client(get_transmitsms_settings())


@lru_cache(maxsize=1)
def get_send_sms_use_case() -> SendOutboundSmsUseCase:
    settings = get_transmitsms_settings()
    return SendOutboundSmsUseCase(
        client=get_sms_client(),
        callback_builder=get_callback_url_builder(),
        default_from=settings.default_from,
        default_country_code=settings.default_country_code,
        url_checker=get_url_safety_checker(),
    )
