"""Use case para envio outbound de SMS via TransmitSMS."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from api.payload_builders.sms import SendSmsRequest
from app.constants.sms import CallbackType
from config.logging import mask_recipients
from utils.errors import TransmitSmsError, ValidationError

if TYPE_CHECKING:
    from datetime import datetime

    from api.connectors.transmitsms.models import SmsData
    from api.validators.sms import CallbackUrlSafetyChecker
    from app.protocols import CallbackUrlBuilderProtocol, SmsClientProtocol

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CallbackRoute:
    """Handler (identificador registrado) e contexto de um tipo de callback."""

    handler: str
    context: dict[str, Any] = field(default_factory=dict)


@dataclass
class OutboundSms:
    """Mensagem SMS a enviar.

    Callbacks: on_dlr/on_reply/on_link_hit geram URLs assinadas e têm
    precedência sobre as URLs explícitas (dlr_callback etc.).
    """

    content: str
    to: str | None = None
    sender: str | None = None
    send_at: str | datetime | None = None
    validity: int | None = None
    country_code: str | None = None
    replies_to_email: str | None = None
    tracked_link_url: str | None = None
    dlr_callback: str | None = None
    reply_callback: str | None = None
    link_hits_callback: str | None = None
    callbacks: dict[CallbackType, CallbackRoute] = field(default_factory=dict)

    def on_dlr(self, handler: str, context: dict[str, Any] | None = None) -> OutboundSms:
        self.callbacks[CallbackType.DLR] = CallbackRoute(handler, dict(context or {}))
        return self

    def on_reply(self, handler: str, context: dict[str, Any] | None = None) -> OutboundSms:
        self.callbacks[CallbackType.REPLY] = CallbackRoute(handler, dict(context or {}))
        return self

    def on_link_hit(self, handler: str, context: dict[str, Any] | None = None) -> OutboundSms:
        self.callbacks[CallbackType.LINK_HITS] = CallbackRoute(handler, dict(context or {}))
        return self


class SendOutboundSmsUseCase:
    """Orquestra build do SendSmsRequest e envio.

    Args:
        client: Cliente SMS (TransmitSmsHttpClient)
        callback_builder: Builder de URLs assinadas; sem ele, handlers são
            ignorados e só URLs explícitas valem
        default_from: Sender ID padrão quando a mensagem não define um
        url_checker: Guarda SSRF repassada ao SendSmsRequest
        default_country_code: País (ISO alpha-2) usado quando a mensagem não
            define country_code
    """

    def __init__(
        self,
        client: SmsClientProtocol,
        callback_builder: CallbackUrlBuilderProtocol | None = None,
        default_from: str = "",
        url_checker: CallbackUrlSafetyChecker | None = None,
        default_country_code: str = "",
    ) -> None:
        self._client = client
        self._callback_builder = callback_builder
        self._default_from = default_from
        self._url_checker = url_checker
        self._default_country_code = default_country_code

    async def execute(self, message: OutboundSms, to: str | None = None) -> SmsData | None:
        """Envia a mensagem.

        Args:
            message: Mensagem a enviar
            to: Destinatário padrão quando message.to não está definido

        Returns:
            SmsData do envio, ou None quando não há destinatário.

        Raises:
            TransmitSmsError: Erro de validação (mesmo error_code) ou da API.
        """
        recipients = message.to or to
        if not recipients:
            logger.info("sms_outbound_skipped", extra={"reason": "no_recipient"})
            return None

        try:
            request = self.build_request(message, recipients)
        except ValidationError as exc:
            raise TransmitSmsError(
                str(exc),
                error_code=exc.error_code,
                status_code=exc.status_code,
            ) from exc

        logger.info(
            "sms_outbound_sending",
            extra={
                "recipients": mask_recipients(recipients),
                "callbacks": sorted(str(kind) for kind in message.callbacks),
            },
        )
        return await self._client.send_sms(request)

    def build_request(self, message: OutboundSms, recipients: str) -> SendSmsRequest:
        """Monta o SendSmsRequest (sender e país: mensagem > default)."""
        request = SendSmsRequest(message.content, url_checker=self._url_checker).to(recipients)

        sender = message.sender or self._default_from
        if sender:
            request.from_(sender)
        if message.send_at is not None:
            request.scheduled_at(message.send_at)
        if message.validity is not None:
            request.validity(message.validity)
        country_code = message.country_code or self._default_country_code
        if country_code:
            request.country_code(country_code)
        if message.replies_to_email is not None:
            request.replies_to_email(message.replies_to_email)
        if message.tracked_link_url is not None:
            request.tracked_link_url(message.tracked_link_url)

        self._apply_callbacks(request, message)
        return request

    def _apply_callbacks(self, request: SendSmsRequest, message: OutboundSms) -> None:
        explicit = {
            CallbackType.DLR: message.dlr_callback,
            CallbackType.REPLY: message.reply_callback,
            CallbackType.LINK_HITS: message.link_hits_callback,
        }
        setters = {
            CallbackType.DLR: request.dlr_callback,
            CallbackType.REPLY: request.reply_callback,
            CallbackType.LINK_HITS: request.link_hits_callback,
        }
        for callback_type, setter in setters.items():
            route = message.callbacks.get(callback_type)
            if route is not None and self._callback_builder is not None:
                setter(self._callback_builder.build(callback_type, route.handler, route.context))
            elif explicit[callback_type] is not None:
                setter(explicit[callback_type])
