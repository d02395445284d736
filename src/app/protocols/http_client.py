"""Protocolos do cliente SMS usados pelo app.

Evita dependência direta da camada api.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from api.connectors.transmitsms.models import SmsData
    from api.payload_builders.sms import SendSmsRequest


class SmsClientProtocol(Protocol):
    """Contrato mínimo para envio de SMS."""

    async def send_sms(self, request: SendSmsRequest) -> SmsData: ...


class CallbackUrlBuilderProtocol(Protocol):
    """Contrato para montar URLs de callback assinadas."""

    def build(
        self,
        callback_type: Any,
        handler: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> str: ...
