"""Builder do corpo de send-sms (form-encoded).

Os setters validam na hora (e-mail, URLs, callbacks com guarda SSRF), então
erros de uso aparecem antes de qualquer chamada de rede.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from api.validators.sms import (
    format_multiple,
    format_sender_id,
    validate_callback_url,
    validate_email,
    validate_url,
)
from utils.errors import ValidationError

if TYPE_CHECKING:
    from api.validators.sms import CallbackUrlSafetyChecker

SEND_SMS_ENDPOINT = "/send-sms.json"

# 4 partes concatenadas de 153 caracteres
MAX_MESSAGE_LENGTH = 612

# 72 horas
MAX_VALIDITY_MINUTES = 4320

SEND_AT_FORMAT = "%Y-%m-%d %H:%M:%S"


class SendSmsRequest:
    """Builder fluente para POST /send-sms.json.

    Exemplo:
        request = (
            SendSmsRequest("Olá!")
            .to("0400000000,0400000001")
            .country_code("AU")
            .format_numbers()
            .dlr_callback("https://example.com/webhooks/transmitsms/dlr")
        )
        body = request.build()

    Args:
        message: Texto da mensagem (1 a 612 caracteres)
        url_checker: Guarda SSRF para callbacks. Padrão: checker do módulo
            api.validators.sms.url
    """

    endpoint = SEND_SMS_ENDPOINT

    def __init__(
        self,
        message: str,
        *,
        url_checker: CallbackUrlSafetyChecker | None = None,
    ) -> None:
        if message == "":
            raise ValidationError("The message cannot be empty", kind="FIELD_EMPTY")
        if len(message) > MAX_MESSAGE_LENGTH:
            raise ValidationError(
                f"The message must not exceed {MAX_MESSAGE_LENGTH} characters, "
                f"got {len(message)}",
                kind="FIELD_INVALID",
            )
        self._message = message
        self._url_checker = url_checker
        self._to: str | None = None
        self._list_id: int | None = None
        self._from: str | None = None
        self._country_code: str | None = None
        self._send_at: str | None = None
        self._validity: int | None = None
        self._replies_to_email: str | None = None
        self._tracked_link_url: str | None = None
        self._dlr_callback: str | None = None
        self._reply_callback: str | None = None
        self._link_hits_callback: str | None = None
        self._format_numbers = False

    @property
    def message(self) -> str:
        return self._message

    def to(self, to: str) -> SendSmsRequest:
        """Destinatários separados por vírgula."""
        self._to = to
        return self

    def to_list(self, list_id: int) -> SendSmsRequest:
        self._list_id = list_id
        return self

    def from_(self, sender: str) -> SendSmsRequest:
        self._from = sender
        return self

    def country_code(self, country_code: str) -> SendSmsRequest:
        self._country_code = country_code
        return self

    def format_numbers(self, enabled: bool = True) -> SendSmsRequest:
        """Formata números localmente para E.164 (exige country_code)."""
        self._format_numbers = enabled
        return self

    def scheduled_at(self, send_at: str | datetime) -> SendSmsRequest:
        """Agenda o envio; datetime é convertido para UTC.

        Datetime sem timezone é tratado como UTC.
        """
        if isinstance(send_at, datetime):
            if send_at.tzinfo is None:
                send_at = send_at.replace(tzinfo=UTC)
            self._send_at = send_at.astimezone(UTC).strftime(SEND_AT_FORMAT)
        else:
            self._send_at = send_at
        return self

    def validity(self, minutes: int) -> SendSmsRequest:
        """Validade em minutos (0 = máximo permitido pela API)."""
        if not 0 <= minutes <= MAX_VALIDITY_MINUTES:
            raise ValidationError(
                f"The validity must be between 0 and {MAX_VALIDITY_MINUTES} minutes, "
                f"got {minutes}",
                kind="FIELD_INVALID",
            )
        self._validity = minutes
        return self

    def replies_to_email(self, email: str) -> SendSmsRequest:
        validate_email(email, "replies_to_email")
        self._replies_to_email = email
        return self

    def tracked_link_url(self, url: str) -> SendSmsRequest:
        validate_url(url, "tracked_link_url")
        self._tracked_link_url = url
        return self

    def dlr_callback(self, url: str) -> SendSmsRequest:
        self._validate_callback(url, "dlr_callback")
        self._dlr_callback = url
        return self

    def reply_callback(self, url: str) -> SendSmsRequest:
        self._validate_callback(url, "reply_callback")
        self._reply_callback = url
        return self

    def link_hits_callback(self, url: str) -> SendSmsRequest:
        self._validate_callback(url, "link_hits_callback")
        self._link_hits_callback = url
        return self

    def has_recipients(self) -> bool:
        return bool(self._to) or self._list_id is not None

    def _validate_callback(self, url: str, field_name: str) -> None:
        if self._url_checker is not None:
            self._url_checker.validate(url, field_name)
        else:
            validate_callback_url(url, field_name)

    def _formatting_locally(self) -> bool:
        return self._format_numbers and self._country_code is not None

    def _formatted_to(self) -> str | None:
        if self._to is None:
            return None
        if self._formatting_locally():
            return format_multiple(self._to, self._country_code)
        return self._to

    def _formatted_from(self) -> str | None:
        if self._from is None:
            return None
        if self._formatting_locally():
            return format_sender_id(self._from, self._country_code)
        return self._from

    def build(self) -> dict[str, Any]:
        """Monta o corpo form-encoded.

        countrycode só é enviado quando a formatação não é local.

        Raises:
            InvalidArgumentError: Mais de 500 destinatários ou país desconhecido
                (apenas com format_numbers).
        """
        body: dict[str, Any] = {"message": self._message}

        to = self._formatted_to()
        if to is not None:
            body["to"] = to

        if self._list_id is not None:
            body["list_id"] = self._list_id

        sender = self._formatted_from()
        if sender is not None:
            body["from"] = sender

        if self._country_code is not None and not self._format_numbers:
            body["countrycode"] = self._country_code

        optional = {
            "send_at": self._send_at,
            "validity": self._validity,
            "replies_to_email": self._replies_to_email,
            "tracked_link_url": self._tracked_link_url,
            "dlr_callback": self._dlr_callback,
            "reply_callback": self._reply_callback,
            "link_hits_callback": self._link_hits_callback,
        }
        body.update({key: value for key, value in optional.items() if value is not None})
        return body
