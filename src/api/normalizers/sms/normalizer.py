"""Normalização dos callbacks TransmitSMS em DTOs imutáveis."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import TYPE_CHECKING, Any

from api.normalizers.sms.extractor import first_present, lenient_int, now_utc_string
from app.constants.sms import CallbackType

if TYPE_CHECKING:
    from collections.abc import Mapping

STATUS_DELIVERED = "delivered"
STATUS_PENDING = "pending"
STATUS_FAILED = "failed"


@dataclass(frozen=True, slots=True)
class DlrCallbackData:
    """Recibo de entrega (DLR)."""

    message_id: int
    mobile: str
    status: str
    datetime: str | None = None
    sender_id: str | None = None
    error_code: str | None = None
    error_description: str | None = None

    @classmethod
    def from_params(cls, params: Mapping[str, str]) -> DlrCallbackData:
        return cls(
            message_id=lenient_int(params.get("message_id")),
            mobile=first_present(params, "mobile", "msisdn") or "",
            status=first_present(params, "status") or STATUS_PENDING,
            datetime=first_present(params, "datetime", "delivery_time"),
            sender_id=first_present(params, "sender_id", "from"),
            error_code=first_present(params, "error_code", "error"),
            error_description=first_present(params, "error_description", "error_msg"),
        )

    @property
    def is_delivered(self) -> bool:
        return self.status.lower() == STATUS_DELIVERED

    @property
    def is_pending(self) -> bool:
        return self.status.lower() == STATUS_PENDING

    @property
    def is_failed(self) -> bool:
        return self.status.lower() == STATUS_FAILED

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class ReplyCallbackData:
    """Resposta (SMS recebido) a uma mensagem enviada."""

    message_id: int
    mobile: str
    message: str
    received_at: str
    response_id: int | None = None
    longcode: str | None = None
    first_name: str | None = None
    last_name: str | None = None

    @classmethod
    def from_params(cls, params: Mapping[str, str]) -> ReplyCallbackData:
        response_id = first_present(params, "response_id", "id")
        return cls(
            message_id=lenient_int(params.get("message_id")),
            mobile=first_present(params, "mobile", "msisdn", "from") or "",
            message=first_present(params, "message", "response", "body") or "",
            received_at=first_present(params, "received_at", "datetime") or now_utc_string(),
            response_id=lenient_int(response_id) if response_id is not None else None,
            longcode=first_present(params, "longcode", "to"),
            first_name=params.get("first_name"),
            last_name=params.get("last_name"),
        )

    @property
    def full_name(self) -> str | None:
        if self.first_name is None and self.last_name is None:
            return None
        return f"{self.first_name or ''} {self.last_name or ''}".strip()

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class LinkHitCallbackData:
    """Clique em link rastreado."""

    message_id: int
    mobile: str
    url: str
    clicked_at: str
    user_agent: str | None = None
    ip_address: str | None = None

    @classmethod
    def from_params(cls, params: Mapping[str, str]) -> LinkHitCallbackData:
        return cls(
            message_id=lenient_int(params.get("message_id")),
            mobile=first_present(params, "mobile", "msisdn") or "",
            url=first_present(params, "url", "link") or "",
            clicked_at=first_present(params, "clicked_at", "datetime") or now_utc_string(),
            user_agent=params.get("user_agent"),
            ip_address=first_present(params, "ip_address", "ip"),
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


CallbackData = DlrCallbackData | ReplyCallbackData | LinkHitCallbackData

_DTO_BY_TYPE: dict[CallbackType, Any] = {
    CallbackType.DLR: DlrCallbackData,
    CallbackType.REPLY: ReplyCallbackData,
    CallbackType.LINK_HITS: LinkHitCallbackData,
}


def normalize_callback(
    callback_type: CallbackType,
    params: Mapping[str, str],
) -> CallbackData:
    """Converte os query params do callback no DTO do tipo informado."""
    return _DTO_BY_TYPE[callback_type].from_params(params)
