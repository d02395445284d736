"""DTOs de resposta da API TransmitSMS."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar


@dataclass(frozen=True, slots=True)
class SmsData:
    """Resposta de send-sms."""

    message_id: int
    send_at: str
    recipients: int
    cost: float
    sms: int

    @classmethod
    def from_response(cls, data: dict[str, Any]) -> SmsData:
        return cls(
            message_id=int(data["message_id"]),
            send_at=str(data["send_at"]),
            recipients=int(data["recipients"]),
            cost=float(data["cost"]),
            sms=int(data["sms"]),
        )


@dataclass(frozen=True, slots=True)
class BalanceData:
    """Resposta de get-balance."""

    balance: float
    currency: str

    @classmethod
    def from_response(cls, data: dict[str, Any]) -> BalanceData:
        return cls(balance=float(data["balance"]), currency=str(data["currency"]))


@dataclass(frozen=True, slots=True)
class FormattedNumberData:
    """Resposta de format-number.

    O número pode vir aninhado em "number" ou no nível raiz.
    """

    TYPE_LANDLINE: ClassVar[int] = 0
    TYPE_MOBILE: ClassVar[int] = 1
    TYPE_INVALID: ClassVar[int] = 10

    country_code: str
    national_number: str
    international: str
    type: int
    is_valid: bool

    @classmethod
    def from_response(cls, data: dict[str, Any]) -> FormattedNumberData:
        number = data.get("number", data)
        return cls(
            country_code=str(number["countrycode"]),
            national_number=str(number["nationalnumber"]),
            international=str(number["international"]),
            type=int(number["type"]),
            is_valid=bool(number["isValid"]),
        )

    @property
    def is_mobile(self) -> bool:
        return self.type == self.TYPE_MOBILE

    @property
    def is_landline(self) -> bool:
        return self.type == self.TYPE_LANDLINE
