"""Builders de payload para a API TransmitSMS."""

from .send_sms import MAX_MESSAGE_LENGTH, MAX_VALIDITY_MINUTES, SendSmsRequest

__all__ = [
    "MAX_MESSAGE_LENGTH",
    "MAX_VALIDITY_MINUTES",
    "SendSmsRequest",
]
