"""Exceções compartilhadas do cliente TransmitSMS."""

from .exceptions import (
    ERROR_CODE_MAP,
    AccessDeniedError,
    AuthenticationError,
    InsufficientFundsError,
    InvalidArgumentError,
    InvalidRecipientsError,
    InvalidSenderError,
    InvalidSignatureError,
    RateLimitError,
    TransmitSmsError,
    ValidationError,
    ValidationKind,
    error_from_response,
)

__all__ = [
    "ERROR_CODE_MAP",
    "AccessDeniedError",
    "AuthenticationError",
    "InsufficientFundsError",
    "InvalidArgumentError",
    "InvalidRecipientsError",
    "InvalidSenderError",
    "InvalidSignatureError",
    "RateLimitError",
    "TransmitSmsError",
    "ValidationError",
    "ValidationKind",
    "error_from_response",
]
