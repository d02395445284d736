"""Normalizer SMS: callbacks TransmitSMS (DLR, reply, link hits) → DTOs."""

from .normalizer import (
    STATUS_DELIVERED,
    STATUS_FAILED,
    STATUS_PENDING,
    CallbackData,
    DlrCallbackData,
    LinkHitCallbackData,
    ReplyCallbackData,
    normalize_callback,
)

__all__ = [
    "STATUS_DELIVERED",
    "STATUS_FAILED",
    "STATUS_PENDING",
    "CallbackData",
    "DlrCallbackData",
    "LinkHitCallbackData",
    "ReplyCallbackData",
    "normalize_callback",
]
