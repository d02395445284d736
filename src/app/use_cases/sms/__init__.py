"""Casos de uso SMS."""

from .send_outbound_message import OutboundSms, SendOutboundSmsUseCase

__all__ = ["OutboundSms", "SendOutboundSmsUseCase"]
