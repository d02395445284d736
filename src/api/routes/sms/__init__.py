"""Rotas SMS (webhooks de callback TransmitSMS)."""

from .router import create_sms_router

__all__ = ["create_sms_router"]
