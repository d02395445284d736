"""Protocolos e contratos do core da aplicação."""

from .http_client import CallbackUrlBuilderProtocol, SmsClientProtocol

__all__ = [
    "CallbackUrlBuilderProtocol",
    "SmsClientProtocol",
]
