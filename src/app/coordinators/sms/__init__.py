"""Coordenação de callbacks SMS recebidos."""

from .registry import CallbackHandler, CallbackHandlerRegistry, RegisteredHandler

__all__ = [
    "CallbackHandler",
    "CallbackHandlerRegistry",
    "RegisteredHandler",
]
