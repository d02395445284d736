"""Normalizers: conversão de payloads externos para modelos internos.

Estrutura:
- sms/: callbacks TransmitSMS (DLR, reply, link hits)
"""

from .sms import normalize_callback

__all__ = ["normalize_callback"]
