"""Conector TransmitSMS: adapter de borda para a API REST de SMS.

Responsabilidades:
- HTTP client (auth básica, form body, retry em 429/5xx)
- DTOs de resposta (send-sms, get-balance, format-number)
- URLs de callback assinadas (build/parse)
"""

from .callbacks import (
    CallbackUrlBuilder,
    CallbackUrlParser,
    ParsedCallback,
    build_callback_url,
    parse_callback_params,
)
from .http_client import TransmitSmsHttpClient, create_transmitsms_http_client
from .models import BalanceData, FormattedNumberData, SmsData

__all__ = [
    "BalanceData",
    "CallbackUrlBuilder",
    "CallbackUrlParser",
    "FormattedNumberData",
    "ParsedCallback",
    "SmsData",
    "TransmitSmsHttpClient",
    "build_callback_url",
    "create_transmitsms_http_client",
    "parse_callback_params",
]
