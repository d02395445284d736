"""Extração de campos dos callbacks TransmitSMS (query string).

O provedor usa nomes alternativos conforme o tipo de conta/endpoint
(ex.: mobile|msisdn, message|response|body); a primeira chave presente vence.
"""

from __future__ import annotations

import re
from datetime import UTC, datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

CALLBACK_DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"

_LEADING_INT = re.compile(r"^\s*[+-]?\d+")


def first_present(params: Mapping[str, str], *keys: str) -> str | None:
    """Valor da primeira chave presente (string vazia conta como presente)."""
    for key in keys:
        value = params.get(key)
        if value is not None:
            return value
    return None


def lenient_int(value: str | None, default: int = 0) -> int:
    """Converte prefixo numérico em int ("123abc" → 123, "abc" → default)."""
    if value is None:
        return default
    match = _LEADING_INT.match(value)
    if match is None:
        return default
    return int(match.group())


def now_utc_string() -> str:
    return datetime.now(UTC).strftime(CALLBACK_DATETIME_FORMAT)
