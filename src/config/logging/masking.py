"""Mascaramento de números de telefone para logs."""

from __future__ import annotations

import re

_NON_DIGITS = re.compile(r"\D", re.ASCII)

VISIBLE_DIGITS = 3


def mask_phone_number(number: str | None) -> str:
    """Mantém só os últimos dígitos: "61400000123" → "********123"."""
    digits = _NON_DIGITS.sub("", number or "")
    if len(digits) <= VISIBLE_DIGITS:
        return "*" * len(digits)
    return "*" * (len(digits) - VISIBLE_DIGITS) + digits[-VISIBLE_DIGITS:]


def mask_recipients(numbers: str | None) -> list[str]:
    """Mascara uma lista de destinatários separada por vírgula."""
    return [mask_phone_number(item) for item in (numbers or "").split(",") if item.strip()]
