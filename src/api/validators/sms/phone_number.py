"""Normalização e validação de números de telefone para SMS.

Responsabilidades:
- Converter números locais para E.164 (sem "+"), ex: 0400000000 → 61400000000
- Validar números E.164 e sender IDs (VMN ou alfanumérico)
- Formatar listas de destinatários separadas por vírgula (máx. 500)

Funções puras, sem IO; seguras para uso concorrente.
"""

from __future__ import annotations

import re

from api.validators.sms.country_codes import (
    get_dialing_code,
    starts_with_known_dialing_code,
)
from utils.errors import InvalidArgumentError

# Máximo de destinatários por chamada da API
MAX_RECIPIENTS = 500

# Tamanho máximo de sender ID alfanumérico
MAX_SENDER_ID_LENGTH = 11

MIN_E164_LENGTH = 7
MAX_E164_LENGTH = 15

_NON_DIGITS = re.compile(r"\D", re.ASCII)
_ALPHANUMERIC = re.compile(r"^[A-Za-z0-9]+$")
_PHONE_LIKE = re.compile(r"^[\d\s\-+()]+$")


def clean_number(number: str) -> str:
    """Remove tudo que não é dígito ("+", espaços, hífens, parênteses)."""
    return _NON_DIGITS.sub("", number)


def to_international(number: str, country_code: str | None = None) -> str:
    """Converte número local para formato internacional E.164 (sem "+").

    Args:
        number: Número local ou internacional, em qualquer formatação
        country_code: ISO 3166-1 alpha-2 ou nome do país. Sem ele, o número
            é apenas limpo.

    Returns:
        Número só com dígitos.

    Raises:
        InvalidArgumentError: Se country_code for informado e desconhecido.
    """
    cleaned = clean_number(number)
    if country_code is None:
        return cleaned

    dialing_code = get_dialing_code(country_code)
    if dialing_code is None:
        raise InvalidArgumentError(f"Invalid country code: {country_code}")

    if cleaned.startswith(dialing_code) and len(cleaned) >= 10:
        return cleaned

    # Remove exatamente UM zero à esquerda (formato local AU/NZ/UK)
    if cleaned.startswith("0"):
        cleaned = cleaned[1:]
    return dialing_code + cleaned


def split_numbers(numbers: str) -> list[str]:
    """Separa lista por vírgula, com trim e sem entradas vazias."""
    return [item for item in (part.strip() for part in numbers.split(",")) if item]


def format_multiple(numbers: str, country_code: str | None = None) -> str:
    """Formata lista de números separados por vírgula para E.164.

    Raises:
        InvalidArgumentError: Se houver mais de MAX_RECIPIENTS números ou
            country_code desconhecido.
    """
    number_list = split_numbers(numbers)
    if len(number_list) > MAX_RECIPIENTS:
        raise InvalidArgumentError(
            f"Maximum {MAX_RECIPIENTS} recipients allowed per API call, "
            f"got {len(number_list)}"
        )
    return ",".join(to_international(item, country_code) for item in number_list)


def is_valid(number: str) -> bool:
    """Valida número E.164: 7-15 dígitos, sem zero à esquerda."""
    cleaned = clean_number(number)
    if not cleaned.isdigit():
        return False
    if not MIN_E164_LENGTH <= len(cleaned) <= MAX_E164_LENGTH:
        return False
    return not cleaned.startswith("0")


def validate_multiple(numbers: str) -> dict[str, list[str]]:
    """Separa números válidos (limpos) e inválidos (como recebidos)."""
    valid: list[str] = []
    invalid: list[str] = []
    for item in split_numbers(numbers):
        cleaned = clean_number(item)
        if is_valid(cleaned):
            valid.append(cleaned)
        else:
            invalid.append(item)
    return {"valid": valid, "invalid": invalid}


def is_international(number: str) -> bool:
    """Heurística de formato internacional.

    Considera internacional se não começa com zero, tem 10+ dígitos e começa
    com um código de discagem conhecido. Códigos fora da tabela retornam False.
    """
    cleaned = clean_number(number)
    if cleaned.startswith("0"):
        return False
    if not cleaned.isdigit() or len(cleaned) < 10:
        return False
    return starts_with_known_dialing_code(cleaned)


def is_valid_alphanumeric_sender_id(sender_id: str) -> bool:
    if not sender_id:
        return False
    if len(sender_id) > MAX_SENDER_ID_LENGTH:
        return False
    if " " in sender_id:
        return False
    return _ALPHANUMERIC.match(sender_id) is not None


def is_valid_sender_id(sender_id: str) -> bool:
    """Valida sender ID: VMN em E.164 ou alfanumérico (máx. 11, sem espaços)."""
    if sender_id.isdigit() and is_valid(sender_id):
        return True
    return is_valid_alphanumeric_sender_id(sender_id)


def format_sender_id(sender_id: str, country_code: str | None = None) -> str:
    """Formata sender ID para E.164 quando parece número de telefone."""
    if _PHONE_LIKE.match(sender_id):
        return to_international(sender_id, country_code)
    return sender_id


def count_recipients(numbers: str) -> int:
    return len(split_numbers(numbers))
