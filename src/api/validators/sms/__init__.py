"""Validators para SMS (TransmitSMS).

Responsabilidades:
- Normalizar números locais para E.164 e validar sender IDs
- Validar URLs de callback (inclui guarda SSRF) e e-mails
- Expor as tabelas de códigos de discagem
"""

from .country_codes import (
    COUNTRY_NAMES,
    DIALING_CODES,
    get_dialing_code,
    is_supported,
    normalize_to_iso,
    starts_with_known_dialing_code,
)
from .phone_number import (
    MAX_RECIPIENTS,
    MAX_SENDER_ID_LENGTH,
    clean_number,
    count_recipients,
    format_multiple,
    format_sender_id,
    is_international,
    is_valid,
    is_valid_alphanumeric_sender_id,
    is_valid_sender_id,
    to_international,
    validate_multiple,
)
from .url import (
    CallbackUrlSafetyChecker,
    is_callback_url_safe,
    is_valid_email,
    is_valid_url,
    validate_callback_url,
    validate_email,
    validate_url,
)

__all__ = [
    "COUNTRY_NAMES",
    "DIALING_CODES",
    "MAX_RECIPIENTS",
    "MAX_SENDER_ID_LENGTH",
    "CallbackUrlSafetyChecker",
    "clean_number",
    "count_recipients",
    "format_multiple",
    "format_sender_id",
    "get_dialing_code",
    "is_callback_url_safe",
    "is_international",
    "is_supported",
    "is_valid",
    "is_valid_alphanumeric_sender_id",
    "is_valid_email",
    "is_valid_sender_id",
    "is_valid_url",
    "normalize_to_iso",
    "starts_with_known_dialing_code",
    "to_international",
    "validate_callback_url",
    "validate_email",
    "validate_multiple",
    "validate_url",
]
