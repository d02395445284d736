"""Codificação base64url, JSON canônico e HMAC dos callbacks assinados."""

from __future__ import annotations

import base64
import binascii
import hashlib
import hmac
import json
from typing import Any

_TO_URLSAFE = str.maketrans("+/", "-_")
_FROM_URLSAFE = str.maketrans("-_", "+/")


def as_key_bytes(signing_key: bytes | str) -> bytes:
    if isinstance(signing_key, bytes):
        return signing_key
    return signing_key.encode("utf-8")


def b64url_encode(data: str) -> str:
    """Base64 padrão com "+"→"-", "/"→"_" e sem padding "="."""
    encoded = base64.b64encode(data.encode("utf-8")).decode("ascii")
    return encoded.translate(_TO_URLSAFE).rstrip("=")


def b64url_decode(data: str) -> str:
    """Decodifica base64url; entrada inválida vira string vazia."""
    remainder = len(data) % 4
    if remainder:
        data += "=" * (4 - remainder)
    try:
        raw = base64.b64decode(data.translate(_FROM_URLSAFE), validate=True)
        return raw.decode("utf-8")
    except (binascii.Error, ValueError):
        return ""


def encode_context(context: dict[str, Any]) -> str:
    """Serializa o contexto em JSON canônico.

    Ordem de inserção preservada, separadores compactos. Valores não
    serializáveis (ou NaN/Infinity) levantam TypeError/ValueError.
    """
    return json.dumps(
        context,
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=False,
    )


def sign(data: str, signing_key: bytes | str) -> str:
    """HMAC-SHA256 em hex minúsculo."""
    return hmac.new(as_key_bytes(signing_key), data.encode("utf-8"), hashlib.sha256).hexdigest()


def signature_matches(data: str, signature: str, signing_key: bytes | str) -> bool:
    """Comparação em tempo constante da assinatura esperada."""
    expected = sign(data, signing_key)
    return hmac.compare_digest(expected.encode("ascii"), signature.encode("utf-8"))
