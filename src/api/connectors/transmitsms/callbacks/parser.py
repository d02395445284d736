"""Verificação e parsing de callbacks assinados recebidos via query string."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from api.connectors.transmitsms.callbacks.encoding import b64url_decode, signature_matches
from utils.errors import InvalidSignatureError

if TYPE_CHECKING:
    from collections.abc import Mapping


@dataclass(frozen=True, slots=True)
class ParsedCallback:
    """Handler e contexto recuperados de uma URL de callback."""

    handler: str | None = None
    context: dict[str, Any] = field(default_factory=dict)


def _decode_context(encoded: str) -> dict[str, Any]:
    decoded = b64url_decode(encoded)
    if decoded == "":
        return {}
    try:
        context = json.loads(decoded)
    except json.JSONDecodeError as exc:
        raise InvalidSignatureError("Invalid callback context: malformed JSON") from exc
    if not isinstance(context, dict):
        raise InvalidSignatureError("Invalid callback context: malformed JSON")
    return context


def parse_callback_params(
    query_params: Mapping[str, str],
    signing_key: bytes | str,
) -> ParsedCallback:
    """Verifica a assinatura e decodifica handler/contexto.

    Sem "h" e sem "c" retorna ParsedCallback vazio, sem exigir assinatura.

    Raises:
        InvalidSignatureError: Assinatura ausente/inválida ou contexto com JSON
            corrompido.
    """
    handler = query_params.get("h")
    context = query_params.get("c")
    signature = query_params.get("s")

    if handler is None and context is None:
        return ParsedCallback()

    if signature is None:
        raise InvalidSignatureError("Missing callback signature")

    if not signature_matches((handler or "") + (context or ""), signature, signing_key):
        raise InvalidSignatureError("Invalid callback signature")

    return ParsedCallback(
        handler=b64url_decode(handler) if handler is not None else None,
        context=_decode_context(context) if context is not None else {},
    )


class CallbackUrlParser:
    """Parser de callbacks vinculado a uma chave de assinatura."""

    def __init__(self, signing_key: bytes | str) -> None:
        self._signing_key = signing_key

    def parse(self, query_params: Mapping[str, str]) -> ParsedCallback:
        return parse_callback_params(query_params, self._signing_key)

    def verify(self, handler: str | None, context: str | None, signature: str) -> bool:
        """True se a assinatura confere com os valores ainda codificados."""
        return signature_matches((handler or "") + (context or ""), signature, self._signing_key)
