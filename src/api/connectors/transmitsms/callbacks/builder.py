"""Construção de URLs de callback assinadas.

Formato: <base_url>/<path>[?h=<b64url>&c=<b64url>&s=<hex64>]

<path> é o segmento padrão do tipo (dlr, reply, link-hits) ou o configurado
em TRANSMITSMS_<TIPO>_PATH; deve ser o mesmo usado nas rotas de webhook.

Sem handler e sem contexto a URL sai sem query string e sem assinatura
(modo "apenas eventos").
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any
from urllib.parse import urlencode

from api.connectors.transmitsms.callbacks.encoding import (
    b64url_encode,
    encode_context,
    sign,
)
from app.constants.sms import CallbackType

if TYPE_CHECKING:
    from collections.abc import Mapping


def build_callback_url(
    callback_type: CallbackType,
    base_url: str,
    signing_key: bytes | str,
    handler: str | None = None,
    context: Mapping[str, Any] | None = None,
    *,
    path: str | None = None,
) -> str:
    """Monta a URL de callback, assinando handler e contexto quando houver.

    Args:
        path: Segmento da rota; padrão callback_type.path

    Raises:
        TypeError/ValueError: Contexto com valores não serializáveis em JSON.
    """
    segment = (path or callback_type.path).strip("/")
    url = f"{base_url.rstrip('/')}/{segment}"
    context = dict(context or {})

    if handler is None and not context:
        return url

    params: dict[str, str] = {}
    if handler is not None:
        params["h"] = b64url_encode(handler)
    if context:
        params["c"] = b64url_encode(encode_context(context))

    params["s"] = sign(params.get("h", "") + params.get("c", ""), signing_key)
    return f"{url}?{urlencode(params)}"


class CallbackUrlBuilder:
    """Builder de URLs de callback vinculado a uma base e uma chave.

    Args:
        base_url: URL pública sob a qual os webhooks estão montados
        signing_key: Chave HMAC compartilhada com o parser
        paths: Segmento de rota por tipo; tipos ausentes usam callback_type.path
    """

    def __init__(
        self,
        base_url: str,
        signing_key: bytes | str,
        paths: Mapping[CallbackType, str] | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._signing_key = signing_key
        self._paths = dict(paths or {})

    @property
    def base_url(self) -> str:
        return self._base_url

    def with_base_url(self, base_url: str) -> CallbackUrlBuilder:
        return CallbackUrlBuilder(base_url, self._signing_key, self._paths)

    def build(
        self,
        callback_type: CallbackType,
        handler: str | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> str:
        return build_callback_url(
            callback_type,
            self._base_url,
            self._signing_key,
            handler,
            context,
            path=self._paths.get(callback_type),
        )

    def dlr(self, handler: str | None = None, context: Mapping[str, Any] | None = None) -> str:
        return self.build(CallbackType.DLR, handler, context)

    def reply(self, handler: str | None = None, context: Mapping[str, Any] | None = None) -> str:
        return self.build(CallbackType.REPLY, handler, context)

    def link_hits(
        self, handler: str | None = None, context: Mapping[str, Any] | None = None
    ) -> str:
        return self.build(CallbackType.LINK_HITS, handler, context)

    def sign(self, data: str) -> str:
        """Assinatura HMAC-SHA256 (hex) de um valor arbitrário."""
        return sign(data, self._signing_key)
