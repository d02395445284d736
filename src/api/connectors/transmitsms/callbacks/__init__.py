"""URLs de callback assinadas (DLR, reply, link hits).

Responsabilidades:
- Montar URLs com handler/contexto em base64url e assinatura HMAC-SHA256
- Verificar a assinatura e recuperar handler/contexto no recebimento
"""

from .builder import CallbackUrlBuilder, build_callback_url
from .parser import CallbackUrlParser, ParsedCallback, parse_callback_params

__all__ = [
    "CallbackUrlBuilder",
    "CallbackUrlParser",
    "ParsedCallback",
    "build_callback_url",
    "parse_callback_params",
]
