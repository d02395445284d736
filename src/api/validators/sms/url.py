"""Validação de URLs de callback/webhook e e-mails.

Inclui proteção contra SSRF para URLs de callback: rejeita localhost,
loopback, redes privadas e link-local (inclui o endpoint de metadata de
nuvem 169.254.169.254).

Limitações conhecidas:
- Hostname que não resolve (ou estoura o timeout de DNS) é aceito e
  registrado com log_fallback.
- Endereços IPv6 fora do loopback não são verificados por faixa.
"""

from __future__ import annotations

import ipaddress
import logging
import re
import socket
import threading
from typing import TYPE_CHECKING, Final
from urllib.parse import urlsplit

from config.logging import log_fallback
from utils.errors import ValidationError

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)

ALLOWED_SCHEMES: Final = frozenset({"http", "https"})

BLOCKED_HOSTNAMES: Final = frozenset({"localhost", "localhost.localdomain"})

IPV6_LOOPBACK_HOSTS: Final = frozenset({"::1", "[::1]"})

# Faixas IPv4 bloqueadas (início, fim), comparadas como inteiros de 32 bits
PRIVATE_IPV4_RANGES: Final[dict[str, tuple[str, str]]] = {
    "loopback_v4": ("127.0.0.0", "127.255.255.255"),
    "private_10": ("10.0.0.0", "10.255.255.255"),
    "private_172": ("172.16.0.0", "172.31.255.255"),
    "private_192": ("192.168.0.0", "192.168.255.255"),
    "link_local": ("169.254.0.0", "169.254.255.255"),
    "current_network": ("0.0.0.0", "0.255.255.255"),
}

_PRIVATE_IPV4_INT_RANGES: Final = tuple(
    (int(ipaddress.IPv4Address(start)), int(ipaddress.IPv4Address(end)))
    for start, end in PRIVATE_IPV4_RANGES.values()
)

DEFAULT_DNS_TIMEOUT_SECONDS: Final = 0.5

_EMAIL_PATTERN: Final = re.compile(
    r"^[A-Za-z0-9._%+\-]+@[A-Za-z0-9](?:[A-Za-z0-9\-]*[A-Za-z0-9])?"
    r"(?:\.[A-Za-z0-9](?:[A-Za-z0-9\-]*[A-Za-z0-9])?)*\.[A-Za-z]{2,}$"
)

_WHITESPACE = re.compile(r"\s")

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")


def resolve_host_ipv4(host: str, timeout_seconds: float) -> list[str]:
    """Resolve hostname para endereços IPv4 com timeout limitado.

    Cada resolução roda em sua própria thread daemon: o timeout conta a
    partir do início da consulta e consultas lentas anteriores não
    atrasam as seguintes. Uma consulta que estoura o timeout é abandonada.

    Returns:
        Lista de IPs sem duplicatas (vazia se não resolveu ou estourou o
        timeout).
    """
    infos: list[tuple] = []
    errors: list[BaseException] = []

    def _lookup() -> None:
        try:
            infos.extend(
                socket.getaddrinfo(host, None, socket.AF_INET, socket.SOCK_STREAM)
            )
        except (OSError, UnicodeError) as exc:
            errors.append(exc)

    worker = threading.Thread(target=_lookup, name="callback-dns", daemon=True)
    worker.start()
    worker.join(timeout_seconds)

    if worker.is_alive():
        log_fallback(logger, "callback_url_dns", reason="dns_timeout")
        return []
    if errors:
        log_fallback(
            logger,
            "callback_url_dns",
            reason=f"dns_error:{type(errors[0]).__name__}",
        )
        return []

    addresses: list[str] = []
    for info in infos:
        address = str(info[4][0])
        if address not in addresses:
            addresses.append(address)
    return addresses


def _url_problem(url: str) -> str | None:
    """Retorna o tipo de problema da URL (None se válida)."""
    if url == "":
        return "empty"
    if _WHITESPACE.search(url) or _CONTROL_CHARS.search(url):
        return "invalid"
    try:
        parts = urlsplit(url)
        _ = parts.port
    except ValueError:
        return "invalid"
    if not parts.scheme:
        return "invalid"
    if parts.scheme.lower() not in ALLOWED_SCHEMES:
        return "scheme"
    if not parts.netloc or not parts.hostname:
        return "invalid"
    return None


def validate_url(url: str, field_name: str = "url") -> None:
    """Valida URL absoluta HTTP/HTTPS.

    Raises:
        ValidationError: FIELD_EMPTY (vazia) ou FIELD_INVALID (malformada
            ou esquema diferente de http/https).
    """
    problem = _url_problem(url)
    if problem is None:
        return
    if problem == "empty":
        raise ValidationError(f"The {field_name} cannot be empty", kind="FIELD_EMPTY")
    if problem == "scheme":
        raise ValidationError(
            f"The {field_name} must use HTTP or HTTPS protocol: {url}",
            kind="FIELD_INVALID",
        )
    raise ValidationError(
        f"The {field_name} is not a valid URL: {url}",
        kind="FIELD_INVALID",
    )


def is_valid_url(url: str) -> bool:
    return _url_problem(url) is None


def validate_email(email: str, field_name: str = "email") -> None:
    """Valida endereço de e-mail.

    Raises:
        ValidationError: FIELD_EMPTY ou FIELD_INVALID.
    """
    if email == "":
        raise ValidationError(f"The {field_name} cannot be empty", kind="FIELD_EMPTY")
    if not _EMAIL_PATTERN.match(email):
        raise ValidationError(
            f"The {field_name} is not a valid email address: {email}",
            kind="FIELD_INVALID",
        )


def is_valid_email(email: str) -> bool:
    return email != "" and _EMAIL_PATTERN.match(email) is not None


def is_private_ipv4(address: str) -> bool:
    """True se o IPv4 estiver em alguma faixa bloqueada.

    Endereços que não são IPv4 retornam False.
    """
    try:
        value = int(ipaddress.IPv4Address(address))
    except ValueError:
        return False
    return any(start <= value <= end for start, end in _PRIVATE_IPV4_INT_RANGES)


def _is_ipv4_literal(host: str) -> bool:
    try:
        ipaddress.IPv4Address(host)
    except ValueError:
        return False
    return True


def _is_ip_literal(host: str) -> bool:
    try:
        ipaddress.ip_address(host)
    except ValueError:
        return False
    return True


class CallbackUrlSafetyChecker:
    """Guarda SSRF para URLs de callback.

    Args:
        dns_timeout_seconds: Timeout da resolução DNS; timeout conta como
            "não resolvido" (aceito).
        resolver: Função (host, timeout) -> lista de IPv4. Padrão:
            resolve_host_ipv4.
    """

    def __init__(
        self,
        dns_timeout_seconds: float = DEFAULT_DNS_TIMEOUT_SECONDS,
        resolver: Callable[[str, float], list[str]] | None = None,
    ) -> None:
        self._dns_timeout_seconds = dns_timeout_seconds
        self._resolver = resolver

    def is_safe(self, url: str) -> bool:
        if not is_valid_url(url):
            return False

        host = urlsplit(url).hostname or ""
        if not host:
            return False

        host_lower = host.lower()
        if host_lower in BLOCKED_HOSTNAMES or host_lower in IPV6_LOOPBACK_HOSTS:
            return False

        if _is_ipv4_literal(host_lower):
            return not is_private_ipv4(host_lower)

        if _is_ip_literal(host_lower):
            return True

        resolver = self._resolver or resolve_host_ipv4
        addresses = resolver(host_lower, self._dns_timeout_seconds)
        if not addresses:
            return True

        for address in addresses:
            if address in IPV6_LOOPBACK_HOSTS or is_private_ipv4(address):
                logger.warning(
                    "callback_url_private_address",
                    extra={"host": host_lower},
                )
                return False
        return True

    def validate(self, url: str, field_name: str = "callback_url") -> None:
        """Valida formato e segurança da URL de callback.

        Raises:
            ValidationError: FIELD_EMPTY/FIELD_INVALID (formato) ou
                FIELD_UNSAFE (aponta para recurso interno).
        """
        validate_url(url, field_name)
        if not self.is_safe(url):
            raise ValidationError(
                f"The {field_name} must not point to internal or private resources: {url}",
                kind="FIELD_UNSAFE",
            )


_default_checker = CallbackUrlSafetyChecker()


def is_callback_url_safe(url: str) -> bool:
    return _default_checker.is_safe(url)


def validate_callback_url(url: str, field_name: str = "callback_url") -> None:
    _default_checker.validate(url, field_name)
