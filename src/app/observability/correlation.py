"""correlation_id por requisição (ContextVar, seguro para async).

Cada callback recebido da TransmitSMS ganha um correlation_id, vindo do
header x-correlation-id quando presente, injetado em todos os logs.
"""

from __future__ import annotations

import uuid
from contextlib import contextmanager
from contextvars import ContextVar, Token
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

CORRELATION_ID_HEADER = "x-correlation-id"

MAX_CORRELATION_ID_LENGTH = 128

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


def get_correlation_id() -> str:
    """Retorna o correlation_id atual (vazio se não definido)."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str | None = None) -> Token[str]:
    """Define o correlation_id; sem valor, gera um UUID v4.

    Returns:
        Token para reset_correlation_id().
    """
    value = correlation_id or generate_correlation_id()
    return _correlation_id.set(value[:MAX_CORRELATION_ID_LENGTH])


def reset_correlation_id(token: Token[str]) -> None:
    _correlation_id.reset(token)


def generate_correlation_id() -> str:
    return str(uuid.uuid4())


def correlation_id_from_headers(headers: Mapping[str, str]) -> str | None:
    value = headers.get(CORRELATION_ID_HEADER)
    if value is None:
        return None
    value = value.strip()
    return value or None


@contextmanager
def correlation_scope(correlation_id: str | None = None) -> Iterator[str]:
    """Define o correlation_id durante o bloco e restaura ao sair."""
    token = set_correlation_id(correlation_id)
    try:
        yield get_correlation_id()
    finally:
        reset_correlation_id(token)
