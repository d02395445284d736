"""Observabilidade: correlation_id propagado para os logs estruturados."""

from app.observability.correlation import (
    CORRELATION_ID_HEADER,
    correlation_id_from_headers,
    correlation_scope,
    generate_correlation_id,
    get_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)

__all__ = [
    "CORRELATION_ID_HEADER",
    "correlation_id_from_headers",
    "correlation_scope",
    "generate_correlation_id",
    "get_correlation_id",
    "reset_correlation_id",
    "set_correlation_id",
]
