"""Hierarquia de exceções do cliente TransmitSMS.

Dois grupos distintos:
- TransmitSmsError e subclasses: erros reportados pela API (ou validações
  locais que antecedem uma chamada à API), com error_code do provedor.
- InvalidSignatureError / InvalidArgumentError: falhas locais de integridade
  ou de uso, nunca retentadas.
"""

from __future__ import annotations

import json
import time
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any, Literal

if TYPE_CHECKING:
    from collections.abc import Mapping

ValidationKind = Literal["FIELD_EMPTY", "FIELD_INVALID", "FIELD_UNSAFE"]


class TransmitSmsError(Exception):
    """Erro base da API TransmitSMS."""

    def __init__(
        self,
        message: str = "",
        *,
        error_code: str | None = None,
        status_code: int | None = None,
        response_data: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.error_code = error_code
        self.status_code = status_code
        self.response_data = dict(response_data) if response_data else None


class AuthenticationError(TransmitSmsError):
    """Credenciais inválidas (AUTH_FAILED)."""


class AccessDeniedError(TransmitSmsError):
    """Conta sem acesso ao recurso (NO_ACCESS)."""


class InsufficientFundsError(TransmitSmsError):
    """Saldo insuficiente (LEDGER_ERROR)."""


class InvalidRecipientsError(TransmitSmsError):
    """Destinatários inválidos ou opt-out (RECIPIENTS_ERROR, LIST_EMPTY)."""


class InvalidSenderError(TransmitSmsError):
    """Sender ID recusado pelo provedor (BAD_CALLER_ID)."""


class ValidationError(TransmitSmsError):
    """Campo vazio, inválido ou inseguro.

    O `kind` é o próprio error_code (FIELD_EMPTY, FIELD_INVALID, FIELD_UNSAFE).
    """

    def __init__(
        self,
        message: str = "",
        *,
        kind: ValidationKind = "FIELD_INVALID",
        status_code: int | None = None,
        response_data: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message,
            error_code=kind,
            status_code=status_code,
            response_data=response_data,
        )

    @property
    def kind(self) -> str:
        return self.error_code or "FIELD_INVALID"


class RateLimitError(TransmitSmsError):
    """Limite de requisições excedido (OVER_LIMIT / HTTP 429).

    O limite padrão da conta é de 15 chamadas por segundo.
    """

    def __init__(
        self,
        message: str = "",
        *,
        error_code: str | None = "OVER_LIMIT",
        status_code: int | None = 429,
        response_data: Mapping[str, Any] | None = None,
        remaining: int | None = None,
        limit: int | None = None,
        reset_timestamp: int | None = None,
        retry_after: int | None = None,
    ) -> None:
        super().__init__(
            message,
            error_code=error_code,
            status_code=status_code,
            response_data=response_data,
        )
        self.remaining = remaining
        self.limit = limit
        self.reset_timestamp = reset_timestamp
        self._retry_after = retry_after

    @property
    def retry_after_seconds(self) -> int | None:
        """Segundos até nova tentativa (Retry-After ou derivado do reset)."""
        if self._retry_after is not None:
            return self._retry_after
        if self.reset_timestamp is not None:
            return max(0, self.reset_timestamp - int(time.time()))
        return None

    @property
    def reset_time(self) -> datetime | None:
        if self.reset_timestamp is None:
            return None
        return datetime.fromtimestamp(self.reset_timestamp, tz=UTC)

    def has_rate_limit_metadata(self) -> bool:
        return any(
            value is not None
            for value in (self.remaining, self.limit, self.reset_timestamp, self._retry_after)
        )

    def recommended_wait_seconds(self, default: int = 1) -> int:
        retry_after = self.retry_after_seconds
        return retry_after if retry_after is not None else default


class InvalidSignatureError(ValueError):
    """Assinatura de callback ausente, divergente ou contexto corrompido."""

    def __init__(self, message: str = "Invalid callback signature") -> None:
        super().__init__(message)


class InvalidArgumentError(ValueError):
    """Argumento inválido para utilitários de telefone (erro do chamador)."""


ERROR_CODE_MAP: dict[str, type[TransmitSmsError]] = {
    "AUTH_FAILED": AuthenticationError,
    "AUTH_FAILED_NO_DATA": AuthenticationError,
    "OVER_LIMIT": RateLimitError,
    "FIELD_EMPTY": ValidationError,
    "FIELD_INVALID": ValidationError,
    "FIELD_UNSAFE": ValidationError,
    "LEDGER_ERROR": InsufficientFundsError,
    "RECIPIENTS_ERROR": InvalidRecipientsError,
    "LIST_EMPTY": InvalidRecipientsError,
    "NO_ACCESS": AccessDeniedError,
    "BAD_CALLER_ID": InvalidSenderError,
}


def error_from_response(
    status_code: int,
    data: Mapping[str, Any] | None,
    headers: Mapping[str, str] | None = None,
) -> TransmitSmsError:
    """Constrói a exceção adequada a partir de uma resposta de erro da API.

    Args:
        status_code: Status HTTP recebido
        data: Corpo JSON decodificado (pode ser None se inválido)
        headers: Headers da resposta (usados para metadados de rate limit)

    Returns:
        Instância de TransmitSmsError (ou subclasse mapeada pelo error code)
    """
    body = dict(data or {})
    error = body.get("error")
    if not isinstance(error, dict):
        error = {}
    error_code = error.get("code")
    if not isinstance(error_code, str):
        error_code = None
    description = error.get("description")

    if isinstance(description, dict | list):
        message = _format_structured_description(description, error_code)
    elif isinstance(description, str) and description:
        message = description
    else:
        suffix = f" (error code: {error_code})" if error_code is not None else ""
        message = f"API request failed with HTTP {status_code}{suffix}"

    error_cls = ERROR_CODE_MAP.get(error_code or "", TransmitSmsError)
    if error_cls is TransmitSmsError and status_code == 429:
        error_cls = RateLimitError

    if error_cls is RateLimitError:
        return RateLimitError(
            message,
            error_code=error_code or "OVER_LIMIT",
            status_code=status_code,
            response_data=body,
            **_rate_limit_metadata(headers or {}),
        )
    if error_cls is ValidationError:
        return ValidationError(
            message,
            kind=error_code,  # type: ignore[arg-type]
            status_code=status_code,
            response_data=body,
        )
    return error_cls(
        message,
        error_code=error_code,
        status_code=status_code,
        response_data=body,
    )


def _format_structured_description(description: Any, error_code: str | None) -> str:
    """Formata descrições estruturadas (ex.: RECIPIENTS_ERROR com fails/optouts)."""
    if isinstance(description, dict) and ("fails" in description or "optouts" in description):
        parts: list[str] = []
        fails = _as_list(description.get("fails"))
        optouts = _as_list(description.get("optouts"))
        if fails:
            parts.append("invalid numbers: " + ", ".join(fails))
        if optouts:
            parts.append("opted-out numbers: " + ", ".join(optouts))
        if parts:
            return "Recipients error - " + "; ".join(parts)
        return "Recipients error - all recipients are invalid or opted out"

    encoded = json.dumps(description, separators=(",", ":"))
    if error_code is not None:
        return f"{error_code}: {encoded}"
    return f"Error details: {encoded}"


def _as_list(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, list | tuple):
        return [str(item) for item in value]
    return [str(value)]


def _rate_limit_metadata(headers: Mapping[str, str]) -> dict[str, int | None]:
    lowered = {key.lower(): value for key, value in headers.items()}
    return {
        "remaining": _int_header(lowered, "x-rate-limit-remaining"),
        "limit": _int_header(lowered, "x-rate-limit-limit"),
        "reset_timestamp": _int_header(lowered, "x-rate-limit-reset"),
        "retry_after": _int_header(lowered, "retry-after"),
    }


def _int_header(headers: Mapping[str, str], name: str) -> int | None:
    raw = headers.get(name)
    if raw is None:
        return None
    try:
        return int(str(raw).strip())
    except ValueError:
        return None
