"""Cliente HTTP base (httpx) com autenticação básica e retry."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any

import httpx

logger = logging.getLogger(__name__)

RETRYABLE_STATUS_CODES = frozenset({429})


@dataclass
class HttpClientConfig:
    """Configuração do cliente HTTP."""

    timeout_seconds: float = 30.0
    max_retries: int = 3
    backoff_base_seconds: float = 2.0
    backoff_max_seconds: float = 30.0
    default_headers: dict[str, str] = field(
        default_factory=lambda: {"Accept": "application/json"}
    )
    basic_auth: tuple[str, str] | None = None
    verify_ssl: bool = True


class HttpError(Exception):
    """Erro de requisição HTTP sem dados sensíveis.

    Quando o erro vem de um status HTTP, `response` guarda a última resposta
    recebida (headers de rate limit, corpo de erro).
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        is_retryable: bool = False,
        response: httpx.Response | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.is_retryable = is_retryable
        self.response = response


def _is_retryable_status(status_code: int) -> bool:
    return status_code in RETRYABLE_STATUS_CODES or status_code >= 500


class HttpClient:
    """Cliente HTTP simples para chamadas externas.

    Args:
        config: Timeouts, retries e autenticação
        transport: Transport httpx opcional (ex.: httpx.MockTransport em testes)
    """

    def __init__(
        self,
        config: HttpClientConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config or HttpClientConfig()
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        auth = httpx.BasicAuth(*self._config.basic_auth) if self._config.basic_auth else None
        return httpx.AsyncClient(
            verify=self._config.verify_ssl,
            auth=auth,
            transport=self._transport,
        )

    async def post_form(
        self,
        url: str,
        data: dict[str, Any],
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """POST form-encoded com retry em 429, 5xx, timeout e falha de conexão.

        Raises:
            HttpError: Status retentável esgotado ou erro de conexão persistente.
        """
        merged_headers = {**self._config.default_headers, **(headers or {})}
        for attempt in range(self._config.max_retries + 1):
            try:
                async with self._client() as client:
                    response = await client.post(
                        url,
                        data=data,
                        headers=merged_headers,
                        timeout=self._config.timeout_seconds,
                    )
                if _is_retryable_status(response.status_code):
                    raise HttpError(
                        "http_retryable_status",
                        status_code=response.status_code,
                        is_retryable=True,
                        response=response,
                    )
                return response
            except HttpError as exc:
                if not exc.is_retryable or attempt >= self._config.max_retries:
                    raise
                await _backoff_sleep(
                    attempt,
                    self._config.backoff_base_seconds,
                    self._config.backoff_max_seconds,
                )
            except (httpx.TimeoutException, httpx.ConnectError) as exc:
                if attempt >= self._config.max_retries:
                    raise HttpError("http_connection_error", is_retryable=True) from exc
                await _backoff_sleep(
                    attempt,
                    self._config.backoff_base_seconds,
                    self._config.backoff_max_seconds,
                )
        raise HttpError("http_retry_exhausted", is_retryable=True)


async def _backoff_sleep(attempt: int, base: float, max_seconds: float) -> None:
    backoff = min((2**attempt) * base, max_seconds)
    logger.info("http_backoff", extra={"backoff_seconds": backoff, "attempt": attempt})
    await asyncio.sleep(backoff)
