"""Cliente HTTP especializado para a API TransmitSMS.

Estende HttpClient com:
- Autenticação básica (API key / secret) e corpo form-encoded
- Erros da API (error.code != SUCCESS) mapeados para TransmitSmsError
- Logging estruturado sem credenciais nem números de telefone
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from api.connectors.transmitsms.http_base import HttpClient, HttpClientConfig, HttpError
from api.connectors.transmitsms.models import BalanceData, FormattedNumberData, SmsData
from utils.errors import TransmitSmsError, error_from_response

if TYPE_CHECKING:
    import httpx

    from api.payload_builders.sms import SendSmsRequest
    from config.settings import TransmitSmsSettings

logger: logging.Logger = logging.getLogger(__name__)

SUCCESS_CODE = "SUCCESS"


def format_endpoint(endpoint: str) -> str:
    """Normaliza endpoint para "/<nome>.json"."""
    if not endpoint.endswith(".json"):
        endpoint += ".json"
    return "/" + endpoint.lstrip("/")


class TransmitSmsHttpClient(HttpClient):
    """Cliente da API TransmitSMS.

    Args:
        config: Configuração HTTP (inclui basic_auth)
        base_url: URL base (SMS ou MMS)
        transport: Transport httpx opcional (testes)
    """

    def __init__(
        self,
        config: HttpClientConfig | None = None,
        base_url: str = "https://api.transmitsms.com",
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(config, transport=transport)
        self._base_url = base_url.rstrip("/")

    @property
    def base_url(self) -> str:
        return self._base_url

    async def call(self, endpoint: str, data: dict[str, Any] | None = None) -> dict[str, Any]:
        """POST no endpoint e retorna o JSON de sucesso.

        Raises:
            TransmitSmsError: Erro HTTP, erro da API ou resposta inválida
                (subclasse conforme error.code).
        """
        path = format_endpoint(endpoint)
        url = f"{self._base_url}{path}"
        try:
            response = await self.post_form(url, data or {})
        except HttpError as exc:
            if exc.response is not None:
                raise self._api_error(exc.response, path) from exc
            logger.warning("transmitsms_connection_error", extra={"endpoint": path})
            raise TransmitSmsError(
                f"Connection to TransmitSMS failed: {exc}",
                error_code=None,
            ) from exc

        if response.status_code >= 400:
            raise self._api_error(response, path)

        body = self._decode(response, path)
        error = body.get("error")
        if isinstance(error, dict) and error.get("code", SUCCESS_CODE) != SUCCESS_CODE:
            raise self._api_error(response, path, body)

        logger.info(
            "transmitsms_api_call_ok",
            extra={"endpoint": path, "status_code": response.status_code},
        )
        return body

    def _decode(self, response: httpx.Response, endpoint: str) -> dict[str, Any]:
        try:
            body = response.json()
        except json.JSONDecodeError as exc:
            logger.error("transmitsms_invalid_json", extra={"endpoint": endpoint})
            raise TransmitSmsError(
                "Invalid JSON response from TransmitSMS",
                status_code=response.status_code,
            ) from exc
        if not isinstance(body, dict):
            raise TransmitSmsError(
                "Invalid JSON response from TransmitSMS",
                status_code=response.status_code,
            )
        return body

    def _api_error(
        self,
        response: httpx.Response,
        endpoint: str,
        body: dict[str, Any] | None = None,
    ) -> TransmitSmsError:
        if body is None:
            try:
                decoded = response.json()
            except json.JSONDecodeError:
                decoded = None
            body = decoded if isinstance(decoded, dict) else None

        error = error_from_response(response.status_code, body, response.headers)
        logger.warning(
            "transmitsms_api_error",
            extra={
                "endpoint": endpoint,
                "status_code": response.status_code,
                "error_code": error.error_code,
                "error_type": type(error).__name__,
            },
        )
        return error

    async def send_sms(self, request: SendSmsRequest) -> SmsData:
        data = await self.call(request.endpoint, request.build())
        sms = SmsData.from_response(data)
        logger.info(
            "sms_sent",
            extra={"message_id": sms.message_id, "recipients": sms.recipients},
        )
        return sms

    async def cancel_sms(self, message_id: int) -> bool:
        """Cancela SMS agendado. Erros da API levantam TransmitSmsError."""
        await self.call("/cancel-sms", {"id": message_id})
        logger.info("sms_cancelled", extra={"message_id": message_id})
        return True

    async def format_number(self, number: str, country_code: str) -> FormattedNumberData:
        data = await self.call("/format-number", {"msisdn": number, "countrycode": country_code})
        return FormattedNumberData.from_response(data)

    async def get_balance(self) -> BalanceData:
        data = await self.call("/get-balance")
        return BalanceData.from_response(data)


def create_transmitsms_http_client(
    settings: TransmitSmsSettings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> TransmitSmsHttpClient:
    """Factory do cliente TransmitSMS a partir das settings.

    Args:
        settings: TransmitSmsSettings opcional. Se None, carrega do ambiente.
        transport: Transport httpx opcional (testes)
    """
    # Import local para evitar dependência circular
    from config.settings import get_transmitsms_settings

    sms = settings or get_transmitsms_settings()
    config = HttpClientConfig(
        timeout_seconds=sms.request_timeout_seconds,
        max_retries=sms.max_retries,
        backoff_base_seconds=sms.backoff_base_seconds,
        backoff_max_seconds=sms.backoff_max_seconds,
        basic_auth=(sms.api_key, sms.api_secret),
    )
    return TransmitSmsHttpClient(config=config, base_url=sms.base_url, transport=transport)
