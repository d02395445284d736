"""Testes do cliente HTTP TransmitSMS com httpx.MockTransport."""

from __future__ import annotations

import base64
from typing import Any
from urllib.parse import parse_qs

import httpx
import pytest

from api.connectors.transmitsms import (
    TransmitSmsHttpClient,
    create_transmitsms_http_client,
)
from api.connectors.transmitsms.http_base import HttpClient, HttpClientConfig, HttpError
from api.connectors.transmitsms.http_client import format_endpoint
from api.payload_builders.sms import SendSmsRequest
from config.settings import TransmitSmsSettings
from utils.errors import (
    AuthenticationError,
    InsufficientFundsError,
    InvalidRecipientsError,
    RateLimitError,
    TransmitSmsError,
    ValidationError,
)

SEND_OK = {
    "message_id": 9012345,
    "send_at": "2026-10-19 10:00:00",
    "recipients": 2,
    "cost": 0.14,
    "sms": 2,
    "error": {"code": "SUCCESS", "description": "OK"},
}


class _Recorder:
    """Handler do MockTransport que registra as requisições."""

    def __init__(self, *responses: httpx.Response) -> None:
        self._responses = list(responses)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if len(self._responses) > 1:
            return self._responses.pop(0)
        return self._responses[0]

    def form(self, index: int = -1) -> dict[str, str]:
        body = self.requests[index].content.decode()
        return {key: values[0] for key, values in parse_qs(body).items()}


def _client(recorder: _Recorder, **config: Any) -> TransmitSmsHttpClient:
    defaults: dict[str, Any] = {
        "max_retries": 2,
        "backoff_base_seconds": 0.0,
        "basic_auth": ("key", "secret"),
    }
    defaults.update(config)
    return TransmitSmsHttpClient(
        config=HttpClientConfig(**defaults),
        base_url="https://api.test.local/",
        transport=httpx.MockTransport(recorder),
    )


class TestFormatEndpoint:
    @pytest.mark.parametrize(
        ("endpoint", "expected"),
        [
            ("send-sms", "/send-sms.json"),
            ("/send-sms", "/send-sms.json"),
            ("/send-sms.json", "/send-sms.json"),
            ("get-balance.json", "/get-balance.json"),
        ],
    )
    def test_format(self, endpoint: str, expected: str) -> None:
        assert format_endpoint(endpoint) == expected


class TestCall:
    @pytest.mark.asyncio
    async def test_success_sends_form_with_basic_auth(self) -> None:
        recorder = _Recorder(httpx.Response(200, json={"balance": 10, "currency": "AUD"}))
        client = _client(recorder)

        body = await client.call("get-balance", {"a": "1"})

        assert body["currency"] == "AUD"
        request = recorder.requests[0]
        assert request.method == "POST"
        assert str(request.url) == "https://api.test.local/get-balance.json"
        assert request.headers["content-type"] == "application/x-www-form-urlencoded"
        assert request.headers["accept"] == "application/json"
        expected_auth = base64.b64encode(b"key:secret").decode()
        assert request.headers["authorization"] == f"Basic {expected_auth}"
        assert recorder.form() == {"a": "1"}

    @pytest.mark.asyncio
    async def test_success_code_is_not_an_error(self) -> None:
        recorder = _Recorder(httpx.Response(200, json=SEND_OK))
        body = await _client(recorder).call("/send-sms.json")
        assert body["message_id"] == 9012345

    @pytest.mark.asyncio
    async def test_api_error_code_in_200_body(self) -> None:
        recorder = _Recorder(
            httpx.Response(
                200,
                json={"error": {"code": "LEDGER_ERROR", "description": "Not enough funds"}},
            )
        )
        with pytest.raises(InsufficientFundsError) as exc_info:
            await _client(recorder).call("send-sms")

        assert str(exc_info.value) == "Not enough funds"
        assert exc_info.value.error_code == "LEDGER_ERROR"
        assert exc_info.value.status_code == 200

    @pytest.mark.asyncio
    async def test_http_401_maps_to_authentication_error(self) -> None:
        recorder = _Recorder(
            httpx.Response(401, json={"error": {"code": "AUTH_FAILED", "description": "Bad"}})
        )
        with pytest.raises(AuthenticationError):
            await _client(recorder).call("get-balance")
        assert len(recorder.requests) == 1

    @pytest.mark.asyncio
    async def test_recipients_error_formats_fails_and_optouts(self) -> None:
        recorder = _Recorder(
            httpx.Response(
                400,
                json={
                    "error": {
                        "code": "RECIPIENTS_ERROR",
                        "description": {"fails": ["123"], "optouts": ["61400000000"]},
                    }
                },
            )
        )
        with pytest.raises(InvalidRecipientsError) as exc_info:
            await _client(recorder).call("send-sms")
        assert str(exc_info.value) == (
            "Recipients error - invalid numbers: 123; opted-out numbers: 61400000000"
        )

    @pytest.mark.asyncio
    async def test_field_error_is_validation_error(self) -> None:
        recorder = _Recorder(
            httpx.Response(
                400, json={"error": {"code": "FIELD_INVALID", "description": "bad to"}}
            )
        )
        with pytest.raises(ValidationError) as exc_info:
            await _client(recorder).call("send-sms")
        assert exc_info.value.kind == "FIELD_INVALID"

    @pytest.mark.asyncio
    async def test_429_retries_then_raises_rate_limit_with_headers(self) -> None:
        recorder = _Recorder(
            httpx.Response(
                429,
                json={"error": {"code": "OVER_LIMIT", "description": "Slow down"}},
                headers={
                    "X-Rate-Limit-Remaining": "0",
                    "X-Rate-Limit-Limit": "15",
                    "X-Rate-Limit-Reset": "1893456000",
                    "Retry-After": "3",
                },
            )
        )
        with pytest.raises(RateLimitError) as exc_info:
            await _client(recorder).call("send-sms")

        error = exc_info.value
        assert len(recorder.requests) == 3
        assert error.remaining == 0
        assert error.limit == 15
        assert error.reset_timestamp == 1893456000
        assert error.retry_after_seconds == 3
        assert error.has_rate_limit_metadata() is True

    @pytest.mark.asyncio
    async def test_5xx_retry_then_success(self) -> None:
        recorder = _Recorder(
            httpx.Response(503, text="unavailable"),
            httpx.Response(200, json=SEND_OK),
        )
        body = await _client(recorder).call("send-sms")
        assert body["sms"] == 2
        assert len(recorder.requests) == 2

    @pytest.mark.asyncio
    async def test_5xx_exhausted_without_json_body(self) -> None:
        recorder = _Recorder(httpx.Response(500, text="boom"))
        with pytest.raises(TransmitSmsError) as exc_info:
            await _client(recorder, max_retries=0).call("send-sms")
        assert str(exc_info.value) == "API request failed with HTTP 500"
        assert exc_info.value.status_code == 500

    @pytest.mark.asyncio
    async def test_invalid_json_response(self) -> None:
        recorder = _Recorder(httpx.Response(200, text="<html>"))
        with pytest.raises(TransmitSmsError, match="Invalid JSON response"):
            await _client(recorder).call("get-balance")

    @pytest.mark.asyncio
    async def test_connection_error_exhausts_retries(self) -> None:
        calls: list[httpx.Request] = []

        def _fail(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            raise httpx.ConnectError("refused", request=request)

        client = TransmitSmsHttpClient(
            config=HttpClientConfig(max_retries=1, backoff_base_seconds=0.0),
            base_url="https://api.test.local",
            transport=httpx.MockTransport(_fail),
        )
        with pytest.raises(TransmitSmsError, match="Connection to TransmitSMS failed") as exc:
            await client.call("get-balance")

        assert exc.value.error_code is None
        assert len(calls) == 2


class TestOperations:
    @pytest.mark.asyncio
    async def test_send_sms(self) -> None:
        recorder = _Recorder(httpx.Response(200, json=SEND_OK))
        request = SendSmsRequest("Olá").to("61400000000,61400000001").from_("AcmeSms")

        sms = await _client(recorder).send_sms(request)

        assert sms.message_id == 9012345
        assert sms.recipients == 2
        assert sms.cost == pytest.approx(0.14)
        assert str(recorder.requests[0].url).endswith("/send-sms.json")
        assert recorder.form() == {
            "message": "Olá",
            "to": "61400000000,61400000001",
            "from": "AcmeSms",
        }

    @pytest.mark.asyncio
    async def test_cancel_sms(self) -> None:
        recorder = _Recorder(httpx.Response(200, json={"error": {"code": "SUCCESS"}}))
        assert await _client(recorder).cancel_sms(123) is True
        assert str(recorder.requests[0].url).endswith("/cancel-sms.json")
        assert recorder.form() == {"id": "123"}

    @pytest.mark.asyncio
    async def test_format_number(self) -> None:
        recorder = _Recorder(
            httpx.Response(
                200,
                json={
                    "number": {
                        "countrycode": 61,
                        "nationalnumber": "400000000",
                        "international": "61400000000",
                        "type": 1,
                        "isValid": True,
                    },
                    "error": {"code": "SUCCESS"},
                },
            )
        )
        formatted = await _client(recorder).format_number("0400000000", "AU")

        assert formatted.international == "61400000000"
        assert formatted.country_code == "61"
        assert formatted.is_mobile is True
        assert formatted.is_landline is False
        assert recorder.form() == {"msisdn": "0400000000", "countrycode": "AU"}

    @pytest.mark.asyncio
    async def test_get_balance(self) -> None:
        recorder = _Recorder(httpx.Response(200, json={"balance": "12.5", "currency": "AUD"}))
        balance = await _client(recorder).get_balance()
        assert balance.balance == pytest.approx(12.5)
        assert balance.currency == "AUD"


class TestHttpBase:
    @pytest.mark.asyncio
    async def test_non_retryable_status_is_returned(self) -> None:
        recorder = _Recorder(httpx.Response(404, text="nope"))
        client = HttpClient(HttpClientConfig(), transport=httpx.MockTransport(recorder))
        response = await client.post_form("https://x.test/a", {})
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_retryable_error_keeps_last_response(self) -> None:
        recorder = _Recorder(httpx.Response(429, text="slow"))
        client = HttpClient(
            HttpClientConfig(max_retries=0),
            transport=httpx.MockTransport(recorder),
        )
        with pytest.raises(HttpError) as exc_info:
            await client.post_form("https://x.test/a", {})
        assert exc_info.value.status_code == 429
        assert exc_info.value.response is not None
        assert exc_info.value.response.text == "slow"


class TestFactory:
    def test_factory_uses_settings(self) -> None:
        settings = TransmitSmsSettings(
            api_key="k",
            api_secret="s",
            base_url="https://api.transmitmessage.com",
            request_timeout_seconds=5.0,
            max_retries=1,
        )
        client = create_transmitsms_http_client(settings)
        assert client.base_url == "https://api.transmitmessage.com"
        assert client._config.basic_auth == ("k", "s")
        assert client._config.timeout_seconds == 5.0
        assert client._config.max_retries == 1
