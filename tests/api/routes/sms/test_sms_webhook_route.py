"""Testes dos endpoints de callback TransmitSMS."""

from __future__ import annotations

from typing import Any
from urllib.parse import urlsplit

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from starlette.requests import Request

from api.connectors.transmitsms.callbacks import CallbackUrlBuilder, CallbackUrlParser
from api.normalizers.sms import DlrCallbackData, LinkHitCallbackData, ReplyCallbackData
from api.routes import create_api_router
from api.routes.sms import webhook
from app.constants.sms import CallbackType
from app.coordinators.sms import CallbackHandlerRegistry
from app.observability import get_correlation_id
from config.settings import TransmitSmsSettings

KEY = "webhook-key"
BASE = "https://hooks.example.com/webhooks/transmitsms"


def _build_request(
    *,
    query_string: str = "",
    headers: dict[str, str] | None = None,
) -> Request:
    header_items = headers or {}
    raw_headers = [(k.lower().encode("utf-8"), v.encode("utf-8")) for k, v in header_items.items()]
    scope = {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": "GET",
        "path": "/",
        "raw_path": b"/",
        "query_string": query_string.encode("utf-8"),
        "headers": raw_headers,
    }

    async def _receive() -> dict[str, object]:
        return {"type": "http.request", "body": b"", "more_body": False}

    return Request(scope, _receive)


def _signed_query(
    callback_type: CallbackType,
    handler: str | None,
    context: dict[str, Any] | None = None,
    extra: str = "",
) -> str:
    url = CallbackUrlBuilder(BASE, KEY).build(callback_type, handler, context)
    query = urlsplit(url).query
    if extra:
        query = f"{query}&{extra}" if query else extra
    return query


@pytest.fixture
def registry(monkeypatch: pytest.MonkeyPatch) -> CallbackHandlerRegistry:
    instance = CallbackHandlerRegistry()
    monkeypatch.setattr(webhook, "_get_callback_parser", lambda: CallbackUrlParser(KEY))
    monkeypatch.setattr(webhook, "_get_registry", lambda: instance)
    return instance


@pytest.mark.asyncio
async def test_dlr_dispatches_named_handler(registry: CallbackHandlerRegistry) -> None:
    received: list[tuple[Any, dict[str, Any]]] = []

    @registry.handler("orders.delivery", CallbackType.DLR)
    async def on_delivery(payload: Any, context: dict[str, Any]) -> None:
        received.append((payload, context))

    query = _signed_query(
        CallbackType.DLR,
        "orders.delivery",
        {"order_id": 42},
        extra="message_id=901&mobile=61400000000&status=delivered",
    )
    response = await webhook.receive_dlr(_build_request(query_string=query))

    assert response.status_code == 200
    assert response.body == b"OK"
    assert len(received) == 1
    payload, context = received[0]
    assert isinstance(payload, DlrCallbackData)
    assert payload.message_id == 901
    assert payload.is_delivered is True
    assert context == {"order_id": 42}


@pytest.mark.asyncio
async def test_tampered_signature_returns_403(registry: CallbackHandlerRegistry) -> None:
    calls: list[Any] = []
    registry.register("orders.delivery", CallbackType.DLR, lambda p, c: calls.append(p))
    registry.listen(CallbackType.DLR, lambda p, c: calls.append(p))

    query = _signed_query(CallbackType.DLR, "orders.delivery", {"order_id": 1})
    tampered = query.replace("s=", "s=0", 1)

    response = await webhook.receive_dlr(_build_request(query_string=tampered))

    assert response.status_code == 403
    assert response.body == b"Invalid signature"
    assert calls == []


@pytest.mark.asyncio
async def test_missing_signature_returns_403(registry: CallbackHandlerRegistry) -> None:
    query = _signed_query(CallbackType.REPLY, "crm.reply")
    without_signature = "&".join(part for part in query.split("&") if not part.startswith("s="))

    response = await webhook.receive_reply(_build_request(query_string=without_signature))

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_events_only_callback_notifies_listeners(
    registry: CallbackHandlerRegistry,
) -> None:
    seen: list[Any] = []
    registry.listen(CallbackType.REPLY, lambda payload, context: seen.append((payload, context)))

    response = await webhook.receive_reply(
        _build_request(query_string="message_id=5&mobile=61400000000&response=SIM")
    )

    assert response.status_code == 200
    assert len(seen) == 1
    payload, context = seen[0]
    assert isinstance(payload, ReplyCallbackData)
    assert payload.message == "SIM"
    assert context == {}


@pytest.mark.asyncio
async def test_unknown_handler_still_returns_200(registry: CallbackHandlerRegistry) -> None:
    query = _signed_query(
        CallbackType.LINK_HITS, "not.registered", extra="message_id=1&url=https%3A%2F%2Fx.test"
    )

    response = await webhook.receive_link_hits(_build_request(query_string=query))

    assert response.status_code == 200


@pytest.mark.asyncio
async def test_failing_handler_still_returns_200(registry: CallbackHandlerRegistry) -> None:
    def boom(payload: Any, context: dict[str, Any]) -> None:
        raise RuntimeError("boom")

    registry.register("boom", CallbackType.LINK_HITS, boom)
    query = _signed_query(CallbackType.LINK_HITS, "boom", extra="message_id=1")

    response = await webhook.receive_link_hits(_build_request(query_string=query))

    assert response.status_code == 200


@pytest.mark.asyncio
async def test_correlation_id_from_header_is_scoped(
    registry: CallbackHandlerRegistry,
) -> None:
    seen: list[str] = []
    registry.listen(CallbackType.LINK_HITS, lambda p, c: seen.append(get_correlation_id()))

    response = await webhook.receive_link_hits(
        _build_request(
            query_string="message_id=1&url=https%3A%2F%2Fx.test",
            headers={"X-Correlation-Id": "req-123"},
        )
    )

    assert response.status_code == 200
    assert seen == ["req-123"]
    assert get_correlation_id() == ""


@pytest.mark.asyncio
async def test_link_hit_payload(registry: CallbackHandlerRegistry) -> None:
    seen: list[Any] = []
    registry.listen(CallbackType.LINK_HITS, lambda p, c: seen.append(p))

    await webhook.receive_link_hits(
        _build_request(query_string="message_id=3&msisdn=61400000000&link=https%3A%2F%2Fx.test")
    )

    assert isinstance(seen[0], LinkHitCallbackData)
    assert seen[0].url == "https://x.test"


def _webhook_client(settings: TransmitSmsSettings) -> TestClient:
    app = FastAPI()
    app.include_router(webhook.create_webhook_router(settings))
    return TestClient(app)


def _api_client(settings: TransmitSmsSettings) -> TestClient:
    app = FastAPI()
    app.include_router(create_api_router(settings))
    return TestClient(app)


def test_router_mounts_only_enabled_callbacks(registry: CallbackHandlerRegistry) -> None:
    settings = TransmitSmsSettings(dlr_enabled=True, reply_enabled=False, link_hits_enabled=True)
    client = _webhook_client(settings)

    assert client.get("/dlr").status_code == 200
    assert client.get("/link-hits").status_code == 200
    assert client.get("/reply").status_code == 404


def test_router_all_callbacks_by_default(registry: CallbackHandlerRegistry) -> None:
    client = _webhook_client(TransmitSmsSettings())

    for path in ("/dlr", "/reply", "/link-hits"):
        response = client.get(path)
        assert response.status_code == 200
        assert response.text == "OK"


def test_api_router_applies_prefix(registry: CallbackHandlerRegistry) -> None:
    client = _api_client(TransmitSmsSettings(webhooks_prefix="/hooks/sms/"))

    assert client.get("/health").status_code == 200
    assert client.get("/hooks/sms/dlr").status_code == 200
    assert client.get("/hooks/sms/reply").status_code == 200
    assert client.get("/webhooks/transmitsms/dlr").status_code == 404


def test_api_router_respects_disabled_webhooks(registry: CallbackHandlerRegistry) -> None:
    client = _api_client(TransmitSmsSettings(webhooks_enabled=False))

    assert client.get("/health").status_code == 200
    assert client.get("/webhooks/transmitsms/dlr").status_code == 404


def test_route_methods_are_get_only(registry: CallbackHandlerRegistry) -> None:
    client = _webhook_client(
        TransmitSmsSettings(dlr_enabled=True, reply_enabled=False, link_hits_enabled=False)
    )

    assert client.get("/dlr").status_code == 200
    assert client.post("/dlr").status_code == 405


def test_custom_paths_replace_defaults(registry: CallbackHandlerRegistry) -> None:
    settings = TransmitSmsSettings(dlr_path="/delivery-receipts/", reply_path="inbound")
    client = _webhook_client(settings)

    assert client.get("/delivery-receipts").status_code == 200
    assert client.get("/inbound").status_code == 200
    assert client.get("/link-hits").status_code == 200
    assert client.get("/dlr").status_code == 404
    assert client.get("/reply").status_code == 404
    assert client.app.url_path_for("transmitsms.webhooks.dlr") == "/delivery-receipts"


def test_builder_with_settings_paths_reaches_custom_route(
    registry: CallbackHandlerRegistry,
) -> None:
    received: list[tuple[Any, dict[str, Any]]] = []
    registry.register(
        "orders.delivery",
        CallbackType.DLR,
        lambda payload, context: received.append((payload, context)),
    )
    settings = TransmitSmsSettings(webhooks_prefix="hooks", dlr_path="delivery-receipts")
    client = _api_client(settings)

    url = CallbackUrlBuilder(
        "http://testserver/hooks", KEY, paths=settings.callback_paths
    ).dlr("orders.delivery", {"order_id": 9})
    parts = urlsplit(url)
    assert parts.path == "/hooks/delivery-receipts"

    response = client.get(f"{parts.path}?{parts.query}&message_id=12&status=delivered")

    assert response.status_code == 200
    assert received[0][0].message_id == 12
    assert received[0][1] == {"order_id": 9}
