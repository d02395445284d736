"""Resolução DNS real da guarda SSRF, com socket.getaddrinfo substituído."""

from __future__ import annotations

import logging
import socket
import threading
from typing import TYPE_CHECKING

import pytest

from api.validators.sms import url as url_module
from api.validators.sms.url import CallbackUrlSafetyChecker, resolve_host_ipv4

if TYPE_CHECKING:
    from collections.abc import Iterator


def _info(address: str) -> tuple:
    return (socket.AF_INET, socket.SOCK_STREAM, 6, "", (address, 0))


@pytest.fixture
def release() -> Iterator[threading.Event]:
    """Libera as consultas bloqueadas ao final do teste."""
    event = threading.Event()
    yield event
    event.set()


def _getaddrinfo(addresses: dict[str, list[str]], release: threading.Event):
    def fake(host: str, *args: object) -> list[tuple]:
        if host.startswith("slow"):
            release.wait(5)
            return [_info("93.184.216.34")]
        if host not in addresses:
            raise socket.gaierror(socket.EAI_NONAME, "Name or service not known")
        return [_info(address) for address in addresses[host]]

    return fake


class TestResolveHostIpv4:
    def test_collapses_duplicate_records(
        self, monkeypatch: pytest.MonkeyPatch, release: threading.Event
    ) -> None:
        monkeypatch.setattr(
            url_module.socket,
            "getaddrinfo",
            _getaddrinfo({"api.example": ["8.8.8.8", "8.8.8.8", "1.1.1.1"]}, release),
        )
        assert resolve_host_ipv4("api.example", 1.0) == ["8.8.8.8", "1.1.1.1"]

    def test_resolver_error_returns_empty(
        self,
        monkeypatch: pytest.MonkeyPatch,
        release: threading.Event,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        monkeypatch.setattr(url_module.socket, "getaddrinfo", _getaddrinfo({}, release))
        with caplog.at_level(logging.INFO):
            assert resolve_host_ipv4("nowhere.example", 1.0) == []
        fallback = [r for r in caplog.records if r.getMessage() == "fallback_applied"]
        assert fallback[0].component == "callback_url_dns"
        assert fallback[0].reason == "dns_error:gaierror"

    def test_timeout_returns_empty(
        self,
        monkeypatch: pytest.MonkeyPatch,
        release: threading.Event,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        monkeypatch.setattr(url_module.socket, "getaddrinfo", _getaddrinfo({}, release))
        with caplog.at_level(logging.INFO):
            assert resolve_host_ipv4("slow.example", 0.05) == []
        fallback = [r for r in caplog.records if r.getMessage() == "fallback_applied"]
        assert fallback[0].reason == "dns_timeout"


class TestCheckerWithSystemResolver:
    def test_timeout_is_accepted(
        self, monkeypatch: pytest.MonkeyPatch, release: threading.Event
    ) -> None:
        monkeypatch.setattr(url_module.socket, "getaddrinfo", _getaddrinfo({}, release))
        checker = CallbackUrlSafetyChecker(dns_timeout_seconds=0.05)
        assert checker.is_safe("https://slow.example/cb") is True

    def test_private_answer_is_rejected(
        self, monkeypatch: pytest.MonkeyPatch, release: threading.Event
    ) -> None:
        monkeypatch.setattr(
            url_module.socket,
            "getaddrinfo",
            _getaddrinfo({"internal.example": ["10.0.0.5"]}, release),
        )
        checker = CallbackUrlSafetyChecker(dns_timeout_seconds=0.5)
        assert checker.is_safe("https://internal.example/cb") is False

    def test_slow_lookups_do_not_block_later_ones(
        self, monkeypatch: pytest.MonkeyPatch, release: threading.Event
    ) -> None:
        monkeypatch.setattr(
            url_module.socket,
            "getaddrinfo",
            _getaddrinfo({"internal.example": ["10.0.0.5"]}, release),
        )
        checker = CallbackUrlSafetyChecker(dns_timeout_seconds=0.2)

        for index in range(8):
            assert checker.is_safe(f"https://slow{index}.example/cb") is True

        assert checker.is_safe("https://internal.example/cb") is False
