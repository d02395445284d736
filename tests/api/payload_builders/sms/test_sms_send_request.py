"""Testes do builder de send-sms."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta, timezone

import pytest

from api.payload_builders.sms import MAX_MESSAGE_LENGTH, SendSmsRequest
from api.validators.sms import CallbackUrlSafetyChecker
from utils.errors import InvalidArgumentError, ValidationError

PUBLIC_CALLBACK = "https://hooks.example.com/webhooks/transmitsms/dlr"


def _checker(mapping: dict[str, list[str]] | None = None) -> CallbackUrlSafetyChecker:
    table = mapping or {"hooks.example.com": ["93.184.216.34"]}
    return CallbackUrlSafetyChecker(resolver=lambda host, timeout: table.get(host, []))


def _request(message: str = "Olá") -> SendSmsRequest:
    return SendSmsRequest(message, url_checker=_checker())


class TestMessage:
    def test_empty_message(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            SendSmsRequest("")
        assert exc_info.value.kind == "FIELD_EMPTY"
        assert str(exc_info.value) == "The message cannot be empty"

    def test_max_length_accepted(self) -> None:
        request = SendSmsRequest("a" * MAX_MESSAGE_LENGTH)
        assert len(request.build()["message"]) == MAX_MESSAGE_LENGTH

    def test_too_long(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            SendSmsRequest("a" * (MAX_MESSAGE_LENGTH + 1))
        assert exc_info.value.kind == "FIELD_INVALID"


class TestBuild:
    def test_minimal(self) -> None:
        assert _request().build() == {"message": "Olá"}
        assert _request().has_recipients() is False

    def test_recipients_and_sender_passthrough(self) -> None:
        request = _request().to("0400000000").from_("AcmeSms").country_code("AU")
        assert request.has_recipients() is True
        assert request.build() == {
            "message": "Olá",
            "to": "0400000000",
            "from": "AcmeSms",
            "countrycode": "AU",
        }

    def test_list_id(self) -> None:
        request = _request().to_list(55)
        assert request.has_recipients() is True
        assert request.build()["list_id"] == 55

    def test_local_formatting_omits_countrycode(self) -> None:
        body = (
            _request()
            .to("0400 000 000, 0400000001")
            .from_("0400000002")
            .country_code("AU")
            .format_numbers()
            .build()
        )
        assert body["to"] == "61400000000,61400000001"
        assert body["from"] == "61400000002"
        assert "countrycode" not in body

    def test_format_numbers_without_country_passes_through(self) -> None:
        body = _request().to("0400000000").format_numbers().build()
        assert body["to"] == "0400000000"

    def test_local_formatting_unknown_country(self) -> None:
        request = _request().to("0400000000").country_code("XX").format_numbers()
        with pytest.raises(InvalidArgumentError, match="Invalid country code"):
            request.build()

    def test_too_many_recipients(self) -> None:
        numbers = ",".join(f"6140000{index:04d}" for index in range(501))
        request = _request().to(numbers).country_code("AU").format_numbers()
        with pytest.raises(InvalidArgumentError, match="Maximum 500 recipients"):
            request.build()


class TestSchedule:
    def test_string_passthrough(self) -> None:
        body = _request().scheduled_at("2026-12-01 09:00:00").build()
        assert body["send_at"] == "2026-12-01 09:00:00"

    def test_aware_datetime_converted_to_utc(self) -> None:
        brt = timezone(timedelta(hours=-3))
        body = _request().scheduled_at(datetime(2026, 12, 1, 9, 0, tzinfo=brt)).build()
        assert body["send_at"] == "2026-12-01 12:00:00"

    def test_naive_datetime_is_utc(self) -> None:
        body = _request().scheduled_at(datetime(2026, 12, 1, 9, 30, 15)).build()
        assert body["send_at"] == "2026-12-01 09:30:15"

    def test_utc_datetime(self) -> None:
        body = _request().scheduled_at(datetime(2026, 1, 2, 3, 4, 5, tzinfo=UTC)).build()
        assert body["send_at"] == "2026-01-02 03:04:05"

    @pytest.mark.parametrize("minutes", [0, 60, 4320])
    def test_validity_bounds(self, minutes: int) -> None:
        assert _request().validity(minutes).build()["validity"] == minutes

    @pytest.mark.parametrize("minutes", [-1, 4321])
    def test_validity_out_of_range(self, minutes: int) -> None:
        with pytest.raises(ValidationError):
            _request().validity(minutes)


class TestOptionalFields:
    def test_reply_email(self) -> None:
        body = _request().replies_to_email("ops@example.com").build()
        assert body["replies_to_email"] == "ops@example.com"

    def test_invalid_reply_email(self) -> None:
        with pytest.raises(ValidationError):
            _request().replies_to_email("not-an-email")

    def test_tracked_link(self) -> None:
        body = _request().tracked_link_url("https://example.com/promo").build()
        assert body["tracked_link_url"] == "https://example.com/promo"

    def test_tracked_link_invalid(self) -> None:
        with pytest.raises(ValidationError):
            _request().tracked_link_url("ftp://example.com")


class TestCallbacks:
    def test_public_callbacks_accepted(self) -> None:
        body = (
            _request()
            .dlr_callback(PUBLIC_CALLBACK)
            .reply_callback("https://8.8.8.8/reply")
            .link_hits_callback("https://hooks.example.com/link-hits?h=x&s=y")
            .build()
        )
        assert body["dlr_callback"] == PUBLIC_CALLBACK
        assert body["reply_callback"] == "https://8.8.8.8/reply"
        assert body["link_hits_callback"].endswith("link-hits?h=x&s=y")

    @pytest.mark.parametrize(
        "url",
        [
            "http://localhost/dlr",
            "http://127.0.0.1/dlr",
            "http://10.1.2.3/dlr",
            "http://169.254.169.254/latest/meta-data",
            "http://[::1]/dlr",
        ],
    )
    def test_unsafe_callback_rejected(self, url: str) -> None:
        with pytest.raises(ValidationError) as exc_info:
            _request().dlr_callback(url)
        assert exc_info.value.kind == "FIELD_UNSAFE"

    def test_hostname_resolving_to_private_address(self) -> None:
        request = SendSmsRequest(
            "Olá", url_checker=_checker({"internal.example.com": ["10.0.0.5"]})
        )
        with pytest.raises(ValidationError) as exc_info:
            request.reply_callback("https://internal.example.com/reply")
        assert exc_info.value.kind == "FIELD_UNSAFE"

    def test_invalid_callback_url(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            _request().dlr_callback("")
        assert exc_info.value.kind == "FIELD_EMPTY"
