"""Tests for the HTTP transport."""

from unittest import mock

import pytest
import requests

from unifi_client.exceptions import (
    UnifiAPIError,
    UnifiContentTypeError,
    UnifiEnvelopeError,
    UnifiStatusError,
)
from unifi_client.transport import Transport, decode_envelope, media_type


@pytest.fixture
def transport(controller):
    with Transport(controller.url, timeout=5) as t:
        yield t


class TestMediaType:

    @pytest.mark.parametrize("header,expected", [
        ("application/json", "application/json"),
        ("application/json;charset=UTF-8", "application/json"),
        ("Application/JSON; charset=utf-8", "application/json"),
        ("text/html", "text/html"),
        ("", ""),
    ])
    def test_media_type(self, header, expected):
        assert media_type(header) == expected


class TestDecodeEnvelope:

    def test_rows_in_order(self):
        raw = b'{"meta": {"rc": "ok"}, "data": [{"name": "b"}, {"name": "a"}]}'
        assert decode_envelope(raw) == [{"name": "b"}, {"name": "a"}]

    def test_empty_data(self):
        assert decode_envelope(b'{"data": []}') == []

    @pytest.mark.parametrize("raw", [
        b"",
        b"<html></html>",
        b'{"data": [',
        b"[]",
        b'{"meta": {"rc": "ok"}}',
        b'{"data": {}}',
        b'{"data": null}',
    ])
    def test_malformed(self, raw):
        with pytest.raises(UnifiEnvelopeError):
            decode_envelope(raw, "http://unifi/api/self/sites")


class TestTransport:

    def test_get_collection(self, controller, transport):
        controller.respond_data([{"name": "default"}])

        assert transport.get_collection("/api/self/sites") == [{"name": "default"}]
        assert controller.requests[0].method == "GET"
        assert controller.requests[0].path == "/api/self/sites"

    def test_post_sends_json_body(self, controller, transport):
        controller.respond_json({"meta": {"rc": "ok"}, "data": []})

        transport.send_request("POST", "/api/login", {"username": "admin"})

        request = controller.requests[0]
        assert request.method == "POST"
        assert request.json() == {"username": "admin"}

    def test_base_url_trailing_slash(self, controller):
        controller.respond_data([])

        with Transport(controller.url + "/") as t:
            t.get_collection("/api/self/sites")
        assert controller.requests[0].path == "/api/self/sites"

    def test_wrong_content_type(self, controller, transport):
        controller.respond(200, "<html></html>", content_type="text/html")

        with pytest.raises(UnifiContentTypeError) as exc_info:
            transport.get_collection("/api/self/sites")
        assert exc_info.value.content_type == "text/html"
        assert str(exc_info.value) == (
            'expected content type "application/json", received "text/html"'
        )

    def test_missing_content_type(self, controller, transport):
        controller.respond(200, '{"data": []}', content_type=None)

        with pytest.raises(UnifiContentTypeError):
            transport.get_collection("/api/self/sites")

    def test_error_status(self, controller, transport):
        controller.respond_json({"meta": {"rc": "error", "msg": "api.err.NoSiteContext"}}, status=500)

        with pytest.raises(UnifiStatusError) as exc_info:
            transport.get_collection("/api/s/nope/stat/sta")
        assert exc_info.value.status_code == 500
        assert "unexpected HTTP status code: 500" in str(exc_info.value)

    def test_content_type_checked_before_status(self, controller, transport):
        controller.respond(502, "<html>Bad Gateway</html>", content_type="text/html")

        with pytest.raises(UnifiContentTypeError):
            transport.get_collection("/api/self/sites")

    def test_unauthorized(self, controller, transport):
        controller.respond_json({"meta": {"rc": "error", "msg": "api.err.LoginRequired"}}, status=401)

        with pytest.raises(UnifiStatusError) as exc_info:
            transport.get_collection("/api/self/sites")
        assert exc_info.value.status_code == 401

    def test_malformed_envelope(self, controller, transport):
        controller.respond(200, '{"data": [')

        with pytest.raises(UnifiEnvelopeError):
            transport.get_collection("/api/self/sites")

    def test_envelope_errors_are_api_errors(self, controller, transport):
        controller.respond_json({"meta": {"rc": "ok"}})

        with pytest.raises(UnifiAPIError):
            transport.get_collection("/api/self/sites")

    def test_cookies_are_kept(self, controller, transport):
        controller.respond_json(
            {"meta": {"rc": "ok"}, "data": []},
            headers=[("Set-Cookie", "unifises=abc123; Path=/")],
        )
        controller.respond_data([])

        transport.send_request("POST", "/api/login", {"username": "admin"})
        transport.get_collection("/api/self/sites")

        assert "unifises=abc123" in controller.requests[1].headers.get("Cookie", "")

    def test_unsupported_method(self, transport):
        with pytest.raises(ValueError):
            transport.send_request("TRACE", "/api/self/sites")


class TestTransportRequestErrors:

    def test_timeout_passed_to_every_request(self):
        response = mock.Mock(
            status_code=200,
            headers={"Content-Type": "application/json"},
            content=b'{"data": []}',
        )
        with mock.patch.object(requests.Session, "request", return_value=response) as mock_request:
            t = Transport("https://unifi:8443", verify_ssl=False, timeout=2.5)
            t.get_collection("/api/self/sites")
            t.send_request("POST", "/api/login", {"username": "admin"})

        for call in mock_request.call_args_list:
            assert call.kwargs["timeout"] == 2.5
            assert call.kwargs["verify"] is False
        assert mock_request.call_args_list[0].args == ("GET", "https://unifi:8443/api/self/sites")

    def test_connection_error(self):
        with mock.patch.object(
            requests.Session, "request",
            side_effect=requests.exceptions.ConnectionError("connection refused"),
        ):
            t = Transport("https://unifi:8443")
            with pytest.raises(UnifiAPIError) as exc_info:
                t.get_collection("/api/self/sites")

        assert isinstance(exc_info.value.__cause__, requests.exceptions.ConnectionError)

    def test_timeout_error(self):
        with mock.patch.object(
            requests.Session, "request",
            side_effect=requests.exceptions.ReadTimeout("read timed out"),
        ):
            t = Transport("https://unifi:8443", timeout=0.1)
            with pytest.raises(UnifiAPIError) as exc_info:
                t.get_collection("/api/self/sites")

        assert "read timed out" in str(exc_info.value)

    def test_shared_session(self):
        session = requests.Session()
        assert Transport("https://unifi:8443", session=session).session is session
