# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import gzip

import httpx
import pytest

from httpclient.config import HttpSettings
from httpclient.errors import ErrorCategory, InvalidURL, ProtocolError, TransportError
from httpclient.http.httpx_transport import HttpxTransport, build_timeout
from httpclient.http.models import HttpRequest
from httpclient.http.transport import create_default_transport


def _transport(handler, **settings_kwargs) -> HttpxTransport:
    settings = HttpSettings(**settings_kwargs)
    client = httpx.Client(transport=httpx.MockTransport(handler), follow_redirects=False)
    return HttpxTransport(settings, client=client)


def test_send_passes_method_headers_and_body():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["url"] = str(request.url)
        seen["headers"] = request.headers
        seen["body"] = request.read()
        return httpx.Response(201, headers={"X-Reply": "yes"}, content=b'{"id": 7}')

    transport = _transport(handler)
    response = transport.send(
        HttpRequest(url="http://api.test/items", method="POST", headers={"X-Custom": "1"}, body=b'{"a": 1}')
    )

    assert seen["method"] == "POST"
    assert seen["url"] == "http://api.test/items"
    assert seen["headers"]["X-Custom"] == "1"
    assert seen["headers"]["Content-Length"] == "8"
    assert seen["headers"]["Host"] == "api.test"
    assert seen["body"] == b'{"a": 1}'
    assert response.status_code == 201
    assert response.content == b'{"id": 7}'
    assert response.header("x-reply") == "yes"
    assert response.url == "http://api.test/items"
    assert response.elapsed is not None and response.elapsed >= 0


def test_send_decodes_gzip_content_encoding():
    body = b'{"status":"success"}'

    def handler(request: httpx.Request) -> httpx.Response:  # noqa: ARG001
        return httpx.Response(200, headers={"Content-Encoding": "gzip"}, content=gzip.compress(body))

    response = _transport(handler).send(HttpRequest(url="http://api.test/"))
    assert response.content == body


def test_send_does_not_follow_redirects():
    def handler(request: httpx.Request) -> httpx.Response:  # noqa: ARG001
        return httpx.Response(302, headers={"Location": "http://api.test/elsewhere"})

    response = _transport(handler).send(HttpRequest(url="http://api.test/"))
    assert response.status_code == 302
    assert response.header("location") == "http://api.test/elsewhere"


def test_error_status_is_a_normal_response():
    def handler(request: httpx.Request) -> httpx.Response:  # noqa: ARG001
        return httpx.Response(503, content=b"down")

    response = _transport(handler).send(HttpRequest(url="http://api.test/"))
    assert response.status_code == 503
    assert response.is_error
    assert response.text == "down"


@pytest.mark.parametrize(
    ("exc", "error_type", "category"),
    [
        (httpx.ConnectError("refused"), TransportError, ErrorCategory.CONNECTION_ERROR),
        (httpx.ReadTimeout("slow"), TransportError, ErrorCategory.TIMEOUT),
        (httpx.RemoteProtocolError("illegal status line"), ProtocolError, None),
        (httpx.UnsupportedProtocol("no scheme"), InvalidURL, None),
    ],
)
def test_send_translates_library_errors(exc, error_type, category):
    def handler(request: httpx.Request) -> httpx.Response:  # noqa: ARG001
        raise exc

    with pytest.raises(error_type) as info:
        _transport(handler).send(HttpRequest(url="http://api.test/"))
    assert info.value.__cause__ is exc
    if category is not None:
        assert info.value.category is category


def test_send_enforces_body_limit():
    def handler(request: httpx.Request) -> httpx.Response:  # noqa: ARG001
        return httpx.Response(200, content=b"x" * 64)

    with pytest.raises(ProtocolError):
        _transport(handler, max_body_bytes=16).send(HttpRequest(url="http://api.test/"))

    response = _transport(handler, max_body_bytes=64).send(HttpRequest(url="http://api.test/"))
    assert len(response.content) == 64


def test_send_uses_request_timeout(monkeypatch):
    captured = {}

    class RecordingClient:
        def stream(self, method, url, headers=None, content=None, timeout=None, follow_redirects=None):  # noqa: ARG002
            captured["timeout"] = timeout
            captured["follow_redirects"] = follow_redirects
            raise httpx.ConnectTimeout("slow")

        def close(self):
            captured["closed"] = True

    transport = HttpxTransport(HttpSettings(timeout=10.0, connect_timeout=5.0), client=RecordingClient())
    with pytest.raises(TransportError):
        transport.send(HttpRequest(url="http://api.test/", timeout=1.5))
    transport.close()

    assert captured["timeout"].read == 1.5
    assert captured["timeout"].connect == 1.5
    assert captured["follow_redirects"] is False
    assert captured["closed"] is True


def test_build_timeout_defaults_to_settings():
    timeout = build_timeout(HttpSettings(timeout=8.0, connect_timeout=2.0))
    assert timeout.read == 8.0
    assert timeout.connect == 2.0
    assert build_timeout(HttpSettings(timeout=8.0), 0).read == 8.0


def test_create_default_transport_builds_httpx_client(monkeypatch):
    created = {}

    class FakeHttpxClient:
        def __init__(self, follow_redirects, timeout, verify):
            created.update(follow_redirects=follow_redirects, timeout=timeout, verify=verify)

    monkeypatch.setattr(httpx, "Client", FakeHttpxClient)
    transport = create_default_transport(HttpSettings(verify_ssl=False, timeout=3.0, connect_timeout=1.0))

    assert isinstance(transport, HttpxTransport)
    assert created["follow_redirects"] is False
    assert created["verify"] is False
    assert created["timeout"].read == 3.0
    assert created["timeout"].connect == 1.0
