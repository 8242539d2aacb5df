# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Adapters implementing the Transport protocol without touching the network."""

from __future__ import annotations

from ..errors import HttpClientError, TransportError
from .models import HttpRequest, HttpResponse
from .transport import Transport

StubResult = HttpResponse | HttpClientError


class StubTransport(Transport):
    """Deterministic, programmable Transport for tests."""

    def __init__(self, responses: dict[str, StubResult] | None = None):
        self._responses: dict[str, StubResult] = dict(responses or {})
        self.requests: list[HttpRequest] = []
        self.closed = False

    @staticmethod
    def _key(url: str, method: str | None = None) -> str:
        return f"{method.upper()} {url}" if method else url

    def add(self, url: str, response: StubResult, *, method: str | None = None) -> None:
        """Register a response (or an error to raise) for a URL, optionally scoped to one method."""
        self._responses[self._key(url, method)] = response

    def send(self, request: HttpRequest) -> HttpResponse:
        self.requests.append(request)
        result = self._responses.get(self._key(request.url, request.method))
        if result is None:
            result = self._responses.get(self._key(request.url))
        if result is None:
            raise TransportError(f"No stubbed response configured for {request.method} {request.url}")
        if isinstance(result, HttpClientError):
            raise result
        return result

    def close(self) -> None:
        self.closed = True


__all__ = ["StubTransport"]
