# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Stateful HTTP client facade: default headers, last response, one pending request."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from .config import HttpSettings, load_http_settings
from .errors import ConcurrentRequestConflict, HttpClientError, NoPendingRequest, NoResponseYet, WaitTimeout
from .http.headers import HeaderMap
from .http.models import BODY_METHODS, SUPPORTED_METHODS, HttpRequest, HttpResponse
from .http.pending import PendingRequest
from .http.transport import Transport, create_default_transport
from .http.url import ensure_valid_url, resolve_url

logger = logging.getLogger(__name__)

Body = bytes | bytearray | memoryview | str | None


def _encode_body(body: Body) -> bytes | None:
    if body is None:
        return None
    if isinstance(body, str):
        return body.encode("utf-8")
    if isinstance(body, (bytes, bytearray, memoryview)):
        return bytes(body)
    raise TypeError(f"Request body must be str or bytes, not {type(body).__name__}")


class HttpClient:
    """
    HTTP client bound to an optional base URL and a set of default headers.

    Every completed request replaces the stored last response, which the
    accessors expose. Requests either block (``get``/``post``/``put``/``delete``)
    or are dispatched in the background (``*_async``) and joined with ``wait()``.
    A client has a single request slot: issuing anything while an async request
    is pending raises ConcurrentRequestConflict. Use one client per concurrent
    request.
    """

    def __init__(
        self,
        base_url: str | None = None,
        headers: Mapping[str, Any] | None = None,
        *,
        settings: HttpSettings | None = None,
        transport: Transport | None = None,
    ):
        if base_url:
            ensure_valid_url(base_url)
        self.base_url = base_url or None
        self.settings = settings or load_http_settings()
        self.transport = transport or create_default_transport(self.settings)
        self._headers = HeaderMap(headers)
        self._last_response: HttpResponse | None = None
        self._last_error: str | None = None
        self._pending: PendingRequest | None = None

    def __repr__(self) -> str:
        state = "pending" if self._pending is not None else "idle"
        return f"<HttpClient base_url={self.base_url!r} {state}>"

    def __enter__(self) -> HttpClient:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:  # noqa: ANN001
        self.close()

    def close(self) -> None:
        """Cancel any pending request and release the transport."""
        self.cancel()
        self.transport.close()

    # Headers

    def set_header(self, name: str, value: str) -> None:
        self._headers[name] = value

    def remove_header(self, name: str) -> bool:
        if name in self._headers:
            del self._headers[name]
            return True
        return False

    def get_headers(self) -> dict[str, str]:
        return self._headers.to_dict()

    def get_header_lines(self) -> list[str]:
        return self._headers.lines()

    # Request building

    def resolve(self, path: str) -> str:
        return resolve_url(self.base_url, path)

    def build_request(
        self,
        method: str,
        path: str,
        body: Body = None,
        *,
        headers: Mapping[str, Any] | None = None,
        timeout: float | None = None,
    ) -> HttpRequest:
        """Resolve the URL and merge default, per-call and automatic headers into a request."""
        verb = str(method or "").upper()
        if verb not in SUPPORTED_METHODS:
            raise ValueError(f"Unsupported HTTP method: {method!r}")
        url = self.resolve(path)
        payload = _encode_body(body)

        merged = self._headers.merged(headers)
        if verb in BODY_METHODS and payload is not None and self.settings.default_content_type:
            merged.setdefault("Content-Type", self.settings.default_content_type)
        if self.settings.user_agent:
            merged.setdefault("User-Agent", self.settings.user_agent)

        return HttpRequest(url=url, method=verb, headers=merged.to_dict(), body=payload, timeout=timeout)

    # Blocking requests

    def request(
        self,
        method: str,
        path: str,
        body: Body = None,
        *,
        headers: Mapping[str, Any] | None = None,
        timeout: float | None = None,
    ) -> HttpResponse:
        self._ensure_idle()
        request = self.build_request(method, path, body, headers=headers, timeout=timeout)
        try:
            response = self.transport.send(request)
        except HttpClientError as exc:
            self._last_error = str(exc)
            raise
        return self._store(response)

    def get(self, path: str, **kwargs: Any) -> HttpResponse:
        return self.request("GET", path, **kwargs)

    def post(self, path: str, body: Body = None, **kwargs: Any) -> HttpResponse:
        return self.request("POST", path, body, **kwargs)

    def put(self, path: str, body: Body = None, **kwargs: Any) -> HttpResponse:
        return self.request("PUT", path, body, **kwargs)

    def delete(self, path: str, **kwargs: Any) -> HttpResponse:
        return self.request("DELETE", path, **kwargs)

    # Non-blocking requests

    def request_async(
        self,
        method: str,
        path: str,
        body: Body = None,
        *,
        headers: Mapping[str, Any] | None = None,
        timeout: float | None = None,
    ) -> PendingRequest:
        """Dispatch a request in the background and return its handle without waiting."""
        self._ensure_idle()
        request = self.build_request(method, path, body, headers=headers, timeout=timeout)
        self._pending = PendingRequest(request, self.transport).start()
        logger.debug("Dispatched %s %s", request.method, request.url)
        return self._pending

    def get_async(self, path: str, **kwargs: Any) -> PendingRequest:
        return self.request_async("GET", path, **kwargs)

    def post_async(self, path: str, body: Body = None, **kwargs: Any) -> PendingRequest:
        return self.request_async("POST", path, body, **kwargs)

    def put_async(self, path: str, body: Body = None, **kwargs: Any) -> PendingRequest:
        return self.request_async("PUT", path, body, **kwargs)

    def delete_async(self, path: str, **kwargs: Any) -> PendingRequest:
        return self.request_async("DELETE", path, **kwargs)

    def has_pending(self) -> bool:
        return self._pending is not None

    def wait(self, timeout: float | None = None) -> HttpResponse:
        """
        Block until the pending request completes and store its response.

        If ``timeout`` elapses first WaitTimeout (a TIMEOUT TransportError) is raised and the
        request stays pending; a failed request clears the slot and re-raises.
        """
        pending = self._pending
        if pending is None:
            raise NoPendingRequest("No asynchronous request is pending")
        try:
            response = pending.result(timeout)
        except WaitTimeout:
            raise
        except Exception as exc:
            self._pending = None
            self._last_error = str(exc)
            logger.warning("%s %s failed: %s", pending.request.method, pending.request.url, exc)
            raise
        self._pending = None
        return self._store(response)

    def cancel(self) -> bool:
        """Abandon the pending request, leaving the last response untouched."""
        pending, self._pending = self._pending, None
        if pending is None:
            return False
        pending.cancel()
        logger.warning("Cancelled pending %s %s", pending.request.method, pending.request.url)
        return True

    # Last response

    @property
    def last_response(self) -> HttpResponse | None:
        return self._last_response

    @property
    def last_status(self) -> int | None:
        return self._last_response.status_code if self._last_response is not None else None

    @property
    def last_body(self) -> bytes | None:
        return self._last_response.content if self._last_response is not None else None

    def get_status_code(self) -> int:
        return self._require_response().status_code

    def get_response_body(self) -> bytes:
        return self._require_response().content

    def get_last_error(self) -> str | None:
        """Message of the most recent failed request, cleared by the next success."""
        return self._last_error

    def _require_response(self) -> HttpResponse:
        if self._last_response is None:
            raise NoResponseYet("No request has completed on this client yet")
        return self._last_response

    def _ensure_idle(self) -> None:
        if self._pending is not None:
            raise ConcurrentRequestConflict(
                f"{self._pending.request.method} {self._pending.request.url} is still pending; "
                "call wait() or cancel() first"
            )

    def _store(self, response: HttpResponse) -> HttpResponse:
        self._last_response = response
        self._last_error = None
        return response


__all__ = ["HttpClient"]
