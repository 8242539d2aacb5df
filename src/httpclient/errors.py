# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers."""

from __future__ import annotations

import socket
import ssl as ssl_module
from collections.abc import Iterator
from enum import Enum

import httpx


class ErrorCategory(str, Enum):
    TIMEOUT = "TIMEOUT"
    SSL_ERROR = "SSL_ERROR"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    DNS_ERROR = "DNS_ERROR"
    PROTOCOL_ERROR = "PROTOCOL_ERROR"
    INVALID_URL = "INVALID_URL"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


class HttpClientError(Exception):
    """Base class for every error raised by httpclient."""


class InvalidURL(HttpClientError, ValueError):
    """The base URL and path do not combine into a usable http(s) URL."""


class TransportError(HttpClientError):
    """The request never produced a response (DNS, connect, timeout, reset)."""

    def __init__(self, message: str, category: ErrorCategory = ErrorCategory.UNKNOWN_ERROR):
        super().__init__(message)
        self.category = category

    @property
    def reason(self) -> str:
        return error_category_to_reason(self.category)


class WaitTimeout(TransportError):
    """wait() gave up before the pending request finished; the request is still pending."""

    def __init__(self, message: str):
        super().__init__(message, ErrorCategory.TIMEOUT)


class ProtocolError(HttpClientError):
    """The peer answered with something that is not a well-formed HTTP response."""


class NoResponseYet(HttpClientError):
    """An accessor was called before any request completed on the client."""


class NoPendingRequest(HttpClientError):
    """wait() was called while no asynchronous request was in flight."""


class ConcurrentRequestConflict(HttpClientError):
    """A request was issued while the client's single request slot was busy."""


class Cancelled(HttpClientError):
    """The pending request was cancelled before its result was collected."""


def _exception_chain(exc: BaseException) -> Iterator[BaseException]:
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        current = current.__cause__ or current.__context__


def categorize_exception(exc: BaseException) -> ErrorCategory:
    """
    Map Python/httpx exceptions to ErrorCategory.

    httpx wraps socket and ssl failures, so the cause chain is inspected for
    the more specific DNS and TLS categories.
    """
    if isinstance(exc, (httpx.TimeoutException, socket.timeout, TimeoutError)):
        return ErrorCategory.TIMEOUT

    if isinstance(exc, (httpx.InvalidURL, httpx.UnsupportedProtocol)):
        return ErrorCategory.INVALID_URL

    if isinstance(exc, (httpx.RemoteProtocolError, httpx.LocalProtocolError, httpx.DecodingError)):
        return ErrorCategory.PROTOCOL_ERROR

    for link in _exception_chain(exc):
        if isinstance(link, (ssl_module.SSLError, ssl_module.CertificateError)):
            return ErrorCategory.SSL_ERROR
        if isinstance(link, (socket.gaierror, socket.herror)):
            return ErrorCategory.DNS_ERROR

    if isinstance(exc, (httpx.ConnectError, httpx.NetworkError, httpx.ProxyError)):
        return ErrorCategory.CONNECTION_ERROR

    if isinstance(exc, (ConnectionError, ConnectionRefusedError, ConnectionResetError)):
        return ErrorCategory.CONNECTION_ERROR

    if isinstance(exc, httpx.TransportError):
        return ErrorCategory.CONNECTION_ERROR

    return ErrorCategory.UNKNOWN_ERROR


def error_category_to_reason(category: ErrorCategory) -> str:
    """User-facing reason string."""
    mapping = {
        ErrorCategory.TIMEOUT: "Network timeout while waiting for the server",
        ErrorCategory.SSL_ERROR: "TLS/certificate issue",
        ErrorCategory.CONNECTION_ERROR: "Network connectivity issue",
        ErrorCategory.DNS_ERROR: "DNS resolution failure",
        ErrorCategory.PROTOCOL_ERROR: "Malformed HTTP response",
        ErrorCategory.INVALID_URL: "Invalid request URL",
        ErrorCategory.UNKNOWN_ERROR: "Network error during request",
    }
    return mapping.get(category, "Request failed due to network error")


def translate_exception(exc: BaseException) -> HttpClientError:
    """Convert a transport-library exception into the httpclient error it represents."""
    if isinstance(exc, HttpClientError):
        return exc
    category = categorize_exception(exc)
    message = str(exc) or error_category_to_reason(category)
    if category is ErrorCategory.INVALID_URL:
        return InvalidURL(message)
    if category is ErrorCategory.PROTOCOL_ERROR:
        return ProtocolError(message)
    return TransportError(message, category)


__all__ = [
    "Cancelled",
    "ConcurrentRequestConflict",
    "ErrorCategory",
    "HttpClientError",
    "InvalidURL",
    "NoPendingRequest",
    "NoResponseYet",
    "ProtocolError",
    "TransportError",
    "WaitTimeout",
    "categorize_exception",
    "error_category_to_reason",
    "translate_exception",
]
