# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
httpclient package entrypoint.

A small HTTP/1.1 client that keeps per-instance default headers and the last
response, and supports one non-blocking request per instance joined with
``wait()``. Sending is abstracted behind an injectable Transport, with an
httpx-backed default.
"""

from .client import HttpClient
from .config import HttpSettings, load_http_settings
from .errors import (
    Cancelled,
    ConcurrentRequestConflict,
    ErrorCategory,
    HttpClientError,
    InvalidURL,
    NoPendingRequest,
    NoResponseYet,
    ProtocolError,
    TransportError,
    WaitTimeout,
)
from .http import (
    HttpRequest,
    HttpResponse,
    HttpxTransport,
    PendingRequest,
    StubTransport,
    Transport,
    create_default_transport,
)
from .log import setup_logging
from .version import __version__

__all__ = [
    "Cancelled",
    "ConcurrentRequestConflict",
    "ErrorCategory",
    "HttpClient",
    "HttpClientError",
    "HttpRequest",
    "HttpResponse",
    "HttpSettings",
    "HttpxTransport",
    "InvalidURL",
    "NoPendingRequest",
    "NoResponseYet",
    "PendingRequest",
    "ProtocolError",
    "StubTransport",
    "Transport",
    "TransportError",
    "WaitTimeout",
    "create_default_transport",
    "load_http_settings",
    "setup_logging",
    "__version__",
]
