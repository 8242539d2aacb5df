# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Transport layer exports."""

from .adapters import StubTransport
from .headers import HeaderMap, header_value
from .httpx_transport import HttpxTransport
from .models import Headers, HttpRequest, HttpResponse
from .pending import PendingRequest
from .transport import Transport, create_default_transport
from .url import ensure_valid_url, is_absolute_url, join_url, resolve_url

__all__ = [
    "HeaderMap",
    "Headers",
    "HttpRequest",
    "HttpResponse",
    "HttpxTransport",
    "PendingRequest",
    "StubTransport",
    "Transport",
    "create_default_transport",
    "ensure_valid_url",
    "header_value",
    "is_absolute_url",
    "join_url",
    "resolve_url",
]
