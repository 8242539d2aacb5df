# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP request/response data models used across httpclient."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

from .headers import header_value

Headers = dict[str, str]

SUPPORTED_METHODS = ("GET", "POST", "PUT", "DELETE")
BODY_METHODS = frozenset({"POST", "PUT"})


@dataclass
class HttpRequest:
    """Normalized request representation consumed by Transport implementations."""

    url: str
    method: str = "GET"
    headers: Headers = field(default_factory=dict)
    body: bytes | None = None
    timeout: float | None = None


@dataclass
class HttpResponse:
    """A fully read HTTP response."""

    status_code: int
    headers: Headers = field(default_factory=dict)
    content: bytes = b""
    url: str | None = None
    elapsed: float | None = None

    @property
    def text(self) -> str:
        """Body decoded with the charset from Content-Type (UTF-8 fallback)."""
        charset = "utf-8"
        content_type = header_value(self.headers, "content-type")
        for part in content_type.split(";")[1:]:
            key, _, value = part.strip().partition("=")
            if key.lower() == "charset" and value:
                charset = value.strip("\"'")
        try:
            return self.content.decode(charset, errors="replace")
        except LookupError:
            return self.content.decode("utf-8", errors="replace")

    @property
    def is_error(self) -> bool:
        return self.status_code >= 400

    def header(self, name: str, default: str = "") -> str:
        return header_value(self.headers, name, default)

    def json(self) -> Any:
        return json.loads(self.text)
