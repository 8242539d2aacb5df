# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpx-backed Transport implementation."""

from __future__ import annotations

import logging
import time

import httpx

from ..config import HttpSettings, load_http_settings
from ..errors import ProtocolError, translate_exception
from ..status import is_valid_status
from .models import HttpRequest, HttpResponse
from .transport import Transport

logger = logging.getLogger(__name__)


def build_timeout(settings: HttpSettings, timeout: float | None = None) -> httpx.Timeout:
    """Per-request httpx timeout; the connect phase never waits longer than the overall timeout."""
    total = timeout if timeout is not None and timeout > 0 else settings.timeout
    return httpx.Timeout(total, connect=min(settings.connect_timeout, total))


class HttpxTransport(Transport):
    """Synchronous httpx transport; redirects are never followed."""

    def __init__(self, settings: HttpSettings | None = None, client: httpx.Client | None = None):
        self.settings = settings or load_http_settings()
        self._client = client or httpx.Client(
            follow_redirects=False,
            timeout=build_timeout(self.settings),
            verify=self.settings.verify_ssl,
        )

    def send(self, request: HttpRequest) -> HttpResponse:
        max_body_bytes = self.settings.max_body_bytes
        started = time.monotonic()
        logger.debug("%s %s", request.method, request.url)
        try:
            with self._client.stream(
                request.method,
                request.url,
                headers=request.headers,
                content=request.body,
                timeout=build_timeout(self.settings, request.timeout),
                follow_redirects=False,
            ) as resp:
                content = bytearray()
                for chunk in resp.iter_bytes():
                    if not chunk:
                        continue
                    content.extend(chunk)
                    if max_body_bytes is not None and len(content) > max_body_bytes:
                        raise ProtocolError(f"Response body exceeds {max_body_bytes} bytes")
        except ProtocolError:
            raise
        except (httpx.HTTPError, httpx.InvalidURL, OSError) as exc:
            logger.debug("%s %s failed: %s", request.method, request.url, exc)
            raise translate_exception(exc) from exc

        if not is_valid_status(resp.status_code):
            raise ProtocolError(f"Status code {resp.status_code} outside the HTTP range")

        elapsed = time.monotonic() - started
        logger.debug("%s %s -> %s (%d bytes, %.3fs)", request.method, request.url, resp.status_code, len(content), elapsed)
        return HttpResponse(
            status_code=resp.status_code,
            headers=dict(resp.headers),
            content=bytes(content),
            url=str(resp.url),
            elapsed=elapsed,
        )

    def close(self) -> None:
        self._client.close()
