# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Handle for a request dispatched without blocking the caller.

The request runs on its own daemon thread; the caller joins it later through
``result()``. Cancellation detaches the handle: the transport call is allowed to
finish in the background, but its outcome is discarded.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future
from concurrent.futures import TimeoutError as FutureTimeoutError

from ..errors import Cancelled, WaitTimeout
from .models import HttpRequest, HttpResponse
from .transport import Transport

logger = logging.getLogger(__name__)


class PendingRequest:
    """Opaque in-flight request handle owned by a single HttpClient."""

    def __init__(self, request: HttpRequest, transport: Transport):
        self.request = request
        self._transport = transport
        self._future: Future[HttpResponse] = Future()
        self._cancelled = threading.Event()
        self._thread = threading.Thread(
            target=self._run,
            name=f"httpclient-{request.method.lower()}",
            daemon=True,
        )

    def __repr__(self) -> str:
        state = "cancelled" if self.cancelled else ("done" if self.done() else "pending")
        return f"<PendingRequest {self.request.method} {self.request.url} {state}>"

    def start(self) -> PendingRequest:
        self._future.set_running_or_notify_cancel()
        self._thread.start()
        return self

    def _run(self) -> None:
        try:
            response = self._transport.send(self.request)
        except Exception as exc:  # noqa: BLE001 - handed to the waiting caller
            self._future.set_exception(exc)
            if self.cancelled:
                logger.debug("Discarded failure of cancelled %s %s: %s", self.request.method, self.request.url, exc)
        else:
            self._future.set_result(response)
            if self.cancelled:
                logger.debug("Discarded response of cancelled %s %s", self.request.method, self.request.url)

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def done(self) -> bool:
        return self._future.done()

    def cancel(self) -> bool:
        """Detach from the in-flight request. Returns False if it was already cancelled."""
        if self.cancelled:
            return False
        self._cancelled.set()
        return True

    def result(self, timeout: float | None = None) -> HttpResponse:
        """Block until the request finishes; re-raises the transport error on failure."""
        if self.cancelled:
            raise Cancelled(f"{self.request.method} {self.request.url} was cancelled")
        try:
            response = self._future.result(timeout=timeout)
        except FutureTimeoutError as exc:
            raise WaitTimeout(
                f"Timed out after {timeout}s waiting for {self.request.method} {self.request.url}"
            ) from exc
        if self.cancelled:
            raise Cancelled(f"{self.request.method} {self.request.url} was cancelled")
        return response


__all__ = ["PendingRequest"]
