# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""In-process fixture server: a bare TCP listener replaying canned HTTP responses."""

from __future__ import annotations

import socket
import threading
import time

import pytest


def http_response(
    body: bytes = b"",
    *,
    status: str = "200 OK",
    headers: dict[str, str] | None = None,
    content_length: bool = True,
) -> bytes:
    """Render a raw HTTP/1.1 response; connections are always closed after one exchange."""
    lines = [f"HTTP/1.1 {status}"]
    for name, value in (headers or {}).items():
        lines.append(f"{name}: {value}")
    if content_length:
        lines.append(f"Content-Length: {len(body)}")
    lines.append("Connection: close")
    return ("\r\n".join(lines) + "\r\n\r\n").encode("latin-1") + body


def _read_request(conn: socket.socket) -> bytes:
    data = b""
    while b"\r\n\r\n" not in data:
        chunk = conn.recv(65536)
        if not chunk:
            return data
        data += chunk
    head, _, body = data.partition(b"\r\n\r\n")
    length = 0
    for line in head.split(b"\r\n")[1:]:
        name, _, value = line.partition(b":")
        if name.strip().lower() == b"content-length":
            length = int(value.strip())
    while len(body) < length:
        chunk = conn.recv(65536)
        if not chunk:
            break
        body += chunk
    return head + b"\r\n\r\n" + body


class FixtureServer:
    """Accepts one connection per canned response, optionally sleeping before replying."""

    def __init__(self, responses: list[bytes], delay: float = 0.0):
        self._responses = list(responses)
        self.delay = delay
        self.requests: list[bytes] = []
        self._stopped = threading.Event()
        self._sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        self._sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        self._sock.bind(("127.0.0.1", 0))
        self._sock.listen(8)
        self._sock.settimeout(0.1)
        self.port = self._sock.getsockname()[1]
        self._thread = threading.Thread(target=self._serve, name="fixture-server", daemon=True)

    @property
    def base_url(self) -> str:
        return f"http://127.0.0.1:{self.port}"

    def url(self, path: str = "/") -> str:
        return self.base_url + path

    def start(self) -> FixtureServer:
        self._thread.start()
        return self

    def _serve(self) -> None:
        while self._responses and not self._stopped.is_set():
            try:
                conn, _ = self._sock.accept()
            except socket.timeout:
                continue
            except OSError:
                return
            response = self._responses.pop(0)
            with conn:
                conn.settimeout(5.0)
                try:
                    self.requests.append(_read_request(conn))
                    if self.delay:
                        time.sleep(self.delay)
                    conn.sendall(response)
                except OSError:
                    continue

    def close(self) -> None:
        self._stopped.set()
        self._thread.join(timeout=5.0)
        self._sock.close()


@pytest.fixture
def fixture_server():
    servers: list[FixtureServer] = []

    def _start(*responses: bytes, delay: float = 0.0) -> FixtureServer:
        server = FixtureServer(list(responses), delay=delay).start()
        servers.append(server)
        return server

    yield _start
    for server in servers:
        server.close()


@pytest.fixture
def closed_port() -> int:
    """A localhost port with nothing listening on it."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    port = sock.getsockname()[1]
    sock.close()
    return port
