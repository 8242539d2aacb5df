# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""URL helpers for joining a client base URL with per-call paths."""

from __future__ import annotations

from urllib.parse import urlparse

from ..errors import InvalidURL

SUPPORTED_SCHEMES = frozenset({"http", "https"})


def is_absolute_url(value: str) -> bool:
    """Return True when ``value`` carries its own scheme (``http://...``)."""
    return "://" in str(value or "") and bool(urlparse(str(value)).scheme)


def ensure_valid_url(url: str) -> str:
    """Raise InvalidURL unless ``url`` is an http(s) URL with a host."""
    try:
        parsed = urlparse(str(url or ""))
        parsed.port  # noqa: B018 - raises ValueError on a malformed port
    except ValueError as exc:
        raise InvalidURL(f"Malformed URL {url!r}: {exc}") from exc
    if parsed.scheme.lower() not in SUPPORTED_SCHEMES:
        raise InvalidURL(f"Unsupported or missing URL scheme in {url!r}")
    if not parsed.hostname:
        raise InvalidURL(f"URL {url!r} has no host")
    return url


def join_url(base_url: str, path: str) -> str:
    """
    Join a base URL and a path with exactly one separating slash.

    Example:
      join_url("http://h/", "/p") -> http://h/p
    """
    if not path:
        return base_url
    return f"{base_url.rstrip('/')}/{path.lstrip('/')}"


def resolve_url(base_url: str | None, path: str) -> str:
    """
    Resolve the URL a request should go to.

    Absolute paths are used unchanged; otherwise the path is appended to the
    configured base URL. Without a base URL a relative path is an error.
    """
    raw_path = str(path or "")
    if is_absolute_url(raw_path):
        return ensure_valid_url(raw_path)
    if not base_url:
        raise InvalidURL(f"Relative path {raw_path!r} requires a base URL")
    return ensure_valid_url(join_url(base_url, raw_path))


__all__ = ["SUPPORTED_SCHEMES", "ensure_valid_url", "is_absolute_url", "join_url", "resolve_url"]
