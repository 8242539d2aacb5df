# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Header storage and normalization utilities.

HTTP header field names are case-insensitive (RFC 9110). The client keeps its
default headers in insertion order and remembers the casing used the first time
a name was set, so debugging output looks like what the caller wrote.
"""

from __future__ import annotations

import re
from collections.abc import Iterator, Mapping, MutableMapping
from typing import Any

_TOKEN_RE = re.compile(r"^[!#$%&'*+\-.^_`|~0-9A-Za-z]+$")


def validate_header(name: object, value: object) -> tuple[str, str]:
    """Return ``(name, value)`` as strings, rejecting names/values that would break framing."""
    name_str = str(name).strip() if name is not None else ""
    if not name_str or not _TOKEN_RE.match(name_str):
        raise ValueError(f"Invalid header name: {name!r}")
    value_str = "" if value is None else str(value)
    if "\r" in value_str or "\n" in value_str:
        raise ValueError(f"Header {name_str!r} value contains a line break")
    if not value_str.isascii():
        raise ValueError(f"Header {name_str!r} value must be ASCII")
    return name_str, value_str.strip()


class HeaderMap(MutableMapping[str, str]):
    """Ordered, case-insensitive header mapping that preserves first-insertion casing."""

    def __init__(self, headers: Mapping[str, Any] | None = None):
        self._store: dict[str, tuple[str, str]] = {}
        if headers:
            self.update(headers)

    def __setitem__(self, name: str, value: str) -> None:
        name_str, value_str = validate_header(name, value)
        key = name_str.lower()
        existing = self._store.get(key)
        original = existing[0] if existing is not None else name_str
        self._store[key] = (original, value_str)

    def __getitem__(self, name: str) -> str:
        return self._store[str(name).lower()][1]

    def __delitem__(self, name: str) -> None:
        del self._store[str(name).lower()]

    def __iter__(self) -> Iterator[str]:
        return (original for original, _ in self._store.values())

    def __len__(self) -> int:
        return len(self._store)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._store

    def __repr__(self) -> str:
        return f"HeaderMap({self.to_dict()!r})"

    def to_dict(self) -> dict[str, str]:
        """Ordered plain-dict snapshot using the preserved casing."""
        return {original: value for original, value in self._store.values()}

    def lines(self) -> list[str]:
        """Display form: one ``Name: value`` string per header."""
        return [f"{original}: {value}" for original, value in self._store.values()]

    def copy(self) -> HeaderMap:
        clone = HeaderMap()
        clone._store = dict(self._store)
        return clone

    def merged(self, overrides: Mapping[str, Any] | None) -> HeaderMap:
        """Return a copy with ``overrides`` applied on top (override values win)."""
        clone = self.copy()
        if overrides:
            clone.update(overrides)
        return clone


def header_value(headers: Mapping[object, object] | None, name: str, default: str = "") -> str:
    """Return a header value using case-insensitive key matching."""
    if not headers or not name:
        return default
    lower = str(name).lower()
    for key, value in headers.items():
        if key is None:
            continue
        if str(key).lower() == lower:
            return default if value is None else str(value).strip()
    return default


__all__ = ["HeaderMap", "header_value", "validate_header"]
