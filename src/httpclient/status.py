# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Named HTTP status codes commonly checked by callers."""

from typing import Final

OK: Final = 200
CREATED: Final = 201
ACCEPTED: Final = 202
BAD_REQUEST: Final = 400
UNAUTHORIZED: Final = 401
FORBIDDEN: Final = 403
NOT_FOUND: Final = 404
SERVER_ERROR: Final = 500

MIN_STATUS: Final = 100
MAX_STATUS: Final = 599


def is_valid_status(code: object) -> bool:
    """Return True for integers inside the HTTP status range."""
    return isinstance(code, int) and not isinstance(code, bool) and MIN_STATUS <= code <= MAX_STATUS


__all__ = [
    "ACCEPTED",
    "BAD_REQUEST",
    "CREATED",
    "FORBIDDEN",
    "MAX_STATUS",
    "MIN_STATUS",
    "NOT_FOUND",
    "OK",
    "SERVER_ERROR",
    "UNAUTHORIZED",
    "is_valid_status",
]
