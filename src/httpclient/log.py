# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Logging helpers for httpclient.

Request dispatch and completion are logged under the ``httpclient`` logger.
httpx and httpcore log every request and connection event on their own loggers;
those stay at WARNING unless wire logging is asked for.
"""

from __future__ import annotations

import logging
import os

PACKAGE_LOGGER = "httpclient"
WIRE_LOGGERS = ("httpx", "httpcore")


def _level(name: str | None, default: int) -> int:
    if not name:
        return default
    return getattr(logging, name.strip().upper(), default)


def setup_logging(level: str | None = None, *, wire: bool | None = None) -> None:
    """
    Configure standard logging for scripts embedding the client.

    ``level`` defaults to HTTPCLIENT_LOG_LEVEL (WARNING). ``wire`` defaults to
    HTTPCLIENT_LOG_WIRE; when enabled the httpx/httpcore loggers follow ``level``.
    """
    effective_level = _level(level or os.getenv("HTTPCLIENT_LOG_LEVEL"), logging.WARNING)
    if wire is None:
        wire = os.getenv("HTTPCLIENT_LOG_WIRE", "").strip().lower() in {"1", "true", "yes", "on"}

    logging.basicConfig(
        level=effective_level,
        format="%(asctime)s %(levelname)s %(name)s [%(threadName)s]: %(message)s",
    )
    logging.getLogger(PACKAGE_LOGGER).setLevel(effective_level)
    for name in WIRE_LOGGERS:
        logging.getLogger(name).setLevel(effective_level if wire else max(effective_level, logging.WARNING))


__all__ = ["PACKAGE_LOGGER", "WIRE_LOGGERS", "setup_logging"]
