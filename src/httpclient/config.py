# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for httpclient."""

import os
from dataclasses import dataclass

from .version import __version__

DEFAULT_USER_AGENT = f"httpclient/{__version__}"
DEFAULT_CONTENT_TYPE = "application/json"


def _float_env(name: str, default: float) -> float:
    try:
        value = os.getenv(name)
        return float(value) if value is not None else default
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _optional_int_env(name: str, default: int | None) -> int | None:
    try:
        value = os.getenv(name)
        if value is None:
            return default
        parsed = int(value)
        return parsed if parsed > 0 else None
    except ValueError:
        return default


@dataclass
class HttpSettings:
    """HTTP client defaults."""

    timeout: float = 10.0
    connect_timeout: float = 5.0
    user_agent: str = DEFAULT_USER_AGENT
    verify_ssl: bool = True
    default_content_type: str = DEFAULT_CONTENT_TYPE
    max_body_bytes: int | None = None

    @classmethod
    def from_env(cls) -> "HttpSettings":
        """Create settings from environment variables (evaluated at call time)."""
        timeout = _float_env("HTTPCLIENT_TIMEOUT", cls.timeout)
        if timeout <= 0:
            timeout = cls.timeout
        connect_timeout = _float_env("HTTPCLIENT_CONNECT_TIMEOUT", cls.connect_timeout)
        if connect_timeout <= 0:
            connect_timeout = cls.connect_timeout
        return cls(
            timeout=timeout,
            connect_timeout=connect_timeout,
            user_agent=os.getenv("HTTPCLIENT_USER_AGENT", cls.user_agent),
            verify_ssl=_bool_env("HTTPCLIENT_VERIFY_SSL", cls.verify_ssl),
            default_content_type=os.getenv("HTTPCLIENT_DEFAULT_CONTENT_TYPE", cls.default_content_type),
            max_body_bytes=_optional_int_env("HTTPCLIENT_MAX_BODY_BYTES", cls.max_body_bytes),
        )


def load_http_settings() -> HttpSettings:
    """Load HTTP settings from environment with sensible defaults."""
    return HttpSettings.from_env()
