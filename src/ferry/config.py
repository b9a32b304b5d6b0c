# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for Ferry."""

import os
from dataclasses import dataclass

from .version import __version__

DEFAULT_USER_AGENT = f"ferry/{__version__}"


def _float_env(name: str, default: float) -> float:
    try:
        value = os.getenv(name)
        return float(value) if value is not None else default
    except ValueError:
        return default


def _int_env(name: str, default: int) -> int:
    try:
        value = os.getenv(name)
        return int(value) if value is not None else default
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class ClientSettings:
    """Process-wide client defaults."""

    timeout: float = 0.0
    max_redirects: int = 5
    max_content_length: int = -1
    user_agent: str = DEFAULT_USER_AGENT
    follow_redirects: bool = True

    @classmethod
    def from_env(cls) -> "ClientSettings":
        """Create settings from environment variables (evaluated at call time)."""
        timeout = _float_env("FERRY_HTTP_TIMEOUT", cls.timeout)
        if timeout < 0:
            timeout = cls.timeout
        max_redirects = _int_env("FERRY_HTTP_MAX_REDIRECTS", cls.max_redirects)
        if max_redirects < 0:
            max_redirects = cls.max_redirects
        return cls(
            timeout=timeout,
            max_redirects=max_redirects,
            max_content_length=_int_env("FERRY_HTTP_MAX_CONTENT_LENGTH", cls.max_content_length),
            user_agent=os.getenv("FERRY_USER_AGENT", cls.user_agent),
            follow_redirects=_bool_env("FERRY_HTTP_FOLLOW_REDIRECTS", cls.follow_redirects),
        )


def load_client_settings() -> ClientSettings:
    """Load client settings from environment with sensible defaults."""
    return ClientSettings.from_env()
