# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for httpengine."""

import os
from dataclasses import dataclass

from .version import __version__

DEFAULT_USER_AGENT = f"httpengine/{__version__}"


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


def _optional_float_env(name: str, default: float | None) -> float | None:
    try:
        value = os.getenv(name)
        if value is None:
            return default
        parsed = float(value)
        return parsed if parsed > 0 else None
    except ValueError:
        return default


@dataclass
class HttpSettings:
    """Transport and execution defaults."""

    # None leaves httpx's own default timeout in place.
    timeout: float | None = None
    verify_ssl: bool = True
    allow_redirects: bool = True
    user_agent: str = DEFAULT_USER_AGENT
    chunk_size: int = 64 * 1024
    max_workers: int = 8
    validate_status: bool = False

    @classmethod
    def from_env(cls) -> "HttpSettings":
        """Create settings from environment variables (evaluated at call time)."""
        chunk_size = _int_env("HTTPENGINE_CHUNK_SIZE", cls.chunk_size)
        if chunk_size <= 0:
            chunk_size = cls.chunk_size
        max_workers = _int_env("HTTPENGINE_MAX_WORKERS", cls.max_workers)
        if max_workers <= 0:
            max_workers = cls.max_workers
        return cls(
            timeout=_optional_float_env("HTTPENGINE_HTTP_TIMEOUT", cls.timeout),
            verify_ssl=_bool_env("HTTPENGINE_HTTP_VERIFY_SSL", cls.verify_ssl),
            allow_redirects=_bool_env("HTTPENGINE_HTTP_REDIRECTS", cls.allow_redirects),
            user_agent=os.getenv("HTTPENGINE_USER_AGENT", cls.user_agent),
            chunk_size=chunk_size,
            max_workers=max_workers,
            validate_status=_bool_env("HTTPENGINE_VALIDATE_STATUS", cls.validate_status),
        )


def load_http_settings() -> HttpSettings:
    """Load HTTP settings from environment with sensible defaults."""
    return HttpSettings.from_env()
