"""
app/config.py

Application-level configuration helpers.
"""

from __future__ import annotations

import math
import os
from dataclasses import dataclass
from functools import lru_cache

from db.config import load_env_files

DEFAULT_USER_AGENT = "PageAnalyzerBot/1.0"


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    """
    Ensure project `.env` files are loaded once before reading app settings.
    """

    load_env_files()


def _get_int_env(name: str, default: int) -> int:
    """
    Read an integer from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return int(raw_value)
    except ValueError:
        return default


def _get_float_env(name: str, default: float) -> float:
    """
    Read a finite float from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        value = float(raw_value)
    except ValueError:
        return default
    return value if math.isfinite(value) else default


def _get_str_env(name: str, default: str) -> str:
    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return default
    stripped = value.strip()
    return stripped if stripped else default


@dataclass(frozen=True)
class CheckHTTPSettings:
    """
    Outbound HTTP behaviour for url checks.

    A check performs one GET and never retries, so only the timeout and the
    redirect budget are tunable.
    """

    timeout_seconds: float = 10.0
    max_redirects: int = 5
    user_agent: str = DEFAULT_USER_AGENT


@lru_cache(maxsize=1)
def get_check_http_settings() -> CheckHTTPSettings:
    """
    Return cached check HTTP settings from environment variables.
    """

    return CheckHTTPSettings(
        timeout_seconds=max(1.0, _get_float_env("CHECK_HTTP_TIMEOUT_SECONDS", 10.0)),
        max_redirects=max(0, _get_int_env("CHECK_HTTP_MAX_REDIRECTS", 5)),
        user_agent=_get_str_env("CHECK_HTTP_USER_AGENT", DEFAULT_USER_AGENT),
    )
