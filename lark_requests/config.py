"""
Configuration for lark_requests.

Values are read from environment variables; a local `.env` file is loaded
first so developers can keep credentials out of their shell profile.

    LARK_APP_ID=cli_xxx
    LARK_APP_SECRET=xxx
    LARK_BASE_URL=https://open.feishu.cn
    LARK_CONNECT_TIMEOUT=3
    LARK_TIMEOUT=7
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

DEFAULT_BASE_URL = "https://open.feishu.cn"
DEFAULT_CONNECT_TIMEOUT = 3.0
DEFAULT_TIMEOUT = 7.0


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number of seconds; got {raw!r}") from exc
    if value <= 0:
        raise ValueError(f"{name} must be > 0; got {value}")
    return value


@dataclass(frozen=True)
class Settings:
    app_id: Optional[str] = None
    app_secret: Optional[str] = None
    base_url: str = DEFAULT_BASE_URL
    connect_timeout: float = DEFAULT_CONNECT_TIMEOUT
    timeout: float = DEFAULT_TIMEOUT

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            app_id=os.getenv("LARK_APP_ID") or None,
            app_secret=os.getenv("LARK_APP_SECRET") or None,
            base_url=(os.getenv("LARK_BASE_URL") or DEFAULT_BASE_URL).rstrip("/"),
            connect_timeout=_env_float("LARK_CONNECT_TIMEOUT", DEFAULT_CONNECT_TIMEOUT),
            timeout=_env_float("LARK_TIMEOUT", DEFAULT_TIMEOUT),
        )


def get_settings() -> Settings:
    return Settings.from_env()
