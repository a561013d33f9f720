"""Runtime settings read from the environment."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .constants import DEFAULT_HOST, DEFAULT_PORT, DEFAULT_TIMEOUT


def _flag(value: Optional[str]) -> bool:
    return (value or "").strip().lower() == "true"


def _number(env: Mapping[str, str], name: str, default, cast):
    raw = env.get(name)
    if raw in (None, ""):
        return default
    try:
        return cast(raw)
    except ValueError:
        logging.getLogger(__name__).warning(
            "Ignoring invalid %s=%r - using %s", name, raw, default
        )
        return default


@dataclass(frozen=True)
class Settings:
    """Knobs for the HTTP server and the provider client."""

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    # DISABLE_CORS=true means "lift CORS restrictions": allow every origin
    disable_cors: bool = False
    api_key: str = ""
    timeout: float = DEFAULT_TIMEOUT
    verify_tls: bool = True

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if env is None else env
        return cls(
            host=env.get("HOST") or DEFAULT_HOST,
            port=_number(env, "PORT", DEFAULT_PORT, int),
            disable_cors=_flag(env.get("DISABLE_CORS")),
            api_key=env.get("YOUTUBE_API_KEY", ""),
            timeout=_number(env, "YTD_TIMEOUT", DEFAULT_TIMEOUT, float),
            verify_tls=not _flag(env.get("YTD_INSECURE")),
        )
