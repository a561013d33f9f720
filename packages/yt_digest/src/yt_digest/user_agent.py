from __future__ import annotations

import logging
import random
from typing import Final

from fake_useragent import UserAgent

# Used when fake-useragent cannot load its bundled data.
USER_AGENTS_POOL: Final[list[str]] = [
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/131.0.0.0 Safari/537.36",
]


def pick_ua(browser: str | None = None, os: str | None = None) -> str:
    """Return a plausible User-Agent string for provider requests."""
    kwargs = {}
    if browser:
        kwargs["browsers"] = [browser]
    if os:
        kwargs["os"] = [os]
    try:
        return UserAgent(**kwargs).random
    except Exception as exc:  # noqa: BLE001
        logging.getLogger(__name__).warning(
            "fake-useragent failed (%s) - using fallback UA", exc
        )
        return random.choice(USER_AGENTS_POOL)
