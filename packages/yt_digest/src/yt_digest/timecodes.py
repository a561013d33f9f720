"""yt_digest.timecodes – conversions between TTML clock values and seconds,
plus the ``(MM:SS)`` labels that prefix each grouped paragraph.
"""
from __future__ import annotations

import re

from .errors import TimeFormatError

__all__ = [
    "parse_time",
    "format_timestamp",
    "format_group",
]


# plain decimals only: float() alone would also take nan, inf, 1_0 and padding
_DECIMAL = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)")


def _number(field: str, raw: str) -> float:
    if not _DECIMAL.fullmatch(field):
        raise TimeFormatError(f"invalid time format: {raw!r}")
    return float(field)


def parse_time(text: str) -> float:
    """Return *text* as seconds.

    Accepts the offset form ``12.5s`` and the clock form ``H:MM:SS[.fff]``.
    Anything else raises :class:`TimeFormatError`.
    """
    if text.endswith("s"):
        return _number(text[:-1], text)

    parts = text.split(":")
    if len(parts) != 3:
        raise TimeFormatError(f"invalid time format: {text!r}")
    hours, minutes, seconds = (_number(p, text) for p in parts)
    return hours * 3600 + minutes * 60 + seconds


def format_timestamp(seconds: float) -> str:
    """``(MM:SS) `` below one hour, ``(HH:MM:SS) `` from then on."""
    hours = int(seconds / 3600)
    minutes = int((seconds - hours * 3600) / 60)
    secs = int(seconds - (hours * 3600 + minutes * 60))
    if hours > 0:
        return f"({hours:02d}:{minutes:02d}:{secs:02d}) "
    return f"({minutes:02d}:{secs:02d}) "


def format_group(start: float, text: str) -> str:
    return format_timestamp(start) + text
