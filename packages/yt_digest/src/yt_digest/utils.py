"""yt_digest.utils

Small pure helpers: video-id extraction, domain allow-listing and the text
helpers used when writing transcripts to disk.  No network, no Flask, so
they are trivial to unit-test.
"""
from __future__ import annotations

import re
from urllib.parse import urlparse

from .constants import ALLOWED_DOMAINS, VIDEO_ID_LEN

__all__ = [
    "BAD_REGEX",
    "extract_video_id",
    "is_allowed_domain",
    "slug",
    "stats",
]

# ---------------------------------------------------------------------------
# YouTube URL helpers
# ---------------------------------------------------------------------------

_VID_RE = re.compile(r"(?:/|%3D|v=|vi=)([0-9A-Za-z_-]{11})(?:[%#?&/]|$)")


def extract_video_id(text: str) -> str:
    """Return the 11-char video id in *text*, or ``""`` when there is none.

    An input that is already 11 characters long is taken as a literal id.
    """
    if len(text) == VIDEO_ID_LEN:
        return text
    m = _VID_RE.search(text)
    return m.group(1) if m else ""


def is_allowed_domain(url: str) -> bool:
    """True when *url*'s host is youtube.com, youtu.be or m.youtube.com."""
    try:
        netloc = urlparse(url).netloc
    except ValueError:
        return False
    host = netloc.rpartition("@")[2].lower()
    if host.startswith("www."):
        host = host[len("www."):]
    return host in ALLOWED_DOMAINS


# ---------------------------------------------------------------------------
# Text statistics & slugging
# ---------------------------------------------------------------------------

BAD_REGEX = re.compile(r'[\\/:*?"<>|\r\n]+')


def slug(text: str, max_len: int = 120) -> str:
    """Return a filesystem-safe, reasonably short slice of *text*."""
    text = BAD_REGEX.sub("_", text).strip()
    text = re.sub(r"\s+", " ", text)
    if len(text) > max_len:
        text = text[:max_len].rsplit(" ", 1)[0] + "…"
    return text or "untitled"


def stats(txt: str) -> tuple[int, int, int]:
    """Return *(words, lines, chars)* exactly like the *nix `wc` tool."""
    chars = len(txt)
    words = len(re.findall(r"\S+", txt))
    lines = txt.count("\n")  # match `wc -l` semantics
    return words, lines, chars
