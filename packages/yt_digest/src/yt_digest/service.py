"""yt_digest.service – validate → cache → fetch → group.

The service owns no state of its own; the fetcher and the cache are handed
in, so the HTTP app, the CLI and the tests each wire their own.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any

from .cache import TranscriptCache
from .cancel import CancelToken
from .constants import DEFAULT_INTERVAL
from .errors import (
    CacheError,
    CacheMiss,
    FormatFailed,
    InvalidURL,
    NoTranscriptContent,
)
from .fetcher import TranscriptFetcher
from .grouping import group_segments
from .models import Transcript, TranscriptResult
from .utils import extract_video_id, is_allowed_domain

__all__ = [
    "TranscriptRequest",
    "TranscriptService",
    "normalize_interval",
]

log = logging.getLogger(__name__)


def normalize_interval(value: Any) -> float:
    """Coerce *value* to a positive interval, falling back to 10 seconds."""
    if value is None or isinstance(value, bool):
        return DEFAULT_INTERVAL
    try:
        interval = float(value)
    except (TypeError, ValueError):
        return DEFAULT_INTERVAL
    if not math.isfinite(interval) or interval <= 0:
        return DEFAULT_INTERVAL
    return interval


@dataclass
class TranscriptRequest:
    video_url: str
    video_id: str = ""
    interval: float | str | None = 0.0  # normalised by the service


class TranscriptService:
    def __init__(self, fetcher: TranscriptFetcher, cache: TranscriptCache):
        self.fetcher = fetcher
        self.cache = cache

    def get_transcript(
        self, request: TranscriptRequest, cancel: CancelToken | None = None
    ) -> TranscriptResult:
        """Return title, raw segments and formatted paragraphs for one video.

        Raises :class:`InvalidURL` before any network traffic, otherwise
        whatever the fetcher raised, :class:`NoTranscriptContent` when the
        caption track held no usable text, or :class:`FormatFailed`.
        """
        interval = normalize_interval(request.interval)

        if not request.video_url or not is_allowed_domain(request.video_url):
            raise InvalidURL(f"invalid YouTube video URL: {request.video_url!r}")

        video_id = request.video_id or extract_video_id(request.video_url)
        if not video_id:
            raise InvalidURL(f"no video id in {request.video_url!r}")

        result = self._cached(video_id)
        if result is None:
            result = self.fetcher.fetch(video_id, cancel)
            if not result.raw:
                log.warning("No transcript available for %s", video_id)
                raise NoTranscriptContent(f"no transcript content for {video_id}")
            try:
                self.cache.put(video_id, result)
            except (CacheError, ValueError) as exc:
                log.error("Failed to cache transcript %s: %s", video_id, exc)

        result.formatted = self.format(result.raw, interval)
        return result

    def format(self, transcript: Transcript, interval: Any = DEFAULT_INTERVAL) -> list[str]:
        try:
            return group_segments(transcript, normalize_interval(interval))
        except Exception as exc:
            log.error("Failed to format transcript: %s", exc)
            raise FormatFailed(f"failed to format transcript: {exc}") from exc

    def _cached(self, video_id: str) -> TranscriptResult | None:
        try:
            return self.cache.get(video_id)
        except CacheMiss:
            return None
        except (CacheError, ValueError) as exc:
            log.error("Failed to get transcript %s from cache: %s", video_id, exc)
            return None
