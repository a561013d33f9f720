"""yt_digest.tracks – pull caption tracks out of the player response and
pick one.

The player response is an internal, unversioned document, so nothing here
trusts its shape: every level is type-checked and a missing container simply
means "no tracks".
"""
from __future__ import annotations

import logging
from typing import Any, Sequence

from .constants import ENGLISH_CODE, ENGLISH_VSS_PREFIX
from .errors import NoCaptionsAvailable
from .models import CaptionTrack

__all__ = [
    "extract_tracks",
    "extract_title",
    "select_track",
    "select_track_url",
]

log = logging.getLogger(__name__)


def _dig(blob: Any, *keys: str) -> Any:
    """Follow *keys* through nested dicts; ``None`` as soon as one is missing."""
    for key in keys:
        if not isinstance(blob, dict):
            return None
        blob = blob.get(key)
    return blob


def _str(value: Any) -> str:
    return value if isinstance(value, str) else ""


def extract_title(player_response: dict[str, Any]) -> str:
    return _str(_dig(player_response, "videoDetails", "title"))


def extract_tracks(player_response: dict[str, Any]) -> list[CaptionTrack]:
    """Return the advertised caption tracks in their original order."""
    raw = _dig(
        player_response,
        "captions",
        "playerCaptionsTracklistRenderer",
        "captionTracks",
    )
    if not isinstance(raw, list):
        return []

    tracks: list[CaptionTrack] = []
    for entry in raw:
        base_url = _dig(entry, "baseUrl")
        if not isinstance(base_url, str) or not base_url:
            log.debug("Skipping caption track without baseUrl: %r", entry)
            continue
        tracks.append(
            CaptionTrack(
                base_url=base_url,
                vss_id=_str(entry.get("vssId")),
                language_code=_str(entry.get("languageCode")),
            )
        )
    return tracks


def _is_english(track: CaptionTrack) -> bool:
    return track.vss_id.startswith(ENGLISH_VSS_PREFIX) or track.language_code == ENGLISH_CODE


def select_track(tracks: Sequence[CaptionTrack]) -> CaptionTrack:
    """First English track, otherwise the first track listed."""
    if not tracks:
        raise NoCaptionsAvailable("no caption tracks available")
    for track in tracks:
        log.debug(
            "Caption track vssId=%s languageCode=%s url=%s",
            track.vss_id,
            track.language_code,
            track.base_url,
        )
        if _is_english(track):
            return track
    log.debug("No English captions found, using default %s", tracks[0].base_url)
    return tracks[0]


def select_track_url(tracks: Sequence[CaptionTrack]) -> str:
    return select_track(tracks).base_url
