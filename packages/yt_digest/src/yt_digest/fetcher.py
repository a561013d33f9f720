"""yt_digest.fetcher – the two-stage exchange with the provider.

Stage ``player``
    POST the video id to the internal player endpoint and decode the JSON
    player response (title + caption tracks).
Stage ``captions``
    GET the selected track's ``baseUrl`` with ``fmt=ttml`` and parse the
    TTML document into segments.

One attempt per stage, no retries.  Every failure is raised as a
:class:`~yt_digest.errors.DigestError` naming the stage it came from, with
the original exception chained.
"""
from __future__ import annotations

import logging
from typing import Any

import requests

from .cancel import CancelToken
from .constants import (
    CLIENT_LOCALE,
    CLIENT_NAME,
    CLIENT_VERSION,
    DEFAULT_TIMEOUT,
    PLAYER_ENDPOINT,
    TTML_FORMAT,
)
from .errors import FetchFailed, ParseFailed, TTMLParseError
from .models import Transcript, TranscriptResult
from .tracks import extract_title, extract_tracks, select_track_url
from .ttml import parse_ttml
from .user_agent import pick_ua

__all__ = [
    "TranscriptFetcher",
    "player_payload",
    "ttml_url",
    "STAGE_PLAYER",
    "STAGE_CAPTIONS",
]

log = logging.getLogger(__name__)

STAGE_PLAYER = "player"
STAGE_CAPTIONS = "captions"


def player_payload(video_id: str) -> dict[str, Any]:
    """Request body identifying us as the desktop web client."""
    return {
        "context": {
            "client": {
                "clientName": CLIENT_NAME,
                "clientVersion": CLIENT_VERSION,
                "hl": CLIENT_LOCALE,
            },
        },
        "videoId": video_id,
    }


def ttml_url(base_url: str) -> str:
    sep = "&" if "?" in base_url else "?"
    return f"{base_url}{sep}fmt={TTML_FORMAT}"


class TranscriptFetcher:
    """Fetch title and raw segments for one video id."""

    def __init__(
        self,
        session: requests.Session | None = None,
        *,
        api_key: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        verify: bool = True,
        user_agent: str | None = None,
    ):
        if session is None:
            session = requests.Session()
            session.headers.update({"User-Agent": user_agent or pick_ua()})
        elif user_agent:
            session.headers.update({"User-Agent": user_agent})
        self.session = session
        self.api_key = api_key or None
        self.timeout = timeout
        self.verify = verify

    # ------------------------------------------------------------------ #
    # stage 1
    # ------------------------------------------------------------------ #
    def fetch_player_response(
        self, video_id: str, cancel: CancelToken | None = None
    ) -> dict[str, Any]:
        params = {"key": self.api_key} if self.api_key else None
        timeout = cancel.timeout(self.timeout, STAGE_PLAYER) if cancel else self.timeout
        try:
            resp = self.session.post(
                PLAYER_ENDPOINT,
                json=player_payload(video_id),
                params=params,
                headers={"Content-Type": "application/json"},
                timeout=timeout,
                verify=self.verify,
            )
        except requests.exceptions.RequestException as exc:
            raise FetchFailed(STAGE_PLAYER, f"failed to perform request: {exc}") from exc

        if resp.status_code != 200:
            raise FetchFailed(STAGE_PLAYER, status_code=resp.status_code)

        try:
            data = resp.json()
        except ValueError as exc:
            raise ParseFailed(STAGE_PLAYER, f"failed to decode player response: {exc}") from exc
        if not isinstance(data, dict):
            raise ParseFailed(
                STAGE_PLAYER,
                f"player response is {type(data).__name__}, expected an object",
            )
        return data

    # ------------------------------------------------------------------ #
    # stage 2
    # ------------------------------------------------------------------ #
    def fetch_caption_document(
        self, base_url: str, cancel: CancelToken | None = None
    ) -> bytes:
        timeout = cancel.timeout(self.timeout, STAGE_CAPTIONS) if cancel else self.timeout
        try:
            resp = self.session.get(ttml_url(base_url), timeout=timeout, verify=self.verify)
        except requests.exceptions.RequestException as exc:
            raise FetchFailed(STAGE_CAPTIONS, f"failed to fetch transcript: {exc}") from exc

        if resp.status_code != 200:
            raise FetchFailed(STAGE_CAPTIONS, status_code=resp.status_code)

        body = resp.content
        log.debug("TTML response length=%d snippet=%r", len(body), body[:500])
        return body

    # ------------------------------------------------------------------ #
    # pipeline
    # ------------------------------------------------------------------ #
    def fetch(self, video_id: str, cancel: CancelToken | None = None) -> TranscriptResult:
        """Run both stages; ``formatted`` is left unset on the result."""
        if cancel:
            cancel.check(STAGE_PLAYER)
        player = self.fetch_player_response(video_id, cancel)

        title = extract_title(player)
        if not title:
            log.warning("No title found in player response for %s", video_id)

        tracks = extract_tracks(player)
        log.info("Found %d caption track(s) for %s", len(tracks), video_id)
        base_url = select_track_url(tracks)

        if cancel:
            cancel.check(STAGE_CAPTIONS)
        body = self.fetch_caption_document(base_url, cancel)

        try:
            segments = parse_ttml(body)
        except TTMLParseError as exc:
            raise ParseFailed(STAGE_CAPTIONS, f"failed to parse TTML transcript: {exc}") from exc
        log.info("Parsed %d segment(s) for %s", len(segments), video_id)

        return TranscriptResult(title=title, raw=Transcript(segments=segments))

    def close(self) -> None:
        self.session.close()
