from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "src"))

from yt_digest.models import Segment, Transcript, TranscriptResult  # noqa: E402

VIDEO_ID = "dQw4w9WgXcQ"
VIDEO_URL = f"https://www.youtube.com/watch?v={VIDEO_ID}"

TTML_DOC = b"""<?xml version="1.0" encoding="utf-8" ?>
<tt xmlns="http://www.w3.org/ns/ttml" xml:lang="en">
  <head/>
  <body>
    <div>
      <p begin="00:00:00.000" end="00:00:04.000">Never gonna give you up</p>
      <p begin="00:00:04.000" end="00:00:09.000">Never gonna let you down</p>
      <p begin="00:00:09.000" end="00:00:15.000">Never gonna run around</p>
      <p begin="00:00:15.000" end="00:00:20.000">and desert you</p>
    </div>
  </body>
</tt>
"""


def player_response(
    tracks: list[dict[str, Any]] | None = None, title: str = "Demo video"
) -> dict[str, Any]:
    if tracks is None:
        tracks = [
            {
                "baseUrl": "https://www.youtube.com/api/timedtext?v=dQw4w9WgXcQ&lang=en",
                "vssId": ".en",
                "languageCode": "en",
            }
        ]
    return {
        "videoDetails": {"videoId": VIDEO_ID, "title": title},
        "captions": {"playerCaptionsTracklistRenderer": {"captionTracks": tracks}},
    }


class FakeResponse:
    def __init__(self, status_code: int = 200, content: bytes = b""):
        self.status_code = status_code
        self.content = content

    def json(self):
        return json.loads(self.content)


class FakeSession:
    """Stands in for ``requests.Session``; replays queued responses in order.

    A queued exception instance is raised instead of returned.
    """

    def __init__(self, *responses):
        self.queue = list(responses)
        self.calls: list[tuple[str, str, dict]] = []
        self.headers: dict[str, str] = {}
        self.closed = False

    def _next(self, method: str, url: str, **kw):
        self.calls.append((method, url, kw))
        item = self.queue.pop(0)
        if isinstance(item, BaseException):
            raise item
        return item

    def post(self, url, **kw):
        return self._next("POST", url, **kw)

    def get(self, url, **kw):
        return self._next("GET", url, **kw)

    def close(self):
        self.closed = True


def ok_json(blob: Any) -> FakeResponse:
    return FakeResponse(200, json.dumps(blob).encode())


@pytest.fixture
def segments() -> list[Segment]:
    return [
        Segment("Never gonna give you up", 0.0, 4.0),
        Segment("Never gonna let you down", 4.0, 5.0),
        Segment("Never gonna run around", 9.0, 6.0),
        Segment("and desert you", 15.0, 5.0),
    ]


@pytest.fixture
def result(segments) -> TranscriptResult:
    return TranscriptResult(title="Demo video", raw=Transcript(segments=list(segments)))


@pytest.fixture
def happy_session() -> FakeSession:
    return FakeSession(ok_json(player_response()), FakeResponse(200, TTML_DOC))
