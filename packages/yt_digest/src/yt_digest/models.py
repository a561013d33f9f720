"""Data models for transcripts and segments."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass(frozen=True)
class Segment:
    """A single caption cue with timing information."""
    text: str
    start: float     # Start time in seconds
    duration: float  # end - start, passed through even when negative

    def to_dict(self) -> dict[str, Any]:
        return {"text": self.text, "start": self.start, "duration": self.duration}


@dataclass
class Transcript:
    """Ordered segments of one caption track."""
    segments: list[Segment] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.segments)

    def __iter__(self):
        return iter(self.segments)

    def to_dict(self) -> dict[str, Any]:
        return {"segments": [s.to_dict() for s in self.segments]}


@dataclass
class CaptionTrack:
    """One caption stream advertised by the player response."""
    base_url: str
    vss_id: str = ""
    language_code: str = ""


@dataclass
class TranscriptResult:
    """Title, raw segments and (after grouping) the formatted paragraphs."""
    title: str = ""
    raw: Transcript = field(default_factory=Transcript)
    formatted: Optional[list[str]] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "raw": self.raw.to_dict(),
            "formatted": self.formatted,
        }
