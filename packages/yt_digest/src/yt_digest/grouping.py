"""yt_digest.grouping – merge consecutive segments into timestamped
paragraphs, one per *interval* seconds of elapsed caption time.
"""
from __future__ import annotations

import logging
from typing import Iterable

from .models import Segment, Transcript
from .timecodes import format_group

__all__ = ["group_segments"]

log = logging.getLogger(__name__)


def group_segments(transcript: Transcript | Iterable[Segment], interval: float) -> list[str]:
    """Return ``"(MM:SS) text …"`` paragraphs.

    A new paragraph starts at the first segment beginning *interval* or more
    seconds after the current paragraph's anchor.  *interval* is used as
    given; callers normalise non-positive values beforehand.
    """
    segments = list(transcript)
    if not segments:
        log.warning("No segments found in transcript")
        return []

    formatted: list[str] = []
    current_start = segments[0].start
    pending: list[str] = []

    for seg in segments:
        if seg.start - current_start >= interval and pending:
            formatted.append(format_group(current_start, " ".join(pending)))
            current_start = seg.start
            pending = []
        pending.append(seg.text)

    if pending:
        formatted.append(format_group(current_start, " ".join(pending)))

    log.info("Formatted transcript into %d group(s)", len(formatted))
    return formatted
