"""Public package API."""

from .errors import (
    Cancelled,
    DigestError,
    FetchFailed,
    FormatFailed,
    InvalidURL,
    NoCaptionsAvailable,
    NoTranscriptContent,
    ParseFailed,
)
from .models import CaptionTrack, Segment, Transcript, TranscriptResult
from .timecodes import format_timestamp, parse_time
from .ttml import parse_ttml
from .tracks import select_track
from .grouping import group_segments
from .utils import extract_video_id, is_allowed_domain
from .cancel import CancelToken
from .cache import MemoryCache
from .fetcher import TranscriptFetcher
from .service import TranscriptRequest, TranscriptService

__all__ = [
    "Cancelled",
    "DigestError",
    "FetchFailed",
    "FormatFailed",
    "InvalidURL",
    "NoCaptionsAvailable",
    "NoTranscriptContent",
    "ParseFailed",
    "CaptionTrack",
    "Segment",
    "Transcript",
    "TranscriptResult",
    "format_timestamp",
    "parse_time",
    "parse_ttml",
    "select_track",
    "group_segments",
    "extract_video_id",
    "is_allowed_domain",
    "CancelToken",
    "MemoryCache",
    "TranscriptFetcher",
    "TranscriptRequest",
    "TranscriptService",
]
__version__ = "0.1.0"
