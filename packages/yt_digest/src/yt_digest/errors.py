"""Domain-specific exceptions.

Everything the pipeline can fail with derives from :class:`DigestError`, so
callers at the boundary (HTTP handler, CLI) can map each kind to its own
status code or exit code.  Stage-carrying errors keep the stage name in their
message; the originating exception is always chained via ``raise ... from``.
"""
from __future__ import annotations

__all__ = [
    "DigestError",
    "InvalidURL",
    "NoCaptionsAvailable",
    "FetchFailed",
    "ParseFailed",
    "NoTranscriptContent",
    "FormatFailed",
    "Cancelled",
    "CacheError",
    "CacheMiss",
    "InvalidCacheEntry",
    "TimeFormatError",
    "TTMLParseError",
]


class DigestError(Exception):
    """Base class for all yt-digest pipeline errors."""


class InvalidURL(DigestError):
    """URL was empty, unparsable, off an allowed domain, or had no video id."""


class NoCaptionsAvailable(DigestError):
    """The player response listed zero caption tracks."""


class _StageError(DigestError):
    """Failure tied to one network stage (``player`` or ``captions``)."""

    def __init__(self, stage: str, detail: str = ""):
        self.stage = stage
        self.detail = detail
        super().__init__(self._render())

    def _render(self) -> str:
        return f"{self.stage}: {self.detail}" if self.detail else self.stage


class FetchFailed(_StageError):
    """Network failure or unexpected status code at a fetch stage."""

    def __init__(self, stage: str, detail: str = "", status_code: int | None = None):
        self.status_code = status_code
        if status_code is not None and not detail:
            detail = f"unexpected status code: {status_code}"
        super().__init__(stage, detail)


class ParseFailed(_StageError):
    """Malformed player JSON or malformed timed-text document."""


class NoTranscriptContent(DigestError):
    """Fetch succeeded but no usable segments survived filtering."""


class FormatFailed(DigestError):
    """Grouping the transcript into timestamped paragraphs failed."""


class Cancelled(DigestError):
    """The caller cancelled the fetch or its deadline expired."""


# --------------------------------------------------------------------------- #
# Cache
# --------------------------------------------------------------------------- #
class CacheError(Exception):
    """Base class for cache collaborator errors."""


class CacheMiss(CacheError, KeyError):
    """No entry is cached for the requested video id."""

    def __str__(self) -> str:  # KeyError quotes its arg otherwise
        return Exception.__str__(self)


class InvalidCacheEntry(CacheError):
    """An entry is present but unusable (``None`` stored or requested)."""


# --------------------------------------------------------------------------- #
# Leaf parsing errors (raised by the codec / TTML parser, wrapped upstream)
# --------------------------------------------------------------------------- #
class TimeFormatError(ValueError):
    """Timestamp text matched neither the suffix nor the colon form."""


class TTMLParseError(ValueError):
    """The document is not XML or lacks the tt/body/div skeleton."""
