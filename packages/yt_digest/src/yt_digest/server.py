"""
HTTP boundary: one JSON endpoint in front of :class:`TranscriptService`.

``GET /api/v1/transcripts?videoUrl=…&interval=…`` returns
``{title, raw: {segments}, formatted}`` or ``{error, message}``.
"""
from __future__ import annotations

import logging
import time
from http import HTTPStatus
from typing import Optional

from flask import Flask, Response, g, jsonify, request
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from .cache import MemoryCache
from .constants import API_PREFIX
from .config import Settings
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
from .fetcher import TranscriptFetcher
from .service import TranscriptRequest, TranscriptService

__all__ = ["create_app", "error_response", "status_for"]

log = logging.getLogger(__name__)

# (status, user-facing message) per error kind; first match wins
_ERROR_MAP: list[tuple[type[DigestError], int, str]] = [
    (InvalidURL, 400, "Invalid YouTube video URL"),
    (NoCaptionsAvailable, 404, "No captions available for this video"),
    (NoTranscriptContent, 404, "No transcript available"),
    (FetchFailed, 500, "Failed to fetch transcript from YouTube"),
    (ParseFailed, 500, "Failed to parse transcript data from YouTube"),
    (FormatFailed, 500, "Failed to format transcript"),
    (Cancelled, 500, "Transcript request was cancelled"),
]


def status_for(exc: DigestError) -> tuple[int, str]:
    for kind, status, message in _ERROR_MAP:
        if isinstance(exc, kind):
            return status, message
    return 500, "Internal server error"


def error_response(message: str, status: int) -> tuple[Response, int]:
    return jsonify(error=HTTPStatus(status).phrase, message=message), status


def create_app(
    settings: Optional[Settings] = None,
    service: Optional[TranscriptService] = None,
) -> Flask:
    """Application factory.  Without *service* a live fetcher + cache is built."""
    settings = settings or Settings.from_env()
    if service is None:
        fetcher = TranscriptFetcher(
            api_key=settings.api_key,
            timeout=settings.timeout,
            verify=settings.verify_tls,
        )
        service = TranscriptService(fetcher, MemoryCache())

    app = Flask(__name__)
    app.json.sort_keys = False
    app.extensions["yt_digest"] = service
    if settings.disable_cors:
        CORS(
            app,
            origins="*",
            send_wildcard=True,
            methods=["GET", "POST", "OPTIONS"],
            allow_headers=["Content-Type"],
        )

    # ------------------------------------------------------------------ #
    # request logging
    # ------------------------------------------------------------------ #
    @app.before_request
    def _start_timer() -> None:
        g.started = time.perf_counter()

    @app.after_request
    def _log_request(resp: Response) -> Response:
        started = g.get("started")
        elapsed = (time.perf_counter() - started) * 1000 if started else 0.0
        log.info(
            "Request completed %s %s -> %d (%.1f ms)",
            request.method,
            request.path,
            resp.status_code,
            elapsed,
        )
        return resp

    # ------------------------------------------------------------------ #
    # recovery
    # ------------------------------------------------------------------ #
    @app.errorhandler(HTTPException)
    def _http_error(exc: HTTPException):
        return error_response(exc.description or exc.name, exc.code or 500)

    @app.errorhandler(Exception)
    def _unhandled(exc: Exception):
        log.exception("Unhandled error while serving %s", request.path)
        return error_response("Internal Server Error", 500)

    # ------------------------------------------------------------------ #
    # routes
    # ------------------------------------------------------------------ #
    @app.get(f"{API_PREFIX}/transcripts")
    def get_transcripts():
        video_url = request.args.get("videoUrl", "")
        if not video_url:
            return error_response("Missing videoUrl parameter", 400)

        req = TranscriptRequest(
            video_url=video_url,
            interval=request.args.get("interval"),
        )
        try:
            result = service.get_transcript(req)
        except DigestError as exc:
            status, message = status_for(exc)
            log.error("Transcript request for %s failed: %s", video_url, exc)
            return error_response(message, status)

        return jsonify(result.to_dict()), 200

    @app.get("/healthz")
    def healthz():
        return jsonify(status="ok", cached=service.cache.size())

    return app
