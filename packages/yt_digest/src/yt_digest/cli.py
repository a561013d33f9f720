"""
CLI entry-point.  Run ``ytd --help``.
"""

from __future__ import annotations

import dataclasses
import json
import pathlib
import sys
from typing import Optional

import typer
from typer import Argument as Arg, Option as Opt, colors, secho

from yt_digest import __version__
from yt_digest.cache import MemoryCache
from yt_digest.cancel import CancelToken
from yt_digest.config import Settings
from yt_digest.constants import DEFAULT_INTERVAL
from yt_digest.errors import DigestError, InvalidURL
from yt_digest.fetcher import TranscriptFetcher
from yt_digest.header import with_header, write_text
from yt_digest.logger import configure_logging, log
from yt_digest.service import TranscriptRequest, TranscriptService
from yt_digest.utils import extract_video_id, slug

app = typer.Typer(
    add_completion=False,
    help="Fetch YouTube captions and group them into timestamped paragraphs ready to paste into an LLM chat.",
    no_args_is_help=True,
)


def build_service(settings: Settings) -> TranscriptService:
    fetcher = TranscriptFetcher(
        api_key=settings.api_key,
        timeout=settings.timeout,
        verify=settings.verify_tls,
    )
    return TranscriptService(fetcher, MemoryCache())


def _out_path(out: pathlib.Path, video_id: str, title: str, suffix: str) -> pathlib.Path:
    """A directory gets ``[id] title.ext`` inside it; anything else is used as-is."""
    if out.is_dir():
        return out / f"[{video_id}] {slug(title or video_id)}.{suffix}"
    return out


@app.callback()
def _version(
    version: Optional[bool] = Opt(
        None,
        "--version",
        callback=lambda value: (typer.echo(__version__) or sys.exit(0) if value else None),
        is_eager=True,
        help="Print version and exit.",
    ),
) -> None:
    """yt-digest command line."""


@app.command()
def fetch(
    url: str = Arg(..., help="YouTube video URL (youtube.com, youtu.be or m.youtube.com)."),
    interval: float = Opt(DEFAULT_INTERVAL, "--interval", "-i", help="Seconds of video per paragraph. Values <= 0 fall back to 10."),
    as_json: bool = Opt(False, "--json", help="Emit {title, raw, formatted} JSON instead of text."),
    out: Optional[pathlib.Path] = Opt(None, "--out", "-o", help="Write to this file (or into this directory) instead of stdout."),
    no_stats: bool = Opt(False, "--no-stats", help="Do not prepend the stats header to text files."),
    timeout: Optional[float] = Opt(None, "--timeout", help="Give up after this many seconds for the whole fetch."),
    verbose: int = Opt(0, "--verbose", "-v", count=True, help="-v for INFO, -vv for DEBUG."),
) -> None:
    """Fetch one transcript and print its timestamped paragraphs."""
    configure_logging(verbose)
    service = build_service(Settings.from_env())
    cancel = CancelToken.with_timeout(timeout) if timeout else None

    try:
        result = service.get_transcript(
            TranscriptRequest(video_url=url, interval=interval), cancel
        )
    except InvalidURL as exc:
        secho(f"✖ {exc}", fg=colors.RED, err=True)
        raise typer.Exit(2)
    except DigestError as exc:
        secho(f"✖ {type(exc).__name__}: {exc}", fg=colors.RED, err=True)
        raise typer.Exit(1)
    finally:
        service.fetcher.close()

    if as_json:
        body = json.dumps(result.to_dict(), ensure_ascii=False, indent=2) + "\n"
    else:
        body = "\n\n".join(result.formatted or []) + "\n"

    if out is None:
        typer.echo(body, nl=False)
        return

    video_id = extract_video_id(url)
    path = _out_path(out, video_id, result.title, "json" if as_json else "txt")
    if not as_json and not no_stats:
        meta = {"video_id": video_id, "url": f"https://youtu.be/{video_id}", "title": result.title}
        body = with_header(body, meta)
    write_text(path, body)
    log.info("✔ saved %s", path)
    secho(f"✅  Saved {path}", fg=colors.GREEN)


@app.command()
def serve(
    host: Optional[str] = Opt(None, "--host", help="Interface to bind (default: $HOST or 0.0.0.0)."),
    port: Optional[int] = Opt(None, "--port", "-p", help="Port to listen on (default: $PORT or 8080)."),
    verbose: int = Opt(1, "--verbose", "-v", count=True, help="-v for INFO, -vv for DEBUG."),
) -> None:
    """Run the JSON API server."""
    from yt_digest.server import create_app

    configure_logging(verbose)
    settings = Settings.from_env()
    overrides = {k: v for k, v in {"host": host, "port": port}.items() if v is not None}
    settings = dataclasses.replace(settings, **overrides)

    log.info("Starting server on %s:%d", settings.host, settings.port)
    create_app(settings).run(host=settings.host, port=settings.port)
    log.info("Server stopped")


def main() -> None:  # console-script target
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
