import json

import pytest
from typer.testing import CliRunner

from yt_digest import __version__
from yt_digest import cli as _cli
from yt_digest.cache import MemoryCache
from yt_digest.errors import FetchFailed
from yt_digest.models import TranscriptResult
from yt_digest.service import TranscriptService

from conftest import VIDEO_URL

_runner = CliRunner()


class _Fetcher:
    def __init__(self, outcome):
        self.outcome = outcome
        self.closed = False
        self.cancel = None

    def fetch(self, video_id, cancel=None):
        self.cancel = cancel
        if isinstance(self.outcome, BaseException):
            raise self.outcome
        return self.outcome

    def close(self):
        self.closed = True


@pytest.fixture
def use_fetcher(monkeypatch):
    def _install(outcome):
        fetcher = _Fetcher(outcome)
        monkeypatch.setattr(_cli, "build_service", lambda settings: TranscriptService(fetcher, MemoryCache()))
        return fetcher

    return _install


def test_version():
    res = _runner.invoke(_cli.app, ["--version"])
    assert res.exit_code == 0
    assert __version__ in res.output


def test_fetch_prints_paragraphs(use_fetcher, result):
    fetcher = use_fetcher(result)
    res = _runner.invoke(_cli.app, ["fetch", VIDEO_URL])
    assert res.exit_code == 0, res.output
    assert "(00:00) Never gonna give you up" in res.output
    assert "(00:15) and desert you" in res.output
    assert fetcher.closed
    assert fetcher.cancel is None


def test_fetch_interval_option(use_fetcher, result):
    use_fetcher(result)
    res = _runner.invoke(_cli.app, ["fetch", VIDEO_URL, "--interval", "1"])
    assert res.exit_code == 0
    assert res.output.count("(00:") == 4


def test_fetch_json(use_fetcher, result):
    use_fetcher(result)
    res = _runner.invoke(_cli.app, ["fetch", VIDEO_URL, "--json"])
    assert res.exit_code == 0
    body = json.loads(res.output)
    assert body["title"] == "Demo video"
    assert len(body["raw"]["segments"]) == 4
    assert len(body["formatted"]) == 2


def test_fetch_timeout_builds_cancel_token(use_fetcher, result):
    fetcher = use_fetcher(result)
    res = _runner.invoke(_cli.app, ["fetch", VIDEO_URL, "--timeout", "5"])
    assert res.exit_code == 0
    assert fetcher.cancel is not None
    assert 0 < fetcher.cancel.remaining() <= 5


def test_fetch_out_directory_with_header(use_fetcher, result, tmp_path):
    use_fetcher(result)
    res = _runner.invoke(_cli.app, ["fetch", VIDEO_URL, "-o", str(tmp_path)])
    assert res.exit_code == 0, res.output
    out = tmp_path / "[dQw4w9WgXcQ] Demo video.txt"
    txt = out.read_text(encoding="utf-8")
    assert txt.startswith("# stats: ")
    assert "# video-id: dQw4w9WgXcQ" in txt
    assert "# url:      https://youtu.be/dQw4w9WgXcQ" in txt
    assert txt.rstrip().endswith("(00:15) and desert you")


def test_fetch_out_file_without_stats(use_fetcher, result, tmp_path):
    use_fetcher(result)
    out = tmp_path / "nested" / "t.txt"
    res = _runner.invoke(_cli.app, ["fetch", VIDEO_URL, "-o", str(out), "--no-stats"])
    assert res.exit_code == 0
    assert out.read_text(encoding="utf-8").startswith("(00:00) ")


def test_fetch_json_to_file(use_fetcher, result, tmp_path):
    use_fetcher(result)
    res = _runner.invoke(_cli.app, ["fetch", VIDEO_URL, "--json", "-o", str(tmp_path)])
    assert res.exit_code == 0
    data = json.loads((tmp_path / "[dQw4w9WgXcQ] Demo video.json").read_text(encoding="utf-8"))
    assert data["title"] == "Demo video"


def test_invalid_url_exit_code(use_fetcher, result):
    fetcher = use_fetcher(result)
    res = _runner.invoke(_cli.app, ["fetch", "https://evil.com/watch?v=dQw4w9WgXcQ"])
    assert res.exit_code == 2
    assert "invalid YouTube video URL" in res.output
    assert fetcher.closed


def test_fetch_failure_exit_code(use_fetcher):
    use_fetcher(FetchFailed("captions", status_code=404))
    res = _runner.invoke(_cli.app, ["fetch", VIDEO_URL])
    assert res.exit_code == 1
    assert "FetchFailed: captions: unexpected status code: 404" in res.output


def test_no_content_exit_code(use_fetcher):
    use_fetcher(TranscriptResult())
    res = _runner.invoke(_cli.app, ["fetch", VIDEO_URL])
    assert res.exit_code == 1
    assert "NoTranscriptContent" in res.output


def test_serve_wires_settings(monkeypatch):
    seen = {}

    class _App:
        def run(self, host, port):
            seen["run"] = (host, port)

    def _create_app(settings):
        seen["settings"] = settings
        return _App()

    monkeypatch.setattr("yt_digest.server.create_app", _create_app)
    monkeypatch.setenv("PORT", "9000")
    monkeypatch.setenv("DISABLE_CORS", "true")
    res = _runner.invoke(_cli.app, ["serve", "--host", "127.0.0.1"])
    assert res.exit_code == 0, res.output
    assert seen["run"] == ("127.0.0.1", 9000)
    assert seen["settings"].disable_cors is True


def test_serve_port_flag_overrides_env(monkeypatch):
    seen = {}

    class _App:
        def run(self, host, port):
            seen["port"] = port

    monkeypatch.setattr("yt_digest.server.create_app", lambda settings: _App())
    monkeypatch.setenv("PORT", "9000")
    res = _runner.invoke(_cli.app, ["serve", "-p", "7000"])
    assert res.exit_code == 0
    assert seen["port"] == 7000
