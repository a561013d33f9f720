"""Header and statistics helpers for transcript files written by ``ytd fetch``."""

from __future__ import annotations

import datetime
import logging
from pathlib import Path

from .utils import stats as _stats

__all__ = [
    "header_text",
    "fixup_loop",
    "with_header",
    "write_text",
]


def header_text(w: int, l: int, c: int, _ts_override: str | None = None) -> str:
    """Return the ``# stats`` / ``# generated`` preamble."""
    lines = [
        f"# stats: {w:,} words · {l:,} lines · {c:,} chars",
        f"# generated: {_ts_override or datetime.datetime.now().isoformat()}",
        "",
    ]
    return "\n".join(lines) + "\n"


def fixup_loop(body: tuple[int, int, int]) -> tuple[str, int, int, int]:
    """Return ``(header_text, W, L, C)`` where the counts include the header."""
    body_w, body_l, body_c = body
    w, l, c = body
    ts_frozen = datetime.datetime.now().isoformat()
    for _ in range(10):
        hdr = header_text(w, l, c, _ts_override=ts_frozen)
        hw, hl, hc = _stats(hdr)
        w2, l2, c2 = body_w + hw, body_l + hl, body_c + hc
        if (w, l, c) == (w2, l2, c2):
            return hdr, w, l, c
        w, l, c = w2, l2, c2
    logging.getLogger(__name__).warning(
        "Header stats failed to converge in 10 rounds; using last attempt"
    )
    return hdr, w, l, c


def with_header(body_txt: str, meta: dict[str, str]) -> str:
    """Prefix *body_txt* with stats plus video id, url and title."""
    aux_lines = [
        f"# video-id: {meta['video_id']}",
        f"# url:      {meta['url']}",
        f"# title:    {meta['title']}",
    ]
    aux_txt = "\n".join(aux_lines) + "\n\n"
    bw, bl, bc = _stats(body_txt)
    aw, al, ac = _stats(aux_txt)
    hdr, _, _, _ = fixup_loop((bw + aw, bl + al, bc + ac))
    return hdr + aux_txt + body_txt


def write_text(path: Path, txt: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(txt, encoding="utf-8")
