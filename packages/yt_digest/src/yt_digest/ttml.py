"""yt_digest.ttml – decode a TTML caption document into :class:`Segment`s.

The provider serves ``<tt><body><div><p begin=".." end="..">text</p>…``.
Tags are matched by local name, so the TTML namespace (present or not) does
not matter.  Paragraphs whose clock values cannot be parsed, or whose text is
blank, are skipped; a document without the tt/body/div skeleton is an error.
"""
from __future__ import annotations

import logging
from typing import IO, Iterator, Union
from xml.etree.ElementTree import Element

from defusedxml import DefusedXmlException
from defusedxml import ElementTree

from .errors import TimeFormatError, TTMLParseError
from .models import Segment
from .timecodes import parse_time

__all__ = ["parse_ttml", "iter_paragraphs"]

log = logging.getLogger(__name__)

Document = Union[bytes, str, IO[bytes]]


def _local(tag: str) -> str:
    """``{ns}name`` → ``name``."""
    return tag.rsplit("}", 1)[-1] if isinstance(tag, str) else ""


def _children(elem: Element, name: str) -> list[Element]:
    return [child for child in elem if _local(child.tag) == name]


def _text(p: Element) -> str:
    """Character data of *p*, nested spans included, ``<br/>`` as a space."""
    parts = [p.text or ""]
    for child in p:
        if _local(child.tag) == "br":
            parts.append(" ")
        else:
            parts.append("".join(child.itertext()))
        parts.append(child.tail or "")
    return "".join(parts)


def _root(document: Document) -> Element:
    try:
        if isinstance(document, (bytes, str)):
            return ElementTree.fromstring(document)
        return ElementTree.parse(document).getroot()
    except (ElementTree.ParseError, DefusedXmlException) as exc:
        raise TTMLParseError(f"failed to decode TTML XML: {exc}") from exc


def iter_paragraphs(document: Document) -> Iterator[Element]:
    """Yield every ``<p>`` under tt/body/div in document order."""
    root = _root(document)
    if _local(root.tag) != "tt":
        raise TTMLParseError(f"expected <tt> root element, got <{_local(root.tag)}>")

    bodies = _children(root, "body")
    if not bodies:
        raise TTMLParseError("TTML document has no <body>")
    divs = _children(bodies[0], "div")
    if not divs:
        raise TTMLParseError("TTML document has no <div>")

    for div in divs:
        yield from _children(div, "p")


def parse_ttml(document: Document) -> list[Segment]:
    """Return the non-empty, well-timed paragraphs of *document* as segments."""
    segments: list[Segment] = []
    for p in iter_paragraphs(document):
        begin, end = p.get("begin", ""), p.get("end", "")
        try:
            start = parse_time(begin)
        except TimeFormatError as exc:
            log.warning("Failed to parse begin time %r: %s", begin, exc)
            continue
        try:
            stop = parse_time(end)
        except TimeFormatError as exc:
            log.warning("Failed to parse end time %r: %s", end, exc)
            continue

        text = _text(p).strip()
        if not text:
            continue
        segments.append(Segment(text=text, start=start, duration=stop - start))
    return segments
