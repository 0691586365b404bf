"""Video URL parsing and embed markup."""

from __future__ import annotations

import re
from urllib.parse import parse_qs, urlparse

from text_macros.buffer.state import Position
from text_macros.buffer.sync import BufferHost
from text_macros.runtime import telemetry

from .errors import UnparsableIdentifier

_VIDEO_ID = re.compile(r"^[A-Za-z0-9_-]{11}$")
_PATH_PREFIXES = ("embed", "shorts", "v", "live")
_SHORT_HOSTS = {"youtu.be", "www.youtu.be"}
_YOUTUBE_DOMAINS = ("youtube.com", "youtube-nocookie.com")

EMBED_TEMPLATE = (
    '<iframe width="{width}" height="{height}" '
    'src="https://www.youtube.com/embed/{video_id}" '
    'title="YouTube video player" frameborder="0" allowfullscreen></iframe>'
)


def _is_youtube_host(host: str) -> bool:
    return any(
        host == domain or host.endswith(f".{domain}") for domain in _YOUTUBE_DOMAINS
    )


def extract_video_id(url: str) -> str:
    raw = url.strip()
    if _VIDEO_ID.match(raw):
        return raw

    try:
        parsed = urlparse(raw if "//" in raw else f"https://{raw}")
        host = (parsed.hostname or "").lower()
    except ValueError:
        raise UnparsableIdentifier(url) from None
    segments = [segment for segment in parsed.path.split("/") if segment]

    candidate = None
    if host in _SHORT_HOSTS:
        candidate = segments[0] if segments else None
    elif _is_youtube_host(host):
        if segments[:1] == ["watch"]:
            candidate = parse_qs(parsed.query).get("v", [None])[0]
        elif len(segments) >= 2 and segments[0] in _PATH_PREFIXES:
            candidate = segments[1]

    if candidate and _VIDEO_ID.match(candidate):
        return candidate
    raise UnparsableIdentifier(url)


def embed_markup(video_id: str, *, width: int = 560, height: int = 315) -> str:
    return EMBED_TEMPLATE.format(width=width, height=height, video_id=video_id)


def insert_video_embed(
    buffer: BufferHost,
    position: Position,
    url: str,
    *,
    width: int = 560,
    height: int = 315,
) -> str:
    video_id = extract_video_id(url)
    text = embed_markup(video_id, width=width, height=height)
    with telemetry.span(
        "transform::video_embed",
        metadata={"video_id": video_id},
    ):
        buffer.insert_text(position, text)
    return text


__all__ = ["extract_video_id", "embed_markup", "insert_video_embed"]
