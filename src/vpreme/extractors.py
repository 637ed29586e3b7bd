"""Text extractors for video references, durations, hashtags and CTAs."""

from __future__ import annotations

import re

from vpreme.domain import ExtractedSignals

# URL forms are searched anywhere in the input; the bare token must be the
# whole input. Order matters.
_URL_ID_PATTERNS = (
    re.compile(r"(?:https?://)?(?:www\.)?youtube\.com/shorts/([a-zA-Z0-9_-]{11})"),
    re.compile(r"(?:https?://)?(?:www\.)?youtube\.com/watch\?v=([a-zA-Z0-9_-]{11})"),
)
_BARE_ID_RE = re.compile(r"[a-zA-Z0-9_-]{11}")

_DURATION_RE = re.compile(r"PT(?:(\d+)H)?(?:(\d+)M)?(?:(\d+)S)?")
_HASHTAG_RE = re.compile(r"#\w+", re.ASCII)
_LINK_RE = re.compile(r"https?://\S+")

CTA_KEYWORDS = ("subscribe", "follow", "like", "share", "check out", "buy", "visit")


def extract_video_id(reference: str) -> str | None:
    """Return the 11-character video identifier in ``reference``.

    Accepts ``youtube.com/shorts/<id>`` and ``youtube.com/watch?v=<id>``
    URLs (scheme and ``www.`` optional) or a bare identifier. Returns
    ``None`` when nothing matches.
    """
    for pattern in _URL_ID_PATTERNS:
        match = pattern.search(reference)
        if match:
            return match.group(1)
    match = _BARE_ID_RE.fullmatch(reference)
    if match:
        return match.group(0)
    return None


def iso8601_to_seconds(value: str | None) -> int:
    """Decode a ``PT#H#M#S`` duration into whole seconds.

    Missing components count as zero. Anything unparseable decodes to 0.
    """
    if not value:
        return 0
    match = _DURATION_RE.search(value)
    if match is None:
        return 0
    hours, minutes, seconds = (int(group or 0) for group in match.groups())
    return hours * 3600 + minutes * 60 + seconds


def extract_hashtags(text: str) -> list[str]:
    """Return every ``#word`` token in ``text``, in order of appearance."""
    return _HASHTAG_RE.findall(text or "")


def merge_hashtags(*texts: str) -> list[str]:
    """Hashtags across ``texts`` with case-sensitive duplicates removed."""
    merged: dict[str, None] = {}
    for text in texts:
        for tag in extract_hashtags(text):
            merged.setdefault(tag, None)
    return list(merged)


def extract_ctas_and_links(text: str) -> tuple[list[str], list[str]]:
    """Scan ``text`` line by line for links and call-to-action lines.

    Returns:
        ``(links, ctas)``, each in source line order. A line holding both
        a URL and a CTA keyword contributes to both lists.
    """
    links: list[str] = []
    ctas: list[str] = []
    for line in (text or "").split("\n"):
        links.extend(_LINK_RE.findall(line))
        lowered = line.lower()
        if any(keyword in lowered for keyword in CTA_KEYWORDS):
            ctas.append(line.strip())
    return links, ctas


def extract_signals(title: str, description: str) -> ExtractedSignals:
    """Hashtags from title and description; CTAs and links from the description."""
    links, ctas = extract_ctas_and_links(description)
    return ExtractedSignals(
        hashtags=merge_hashtags(title, description),
        ctas=ctas,
        links=links,
    )
