"""YouTube Data API v3 client for video metadata and comment threads."""

from __future__ import annotations

from typing import Any

import httpx
import structlog

from vpreme.domain import VideoMetadata
from vpreme.exceptions import DownstreamError
from vpreme.extractors import iso8601_to_seconds

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

_COMMENT_PAGE_LIMIT = 100


def _as_int(value: Any) -> int:
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        return 0


def _failure_detail(exc: Exception) -> str:
    """Status line for HTTP errors, exception type otherwise. Never the URL."""
    if isinstance(exc, httpx.HTTPStatusError):
        response = exc.response
        return f"{response.status_code} {response.reason_phrase}".strip()
    return type(exc).__name__


def parse_video_item(item: dict[str, Any]) -> VideoMetadata:
    """Build ``VideoMetadata`` from one ``videos.list`` item."""
    snippet = item.get("snippet") or {}
    statistics = item.get("statistics") or {}
    content_details = item.get("contentDetails") or {}
    return VideoMetadata(
        video_id=str(item.get("id", "")),
        title=str(snippet.get("title", "")),
        description=str(snippet.get("description", "")),
        published_at=str(snippet.get("publishedAt", "")),
        duration_seconds=iso8601_to_seconds(content_details.get("duration")),
        view_count=_as_int(statistics.get("viewCount")),
        like_count=_as_int(statistics.get("likeCount")),
        comment_count=_as_int(statistics.get("commentCount")),
    )


class YouTubeDataClient:
    """Look up videos and their top-level comments by identifier."""

    def __init__(
        self,
        api_key: str | None,
        base_url: str = "https://www.googleapis.com/youtube/v3",
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._api_key = api_key
        self._client = client or httpx.AsyncClient(base_url=base_url, timeout=timeout)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _get(self, path: str, params: dict[str, Any]) -> dict[str, Any]:
        # Key goes in a header, never in the URL.
        headers = {"X-Goog-Api-Key": self._api_key or ""}
        try:
            response = await self._client.get(path, params=params, headers=headers)
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise DownstreamError(
                f"YouTube request to {path} failed", details=_failure_detail(exc)
            ) from exc
        if not isinstance(payload, dict):
            raise DownstreamError(f"YouTube returned a non-object payload for {path}")
        return payload

    async def fetch_video(self, video_id: str) -> VideoMetadata | None:
        """Return metadata for ``video_id`` or ``None`` when it does not exist."""
        payload = await self._get(
            "/videos",
            {"part": "snippet,statistics,contentDetails", "id": video_id},
        )
        items = payload.get("items") or []
        if not isinstance(items, list) or not items:
            logger.info("youtube_video_missing", video_id=video_id)
            return None
        return parse_video_item(items[0])

    async def fetch_comments(self, video_id: str, max_comments: int = 30) -> list[str]:
        """Return up to ``max_comments`` plain-text top-level comment bodies."""
        payload = await self._get(
            "/commentThreads",
            {
                "part": "snippet",
                "videoId": video_id,
                "maxResults": min(max_comments, _COMMENT_PAGE_LIMIT),
                "textFormat": "plainText",
            },
        )
        comments: list[str] = []
        for item in payload.get("items") or []:
            try:
                text = item["snippet"]["topLevelComment"]["snippet"]["textDisplay"]
            except (KeyError, TypeError) as exc:
                raise DownstreamError(
                    "Malformed comment thread payload", details=str(exc)
                ) from exc
            comments.append(str(text))
        logger.debug("youtube_comments_fetched", video_id=video_id, count=len(comments))
        return comments[:max_comments]
