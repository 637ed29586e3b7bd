"""Shared pytest fixtures for the vpreme test suite."""

from __future__ import annotations

from typing import Any

import pytest

from vpreme.domain import VideoMetadata
from vpreme.exceptions import DownstreamError

VIDEO_ID = "dQw4w9WgXcQ"


# ---------------------------------------------------------------------------
# Provider payloads
# ---------------------------------------------------------------------------


@pytest.fixture()
def video_item() -> dict[str, Any]:
    """Return one ``videos.list`` item as the Data API serves it."""
    return {
        "id": VIDEO_ID,
        "snippet": {
            "title": "Morning routine #shorts #Fun",
            "description": (
                "Quick routine for busy days #fun\n"
                "Subscribe for more!\n"
                "Check out my gear https://example.com/gear\n"
                "Filmed on location"
            ),
            "publishedAt": "2024-05-01T12:00:00Z",
        },
        "statistics": {"viewCount": "1500", "likeCount": "120", "commentCount": "14"},
        "contentDetails": {"duration": "PT45S"},
    }


@pytest.fixture()
def sample_metadata() -> VideoMetadata:
    return VideoMetadata(
        video_id=VIDEO_ID,
        title="Morning routine #shorts",
        description="Quick routine for busy days",
        published_at="2024-05-01T12:00:00Z",
        duration_seconds=45,
        view_count=1500,
        like_count=120,
        comment_count=14,
    )


# ---------------------------------------------------------------------------
# Fake collaborators
# ---------------------------------------------------------------------------


class FakeYouTube:
    """In-memory stand-in for ``YouTubeDataClient``."""

    def __init__(
        self,
        metadata: VideoMetadata | None = None,
        comments: list[str] | None = None,
        *,
        video_error: Exception | None = None,
        comments_error: Exception | None = None,
    ) -> None:
        self.metadata = metadata
        self.comments = comments or []
        self.video_error = video_error
        self.comments_error = comments_error
        self.video_calls: list[str] = []
        self.comment_calls: list[tuple[str, int]] = []
        self.closed = False

    async def fetch_video(self, video_id: str) -> VideoMetadata | None:
        self.video_calls.append(video_id)
        if self.video_error is not None:
            raise self.video_error
        return self.metadata

    async def fetch_comments(self, video_id: str, max_comments: int = 30) -> list[str]:
        self.comment_calls.append((video_id, max_comments))
        if self.comments_error is not None:
            raise self.comments_error
        return self.comments[:max_comments]

    async def aclose(self) -> None:
        self.closed = True


class FakeCompletion:
    """Records submitted messages and returns a canned reply."""

    model = "fake/model"

    def __init__(self, reply: str = "Great hook.", error: Exception | None = None) -> None:
        self.reply = reply
        self.error = error
        self.calls: list[dict[str, Any]] = []

    async def complete(
        self,
        messages: list[dict[str, str]],
        *,
        max_tokens: int,
        temperature: float,
    ) -> str:
        self.calls.append(
            {"messages": messages, "max_tokens": max_tokens, "temperature": temperature}
        )
        if self.error is not None:
            raise self.error
        return self.reply


class FakeShortener:
    def __init__(self, link: str = "https://bit.ly/abc", fail: bool = False) -> None:
        self.link = link
        self.fail = fail
        self.calls: list[str] = []
        self.closed = False

    async def shorten(self, long_url: str) -> str:
        self.calls.append(long_url)
        if self.fail:
            raise DownstreamError("Bitly request failed", details="503")
        return self.link

    async def aclose(self) -> None:
        self.closed = True


@pytest.fixture()
def fake_youtube(sample_metadata: VideoMetadata) -> FakeYouTube:
    return FakeYouTube(
        sample_metadata,
        comments=[f"comment {i}" for i in range(1, 16)],
    )


@pytest.fixture()
def fake_completion() -> FakeCompletion:
    return FakeCompletion()


@pytest.fixture()
def fake_shortener() -> FakeShortener:
    return FakeShortener()


@pytest.fixture()
def youtube_factory() -> type[FakeYouTube]:
    """Return the fake client class for tests that need custom failures."""
    return FakeYouTube


@pytest.fixture()
def completion_factory() -> type[FakeCompletion]:
    return FakeCompletion


@pytest.fixture()
def shortener_factory() -> type[FakeShortener]:
    return FakeShortener
