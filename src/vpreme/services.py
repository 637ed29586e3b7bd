"""Request handlers that orchestrate the external collaborators.

Handlers hold no per-request state; everything they need is passed in
through ``ServiceHandles``, built once at startup and closed at shutdown.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import structlog

from vpreme.clients import BitlyShortener, CompletionClient, YouTubeDataClient
from vpreme.domain import AnalysisResult
from vpreme.exceptions import ClientInputError, DownstreamError, NotFoundError
from vpreme.extractors import extract_signals, extract_video_id
from vpreme.prompts import build_analysis_prompt, build_chat_messages

if TYPE_CHECKING:
    from collections.abc import Sequence

    from vpreme.config import Settings
    from vpreme.domain import VideoMetadata

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


@dataclass(slots=True)
class ServiceHandles:
    """Process-lifetime collaborator clients."""

    youtube: YouTubeDataClient
    completion: CompletionClient
    shortener: BitlyShortener

    @classmethod
    def from_settings(cls, settings: Settings) -> ServiceHandles:
        return cls(
            youtube=YouTubeDataClient(
                settings.youtube.api_key,
                base_url=settings.youtube.base_url,
                timeout=settings.youtube.timeout,
            ),
            completion=CompletionClient(
                settings.llm.model,
                api_key=settings.llm.api_key,
                timeout=settings.llm.timeout,
            ),
            shortener=BitlyShortener(
                settings.shortener.token,
                base_url=settings.shortener.base_url,
                timeout=settings.shortener.timeout,
            ),
        )

    async def aclose(self) -> None:
        await asyncio.gather(self.youtube.aclose(), self.shortener.aclose())


# ---------------------------------------------------------------------------
# Video analysis
# ---------------------------------------------------------------------------


class VideoAnalysisHandler:
    """Fetch a video, mine its text, and ask the completion model for feedback."""

    def __init__(
        self,
        youtube: YouTubeDataClient,
        completion: CompletionClient,
        *,
        max_comments: int = 30,
        max_tokens: int = 600,
        temperature: float = 0.7,
    ) -> None:
        self._youtube = youtube
        self._completion = completion
        self._max_comments = max_comments
        self._max_tokens = max_tokens
        self._temperature = temperature

    async def _comments_best_effort(self, video_id: str) -> list[str]:
        try:
            return await self._youtube.fetch_comments(video_id, self._max_comments)
        except Exception as exc:
            logger.warning("comments_unavailable", video_id=video_id, error=str(exc))
            return []

    async def _fetch(self, video_id: str) -> tuple[VideoMetadata | None, list[str]]:
        metadata, comments = await asyncio.gather(
            self._youtube.fetch_video(video_id),
            self._comments_best_effort(video_id),
        )
        return metadata, comments

    async def analyze(self, reference: str | None) -> AnalysisResult:
        """Run the full analysis for a URL or bare identifier.

        Raises:
            ClientInputError: ``reference`` holds no video identifier.
            NotFoundError: The video does not exist.
            DownstreamError: Metadata lookup, prompt building or the
                completion call failed.
        """
        video_id = extract_video_id(reference or "")
        if video_id is None:
            raise ClientInputError("Invalid YouTube URL or ID.")

        try:
            metadata, comments = await self._fetch(video_id)
            if metadata is None:
                raise NotFoundError("Video not found.")

            signals = extract_signals(metadata.title, metadata.description)
            prompt = build_analysis_prompt(metadata, signals, comments)
            logger.info(
                "analysis_prompt_built",
                video_id=video_id,
                comments=len(comments),
                hashtags=len(signals.hashtags),
                ctas=len(signals.ctas),
                links=len(signals.links),
            )

            suggestions = await self._completion.complete(
                [{"role": "system", "content": prompt}],
                max_tokens=self._max_tokens,
                temperature=self._temperature,
            )
        except NotFoundError:
            raise
        except Exception as exc:
            raise DownstreamError(
                "Failed to analyze video.", details=_describe(exc)
            ) from exc

        return AnalysisResult(metadata=metadata, suggestions=suggestions)


# ---------------------------------------------------------------------------
# Chat assistant
# ---------------------------------------------------------------------------


class ChatHandler:
    """Forward a conversation to the completion model behind a fixed persona."""

    def __init__(
        self,
        completion: CompletionClient,
        *,
        max_tokens: int = 300,
        temperature: float = 0.8,
    ) -> None:
        self._completion = completion
        self._max_tokens = max_tokens
        self._temperature = temperature

    async def reply(
        self,
        user_message: str,
        history: Sequence[dict[str, Any]] | None = None,
    ) -> str:
        messages = build_chat_messages(user_message, history)
        try:
            return await self._completion.complete(
                messages,
                max_tokens=self._max_tokens,
                temperature=self._temperature,
            )
        except Exception as exc:
            raise DownstreamError("OpenAI error.", details=_describe(exc)) from exc


# ---------------------------------------------------------------------------
# Link shortening
# ---------------------------------------------------------------------------


class ShortenHandler:
    """Best-effort link shortening; the input comes back on any failure."""

    def __init__(self, shortener: BitlyShortener) -> None:
        self._shortener = shortener

    async def shorten(self, url: str | None) -> str | None:
        if not url:
            return url
        try:
            return await self._shortener.shorten(url)
        except Exception as exc:
            logger.warning("shorten_fallback", url=url, error=str(exc))
            return url


def _describe(exc: Exception) -> str:
    if isinstance(exc, DownstreamError) and exc.details:
        return f"{exc.message}: {exc.details}"
    return str(exc)
