"""API request/response models.

Wire names are camelCase; Python attributes stay snake_case through
field aliases.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from vpreme.domain import AnalysisResult


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class VideoAnalysisRequest(_CamelModel):
    """Request payload for ``POST /youtube``."""

    video_link: str | None = Field(default=None, alias="videoLink")


class VideoMetadataPayload(_CamelModel):
    """Metadata block returned by ``POST /youtube``."""

    title: str
    published_at: str = Field(alias="publishedAt")
    description: str
    duration_sec: int = Field(alias="durationSec")
    views: int = 0
    likes: int = 0
    comments: int = 0


class VideoAnalysisResponse(_CamelModel):
    """Metadata plus the model's free-text suggestions."""

    metadata: VideoMetadataPayload
    ai_suggestions: str = Field(alias="aiSuggestions")

    @classmethod
    def from_result(cls, result: AnalysisResult) -> VideoAnalysisResponse:
        meta = result.metadata
        return cls(
            metadata=VideoMetadataPayload(
                title=meta.title,
                published_at=meta.published_at,
                description=meta.description,
                duration_sec=meta.duration_seconds,
                views=meta.view_count,
                likes=meta.like_count,
                comments=meta.comment_count,
            ),
            ai_suggestions=result.suggestions,
        )


class ChatTurn(BaseModel):
    """One prior message in a caller-supplied conversation.

    Unknown keys (``name``, ``tool_call_id``, ...) are kept and forwarded.
    """

    model_config = ConfigDict(extra="allow")

    role: str
    content: str | None = None


class ChatRequest(_CamelModel):
    """Request payload for ``POST /chat``."""

    user_message: str = Field(alias="userMessage")
    chat_history: list[ChatTurn] | None = Field(default=None, alias="chatHistory")


class ChatResponse(BaseModel):
    reply: str


class ShortenRequest(BaseModel):
    url: str | None = None


class ShortenResponse(BaseModel):
    original: str | None
    short: str | None


class SearchRequest(BaseModel):
    query: str | None = None


class SearchResponse(BaseModel):
    message: str
    query: str | None


class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    """Uniform error body for every non-2xx response."""

    error: str
    details: str | None = None
