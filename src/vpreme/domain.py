"""Request-scoped records passed between clients, extractors and handlers."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True)
class VideoMetadata:
    """Normalized video metadata from the Data API ``videos`` resource."""

    video_id: str
    title: str
    description: str
    published_at: str
    duration_seconds: int
    view_count: int = 0
    like_count: int = 0
    comment_count: int = 0


@dataclass(slots=True)
class ExtractedSignals:
    """Hashtags, call-to-action lines and links pulled out of free text."""

    hashtags: list[str] = field(default_factory=list)
    ctas: list[str] = field(default_factory=list)
    links: list[str] = field(default_factory=list)


@dataclass(slots=True)
class AnalysisResult:
    """Metadata plus the completion service's suggestion block."""

    metadata: VideoMetadata
    suggestions: str
