"""Prompt assembly for the analysis and chat completion requests.

The analysis template is sent to the completion model as-is. Its section
order and labels are fixed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Sequence

    from vpreme.domain import ExtractedSignals, VideoMetadata

DESCRIPTION_PREVIEW_CHARS = 300
PROMPT_COMMENT_LIMIT = 10

ANALYSIS_INSTRUCTIONS = (
    "Hook Strength – Is the intro engaging? Suggest improvements.",
    "Pacing & Cuts – Is the pacing effective? Recommend changes.",
    "Loop Potential – Could the video be structured to encourage replays?",
    "Script/Title Optimization – Suggest 1-2 better titles.",
    "Hashtag Use – Are the hashtags relevant and optimized?",
    "CTAs & Links – Highlight any calls to action or promotional links.",
    "Audience Feedback – Summarize recurring themes from comments.",
)

_ANALYSIS_PREAMBLE = (
    "You are a YouTube Shorts expert. Analyze the following video metadata and "
    "real audience comments. Provide structured, actionable feedback with the "
    "following sections:"
)

CHAT_PERSONA = (
    "You are VPREME, a helpful, friendly, witty AI shopping assistant for "
    "Telegram. Greet users warmly and use emojis where appropriate. When asked "
    "for products, search Amazon and present the best options in a concise, "
    "upbeat way. If nothing is found, apologize politely and reassure the user "
    "their request is logged for improvement. If a user asks to track a "
    "product, confirm in a helpful, positive tone. Respond to gratitude with "
    "cheerfulness. If asked about affiliate links, be transparent and "
    "reassuring. Keep responses short, clear, and human-like. Always sound like "
    "a personal shopping assistant, not a generic bot."
)


def _joined_or_none(items: Sequence[str], separator: str) -> str:
    return separator.join(items) if items else "None"


def build_analysis_prompt(
    metadata: VideoMetadata,
    signals: ExtractedSignals,
    comments: Sequence[str],
) -> str:
    """Build the video analysis instruction block.

    Args:
        metadata: Video metadata; the description is cut to 300 characters.
        signals: Hashtags, CTAs and links extracted from title/description.
        comments: Comment sample; only the first 10 are included.

    Returns:
        The prompt text, stripped of surrounding whitespace.
    """
    numbered = "\n".join(
        f"{index}. {instruction}"
        for index, instruction in enumerate(ANALYSIS_INSTRUCTIONS, start=1)
    )
    description = metadata.description[:DESCRIPTION_PREVIEW_CHARS]
    sample = "\n".join(comments[:PROMPT_COMMENT_LIMIT])

    prompt = (
        f"{_ANALYSIS_PREAMBLE}\n\n"
        f"{numbered}\n\n"
        f"Title: {metadata.title}\n"
        f"Description: {description}...\n"
        f"Duration: {metadata.duration_seconds} seconds\n"
        f"Views: {metadata.view_count}\n"
        f"Likes: {metadata.like_count}\n"
        f"Comments: {metadata.comment_count}\n"
        f"Hashtags: {_joined_or_none(signals.hashtags, ' ')}\n"
        f"CTAs: {_joined_or_none(signals.ctas, ', ')}\n"
        f"Links: {_joined_or_none(signals.links, ', ')}\n\n"
        f"Sample Comments:\n"
        f"{sample}"
    )
    return prompt.strip()


def build_chat_messages(
    user_message: str,
    history: Sequence[dict[str, Any]] | None = None,
) -> list[dict[str, Any]]:
    """Persona instruction, then caller history in order, then the new turn."""
    messages: list[dict[str, Any]] = [{"role": "system", "content": CHAT_PERSONA}]
    if history:
        messages.extend(dict(turn) for turn in history)
    messages.append({"role": "user", "content": user_message})
    return messages
