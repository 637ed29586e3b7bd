"""Unit tests for vpreme.prompts - analysis template and chat messages."""

from __future__ import annotations

import re
from dataclasses import replace
from typing import TYPE_CHECKING

from vpreme.domain import ExtractedSignals
from vpreme.prompts import (
    CHAT_PERSONA,
    build_analysis_prompt,
    build_chat_messages,
)

if TYPE_CHECKING:
    from vpreme.domain import VideoMetadata

_NUMBERED_RE = re.compile(r"^\d+\. ", re.MULTILINE)


def _comments_section(prompt: str) -> list[str]:
    _, _, tail = prompt.partition("Sample Comments:\n")
    return [line for line in tail.split("\n") if line]


class TestBuildAnalysisPrompt:
    """The analysis prompt follows a fixed section template."""

    def test_exactly_seven_instructions(self, sample_metadata: VideoMetadata) -> None:
        prompt = build_analysis_prompt(sample_metadata, ExtractedSignals(), [])
        numbered = _NUMBERED_RE.findall(prompt)
        assert len(numbered) == 7
        assert "1. Hook Strength" in prompt
        assert "7. Audience Feedback" in prompt

    def test_comments_capped_at_ten(self, sample_metadata: VideoMetadata) -> None:
        comments = [f"c{i}" for i in range(25)]
        prompt = build_analysis_prompt(sample_metadata, ExtractedSignals(), comments)
        assert _comments_section(prompt) == [f"c{i}" for i in range(10)]

    def test_empty_signals_render_none(self, sample_metadata: VideoMetadata) -> None:
        prompt = build_analysis_prompt(sample_metadata, ExtractedSignals(), [])
        assert "Hashtags: None" in prompt
        assert "CTAs: None" in prompt
        assert "Links: None" in prompt
        assert prompt.endswith("Sample Comments:")

    def test_signal_joiners(self, sample_metadata: VideoMetadata) -> None:
        signals = ExtractedSignals(
            hashtags=["#a", "#B"],
            ctas=["Subscribe!", "Buy now"],
            links=["https://a.com", "https://b.com"],
        )
        prompt = build_analysis_prompt(sample_metadata, signals, ["nice"])
        assert "Hashtags: #a #B" in prompt
        assert "CTAs: Subscribe!, Buy now" in prompt
        assert "Links: https://a.com, https://b.com" in prompt

    def test_metadata_block(self, sample_metadata: VideoMetadata) -> None:
        prompt = build_analysis_prompt(sample_metadata, ExtractedSignals(), [])
        assert "Title: Morning routine #shorts\n" in prompt
        assert "Description: Quick routine for busy days...\n" in prompt
        assert "Duration: 45 seconds\n" in prompt
        assert "Views: 1500\nLikes: 120\nComments: 14\n" in prompt

    def test_description_truncated_to_300(self, sample_metadata: VideoMetadata) -> None:
        metadata = replace(sample_metadata, description="x" * 500)
        prompt = build_analysis_prompt(metadata, ExtractedSignals(), [])
        assert f"Description: {'x' * 300}...\n" in prompt
        assert "x" * 301 not in prompt

    def test_section_order(self, sample_metadata: VideoMetadata) -> None:
        prompt = build_analysis_prompt(sample_metadata, ExtractedSignals(), ["hi"])
        labels = [
            "You are a YouTube Shorts expert.",
            "1. Hook Strength",
            "7. Audience Feedback",
            "Title:",
            "Description:",
            "Duration:",
            "Views:",
            "Likes:",
            "Hashtags:",
            "CTAs:",
            "Links:",
            "Sample Comments:",
        ]
        positions = [prompt.index(label) for label in labels]
        assert positions == sorted(positions)
        assert prompt == prompt.strip()


class TestBuildChatMessages:
    def test_persona_first_then_user(self) -> None:
        messages = build_chat_messages("hello")
        assert messages == [
            {"role": "system", "content": CHAT_PERSONA},
            {"role": "user", "content": "hello"},
        ]

    def test_history_inserted_in_order(self) -> None:
        history = [
            {"role": "user", "content": "find headphones"},
            {"role": "assistant", "content": "Here are three picks"},
        ]
        messages = build_chat_messages("cheaper?", history)
        assert [m["content"] for m in messages] == [
            CHAT_PERSONA,
            "find headphones",
            "Here are three picks",
            "cheaper?",
        ]

    def test_history_is_copied(self) -> None:
        history = [{"role": "user", "content": "hi"}]
        messages = build_chat_messages("again", history)
        messages[1]["content"] = "changed"
        assert history[0]["content"] == "hi"
