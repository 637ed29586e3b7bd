"""Unit tests for vpreme.extractors - identifiers, durations, hashtags, CTAs."""

from __future__ import annotations

import pytest

from vpreme.extractors import (
    extract_ctas_and_links,
    extract_hashtags,
    extract_signals,
    extract_video_id,
    iso8601_to_seconds,
    merge_hashtags,
)

TOKEN = "aB3_-xYz901"


# ---- extract_video_id --------------------------------------------------------


class TestExtractVideoId:
    """All reference forms normalize to the same 11-character token."""

    @pytest.mark.parametrize(
        "reference",
        [
            f"https://www.youtube.com/shorts/{TOKEN}",
            f"youtube.com/shorts/{TOKEN}?feature=share",
            f"https://www.youtube.com/watch?v={TOKEN}",
            f"http://youtube.com/watch?v={TOKEN}&t=42s",
            TOKEN,
        ],
    )
    def test_reference_forms(self, reference: str) -> None:
        assert extract_video_id(reference) == TOKEN

    @pytest.mark.parametrize(
        "reference",
        [
            "",
            "not a video",
            "short1234",
            f"{TOKEN}X",
            f" {TOKEN}",
            "https://vimeo.com/123456789",
            "https://www.youtube.com/channel/abc",
        ],
    )
    def test_non_matching_returns_none(self, reference: str) -> None:
        assert extract_video_id(reference) is None

    def test_shorts_pattern_wins_over_watch(self) -> None:
        reference = "https://youtube.com/shorts/AAAAAAAAAAA?next=watch?v=BBBBBBBBBBB"
        assert extract_video_id(reference) == "AAAAAAAAAAA"


# ---- iso8601_to_seconds ------------------------------------------------------


class TestIso8601ToSeconds:
    """Durations decode to whole seconds and never raise."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("PT1H2M3S", 3723),
            ("PT5M", 300),
            ("PT45S", 45),
            ("PT2H", 7200),
            ("PT", 0),
        ],
    )
    def test_valid_durations(self, value: str, expected: int) -> None:
        assert iso8601_to_seconds(value) == expected

    @pytest.mark.parametrize("value", ["garbage", "1H2M", "", None])
    def test_malformed_is_zero(self, value: str | None) -> None:
        assert iso8601_to_seconds(value) == 0


# ---- hashtags ----------------------------------------------------------------


class TestHashtags:
    def test_extract_in_order(self) -> None:
        assert extract_hashtags("Great day #fun #Fun and #day_2!") == [
            "#fun",
            "#Fun",
            "#day_2",
        ]

    def test_no_match_is_empty(self) -> None:
        assert extract_hashtags("nothing here # at all") == []
        assert extract_hashtags("") == []

    def test_merge_is_case_sensitive(self) -> None:
        merged = merge_hashtags("Great day #fun #Fun", "#fun stuff")
        assert set(merged) == {"#fun", "#Fun"}
        assert len(merged) == 2

    def test_merge_keeps_first_seen_order(self) -> None:
        assert merge_hashtags("#b #a", "#c #a") == ["#b", "#a", "#c"]


# ---- CTAs and links ----------------------------------------------------------


class TestCtasAndLinks:
    def test_two_line_example(self) -> None:
        links, ctas = extract_ctas_and_links(
            "Check out my site https://a.com\nNo CTA here"
        )
        assert links == ["https://a.com"]
        assert ctas == ["Check out my site https://a.com"]

    def test_links_without_cta(self) -> None:
        links, ctas = extract_ctas_and_links(
            "Gear: http://x.io/a https://y.io/b\nmore at https://z.io"
        )
        assert links == ["http://x.io/a", "https://y.io/b", "https://z.io"]
        assert ctas == []

    def test_cta_lines_are_stripped_and_case_insensitive(self) -> None:
        _, ctas = extract_ctas_and_links("   SUBSCRIBE now  \nplain\n\tVisit us\t")
        assert ctas == ["SUBSCRIBE now", "Visit us"]

    def test_keyword_matches_inside_words(self) -> None:
        _, ctas = extract_ctas_and_links("I'd likely return")
        assert ctas == ["I'd likely return"]

    def test_empty_text(self) -> None:
        assert extract_ctas_and_links("") == ([], [])


def test_extract_signals_combines_title_and_description() -> None:
    signals = extract_signals(
        "Routine #shorts",
        "#shorts #Morning\nFollow me https://insta.example/me",
    )
    assert signals.hashtags == ["#shorts", "#Morning"]
    assert signals.links == ["https://insta.example/me"]
    assert signals.ctas == ["Follow me https://insta.example/me"]
