"""Tests for deck text segmentation."""

import pytest

from services.script_planner.patterns import get_default_patterns
from services.script_planner.segmenter import TextSegmenter, detect_source_format
from shared.enums import SourceFormat


def _block(first_line: str, length: int) -> str:
    """A segment of exactly length characters whose first line is first_line."""
    return first_line + "\n" + "あ" * (length - len(first_line) - 1)


@pytest.fixture
def segmenter() -> TextSegmenter:
    return TextSegmenter()


class TestGenericSegmentation:
    def test_blank_line_delimited_segments(self, segmenter: TextSegmenter) -> None:
        blocks = [_block("Introduction", 600), _block("Agenda", 80), _block("X" * 60, 1200)]
        segments = segmenter.segment("\n\n".join(blocks), SourceFormat.GENERIC)

        assert [len(s.text) for s in segments] == [600, 80, 1200]
        assert [s.text for s in segments] == blocks
        assert segments[0].title_guess == "Introduction"
        assert segments[1].title_guess == "Agenda"
        assert segments[2].title_guess == "X" * 50

    def test_segments_are_trimmed(self, segmenter: TextSegmenter) -> None:
        segments = segmenter.segment("\n\n  First slide  \n\n\n\n   Second slide\n  ", "generic")
        assert [s.text for s in segments] == ["First slide", "Second slide"]

    def test_crlf_line_endings(self, segmenter: TextSegmenter) -> None:
        segments = segmenter.segment("Title one\r\nbody\r\n\r\nTitle two\r\nbody", SourceFormat.GENERIC)
        assert [s.title_guess for s in segments] == ["Title one", "Title two"]

    @pytest.mark.parametrize("text", ["", "   ", "\n\n\n\n", " \t\n \n"])
    def test_empty_input_yields_fallback_slide(self, segmenter: TextSegmenter, text: str) -> None:
        segments = segmenter.segment(text, SourceFormat.GENERIC)
        table = get_default_patterns().segmentation

        assert len(segments) == 1
        assert segments[0].text == table.fallback_for(SourceFormat.GENERIC)
        assert segments[0].title_guess == "Slide 1"

    def test_empty_bytes_yield_fallback_slide(self, segmenter: TextSegmenter) -> None:
        segments = segmenter.segment_bytes(b"", SourceFormat.PDF)
        assert len(segments) == 1
        assert "PDF" in segments[0].text


class TestPdfSegmentation:
    def test_form_feed_and_triple_newline_split(self, segmenter: TextSegmenter) -> None:
        text = "Page one\nbody\fPage two\nbody\n\n\nPage three"
        segments = segmenter.segment(text, SourceFormat.PDF)
        assert [s.title_guess for s in segments] == ["Page one", "Page two", "Page three"]

    def test_double_newline_does_not_split(self, segmenter: TextSegmenter) -> None:
        segments = segmenter.segment("Heading\n\nParagraph on the same page", SourceFormat.PDF)
        assert len(segments) == 1
        assert segments[0].title_guess == "Heading"


class TestPresentationSegmentation:
    def test_slide_markers_and_markup(self, segmenter: TextSegmenter) -> None:
        text = (
            "<p:sld><a:t>Quarterly results overview。Revenue   grew</a:t></p:sld>"
            "<p:sld><a:t>Next steps for the team</a:t></p:sld>"
        )
        segments = segmenter.segment(text, SourceFormat.PPTX)

        assert [s.text for s in segments] == [
            "Quarterly results overview。Revenue grew",
            "Next steps for the team",
        ]
        assert segments[0].title_guess == "Quarterly results overview"
        assert segments[1].title_guess == "Next steps for the team"

    def test_markup_only_yields_fallback(self, segmenter: TextSegmenter) -> None:
        segments = segmenter.segment("<p:sld><p:cSld><a:t></a:t></p:cSld></p:sld>", SourceFormat.PPTX)
        assert len(segments) == 1
        assert segments[0].text.startswith("PPTX")

    def test_short_residue_is_dropped(self, segmenter: TextSegmenter) -> None:
        text = "<p:sld>A real slide with enough text</p:sld>tiny</p:sld>"
        segments = segmenter.segment(text, SourceFormat.PPTX)
        assert [s.text for s in segments] == ["A real slide with enough text"]


class TestDetectSourceFormat:
    @pytest.mark.parametrize(
        ("content_type", "url", "expected"),
        [
            ("application/pdf", None, SourceFormat.PDF),
            ("", "https://files.example.com/deck.pdf", SourceFormat.PDF),
            (
                "application/vnd.openxmlformats-officedocument.presentationml.presentation",
                None,
                SourceFormat.PPTX,
            ),
            ("application/octet-stream", "https://files.example.com/deck.pptx", SourceFormat.PPTX),
            ("text/plain", "https://files.example.com/notes.txt", SourceFormat.GENERIC),
            (None, None, SourceFormat.GENERIC),
        ],
    )
    def test_detection(self, content_type, url, expected) -> None:
        assert detect_source_format(content_type, url) == expected
