"""Split decoded deck text into slide-sized segments."""

from shared.enums import SourceFormat
from shared.file_utils import decode_text
from shared.models import Segment
from shared.utils import setup_logging, truncate

from .patterns import ScriptPatterns, get_default_patterns

logger = setup_logging("text-segmenter")


def detect_source_format(content_type: str | None, url: str | None = None) -> SourceFormat:
    """Guess the source format from an HTTP content type and the download URL."""
    content_type = (content_type or "").lower()
    url = (url or "").lower()

    if "pdf" in content_type or ".pdf" in url:
        return SourceFormat.PDF
    if (
        "presentation" in content_type
        or "powerpoint" in content_type
        or ".pptx" in url
    ):
        return SourceFormat.PPTX
    return SourceFormat.GENERIC


class TextSegmenter:
    """Best-effort segmentation of deck text into slides.

    Segmentation never raises on malformed input: when nothing usable is
    found a single placeholder segment asking for manual input is returned.
    """

    def __init__(self, patterns: ScriptPatterns | None = None):
        self.patterns = patterns or get_default_patterns()

    @property
    def _table(self):
        return self.patterns.segmentation

    def segment_bytes(self, data: bytes, source_format: SourceFormat) -> list[Segment]:
        """Decode raw deck bytes and segment them."""
        return self.segment(decode_text(data), source_format)

    def segment(self, text: str, source_format: SourceFormat) -> list[Segment]:
        """Split text into ordered segments according to the source format."""
        source_format = SourceFormat(source_format)
        text = text.replace("\r\n", "\n").replace("\r", "\n")

        if source_format == SourceFormat.PPTX:
            segments = self._segment_presentation(text)
        else:
            segments = self._segment_document(text, source_format)

        if not segments:
            logger.warning(f"No segments found in {source_format.value} text, using placeholder slide")
            return [
                Segment(
                    text=self._table.fallback_for(source_format),
                    title_guess=self._table.default_title_for(1),
                )
            ]

        logger.info(f"Segmented {source_format.value} text into {len(segments)} slides")
        return segments

    def _segment_document(self, text: str, source_format: SourceFormat) -> list[Segment]:
        chunks = [chunk.strip() for chunk in self._table.break_re(source_format).split(text)]
        chunks = [chunk for chunk in chunks if chunk]
        return [
            Segment(text=chunk, title_guess=self._first_line_title(chunk, number))
            for number, chunk in enumerate(chunks, 1)
        ]

    def _segment_presentation(self, text: str) -> list[Segment]:
        min_chars = self._table.min_presentation_chunk_chars
        # short chunks between end-of-slide markers are container residue
        chunks = [
            chunk
            for chunk in self._table.break_re(SourceFormat.PPTX).split(text)
            if len(chunk.strip()) > min_chars
        ]

        segments: list[Segment] = []
        for chunk in chunks:
            cleaned = " ".join(self._table.markup_re.sub(" ", chunk).split())
            if not cleaned:
                continue
            number = len(segments) + 1
            segments.append(Segment(text=cleaned, title_guess=self._first_sentence_title(cleaned, number)))
        return segments

    def _first_line_title(self, chunk: str, number: int) -> str:
        for line in chunk.split("\n"):
            line = line.strip()
            if line:
                return truncate(line, self._table.title_max_chars)
        return self._table.default_title_for(number)

    def _first_sentence_title(self, chunk: str, number: int) -> str:
        sentence_re = self.patterns.extraction.sentence_re
        for sentence in sentence_re.split(chunk):
            sentence = sentence.strip()
            if sentence:
                return truncate(sentence, self._table.title_max_chars)
        return self._table.default_title_for(number)
