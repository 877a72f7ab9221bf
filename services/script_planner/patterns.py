"""
Pattern and phrase tables for the script planner.
Handles loading of the YAML table that drives segmentation, key-point
extraction and the per-language phrases used in generated scripts.
"""

import logging
import os
import re
from functools import cached_property
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

from shared.config import config
from shared.enums import Language, SourceFormat, Tone

logger = logging.getLogger(__name__)

DEFAULT_PATTERNS_PATH = os.path.join(os.path.dirname(__file__), "config", "patterns.yaml")


class SegmentationPatterns(BaseModel):
    page_break: dict[SourceFormat, str]
    markup: str
    min_presentation_chunk_chars: int = 20
    title_max_chars: int = 50
    default_title: str = "Slide {number}"
    fallback_text: dict[SourceFormat, str]

    @cached_property
    def markup_re(self) -> re.Pattern[str]:
        return re.compile(self.markup)

    def break_re(self, source_format: SourceFormat) -> re.Pattern[str]:
        source_format = SourceFormat(source_format)
        pattern = self.page_break.get(source_format, self.page_break[SourceFormat.GENERIC])
        flags = re.IGNORECASE if source_format == SourceFormat.PPTX else 0
        return re.compile(pattern, flags)

    def default_title_for(self, number: int) -> str:
        return self.default_title.format(number=number)

    def fallback_for(self, source_format: SourceFormat) -> str:
        source_format = SourceFormat(source_format)
        return self.fallback_text.get(source_format, self.fallback_text[SourceFormat.GENERIC])


class ExtractionPatterns(BaseModel):
    bullet: str
    numbered: str
    sentence_terminators: str
    goal_terminators: str
    min_sentence_chars: int = 10
    max_fallback_sentences: int = 3
    max_key_points: int = 5

    @cached_property
    def bullet_re(self) -> re.Pattern[str]:
        return re.compile(self.bullet, re.MULTILINE)

    @cached_property
    def numbered_re(self) -> re.Pattern[str]:
        return re.compile(self.numbered, re.MULTILINE)

    @cached_property
    def sentence_re(self) -> re.Pattern[str]:
        return re.compile(self.sentence_terminators)

    @cached_property
    def goal_re(self) -> re.Pattern[str]:
        return re.compile(self.goal_terminators)


class LanguagePhrases(BaseModel):
    intro: dict[Tone, str]
    placeholder: str
    goal_fallback: str
    transition_in: str
    transition_out: str

    def intro_for(self, tone: Tone) -> str:
        tone = Tone(tone)
        return self.intro.get(tone, self.intro[Tone.POLITE])


class ScriptPatterns(BaseModel):
    """All tables loaded from a patterns YAML file."""

    segmentation: SegmentationPatterns
    extraction: ExtractionPatterns
    languages: dict[Language, LanguagePhrases] = Field(default_factory=dict)

    def phrases(self, language: Language) -> LanguagePhrases:
        language = Language(language)
        if language in self.languages:
            return self.languages[language]
        logger.warning(f"No phrase table for language {language}, using {Language.EN.value}")
        return self.languages[Language.EN]


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        with open(path, encoding="utf-8") as file:
            data = yaml.safe_load(file) or {}
            logger.info(f"Loaded script patterns from {path}")
            return data
    except FileNotFoundError:
        logger.error(f"Pattern file not found: {path}")
        raise
    except yaml.YAMLError as e:
        logger.error(f"Error parsing pattern YAML: {e}")
        raise


def load_patterns(path: str | None = None) -> ScriptPatterns:
    """Load and validate a pattern table; defaults to the bundled one."""
    resolved = Path(path or config.get("patterns_path") or DEFAULT_PATTERNS_PATH)
    return ScriptPatterns.model_validate(_read_yaml(resolved))


_default_patterns: ScriptPatterns | None = None


def get_default_patterns() -> ScriptPatterns:
    """Return the process-wide pattern table, loading it on first use."""
    global _default_patterns
    if _default_patterns is None:
        _default_patterns = load_patterns()
    return _default_patterns
