"""Heuristic script skeletons and time estimates for slides."""

from shared.config import config
from shared.enums import SlideFlag
from shared.models import AllocationResult, ProjectSettings, ProjectSnapshot, Slide, SlideScript
from shared.utils import clamp, round_half_up, setup_logging

from .allocator import TimingAllocator
from .flags import dense_threshold, manual_flags
from .patterns import ScriptPatterns, get_default_patterns

logger = setup_logging("script-synthesizer")

# Calibration: about 150 characters of spoken Japanese fit in 30 seconds.
CHARS_PER_30_SECONDS = 150

GOAL_MAX_CHARS = 50
GOAL_TRUNCATED_CHARS = 47
TALK_TRACK_EXCERPT_CHARS = 200


def chars_per_30_seconds() -> int:
    return int(config.get("chars_per_30_seconds", CHARS_PER_30_SECONDS))


def estimate_seconds(char_count: int) -> int:
    """Estimate speaking time for char_count characters, bounded to the estimate range."""
    lower = int(config.get_pipeline_value("synthesis.min_estimate_seconds", 15))
    upper = int(config.get_pipeline_value("synthesis.max_estimate_seconds", 120))
    return clamp(round_half_up(char_count / chars_per_30_seconds() * 30), lower, upper)


def timing_bounds(estimated: int) -> tuple[int, int]:
    """Return (min_seconds, max_seconds) around an estimate."""
    floor = int(config.get_pipeline_value("synthesis.floor_seconds", 10))
    ceiling = int(config.get_pipeline_value("synthesis.ceiling_seconds", 180))
    return max(floor, round_half_up(estimated * 0.5)), min(ceiling, round_half_up(estimated * 2))


class ScriptSynthesizer:
    """Fill each slide's script and timing from its raw text."""

    def __init__(
        self,
        patterns: ScriptPatterns | None = None,
        allocator: TimingAllocator | None = None,
    ):
        self.patterns = patterns or get_default_patterns()
        self.allocator = allocator or TimingAllocator()

    def extract_goal(self, text: str, title_guess: str, settings: ProjectSettings) -> str:
        first = self.patterns.extraction.goal_re.split(text, maxsplit=1)[0].strip()
        if len(first) > GOAL_MAX_CHARS:
            return first[:GOAL_TRUNCATED_CHARS] + "..."
        if not first:
            return self.patterns.phrases(settings.language).goal_fallback.format(title=title_guess)
        return first

    def build_talk_track(self, text: str, settings: ProjectSettings) -> str:
        phrases = self.patterns.phrases(settings.language)
        intro = phrases.intro_for(settings.tone)
        return f"{intro}\n\n{text[:TALK_TRACK_EXCERPT_CHARS]}\n\n{phrases.placeholder}"

    def extract_key_points(self, text: str) -> list[str]:
        """Collect bullet and numbered items, falling back to leading sentences."""
        table = self.patterns.extraction
        points: list[str] = []
        for pattern in (table.bullet_re, table.numbered_re):
            for match in pattern.finditer(text):
                point = match.group(1).strip()
                if point:
                    points.append(point)

        if not points:
            sentences = [s.strip() for s in table.sentence_re.split(text)]
            points = [s for s in sentences if len(s) > table.min_sentence_chars][: table.max_fallback_sentences]

        return points[: table.max_key_points]

    def synthesize_slide(self, slide: Slide, settings: ProjectSettings, slide_count: int) -> Slide:
        """Populate one slide's script, timing and provisional flags in place."""
        text = slide.raw.text
        char_count = len(text)
        estimated = estimate_seconds(char_count)
        min_seconds, max_seconds = timing_bounds(estimated)

        slide.timing.seconds = estimated
        slide.timing.min_seconds = min_seconds
        slide.timing.max_seconds = max_seconds

        phrases = self.patterns.phrases(settings.language)
        slide.script = SlideScript(
            goal=self.extract_goal(text, slide.title_guess, settings),
            talk_track=self.build_talk_track(text, settings),
            key_points=self.extract_key_points(text),
            transition_in=None if slide.index == 0 else phrases.transition_in,
            transition_out=None if slide.index == slide_count - 1 else phrases.transition_out,
        )

        # provisional until the allocator and flag evaluator run
        flags: list[SlideFlag] = []
        if char_count > dense_threshold():
            flags.append(SlideFlag.DENSE)
        if estimated < int(config.get_pipeline_value("synthesis.provisional_too_short_seconds", 15)):
            flags.append(SlideFlag.TOO_SHORT)
        if estimated > int(config.get_pipeline_value("synthesis.provisional_too_long_seconds", 90)):
            flags.append(SlideFlag.TOO_LONG)
        slide.flags = flags + manual_flags(slide.flags)

        logger.debug(f"Slide {slide.index}: {char_count} chars, estimated {estimated}s")
        return slide

    def synthesize_all(self, snapshot: ProjectSnapshot) -> AllocationResult:
        """Synthesize every slide, then rebalance once and recompute stats."""
        settings = snapshot.project.settings
        for slide in snapshot.slides:
            self.synthesize_slide(slide, settings, len(snapshot.slides))

        result = self.allocator.allocate(snapshot)
        logger.info(f"Synthesized scripts for {len(snapshot.slides)} slides")
        return result
