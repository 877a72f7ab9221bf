"""Derived slide flags and project stats."""

from shared.config import config
from shared.enums import MANUAL_FLAGS, SlideFlag
from shared.models import ProjectSettings, ProjectSnapshot, ProjectStats, Slide, SlideTiming


def dense_threshold() -> int:
    """Raw text length above which a slide counts as dense."""
    return int(config.get_pipeline_value("flags.dense_chars", 500))


def manual_flags(flags: list[SlideFlag]) -> list[SlideFlag]:
    """Hand-set tags in first-seen order, each kept once."""
    return list(dict.fromkeys(flag for flag in flags if flag in MANUAL_FLAGS))


def evaluate_flags(timing: SlideTiming, raw_text: str) -> list[SlideFlag]:
    """Compute the automatic flags for one slide from its timing and raw text."""
    flags: list[SlideFlag] = []
    if timing.seconds < timing.min_seconds:
        flags.append(SlideFlag.TOO_SHORT)
    if timing.seconds > timing.max_seconds:
        flags.append(SlideFlag.TOO_LONG)
    if len(raw_text) > dense_threshold():
        flags.append(SlideFlag.DENSE)
    return flags


def compute_stats(slides: list[Slide], settings: ProjectSettings) -> ProjectStats:
    allocated = sum(slide.timing.seconds for slide in slides)
    return ProjectStats(
        slide_count=len(slides),
        allocated_seconds=allocated,
        over_by_seconds=max(0, allocated - settings.available_seconds),
    )


class FlagEvaluator:
    """Recomputes every slide's flags and the project stats after a mutation."""

    def recompute(self, snapshot: ProjectSnapshot) -> ProjectSnapshot:
        for slide in snapshot.slides:
            slide.flags = evaluate_flags(slide.timing, slide.raw.text) + manual_flags(slide.flags)
        snapshot.project.stats = compute_stats(snapshot.slides, snapshot.project.settings)
        return snapshot
