"""Redistribute a talk's time budget across slides."""

from shared.config import config
from shared.models import AllocationResult, ProjectSnapshot
from shared.utils import clamp, round_half_up, setup_logging

from .flags import FlagEvaluator

logger = setup_logging("timing-allocator")


class TimingAllocator:
    """Weighted redistribution of remaining time over unlocked slides.

    Locked slides are fixed inputs. Each unlocked slide is weighted by its raw
    text length (with a floor) and its share is clamped into the slide's
    [min_seconds, max_seconds] range. Clamping may leave the total above or
    below the budget; that drift is reported through the project stats and is
    not corrected by a second pass.
    """

    def __init__(self, flag_evaluator: FlagEvaluator | None = None):
        self.flag_evaluator = flag_evaluator or FlagEvaluator()
        self.min_weight_chars = int(config.get_pipeline_value("allocation.min_weight_chars", 100))

    def weight(self, text: str) -> int:
        return max(len(text), self.min_weight_chars)

    def allocate(self, snapshot: ProjectSnapshot, total_seconds: int | None = None) -> AllocationResult:
        """Rebalance snapshot in place and recompute its flags and stats.

        Args:
            snapshot: Project state to mutate
            total_seconds: Explicit new total; stored in the settings when given

        Returns:
            Summary of the pass
        """
        settings = snapshot.project.settings
        target_total = total_seconds if total_seconds is not None else settings.total_seconds
        available_seconds = target_total - settings.qa_buffer_seconds

        locked = [slide for slide in snapshot.slides if slide.timing.locked]
        unlocked = [slide for slide in snapshot.slides if not slide.timing.locked]
        remaining_seconds = available_seconds - sum(slide.timing.seconds for slide in locked)

        redistributed = bool(unlocked) and remaining_seconds > 0
        if redistributed:
            total_weight = sum(self.weight(slide.raw.text) for slide in unlocked)
            for slide in unlocked:
                share = self.weight(slide.raw.text) / total_weight
                seconds = round_half_up(remaining_seconds * share)
                slide.timing.seconds = clamp(seconds, slide.timing.min_seconds, slide.timing.max_seconds)
                logger.debug(f"Slide {slide.index}: {seconds}s requested, {slide.timing.seconds}s allocated")
        else:
            logger.warning(
                f"Nothing to redistribute ({len(unlocked)} unlocked slides, {remaining_seconds}s remaining)"
            )

        if total_seconds is not None:
            settings.total_seconds = total_seconds

        self.flag_evaluator.recompute(snapshot)

        result = AllocationResult(
            target_seconds=target_total,
            available_seconds=available_seconds,
            remaining_seconds=remaining_seconds,
            locked_count=len(locked),
            unlocked_count=len(unlocked),
            redistributed=redistributed,
        )
        logger.info(
            f"Allocated {snapshot.project.stats.allocated_seconds}s of {available_seconds}s "
            f"across {len(snapshot.slides)} slides ({len(locked)} locked)"
        )
        return result
