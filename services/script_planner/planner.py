"""Script planner: the operations the host exposes over a project store."""

import asyncio
from collections.abc import Awaitable, Callable

import aiohttp

from shared.enums import ExportFormat, SourceFormat
from shared.file_utils import extract_file_name
from shared.http_client import FetchedFile, fetch_deck
from shared.models import (
    AllocationResult,
    DeckFile,
    Project,
    ProjectSettings,
    ProjectSnapshot,
    ProjectSource,
    RawContent,
    SettingsPatch,
    Slide,
    SlidePatch,
    SlideScript,
    SlideTiming,
)
from shared.utils import config, setup_logging

from .allocator import TimingAllocator
from .exporter import ScriptExporter
from .flags import FlagEvaluator
from .repository import ProjectRepository, create_repository
from .segmenter import TextSegmenter, detect_source_format
from .synthesizer import ScriptSynthesizer

logger = setup_logging("script-planner")

DEFAULT_TITLE = "Untitled Presentation"

DeckFetcher = Callable[[str], Awaitable[FetchedFile]]


class NotFoundError(Exception):
    """Raised when a project or slide id is unknown."""


class ProjectNotFoundError(NotFoundError):
    def __init__(self, project_id: str):
        super().__init__(f"Project not found: {project_id}")
        self.project_id = project_id


class SlideNotFoundError(NotFoundError):
    def __init__(self, project_id: str, slide_id: str):
        super().__init__(f"Slide {slide_id} not found in project {project_id}")
        self.project_id = project_id
        self.slide_id = slide_id


class DeckFetchError(Exception):
    """Raised when the deck file could not be downloaded."""


async def _default_fetcher(url: str) -> FetchedFile:
    return await fetch_deck(url, timeout=int(config.get("deck_fetch_timeout", 30)))


class ScriptPlanner:
    """Ingest, synthesize, edit, rebalance and export speaking scripts.

    Every mutating operation works on a private copy loaded from the
    repository and saves it only after flags and stats were recomputed.
    """

    def __init__(
        self,
        repository: ProjectRepository | None = None,
        segmenter: TextSegmenter | None = None,
        synthesizer: ScriptSynthesizer | None = None,
        allocator: TimingAllocator | None = None,
        flag_evaluator: FlagEvaluator | None = None,
        exporter: ScriptExporter | None = None,
        fetcher: DeckFetcher | None = None,
    ):
        self.repository = repository or create_repository()
        self.flag_evaluator = flag_evaluator or FlagEvaluator()
        self.allocator = allocator or TimingAllocator(self.flag_evaluator)
        self.segmenter = segmenter or TextSegmenter()
        self.synthesizer = synthesizer or ScriptSynthesizer(allocator=self.allocator)
        self.exporter = exporter or ScriptExporter()
        self.fetcher = fetcher or _default_fetcher

    def _load(self, project_id: str) -> ProjectSnapshot:
        snapshot = self.repository.get(project_id)
        if snapshot is None:
            raise ProjectNotFoundError(project_id)
        return snapshot

    def _commit(self, snapshot: ProjectSnapshot) -> ProjectSnapshot:
        self.repository.save(snapshot)
        return snapshot

    def get_project(self, project_id: str) -> ProjectSnapshot:
        return self._load(project_id)

    def delete_project(self, project_id: str) -> None:
        if not self.repository.delete(project_id):
            raise ProjectNotFoundError(project_id)
        logger.info(f"Deleted project {project_id}")

    def ingest(
        self,
        raw_bytes: bytes,
        source_format: SourceFormat = SourceFormat.GENERIC,
        title: str | None = None,
        settings: SettingsPatch | None = None,
        source: ProjectSource | None = None,
    ) -> ProjectSnapshot:
        """Segment deck bytes and create a project with default slide state."""
        segments = self.segmenter.segment_bytes(raw_bytes, source_format)

        base_settings = ProjectSettings()
        project = Project(
            project_id=self.repository.generate_id(),
            title=title or DEFAULT_TITLE,
            source=source,
            settings=settings.apply_to(base_settings) if settings else base_settings,
        )
        slides = [
            Slide(
                slide_id=self.repository.generate_id(),
                index=index,
                title_guess=segment.title_guess,
                raw=RawContent(text=segment.text),
                timing=SlideTiming(),
                script=SlideScript(),
            )
            for index, segment in enumerate(segments)
        ]
        snapshot = self.flag_evaluator.recompute(ProjectSnapshot(project=project, slides=slides))

        logger.info(f"Ingested project {project.project_id} '{project.title}' with {len(slides)} slides")
        return self._commit(snapshot)

    async def ingest_from_url(
        self,
        deck_file: DeckFile,
        title: str | None = None,
        settings: SettingsPatch | None = None,
    ) -> ProjectSnapshot:
        """Download an uploaded deck and ingest it.

        Raises:
            DeckFetchError: The download failed; no project is created
        """
        try:
            fetched = await self.fetcher(deck_file.download_url)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"Failed to download deck {deck_file.file_id}: {e}")
            raise DeckFetchError(f"Failed to download file: {e}") from e

        source = ProjectSource(
            file_id=deck_file.file_id,
            file_name=extract_file_name(deck_file.download_url),
            mime_type=fetched.content_type,
        )
        source_format = detect_source_format(fetched.content_type, deck_file.download_url)
        return self.ingest(fetched.data, source_format, title=title, settings=settings, source=source)

    def synthesize(self, project_id: str, settings: SettingsPatch | None = None) -> ProjectSnapshot:
        """Generate script skeletons and timings for every slide."""
        snapshot = self._load(project_id)
        if settings:
            snapshot.project.settings = settings.apply_to(snapshot.project.settings)

        self.synthesizer.synthesize_all(snapshot)
        return self._commit(snapshot)

    def patch_slide(self, project_id: str, slide_id: str, patch: SlidePatch) -> ProjectSnapshot:
        """Shallow-merge patch into one slide and recompute flags and stats."""
        snapshot = self._load(project_id)
        slide = snapshot.find_slide(slide_id)
        if slide is None:
            raise SlideNotFoundError(project_id, slide_id)

        if patch.timing is not None:
            updates = patch.timing.model_dump(exclude_unset=True)
            slide.timing = SlideTiming.model_validate({**slide.timing.model_dump(), **updates})
        if patch.script is not None:
            updates = patch.script.model_dump(exclude_unset=True)
            slide.script = SlideScript.model_validate({**slide.script.model_dump(), **updates})
        if patch.flags is not None:
            slide.flags = list(patch.flags)

        self.flag_evaluator.recompute(snapshot)
        logger.info(f"Patched slide {slide.index} of project {project_id}")
        return self._commit(snapshot)

    def rebalance(self, project_id: str, total_seconds: int | None = None) -> ProjectSnapshot:
        snapshot, _ = self.rebalance_with_result(project_id, total_seconds)
        return snapshot

    def rebalance_with_result(
        self, project_id: str, total_seconds: int | None = None
    ) -> tuple[ProjectSnapshot, AllocationResult]:
        """Redistribute the time budget over unlocked slides."""
        snapshot = self._load(project_id)
        result = self.allocator.allocate(snapshot, total_seconds)
        return self._commit(snapshot), result

    def export_text(self, project_id: str, export_format: ExportFormat = ExportFormat.MARKDOWN) -> str:
        snapshot = self._load(project_id)
        return self.exporter.render(snapshot, export_format)
