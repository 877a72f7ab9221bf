import sys
from pathlib import Path
from typing import Callable, Generator

import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from services.script_planner import app as script_planner_module
from services.script_planner.planner import ScriptPlanner
from services.script_planner.repository import InMemoryProjectRepository
from shared.models import (
    Project,
    ProjectSettings,
    ProjectSnapshot,
    RawContent,
    Slide,
    SlideScript,
    SlideTiming,
)
from shared.utils import config as service_config


@pytest.fixture
def repository() -> InMemoryProjectRepository:
    return InMemoryProjectRepository()


@pytest.fixture
def planner(repository: InMemoryProjectRepository) -> ScriptPlanner:
    """Planner over a private in-memory store."""
    return ScriptPlanner(repository=repository)


@pytest.fixture
def make_slide() -> Callable[..., Slide]:
    """Factory for slides with explicit timing."""

    def _make_slide(
        index: int,
        text: str = "Slide body text",
        seconds: int = 30,
        locked: bool = False,
        min_seconds: int = 10,
        max_seconds: int = 120,
        flags: list | None = None,
        title: str | None = None,
    ) -> Slide:
        return Slide(
            slide_id=f"slide-{index}",
            index=index,
            title_guess=title or f"Slide {index + 1}",
            raw=RawContent(text=text),
            timing=SlideTiming(
                seconds=seconds, locked=locked, min_seconds=min_seconds, max_seconds=max_seconds
            ),
            script=SlideScript(),
            flags=flags or [],
        )

    return _make_slide


@pytest.fixture
def make_snapshot() -> Callable[..., ProjectSnapshot]:
    """Factory wrapping slides into a project with the given budget."""

    def _make_snapshot(
        slides: list[Slide],
        total_seconds: int = 420,
        qa_buffer_seconds: int = 30,
        **settings,
    ) -> ProjectSnapshot:
        project = Project(
            project_id="project-1",
            title="Demo Deck",
            settings=ProjectSettings(
                total_seconds=total_seconds, qa_buffer_seconds=qa_buffer_seconds, **settings
            ),
        )
        return ProjectSnapshot(project=project, slides=slides)

    return _make_snapshot


@pytest.fixture(autouse=True)
def test_environment(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Give the service app a fresh store and restore pipeline settings per-test."""
    monkeypatch.setattr(script_planner_module.planner, "repository", InMemoryProjectRepository())

    pipeline_config = dict(service_config.pipeline_config)
    try:
        yield
    finally:
        service_config.set_pipeline_config(pipeline_config)
