"""Tests for project stores."""

from pathlib import Path

import pytest

from database import create_database_engine, create_session_factory, init_database
from services.script_planner.repository import (
    InMemoryProjectRepository,
    ProjectRepository,
    SQLAlchemyProjectRepository,
    create_repository,
)
from shared.enums import SlideFlag


@pytest.fixture
def sqlite_url(tmp_path: Path) -> str:
    return f"sqlite:///{tmp_path / 'projects.db'}"


@pytest.fixture(params=["memory", "database"])
def store(request, sqlite_url: str) -> ProjectRepository:
    if request.param == "memory":
        return InMemoryProjectRepository()
    engine = create_database_engine(sqlite_url)
    init_database(engine)
    return SQLAlchemyProjectRepository(create_session_factory(engine))


@pytest.fixture
def snapshot(make_slide, make_snapshot):
    return make_snapshot(
        [make_slide(0, seconds=40, locked=True), make_slide(1, flags=[SlideFlag.NEEDS_CONTEXT])]
    )


class TestStores:
    def test_round_trip(self, store, snapshot) -> None:
        store.save(snapshot)
        assert store.get("project-1") == snapshot
        assert store.list_ids() == ["project-1"]

    def test_missing_project(self, store) -> None:
        assert store.get("missing") is None
        assert store.delete("missing") is False

    def test_returned_copy_is_private(self, store, snapshot) -> None:
        store.save(snapshot)
        copy = store.get("project-1")
        copy.slides[0].timing.seconds = 999
        copy.project.title = "Changed"

        stored = store.get("project-1")
        assert stored.slides[0].timing.seconds == 40
        assert stored.project.title == "Demo Deck"

    def test_save_replaces(self, store, snapshot) -> None:
        store.save(snapshot)
        snapshot.project.title = "Renamed"
        store.save(snapshot)

        assert store.get("project-1").project.title == "Renamed"
        assert len(store.list_ids()) == 1

    def test_delete(self, store, snapshot) -> None:
        store.save(snapshot)
        assert store.delete("project-1") is True
        assert store.get("project-1") is None
        assert store.list_ids() == []

    def test_generate_id_is_unique(self, store) -> None:
        assert len({store.generate_id() for _ in range(50)}) == 50


def test_memory_clear(snapshot) -> None:
    store = InMemoryProjectRepository()
    store.save(snapshot)
    store.clear()
    assert store.list_ids() == []


def test_create_repository(sqlite_url: str) -> None:
    assert isinstance(create_repository("memory"), InMemoryProjectRepository)
    assert isinstance(create_repository("Database", database_url=sqlite_url), SQLAlchemyProjectRepository)
    with pytest.raises(ValueError):
        create_repository("redis")
