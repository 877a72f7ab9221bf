"""Keyed project stores used by the script planner."""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod

from sqlalchemy import select
from sqlalchemy.orm import Session, sessionmaker

from database import create_database_engine, create_session_factory, init_database
from models.database import ProjectRecord
from shared.models import ProjectSnapshot
from shared.utils import config, generate_id, setup_logging

logger = setup_logging("project-repository")


class ProjectRepository(ABC):
    """Storage interface for project snapshots.

    Stores hand out private copies: a caller mutates its copy and commits it
    with ``save``, so a failed operation never leaves half-applied state.
    """

    def generate_id(self) -> str:
        return generate_id()

    @abstractmethod
    def get(self, project_id: str) -> ProjectSnapshot | None:
        """Return a copy of the stored snapshot, or None."""
        pass

    @abstractmethod
    def save(self, snapshot: ProjectSnapshot) -> None:
        """Insert or replace the snapshot under its project id."""
        pass

    @abstractmethod
    def delete(self, project_id: str) -> bool:
        """Remove a project and its slides; True if it existed."""
        pass

    @abstractmethod
    def list_ids(self) -> list[str]:
        pass


class InMemoryProjectRepository(ProjectRepository):
    """Process-local store guarded by a lock."""

    def __init__(self) -> None:
        self._projects: dict[str, ProjectSnapshot] = {}
        self._lock = threading.RLock()

    def get(self, project_id: str) -> ProjectSnapshot | None:
        with self._lock:
            snapshot = self._projects.get(project_id)
            return snapshot.model_copy(deep=True) if snapshot else None

    def save(self, snapshot: ProjectSnapshot) -> None:
        with self._lock:
            self._projects[snapshot.project.project_id] = snapshot.model_copy(deep=True)

    def delete(self, project_id: str) -> bool:
        with self._lock:
            return self._projects.pop(project_id, None) is not None

    def list_ids(self) -> list[str]:
        with self._lock:
            return list(self._projects)

    def clear(self) -> None:
        with self._lock:
            self._projects.clear()


class SQLAlchemyProjectRepository(ProjectRepository):
    """Durable store keeping one JSON snapshot row per project."""

    def __init__(self, session_factory: sessionmaker) -> None:
        self.session_factory = session_factory

    def _session(self) -> Session:
        return self.session_factory()

    def get(self, project_id: str) -> ProjectSnapshot | None:
        with self._session() as session:
            record = session.get(ProjectRecord, project_id)
            if record is None:
                return None
            return ProjectSnapshot.model_validate(record.payload)

    def save(self, snapshot: ProjectSnapshot) -> None:
        project = snapshot.project
        payload = snapshot.model_dump(mode="json")
        with self._session() as session:
            record = session.get(ProjectRecord, project.project_id)
            if record is None:
                record = ProjectRecord(id=project.project_id)
                session.add(record)
            record.title = project.title
            record.slide_count = len(snapshot.slides)
            record.payload = payload
            session.commit()
        logger.debug(f"Saved project {project.project_id}")

    def delete(self, project_id: str) -> bool:
        with self._session() as session:
            record = session.get(ProjectRecord, project_id)
            if record is None:
                return False
            session.delete(record)
            session.commit()
        return True

    def list_ids(self) -> list[str]:
        with self._session() as session:
            return list(session.scalars(select(ProjectRecord.id)))


def create_repository(store: str | None = None, database_url: str | None = None) -> ProjectRepository:
    """Build the configured project store ("memory" or "database")."""
    store = (store or config.get("project_store", "memory")).lower()
    if store == "memory":
        logger.info("Using in-memory project store")
        return InMemoryProjectRepository()
    if store == "database":
        engine = create_database_engine(database_url)
        init_database(engine)
        logger.info("Using database project store")
        return SQLAlchemyProjectRepository(create_session_factory(engine))
    raise ValueError(f"Unknown project store: {store}")
