"""
Project model - stored speaking-script projects
"""

from datetime import UTC, datetime

from sqlalchemy import JSON, Column, DateTime, Integer, String

from database import Base


def _utcnow() -> datetime:
    return datetime.now(UTC)


class ProjectRecord(Base):
    """One project with its slides, stored as a JSON snapshot"""

    __tablename__ = "script_projects"

    id = Column(String(36), primary_key=True)
    title = Column(String(255), nullable=False)
    slide_count = Column(Integer, default=0)
    payload = Column(JSON, nullable=False)  # ProjectSnapshot.model_dump(mode="json")
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    def __repr__(self) -> str:
        return f"<ProjectRecord(id={self.id}, title={self.title}, slides={self.slide_count})>"
