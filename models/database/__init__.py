"""
Database models package - SQLAlchemy ORM models
"""

from .project import ProjectRecord

__all__ = [
    "ProjectRecord",
]
