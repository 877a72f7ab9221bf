"""
Database configuration and session management
Backs the durable project store; SQLite for local use, PostgreSQL in deployments
"""

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker

from shared.utils import config, setup_logging

logger = setup_logging("database")

DEFAULT_DATABASE_URL = "sqlite:///./slidescript.db"

Base = declarative_base()


def build_database_url(database_url: str | None = None) -> str:
    """
    Resolve the database URL from the argument or DATABASE_URL, with a SQLite fallback
    """
    database_url = database_url or config.get("database_url")
    if not database_url:
        logger.info(f"DATABASE_URL not set, using {DEFAULT_DATABASE_URL}")
        return DEFAULT_DATABASE_URL

    # Convert postgres:// to postgresql:// for SQLAlchemy compatibility
    if database_url.startswith("postgres://"):
        database_url = database_url.replace("postgres://", "postgresql://", 1)
    return database_url


def create_database_engine(database_url: str | None = None) -> Engine:
    """Create SQLAlchemy engine with appropriate configuration"""
    database_url = build_database_url(database_url)

    try:
        if database_url.startswith("sqlite"):
            engine = create_engine(database_url, connect_args={"check_same_thread": False})
            logger.info("Using SQLite database engine")
        else:
            engine = create_engine(
                database_url,
                pool_pre_ping=True,  # Verify connections before use
                pool_recycle=3600,    # Recycle connections every hour
                echo=False,
            )
            logger.info("Using pooled database engine")

        # Test the connection
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        logger.info("Database connection test successful")

        return engine
    except SQLAlchemyError as e:
        logger.error(f"Failed to create database engine: {e}")
        raise


def create_session_factory(engine: Engine) -> sessionmaker:
    """Session factory bound to engine"""
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_database(engine: Engine) -> None:
    """Initialize database tables"""
    # register ORM models on Base.metadata
    import models.database  # noqa: F401

    try:
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables initialized successfully")
    except SQLAlchemyError as e:
        logger.error(f"Failed to initialize database tables: {e}")
        raise
