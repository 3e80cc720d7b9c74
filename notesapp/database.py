"""
Database Configuration and Session Management

This module handles SQLAlchemy setup with connection pooling.

NOTE: Sessions are raw; tenant scoping happens in the services layer,
which always receives the caller's identity context explicitly.
"""
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from sqlalchemy.pool import QueuePool
from notesapp.config import get_settings
import logging

logger = logging.getLogger(__name__)

settings = get_settings()


def create_db_engine(database_url: str) -> Engine:
    """
    Build an engine for the given URL.

    SQLite connections are shared with the FastAPI threadpool and wait on
    the database lock instead of failing with "database is locked".
    """
    is_sqlite = database_url.startswith("sqlite")
    connect_args = {}
    if is_sqlite:
        connect_args = {
            "check_same_thread": False,
            "timeout": settings.DATABASE_BUSY_TIMEOUT,
        }

    db_engine = create_engine(
        database_url,
        poolclass=QueuePool,
        pool_size=settings.DATABASE_POOL_SIZE,
        max_overflow=settings.DATABASE_MAX_OVERFLOW,
        pool_pre_ping=True,  # Verify connections before using (handles stale connections)
        echo=settings.DEBUG,  # Log SQL in debug mode
        connect_args=connect_args,
    )

    @event.listens_for(db_engine, "connect")
    def set_connection_options(dbapi_connection, connection_record):
        """Set connection-level configuration on new connections."""
        cursor = dbapi_connection.cursor()
        if database_url.startswith("postgresql"):
            cursor.execute("SET TIME ZONE 'UTC'")
        elif is_sqlite:
            cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()
        logger.debug("New database connection established")

    return db_engine


def create_session_factory(db_engine: Engine) -> sessionmaker:
    # expire_on_commit=False: response serialization reads attributes after commit
    return sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=db_engine,
        expire_on_commit=False,
    )


engine = create_db_engine(settings.DATABASE_URL)
SessionLocal = create_session_factory(engine)

# Base class for all models
Base = declarative_base()


def get_db() -> Session:
    """
    Dependency function that provides a database session.

    The session is closed after the request completes.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(db_engine: Engine = None) -> None:
    """
    Create all tables.

    There is no migration tooling in this project; create_all is the
    schema bootstrap for development and tests.
    """
    # Import models so they register on Base.metadata
    import notesapp.models  # noqa: F401

    Base.metadata.create_all(bind=db_engine or engine)
    logger.info("Database tables initialized")
