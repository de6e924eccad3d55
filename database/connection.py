"""
Database connection management for the Boat Dealer Portal.
Handles SQLAlchemy engine creation, session management, and connection verification.
"""

import logging
from contextlib import contextmanager

from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import QueuePool, StaticPool

logger = logging.getLogger(__name__)

# SQLAlchemy Base for model declarations
Base = declarative_base()

# Set by configure_database(); engine and SessionLocal are built lazily
DATABASE_URL = None
engine = None
SessionLocal = None


class DatabaseNotConfiguredError(RuntimeError):
    """Raised when a route needs the database but no DATABASE_URL is set."""

    def __init__(self, message: str = "Database not configured"):
        super().__init__(message)


def configure_database(database_url):
    """
    Point the module at a database URL, discarding any existing engine.
    Passing None leaves the portal running without storage (routes answer 503).
    """
    global DATABASE_URL, engine, SessionLocal

    if engine is not None:
        engine.dispose()

    if database_url and database_url.startswith('postgres://'):
        database_url = database_url.replace('postgres://', 'postgresql://', 1)

    DATABASE_URL = database_url
    engine = None
    SessionLocal = None

    if not DATABASE_URL:
        logger.warning("DATABASE_URL is not set - data routes will return 503")


def get_engine():
    """Get or create the SQLAlchemy engine."""
    global engine

    if engine is not None:
        return engine

    if not DATABASE_URL:
        raise DatabaseNotConfiguredError()

    try:
        if DATABASE_URL.startswith('sqlite'):
            # One shared in-memory connection for tests and local runs
            engine = create_engine(
                DATABASE_URL,
                poolclass=StaticPool,
                connect_args={'check_same_thread': False},
                echo=False
            )
        else:
            engine = create_engine(
                DATABASE_URL,
                poolclass=QueuePool,
                pool_size=5,
                max_overflow=10,
                pool_pre_ping=True,  # Verify connections before using
                pool_recycle=300,    # Recycle connections after 5 minutes
                echo=False
            )
        logger.info("Database engine created successfully")
        return engine
    except Exception as e:
        logger.error(f"Failed to create database engine: {e}")
        raise RuntimeError(f"Failed to connect to database: {e}")


def get_session_factory():
    """Get or create the session factory."""
    global SessionLocal

    if SessionLocal is not None:
        return SessionLocal

    eng = get_engine()
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=eng, expire_on_commit=False)
    return SessionLocal


@contextmanager
def get_db_session():
    """
    Context manager for getting a database session.
    Commits when the block exits cleanly, rolls back on any exception.

    Example:
        with get_db_session() as db:
            dealers = db.query(Dealer).all()
    """
    session_factory = get_session_factory()
    db = session_factory()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def check_db_connection():
    """
    Verify that the database connection is working.
    Returns True if connection is successful, raises exception otherwise.
    """
    try:
        eng = get_engine()
        with eng.connect() as conn:
            conn.execute(text("SELECT 1")).fetchone()
        logger.info("Database connection verified successfully")
        return True
    except DatabaseNotConfiguredError:
        raise
    except Exception as e:
        logger.error(f"Database connection failed: {e}")
        raise RuntimeError(f"Cannot connect to database: {e}")


def init_db():
    """
    Create all tables that do not exist yet.
    Production databases are managed by Alembic; this covers development and tests.
    """
    from database import models  # noqa: F401

    eng = get_engine()
    Base.metadata.create_all(bind=eng)
    logger.info("Database tables created/verified")


def is_db_configured():
    """Check if DATABASE_URL is configured (without failing)."""
    return bool(DATABASE_URL)
