"""
Database configuration and session management.
Uses SQLAlchemy 2.0 patterns with a synchronous engine.
"""

from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from shared.config.settings import settings, DATABASE_URL


def _engine_options(url: str) -> dict[str, Any]:
    """
    Build engine keyword arguments for the configured backend.

    SQLite (local runs, tests) gets a single shared connection;
    PostgreSQL gets a bounded pool with timeouts.
    """
    if url.startswith("sqlite"):
        options: dict[str, Any] = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in url or url == "sqlite://":
            options["poolclass"] = StaticPool
        return options

    return {
        "pool_pre_ping": True,  # Verify connections before using
        "pool_size": settings.db_pool_size,
        "max_overflow": 0,
        "pool_timeout": settings.db_pool_timeout,
        "pool_recycle": settings.db_pool_recycle,
        "connect_args": {"connect_timeout": settings.db_connect_timeout},
    }


def enable_sqlite_foreign_keys(target_engine: Engine) -> None:
    """SQLite ignores FOREIGN KEY constraints unless asked per connection."""

    @event.listens_for(target_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


engine = create_engine(DATABASE_URL, echo=False, **_engine_options(DATABASE_URL))
if DATABASE_URL.startswith("sqlite"):
    enable_sqlite_foreign_keys(engine)

# Session factory
SessionLocal = sessionmaker(
    bind=engine,
    autoflush=False,
    autocommit=False,
)


def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency for database sessions.

    Usage:
        @router.get("/items")
        def list_items(db: Session = Depends(get_db)):
            return db.scalars(select(MenuItem)).all()

    The session is automatically closed after the request completes.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def get_db_context() -> Generator[Session, None, None]:
    """
    Context manager for database sessions outside of FastAPI (CLI, scripts).

    Usage:
        with get_db_context() as db:
            db.scalars(select(MenuCategory)).all()
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def safe_commit(db: Session) -> None:
    """
    Commit with automatic rollback on failure.

    Raises the original exception after rolling back.
    """
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise


@contextmanager
def unit_of_work(db: Session) -> Generator[Session, None, None]:
    """
    Run a block of dependent writes as a single all-or-nothing transaction.

    Commits when the block exits normally; rolls back and re-raises on any
    exception, including the domain errors raised inside the block.

    Usage:
        with unit_of_work(db):
            db.execute(delete(MenuItemModifierGroup).where(...))
            db.add_all(links)
    """
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
