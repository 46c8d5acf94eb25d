"""
Database utilities and engine management.

The engine is created once per process by whoever owns the process
lifecycle (the FastAPI lifespan, a script, a test fixture) and handed to
the layers that need it. Nothing in this module caches a global engine.

No dependencies on higher-level modules (api, services).
"""

import logging
from typing import Generator

from fastapi import Request
from sqlalchemy import inspect, text
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine

# Importing the models package registers every table on SQLModel.metadata
from models import Profile, PROFILE_ID
from models.profile import DEFAULT_PROFILE

logger = logging.getLogger(__name__)

# Columns added after the first release: (table, column, DDL type)
ADDITIVE_COLUMNS = [
    ("profile", "github_token", "TEXT"),
    ("profile", "notion_secret_backfilled", "BOOLEAN NOT NULL DEFAULT 0"),
]


def create_db_engine(database_url: str) -> Engine:
    """
    Create a database engine for the given URL.

    Args:
        database_url: SQLAlchemy URL, e.g. ``sqlite:///career_assistant.db``

    Returns:
        SQLAlchemy engine

    Note:
        SQLite connections are shared across FastAPI's worker threads, so
        ``check_same_thread`` is disabled. In-memory databases use a single
        static connection, otherwise every new connection would see an
        empty database.
    """
    if database_url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in database_url or database_url in ("sqlite://", "sqlite:///"):
            kwargs["poolclass"] = StaticPool
        return create_engine(database_url, **kwargs)

    return create_engine(database_url, pool_pre_ping=True)


def _apply_additive_migrations(engine: Engine) -> None:
    """Add columns that older databases are missing."""
    inspector = inspect(engine)
    for table, column, ddl_type in ADDITIVE_COLUMNS:
        if not inspector.has_table(table):
            continue
        existing = {c["name"] for c in inspector.get_columns(table)}
        if column in existing:
            continue
        with engine.begin() as conn:
            conn.execute(text(f"ALTER TABLE {table} ADD COLUMN {column} {ddl_type}"))
        logger.info("Added column %s.%s", table, column)


def init_db(engine: Engine) -> None:
    """
    Create tables, migrate older schemas and seed the singleton profile.

    Idempotent: safe to run on every start.
    """
    SQLModel.metadata.create_all(engine)
    _apply_additive_migrations(engine)

    with Session(engine) as session:
        if session.get(Profile, PROFILE_ID) is None:
            session.add(Profile(id=PROFILE_ID, **DEFAULT_PROFILE))
            session.commit()
            logger.info("Seeded default profile")


def get_db(request: Request) -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI.

    Yields:
        SQLModel Session bound to the engine owned by the running app

    Usage:
        @router.get("/example")
        def example(db: Session = Depends(get_db)):
            ...
    """
    engine: Engine = request.app.state.engine
    with Session(engine) as session:
        yield session
