"""
Database session management (SQLAlchemy)
"""
import logging
from pathlib import Path

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from fintrack.config import Settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """
    SQLAlchemy declarative base for all ORM models
    """
    pass


def enable_sqlite_foreign_keys(engine: Engine) -> None:
    """SQLite ignores FOREIGN KEY clauses (cascade/restrict) unless asked per connection"""
    if engine.dialect.name != "sqlite":
        return

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def _ensure_sqlite_dir(url) -> None:
    parsed = make_url(url)
    if parsed.get_backend_name() == "sqlite" and parsed.database not in (None, "", ":memory:"):
        Path(parsed.database).parent.mkdir(parents=True, exist_ok=True)


def create_engine_for(settings: Settings) -> Engine:
    """
    Build the engine for settings.DATABASE_URL

    Nothing is connected or created on disk until the engine is first used.
    """
    engine = create_engine(settings.get_sqlalchemy_url(), pool_pre_ping=True)
    enable_sqlite_foreign_keys(engine)
    return engine


def create_session_factory(engine: Engine) -> sessionmaker:
    """One factory per engine; sessions are opened per request"""
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)


def init_db(engine: Engine) -> None:
    """
    Create tables and seed default categories (idempotent)
    """
    # Models must be imported so their tables are registered on Base.metadata
    from fintrack.infrastructure.db import models  # noqa: F401
    from fintrack.infrastructure.repositories.categories import CategoryRepository

    _ensure_sqlite_dir(engine.url)
    Base.metadata.create_all(engine)

    SessionLocal = create_session_factory(engine)
    with SessionLocal() as db:
        created = CategoryRepository(db).ensure_defaults()
        db.commit()

    if created:
        logger.info("Seeded %d default categories", created)


def check_db_connection(engine: Engine) -> None:
    """
    Readiness check: run a trivial query against the database

    Raises:
        sqlalchemy.exc.OperationalError: when the database is unreachable
    """
    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))
