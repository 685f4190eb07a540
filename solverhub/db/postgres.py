from sqlalchemy import create_engine, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from contextlib import contextmanager
from functools import wraps
from typing import Optional
import logging

from solverhub.core.config import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()


def _engine_kwargs(url: str) -> dict:
    # SQLite (tests, local demos) needs one shared connection across threads
    if url.startswith("sqlite"):
        return {
            "connect_args": {"check_same_thread": False},
            "poolclass": StaticPool,
            "echo": settings.debug,
        }
    # pool_size=5: maintain 5 connections ready
    # max_overflow=10: allow 10 extra connections under load
    return {
        "pool_size": 5,
        "max_overflow": 10,
        "pool_pre_ping": True,
        "echo": settings.debug,  # Log SQL queries in debug mode
    }


engine = create_engine(
    settings.postgres_url or "sqlite://",
    **_engine_kwargs(settings.postgres_url or "sqlite://")
)

# Session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@contextmanager
def get_db_session():
    """
    Context manager for database sessions.
    Usage:
        with get_db_session() as db:
            db.execute(select(profiles))
    """
    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def init_db() -> None:
    """Create all tables that don't exist yet."""
    from solverhub.db.tables import metadata
    metadata.create_all(engine)


def drop_db() -> None:
    from solverhub.db.tables import metadata
    metadata.drop_all(engine)


def require_backend() -> None:
    """Raise ConfigurationError before touching an unconfigured backend."""
    from solverhub.core.exceptions import ConfigurationError
    if not get_settings().is_configured:
        raise ConfigurationError()


def store_call(operation: str, default=None, demo_fallback=None):
    """
    Wrap a data-access function.

    Store and configuration errors are logged and turned into `default`
    (called when it is a factory such as `list`). Business-rule errors raised
    by the function itself propagate. When demo mode is on and a
    `demo_fallback` factory is given, its result replaces `default`.
    """
    from solverhub.core.exceptions import ConfigurationError

    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                require_backend()
                return func(*args, **kwargs)
            except (SQLAlchemyError, ConfigurationError) as e:
                logger.error(f"Error {operation}: {e}")
                if demo_fallback is not None and get_settings().demo_mode:
                    logger.warning(f"Demo mode: serving built-in data for '{operation}'")
                    return demo_fallback()
                return default() if callable(default) else default
        return wrapper
    return decorator


def prefixed_columns(table, prefix: str) -> list:
    """Label every column of a (joined) table as '<prefix>__<column>'."""
    return [c.label(f"{prefix}__{c.name}") for c in table.c]


def split_row(mapping, prefix: str) -> Optional[dict]:
    """Pull the '<prefix>__*' columns out of a joined row. None for a missed outer join."""
    marker = f"{prefix}__"
    values = {k[len(marker):]: v for k, v in mapping.items() if k.startswith(marker)}
    if values.get("id") is None:
        return None
    return values


def test_postgres_connection() -> bool:
    """
    Test if the database is reachable.
    Returns True if connection successful, False otherwise.
    """
    try:
        with get_db_session() as db:
            result = db.execute(text("SELECT 1 as test"))
            row = result.fetchone()
            return row[0] == 1
    except Exception as e:
        logger.error(f"Database connection failed: {e}")
        return False
