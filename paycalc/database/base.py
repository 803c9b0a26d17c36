"""
Database base configuration and session management.

This module provides the SQLAlchemy base class, engine, and session management
for the saved-record store.
"""

from typing import Optional

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from paycalc.config import Settings, get_global_settings

Base = declarative_base()

_engine: Optional[Engine] = None
_session_factory: Optional[sessionmaker] = None


def _create_engine(settings: Settings) -> Engine:
    return create_engine(
        settings.db_url,
        echo=settings.app_env == "development" and settings.log_level == "DEBUG",
        pool_pre_ping=True,
    )


def init_engine(settings: Settings) -> Engine:
    """Bind the engine to the given settings, replacing any existing one."""
    global _engine
    reset_engine()
    _engine = _create_engine(settings)
    return _engine


def get_engine() -> Engine:
    """Get or create the database engine."""
    global _engine
    if _engine is None:
        _engine = _create_engine(get_global_settings())
    return _engine


def get_session_factory() -> sessionmaker:
    """Get or create the session factory."""
    global _session_factory
    if _session_factory is None:
        _session_factory = sessionmaker(bind=get_engine())
    return _session_factory


def get_session() -> Session:
    """Get a new database session."""
    session_factory = get_session_factory()
    return session_factory()  # type: ignore[no-any-return]


def create_tables() -> None:
    """Create all tables in the database."""
    Base.metadata.create_all(bind=get_engine())


def reset_engine() -> None:
    """Dispose the engine and forget the session factory (useful for testing)."""
    global _engine, _session_factory
    if _engine is not None:
        _engine.dispose()
    _engine = None
    _session_factory = None
