"""Engine and session lifecycle."""

from collections.abc import Iterator
from typing import Annotated, Any

from fastapi import Depends
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from polyglot.config import Settings, get_settings


class Base(DeclarativeBase):
    pass


_engine: Engine | None = None
_session_factory: sessionmaker[Session] | None = None


def _engine_options(settings: Settings) -> dict[str, Any]:
    url = settings.DATABASE_URL
    if not url.startswith("sqlite"):
        return {
            "pool_size": 20,
            "max_overflow": 30,
            "pool_pre_ping": True,
            "pool_recycle": 3600,
            "pool_timeout": settings.DATABASE_POOL_TIMEOUT_SECONDS,
            "connect_args": {
                "options": f"-c statement_timeout={settings.DATABASE_STATEMENT_TIMEOUT_MS}"
            },
        }
    if ":memory:" in url:
        # One shared connection, or every session would see its own empty database
        return {"connect_args": {"check_same_thread": False}, "poolclass": StaticPool}
    return {
        "connect_args": {
            "check_same_thread": False,
            "timeout": settings.DATABASE_POOL_TIMEOUT_SECONDS,
        }
    }


def create_database_engine(settings: Settings) -> Engine:
    """Build an engine whose lock and pool waits are bounded by settings."""
    return create_engine(settings.DATABASE_URL, **_engine_options(settings))


def initialize_database(settings: Settings) -> None:
    global _engine, _session_factory  # noqa: PLW0603

    _engine = create_database_engine(settings)
    _session_factory = sessionmaker(bind=_engine, autoflush=False, expire_on_commit=True)


def dispose_engine() -> None:
    global _engine, _session_factory  # noqa: PLW0603

    if _engine is not None:
        _engine.dispose()
    _engine = None
    _session_factory = None


def get_db(settings: Annotated[Settings, Depends(get_settings)]) -> Iterator[Session]:
    """Open one session per request and close it afterwards."""
    if _session_factory is None:
        initialize_database(settings)
    if _session_factory is None:
        raise RuntimeError("Database session factory failed to initialize.")
    with _session_factory() as session:
        yield session


DatabaseSession = Annotated[Session, Depends(get_db)]
