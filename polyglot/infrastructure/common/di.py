"""Bridges between FastAPI dependencies and the DI container."""

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import TypeVar

from dependency_injector.providers import Provider
from sqlalchemy.orm import Session

from polyglot.core import container
from polyglot.database import DatabaseSession

T = TypeVar("T")


@contextmanager
def request_scope(db: Session) -> Iterator[None]:
    """Bind container.db to the request session while providers build objects."""
    container.db.override(db)
    try:
        yield
    finally:
        container.db.reset_override()


def resolve(provider: Provider[T], db: Session) -> T:
    """Build one object from ``provider`` against the request session."""
    with request_scope(db):
        return provider()


def inject_use_case(provider: Provider[T]) -> Callable[[DatabaseSession], T]:
    """Create a FastAPI dependency that builds a use case per request."""

    def dependency(db: DatabaseSession) -> T:
        return resolve(provider, db)

    return dependency
