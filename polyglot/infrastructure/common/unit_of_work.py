"""SQLAlchemy implementation of the Unit of Work port."""

import structlog
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from polyglot.application.common.retry import TransientPersistenceError
from polyglot.application.common.unit_of_work import EventHandler, UnitOfWork
from polyglot.domain.common import AggregateRoot, DomainEvent

logger = structlog.get_logger(__name__)


def log_domain_event(event: DomainEvent) -> None:
    """Default event handler: one structured log line per committed event."""
    logger.info("domain_event", **event.to_dict())


class SQLAlchemyUnitOfWork(UnitOfWork):
    """
    Unit of work bound to one request-scoped SQLAlchemy session.

    Repositories sharing the session only flush; this class owns the commit.
    Events of tracked aggregates are dispatched only after a successful
    commit, and dropped on rollback.
    """

    def __init__(self, db: Session) -> None:
        self.db = db
        self._tracked: list[AggregateRoot] = []
        self._handlers: list[EventHandler] = [log_domain_event]

    def track(self, aggregate: AggregateRoot) -> None:
        if aggregate not in self._tracked:
            self._tracked.append(aggregate)

    def register_event_handler(self, handler: EventHandler) -> None:
        self._handlers.append(handler)

    def commit(self) -> None:
        try:
            self.db.commit()
        except (StaleDataError, OperationalError) as e:
            raise TransientPersistenceError(str(e)) from e

        events: list[DomainEvent] = []
        for aggregate in self._tracked:
            events.extend(aggregate.collect_events())
        self._tracked.clear()

        for event in events:
            for handler in self._handlers:
                handler(event)

    def rollback(self) -> None:
        self.db.rollback()
        for aggregate in self._tracked:
            aggregate.collect_events()
        self._tracked.clear()
