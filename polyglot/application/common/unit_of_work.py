"""
Unit of Work port.

A mutating use case writes through repositories that only flush; the unit of
work commits everything at once and then hands the recorded domain events to
registered handlers.

    with uow:
        progress = repository.find_by_learner_and_path(learner_id, path_id)
        progress.complete_lesson(lesson_id, now)
        uow.track(progress)
        repository.save(progress)
        uow.commit()
"""

from abc import ABC, abstractmethod
from collections.abc import Callable
from types import TracebackType
from typing import Self

from polyglot.domain.common import AggregateRoot, DomainEvent

EventHandler = Callable[[DomainEvent], None]


class UnitOfWork(ABC):
    @abstractmethod
    def track(self, aggregate: AggregateRoot) -> None:
        """Collect the aggregate's events when the unit commits."""

    @abstractmethod
    def register_event_handler(self, handler: EventHandler) -> None:
        """Call ``handler`` for every event dispatched after a commit."""

    @abstractmethod
    def commit(self) -> None:
        raise NotImplementedError

    @abstractmethod
    def rollback(self) -> None:
        raise NotImplementedError

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if exc_type is not None:
            self.rollback()
