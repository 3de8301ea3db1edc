"""
Aggregate root base.

The aggregate is the consistency boundary for one enrollment: every change
goes through its methods, and each method records what happened as a domain
event. The unit of work drains those events once the change is committed.
"""

from dataclasses import dataclass, field
from typing import Generic

from .domain_event import DomainEvent
from .entity import IdType


@dataclass(eq=False)
class AggregateRoot(Generic[IdType]):
    """Mixin for dataclass aggregates identified by ``id``."""

    _events: list[DomainEvent] = field(
        default_factory=list, init=False, repr=False, compare=False
    )

    def _record_event(self, event: DomainEvent) -> None:
        self._events.append(event)

    def collect_events(self) -> list[DomainEvent]:
        """Return the recorded events and forget them."""
        events, self._events = self._events, []
        return events

    @property
    def pending_events(self) -> list[DomainEvent]:
        return list(self._events)
