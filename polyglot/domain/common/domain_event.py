"""Domain event base."""

from dataclasses import dataclass, field, fields
from datetime import UTC, datetime
from enum import Enum
from uuid import UUID, uuid4


def _loggable(value: object) -> object:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, UUID | Enum):
        return str(value)
    if isinstance(value, tuple | list):
        return [_loggable(item) for item in value]
    to_primitive = getattr(value, "to_primitive", None)
    return to_primitive() if callable(to_primitive) else value


@dataclass(frozen=True, kw_only=True)
class DomainEvent:
    """
    Something that happened to an aggregate, named in the past tense.

    Subclasses are frozen keyword-only dataclasses carrying the facts a
    subscriber needs without reloading the aggregate.
    """

    event_id: UUID = field(default_factory=uuid4)
    occurred_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @property
    def event_type(self) -> str:
        return type(self).__name__

    def to_dict(self) -> dict[str, object]:
        """Flatten the event into primitives for structured logging."""
        data = {f.name: _loggable(getattr(self, f.name)) for f in fields(self)}
        data["event_type"] = self.event_type
        return data
