"""Shared domain building blocks: typed ids, aggregate base, events, errors."""

from .aggregate_root import AggregateRoot
from .domain_event import DomainEvent
from .entity import EntityId
from .exceptions import (
    BusinessRuleViolationError,
    DomainError,
    EntityNotFoundError,
    ValidationError,
)

__all__ = [
    "AggregateRoot",
    "BusinessRuleViolationError",
    "DomainError",
    "DomainEvent",
    "EntityId",
    "EntityNotFoundError",
    "ValidationError",
]
