"""Typed identifiers for domain entities."""

from dataclasses import dataclass
from typing import Self, TypeVar


@dataclass(frozen=True)
class EntityId:
    """
    Integer identity of a persisted entity.

    Each entity gets its own subclass so a LearnerId cannot stand in for a
    LearningPathId. Zero marks an entity the database has not stored yet.
    """

    value: int

    def __post_init__(self) -> None:
        if self.value < 0:
            raise ValueError(f"{type(self).__name__} cannot be negative: {self.value}")

    def __int__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)

    @classmethod
    def generate(cls) -> Self:
        return cls(0)

    @property
    def is_persisted(self) -> bool:
        return self.value != 0

    def to_primitive(self) -> int:
        return self.value


IdType = TypeVar("IdType", bound=EntityId)
