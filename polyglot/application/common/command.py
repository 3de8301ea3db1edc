"""Commands and the handlers that apply them."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Generic, TypeVar

TCommand = TypeVar("TCommand", bound="Command")
TResult = TypeVar("TResult")


@dataclass(frozen=True)
class Command:
    """
    An intent to change a learner's progress, named in the imperative.

    Optional fields default to None, meaning "not supplied"; an omitted field
    never overwrites a recorded value.
    """


class CommandHandler(ABC, Generic[TCommand, TResult]):
    """Loads an aggregate, applies one operation, saves and commits."""

    @abstractmethod
    def handle(self, command: TCommand) -> TResult:
        raise NotImplementedError
