"""
Domain layer exceptions.

Raised by aggregates and domain services when a rule is broken. They carry
no HTTP knowledge; the API layer maps each family to a status code.
"""


class DomainError(Exception):
    """Base of every domain failure; ``details`` holds structured context."""

    def __init__(self, message: str, **details: object) -> None:
        super().__init__(message)
        self.message = message
        self.details: dict[str, object] = {k: v for k, v in details.items() if v is not None}

    def __str__(self) -> str:
        return f"{self.message} - {self.details}" if self.details else self.message


class ValidationError(DomainError):
    """An input outside what the domain accepts, e.g. a score above 100."""

    def __init__(self, message: str, field: str | None = None, value: object = None) -> None:
        super().__init__(message, field=field, value=value)
        self.field = field
        self.value = value


class EntityNotFoundError(DomainError):
    """A referenced entity does not exist."""

    def __init__(self, entity_type: str, entity_id: object, message: str | None = None) -> None:
        super().__init__(
            message or f"{entity_type} {entity_id} not found",
            entity_type=entity_type,
            entity_id=entity_id,
        )
        self.entity_type = entity_type
        self.entity_id = entity_id


class BusinessRuleViolationError(DomainError):
    """The request conflicts with the current state, e.g. a second enrollment."""

    def __init__(self, rule: str, message: str | None = None, **details: object) -> None:
        super().__init__(message or f"Business rule violated: {rule}", rule=rule, **details)
        self.rule = rule
