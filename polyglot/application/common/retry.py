"""
Bounded retry of a unit of work.

Read-modify-write cycles on one aggregate are serialized by an optimistic
version check. A cycle that loses the race, or hits a transient storage
failure, is rolled back and run again from the read.
"""

from collections.abc import Callable
from typing import TypeVar

import structlog

from polyglot.application.common.unit_of_work import UnitOfWork
from polyglot.exceptions import PersistenceUnavailableError

logger = structlog.get_logger(__name__)

T = TypeVar("T")


class TransientPersistenceError(Exception):
    """Raised by adapters for failures worth retrying (version conflict, timeout)."""


def run_with_retry(
    uow: UnitOfWork,
    operation: Callable[[], T],
    *,
    max_attempts: int,
    operation_name: str,
    **context: object,
) -> T:
    """
    Run ``operation`` inside ``uow``, retrying transient failures.

    Args:
        uow: Unit of work the operation commits through
        operation: Callable performing one full load-mutate-save-commit cycle
        max_attempts: Total attempts before giving up
        operation_name: Name used in log events
        **context: Extra log context (learner_id, path_id, ...)

    Returns:
        The operation result

    Raises:
        PersistenceUnavailableError: When every attempt failed transiently
    """
    for attempt in range(1, max_attempts + 1):
        try:
            with uow:
                return operation()
        except TransientPersistenceError as e:
            logger.warning(
                "persistence_conflict_retrying",
                operation=operation_name,
                attempt=attempt,
                max_attempts=max_attempts,
                failure_kind="persistence_transient",
                error=str(e),
                **context,
            )

    logger.error(
        "persistence_retries_exhausted",
        operation=operation_name,
        max_attempts=max_attempts,
        failure_kind="persistence_transient",
        **context,
    )
    raise PersistenceUnavailableError(operation_name)
