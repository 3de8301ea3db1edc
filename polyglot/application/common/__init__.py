"""
Application common module.

Contains base classes for the application layer:
- Command: Base class for write operations
- CommandHandler: Handles command execution
- UnitOfWork: Transaction boundary port
- run_with_retry: Retries a unit of work on transient persistence failures
"""

from .command import Command, CommandHandler
from .retry import TransientPersistenceError, run_with_retry
from .unit_of_work import UnitOfWork

__all__ = [
    "Command",
    "CommandHandler",
    "TransientPersistenceError",
    "UnitOfWork",
    "run_with_retry",
]
