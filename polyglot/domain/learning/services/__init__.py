"""Pure domain services of the learning context."""

from .checkpoint_gate import CheckpointDecision, CheckpointOutcome, evaluate_checkpoint
from .streak_calculator import StreakUpdate, activity_day, advance_streak
from .vocabulary_scheduler import is_due, review_interval, review_word

__all__ = [
    "CheckpointDecision",
    "CheckpointOutcome",
    "StreakUpdate",
    "activity_day",
    "advance_streak",
    "evaluate_checkpoint",
    "is_due",
    "review_interval",
    "review_word",
]
