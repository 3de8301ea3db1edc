"""
Weekly checkpoint advancement.

A forward-only state machine over weeks ``1..duration_weeks`` plus a
terminal completed state. Only an assessment for the current week moves it.
"""

from dataclasses import dataclass
from enum import StrEnum


class CheckpointOutcome(StrEnum):
    UNCHANGED = "unchanged"
    HELD = "held"
    ADVANCED = "advanced"
    COMPLETED = "completed"


@dataclass(frozen=True)
class CheckpointDecision:
    outcome: CheckpointOutcome
    current_week: int
    is_completed: bool


def evaluate_checkpoint(
    current_week: int,
    submitted_week: int,
    duration_weeks: int,
    score: int,
    *,
    passing_score: int = 0,
    is_completed: bool = False,
) -> CheckpointDecision:
    """
    Decide where an enrollment stands after an assessment.

    Args:
        current_week: Active week before the submission
        submitted_week: Week the assessment was submitted for
        duration_weeks: Total weeks of the learning path
        score: Submitted score
        passing_score: Minimum score needed to advance (0 accepts any score)
        is_completed: Whether the enrollment is already completed; the final
            week of a completed enrollment completes it again

    Returns:
        CheckpointDecision. Past or future weeks are UNCHANGED, a score
        below ``passing_score`` is HELD, the final week COMPLETES the path
        (again, if it already was) and any other current week ADVANCES it.
        A completed enrollment stays completed.
    """
    if submitted_week != current_week:
        return CheckpointDecision(CheckpointOutcome.UNCHANGED, current_week, is_completed)

    if score < passing_score:
        return CheckpointDecision(CheckpointOutcome.HELD, current_week, is_completed)

    if submitted_week < duration_weeks:
        return CheckpointDecision(CheckpointOutcome.ADVANCED, submitted_week + 1, is_completed)

    return CheckpointDecision(CheckpointOutcome.COMPLETED, current_week, True)
