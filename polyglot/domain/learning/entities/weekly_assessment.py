"""Weekly checkpoint assessment record, keyed by week number."""

from dataclasses import dataclass, field, replace
from datetime import datetime


@dataclass(frozen=True)
class WeeklyAssessment:
    """
    Outcome of one weekly checkpoint.

    Business Rules:
    - At most one record per week; resubmissions update it in place
    - The score is always replaced on resubmission
    - Feedback, strengths and areas to improve are replaced only when supplied
    """

    week: int
    score: int
    completed_at: datetime
    feedback: str | None = None
    strengths: tuple[str, ...] = field(default_factory=tuple)
    areas_to_improve: tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def create(
        cls,
        week: int,
        score: int,
        completed_at: datetime,
        feedback: str | None = None,
        strengths: list[str] | None = None,
        areas_to_improve: list[str] | None = None,
    ) -> "WeeklyAssessment":
        return cls(
            week=week,
            score=score,
            completed_at=completed_at,
            feedback=feedback or None,
            strengths=tuple(strengths or ()),
            areas_to_improve=tuple(areas_to_improve or ()),
        )

    def resubmit(
        self,
        score: int,
        completed_at: datetime,
        feedback: str | None = None,
        strengths: list[str] | None = None,
        areas_to_improve: list[str] | None = None,
    ) -> "WeeklyAssessment":
        """Return the record updated by a resubmission of the same week."""
        return replace(
            self,
            score=score,
            completed_at=completed_at,
            feedback=feedback or self.feedback,
            strengths=tuple(strengths) if strengths is not None else self.strengths,
            areas_to_improve=(
                tuple(areas_to_improve) if areas_to_improve is not None else self.areas_to_improve
            ),
        )
