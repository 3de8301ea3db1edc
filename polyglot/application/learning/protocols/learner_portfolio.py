"""Protocol for the learner language-portfolio collaborator."""

from typing import Protocol

from polyglot.domain.common.value_objects import LanguageId, LearnerId, ProficiencyLevel


class LearnerPortfolioProtocol(Protocol):
    def add_learning_language(
        self, learner_id: LearnerId, language_id: LanguageId, level: ProficiencyLevel
    ) -> bool:
        """
        Add a language to the learner's portfolio.

        Idempotent: a language already in the portfolio is left as is.

        Returns:
            True if an entry was added, False if it was already present
        """
        ...
