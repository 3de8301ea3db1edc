"""Repository for the learner language portfolio."""

import structlog
from sqlalchemy import exists, select
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm import Session

from polyglot.application.common.retry import TransientPersistenceError
from polyglot.domain.common.value_objects import LanguageId, LearnerId, ProficiencyLevel
from polyglot.models import Learner as LearnerORM
from polyglot.models import LearnerLanguage as LearnerLanguageORM

logger = structlog.get_logger(__name__)


class LearnerPortfolioRepository:
    """Adds languages to a learner's portfolio within the caller's transaction."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def add_learning_language(
        self, learner_id: LearnerId, language_id: LanguageId, level: ProficiencyLevel
    ) -> bool:
        """
        Add a language to the learner's portfolio if it is not there yet.

        Changes are flushed, not committed.

        Returns:
            True if an entry was added, False if it was already present
        """
        stmt = select(LearnerLanguageORM.id).where(
            LearnerLanguageORM.learner_id == learner_id.value,
            LearnerLanguageORM.language_id == language_id.value,
        )
        if self.db.execute(stmt).scalar_one_or_none() is not None:
            return False

        self.db.add(
            LearnerLanguageORM(
                learner_id=learner_id.value,
                language_id=language_id.value,
                level=level.value,
            )
        )
        try:
            self.db.flush()
        except (IntegrityError, OperationalError) as e:
            # A concurrent enrollment added the same language; re-read on retry
            raise TransientPersistenceError(str(e)) from e
        logger.debug(
            "learning_language_added",
            learner_id=learner_id.value,
            language_id=language_id.value,
            level=level.value,
        )
        return True

    def learner_exists(self, learner_id: LearnerId) -> bool:
        stmt = select(exists().where(LearnerORM.id == learner_id.value))
        return bool(self.db.execute(stmt).scalar())
