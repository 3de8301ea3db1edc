from dependency_injector import containers, providers
from sqlalchemy.orm import Session

from polyglot.application.learning.use_cases.progress.complete_lesson_use_case import (
    CompleteLessonUseCase,
)
from polyglot.application.learning.use_cases.progress.get_progress_use_case import (
    GetDueVocabularyUseCase,
    GetLearnerProgressUseCase,
)
from polyglot.application.learning.use_cases.progress.review_vocabulary_word_use_case import (
    ReviewVocabularyWordUseCase,
)
from polyglot.application.learning.use_cases.progress.start_learning_path_use_case import (
    StartLearningPathUseCase,
)
from polyglot.application.learning.use_cases.progress.submit_weekly_assessment_use_case import (
    SubmitWeeklyAssessmentUseCase,
)
from polyglot.infrastructure.catalog.learning_catalog_repository import LearningCatalogRepository
from polyglot.infrastructure.common.unit_of_work import SQLAlchemyUnitOfWork
from polyglot.infrastructure.identity.repositories.learner_portfolio_repository import (
    LearnerPortfolioRepository,
)
from polyglot.infrastructure.learning.repositories.progress_repository import ProgressRepository
from polyglot.utils import utc_now


class Container(containers.DeclarativeContainer):
    """Dependency injection container."""

    # Declare db as a dependency that will be provided at runtime
    db = providers.Dependency(instance_of=Session)

    # Time source, overridable in tests
    clock = providers.Object(utc_now)

    # Unit of work, one per use case instance
    uow = providers.Factory(SQLAlchemyUnitOfWork, db=db)

    # Repositories
    progress_repository = providers.Factory(ProgressRepository, db=db)
    learning_catalog = providers.Factory(LearningCatalogRepository, db=db)
    learner_portfolio_repository = providers.Factory(LearnerPortfolioRepository, db=db)

    # Learning module, application use cases
    start_learning_path_use_case = providers.Factory(
        StartLearningPathUseCase,
        progress_repository=progress_repository,
        learning_catalog=learning_catalog,
        learner_portfolio=learner_portfolio_repository,
        uow=uow,
        clock=clock,
    )
    complete_lesson_use_case = providers.Factory(
        CompleteLessonUseCase,
        progress_repository=progress_repository,
        learning_catalog=learning_catalog,
        uow=uow,
        clock=clock,
    )
    submit_weekly_assessment_use_case = providers.Factory(
        SubmitWeeklyAssessmentUseCase,
        progress_repository=progress_repository,
        learning_catalog=learning_catalog,
        uow=uow,
        clock=clock,
    )
    review_vocabulary_word_use_case = providers.Factory(
        ReviewVocabularyWordUseCase,
        progress_repository=progress_repository,
        uow=uow,
        clock=clock,
    )
    get_learner_progress_use_case = providers.Factory(
        GetLearnerProgressUseCase,
        progress_repository=progress_repository,
        learning_catalog=learning_catalog,
    )
    get_due_vocabulary_use_case = providers.Factory(
        GetDueVocabularyUseCase,
        progress_repository=progress_repository,
        clock=clock,
    )


container = Container()
