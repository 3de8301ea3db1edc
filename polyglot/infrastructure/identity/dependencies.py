"""FastAPI dependencies for identifying the calling learner."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer

from polyglot.core import container
from polyglot.database import DatabaseSession
from polyglot.domain.common.value_objects import LearnerId
from polyglot.exceptions import CredentialsException
from polyglot.infrastructure.common.di import resolve
from polyglot.infrastructure.identity.auth.token_service import verify_access_token

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/login")


def get_current_learner(
    token: Annotated[str, Depends(oauth2_scheme)], db: DatabaseSession
) -> int:
    """
    Get the calling learner's id from the access token.

    Args:
        token: JWT access token from Authorization header
        db: Database session

    Returns:
        The learner id

    Raises:
        CredentialsException: If the token is invalid or the learner is unknown
    """
    learner_id = verify_access_token(token)
    if learner_id is None:
        raise CredentialsException

    portfolio = resolve(container.learner_portfolio_repository, db)
    if not portfolio.learner_exists(LearnerId(learner_id)):
        raise CredentialsException
    return learner_id


CurrentLearner = Annotated[int, Depends(get_current_learner)]
