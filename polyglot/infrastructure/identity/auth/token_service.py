"""Bearer tokens issued to learners by the identity service."""

from datetime import UTC, datetime, timedelta

import jwt

from polyglot.config import get_settings

settings = get_settings()
ALGORITHM = "HS256"
TOKEN_TYPE = "access"


def create_access_token(learner_id: int, expires_in: timedelta | None = None) -> str:
    lifetime = expires_in or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    claims = {
        "sub": str(learner_id),
        "type": TOKEN_TYPE,
        "exp": datetime.now(UTC) + lifetime,
    }
    return jwt.encode(claims, settings.SECRET_KEY, algorithm=ALGORITHM)


def verify_access_token(token: str) -> int | None:
    """Return the learner id a valid access token was issued for, else None."""
    try:
        claims = jwt.decode(token, settings.SECRET_KEY, algorithms=[ALGORITHM])
    except jwt.InvalidTokenError:
        return None
    if claims.get("type") != TOKEN_TYPE:
        return None
    subject = claims.get("sub")
    return int(subject) if isinstance(subject, str) and subject.isdigit() else None
