"""Service-level errors that map directly onto HTTP responses."""

from fastapi import HTTPException
from starlette import status


class PolyglotError(Exception):
    """Error raised outside the domain, carrying the HTTP status to answer with."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class PersistenceUnavailableError(PolyglotError):
    """Storage stayed contended or unreachable after every retry."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__("The service is temporarily unavailable. Please retry the request.")


CredentialsException = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Could not validate credentials",
    headers={"WWW-Authenticate": "Bearer"},
)
