"""FastAPI application entry point."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette import status

from polyglot.config import configure_logging, get_settings
from polyglot.database import dispose_engine, initialize_database
from polyglot.domain.common.exceptions import (
    BusinessRuleViolationError,
    DomainError,
    EntityNotFoundError,
)
from polyglot.domain.common.exceptions import ValidationError as DomainValidationError
from polyglot.exceptions import PolyglotError
from polyglot.infrastructure.learning.routers import progress

settings = get_settings()
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    configure_logging(settings.ENVIRONMENT)
    initialize_database(settings)
    logger.info("application_started", environment=settings.ENVIRONMENT, version=settings.VERSION)
    yield
    dispose_engine()
    logger.info("application_stopped")


def _failure_context(request: Request, exc: Exception, failure_kind: str) -> dict[str, object]:
    return {
        "operation": f"{request.method} {request.url.path}",
        "learner_id": getattr(exc, "learner_id", None),
        "path_id": getattr(exc, "path_id", None) or request.path_params.get("path_id"),
        "failure_kind": failure_kind,
    }


async def polyglot_error_handler(request: Request, exc: PolyglotError) -> JSONResponse:
    context = _failure_context(request, exc, "service")
    if exc.status_code >= 500:
        logger.error("request_failed", error=exc.message, status_code=exc.status_code, **context)
    else:
        logger.warning("request_failed", error=exc.message, status_code=exc.status_code, **context)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


def _domain_error_response(
    request: Request, exc: DomainError, status_code: int, failure_kind: str
) -> JSONResponse:
    logger.warning(
        "request_failed",
        error=exc.message,
        status_code=status_code,
        **_failure_context(request, exc, failure_kind),
    )
    return JSONResponse(status_code=status_code, content={"detail": exc.message})


async def not_found_handler(request: Request, exc: EntityNotFoundError) -> JSONResponse:
    return _domain_error_response(request, exc, status.HTTP_404_NOT_FOUND, "not_found")


async def domain_validation_handler(request: Request, exc: DomainValidationError) -> JSONResponse:
    logger.warning(
        "request_failed",
        error=exc.message,
        field=exc.field,
        status_code=422,
        **_failure_context(request, exc, "validation"),
    )
    return JSONResponse(
        status_code=422,
        content={"detail": exc.message, "field": exc.field},
    )


async def business_rule_handler(request: Request, exc: BusinessRuleViolationError) -> JSONResponse:
    return _domain_error_response(request, exc, status.HTTP_409_CONFLICT, "conflict")


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.warning(
        "request_validation_failed",
        operation=f"{request.method} {request.url.path}",
        failure_kind="validation",
        errors=exc.errors(),
    )
    return JSONResponse(status_code=422, content={"detail": jsonable_errors(exc)})


def jsonable_errors(exc: RequestValidationError) -> list[dict[str, object]]:
    """Field-level errors without the raw input or exception context."""
    return [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg"), "type": error.get("type")}
        for error in exc.errors()
    ]


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    # Never leak internal exception details to clients
    logger.exception(
        "request_failed_unexpectedly",
        **_failure_context(request, exc, "unexpected"),
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "An unexpected error occurred. Please try again later."},
    )


def create_app() -> FastAPI:
    """Build the FastAPI application."""
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        docs_url=f"{settings.API_V1_PREFIX}/docs",
        openapi_url=f"{settings.API_V1_PREFIX}/openapi.json",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(PolyglotError, polyglot_error_handler)
    app.add_exception_handler(EntityNotFoundError, not_found_handler)
    app.add_exception_handler(DomainValidationError, domain_validation_handler)
    app.add_exception_handler(BusinessRuleViolationError, business_rule_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    @app.get("/")
    def read_root() -> dict[str, str]:
        return {"message": f"Welcome to {settings.PROJECT_NAME}"}

    @app.get("/health")
    def health_check() -> dict[str, str]:
        return {"status": "healthy"}

    @app.get(f"{settings.API_V1_PREFIX}/")
    def api_root() -> dict[str, str]:
        return {
            "message": f"{settings.PROJECT_NAME} v1",
            "version": settings.VERSION,
            "docs": f"{settings.API_V1_PREFIX}/docs",
        }

    app.include_router(progress.router, prefix=settings.API_V1_PREFIX)
    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)  # noqa: S104
