"""Application configuration."""

import logging
import sys
from collections.abc import Callable
from functools import lru_cache
from typing import Any, Literal

import structlog
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Database
    DATABASE_URL: str = "sqlite:///./polyglot.db"
    DATABASE_POOL_TIMEOUT_SECONDS: int = 10
    DATABASE_STATEMENT_TIMEOUT_MS: int = 5000

    # Auth
    SECRET_KEY: str = "polyglot-development-secret-key-change-me"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24

    # API (constants, not from env)
    API_V1_PREFIX: str = "/api/v1"
    PROJECT_NAME: str = "Polyglot Journey API"
    VERSION: str = "0.1.0"

    # Environment
    ENVIRONMENT: Literal["development", "production", "test"] = "development"

    # CORS
    CORS_ORIGINS: list[str] = ["http://localhost:5173"]

    # Progress engine
    PERSISTENCE_MAX_ATTEMPTS: int = 3
    CHECKPOINT_PASSING_SCORE: int = 0
    VOCABULARY_MAX_INTERVAL_DAYS: int = 65536

    @field_validator("PERSISTENCE_MAX_ATTEMPTS", "VOCABULARY_MAX_INTERVAL_DAYS", mode="after")
    @classmethod
    def require_positive(cls, value: int) -> int:
        """Reject values that would disable the setting entirely."""
        if value < 1:
            raise ValueError("must be at least 1")
        return value

    @field_validator("CHECKPOINT_PASSING_SCORE", mode="after")
    @classmethod
    def validate_passing_score(cls, value: int) -> int:
        """Passing score is on the same 0..100 scale as assessments."""
        if not 0 <= value <= 100:
            raise ValueError("must be between 0 and 100")
        return value


_LEVELS = {"development": logging.DEBUG, "test": logging.WARNING}


def _renderer(environment: str) -> Callable[..., Any]:
    if environment == "production":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=environment == "development")


def configure_logging(environment: str = "development") -> None:
    """Route structlog through stdlib logging; JSON lines in production."""
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=_LEVELS.get(environment, logging.INFO),
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
            _renderer(environment),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


@lru_cache
def get_settings() -> Settings:
    """Settings are read from the environment once per process."""
    return Settings()
