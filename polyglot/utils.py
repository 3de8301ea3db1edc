"""Small helpers shared across layers."""

from datetime import UTC, datetime


def utc_now() -> datetime:
    """Current instant as an aware UTC datetime."""
    return datetime.now(UTC)
